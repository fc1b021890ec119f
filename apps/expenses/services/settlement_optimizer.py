"""
Settlement optimizer.

Suggests peer-to-peer transfers that bring every member balance to zero.
"""

from dataclasses import dataclass
from typing import List, Sequence
from uuid import UUID

from .balance_calculation import MemberBalance

# Remaining magnitude below which a member counts as settled
SETTLED_THRESHOLD = 1


@dataclass(frozen=True)
class Transfer:
    from_member_id: UUID
    from_name: str
    to_member_id: UUID
    to_name: str
    amount: int


def suggest_settlements(balances: Sequence[MemberBalance]) -> List[Transfer]:
    """
    Greedy debtor/creditor matching.

    Debtors are taken most negative first, creditors largest first (ties
    keep the order of ``balances``). Each step moves
    ``min(|debt|, credit)`` from the current debtor to the current creditor
    and advances whichever side is settled.

    This emits at most ``len(balances) - 1`` transfers but does not always
    find the fewest possible: that is a subset-sum style search and is not
    attempted here.

    Args:
        balances: Member balances in integer minor units

    Returns:
        Ordered list of Transfer
    """
    debtors = [[b, b.balance] for b in balances if b.balance < 0]
    creditors = [[b, b.balance] for b in balances if b.balance > 0]

    debtors.sort(key=lambda x: x[1])
    creditors.sort(key=lambda x: x[1], reverse=True)

    transfers: List[Transfer] = []
    i = 0
    j = 0

    while i < len(debtors) and j < len(creditors):
        debtor, debt = debtors[i]
        creditor, credit = creditors[j]

        amount = min(abs(debt), credit)
        if amount > 0:
            transfers.append(Transfer(
                from_member_id=debtor.member_id,
                from_name=debtor.member_name,
                to_member_id=creditor.member_id,
                to_name=creditor.member_name,
                amount=amount,
            ))

        debtors[i][1] = debt + amount
        creditors[j][1] = credit - amount

        if abs(debtors[i][1]) < SETTLED_THRESHOLD:
            i += 1
        if creditors[j][1] < SETTLED_THRESHOLD:
            j += 1

    return transfers
