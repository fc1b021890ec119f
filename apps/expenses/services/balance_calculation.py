"""
Balance calculation.

Turns ledger entries into one ``(total_paid, total_owed, balance)`` row per
member. Shares are accumulated as exact-enough ``Decimal`` values and only
rounded to whole minor units on output, so many small fractional shares do
not drift.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal, ROUND_FLOOR
from typing import Dict, List, Sequence
from uuid import UUID

from .ledger import (
    AmountShare,
    EqualShare,
    LedgerEntry,
    LedgerMember,
    PercentageShare,
)

logger = logging.getLogger(__name__)

HUNDRED = Decimal('100')
HALF = Decimal('0.5')


@dataclass(frozen=True)
class MemberBalance:
    member_id: UUID
    member_name: str
    total_paid: int
    total_owed: int
    # Positive: the group owes this member. Negative: they owe the group.
    balance: int


def to_minor_units(value: Decimal) -> int:
    """Nearest whole minor unit; halves go towards positive infinity (-2.5 -> -2)."""
    return int((value + HALF).to_integral_value(rounding=ROUND_FLOOR))


def apportion(entry: LedgerEntry, member_ids: Sequence[UUID]) -> Dict[UUID, Decimal]:
    """
    Split one expense into owed shares.

    Without rules the amount is divided evenly across every trip member.
    Otherwise fixed amounts are taken first, then percentages of the full
    amount, and whatever remains is divided evenly among the equal rules.
    The remainder is not clamped: if fixed amounts and percentages exceed
    the total, equal members get a negative share. If there are no equal
    rules the remainder is left unassigned.
    """
    amount = Decimal(entry.amount)
    shares: Dict[UUID, Decimal] = defaultdict(Decimal)

    if not entry.rules:
        if member_ids:
            per_member = amount / len(member_ids)
            for member_id in member_ids:
                shares[member_id] += per_member
        return dict(shares)

    consumed = Decimal('0')

    for rule in entry.rules:
        if isinstance(rule, AmountShare):
            shares[rule.member_id] += rule.amount
            consumed += rule.amount

    for rule in entry.rules:
        if isinstance(rule, PercentageShare):
            part = amount * rule.percent / HUNDRED
            shares[rule.member_id] += part
            consumed += part

    equal_rules = [rule for rule in entry.rules if isinstance(rule, EqualShare)]
    if equal_rules:
        remaining = amount - consumed
        if remaining < 0:
            logger.warning(
                "Expense %s is over-allocated by %s; equal splits receive negative shares",
                entry.expense_id, -remaining
            )
        per_member = remaining / len(equal_rules)
        for rule in equal_rules:
            shares[rule.member_id] += per_member

    return dict(shares)


def calculate_balances(
    members: Sequence[LedgerMember],
    entries: Sequence[LedgerEntry]
) -> List[MemberBalance]:
    """
    Compute each member's totals over the whole ledger.

    Args:
        members: Trip members in registry order
        entries: Validated ledger entries

    Returns:
        One MemberBalance per member, in the order given. The sum of all
        balances is within ``len(members) - 1`` minor units of zero.
    """
    member_ids = [member.member_id for member in members]
    paid: Dict[UUID, Decimal] = defaultdict(Decimal)
    owed: Dict[UUID, Decimal] = defaultdict(Decimal)

    for entry in entries:
        paid[entry.payer_id] += Decimal(entry.amount)
        for member_id, share in apportion(entry, member_ids).items():
            owed[member_id] += share

    return [
        MemberBalance(
            member_id=member.member_id,
            member_name=member.name,
            total_paid=to_minor_units(paid[member.member_id]),
            total_owed=to_minor_units(owed[member.member_id]),
            balance=to_minor_units(paid[member.member_id] - owed[member.member_id]),
        )
        for member in members
    ]
