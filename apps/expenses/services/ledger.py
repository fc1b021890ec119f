"""
Expense Ledger
==============

Presents a trip's expenses as one flat list of ``LedgerEntry`` values,
regardless of whether an expense records the cost of an itinerary item or
was entered on its own.

Split rows are converted here, once, into share rules:

* ``EqualShare`` - takes part in dividing what is left of the amount
* ``PercentageShare`` - a percentage (0-100) of the full amount
* ``AmountShare`` - a fixed amount in minor units

Everything downstream (balance calculation, settlement) works on these
plain values and never touches the ORM.

Example::

    from apps.expenses.services.ledger import load_members, load_ledger

    members = load_members(trip_id=trip.id)
    entries = load_ledger(trip_id=trip.id, members=members)
"""

from dataclasses import dataclass
from decimal import Decimal
from itertools import chain
from typing import Iterable, List, Optional, Sequence, Tuple, Union
from uuid import UUID

from django.db.models import QuerySet

from apps.expenses.models import Expense, ShareType
from apps.trips.models import TripMember

from .exceptions import (
    InvalidExpenseAmountError,
    InvalidSplitError,
    UnknownMemberError,
)


@dataclass(frozen=True)
class LedgerMember:
    """Participant as the engine sees it: an id and a display name."""
    member_id: UUID
    name: str


@dataclass(frozen=True)
class EqualShare:
    member_id: UUID


@dataclass(frozen=True)
class PercentageShare:
    member_id: UUID
    percent: Decimal


@dataclass(frozen=True)
class AmountShare:
    member_id: UUID
    amount: int


ShareRule = Union[EqualShare, PercentageShare, AmountShare]


@dataclass(frozen=True)
class LedgerEntry:
    """One expense: who paid, how much, and how it is apportioned."""
    expense_id: Optional[UUID]
    amount: int
    payer_id: UUID
    rules: Tuple[ShareRule, ...] = ()
    source_item_id: Optional[UUID] = None

    @property
    def is_standalone(self):
        return self.source_item_id is None


def share_rule_from_row(member_id, share_type, share_value=None) -> ShareRule:
    """
    Convert a raw split (as stored or as submitted) into a share rule.

    Args:
        member_id: Member the split applies to
        share_type: ``equal``, ``percentage`` or ``amount``
        share_value: Percentage or fixed amount; ignored for ``equal``

    Raises:
        InvalidSplitError: Unknown share type, missing or negative value,
            percentage above 100, or a fractional value
    """
    if share_type == ShareType.EQUAL:
        return EqualShare(member_id=member_id)

    if share_type not in (ShareType.PERCENTAGE, ShareType.AMOUNT):
        raise InvalidSplitError(f"Unknown share type: {share_type!r}")

    if share_value is None:
        raise InvalidSplitError(f"A {share_type} split requires a share value")

    value = Decimal(str(share_value))
    if value < 0:
        raise InvalidSplitError("Share value cannot be negative")
    if value != value.to_integral_value():
        raise InvalidSplitError("Share values must be whole numbers")

    if share_type == ShareType.PERCENTAGE:
        if value > 100:
            raise InvalidSplitError("Percentage must be between 0 and 100")
        return PercentageShare(member_id=member_id, percent=value)

    return AmountShare(member_id=member_id, amount=int(value))


def share_rule_to_row(rule: ShareRule) -> Tuple[str, Optional[int]]:
    """Inverse of share_rule_from_row: ``(share_type, share_value)``."""
    if isinstance(rule, AmountShare):
        return ShareType.AMOUNT, rule.amount
    if isinstance(rule, PercentageShare):
        return ShareType.PERCENTAGE, int(rule.percent)
    return ShareType.EQUAL, None


def validate_entry(entry: LedgerEntry, member_ids: Iterable[UUID]) -> LedgerEntry:
    """
    Check an entry against the trip's member set before apportionment.

    Raises:
        InvalidExpenseAmountError: If amount is missing or not positive
        UnknownMemberError: If the payer or a split member is not in the trip
    """
    member_ids = set(member_ids)

    if entry.amount is None or entry.amount <= 0:
        raise InvalidExpenseAmountError("Expense amount must be a positive number")

    if entry.payer_id not in member_ids:
        raise UnknownMemberError(f"Payer {entry.payer_id} is not a member of this trip")

    for rule in entry.rules:
        if rule.member_id not in member_ids:
            raise UnknownMemberError(f"Split member {rule.member_id} is not a member of this trip")

    return entry


def entry_from_expense(expense: Expense) -> LedgerEntry:
    """Build a ledger entry from an Expense row (splits should be prefetched)."""
    rules = tuple(
        share_rule_from_row(split.member_id, split.share_type, split.share_value)
        for split in expense.splits.all()
    )
    return LedgerEntry(
        expense_id=expense.id,
        amount=expense.amount,
        payer_id=expense.payer_id,
        rules=rules,
        source_item_id=expense.source_item_id,
    )


def _item_expenses(trip_id: UUID) -> QuerySet[Expense]:
    return (
        Expense.objects
        .filter(trip_id=trip_id, source_item__isnull=False)
        .prefetch_related('splits')
    )


def _standalone_expenses(trip_id: UUID) -> QuerySet[Expense]:
    return (
        Expense.objects
        .filter(trip_id=trip_id, source_item__isnull=True)
        .prefetch_related('splits')
    )


def load_members(*, trip_id: UUID) -> List[LedgerMember]:
    """Trip members in creation order."""
    rows = (
        TripMember.objects
        .filter(trip_id=trip_id)
        .order_by('created_at')
        .values_list('id', 'display_name')
    )
    return [LedgerMember(member_id=member_id, name=name) for member_id, name in rows]


def load_ledger(
    *,
    trip_id: UUID,
    members: Optional[Sequence[LedgerMember]] = None
) -> List[LedgerEntry]:
    """
    Read item-tied and standalone expenses of a trip into one validated list.

    Args:
        trip_id: UUID of the trip
        members: Member set to validate against; loaded when omitted

    Returns:
        List of LedgerEntry. Order carries no meaning.

    Raises:
        InvalidExpenseAmountError, InvalidSplitError, UnknownMemberError:
            If a stored row breaks the ledger invariants
    """
    if members is None:
        members = load_members(trip_id=trip_id)
    member_ids = {member.member_id for member in members}

    return [
        validate_entry(entry_from_expense(expense), member_ids)
        for expense in chain(_item_expenses(trip_id), _standalone_expenses(trip_id))
    ]
