"""
Expense management service.

Records what was paid and by whom, either tied to an itinerary item or on
its own. Every write is validated against the trip's current member set
before it reaches the database.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.expenses.models import Expense, ExpenseSplit
from apps.trips.models import TripMember
from apps.trips.services import get_trip_by_id, get_trip_item

from .exceptions import ExpenseNotFoundError, InvalidExpenseAmountError
from .ledger import (
    LedgerEntry,
    ShareRule,
    share_rule_from_row,
    share_rule_to_row,
    validate_entry,
)

logger = logging.getLogger(__name__)

# Marks an omitted keyword where None is a meaningful value
UNCHANGED = object()


def _expense_queryset() -> QuerySet[Expense]:
    return (
        Expense.objects
        .select_related('payer', 'source_item')
        .prefetch_related('splits__member')
    )


def _rules_from_input(splits: Optional[Iterable[Dict[str, Any]]]) -> List[ShareRule]:
    return [
        share_rule_from_row(
            split['member_id'],
            split.get('share_type', 'equal'),
            split.get('share_value'),
        )
        for split in splits or []
    ]


def _validate(
    *,
    trip_id: UUID,
    amount: Optional[int],
    payer_id: UUID,
    rules: List[ShareRule]
) -> None:
    member_ids = set(
        TripMember.objects.filter(trip_id=trip_id).values_list('id', flat=True)
    )
    validate_entry(
        LedgerEntry(expense_id=None, amount=amount, payer_id=payer_id, rules=tuple(rules)),
        member_ids,
    )


def _write_splits(expense: Expense, rules: List[ShareRule]) -> None:
    rows = []
    for rule in rules:
        share_type, share_value = share_rule_to_row(rule)
        rows.append(ExpenseSplit(
            expense=expense,
            member_id=rule.member_id,
            share_type=share_type,
            share_value=share_value,
        ))
    ExpenseSplit.objects.bulk_create(rows)


def get_expense(*, trip_id: UUID, expense_id: UUID) -> Expense:
    """
    Get an expense scoped to its trip.

    Raises:
        TripNotFoundError: If trip doesn't exist
        ExpenseNotFoundError: If expense is not in the trip
    """
    get_trip_by_id(trip_id=trip_id)
    try:
        return _expense_queryset().get(id=expense_id, trip_id=trip_id)
    except Expense.DoesNotExist:
        raise ExpenseNotFoundError(f"Expense with ID {expense_id} not found in this trip")


def list_trip_expenses(*, trip_id: UUID) -> QuerySet[Expense]:
    """
    All expenses of a trip, item-tied and standalone, newest first.

    Raises:
        TripNotFoundError: If trip doesn't exist
    """
    get_trip_by_id(trip_id=trip_id)
    return _expense_queryset().filter(trip_id=trip_id).order_by('-created_at')


@transaction.atomic
def create_expense(
    *,
    trip_id: UUID,
    payer_id: UUID,
    amount: int,
    description: str = '',
    source_item_id: Optional[UUID] = None,
    splits: Optional[List[Dict[str, Any]]] = None
) -> Expense:
    """
    Record a standalone expense, optionally pointing at an itinerary item.

    Args:
        trip_id: UUID of the trip
        payer_id: Member who paid
        amount: Total in minor units, must be positive
        description: Free text
        source_item_id: Optional itinerary item of the same trip
        splits: List of ``{member_id, share_type, share_value}``. Empty
            means an even split across all members.

    Returns:
        Created Expense with splits

    Raises:
        TripNotFoundError: If trip doesn't exist
        ItemNotFoundError: If the item is not in the trip
        InvalidExpenseAmountError: If amount is not positive
        InvalidSplitError: If a split is malformed
        UnknownMemberError: If payer or a split member is not in the trip
    """
    trip = get_trip_by_id(trip_id=trip_id)
    rules = _rules_from_input(splits)

    if source_item_id is not None:
        get_trip_item(trip_id=trip_id, item_id=source_item_id)

    _validate(trip_id=trip_id, amount=amount, payer_id=payer_id, rules=rules)

    expense = Expense.objects.create(
        trip=trip,
        payer_id=payer_id,
        amount=amount,
        description=description or '',
        source_item_id=source_item_id,
    )
    _write_splits(expense, rules)

    logger.info(
        "Created expense %s in trip %s: %s paid by %s, %d splits",
        expense.id, trip.id, amount, payer_id, len(rules)
    )
    return get_expense(trip_id=trip_id, expense_id=expense.id)


@transaction.atomic
def update_expense(
    *,
    trip_id: UUID,
    expense_id: UUID,
    payer_id: Optional[UUID] = None,
    amount: Optional[int] = None,
    description: Optional[str] = None,
    source_item_id: Any = UNCHANGED,
    splits: Optional[List[Dict[str, Any]]] = None
) -> Expense:
    """
    Update fields of an expense. Omitted fields keep their value.

    ``source_item_id=None`` unlinks the item, ``splits`` replaces every
    split row. The resulting expense is validated as a whole.

    Raises:
        TripNotFoundError, ExpenseNotFoundError, ItemNotFoundError,
        InvalidExpenseAmountError, InvalidSplitError, UnknownMemberError
    """
    expense = get_expense(trip_id=trip_id, expense_id=expense_id)

    new_payer_id = payer_id if payer_id is not None else expense.payer_id
    new_amount = amount if amount is not None else expense.amount

    if splits is not None:
        rules = _rules_from_input(splits)
    else:
        rules = [
            share_rule_from_row(s.member_id, s.share_type, s.share_value)
            for s in expense.splits.all()
        ]

    if source_item_id is not UNCHANGED and source_item_id is not None:
        get_trip_item(trip_id=trip_id, item_id=source_item_id)

    _validate(trip_id=trip_id, amount=new_amount, payer_id=new_payer_id, rules=rules)

    expense.payer_id = new_payer_id
    expense.amount = new_amount
    if description is not None:
        expense.description = description
    if source_item_id is not UNCHANGED:
        expense.source_item_id = source_item_id
    expense.save()

    if splits is not None:
        expense.splits.all().delete()
        _write_splits(expense, rules)

    logger.info("Updated expense %s in trip %s", expense.id, trip_id)
    return get_expense(trip_id=trip_id, expense_id=expense.id)


@transaction.atomic
def replace_expense_splits(
    *,
    trip_id: UUID,
    expense_id: UUID,
    splits: List[Dict[str, Any]]
) -> Expense:
    """
    Replace all splits of an expense. An empty list reverts to an even
    split across all members.

    Raises:
        TripNotFoundError, ExpenseNotFoundError, InvalidSplitError,
        UnknownMemberError
    """
    expense = get_expense(trip_id=trip_id, expense_id=expense_id)
    rules = _rules_from_input(splits)

    _validate(trip_id=trip_id, amount=expense.amount, payer_id=expense.payer_id, rules=rules)

    expense.splits.all().delete()
    _write_splits(expense, rules)

    logger.info("Replaced splits of expense %s: %d rules", expense.id, len(rules))
    return get_expense(trip_id=trip_id, expense_id=expense.id)


@transaction.atomic
def delete_expense(*, trip_id: UUID, expense_id: UUID) -> None:
    """
    Delete an expense and its splits.

    Raises:
        TripNotFoundError: If trip doesn't exist
        ExpenseNotFoundError: If expense is not in the trip
    """
    expense = get_expense(trip_id=trip_id, expense_id=expense_id)
    expense.delete()
    logger.info("Deleted expense %s from trip %s", expense_id, trip_id)


def get_item_expense(*, trip_id: UUID, item_id: UUID) -> Optional[Expense]:
    """
    The expense recorded for an itinerary item, or None.

    Raises:
        TripNotFoundError: If trip doesn't exist
        ItemNotFoundError: If the item is not in the trip
    """
    get_trip_by_id(trip_id=trip_id)
    get_trip_item(trip_id=trip_id, item_id=item_id)
    return (
        _expense_queryset()
        .filter(trip_id=trip_id, source_item_id=item_id)
        .order_by('-created_at')
        .first()
    )


@transaction.atomic
def set_item_expense(
    *,
    trip_id: UUID,
    item_id: UUID,
    payer_id: UUID,
    amount: Optional[int] = None,
    description: Optional[str] = None,
    splits: Optional[List[Dict[str, Any]]] = None
) -> Expense:
    """
    Record who paid for an itinerary item.

    An item carries at most one expense; any previous one is replaced.
    The amount defaults to the item's cost.

    Raises:
        TripNotFoundError: If trip doesn't exist
        ItemNotFoundError: If the item is not in the trip
        InvalidExpenseAmountError: If neither amount nor item cost is set,
            or the amount is not positive
        InvalidSplitError, UnknownMemberError: On invalid splits or payer
    """
    trip = get_trip_by_id(trip_id=trip_id)
    item = get_trip_item(trip_id=trip_id, item_id=item_id)

    if amount is None:
        amount = item.cost
    if amount is None:
        raise InvalidExpenseAmountError("Item has no cost; an amount is required")

    rules = _rules_from_input(splits)
    _validate(trip_id=trip_id, amount=amount, payer_id=payer_id, rules=rules)

    replaced, _ = Expense.objects.filter(trip_id=trip_id, source_item=item).delete()

    expense = Expense.objects.create(
        trip=trip,
        payer_id=payer_id,
        amount=amount,
        description=description if description is not None else item.title,
        source_item=item,
    )
    _write_splits(expense, rules)

    logger.info(
        "Set expense %s for item %s in trip %s (replaced: %s)",
        expense.id, item.id, trip.id, bool(replaced)
    )
    return get_expense(trip_id=trip_id, expense_id=expense.id)


@transaction.atomic
def clear_item_expense(*, trip_id: UUID, item_id: UUID) -> int:
    """
    Remove the expense recorded for an itinerary item.

    Returns:
        Number of expenses removed

    Raises:
        TripNotFoundError: If trip doesn't exist
        ItemNotFoundError: If the item is not in the trip
    """
    get_trip_by_id(trip_id=trip_id)
    get_trip_item(trip_id=trip_id, item_id=item_id)

    _, per_model = Expense.objects.filter(trip_id=trip_id, source_item_id=item_id).delete()
    removed = per_model.get(Expense._meta.label, 0)

    logger.info("Cleared %d expense(s) for item %s in trip %s", removed, item_id, trip_id)
    return removed
