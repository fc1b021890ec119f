"""
Member registry service.

Trip members are the participants of a trip's expense pool. They are
distinct from login accounts and may exist as a plain name.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.trips.models import Trip, TripMember, ItineraryItem, MEMBER_NAME_MAX_LENGTH

from .exceptions import (
    TripNotFoundError,
    MemberNotFoundError,
    ItemNotFoundError,
    InvalidMemberNameError,
    DuplicateLinkedAccountError,
    LinkedAccountNotFoundError,
)

logger = logging.getLogger(__name__)


def get_trip_by_id(*, trip_id: UUID) -> Trip:
    """
    Get a trip by ID.

    Raises:
        TripNotFoundError: If trip doesn't exist
    """
    try:
        return Trip.objects.select_related('owner').get(id=trip_id)
    except Trip.DoesNotExist:
        raise TripNotFoundError(f"Trip with ID {trip_id} not found")


def get_trip_member(*, trip_id: UUID, member_id: UUID) -> TripMember:
    """Get a member scoped to its trip. Raises MemberNotFoundError."""
    try:
        return TripMember.objects.get(id=member_id, trip_id=trip_id)
    except TripMember.DoesNotExist:
        raise MemberNotFoundError(f"Member with ID {member_id} not found in this trip")


def get_trip_item(*, trip_id: UUID, item_id: UUID) -> ItineraryItem:
    """Get an itinerary item scoped to its trip. Raises ItemNotFoundError."""
    try:
        return ItineraryItem.objects.get(id=item_id, trip_id=trip_id)
    except ItineraryItem.DoesNotExist:
        raise ItemNotFoundError(f"Item with ID {item_id} not found in this trip")


def list_members(*, trip_id: UUID) -> QuerySet[TripMember]:
    """
    Get all members of a trip in creation order.

    Raises:
        TripNotFoundError: If trip doesn't exist
    """
    if not Trip.objects.filter(id=trip_id).exists():
        raise TripNotFoundError(f"Trip with ID {trip_id} not found")

    return (
        TripMember.objects
        .filter(trip_id=trip_id)
        .select_related('linked_account')
        .order_by('created_at')
    )


@transaction.atomic
def add_member(
    *,
    trip_id: UUID,
    display_name: str,
    linked_account_id: Optional[UUID] = None
) -> TripMember:
    """
    Add a participant to the trip's expense pool.

    Args:
        trip_id: UUID of the trip
        display_name: Name shown in balances and settlements
        linked_account_id: Optional account the member represents

    Returns:
        Created TripMember instance

    Raises:
        TripNotFoundError: If trip doesn't exist
        InvalidMemberNameError: If name is blank or longer than 50 characters
        LinkedAccountNotFoundError: If the linked account doesn't exist
        DuplicateLinkedAccountError: If the account is already a member
    """
    trip = get_trip_by_id(trip_id=trip_id)

    name = (display_name or '').strip()
    if not name:
        raise InvalidMemberNameError("Member name is required")
    if len(name) > MEMBER_NAME_MAX_LENGTH:
        raise InvalidMemberNameError(
            f"Member name must be at most {MEMBER_NAME_MAX_LENGTH} characters"
        )

    if linked_account_id and not User.objects.filter(id=linked_account_id).exists():
        raise LinkedAccountNotFoundError(f"Account with ID {linked_account_id} not found")

    if linked_account_id and trip.members.filter(linked_account_id=linked_account_id).exists():
        raise DuplicateLinkedAccountError("This account is already a member of the trip")

    try:
        member = TripMember.objects.create(
            trip=trip,
            display_name=name,
            linked_account_id=linked_account_id,
        )
    except IntegrityError:
        raise DuplicateLinkedAccountError("This account is already a member of the trip")

    logger.info("Added member %s to trip %s", member.id, trip.id)
    return member


@transaction.atomic
def remove_member(*, trip_id: UUID, member_id: UUID) -> None:
    """
    Remove a member from the trip.

    Expenses the member paid and splits referencing the member are
    deleted with it, so the next settlement is computed without them.

    Raises:
        TripNotFoundError: If trip doesn't exist
        MemberNotFoundError: If member is not in the trip
    """
    get_trip_by_id(trip_id=trip_id)
    member = get_trip_member(trip_id=trip_id, member_id=member_id)
    member.delete()
    logger.info("Removed member %s from trip %s", member_id, trip_id)
