"""
Service layer unit tests for trips app.

Tests cover:
- Trip-scoped lookups
- Member registry validation
- Cascading member removal
"""

import pytest
from uuid import uuid4

from apps.trips.models import TripMember, Trip
from apps.trips.services import (
    get_trip_by_id,
    get_trip_member,
    get_trip_item,
    list_members,
    add_member,
    remove_member,
)
from apps.trips.services.exceptions import (
    TripNotFoundError,
    MemberNotFoundError,
    ItemNotFoundError,
    InvalidMemberNameError,
    DuplicateLinkedAccountError,
    LinkedAccountNotFoundError,
)


# =============================================================================
# Lookup Tests
# =============================================================================

@pytest.mark.django_db
class TestLookups:
    """Tests for trip-scoped lookups."""

    def test_get_trip_by_id(self, trip):
        assert get_trip_by_id(trip_id=trip.id) == trip

    def test_get_trip_by_id_not_found(self, db):
        with pytest.raises(TripNotFoundError):
            get_trip_by_id(trip_id=uuid4())

    def test_get_member_from_other_trip(self, member_alice, open_trip):
        """Members are only found through their own trip."""
        with pytest.raises(MemberNotFoundError):
            get_trip_member(trip_id=open_trip.id, member_id=member_alice.id)

    def test_get_item_from_other_trip(self, item, open_trip):
        with pytest.raises(ItemNotFoundError):
            get_trip_item(trip_id=open_trip.id, item_id=item.id)


# =============================================================================
# Member Registry Tests
# =============================================================================

@pytest.mark.django_db
class TestAddMember:
    """Tests for add_member."""

    def test_add_member_strips_name(self, trip):
        member = add_member(trip_id=trip.id, display_name='  Carol  ')

        assert member.display_name == 'Carol'
        assert member.trip == trip
        assert member.linked_account is None

    def test_add_member_blank_name(self, trip):
        with pytest.raises(InvalidMemberNameError):
            add_member(trip_id=trip.id, display_name='   ')

    def test_add_member_name_too_long(self, trip):
        with pytest.raises(InvalidMemberNameError):
            add_member(trip_id=trip.id, display_name='x' * 51)

    def test_add_member_name_at_limit(self, trip):
        member = add_member(trip_id=trip.id, display_name='x' * 50)
        assert len(member.display_name) == 50

    def test_add_member_with_linked_account(self, trip, other_user):
        member = add_member(trip_id=trip.id, display_name='Other', linked_account_id=other_user.id)
        assert member.linked_account == other_user

    def test_add_member_duplicate_linked_account(self, trip, other_user):
        add_member(trip_id=trip.id, display_name='Other', linked_account_id=other_user.id)

        with pytest.raises(DuplicateLinkedAccountError):
            add_member(trip_id=trip.id, display_name='Other again', linked_account_id=other_user.id)

        assert TripMember.objects.filter(trip=trip).count() == 1

    def test_same_account_in_two_trips(self, trip, open_trip, other_user):
        """An account may be a member of several trips."""
        add_member(trip_id=trip.id, display_name='Other', linked_account_id=other_user.id)
        add_member(trip_id=open_trip.id, display_name='Other', linked_account_id=other_user.id)

        assert other_user.trip_memberships.count() == 2

    def test_add_member_unknown_account(self, trip):
        with pytest.raises(LinkedAccountNotFoundError):
            add_member(trip_id=trip.id, display_name='Ghost', linked_account_id=uuid4())

    def test_add_member_trip_not_found(self, db):
        with pytest.raises(TripNotFoundError):
            add_member(trip_id=uuid4(), display_name='Nobody')


@pytest.mark.django_db
class TestListAndRemoveMembers:
    """Tests for list_members and remove_member."""

    def test_list_members_in_creation_order(self, trip):
        names = ['Alice', 'Bob', 'Carol']
        for name in names:
            add_member(trip_id=trip.id, display_name=name)

        assert [m.display_name for m in list_members(trip_id=trip.id)] == names

    def test_list_members_trip_not_found(self, db):
        with pytest.raises(TripNotFoundError):
            list_members(trip_id=uuid4())

    def test_remove_member(self, trip, member_alice, member_bob):
        remove_member(trip_id=trip.id, member_id=member_alice.id)

        assert list(list_members(trip_id=trip.id)) == [member_bob]

    def test_remove_member_not_in_trip(self, open_trip, member_alice):
        with pytest.raises(MemberNotFoundError):
            remove_member(trip_id=open_trip.id, member_id=member_alice.id)

    def test_deleting_trip_removes_members(self, trip, member_alice):
        trip.delete()
        assert not TripMember.objects.filter(id=member_alice.id).exists()
        assert not Trip.objects.filter(id=trip.id).exists()
