import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.trips.models import (
    Trip,
    TripMember,
    ItineraryItem,
    TripCollaborator,
    ShareToken,
    CollaboratorRole,
)
from apps.expenses.models import Expense, ExpenseSplit, ShareType


def client_for(user):
    """Return a fresh API client authenticated as ``user``."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def trip_owner(db):
    """Create and return the trip owner."""
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        display_name='Trip Owner',
    )


@pytest.fixture
def editor_user(db):
    return User.objects.create_user(
        email='editor@example.com',
        password='TestPass123!',
        display_name='Trip Editor',
    )


@pytest.fixture
def viewer_user(db):
    return User.objects.create_user(
        email='viewer@example.com',
        password='TestPass123!',
        display_name='Trip Viewer',
    )


@pytest.fixture
def trip(db, trip_owner, editor_user, viewer_user):
    """Trip with an editor and a viewer collaborator."""
    trip = Trip.objects.create(title='Alps Hut Tour', owner=trip_owner)
    TripCollaborator.objects.create(trip=trip, user=editor_user, role=CollaboratorRole.EDITOR)
    TripCollaborator.objects.create(trip=trip, user=viewer_user, role=CollaboratorRole.VIEWER)
    return trip


@pytest.fixture
def other_trip(db):
    """Unrelated trip with its own member and item."""
    trip = Trip.objects.create(title='Other Trip')
    TripMember.objects.create(trip=trip, display_name='Stranger')
    ItineraryItem.objects.create(trip=trip, title='Ferry', cost=900)
    return trip


@pytest.fixture
def alice(trip):
    return TripMember.objects.create(trip=trip, display_name='Alice')


@pytest.fixture
def bob(trip, alice):
    return TripMember.objects.create(trip=trip, display_name='Bob')


@pytest.fixture
def carol(trip, bob):
    return TripMember.objects.create(trip=trip, display_name='Carol')


@pytest.fixture
def members(alice, bob, carol):
    """Alice, Bob and Carol, created in that order."""
    return [alice, bob, carol]


@pytest.fixture
def item(trip):
    """Itinerary item with a known cost."""
    return ItineraryItem.objects.create(trip=trip, title='Hut dinner', cost=900)


@pytest.fixture
def item_without_cost(trip):
    return ItineraryItem.objects.create(trip=trip, title='Cable car')


@pytest.fixture
def share_token(trip):
    return ShareToken.objects.create(trip=trip)


@pytest.fixture
def expense(trip, members):
    """900 paid by Alice, split evenly across the trip."""
    return Expense.objects.create(trip=trip, payer=members[0], amount=900, description='Groceries')


@pytest.fixture
def split_expense(trip, members):
    """600 paid by Bob, split equally between Alice and Carol."""
    alice, bob, carol = members
    expense = Expense.objects.create(trip=trip, payer=bob, amount=600, description='Fuel')
    ExpenseSplit.objects.create(expense=expense, member=alice, share_type=ShareType.EQUAL)
    ExpenseSplit.objects.create(expense=expense, member=carol, share_type=ShareType.EQUAL)
    return expense


@pytest.fixture
def owner_client(trip_owner):
    return client_for(trip_owner)


@pytest.fixture
def editor_client(editor_user):
    return client_for(editor_user)


@pytest.fixture
def viewer_client(viewer_user):
    return client_for(viewer_user)
