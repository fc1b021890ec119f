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
    """Create and return an editor collaborator."""
    return User.objects.create_user(
        email='editor@example.com',
        password='TestPass123!',
        display_name='Trip Editor',
    )


@pytest.fixture
def viewer_user(db):
    """Create and return a viewer collaborator."""
    return User.objects.create_user(
        email='viewer@example.com',
        password='TestPass123!',
        display_name='Trip Viewer',
    )


@pytest.fixture
def other_user(db):
    """Create and return a user with no access to the trip."""
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        display_name='Other User',
    )


@pytest.fixture
def trip(db, trip_owner):
    """Create and return a trip owned by trip_owner."""
    return Trip.objects.create(title='Lisbon Weekend', owner=trip_owner)


@pytest.fixture
def open_trip(db):
    """Trip created without an account."""
    return Trip.objects.create(title='Anonymous Road Trip')


@pytest.fixture
def shared_trip(trip, editor_user, viewer_user):
    """Trip with an editor and a viewer collaborator."""
    TripCollaborator.objects.create(trip=trip, user=editor_user, role=CollaboratorRole.EDITOR)
    TripCollaborator.objects.create(trip=trip, user=viewer_user, role=CollaboratorRole.VIEWER)
    return trip


@pytest.fixture
def share_token(trip):
    """Active share link for the trip."""
    return ShareToken.objects.create(trip=trip)


@pytest.fixture
def member_alice(trip):
    return TripMember.objects.create(trip=trip, display_name='Alice')


@pytest.fixture
def member_bob(trip):
    return TripMember.objects.create(trip=trip, display_name='Bob')


@pytest.fixture
def item(trip):
    """Itinerary item with a known cost."""
    return ItineraryItem.objects.create(trip=trip, title='Tram 28 tickets', cost=1200)


@pytest.fixture
def owner_client(trip_owner):
    return client_for(trip_owner)


@pytest.fixture
def editor_client(editor_user):
    return client_for(editor_user)


@pytest.fixture
def viewer_client(viewer_user):
    return client_for(viewer_user)


@pytest.fixture
def other_client(other_user):
    return client_for(other_user)
