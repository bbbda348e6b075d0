import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.rooms.models import Roommate, RoommateStatus
from apps.rooms.services import create_room


def _client_for(user):
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def owner_user(db):
    """Create and return the room owner."""
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        display_name='Alice',
    )


@pytest.fixture
def member_user(db):
    """Create and return a second roommate."""
    return User.objects.create_user(
        email='member@example.com',
        password='TestPass123!',
        display_name='Bob',
        phone_number='+420 777 000 111',
    )


@pytest.fixture
def other_user(db):
    """Create and return a user outside every room."""
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        display_name='Carol',
    )


@pytest.fixture
def owner_client(owner_user):
    """Return API client authenticated as room owner."""
    return _client_for(owner_user)


@pytest.fixture
def member_client(member_user):
    """Return API client authenticated as roommate."""
    return _client_for(member_user)


@pytest.fixture
def other_client(other_user):
    """Return API client authenticated as non-roommate."""
    return _client_for(other_user)


@pytest.fixture
def room(owner_user):
    """Create and return a room with its owner."""
    return create_room(
        name='Flat 4B',
        address='12 Elm Street',
        capacity=3,
        user=owner_user,
    )


@pytest.fixture
def owner_roommate(room):
    return room.roommates.get(is_owner=True)


@pytest.fixture
def pending_roommate(room, member_user):
    """member_user has asked to join and waits for approval."""
    return Roommate.objects.create(
        room=room,
        user=member_user,
        name='Bob',
        status=RoommateStatus.PENDING,
    )


@pytest.fixture
def approved_roommate(room, member_user):
    """member_user is an approved roommate."""
    return Roommate.objects.create(
        room=room,
        user=member_user,
        name='Bob',
        status=RoommateStatus.APPROVED,
    )


@pytest.fixture
def pending_roommate_other(room, other_user):
    """other_user has a pending request."""
    return Roommate.objects.create(
        room=room,
        user=other_user,
        name='Carol',
        status=RoommateStatus.PENDING,
    )
