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
def owner_user(db):
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        display_name='Alice',
    )


@pytest.fixture
def member_user(db):
    return User.objects.create_user(
        email='member@example.com',
        password='TestPass123!',
        display_name='Bob',
    )


@pytest.fixture
def other_user(db):
    return User.objects.create_user(
        email='other@example.com',
        password='TestPass123!',
        display_name='Carol',
    )


@pytest.fixture
def member_client(member_user):
    return _client_for(member_user)


@pytest.fixture
def other_client(other_user):
    return _client_for(other_user)


@pytest.fixture
def room(owner_user):
    return create_room(name='Flat 4B', address='12 Elm Street', capacity=3, user=owner_user)


@pytest.fixture
def member(room, member_user):
    return Roommate.objects.create(
        room=room,
        user=member_user,
        name='Bob',
        status=RoommateStatus.APPROVED,
    )
