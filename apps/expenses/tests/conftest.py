import pytest
from decimal import Decimal
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.expenses.models import Expense, ExpenseShare
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
def alice(db):
    """Room owner."""
    return User.objects.create_user(
        email='alice@example.com',
        password='TestPass123!',
        display_name='Alice',
    )


@pytest.fixture
def bob(db):
    return User.objects.create_user(
        email='bob@example.com',
        password='TestPass123!',
        display_name='Bob',
    )


@pytest.fixture
def carol(db):
    return User.objects.create_user(
        email='carol@example.com',
        password='TestPass123!',
        display_name='Carol',
    )


@pytest.fixture
def outsider(db):
    """User outside the room."""
    return User.objects.create_user(
        email='outsider@example.com',
        password='TestPass123!',
        display_name='Outsider',
    )


@pytest.fixture
def alice_client(alice):
    return _client_for(alice)


@pytest.fixture
def bob_client(bob):
    return _client_for(bob)


@pytest.fixture
def outsider_client(outsider):
    return _client_for(outsider)


@pytest.fixture
def room(alice, bob, carol):
    """Room owned by Alice with Bob and Carol approved."""
    room = create_room(name='Flat 4B', address='12 Elm Street', capacity=4, user=alice)
    for user in (bob, carol):
        Roommate.objects.create(
            room=room,
            user=user,
            name=user.display_name,
            status=RoommateStatus.APPROVED,
        )
    return room


@pytest.fixture
def roommates(room):
    """Approved roommates keyed by name."""
    return {r.name: r for r in room.roommates.all()}


@pytest.fixture
def groceries(room, roommates, alice):
    """Alice paid 30.00 shared by all three."""
    expense = Expense.objects.create(
        room=room,
        title='Groceries',
        amount=Decimal('30.00'),
        paid_by=roommates['Alice'],
        created_by=alice,
    )
    for roommate in roommates.values():
        ExpenseShare.objects.create(expense=expense, roommate=roommate)
    return expense
