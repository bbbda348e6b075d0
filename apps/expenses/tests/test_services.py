"""
Service layer unit tests for expenses app.

Tests cover:
- Adding expenses and participant validation
- Settling and deleting
- Room balances read from stored expenses
"""

import pytest
from decimal import Decimal
from uuid import uuid4
from unittest.mock import patch

from django.utils import timezone

from apps.expenses.models import Expense, ExpenseShare
from apps.expenses.services import (
    add_expense,
    settle_expense,
    delete_expense,
    get_expense_by_id,
    get_room_expenses,
    get_room_balances,
    get_balance_summary,
)
from apps.expenses.services.exceptions import (
    ExpenseNotFoundError,
    InvalidParticipantError,
    NoSharersError,
    ExpenseAlreadySettledError,
    InsufficientPermissionsError,
    InvalidExpenseAmountError,
    ReferentialError,
)
from apps.rooms.models import Room, Roommate, RoommateStatus
from apps.rooms.services import RoomNotFoundError, NotRoommateError


@pytest.mark.django_db
class TestAddExpense:
    """Tests for add_expense."""

    def test_add_expense(self, room, roommates, bob):
        expense = add_expense(
            room_id=room.id,
            title='Internet',
            amount=Decimal('45.00'),
            paid_by_id=roommates['Bob'].id,
            shared_with_ids=[r.id for r in roommates.values()],
            created_by=bob,
            category='internet',
        )

        assert expense.paid_by == roommates['Bob']
        assert expense.settled is False
        assert expense.date == timezone.localdate()
        assert set(expense.get_sharer_ids()) == {r.id for r in roommates.values()}

    def test_add_expense_locks_room(self, room, roommates, bob):
        """Serialized with roommate removal on the room row."""
        with patch.object(
            Room.objects, 'select_for_update', wraps=Room.objects.select_for_update
        ) as mock_lock:
            add_expense(
                room_id=room.id,
                title='Bread',
                amount=Decimal('4.00'),
                paid_by_id=roommates['Bob'].id,
                shared_with_ids=[roommates['Bob'].id],
                created_by=bob,
            )

        mock_lock.assert_called_once_with()

    def test_add_expense_deduplicates_sharers(self, room, roommates, alice):
        expense = add_expense(
            room_id=room.id,
            title='Milk',
            amount=Decimal('3.00'),
            paid_by_id=roommates['Alice'].id,
            shared_with_ids=[roommates['Bob'].id, str(roommates['Bob'].id)],
            created_by=alice,
        )
        assert ExpenseShare.objects.filter(expense=expense).count() == 1

    def test_add_expense_room_not_found(self, alice, roommates):
        with pytest.raises(RoomNotFoundError):
            add_expense(
                room_id=uuid4(),
                title='X',
                amount=Decimal('1.00'),
                paid_by_id=roommates['Alice'].id,
                shared_with_ids=[roommates['Alice'].id],
                created_by=alice,
            )

    def test_add_expense_by_outsider(self, room, roommates, outsider):
        with pytest.raises(NotRoommateError):
            add_expense(
                room_id=room.id,
                title='X',
                amount=Decimal('1.00'),
                paid_by_id=roommates['Alice'].id,
                shared_with_ids=[roommates['Alice'].id],
                created_by=outsider,
            )

    @pytest.mark.parametrize('amount', [Decimal('0'), Decimal('-1.00')])
    def test_add_expense_non_positive_amount(self, room, roommates, alice, amount):
        with pytest.raises(InvalidExpenseAmountError):
            add_expense(
                room_id=room.id,
                title='X',
                amount=amount,
                paid_by_id=roommates['Alice'].id,
                shared_with_ids=[roommates['Alice'].id],
                created_by=alice,
            )

    def test_add_expense_without_sharers(self, room, roommates, alice):
        with pytest.raises(NoSharersError):
            add_expense(
                room_id=room.id,
                title='X',
                amount=Decimal('5.00'),
                paid_by_id=roommates['Alice'].id,
                shared_with_ids=[],
                created_by=alice,
            )

    def test_add_expense_pending_sharer(self, room, roommates, alice, outsider):
        pending = Roommate.objects.create(
            room=room,
            user=outsider,
            name='Outsider',
            status=RoommateStatus.PENDING,
        )

        with pytest.raises(InvalidParticipantError):
            add_expense(
                room_id=room.id,
                title='X',
                amount=Decimal('5.00'),
                paid_by_id=roommates['Alice'].id,
                shared_with_ids=[roommates['Alice'].id, pending.id],
                created_by=alice,
            )
        assert not Expense.objects.filter(room=room).exists()

    def test_add_expense_unknown_payer(self, room, roommates, alice):
        with pytest.raises(InvalidParticipantError):
            add_expense(
                room_id=room.id,
                title='X',
                amount=Decimal('5.00'),
                paid_by_id=uuid4(),
                shared_with_ids=[roommates['Alice'].id],
                created_by=alice,
            )

    def test_add_expense_malformed_sharer_id(self, room, roommates, alice):
        with pytest.raises(InvalidParticipantError):
            add_expense(
                room_id=room.id,
                title='X',
                amount=Decimal('5.00'),
                paid_by_id=roommates['Alice'].id,
                shared_with_ids=['not-a-uuid'],
                created_by=alice,
            )


@pytest.mark.django_db
class TestSettleAndDelete:

    def test_settle_expense(self, groceries, bob):
        settled = settle_expense(expense_id=groceries.id, user=bob)

        assert settled.settled is True
        assert settled.settled_at is not None

    def test_settle_twice(self, groceries, bob):
        settle_expense(expense_id=groceries.id, user=bob)

        with pytest.raises(ExpenseAlreadySettledError):
            settle_expense(expense_id=groceries.id, user=bob)

    def test_settle_by_outsider(self, groceries, outsider):
        with pytest.raises(NotRoommateError):
            settle_expense(expense_id=groceries.id, user=outsider)

    def test_settle_not_found(self, alice):
        with pytest.raises(ExpenseNotFoundError):
            settle_expense(expense_id=uuid4(), user=alice)

    def test_delete_by_payer(self, groceries, alice):
        delete_expense(expense_id=groceries.id, user=alice)
        assert not Expense.objects.filter(id=groceries.id).exists()

    def test_delete_by_sharer_forbidden(self, groceries, bob):
        with pytest.raises(InsufficientPermissionsError):
            delete_expense(expense_id=groceries.id, user=bob)

    def test_delete_by_owner(self, room, roommates, bob, alice):
        expense = add_expense(
            room_id=room.id,
            title='Pizza',
            amount=Decimal('20.00'),
            paid_by_id=roommates['Bob'].id,
            shared_with_ids=[roommates['Bob'].id, roommates['Carol'].id],
            created_by=bob,
        )

        delete_expense(expense_id=expense.id, user=alice)
        assert not Expense.objects.filter(id=expense.id).exists()

    def test_delete_settled_expense(self, groceries, alice):
        settle_expense(expense_id=groceries.id, user=alice)

        with pytest.raises(ExpenseAlreadySettledError):
            delete_expense(expense_id=groceries.id, user=alice)

    def test_get_expense_by_id_not_found(self):
        with pytest.raises(ExpenseNotFoundError):
            get_expense_by_id(expense_id=uuid4())

    def test_get_room_expenses_filters_settled(self, room, groceries, bob):
        settle_expense(expense_id=groceries.id, user=bob)

        assert list(get_room_expenses(room_id=room.id, settled=True)) == [groceries]
        assert list(get_room_expenses(room_id=room.id, settled=False)) == []
        assert len(get_room_expenses(room_id=room.id)) == 1


@pytest.mark.django_db
class TestRoomBalances:

    def test_balances_from_stored_expenses(self, room, roommates, groceries):
        balances = get_room_balances(room_id=room.id)

        alice, bob, carol = roommates['Alice'], roommates['Bob'], roommates['Carol']
        assert balances == {
            alice.id: {},
            bob.id: {alice.id: Decimal('10.00')},
            carol.id: {alice.id: Decimal('10.00')},
        }

    def test_settling_clears_balances(self, room, roommates, groceries, carol):
        settle_expense(expense_id=groceries.id, user=carol)

        balances = get_room_balances(room_id=room.id)
        assert all(row == {} for row in balances.values())

    def test_netting_across_expenses(self, room, roommates, groceries, bob):
        add_expense(
            room_id=room.id,
            title='Soap',
            amount=Decimal('15.00'),
            paid_by_id=roommates['Bob'].id,
            shared_with_ids=[roommates['Alice'].id, roommates['Bob'].id],
            created_by=bob,
        )

        balances = get_room_balances(room_id=room.id)

        assert balances[roommates['Bob'].id] == {roommates['Alice'].id: Decimal('2.50')}
        assert balances[roommates['Alice'].id] == {}

    def test_pending_roommate_excluded(self, room, roommates, outsider):
        pending = Roommate.objects.create(
            room=room, user=outsider, name='Outsider', status=RoommateStatus.PENDING
        )

        balances = get_room_balances(room_id=room.id)
        assert pending.id not in balances
        assert len(balances) == 3

    def test_inconsistent_share_raises(self, room, roommates, groceries, outsider):
        pending = Roommate.objects.create(
            room=room, user=outsider, name='Outsider', status=RoommateStatus.PENDING
        )
        ExpenseShare.objects.create(expense=groceries, roommate=pending)

        with pytest.raises(ReferentialError) as exc_info:
            get_room_balances(room_id=room.id)
        assert exc_info.value.unknown_ids == [pending.id]

    def test_room_not_found(self):
        with pytest.raises(RoomNotFoundError):
            get_room_balances(room_id=uuid4())

    def test_summary(self, room, roommates, groceries):
        summary = get_balance_summary(room_id=room.id)

        totals = {t['name']: t for t in summary['totals']}
        assert totals['Alice']['is_owed'] == Decimal('20.00')
        assert totals['Alice']['owes'] == Decimal('0.00')
        assert totals['Bob']['owes'] == Decimal('10.00')

        assert len(summary['lines']) == 2
        assert {line['debtor_name'] for line in summary['lines']} == {'Bob', 'Carol'}
        assert all(line['creditor_name'] == 'Alice' for line in summary['lines'])
