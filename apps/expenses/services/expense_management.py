"""
Expense management service.

Handles logging, settling and deleting shared expenses. Payers and
sharers must be approved roommates of the expense's room.
"""

import datetime
import logging
from decimal import Decimal
from typing import Iterable, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.expenses.models import Expense, ExpenseShare, ExpenseCategory
from apps.rooms.models import Room, RoommateStatus
from apps.rooms.services.exceptions import RoomNotFoundError, NotRoommateError

from .balance_ledger import to_decimal
from .exceptions import (
    ExpenseNotFoundError,
    InvalidParticipantError,
    NoSharersError,
    ExpenseAlreadySettledError,
    InsufficientPermissionsError,
    InvalidExpenseAmountError,
)

logger = logging.getLogger(__name__)


def _as_uuid(value) -> UUID:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        raise InvalidParticipantError(f"{value} is not a valid roommate ID")


def _lock_room(room_id: UUID) -> Room:
    # Same lock remove_roommate and leave_room take before their open-expense check
    try:
        return Room.objects.select_for_update().get(id=room_id)
    except Room.DoesNotExist:
        raise RoomNotFoundError(f"Room with ID {room_id} not found")


def _lock_expense(expense_id: UUID) -> Expense:
    try:
        return (
            Expense.objects
            .select_for_update()
            .select_related('room', 'paid_by')
            .get(id=expense_id)
        )
    except Expense.DoesNotExist:
        raise ExpenseNotFoundError(f"Expense with ID {expense_id} not found")


@transaction.atomic
def add_expense(
    *,
    room_id: UUID,
    title: str,
    amount: Decimal,
    paid_by_id: UUID,
    shared_with_ids: Iterable[UUID],
    created_by: User,
    category: str = ExpenseCategory.GENERAL,
    date: Optional[datetime.date] = None,
    receipt: str = ''
) -> Expense:
    """
    Log a shared expense.

    Args:
        room_id: UUID of the room
        title: What was bought
        amount: Positive total amount
        paid_by_id: Roommate who paid
        shared_with_ids: Roommates who share the cost (may include the payer)
        created_by: User logging the expense (must be an approved roommate)
        category: One of ExpenseCategory
        date: Purchase date (defaults to today)
        receipt: Optional receipt URL

    Returns:
        Created Expense with its shares

    Raises:
        RoomNotFoundError: If room doesn't exist
        NotRoommateError: If created_by is not an approved roommate
        InvalidExpenseAmountError: If amount is not positive
        NoSharersError: If shared_with_ids is empty
        InvalidParticipantError: If payer or a sharer is not an approved roommate
    """
    room = _lock_room(room_id)

    if not room.has_roommate(created_by):
        raise NotRoommateError(f"You are not a roommate of {room.name}")

    amount = to_decimal(amount)
    if amount <= 0:
        raise InvalidExpenseAmountError("Expense amount must be positive")

    sharer_ids = list(dict.fromkeys(_as_uuid(rid) for rid in shared_with_ids))
    if not sharer_ids:
        raise NoSharersError("Select at least one roommate to share the expense")

    approved = {
        r.id: r
        for r in room.roommates.filter(status=RoommateStatus.APPROVED)
    }

    payer_id = _as_uuid(paid_by_id)
    if payer_id not in approved:
        raise InvalidParticipantError("Payer must be an approved roommate of this room")

    unknown = [rid for rid in sharer_ids if rid not in approved]
    if unknown:
        raise InvalidParticipantError(
            "Expenses can only be shared with approved roommates of this room"
        )

    expense = Expense.objects.create(
        room=room,
        title=title,
        amount=amount,
        paid_by=approved[payer_id],
        category=category,
        date=date or timezone.localdate(),
        receipt=receipt,
        created_by=created_by,
    )
    ExpenseShare.objects.bulk_create([
        ExpenseShare(expense=expense, roommate=approved[rid])
        for rid in sharer_ids
    ])

    logger.info(
        "Expense %s (%s) added to room %s, shared by %d",
        expense.id, amount, room.id, len(sharer_ids)
    )
    return expense


@transaction.atomic
def settle_expense(*, expense_id: UUID, user: User) -> Expense:
    """
    Mark an expense settled; it drops out of every later balance.

    Settling is one-way. Any approved roommate of the room may settle.

    Raises:
        ExpenseNotFoundError: If expense doesn't exist
        NotRoommateError: If user is not an approved roommate
        ExpenseAlreadySettledError: If already settled
    """
    expense = _lock_expense(expense_id)

    if not expense.room.has_roommate(user):
        raise NotRoommateError(f"You are not a roommate of {expense.room.name}")

    if expense.settled:
        raise ExpenseAlreadySettledError("Expense is already settled")

    expense.settled = True
    expense.settled_at = timezone.now()
    expense.save(update_fields=['settled', 'settled_at', 'updated_at'])

    logger.info("Expense %s settled by user %s", expense.id, user.id)
    return expense


@transaction.atomic
def delete_expense(*, expense_id: UUID, user: User) -> None:
    """
    Delete an unsettled expense (payer or room owner).

    Raises:
        ExpenseNotFoundError: If expense doesn't exist
        InsufficientPermissionsError: If user is neither payer nor owner
        ExpenseAlreadySettledError: If the expense is settled
    """
    expense = _lock_expense(expense_id)

    is_payer = expense.paid_by is not None and expense.paid_by.user_id == user.id
    if not (is_payer or expense.room.is_owner(user)):
        raise InsufficientPermissionsError(
            "Only the payer or the room owner can delete this expense"
        )

    if expense.settled:
        raise ExpenseAlreadySettledError("Settled expenses cannot be deleted")

    logger.info("Expense %s deleted by user %s", expense.id, user.id)
    expense.delete()


def get_expense_by_id(*, expense_id: UUID) -> Expense:
    """
    Raises:
        ExpenseNotFoundError: If expense doesn't exist
    """
    try:
        return (
            Expense.objects
            .select_related('room', 'paid_by')
            .prefetch_related('shares__roommate')
            .get(id=expense_id)
        )
    except Expense.DoesNotExist:
        raise ExpenseNotFoundError(f"Expense with ID {expense_id} not found")


def get_room_expenses(
    *,
    room_id: UUID,
    settled: Optional[bool] = None
) -> QuerySet[Expense]:
    """
    Get a room's expenses, newest first.

    Raises:
        RoomNotFoundError: If room doesn't exist
    """
    if not Room.objects.filter(id=room_id).exists():
        raise RoomNotFoundError(f"Room with ID {room_id} not found")

    queryset = (
        Expense.objects
        .filter(room_id=room_id)
        .select_related('paid_by')
        .prefetch_related('shares__roommate')
    )
    if settled is not None:
        queryset = queryset.filter(settled=settled)

    return queryset
