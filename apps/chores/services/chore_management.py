"""
Chore management service.

Any approved roommate may create, complete or reopen a room's chores.
"""

import datetime
import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.chores.models import Chore, ChoreFrequency
from apps.rooms.models import Room, RoommateStatus
from apps.rooms.services.exceptions import RoomNotFoundError, NotRoommateError

from .exceptions import (
    ChoreNotFoundError,
    InvalidAssigneeError,
    InvalidChoreStateError,
)

logger = logging.getLogger(__name__)


def _lock_chore(chore_id: UUID, user: User) -> Chore:
    try:
        chore = Chore.objects.select_for_update().select_related('room').get(id=chore_id)
    except Chore.DoesNotExist:
        raise ChoreNotFoundError(f"Chore with ID {chore_id} not found")

    if not chore.room.has_roommate(user):
        raise NotRoommateError(f"You are not a roommate of {chore.room.name}")
    return chore


@transaction.atomic
def create_chore(
    *,
    room_id: UUID,
    title: str,
    created_by: User,
    assigned_to_id: Optional[UUID] = None,
    frequency: str = ChoreFrequency.WEEKLY,
    due_date: Optional[datetime.date] = None
) -> Chore:
    """
    Add a chore to a room.

    Raises:
        RoomNotFoundError: If room doesn't exist
        NotRoommateError: If created_by is not an approved roommate
        InvalidAssigneeError: If assignee is not an approved roommate of the room
    """
    try:
        room = Room.objects.get(id=room_id)
    except Room.DoesNotExist:
        raise RoomNotFoundError(f"Room with ID {room_id} not found")

    if not room.has_roommate(created_by):
        raise NotRoommateError(f"You are not a roommate of {room.name}")

    assignee = None
    if assigned_to_id is not None:
        assignee = room.roommates.filter(
            id=assigned_to_id,
            status=RoommateStatus.APPROVED
        ).first()
        if assignee is None:
            raise InvalidAssigneeError("Chores can only be assigned to approved roommates")

    chore = Chore.objects.create(
        room=room,
        title=title,
        assigned_to=assignee,
        frequency=frequency,
        due_date=due_date,
        created_by=created_by,
    )

    logger.info("Chore %s created in room %s", chore.id, room.id)
    return chore


@transaction.atomic
def complete_chore(*, chore_id: UUID, user: User) -> Chore:
    """
    Raises:
        ChoreNotFoundError: If chore doesn't exist
        NotRoommateError: If user is not an approved roommate
        InvalidChoreStateError: If already completed
    """
    chore = _lock_chore(chore_id, user)
    if chore.completed:
        raise InvalidChoreStateError("Chore is already completed")

    chore.completed = True
    chore.completed_at = timezone.now()
    chore.save(update_fields=['completed', 'completed_at'])

    logger.info("Chore %s completed by user %s", chore.id, user.id)
    return chore


@transaction.atomic
def reopen_chore(*, chore_id: UUID, user: User) -> Chore:
    """
    Raises:
        ChoreNotFoundError: If chore doesn't exist
        NotRoommateError: If user is not an approved roommate
        InvalidChoreStateError: If the chore is still open
    """
    chore = _lock_chore(chore_id, user)
    if not chore.completed:
        raise InvalidChoreStateError("Chore is not completed")

    chore.completed = False
    chore.completed_at = None
    chore.save(update_fields=['completed', 'completed_at'])
    return chore


def get_room_chores(*, room_id: UUID, completed: Optional[bool] = None) -> QuerySet[Chore]:
    """
    Raises:
        RoomNotFoundError: If room doesn't exist
    """
    if not Room.objects.filter(id=room_id).exists():
        raise RoomNotFoundError(f"Room with ID {room_id} not found")

    queryset = Chore.objects.filter(room_id=room_id).select_related('assigned_to')
    if completed is not None:
        queryset = queryset.filter(completed=completed)
    return queryset
