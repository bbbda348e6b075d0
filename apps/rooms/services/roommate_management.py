"""
Roommate management service.

Handles the join-request / approval workflow and roommate removal with
concurrency protection. A roommate is created ``pending`` when someone
uses an invite code and only takes part in expenses once the owner
approves them.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction, IntegrityError
from django.db.models import Q, QuerySet

from apps.accounts.models import User
from apps.expenses.models import Expense
from apps.rooms.models import Room, Roommate, RoommateStatus

from .exceptions import (
    RoomNotFoundError,
    AlreadyRoommateError,
    RoomFullError,
    RoommateNotFoundError,
    NotRoommateError,
    InvalidRoommateStateError,
    OwnerCannotLeaveError,
    CannotRemoveOwnerError,
    RoommateHasOpenExpensesError,
    InsufficientPermissionsError,
)
from .room_management import find_room_by_invite_code

logger = logging.getLogger(__name__)


def _lock_room(room_id: UUID) -> Room:
    try:
        return Room.objects.select_for_update().get(id=room_id)
    except Room.DoesNotExist:
        raise RoomNotFoundError(f"Room with ID {room_id} not found")


def _get_roommate_for_update(room: Room, roommate_id: UUID) -> Roommate:
    try:
        return (
            Roommate.objects
            .select_for_update()
            .get(room=room, id=roommate_id)
        )
    except Roommate.DoesNotExist:
        raise RoommateNotFoundError("Roommate not found in this room")


def _has_open_expenses(roommate: Roommate) -> bool:
    return (
        Expense.objects
        .filter(room_id=roommate.room_id, settled=False)
        .filter(Q(paid_by=roommate) | Q(shares__roommate=roommate))
        .exists()
    )


@transaction.atomic
def request_to_join(
    *,
    invite_code: str,
    user: User,
    name: str = '',
    email: str = '',
    phone_number: str = ''
) -> Roommate:
    """
    Ask to join a room using its invite code.

    Creates a pending roommate that the owner must approve.

    Args:
        invite_code: Room invite code (case-insensitive)
        user: User asking to join
        name: Roommate name (defaults to the user's display name)
        email: Contact email (defaults to the user's email)
        phone_number: Contact phone (defaults to the user's phone)

    Returns:
        Created pending Roommate

    Raises:
        InvalidInviteCodeError: If no room has this code
        AlreadyRoommateError: If the user already has an entry in the room
        RoomFullError: If the room is at capacity
    """
    room = find_room_by_invite_code(invite_code=invite_code)
    # Lock the room so capacity checks and inserts are serialized
    room = _lock_room(room.id)

    if room.roommates.filter(user=user).exists():
        raise AlreadyRoommateError(f"You already joined or requested to join {room.name}")

    if room.is_full():
        raise RoomFullError(f"{room.name} is full")

    try:
        roommate = Roommate.objects.create(
            room=room,
            user=user,
            name=name or user.get_display_name(),
            email=email or user.email,
            phone_number=phone_number or user.phone_number,
            is_owner=False,
            status=RoommateStatus.PENDING
        )
    except IntegrityError:
        raise AlreadyRoommateError(f"You already joined or requested to join {room.name}")

    logger.info("User %s requested to join room %s", user.id, room.id)
    return roommate


@transaction.atomic
def approve_roommate(
    *,
    room_id: UUID,
    roommate_id: UUID,
    approved_by: User
) -> Roommate:
    """
    Approve a pending roommate (owner only).

    Raises:
        RoomNotFoundError: If room doesn't exist
        InsufficientPermissionsError: If approved_by is not the owner
        RoommateNotFoundError: If the roommate is not in this room
        InvalidRoommateStateError: If the roommate is not pending
        RoomFullError: If the room is at capacity
    """
    room = _lock_room(room_id)

    if not room.is_owner(approved_by):
        raise InsufficientPermissionsError("Only room owners can accept roommate requests")

    roommate = _get_roommate_for_update(room, roommate_id)

    if roommate.status != RoommateStatus.PENDING:
        raise InvalidRoommateStateError("Roommate is not awaiting approval")

    if room.is_full():
        raise RoomFullError(f"{room.name} is full")

    roommate.status = RoommateStatus.APPROVED
    roommate.save(update_fields=['status'])

    logger.info("Roommate %s approved in room %s", roommate.id, room.id)
    return roommate


@transaction.atomic
def decline_roommate(
    *,
    room_id: UUID,
    roommate_id: UUID,
    declined_by: User
) -> None:
    """
    Decline a pending join request (owner only). The request is deleted.

    Raises:
        RoomNotFoundError: If room doesn't exist
        InsufficientPermissionsError: If declined_by is not the owner
        RoommateNotFoundError: If the roommate is not in this room
        InvalidRoommateStateError: If the roommate is already approved
    """
    room = _lock_room(room_id)

    if not room.is_owner(declined_by):
        raise InsufficientPermissionsError("Only room owners can decline roommate requests")

    roommate = _get_roommate_for_update(room, roommate_id)

    if roommate.status != RoommateStatus.PENDING:
        raise InvalidRoommateStateError("Only pending requests can be declined")

    logger.info("Roommate request %s declined in room %s", roommate.id, room.id)
    roommate.delete()


@transaction.atomic
def remove_roommate(
    *,
    room_id: UUID,
    roommate_id: UUID,
    removed_by: User
) -> None:
    """
    Remove an approved roommate from a room (owner only).

    Roommates still paying for or sharing unsettled expenses cannot be
    removed; those expenses must be settled first.

    Raises:
        RoomNotFoundError: If room doesn't exist
        InsufficientPermissionsError: If removed_by is not the owner
        RoommateNotFoundError: If the roommate is not in this room
        CannotRemoveOwnerError: If trying to remove the owner
        RoommateHasOpenExpensesError: If unsettled expenses reference the roommate
    """
    room = _lock_room(room_id)

    if not room.is_owner(removed_by):
        raise InsufficientPermissionsError("Only room owners can remove roommates")

    roommate = _get_roommate_for_update(room, roommate_id)

    if roommate.is_owner:
        raise CannotRemoveOwnerError("Cannot remove the room owner")

    if _has_open_expenses(roommate):
        raise RoommateHasOpenExpensesError(
            f"{roommate.name} still has unsettled expenses in this room"
        )

    logger.info("Roommate %s removed from room %s", roommate.id, room.id)
    roommate.delete()


@transaction.atomic
def leave_room(*, room_id: UUID, user: User) -> None:
    """
    Leave a room, or withdraw a pending join request.

    Raises:
        RoomNotFoundError: If room doesn't exist
        NotRoommateError: If the user has no entry in the room
        OwnerCannotLeaveError: If the user is the owner
        RoommateHasOpenExpensesError: If unsettled expenses reference the user
    """
    room = _lock_room(room_id)

    roommate = room.get_roommate(user, status=None)
    if roommate is None:
        raise NotRoommateError(f"You are not a roommate of {room.name}")

    if roommate.is_owner:
        raise OwnerCannotLeaveError(
            "Room owner cannot leave. Delete the room instead."
        )

    if _has_open_expenses(roommate):
        raise RoommateHasOpenExpensesError(
            "Settle your open expenses before leaving the room"
        )

    logger.info("Roommate %s left room %s", roommate.id, room.id)
    roommate.delete()


def get_roommates(
    *,
    room_id: UUID,
    status: Optional[str] = RoommateStatus.APPROVED
) -> QuerySet[Roommate]:
    """
    Get roommates of a room, owner first, then by join time.

    Args:
        room_id: UUID of the room
        status: Filter by status; None returns every entry

    Raises:
        RoomNotFoundError: If room doesn't exist
    """
    if not Room.objects.filter(id=room_id).exists():
        raise RoomNotFoundError(f"Room with ID {room_id} not found")

    queryset = Roommate.objects.filter(room_id=room_id).select_related('user')
    if status is not None:
        queryset = queryset.filter(status=status)

    return queryset.order_by('-is_owner', 'joined_at')
