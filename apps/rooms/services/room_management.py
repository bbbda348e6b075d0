"""
Room management service.

Handles room CRUD operations with proper transaction safety.
"""

import logging
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.db import transaction, IntegrityError
from django.db.models import Prefetch

from apps.accounts.models import User
from apps.rooms.models import (
    Room,
    Roommate,
    RoommateStatus,
    RoomType,
    generate_invite_code,
)

from .exceptions import (
    RoomNotFoundError,
    InvalidInviteCodeError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)


def create_room(
    *,
    name: str,
    address: str,
    capacity: int,
    user: User,
    owner_name: str = '',
    type: str = RoomType.APARTMENT,
    location: str = '',
    email: str = '',
    phone_number: str = '',
    max_retries: Optional[int] = None
) -> Room:
    """
    Create a new room and add the creator as its approved owner.

    This is a multi-step operation wrapped in a transaction:
    1. Generate unique invite code
    2. Create the room
    3. Create the owner roommate

    Args:
        name: Room name
        address: Street address
        capacity: Maximum number of approved roommates
        user: User creating the room (becomes the owner)
        owner_name: Owner's roommate name (defaults to the user's display name)
        type: One of RoomType
        location: Optional city/area
        email: Owner contact email (defaults to the user's email)
        phone_number: Owner phone (defaults to the user's phone)
        max_retries: Maximum attempts to generate unique invite code

    Returns:
        Created Room instance

    Raises:
        RuntimeError: If cannot generate unique invite code after retries
    """
    if max_retries is None:
        max_retries = settings.INVITE_CODE_MAX_RETRIES

    for attempt in range(max_retries):
        invite_code = generate_invite_code()

        try:
            with transaction.atomic():
                room = Room.objects.create(
                    name=name,
                    address=address,
                    location=location,
                    type=type,
                    capacity=capacity,
                    invite_code=invite_code
                )

                Roommate.objects.create(
                    room=room,
                    user=user,
                    name=owner_name or user.get_display_name(),
                    email=email or user.email,
                    phone_number=phone_number or user.phone_number,
                    is_owner=True,
                    status=RoommateStatus.APPROVED
                )

                logger.info("Room %s created by user %s", room.id, user.id)
                return room

        except IntegrityError:
            # Invite code collision
            logger.warning("Invite code collision on attempt %d", attempt + 1)
            if attempt == max_retries - 1:
                raise RuntimeError(
                    f"Failed to generate unique invite code after {max_retries} attempts"
                )
            continue

    raise RuntimeError("Unexpected error in room creation")


def get_room_by_id(*, room_id: UUID) -> Room:
    """
    Get a room by ID with its roommates prefetched.

    Raises:
        RoomNotFoundError: If room doesn't exist
    """
    try:
        return (
            Room.objects
            .prefetch_related(
                Prefetch(
                    'roommates',
                    queryset=Roommate.objects.select_related('user')
                )
            )
            .get(id=room_id)
        )
    except Room.DoesNotExist:
        raise RoomNotFoundError(f"Room with ID {room_id} not found")


def find_room_by_invite_code(*, invite_code: str) -> Room:
    """
    Look up a room by invite code.

    Codes are matched case-insensitively after trimming whitespace.

    Raises:
        InvalidInviteCodeError: If no room has this code
    """
    code = (invite_code or '').strip().upper()
    if not code:
        raise InvalidInviteCodeError("Invite code is required")

    try:
        return Room.objects.get(invite_code=code)
    except Room.DoesNotExist:
        raise InvalidInviteCodeError("Invalid invite code")


@transaction.atomic
def update_room(
    *,
    room_id: UUID,
    user: User,
    name: Optional[str] = None,
    address: Optional[str] = None,
    location: Optional[str] = None,
    type: Optional[str] = None,
    capacity: Optional[int] = None
) -> Room:
    """
    Update room details (owner only).

    Capacity cannot drop below the number of approved roommates.

    Raises:
        RoomNotFoundError: If room doesn't exist
        InsufficientPermissionsError: If user is not the owner
        ValueError: If capacity is below the current approved count
    """
    try:
        room = (
            Room.objects
            .select_for_update()
            .get(id=room_id)
        )
    except Room.DoesNotExist:
        raise RoomNotFoundError(f"Room with ID {room_id} not found")

    if not room.is_owner(user):
        raise InsufficientPermissionsError("Only the room owner can update the room")

    update_fields = ['updated_at']

    if name is not None:
        room.name = name
        update_fields.append('name')

    if address is not None:
        room.address = address
        update_fields.append('address')

    if location is not None:
        room.location = location
        update_fields.append('location')

    if type is not None:
        room.type = type
        update_fields.append('type')

    if capacity is not None:
        if capacity < room.approved_count():
            raise ValueError("Capacity cannot be lower than the number of roommates")
        room.capacity = capacity
        update_fields.append('capacity')

    room.save(update_fields=update_fields)

    return room


@transaction.atomic
def delete_room(*, room_id: UUID, user: User) -> None:
    """
    Delete a room (owner only).

    Cascading deletes remove roommates, expenses, shares and chores.

    Raises:
        RoomNotFoundError: If room doesn't exist
        InsufficientPermissionsError: If user is not the owner
    """
    try:
        room = (
            Room.objects
            .select_for_update()
            .get(id=room_id)
        )
    except Room.DoesNotExist:
        raise RoomNotFoundError(f"Room with ID {room_id} not found")

    if not room.is_owner(user):
        raise InsufficientPermissionsError("Only the room owner can delete the room")

    logger.info("Room %s deleted by user %s", room.id, user.id)
    room.delete()
