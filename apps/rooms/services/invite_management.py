"""
Invite management service.

Handles room invite code operations with uniqueness guarantees.
"""

import logging
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.db import transaction, IntegrityError

from apps.accounts.models import User
from apps.rooms.models import Room, generate_invite_code

from .exceptions import (
    RoomNotFoundError,
    InsufficientPermissionsError,
)

logger = logging.getLogger(__name__)


def regenerate_invite_code(
    *,
    room_id: UUID,
    user: User,
    max_retries: Optional[int] = None
) -> str:
    """
    Regenerate a room's invite code (owner only).

    The old code stops working immediately; pending requests made with it
    are kept.

    Args:
        room_id: UUID of the room
        user: User requesting regeneration (must be owner)
        max_retries: Maximum attempts to generate unique code

    Returns:
        New invite code

    Raises:
        RoomNotFoundError: If room doesn't exist
        InsufficientPermissionsError: If user is not the owner
        RuntimeError: If cannot generate unique code after retries
    """
    if max_retries is None:
        max_retries = settings.INVITE_CODE_MAX_RETRIES

    try:
        room = Room.objects.get(id=room_id)
    except Room.DoesNotExist:
        raise RoomNotFoundError(f"Room with ID {room_id} not found")

    if not room.is_owner(user):
        raise InsufficientPermissionsError("Only the room owner can regenerate invite codes")

    for attempt in range(max_retries):
        new_code = generate_invite_code()

        try:
            # Savepoint per attempt so a collision does not poison the outer transaction
            with transaction.atomic():
                room.invite_code = new_code
                room.save(update_fields=['invite_code', 'updated_at'])
            logger.info("Invite code regenerated for room %s", room.id)
            return new_code
        except IntegrityError:
            if attempt == max_retries - 1:
                raise RuntimeError(
                    f"Failed to generate unique invite code after {max_retries} attempts"
                )
            continue

    raise RuntimeError("Unexpected error in invite code generation")
