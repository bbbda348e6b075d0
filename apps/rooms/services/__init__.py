"""
Rooms app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and concurrency protection.
"""

from .exceptions import (
    RoomsServiceError,
    RoomNotFoundError,
    InvalidInviteCodeError,
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

from .room_management import (
    create_room,
    update_room,
    delete_room,
    get_room_by_id,
    find_room_by_invite_code,
)

from .roommate_management import (
    request_to_join,
    approve_roommate,
    decline_roommate,
    remove_roommate,
    leave_room,
    get_roommates,
)

from .invite_management import (
    regenerate_invite_code,
)


__all__ = [
    # Exceptions
    'RoomsServiceError',
    'RoomNotFoundError',
    'InvalidInviteCodeError',
    'AlreadyRoommateError',
    'RoomFullError',
    'RoommateNotFoundError',
    'NotRoommateError',
    'InvalidRoommateStateError',
    'OwnerCannotLeaveError',
    'CannotRemoveOwnerError',
    'RoommateHasOpenExpensesError',
    'InsufficientPermissionsError',

    # Room Management
    'create_room',
    'update_room',
    'delete_room',
    'get_room_by_id',
    'find_room_by_invite_code',

    # Roommate Management
    'request_to_join',
    'approve_roommate',
    'decline_roommate',
    'remove_roommate',
    'leave_room',
    'get_roommates',

    # Invite Management
    'regenerate_invite_code',
]
