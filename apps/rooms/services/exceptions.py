"""
Domain-specific exceptions for rooms app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class RoomsServiceError(Exception):
    """Base exception for all rooms service errors."""
    pass


class RoomNotFoundError(RoomsServiceError):
    """Raised when a room does not exist."""
    pass


class InvalidInviteCodeError(RoomsServiceError):
    """Raised when no room matches an invite code."""
    pass


class AlreadyRoommateError(RoomsServiceError):
    """Raised when a user already has an entry (pending or approved) in a room."""
    pass


class RoomFullError(RoomsServiceError):
    """Raised when approved roommates already fill the room's capacity."""
    pass


class RoommateNotFoundError(RoomsServiceError):
    """Raised when a roommate does not exist in the given room."""
    pass


class NotRoommateError(RoomsServiceError):
    """Raised when a user acts on a room they are not an approved roommate of."""
    pass


class InvalidRoommateStateError(RoomsServiceError):
    """Raised when a roommate is not in the state an operation requires."""
    pass


class OwnerCannotLeaveError(RoomsServiceError):
    """Raised when the room owner tries to leave their room."""
    pass


class CannotRemoveOwnerError(RoomsServiceError):
    """Raised when attempting to remove the room owner."""
    pass


class RoommateHasOpenExpensesError(RoomsServiceError):
    """Raised when removing a roommate still referenced by unsettled expenses."""
    pass


class InsufficientPermissionsError(RoomsServiceError):
    """Raised when a user lacks required permissions for an action."""
    pass
