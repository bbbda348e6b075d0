"""
Domain-specific exceptions for chores app.
"""


class ChoresServiceError(Exception):
    """Base exception for all chores service errors."""
    pass


class ChoreNotFoundError(ChoresServiceError):
    """Raised when a chore does not exist."""
    pass


class InvalidAssigneeError(ChoresServiceError):
    """Raised when a chore is assigned to someone outside the room."""
    pass


class InvalidChoreStateError(ChoresServiceError):
    """Raised when completing a completed chore or reopening an open one."""
    pass
