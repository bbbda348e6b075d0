from .exceptions import (
    ChoresServiceError,
    ChoreNotFoundError,
    InvalidAssigneeError,
    InvalidChoreStateError,
)

from .chore_management import (
    create_chore,
    complete_chore,
    reopen_chore,
    get_room_chores,
)


__all__ = [
    'ChoresServiceError',
    'ChoreNotFoundError',
    'InvalidAssigneeError',
    'InvalidChoreStateError',
    'create_chore',
    'complete_chore',
    'reopen_chore',
    'get_room_chores',
]
