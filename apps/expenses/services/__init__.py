"""
Expenses app services layer.

Services contain business logic and orchestrate operations across models.
The balance ledger itself is pure and lives in ``balance_ledger``.
"""

from .exceptions import (
    ExpensesServiceError,
    ExpenseNotFoundError,
    InvalidParticipantError,
    NoSharersError,
    ExpenseAlreadySettledError,
    InsufficientPermissionsError,
    LedgerError,
    ReferentialError,
    InvalidExpenseAmountError,
)

from .balance_ledger import (
    ExpenseSnapshot,
    accumulate_raw_balances,
    simplify_balances,
    calculate_balances,
    total_owed_by,
    total_owed_to,
)

from .expense_management import (
    add_expense,
    settle_expense,
    delete_expense,
    get_expense_by_id,
    get_room_expenses,
)

from .balances import (
    get_room_balances,
    get_balance_summary,
)


__all__ = [
    # Exceptions
    'ExpensesServiceError',
    'ExpenseNotFoundError',
    'InvalidParticipantError',
    'NoSharersError',
    'ExpenseAlreadySettledError',
    'InsufficientPermissionsError',
    'LedgerError',
    'ReferentialError',
    'InvalidExpenseAmountError',

    # Ledger
    'ExpenseSnapshot',
    'accumulate_raw_balances',
    'simplify_balances',
    'calculate_balances',
    'total_owed_by',
    'total_owed_to',

    # Expense Management
    'add_expense',
    'settle_expense',
    'delete_expense',
    'get_expense_by_id',
    'get_room_expenses',

    # Balances
    'get_room_balances',
    'get_balance_summary',
]
