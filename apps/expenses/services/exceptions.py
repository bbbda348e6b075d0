"""
Domain-specific exceptions for expenses app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class ExpensesServiceError(Exception):
    """Base exception for all expenses service errors."""
    pass


class ExpenseNotFoundError(ExpensesServiceError):
    """Raised when an expense does not exist."""
    pass


class InvalidParticipantError(ExpensesServiceError):
    """Raised when a payer or sharer is not an approved roommate of the room."""
    pass


class NoSharersError(ExpensesServiceError):
    """Raised when an expense is entered without anyone to share it."""
    pass


class ExpenseAlreadySettledError(ExpensesServiceError):
    """Raised when settling or deleting an expense that is already settled."""
    pass


class InsufficientPermissionsError(ExpensesServiceError):
    """Raised when a user lacks required permissions for an action."""
    pass


class LedgerError(ExpensesServiceError):
    """Base exception for inconsistent input to the balance ledger."""
    pass


class ReferentialError(LedgerError):
    """Raised when an expense references roommates outside the room snapshot."""

    def __init__(self, expense_id, unknown_ids):
        self.expense_id = expense_id
        self.unknown_ids = list(unknown_ids)
        super().__init__(
            f"Expense {expense_id} references unknown roommates: "
            f"{', '.join(str(i) for i in self.unknown_ids)}"
        )


class InvalidExpenseAmountError(LedgerError):
    """Raised when an expense amount is zero or negative."""
    pass
