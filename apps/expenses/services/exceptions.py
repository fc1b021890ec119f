"""
Domain exceptions for expenses app.

Raised by the ledger and the expense management services before anything
is written. Views convert them to HTTP responses. Not-found conditions for
trips, members and items come from ``apps.trips.services.exceptions``.
"""


class ExpensesServiceError(Exception):
    """Base exception for expense service errors."""
    pass


class ExpenseNotFoundError(ExpensesServiceError):
    """Raised when an expense does not exist in the given trip."""
    pass


class InvalidExpenseAmountError(ExpensesServiceError):
    """Raised when an expense amount is missing, zero or negative."""
    pass


class InvalidSplitError(ExpensesServiceError):
    """Raised when a split has an unknown share type or lacks its share value."""
    pass


class UnknownMemberError(ExpensesServiceError):
    """Raised when a payer or split references someone outside the trip."""
    pass
