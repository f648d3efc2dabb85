"""Domain-specific exceptions for the budget tracker core."""

class ValidationError(ValueError):
    """Raised when provided data does not meet validation requirements."""


class RecordNotFoundError(LookupError):
    """Raised when a ledger record cannot be located."""


class GoalNotFoundError(RecordNotFoundError):
    """Raised when a contribution targets a goal that does not exist."""


class PersistenceError(IOError):
    """Raised when the persistence layer encounters unrecoverable issues."""
