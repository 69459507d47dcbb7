"""Domain error taxonomy.

Invalid-state and not-allowed errors are fatal precondition failures and are
never retried. Lookups that miss return ``None`` instead of raising.
"""


class MinutebookError(Exception):
    """Base class for all domain errors."""


class InvalidStateError(MinutebookError):
    """Raised when an operation does not fit the current document state."""


class NotAllowedError(MinutebookError):
    """Raised when a workflow step is refused for the targeted minutes."""


class NotAuthorizedError(MinutebookError):
    """Raised when the injected moderator check denies the acting user."""
