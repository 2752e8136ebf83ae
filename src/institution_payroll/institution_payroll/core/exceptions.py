class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidRangeError(ValidationError):
    """Raised when a date range ends before it starts."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class MissingScopeError(DomainError):
    """Institution calendar requested without an institution id.

    Callers degrade to an empty calendar instead of failing the page.
    """


class InconsistentLeaveOverlapError(DomainError):
    """Two approved leave applications cover the same date."""

    def __init__(self, day, application_ids):
        self.day = day
        self.application_ids = tuple(application_ids)
        super().__init__(f"{day.isoformat()} covered by leave applications {', '.join(map(str, self.application_ids))}")


class StorageError(DomainError):
    """Any failure reported by the record store."""

    def __init__(self, message: str, *, table: str | None = None):
        self.table = table
        super().__init__(message)
