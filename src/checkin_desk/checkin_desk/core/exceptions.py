class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class RosterFormatError(ValidationError):
    """Raised when an uploaded roster file cannot be read."""


class StoreError(DomainError):
    """Raised when the attendee store cannot be read or written.

    A write that raised must be treated as not applied.
    """
