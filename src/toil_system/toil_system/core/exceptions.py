class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidInterval(ValidationError):
    """Raised when check-out is missing or not after check-in."""


class InvalidAmount(ValidationError):
    """Raised when an hours amount is zero, negative or not a number."""


class OverDeduction(DomainError):
    """Raised when a deduction would take an entry below zero remaining hours."""


class DuplicateSourceInterval(DomainError):
    """Raised when a ledger entry already references the attendance interval."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class LockUnavailable(DomainError):
    """Raised when the per-employee lock cannot be acquired in time."""
