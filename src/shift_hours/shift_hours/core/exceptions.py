class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidIntervalError(ValidationError):
    """Raised when an interval ends before (or exactly when) it starts."""


class InvalidRateError(ValidationError):
    """Raised when a rate multiplier is outside the accepted range."""


class InvalidBreakError(ValidationError):
    """Raised when break minutes are negative or swallow the whole shift."""


class OverlappingShiftError(ValidationError):
    """Raised when a shift overlaps another active shift."""
