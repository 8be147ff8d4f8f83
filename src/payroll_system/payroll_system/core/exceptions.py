from __future__ import annotations

from typing import Optional, Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""


class NotFoundError(DomainError):
    """Raised when a requested employee, record or payslip does not exist."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    def __init__(self, message: str, *, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class StateConflictError(DomainError):
    """Raised when an entity is not in a state that allows the operation."""


class PayslipLockedError(StateConflictError):
    """Raised when a write targets an approved payslip."""


class ConfirmationRequiredError(DomainError):
    """Raised when a write needs explicit operator acknowledgement first."""

    def __init__(self, message: str, *, warnings: Sequence[str] = ()):
        super().__init__(message)
        self.warnings = list(warnings)


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
