from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    ``field`` names the offending input so callers can report which field failed.
    """

    def __init__(self, message: str, *, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFoundError(ValidationError):
    """Raised when a referenced employee, branch or payroll does not exist."""


class WriteError(DomainError):
    """Raised by a repository when the store rejects a write.

    Callers must treat it as "nothing was saved" for the whole unit of work.
    """
