"""Custom exceptions for the Church Admin backend."""

from __future__ import annotations


class ChurchAdminError(Exception):
    """Base exception for all Church Admin errors."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class PayloadError(ChurchAdminError):
    """Raised when a legacy export cannot be read."""

    pass


class MigrationError(ChurchAdminError):
    """Raised when a legacy migration run fails outside the per-record guard."""

    pass


class DocumentStoreError(ChurchAdminError):
    """Raised when the document store cannot read or write a document."""

    pass


class ValidationError(ChurchAdminError):
    """Raised when input validation fails."""

    def __init__(self, message: str, errors: list[str] | None = None, details: dict | None = None) -> None:
        super().__init__(message, details)
        self.errors = errors or []
