"""Exceptions shared across the calculation, storage and API layers."""

from typing import List, Optional


class ValidationError(ValueError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str = "", suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field = field
        self.suggestions = suggestions or []


class NotFoundError(LookupError):
    """Raised when a requested design or city does not exist."""


class StoreError(RuntimeError):
    """Raised when the document store fails or returns unusable data."""
