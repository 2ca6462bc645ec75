"""Domain-specific exception hierarchy for the book package wizard."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass
class BookWizardError(Exception):
    """Base exception for wizard configuration and data problems."""

    message: str
    details: Mapping[str, Any] | None = None

    def __str__(self) -> str:
        return self.message


@dataclass
class AnswerValidationError(BookWizardError):
    """Raised when an answer value is not offered for the class level."""

    field: str | None = None
    value: object | None = None


@dataclass
class CatalogLoadError(BookWizardError):
    """Raised when the catalog file is missing or malformed."""

    path: str | None = None


@dataclass
class SelectionServiceError(BookWizardError):
    """Raised by the HTTP save client when the transport fails."""

    status_code: int | None = None
    original: Exception | None = None
