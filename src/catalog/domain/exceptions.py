"""Domain-level exceptions.

All failures the core can report are subclasses of DomainException so the
CLI layer can catch them uniformly and display user-friendly messages.
"Not found" is deliberately absent from this module: a missing product is
a normal outcome and is returned as ``None`` / ``False`` / ``[]``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A single rule violation on one request field."""

    field: str
    message: str


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationFailed(DomainException):
    """One or more field rules were violated by a write request."""

    def __init__(self, errors: tuple[FieldError, ...] | list[FieldError]) -> None:
        self.errors = tuple(errors)
        summary = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(f"Validation failed: {summary}")

    def as_dict(self) -> dict[str, list[str]]:
        """Group messages by field, keeping the order they were reported in."""
        grouped: dict[str, list[str]] = {}
        for error in self.errors:
            grouped.setdefault(error.field, []).append(error.message)
        return grouped


class InvalidReference(DomainException):
    """A well-formed request referred to a product that does not exist."""

    def __init__(self, product_id: str) -> None:
        self.product_id = product_id
        super().__init__(f"Product with ID '{product_id}' does not exist")


class StorageFailure(DomainException):
    """The storage backend could not complete the operation.

    The underlying driver error is chained as ``__cause__``.
    """
