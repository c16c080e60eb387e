"""Catalog domain exceptions.

Raised by the Service Layer when business rules are violated or a
collaborator fails.  The API layer (Views) catches these and translates
them into appropriate HTTP responses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional


@dataclass(frozen=True)
class FieldError:
    """A single field-level rule violation."""

    field: str
    message: str


class ProductValidationError(Exception):
    """One or more field-level rules rejected a creation request.

    ``errors`` preserves rule evaluation order so callers can render
    per-field messages.
    """

    def __init__(self, errors: Iterable[FieldError]) -> None:
        self.errors: tuple[FieldError, ...] = tuple(errors)
        if not self.errors:
            raise ValueError("ProductValidationError requires at least one error.")
        super().__init__(" ".join(error.message for error in self.errors))

    def as_dict(self) -> dict[str, list[str]]:
        """Group messages by field, keeping rule order within each field."""
        grouped: dict[str, list[str]] = {}
        for error in self.errors:
            grouped.setdefault(error.field, []).append(error.message)
        return grouped


class ProductCreationError(Exception):
    """Product creation failed for a reason other than validation.

    The underlying collaborator error is chained as ``__cause__``.
    """

    def __init__(self, message: str, operation_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.operation_id = operation_id


class ProductSkuConflict(ProductCreationError):
    """The storage layer rejected an insert because the SKU already exists.

    Raised when two concurrent creations both pass the advisory
    uniqueness check and race on the insert.
    """

    def __init__(self, sku: str, operation_id: Optional[str] = None) -> None:
        super().__init__(f"SKU '{sku}' is already registered.", operation_id)
        self.sku = sku


class ProductNotFound(Exception):
    """The requested product does not exist."""
