"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing the entity to the outside world. Requests hold values exactly
as the caller supplied them; checking them is the validator's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from catalog.domain.model.product import Category


@dataclass(frozen=True)
class AddProductRequest:
    """Input: a new product. No ID; storage assigns one."""

    name: str
    category: Category | str
    unit_price: float | None = None
    quantity_in_stock: int | None = None


@dataclass(frozen=True)
class UpdateProductRequest:
    """Input: the full new state of an existing product."""

    id: str
    name: str
    category: Category | str
    unit_price: float | None = None
    quantity_in_stock: int | None = None


@dataclass(frozen=True)
class ProductResponse:
    """Output: a product as returned to callers."""

    id: str
    name: str
    category: Category
    unit_price: float | None
    quantity_in_stock: int | None

    def as_dict(self) -> dict[str, Any]:
        """JSON-friendly shape; the category travels as its symbolic name."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "unitPrice": self.unit_price,
            "quantityInStock": self.quantity_in_stock,
        }
