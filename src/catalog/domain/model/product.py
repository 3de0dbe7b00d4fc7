"""Product entity.

Products are the only aggregate in the catalog. The entity is a plain
mutable dataclass; rule checking happens in the validation pipeline
before a request is ever turned into a Product.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Category(Enum):
    ELECTRONICS = "Electronics"
    HOME_APPLIANCES = "HomeAppliances"
    FURNITURE = "Furniture"
    ACCESSORIES = "Accessories"

    @classmethod
    def from_name(cls, name: str) -> Category:
        """Look up a category by the symbolic name used on the wire."""
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"Unknown category: {name!r}") from None

    def __str__(self) -> str:
        return self.value


@dataclass
class Product:
    """A product in the catalog.

    ``id`` is ``None`` until storage assigns one on creation; after that
    it never changes.
    """

    id: str | None
    name: str
    category: Category
    unit_price: float | None = None
    quantity_in_stock: int | None = None


# Attribute names a predicate may refer to.
PRODUCT_FIELDS = ("id", "name", "category", "unit_price", "quantity_in_stock")
