"""Abstract repository for the Product entity.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory)
live in the infrastructure layer and in the test fakes.

Every method is a coroutine because every real backend is I/O-bound.
"Not found" is always an absent value; backend errors are raised as
``StorageFailure``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from catalog.domain.model.predicate import Predicate
from catalog.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    async def get_all(self) -> list[Product]:
        """Return every stored product, in no guaranteed order."""

    @abstractmethod
    async def get_all_by_condition(self, predicate: Predicate) -> list[Product]:
        """Return every product matching *predicate*; empty list if none do."""

    @abstractmethod
    async def get_one_by_condition(self, predicate: Predicate) -> Product | None:
        """Return the first product matching *predicate*, or None.

        When several match, the earliest inserted one wins.
        """

    @abstractmethod
    async def add(self, product: Product) -> Product | None:
        """Persist a new product, assigning an ID if it has none."""

    @abstractmethod
    async def update(self, product: Product) -> Product | None:
        """Overwrite the mutable fields of the product with ``product.id``.

        Returns None, without touching storage, if no such product exists.
        """

    @abstractmethod
    async def delete(self, product_id: str) -> bool:
        """Remove a product. True only if a row was actually removed."""
