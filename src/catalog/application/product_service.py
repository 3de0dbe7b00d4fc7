"""Application service: the Product use cases.

Each public coroutine is one logical unit of work. The service sequences
validation, mapping and repository calls; it holds no state of its own
beyond its three collaborators, so one instance can serve many
concurrent operations.
"""

from __future__ import annotations

import logging

from catalog.application.dto import (
    AddProductRequest,
    ProductResponse,
    UpdateProductRequest,
)
from catalog.application.mapping import ProductMapper
from catalog.application.validation import ProductValidator
from catalog.domain.exceptions import InvalidReference, ValidationFailed
from catalog.domain.model.predicate import (
    Predicate,
    by_id,
    category_contains,
    name_contains,
)
from catalog.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class ProductService:

    def __init__(
        self,
        product_repo: ProductRepository,
        validator: ProductValidator,
        mapper: ProductMapper,
    ) -> None:
        self._product_repo = product_repo
        self._validator = validator
        self._mapper = mapper

    # --- Queries --------------------------------------------------------------

    async def list_all(self) -> list[ProductResponse]:
        products = await self._product_repo.get_all()
        return [self._mapper.to_response(p) for p in products]

    async def list_by_condition(self, predicate: Predicate) -> list[ProductResponse]:
        logger.debug("Listing products matching %r", predicate)
        products = await self._product_repo.get_all_by_condition(predicate)
        return [self._mapper.to_response(p) for p in products]

    async def get_one_by_condition(
        self, predicate: Predicate
    ) -> ProductResponse | None:
        product = await self._product_repo.get_one_by_condition(predicate)
        if product is None:
            return None
        return self._mapper.to_response(product)

    async def get_by_id(self, product_id: str) -> ProductResponse | None:
        return await self.get_one_by_condition(by_id(product_id))

    async def search(self, text: str) -> list[ProductResponse]:
        """Products whose name or category contains *text*, ignoring case.

        Each product appears once even if it matches on both fields.
        """
        by_name = await self.list_by_condition(name_contains(text))
        by_category = await self.list_by_condition(category_contains(text))

        seen: set[str] = set()
        results: list[ProductResponse] = []
        for response in by_name + by_category:
            if response.id in seen:
                continue
            seen.add(response.id)
            results.append(response)
        return results

    # --- Commands -------------------------------------------------------------

    async def add(self, request: AddProductRequest) -> ProductResponse | None:
        """Validate and store a new product.

        Returns None if storage did not persist the product.
        """
        if request is None:
            raise ValueError("An add request is required")

        result = self._validator.validate_add(request)
        if not result.is_valid:
            logger.warning("Rejected new product: %d validation error(s)", len(result.errors))
            raise ValidationFailed(result.errors)

        stored = await self._product_repo.add(self._mapper.from_add_request(request))
        if stored is None:
            logger.warning("Storage did not persist product %r", request.name)
            return None

        logger.info("Added product %s", stored.id)
        return self._mapper.to_response(stored)

    async def update(self, request: UpdateProductRequest) -> ProductResponse:
        """Overwrite an existing product.

        The existence check runs before validation, so a request against
        an unknown ID is reported as InvalidReference even if it is also
        malformed. If the product disappears between the check and the
        write, InvalidReference is raised as well.
        """
        if request is None:
            raise ValueError("An update request is required")

        existing = await self._product_repo.get_one_by_condition(by_id(request.id))
        if existing is None:
            logger.warning("Update rejected: no product with ID %r", request.id)
            raise InvalidReference(request.id)

        result = self._validator.validate_update(request)
        if not result.is_valid:
            logger.warning(
                "Rejected update of %s: %d validation error(s)",
                request.id,
                len(result.errors),
            )
            raise ValidationFailed(result.errors)

        updated = await self._product_repo.update(
            self._mapper.from_update_request(request)
        )
        if updated is None:
            logger.warning("Product %s vanished before it could be updated", request.id)
            raise InvalidReference(request.id)

        logger.info("Updated product %s", updated.id)
        return self._mapper.to_response(updated)

    async def delete(self, product_id: str) -> bool:
        existing = await self._product_repo.get_one_by_condition(by_id(product_id))
        if existing is None:
            return False

        deleted = await self._product_repo.delete(product_id)
        if deleted:
            logger.info("Deleted product %s", product_id)
        return deleted
