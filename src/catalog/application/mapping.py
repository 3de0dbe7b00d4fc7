"""Transformation pipeline between request/response DTOs and the entity.

Field-by-field copies with one rule: an Add request never carries an ID
into the entity (storage assigns it), while an Update request does
(it locates the row). Input is assumed to have passed validation.
"""

from __future__ import annotations

from catalog.application.dto import (
    AddProductRequest,
    ProductResponse,
    UpdateProductRequest,
)
from catalog.domain.model.product import Category, Product


class ProductMapper:

    def from_add_request(self, request: AddProductRequest) -> Product:
        return Product(
            id=None,
            name=request.name,
            category=_as_category(request.category),
            unit_price=_as_float(request.unit_price),
            quantity_in_stock=request.quantity_in_stock,
        )

    def from_update_request(self, request: UpdateProductRequest) -> Product:
        return Product(
            id=request.id,
            name=request.name,
            category=_as_category(request.category),
            unit_price=_as_float(request.unit_price),
            quantity_in_stock=request.quantity_in_stock,
        )

    def to_response(self, product: Product) -> ProductResponse:
        return ProductResponse(
            id=product.id,  # type: ignore[arg-type]
            name=product.name,
            category=product.category,
            unit_price=product.unit_price,
            quantity_in_stock=product.quantity_in_stock,
        )


def _as_category(value: Category | str) -> Category:
    if isinstance(value, Category):
        return value
    return Category.from_name(value)


def _as_float(value: float | None) -> float | None:
    return None if value is None else float(value)
