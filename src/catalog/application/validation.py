"""Validation pipeline for product write requests.

Rules are checked in field order and every violation is collected, so a
caller sees all problems with a request at once. Validation is pure: it
never touches storage.
"""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import Any

from catalog.application.dto import AddProductRequest, UpdateProductRequest
from catalog.domain.exceptions import FieldError
from catalog.domain.model.product import Category

MAX_UNIT_PRICE = sys.float_info.max
MAX_QUANTITY_IN_STOCK = 2**31 - 1


@dataclass(frozen=True)
class ValidationResult:
    errors: tuple[FieldError, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors


class ProductValidator:
    """Rule sets for the Add and Update requests."""

    def validate_add(self, request: AddProductRequest) -> ValidationResult:
        return ValidationResult(tuple(self._common_errors(request)))

    def validate_update(self, request: UpdateProductRequest) -> ValidationResult:
        errors: list[FieldError] = []
        if not _has_text(request.id):
            errors.append(FieldError("id", "Product ID is required"))
        errors.extend(self._common_errors(request))
        return ValidationResult(tuple(errors))

    # --- Rules ----------------------------------------------------------------

    def _common_errors(
        self, request: AddProductRequest | UpdateProductRequest
    ) -> list[FieldError]:
        errors: list[FieldError] = []

        if not _has_text(request.name):
            errors.append(FieldError("name", "Product name is required"))

        if not _is_category(request.category):
            allowed = ", ".join(c.value for c in Category)
            errors.append(
                FieldError("category", f"Category must be one of: {allowed}")
            )

        price = request.unit_price
        if price is not None:
            if not _is_number(price):
                errors.append(FieldError("unit_price", "Unit price must be a number"))
            elif not _within_price_range(price):
                errors.append(
                    FieldError(
                        "unit_price",
                        f"Unit price must be between 0 and {MAX_UNIT_PRICE}",
                    )
                )

        quantity = request.quantity_in_stock
        if quantity is not None:
            if isinstance(quantity, bool) or not isinstance(quantity, int):
                errors.append(
                    FieldError("quantity_in_stock", "Quantity in stock must be an integer")
                )
            elif not 0 <= quantity <= MAX_QUANTITY_IN_STOCK:
                errors.append(
                    FieldError(
                        "quantity_in_stock",
                        f"Quantity in stock must be between 0 and {MAX_QUANTITY_IN_STOCK}",
                    )
                )

        return errors


def _has_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _is_category(value: Any) -> bool:
    if isinstance(value, Category):
        return True
    if not isinstance(value, str):
        return False
    try:
        Category.from_name(value)
    except ValueError:
        return False
    return True


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _within_price_range(value: int | float) -> bool:
    try:
        price = float(value)
    except OverflowError:
        return False
    return not math.isnan(price) and 0 <= price <= MAX_UNIT_PRICE
