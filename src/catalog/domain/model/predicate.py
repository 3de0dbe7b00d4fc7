"""Composable query predicates over the Product entity.

A predicate says *which* products a caller wants without saying *how*
storage finds them. Every predicate can be evaluated in memory with
``matches()``; repositories backed by a query language translate the
same objects into their own native form instead.

Predicates are immutable and have no side effects, so they can be
shared freely between concurrent queries.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any

from catalog.domain.model.product import PRODUCT_FIELDS, Category, Product


def plain_value(value: Any) -> Any:
    """Reduce enum members to the scalar that storage and the wire use."""
    if isinstance(value, Enum):
        return value.value
    return value


def _check_field(field: str) -> None:
    if field not in PRODUCT_FIELDS:
        raise ValueError(
            f"Unknown product field {field!r}; expected one of {', '.join(PRODUCT_FIELDS)}"
        )


class Predicate(ABC):
    """A boolean condition over a Product."""

    @abstractmethod
    def matches(self, product: Product) -> bool:
        """Return True if *product* satisfies the condition."""

    def __or__(self, other: Predicate) -> AnyOf:
        if not isinstance(other, Predicate):
            return NotImplemented
        return AnyOf.of(self, other)


@dataclass(frozen=True)
class FieldEquals(Predicate):
    field: str
    value: Any

    def __post_init__(self) -> None:
        _check_field(self.field)

    def matches(self, product: Product) -> bool:
        return plain_value(getattr(product, self.field)) == plain_value(self.value)


@dataclass(frozen=True)
class FieldContains(Predicate):
    """Case-insensitive substring match on the textual form of a field."""

    field: str
    text: str

    def __post_init__(self) -> None:
        _check_field(self.field)

    def matches(self, product: Product) -> bool:
        current = plain_value(getattr(product, self.field))
        if current is None:
            return False
        return self.text.lower() in str(current).lower()


@dataclass(frozen=True)
class AnyOf(Predicate):
    """Logical union: holds when at least one member holds."""

    predicates: tuple[Predicate, ...]

    @classmethod
    def of(cls, *predicates: Predicate) -> AnyOf:
        flat: list[Predicate] = []
        for predicate in predicates:
            if isinstance(predicate, AnyOf):
                flat.extend(predicate.predicates)
            else:
                flat.append(predicate)
        return cls(tuple(flat))

    def matches(self, product: Product) -> bool:
        return any(p.matches(product) for p in self.predicates)


# --- Shorthands used by the service and the CLI -------------------------------


def by_id(product_id: str) -> FieldEquals:
    return FieldEquals("id", product_id)


def category_is(category: Category) -> FieldEquals:
    return FieldEquals("category", category)


def name_contains(text: str) -> FieldContains:
    return FieldContains("name", text)


def category_contains(text: str) -> FieldContains:
    return FieldContains("category", text)
