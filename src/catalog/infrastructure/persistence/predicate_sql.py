"""Translate domain predicates into SQLAlchemy boolean clauses."""

from __future__ import annotations

from sqlalchemy import ColumnElement, String, cast, false, or_

from catalog.domain.model.predicate import (
    AnyOf,
    FieldContains,
    FieldEquals,
    Predicate,
    plain_value,
)
from catalog.infrastructure.persistence.tables import ProductRow

_COLUMNS = {
    "id": ProductRow.id,
    "name": ProductRow.name,
    "category": ProductRow.category,
    "unit_price": ProductRow.unit_price,
    "quantity_in_stock": ProductRow.quantity_in_stock,
}
_TEXT_FIELDS = {"id", "name", "category"}


def to_clause(predicate: Predicate) -> ColumnElement[bool]:
    if isinstance(predicate, FieldEquals):
        column = _COLUMNS[predicate.field]
        value = plain_value(predicate.value)
        if value is None:
            return column.is_(None)
        return column == value

    if isinstance(predicate, FieldContains):
        column = _COLUMNS[predicate.field]
        if predicate.field not in _TEXT_FIELDS:
            column = cast(column, String)
        return column.icontains(predicate.text, autoescape=True)

    if isinstance(predicate, AnyOf):
        if not predicate.predicates:
            return false()
        return or_(*(to_clause(p) for p in predicate.predicates))

    raise TypeError(f"Unsupported predicate type: {type(predicate).__name__}")
