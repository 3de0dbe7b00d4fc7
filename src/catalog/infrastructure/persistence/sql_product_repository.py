"""SQLAlchemy-backed implementation of ProductRepository."""

from __future__ import annotations

import logging
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from catalog.domain.exceptions import StorageFailure
from catalog.domain.model.predicate import Predicate
from catalog.domain.model.product import Category, Product
from catalog.domain.repository.product_repository import ProductRepository
from catalog.infrastructure.persistence.predicate_sql import to_clause
from catalog.infrastructure.persistence.tables import Base, ProductRow

logger = logging.getLogger(__name__)


async def create_schema(engine: AsyncEngine) -> None:
    """Create the products table if it does not exist yet."""
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except SQLAlchemyError as exc:
        logger.exception("Could not create the product schema")
        raise StorageFailure(f"Could not create the product schema: {exc}") from exc


class SqlProductRepository(ProductRepository):

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    # --- ProductRepository interface ------------------------------------------

    async def get_all(self) -> list[Product]:
        async with self._transaction() as session:
            rows = await session.scalars(select(ProductRow).order_by(ProductRow.pk))
            return [_to_entity(row) for row in rows]

    async def get_all_by_condition(self, predicate: Predicate) -> list[Product]:
        stmt = select(ProductRow).where(to_clause(predicate)).order_by(ProductRow.pk)
        async with self._transaction() as session:
            rows = await session.scalars(stmt)
            return [_to_entity(row) for row in rows]

    async def get_one_by_condition(self, predicate: Predicate) -> Product | None:
        stmt = (
            select(ProductRow)
            .where(to_clause(predicate))
            .order_by(ProductRow.pk)
            .limit(1)
        )
        async with self._transaction() as session:
            row = (await session.scalars(stmt)).first()
            return None if row is None else _to_entity(row)

    async def add(self, product: Product) -> Product | None:
        row = ProductRow(
            id=product.id or uuid.uuid4().hex,
            name=product.name,
            category=product.category.value,
            unit_price=product.unit_price,
            quantity_in_stock=product.quantity_in_stock,
        )
        async with self._transaction() as session:
            session.add(row)
            await session.flush()
            return _to_entity(row)

    async def update(self, product: Product) -> Product | None:
        stmt = select(ProductRow).where(ProductRow.id == product.id)
        async with self._transaction() as session:
            row = (await session.scalars(stmt)).first()
            if row is None:
                return None
            row.name = product.name
            row.category = product.category.value
            row.unit_price = product.unit_price
            row.quantity_in_stock = product.quantity_in_stock
            await session.flush()
            return _to_entity(row)

    async def delete(self, product_id: str) -> bool:
        stmt = delete(ProductRow).where(ProductRow.id == product_id)
        async with self._transaction() as session:
            result = await session.execute(stmt)
            return result.rowcount == 1

    # --- Session helpers ------------------------------------------------------

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[AsyncSession]:
        """One session and one transaction per repository call."""
        try:
            async with self._session_factory() as session, session.begin():
                yield session
        except SQLAlchemyError as exc:
            logger.exception("Product storage operation failed")
            raise StorageFailure(f"Product storage operation failed: {exc}") from exc


def _to_entity(row: ProductRow) -> Product:
    return Product(
        id=row.id,
        name=row.name,
        category=Category.from_name(row.category),
        unit_price=row.unit_price,
        quantity_in_stock=row.quantity_in_stock,
    )
