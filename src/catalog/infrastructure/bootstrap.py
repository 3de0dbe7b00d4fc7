"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from catalog.application.mapping import ProductMapper
from catalog.application.product_service import ProductService
from catalog.application.validation import ProductValidator
from catalog.domain.exceptions import StorageFailure
from catalog.infrastructure.config import Settings
from catalog.infrastructure.persistence.sql_product_repository import (
    SqlProductRepository,
    create_schema,
)


def database_engine(settings: Settings) -> AsyncEngine:
    try:
        url = make_url(settings.database_url)
        if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        return create_async_engine(url, echo=settings.echo_sql)
    except (SQLAlchemyError, OSError) as exc:
        raise StorageFailure(f"Cannot open database {settings.database_url!r}: {exc}") from exc


def product_service(engine: AsyncEngine) -> ProductService:
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    return ProductService(
        product_repo=SqlProductRepository(session_factory),
        validator=ProductValidator(),
        mapper=ProductMapper(),
    )


@asynccontextmanager
async def open_product_service(settings: Settings) -> AsyncIterator[ProductService]:
    """Yield a ready service; the schema is created on first use."""
    engine = database_engine(settings)
    try:
        await create_schema(engine)
        yield product_service(engine)
    finally:
        await engine.dispose()
