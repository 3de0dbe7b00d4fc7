"""CLI commands for the Product entity."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import click

from catalog.application.dto import (
    AddProductRequest,
    ProductResponse,
    UpdateProductRequest,
)
from catalog.application.product_service import ProductService
from catalog.domain.exceptions import DomainException, ValidationFailed
from catalog.domain.model.predicate import category_is
from catalog.domain.model.product import Category
from catalog.infrastructure.bootstrap import open_product_service

T = TypeVar("T")


def _run(operation: Callable[[ProductService], Awaitable[T]]) -> T:
    """Run *operation* against a freshly opened service."""
    settings = click.get_current_context().find_root().obj

    async def _main() -> T:
        async with open_product_service(settings) as service:
            return await operation(service)

    try:
        return asyncio.run(_main())
    except ValidationFailed as exc:
        lines = ["Validation failed:"]
        for field, messages in exc.as_dict().items():
            lines.extend(f"  {field}: {message}" for message in messages)
        raise click.ClickException("\n".join(lines))
    except DomainException as exc:
        raise click.ClickException(str(exc))


def _display_products(products: list[ProductResponse]) -> None:
    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<32}  {'Name':<20} {'Category':<15} {'Price':>10} {'Qty':>6}")
    click.echo("-" * 88)
    for p in products:
        price = "-" if p.unit_price is None else f"{p.unit_price:.2f}"
        qty = "-" if p.quantity_in_stock is None else str(p.quantity_in_stock)
        click.echo(
            f"{p.id:<32}  {p.name:<20} {p.category.value:<15} {price:>10} {qty:>6}"
        )


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--category", required=True, help="One of: " + ", ".join(c.value for c in Category))
@click.option("--price", type=float, default=None, help="Unit price (e.g. 25.50).")
@click.option("--quantity", type=int, default=None, help="Quantity in stock.")
def product_add(name: str, category: str, price: float | None, quantity: int | None) -> None:
    """Add a new product to the catalog."""
    request = AddProductRequest(
        name=name, category=category, unit_price=price, quantity_in_stock=quantity
    )
    product = _run(lambda service: service.add(request))

    if product is None:
        raise click.ClickException(f"Product '{name}' could not be stored")
    click.echo(f"Product {product.id} '{product.name}' added")


@click.command("list")
@click.option("--category", default=None, help="Only list products in this category.")
def product_list(category: str | None) -> None:
    """List products in the catalog."""
    if category is None:
        products = _run(lambda service: service.list_all())
    else:
        try:
            wanted = Category.from_name(category)
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="--category")
        products = _run(lambda service: service.list_by_condition(category_is(wanted)))

    _display_products(products)


@click.command("show")
@click.argument("product_id")
def product_show(product_id: str) -> None:
    """Show a single product."""
    product = _run(lambda service: service.get_by_id(product_id))

    if product is None:
        click.echo(f"Product {product_id} not found.")
        return
    _display_products([product])


@click.command("search")
@click.argument("text")
def product_search(text: str) -> None:
    """Find products whose name or category contains TEXT."""
    _display_products(_run(lambda service: service.search(text)))


@click.command("update")
@click.argument("product_id")
@click.option("--name", required=True, help="Product name.")
@click.option("--category", required=True, help="One of: " + ", ".join(c.value for c in Category))
@click.option("--price", type=float, default=None, help="Unit price (e.g. 29.99).")
@click.option("--quantity", type=int, default=None, help="Quantity in stock.")
def product_update(
    product_id: str,
    name: str,
    category: str,
    price: float | None,
    quantity: int | None,
) -> None:
    """Replace a product's details."""
    request = UpdateProductRequest(
        id=product_id,
        name=name,
        category=category,
        unit_price=price,
        quantity_in_stock=quantity,
    )
    product = _run(lambda service: service.update(request))

    click.echo(f"Product {product.id} updated")


@click.command("delete")
@click.argument("product_id")
def product_delete(product_id: str) -> None:
    """Remove a product from the catalog."""
    deleted = _run(lambda service: service.delete(product_id))

    if deleted:
        click.echo(f"Product {product_id} deleted")
    else:
        click.echo(f"Product {product_id} not found.")
