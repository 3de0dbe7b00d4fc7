import click

from catalog.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_search,
    product_show,
    product_update,
)
from catalog.infrastructure.config import Settings
from catalog.infrastructure.log_config import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Catalog — Product Catalog Service"""
    settings = Settings()
    configure_logging(settings.log_level)
    ctx.obj = settings


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_search)
product.add_command(product_show)
product.add_command(product_update)
