from __future__ import annotations

import logging

import click

from ims.infrastructure.cli.order_commands import (
    order_add_item,
    order_complete,
    order_create,
    order_delete,
    order_list,
    order_remove_item,
    order_show,
    order_update,
    order_update_item,
)
from ims.infrastructure.cli.product_commands import (
    product_add,
    product_adjust,
    product_delete,
    product_list,
    product_list_all,
    product_pending_orders,
    product_restore,
    product_update,
)
from ims.infrastructure.config import load_settings


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log at DEBUG level.")
def cli(verbose: bool) -> None:
    """IMS — Inventory and order management"""
    level = "DEBUG" if verbose else load_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
order.add_command(order_add_item)
order.add_command(order_complete)
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_remove_item)
order.add_command(order_show)
order.add_command(order_update)
order.add_command(order_update_item)
product.add_command(product_add)
product.add_command(product_adjust)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_list_all)
product.add_command(product_pending_orders)
product.add_command(product_restore)
product.add_command(product_update)
