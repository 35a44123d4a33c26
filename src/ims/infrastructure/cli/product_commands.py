"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from ims.application.adjust_quantity import AdjustQuantityHandler
from ims.application.count_pending_orders import CountPendingOrdersHandler
from ims.application.create_product import CreateProductHandler
from ims.application.disable_product import DisableProductHandler
from ims.application.dto import ProductDTO
from ims.application.list_products import ListProductsHandler
from ims.application.pagination import ListParams
from ims.application.restore_product import RestoreProductHandler
from ims.application.update_product import UpdateProductHandler
from ims.domain.exceptions import DomainException
from ims.domain.model.product import ProductStatus
from ims.infrastructure.bootstrap import unit_of_work
from ims.infrastructure.cli.common import echo_pagination, pagination_options

_STATUS_FILTERS = {
    "active": ProductStatus.ACTIVE,
    "disabled": ProductStatus.DISABLED,
    "all": None,
}


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 9.90 or 9,90).")
@click.option("--quantity", required=True, help="Units in stock.")
@click.option("--description", default=None, help="Optional description.")
def product_add(name: str, price: str, quantity: str, description: str | None) -> None:
    """Add a new product to the catalog."""
    handler = CreateProductHandler(unit_of_work())

    try:
        product = handler.handle(
            name=name, price=price, quantity=quantity, description=description
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' added at {product.price} "
        f"({product.quantity} in stock)"
    )


@click.command("list")
@click.option(
    "--status",
    type=click.Choice(sorted(_STATUS_FILTERS)),
    default="active",
    show_default=True,
    help="Which products to list.",
)
@click.option("--search", default=None, help="Match name or description (case-insensitive).")
@pagination_options
def product_list(
    status: str,
    search: str | None,
    cursor: int | None,
    page: int | None,
    limit: int,
) -> None:
    """List products in the catalog."""
    handler = ListProductsHandler(unit_of_work())

    try:
        result = handler.handle(
            ListParams(cursor=cursor, page=page, limit=limit),
            status=_STATUS_FILTERS[status],
            search=search,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _print_products(result.items)
    echo_pagination(result)


def _print_products(products: list[ProductDTO]) -> None:
    if not products:
        click.echo("No products found.")
        return
    click.echo(f"{'ID':<6} {'Name':<24} {'Price':>10} {'Qty':>6}  Status")
    click.echo("-" * 58)
    for p in products:
        state = "disabled" if p.is_disabled else "active"
        click.echo(f"{p.id:<6} {p.name[:24]:<24} {p.price:>10} {p.quantity:>6}  {state}")


@click.command("list-all")
def product_list_all() -> None:
    """List every active product, newest first, without paging."""
    handler = ListProductsHandler(unit_of_work())

    try:
        products = handler.list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _print_products(products)


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--description", default=None, help="New description (empty to clear).")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--quantity", default=None, help="New stock level.")
def product_update(
    product_id: int,
    name: str | None,
    description: str | None,
    price: str | None,
    quantity: str | None,
) -> None:
    """Update fields of a product."""
    handler = UpdateProductHandler(unit_of_work())

    try:
        product = handler.handle(
            product_id,
            name=name,
            description=description,
            price=price,
            quantity=quantity,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} updated: '{product.name}' at {product.price} "
        f"({product.quantity} in stock)"
    )


@click.command("delete")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_delete(product_id: int) -> None:
    """Disable a product (removes it from pending and cancelled orders)."""
    handler = DisableProductHandler(unit_of_work())

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} disabled.")


@click.command("restore")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_restore(product_id: int) -> None:
    """Re-enable a disabled product."""
    handler = RestoreProductHandler(unit_of_work())

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} restored.")


@click.command("adjust")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--delta", required=True, type=int, help="Units to add (negative to remove).")
def product_adjust(product_id: int, delta: int) -> None:
    """Correct the stock level by hand (never goes below zero)."""
    handler = AdjustQuantityHandler(unit_of_work())

    try:
        stock = handler.handle(product_id, delta)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{stock.id} now has {stock.quantity} in stock.")


@click.command("pending-orders")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_pending_orders(product_id: int) -> None:
    """Count pending orders that still hold this product."""
    handler = CountPendingOrdersHandler(unit_of_work())

    try:
        count = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} is in {count} pending order(s).")
