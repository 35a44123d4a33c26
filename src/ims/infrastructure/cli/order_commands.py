"""CLI commands for the Order aggregate."""

from __future__ import annotations

from datetime import datetime

import click

from ims.application.add_order_item import AddOrderItemHandler
from ims.application.complete_order import CompleteOrderHandler
from ims.application.create_order import CreateOrderHandler
from ims.application.delete_order import DeleteOrderHandler
from ims.application.dto import OrderItemSpec
from ims.application.list_orders import ListOrdersHandler
from ims.application.pagination import ListParams
from ims.application.remove_order_item import RemoveOrderItemHandler
from ims.application.show_order import ShowOrderHandler
from ims.application.update_order import UpdateOrderHandler
from ims.application.update_order_item import UpdateOrderItemHandler
from ims.domain.exceptions import DomainException
from ims.domain.model.order import OrderStatus
from ims.infrastructure.bootstrap import unit_of_work
from ims.infrastructure.cli.common import echo_pagination, pagination_options

_DATE = click.DateTime(formats=["%Y-%m-%d"])
_STATUSES = [s.value for s in OrderStatus]


def _parse_items(raw: tuple[str, ...]) -> list[OrderItemSpec]:
    """Parse ('1:3:9.90', '2:1:15,00') into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for entry in raw:
        parts = entry.strip().split(":")
        if len(parts) != 3:
            raise click.BadParameter(
                f"Invalid item format '{entry}'. Expected 'ProductID:Quantity:Price'."
            )
        product_id, qty, price = parts
        try:
            pid = int(product_id)
        except ValueError:
            raise click.BadParameter(f"Invalid product ID '{product_id}'.")
        specs.append(OrderItemSpec(product_id=pid, quantity=qty.strip(), price=price.strip()))
    return specs


def _as_date(value: datetime | None):
    return value.date() if value is not None else None


@click.command("create")
@click.option(
    "--date", "order_date", required=True, type=_DATE, help="Order date (YYYY-MM-DD)."
)
@click.option(
    "--status",
    type=click.Choice(_STATUSES),
    default=None,
    help="Initial status (default pending).",
)
@click.option(
    "--item", "items", multiple=True, help="Item as 'ProductID:Quantity:Price'; repeatable."
)
def order_create(order_date: datetime, status: str | None, items: tuple[str, ...]) -> None:
    """Create a new order."""
    specs = _parse_items(items)

    handler = CreateOrderHandler(unit_of_work())

    try:
        dto = handler.handle(order_date=order_date.date(), item_specs=specs, status=status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} created  (status={dto.status})")
    click.echo(f"Date:  {dto.order_date}")
    click.echo(f"Total: {dto.total_price}")


def _display_order(dto) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Date:     {dto.order_date}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()

    click.echo(f"  {'Item':<6} {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*54}")
    for item in dto.items:
        name = item.product_name or f"#{item.product_id}"
        if item.product_disabled:
            name = f"{name} (disabled)"
        click.echo(
            f"  {item.id:<6} {name[:20]:<20} {item.quantity:>5} "
            f"{item.price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*54}")
    click.echo(f"  {'Units':<27} {dto.item_count:>27}")
    click.echo(f"  {'Order Total':<27} {dto.total_price:>27}")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(unit_of_work())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option(
    "--order",
    "direction",
    type=click.Choice(["asc", "desc"]),
    default="desc",
    show_default=True,
    help="Sort by ID.",
)
@click.option("--from", "date_from", type=_DATE, default=None, help="First order date (inclusive).")
@click.option("--to", "date_to", type=_DATE, default=None, help="Last order date (inclusive).")
@pagination_options
def order_list(
    direction: str,
    date_from: datetime | None,
    date_to: datetime | None,
    cursor: int | None,
    page: int | None,
    limit: int,
) -> None:
    """List orders."""
    handler = ListOrdersHandler(unit_of_work())

    try:
        result = handler.handle(
            ListParams(cursor=cursor, page=page, limit=limit),
            order=direction,
            date_from=_as_date(date_from),
            date_to=_as_date(date_to),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.items:
        click.echo("No orders found.")
    else:
        click.echo(f"{'ID':<6} {'Date':<10} {'Status':<10} {'Total':>12}")
        click.echo("-" * 41)
        for o in result.items:
            click.echo(f"{o.id:<6} {o.order_date:<10} {o.status:<10} {o.total_price:>12}")
    echo_pagination(result)


@click.command("update")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option(
    "--date", "order_date", type=_DATE, default=None, help="New order date (YYYY-MM-DD)."
)
@click.option("--status", type=click.Choice(_STATUSES), default=None, help="New status.")
def order_update(order_id: int, order_date: datetime | None, status: str | None) -> None:
    """Change an order's date or status."""
    handler = UpdateOrderHandler(unit_of_work())

    try:
        dto = handler.handle(order_id, order_date=_as_date(order_date), status=status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} updated  (date={dto.order_date}, status={dto.status})")


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
def order_delete(order_id: int) -> None:
    """Delete an order and its items."""
    handler = DeleteOrderHandler(unit_of_work())

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} deleted.")


@click.command("add-item")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
@click.option("--quantity", required=True, help="Units to add.")
def order_add_item(order_id: int, product_id: int, quantity: str) -> None:
    """Add a product to a pending order at its current price."""
    handler = AddOrderItemHandler(unit_of_work())

    try:
        item = handler.handle(order_id, product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Item #{item.id} added to order #{order_id}: "
        f"{item.quantity} x {item.price} = {item.line_total}"
    )


@click.command("update-item")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--item", "item_id", required=True, type=int, help="Item ID.")
@click.option("--quantity", required=True, help="New quantity.")
def order_update_item(order_id: int, item_id: int, quantity: str) -> None:
    """Change the quantity of an item in a pending order."""
    handler = UpdateOrderItemHandler(unit_of_work())

    try:
        item = handler.handle(order_id, item_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item #{item.id} now {item.quantity} x {item.price} = {item.line_total}")


@click.command("remove-item")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--item", "item_id", required=True, type=int, help="Item ID.")
def order_remove_item(order_id: int, item_id: int) -> None:
    """Remove an item from a pending order."""
    handler = RemoveOrderItemHandler(unit_of_work())

    try:
        handler.handle(order_id, item_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item #{item_id} removed from order #{order_id}.")


@click.command("complete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to complete.")
def order_complete(order_id: int) -> None:
    """Complete a pending order (returns its items to stock)."""
    handler = CompleteOrderHandler(unit_of_work())

    try:
        handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} completed — items returned to stock.")
