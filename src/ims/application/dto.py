"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world. Money crosses as a
two-decimal string and order dates as ``DD/MM/YY``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Generic, TypeVar, Union

from ims.domain.model.order import Order, OrderItem
from ims.domain.model.product import Product

T = TypeVar("T")


def format_order_date(value: date) -> str:
    """``2024-03-05`` -> ``"05/03/24"``."""
    return value.strftime("%d/%m/%y")


def format_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.strftime("%Y-%m-%d %H:%M UTC")


# --- Input --------------------------------------------------------------------


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: one line item supplied with a new order, price included."""

    product_id: int
    quantity: str | int
    price: str


# --- Output -------------------------------------------------------------------


@dataclass(frozen=True)
class ProductDTO:
    id: int
    name: str
    description: str | None
    price: str
    quantity: int
    is_disabled: bool
    created_at: str | None
    updated_at: str | None

    @staticmethod
    def from_domain(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,  # type: ignore[arg-type]
            name=product.name,
            description=product.description,
            price=str(product.price),
            quantity=product.quantity,
            is_disabled=product.is_disabled,
            created_at=format_timestamp(product.created_at),
            updated_at=format_timestamp(product.updated_at),
        )


@dataclass(frozen=True)
class StockDTO:
    """Output of a manual stock adjustment."""

    id: int
    quantity: int


@dataclass(frozen=True)
class OrderDTO:
    id: int
    order_date: str  # DD/MM/YY
    total_price: str
    status: str
    created_at: str | None
    updated_at: str | None

    @staticmethod
    def from_domain(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            order_date=format_order_date(order.order_date),
            total_price=str(order.total_price),
            status=order.status.value,
            created_at=format_timestamp(order.created_at),
            updated_at=format_timestamp(order.updated_at),
        )


@dataclass(frozen=True)
class OrderItemDTO:
    id: int
    order_id: int
    product_id: int
    quantity: int
    price: str  # snapshot taken when the item was added
    line_total: str

    @staticmethod
    def from_domain(order_id: int, item: OrderItem) -> OrderItemDTO:
        return OrderItemDTO(
            id=item.id,  # type: ignore[arg-type]
            order_id=order_id,
            product_id=item.product_id,
            quantity=item.quantity.value,
            price=str(item.price),
            line_total=str(item.line_total),
        )


@dataclass(frozen=True)
class OrderItemDetailDTO:
    """A line item joined with its product's *current* catalog fields."""

    id: int
    product_id: int
    quantity: int
    price: str
    line_total: str
    product_name: str | None
    product_description: str | None
    product_price: str | None
    product_quantity: int | None
    product_disabled: bool


@dataclass(frozen=True)
class OrderDetailDTO:
    id: int
    order_date: str
    total_price: str
    status: str
    item_count: int
    items: list[OrderItemDetailDTO]
    created_at: str | None
    updated_at: str | None


# --- Pagination ---------------------------------------------------------------


@dataclass(frozen=True)
class CursorPagination:
    next_cursor: int | None
    has_more: bool


@dataclass(frozen=True)
class OffsetPagination:
    page: int
    limit: int
    total: int
    total_pages: int
    has_more: bool


Pagination = Union[CursorPagination, OffsetPagination, None]


@dataclass(frozen=True)
class PageDTO(Generic[T]):
    """``{items, pagination}``; pagination is None for a full scan."""

    items: list[T]
    pagination: Pagination = None
