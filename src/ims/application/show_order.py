"""Application service: Show Order use case (query)."""

from __future__ import annotations

from ims.application.dto import (
    OrderDetailDTO,
    OrderItemDetailDTO,
    format_order_date,
    format_timestamp,
)
from ims.domain.exceptions import NotFoundError
from ims.domain.model.order import Order
from ims.domain.model.product import Product
from ims.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> OrderDetailDTO:
        with self._uow:
            order = self._uow.orders.get_by_id(order_id)
            if order is None:
                raise NotFoundError(f"Order #{order_id} not found")

            products: dict[int, Product | None] = {
                product_id: self._uow.products.get_by_id(product_id)
                for product_id in {item.product_id for item in order.items}
            }
        return self._to_dto(order, products)

    @staticmethod
    def _to_dto(order: Order, products: dict[int, Product | None]) -> OrderDetailDTO:
        items = []
        for item in order.items:
            product = products.get(item.product_id)
            items.append(
                OrderItemDetailDTO(
                    id=item.id,  # type: ignore[arg-type]
                    product_id=item.product_id,
                    quantity=item.quantity.value,
                    price=str(item.price),
                    line_total=str(item.line_total),
                    product_name=product.name if product else None,
                    product_description=product.description if product else None,
                    product_price=str(product.price) if product else None,
                    product_quantity=product.quantity if product else None,
                    product_disabled=product.is_disabled if product else False,
                )
            )
        return OrderDetailDTO(
            id=order.id,  # type: ignore[arg-type]
            order_date=format_order_date(order.order_date),
            total_price=str(order.total_price),
            status=order.status.value,
            item_count=order.item_count,
            items=items,
            created_at=format_timestamp(order.created_at),
            updated_at=format_timestamp(order.updated_at),
        )
