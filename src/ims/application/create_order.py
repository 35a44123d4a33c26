"""Application service: Create Order use case.

The caller supplies each item's price snapshot; prices are not checked
against the catalog. The order and all its items are written in one
transaction.
"""

from __future__ import annotations

import logging
from datetime import date

from ims.application.dto import OrderDTO, OrderItemSpec
from ims.domain.exceptions import NotFoundError
from ims.domain.model.order import Order, OrderItem, OrderStatus
from ims.domain.model.value_objects import Money, Quantity
from ims.domain.repository.unit_of_work import UnitOfWork

_logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        order_date: date,
        item_specs: list[OrderItemSpec] | None = None,
        status: str | None = None,
    ) -> OrderDTO:
        """Create an order, pending unless another status is given.

        Steps:
        1. Parse every item (quantity, price) before touching the store.
        2. Check that each referenced product exists.
        3. Let the Order aggregate compute the total.
        4. Persist and return a DTO.
        """
        order_status = OrderStatus.parse(status) if status else OrderStatus.PENDING
        items = [
            OrderItem(
                id=None,
                product_id=spec.product_id,
                quantity=Quantity.parse(spec.quantity),
                price=Money.parse(spec.price),
            )
            for spec in item_specs or []
        ]

        with self._uow:
            for product_id in {item.product_id for item in items}:
                if self._uow.products.get_by_id(product_id) is None:
                    raise NotFoundError(f"Product #{product_id} not found")

            order = Order.create(order_date=order_date, items=items, status=order_status)
            self._uow.orders.add(order)
            self._uow.commit()

        _logger.info(
            "Created order #%s with %s item(s), total %s",
            order.id, len(order.items), order.total_price,
        )
        return OrderDTO.from_domain(order)
