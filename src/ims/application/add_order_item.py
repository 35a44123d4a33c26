"""Application service: Add Order Item use case.

The product's current price is copied into the new item, then the order
total is recomputed from all items, in one transaction. The product row
is locked before the order, as when a product is disabled, so an item
cannot slip in for a product that is being disabled.
"""

from __future__ import annotations

import logging

from ims.application.dto import OrderItemDTO
from ims.domain.exceptions import NotFoundError
from ims.domain.model.value_objects import Quantity
from ims.domain.repository.unit_of_work import UnitOfWork

_logger = logging.getLogger(__name__)


class AddOrderItemHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int, product_id: int, quantity: str | int) -> OrderItemDTO:
        qty = Quantity.parse(quantity)

        with self._uow:
            product = self._uow.products.get_by_id(product_id, for_update=True)
            if product is None:
                raise NotFoundError(f"Product #{product_id} not found")

            order = self._uow.orders.get_by_id(order_id, for_update=True)
            if order is None:
                raise NotFoundError(f"Order #{order_id} not found")

            item = order.add_item(product, qty)
            self._uow.orders.save(order)
            self._uow.commit()

        _logger.info(
            "Added %s x product #%s at %s to order #%s (total %s)",
            qty, product_id, item.price, order_id, order.total_price,
        )
        return OrderItemDTO.from_domain(order_id, item)
