"""Application service: Update Order Item use case."""

from __future__ import annotations

from ims.application.dto import OrderItemDTO
from ims.domain.exceptions import NotFoundError
from ims.domain.model.value_objects import Quantity
from ims.domain.repository.unit_of_work import UnitOfWork


class UpdateOrderItemHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int, item_id: int, quantity: str | int) -> OrderItemDTO:
        """Change the item's quantity (never its price) and the order total."""
        qty = Quantity.parse(quantity)

        with self._uow:
            order = self._uow.orders.get_by_id(order_id, for_update=True)
            if order is None:
                raise NotFoundError(f"Order #{order_id} not found")

            item = order.update_item(item_id, qty)
            self._uow.orders.save(order)
            self._uow.commit()

        return OrderItemDTO.from_domain(order_id, item)
