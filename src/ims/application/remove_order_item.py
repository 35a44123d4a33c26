"""Application service: Remove Order Item use case."""

from __future__ import annotations

import logging

from ims.domain.exceptions import NotFoundError
from ims.domain.repository.unit_of_work import UnitOfWork

_logger = logging.getLogger(__name__)


class RemoveOrderItemHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int, item_id: int) -> None:
        with self._uow:
            order = self._uow.orders.get_by_id(order_id, for_update=True)
            if order is None:
                raise NotFoundError(f"Order #{order_id} not found")

            order.remove_item(item_id)
            self._uow.orders.save(order)
            self._uow.commit()

        _logger.info(
            "Removed item #%s from order #%s (total %s)",
            item_id, order_id, order.total_price,
        )
