"""Application service: Delete Order use case.

A hard delete: the order and its items disappear. No status is checked
and no stock is given back, so deleting a completed order keeps the
stock it returned.
"""

from __future__ import annotations

import logging

from ims.domain.exceptions import NotFoundError
from ims.domain.model.order import OrderStatus
from ims.domain.repository.unit_of_work import UnitOfWork

_logger = logging.getLogger(__name__)


class DeleteOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> None:
        with self._uow:
            order = self._uow.orders.get_by_id(order_id, for_update=True)
            if order is None:
                raise NotFoundError(f"Order #{order_id} not found")

            self._uow.orders.delete(order_id)
            self._uow.commit()

        if order.status is OrderStatus.COMPLETED:
            _logger.warning(
                "Deleted completed order #%s; its restocked quantities were kept",
                order_id,
            )
        else:
            _logger.info("Deleted order #%s", order_id)
