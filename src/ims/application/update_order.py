"""Application service: Update Order use case.

Only the order date and the status can be patched; the total is always
derived from the items. Status changes follow the order state machine,
so a pending order can be cancelled here but not completed.
"""

from __future__ import annotations

import logging
from datetime import date

from ims.application.dto import OrderDTO
from ims.domain.exceptions import NotFoundError
from ims.domain.model.order import OrderStatus
from ims.domain.repository.unit_of_work import UnitOfWork

_logger = logging.getLogger(__name__)


class UpdateOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        order_id: int,
        order_date: date | None = None,
        status: str | None = None,
    ) -> OrderDTO:
        target = OrderStatus.parse(status) if status else None

        with self._uow:
            order = self._uow.orders.get_by_id(order_id, for_update=True)
            if order is None:
                raise NotFoundError(f"Order #{order_id} not found")

            if order_date is not None:
                order.reschedule(order_date)
            if target is not None:
                order.change_status(target)

            self._uow.orders.save(order)
            self._uow.commit()

        if target is not None:
            _logger.info("Order #%s is now %s", order_id, order.status.value)
        return OrderDTO.from_domain(order)
