"""Application service: Complete Order use case.

Orchestrates the domain service (restocking) and the Order aggregate
(state transition). Every item's quantity goes back into its product's
stock and the order becomes completed; if any product is missing the
whole transaction rolls back and no stock moves.
"""

from __future__ import annotations

import logging

from ims.domain.exceptions import NotFoundError
from ims.domain.repository.unit_of_work import UnitOfWork
from ims.domain.service.inventory_service import InventoryService

_logger = logging.getLogger(__name__)


class CompleteOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> None:
        with self._uow:
            order = self._uow.orders.get_by_id(order_id, for_update=True)
            if order is None:
                raise NotFoundError(f"Order #{order_id} not found")

            # Transition first: it rejects non-pending and empty orders
            order.complete()

            svc = InventoryService(self._uow.products, self._uow.orders)
            svc.restock_for_order(order)

            self._uow.orders.save(order)
            self._uow.commit()

        _logger.info(
            "Completed order #%s; restocked %s unit(s)", order_id, order.item_count
        )
