"""Application service: Disable Product use case (the catalog "delete").

Products are never physically removed. Before the flag flips, the
product's line items are taken out of pending and cancelled orders
(their totals recomputed); completed orders keep their history. The
scan, the cleanup and the flag flip commit together or not at all.
"""

from __future__ import annotations

import logging

from ims.domain.exceptions import NotFoundError
from ims.domain.repository.unit_of_work import UnitOfWork
from ims.domain.service.inventory_service import InventoryService

_logger = logging.getLogger(__name__)


class DisableProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: int) -> None:
        with self._uow:
            product = self._uow.products.get_by_id(product_id, for_update=True)
            if product is None:
                raise NotFoundError(f"Product #{product_id} not found")

            svc = InventoryService(self._uow.products, self._uow.orders)
            touched = svc.detach_from_open_orders(product)

            product.disable()
            self._uow.products.save(product)
            self._uow.commit()

        _logger.info(
            "Disabled product #%s; removed its items from %s open order(s)",
            product_id, len(touched),
        )
