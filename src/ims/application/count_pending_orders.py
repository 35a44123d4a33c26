"""Application service: how many pending orders still use a product (query).

Shown as a warning before a product is disabled.
"""

from __future__ import annotations

from ims.domain.repository.unit_of_work import UnitOfWork


class CountPendingOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: int) -> int:
        with self._uow:
            return self._uow.orders.count_pending_with_product(product_id)
