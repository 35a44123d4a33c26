"""Application service: Restore Product use case.

Items removed from orders when the product was disabled stay removed.
"""

from __future__ import annotations

import logging

from ims.domain.exceptions import NotFoundError
from ims.domain.repository.unit_of_work import UnitOfWork

_logger = logging.getLogger(__name__)


class RestoreProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: int) -> None:
        with self._uow:
            product = self._uow.products.get_by_id(product_id)
            if product is None:
                raise NotFoundError(f"Product #{product_id} not found")

            product.restore()
            self._uow.products.save(product)
            self._uow.commit()

        _logger.info("Restored product #%s", product_id)
