"""Application service: Adjust Quantity use case (manual stock correction)."""

from __future__ import annotations

import logging

from ims.application.dto import StockDTO
from ims.domain.exceptions import NotFoundError, ValidationError
from ims.domain.model.value_objects import check_quantity_limit
from ims.domain.repository.unit_of_work import UnitOfWork

_logger = logging.getLogger(__name__)


class AdjustQuantityHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: int, delta: int) -> StockDTO:
        """Add *delta* (possibly negative) to the stock, clamped to the
        range 0..MAX_QUANTITY.

        The repository performs this as one conditional update, so
        concurrent adjustments of the same product cannot lose writes.
        """
        if isinstance(delta, bool) or not isinstance(delta, int):
            raise ValidationError("Delta must be an integer")
        check_quantity_limit(delta)

        with self._uow:
            new_quantity = self._uow.products.adjust_quantity(product_id, delta)
            if new_quantity is None:
                raise NotFoundError(f"Product #{product_id} not found")
            self._uow.commit()

        _logger.info(
            "Adjusted stock of product #%s by %+d (now %s)",
            product_id, delta, new_quantity,
        )
        return StockDTO(id=product_id, quantity=new_quantity)
