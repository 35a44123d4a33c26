"""Application service: Create Product use case."""

from __future__ import annotations

import logging

from ims.application.dto import ProductDTO
from ims.domain.model.product import Product
from ims.domain.model.value_objects import Money, parse_stock_quantity
from ims.domain.repository.unit_of_work import UnitOfWork

_logger = logging.getLogger(__name__)


class CreateProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        name: str,
        price: str,
        quantity: str | int,
        description: str | None = None,
    ) -> ProductDTO:
        """Add a new, active product to the catalog.

        *price* accepts ``,`` or ``.`` as decimal separator and is stored
        with two decimals; *quantity* must be a non-negative integer.
        """
        product = Product.create(
            name=name,
            price=Money.parse(price),
            quantity=parse_stock_quantity(quantity),
            description=description,
        )

        with self._uow:
            self._uow.products.add(product)
            self._uow.commit()

        _logger.info("Created product #%s '%s'", product.id, product.name)
        return ProductDTO.from_domain(product)
