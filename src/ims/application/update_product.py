"""Application service: Update Product use case."""

from __future__ import annotations

from ims.application.dto import ProductDTO
from ims.domain.exceptions import NotFoundError
from ims.domain.model.value_objects import Money, parse_stock_quantity
from ims.domain.repository.unit_of_work import UnitOfWork


class UpdateProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        product_id: int,
        *,
        name: str | None = None,
        description: str | None = None,
        price: str | None = None,
        quantity: str | int | None = None,
    ) -> ProductDTO:
        """Patch the given fields of a product.

        This does NOT affect any existing orders — their items captured a
        price snapshot when they were added.
        """
        new_price = Money.parse(price) if price is not None else None
        new_quantity = parse_stock_quantity(quantity) if quantity is not None else None

        with self._uow:
            product = self._uow.products.get_by_id(product_id)
            if product is None:
                raise NotFoundError(f"Product #{product_id} not found")

            product.update(
                name=name,
                description=description,
                price=new_price,
                quantity=new_quantity,
            )
            self._uow.products.save(product)
            self._uow.commit()

        return ProductDTO.from_domain(product)
