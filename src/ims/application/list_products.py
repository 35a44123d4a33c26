"""Application service: product listing and search (queries)."""

from __future__ import annotations

from ims.application.dto import PageDTO, ProductDTO
from ims.application.pagination import ListParams, paginate
from ims.domain.model.product import ProductStatus
from ims.domain.repository.product_repository import ProductCriteria
from ims.domain.repository.unit_of_work import UnitOfWork


class ListProductsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        params: ListParams | None = None,
        *,
        status: ProductStatus | None = ProductStatus.ACTIVE,
        search: str | None = None,
    ) -> PageDTO[ProductDTO]:
        """List products with the given status (None for all of them)."""
        criteria = ProductCriteria(status=status, search=search)
        with self._uow:
            return paginate(
                self._uow.products,
                criteria,
                params or ListParams(),
                ProductDTO.from_domain,
            )

    def list_all(self) -> list[ProductDTO]:
        """Every active product, newest first."""
        return self.handle().items
