"""Application service: order listing (query)."""

from __future__ import annotations

from datetime import date

from ims.application.dto import OrderDTO, PageDTO
from ims.application.pagination import ListParams, paginate
from ims.domain.exceptions import ValidationError
from ims.domain.repository.order_repository import OrderCriteria
from ims.domain.repository.unit_of_work import UnitOfWork


class ListOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        params: ListParams | None = None,
        *,
        order: str = "desc",
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> PageDTO[OrderDTO]:
        """List orders, optionally within an inclusive order-date range.

        *order* (``asc``/``desc`` by id) applies to page and full listings;
        cursor listings always walk forward by ascending id.
        """
        if order not in ("asc", "desc"):
            raise ValidationError(f"Order must be 'asc' or 'desc', got '{order}'")
        criteria = OrderCriteria(
            date_from=date_from,
            date_to=date_to,
            descending=order == "desc",
        )
        with self._uow:
            return paginate(
                self._uow.orders,
                criteria,
                params or ListParams(),
                OrderDTO.from_domain,
            )
