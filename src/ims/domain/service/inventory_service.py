"""Domain service: keeping product stock and order items consistent.

This service coordinates the cross-aggregate operations between the
catalog and the orders. It lives in the domain layer because the rules
are core business rules, not just orchestration. It must run inside the
caller's unit of work so that every step commits or none does.
"""

from __future__ import annotations

import logging

from ims.domain.exceptions import NotFoundError
from ims.domain.model.order import Order
from ims.domain.model.product import Product
from ims.domain.repository.order_repository import OrderRepository
from ims.domain.repository.product_repository import ProductRepository

_logger = logging.getLogger(__name__)


class InventoryService:

    def __init__(
        self,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
    ) -> None:
        self._product_repo = product_repo
        self._order_repo = order_repo

    def restock_for_order(self, order: Order) -> None:
        """Return every line item's quantity to its product's stock.

        Uses a two-phase approach:
          Phase 1 — load and validate: every referenced product must exist.
                    Fails fast before any stock moves.
          Phase 2 — mutate: one atomic increment per product, in ascending
                    product-id order so concurrent completions lock rows in
                    the same sequence.
        """
        # Phase 1: sum quantities per product and check they all exist
        quantities: dict[int, int] = {}
        for item in order.items:
            quantities[item.product_id] = (
                quantities.get(item.product_id, 0) + item.quantity.value
            )
        for product_id in quantities:
            if self._product_repo.get_by_id(product_id) is None:
                raise NotFoundError(f"Product #{product_id} not found")

        # Phase 2: atomic increments
        for product_id in sorted(quantities):
            new_quantity = self._product_repo.adjust_quantity(
                product_id, quantities[product_id]
            )
            if new_quantity is None:
                raise NotFoundError(f"Product #{product_id} not found")
            _logger.debug(
                "Restocked product #%s by %s (now %s)",
                product_id, quantities[product_id], new_quantity,
            )

    def detach_from_open_orders(self, product: Product) -> list[Order]:
        """Remove a product's items from pending and cancelled orders.

        Each touched order has its total recomputed and is saved.
        Completed orders keep their items. Returns the touched orders.
        """
        touched: list[Order] = []
        for order in self._order_repo.find_by_product(product.id):  # type: ignore[arg-type]
            removed = order.remove_items_for_product(product.id)  # type: ignore[arg-type]
            if removed:
                self._order_repo.save(order)
                touched.append(order)
        return touched
