"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass
from datetime import date

from ims.domain.model.order import Order
from ims.domain.repository.listing import ListableRepository


@dataclass(frozen=True)
class OrderCriteria:
    """Filter for order listings; date bounds are inclusive calendar dates."""

    date_from: date | None = None
    date_to: date | None = None
    descending: bool = True


class OrderRepository(ListableRepository[Order, OrderCriteria]):
    """Windows and full scans are ordered by id, direction per criteria."""

    @abstractmethod
    def get_by_id(self, order_id: int, *, for_update: bool = False) -> Order | None:
        """Return an order with its items, or None if not found.

        ``for_update`` locks the order row until the transaction ends.
        """

    @abstractmethod
    def add(self, order: Order) -> None:
        """Insert a new order with its items and assign IDs."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist an existing order and synchronise its line items.

        Items without an ID are inserted (and receive one), items missing
        from the aggregate are deleted, the rest are updated.
        """

    @abstractmethod
    def delete(self, order_id: int) -> bool:
        """Remove an order and its items; False if it did not exist."""

    @abstractmethod
    def find_by_product(self, product_id: int) -> list[Order]:
        """Return every order holding at least one item of the product."""

    @abstractmethod
    def count_pending_with_product(self, product_id: int) -> int:
        """Count distinct pending orders with an item of an *active* product."""
