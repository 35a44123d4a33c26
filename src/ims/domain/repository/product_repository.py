"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory)
live in the infrastructure layer and the tests.
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass

from ims.domain.model.product import Product, ProductStatus
from ims.domain.repository.listing import ListableRepository


@dataclass(frozen=True)
class ProductCriteria:
    """Filter for product listings.

    ``status=None`` matches every product. ``search`` is a case-insensitive
    substring matched against name or description; blank means no filter.
    """

    status: ProductStatus | None = ProductStatus.ACTIVE
    search: str | None = None

    @property
    def search_term(self) -> str | None:
        term = (self.search or "").strip()
        return term or None


class ProductRepository(ListableRepository[Product, ProductCriteria]):
    """Default ordering for windows and full scans is newest first."""

    @abstractmethod
    def get_by_id(self, product_id: int, *, for_update: bool = False) -> Product | None:
        """Return a product by its ID, or None if not found.

        ``for_update`` locks the row until the unit of work ends.
        """

    @abstractmethod
    def add(self, product: Product) -> None:
        """Insert a new product and assign its ID."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist changes to an existing product."""

    @abstractmethod
    def adjust_quantity(self, product_id: int, delta: int) -> int | None:
        """Atomically set ``quantity = quantity + delta`` clamped to
        ``0..MAX_QUANTITY``.

        Returns the new quantity, or None if the product does not exist.
        Must be a single conditional update in the store, never a
        read followed by a write.
        """
