"""Abstract unit of work: one transaction over both repositories.

Usage::

    with uow:
        ...
        uow.commit()

Leaving the block without ``commit()`` (including through an exception)
rolls every change back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ims.domain.repository.order_repository import OrderRepository
from ims.domain.repository.product_repository import ProductRepository


class UnitOfWork(ABC):

    products: ProductRepository
    orders: OrderRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every change since the block started durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted changes; a no-op after commit."""
