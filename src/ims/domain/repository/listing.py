"""Listing contract shared by the product and order repositories.

The application layer's paginator drives any repository implementing
``ListableRepository``; each repository decides how its rows are ordered
and filtered.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T = TypeVar("T")
F = TypeVar("F")


class ListableRepository(ABC, Generic[T, F]):

    @abstractmethod
    def list_after(self, criteria: F, after_id: int, limit: int) -> list[T]:
        """Return up to *limit* records with ``id > after_id``, ascending by id."""

    @abstractmethod
    def list_window(self, criteria: F, offset: int, limit: int) -> list[T]:
        """Return one offset window in the repository's default ordering."""

    @abstractmethod
    def list_all(self, criteria: F) -> list[T]:
        """Return every matching record in the default ordering."""

    @abstractmethod
    def count(self, criteria: F) -> int:
        """Return how many records match."""
