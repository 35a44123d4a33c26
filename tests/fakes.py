"""In-memory fake repositories and unit of work for testing.

These implement the same abstract interfaces as the SQL repositories
but keep everything in a dict. No database, no side effects. Records
are copied in and out so that, like the real store, nothing changes
until ``save()`` is called, and a rollback restores the state from when
the ``with`` block was entered.
"""

from __future__ import annotations

import copy

from ims.domain.exceptions import NotFoundError
from ims.domain.model.order import Order, OrderStatus
from ims.domain.model.product import Product, ProductStatus
from ims.domain.model.value_objects import MAX_QUANTITY
from ims.domain.repository.order_repository import OrderCriteria, OrderRepository
from ims.domain.repository.product_repository import ProductCriteria, ProductRepository
from ims.domain.repository.unit_of_work import UnitOfWork


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[int, Product] = {}
        self._next_id = 1
        self.locked: list[int] = []
        for p in products or []:
            self.add(p)

    def get_by_id(self, product_id: int, *, for_update: bool = False) -> Product | None:
        if for_update:
            self.locked.append(product_id)
        product = self._store.get(product_id)
        return copy.deepcopy(product) if product is not None else None

    def add(self, product: Product) -> None:
        if product.id is None:
            product.id = self._next_id
        self._next_id = max(self._next_id, product.id) + 1
        self._store[product.id] = copy.deepcopy(product)

    def save(self, product: Product) -> None:
        if product.id not in self._store:
            raise NotFoundError(f"Product #{product.id} not found")
        self._store[product.id] = copy.deepcopy(product)

    def adjust_quantity(self, product_id: int, delta: int) -> int | None:
        product = self._store.get(product_id)
        if product is None:
            return None
        product.quantity = min(MAX_QUANTITY, max(0, product.quantity + delta))
        return product.quantity

    def list_after(self, criteria: ProductCriteria, after_id: int, limit: int) -> list[Product]:
        rows = sorted(self._matching(criteria), key=lambda p: p.id)
        return [p for p in rows if p.id > after_id][:limit]

    def list_window(self, criteria: ProductCriteria, offset: int, limit: int) -> list[Product]:
        return self.list_all(criteria)[offset:offset + limit]

    def list_all(self, criteria: ProductCriteria) -> list[Product]:
        return sorted(
            self._matching(criteria), key=lambda p: (p.created_at, p.id), reverse=True
        )

    def count(self, criteria: ProductCriteria) -> int:
        return len(self._matching(criteria))

    # --- Test helpers ---------------------------------------------------------

    def dump(self) -> tuple[dict[int, Product], int]:
        return copy.deepcopy(self._store), self._next_id

    def load(self, state: tuple[dict[int, Product], int]) -> None:
        self._store, self._next_id = state

    def _matching(self, criteria: ProductCriteria) -> list[Product]:
        term = criteria.search_term
        result = []
        for p in self._store.values():
            if criteria.status is not None and p.status is not criteria.status:
                continue
            if term is not None:
                haystacks = [p.name.lower(), (p.description or "").lower()]
                if not any(term.lower() in h for h in haystacks):
                    continue
            result.append(copy.deepcopy(p))
        return result


class FakeOrderRepository(OrderRepository):

    def __init__(self, products: FakeProductRepository) -> None:
        self._products = products
        self._store: dict[int, Order] = {}
        self._next_id = 1
        self._next_item_id = 1

    def get_by_id(self, order_id: int, *, for_update: bool = False) -> Order | None:
        order = self._store.get(order_id)
        return copy.deepcopy(order) if order is not None else None

    def add(self, order: Order) -> None:
        order.id = self._next_id
        self._next_id += 1
        self._store_copy(order)

    def save(self, order: Order) -> None:
        if order.id not in self._store:
            raise NotFoundError(f"Order #{order.id} not found")
        self._store_copy(order)

    def delete(self, order_id: int) -> bool:
        return self._store.pop(order_id, None) is not None

    def find_by_product(self, product_id: int) -> list[Order]:
        return [
            copy.deepcopy(o)
            for o in sorted(self._store.values(), key=lambda o: o.id)
            if any(item.product_id == product_id for item in o.items)
        ]

    def count_pending_with_product(self, product_id: int) -> int:
        product = self._products.get_by_id(product_id)
        if product is None or product.status is ProductStatus.DISABLED:
            return 0
        return sum(
            1
            for o in self._store.values()
            if o.status is OrderStatus.PENDING
            and any(item.product_id == product_id for item in o.items)
        )

    def list_after(self, criteria: OrderCriteria, after_id: int, limit: int) -> list[Order]:
        rows = sorted(self._matching(criteria), key=lambda o: o.id)
        return [o for o in rows if o.id > after_id][:limit]

    def list_window(self, criteria: OrderCriteria, offset: int, limit: int) -> list[Order]:
        return self.list_all(criteria)[offset:offset + limit]

    def list_all(self, criteria: OrderCriteria) -> list[Order]:
        return sorted(
            self._matching(criteria), key=lambda o: o.id, reverse=criteria.descending
        )

    def count(self, criteria: OrderCriteria) -> int:
        return len(self._matching(criteria))

    # --- Test helpers ---------------------------------------------------------

    def dump(self) -> tuple[dict[int, Order], int, int]:
        return copy.deepcopy(self._store), self._next_id, self._next_item_id

    def load(self, state: tuple[dict[int, Order], int, int]) -> None:
        self._store, self._next_id, self._next_item_id = state

    def _store_copy(self, order: Order) -> None:
        for item in order.items:
            if item.id is None:
                item.id = self._next_item_id
                self._next_item_id += 1
        self._store[order.id] = copy.deepcopy(order)  # type: ignore[index]

    def _matching(self, criteria: OrderCriteria) -> list[Order]:
        result = []
        for o in self._store.values():
            if criteria.date_from is not None and o.order_date < criteria.date_from:
                continue
            if criteria.date_to is not None and o.order_date > criteria.date_to:
                continue
            result.append(copy.deepcopy(o))
        return result


class FakeUnitOfWork(UnitOfWork):

    def __init__(self, products: list[Product] | None = None) -> None:
        self.products = FakeProductRepository(products)
        self.orders = FakeOrderRepository(self.products)
        self.commits = 0
        self._snapshot = None

    def __enter__(self) -> FakeUnitOfWork:
        self._snapshot = (self.products.dump(), self.orders.dump())
        return self

    def commit(self) -> None:
        self._snapshot = None
        self.commits += 1

    def rollback(self) -> None:
        if self._snapshot is not None:
            products_state, orders_state = self._snapshot
            self.products.load(products_state)
            self.orders.load(orders_state)
            self._snapshot = None
