"""SQLAlchemy-backed implementation of OrderRepository."""

from __future__ import annotations

import sqlalchemy as sa
from sqlalchemy.orm import Session, selectinload

from ims.domain.exceptions import NotFoundError
from ims.domain.model.order import Order, OrderItem, OrderStatus
from ims.domain.model.value_objects import Money, Quantity
from ims.domain.repository.order_repository import OrderCriteria, OrderRepository
from ims.infrastructure.persistence.tables import OrderItemRow, OrderRow, ProductRow


class SqlOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int, *, for_update: bool = False) -> Order | None:
        stmt = self._with_items().where(OrderRow.id == order_id)
        if for_update:
            stmt = stmt.with_for_update()
        row = self._session.scalars(stmt).first()
        return self._to_domain(row) if row is not None else None

    def add(self, order: Order) -> None:
        row = OrderRow()
        self._apply(row, order)
        new_rows = [self._new_item_row(item) for item in order.items]
        row.items = new_rows
        self._session.add(row)
        self._session.flush()
        order.id = row.id
        for item, item_row in zip(order.items, new_rows):
            item.id = item_row.id

    def save(self, order: Order) -> None:
        row = self._session.scalars(
            self._with_items().where(OrderRow.id == order.id)
        ).first()
        if row is None:
            raise NotFoundError(f"Order #{order.id} not found")
        self._apply(row, order)

        # Upsert items: delete missing, update known, insert new
        kept_ids = {item.id for item in order.items if item.id is not None}
        for item_row in list(row.items):
            if item_row.id not in kept_ids:
                row.items.remove(item_row)

        rows_by_id = {item_row.id: item_row for item_row in row.items}
        inserted: list[tuple[OrderItem, OrderItemRow]] = []
        for item in order.items:
            if item.id is None:
                item_row = self._new_item_row(item)
                row.items.append(item_row)
                inserted.append((item, item_row))
                continue
            item_row = rows_by_id.get(item.id)
            if item_row is None:
                raise NotFoundError(f"Item #{item.id} not found in order #{order.id}")
            item_row.quantity = item.quantity.value
            item_row.price = item.price.amount
            item_row.updated_at = item.updated_at

        self._session.flush()
        for item, item_row in inserted:
            item.id = item_row.id

    def delete(self, order_id: int) -> bool:
        row = self._session.get(OrderRow, order_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True

    def find_by_product(self, product_id: int) -> list[Order]:
        holding = sa.select(OrderItemRow.order_id).where(OrderItemRow.product_id == product_id)
        stmt = (
            self._with_items()
            .where(OrderRow.id.in_(holding))
            .order_by(OrderRow.id.asc())
            .with_for_update()
        )
        return [self._to_domain(row) for row in self._session.scalars(stmt)]

    def count_pending_with_product(self, product_id: int) -> int:
        stmt = (
            sa.select(sa.func.count(sa.distinct(OrderItemRow.order_id)))
            .join(OrderRow, OrderItemRow.order_id == OrderRow.id)
            .join(ProductRow, OrderItemRow.product_id == ProductRow.id)
            .where(
                OrderItemRow.product_id == product_id,
                OrderRow.status == OrderStatus.PENDING.value,
                ProductRow.is_disabled.is_(False),
            )
        )
        return int(self._session.scalar(stmt) or 0)

    # --- Listing --------------------------------------------------------------

    def list_after(self, criteria: OrderCriteria, after_id: int, limit: int) -> list[Order]:
        stmt = (
            self._with_items()
            .where(*self._filters(criteria), OrderRow.id > after_id)
            .order_by(OrderRow.id.asc())
            .limit(limit)
        )
        return [self._to_domain(row) for row in self._session.scalars(stmt)]

    def list_window(self, criteria: OrderCriteria, offset: int, limit: int) -> list[Order]:
        stmt = self._ordered(criteria).offset(offset).limit(limit)
        return [self._to_domain(row) for row in self._session.scalars(stmt)]

    def list_all(self, criteria: OrderCriteria) -> list[Order]:
        return [self._to_domain(row) for row in self._session.scalars(self._ordered(criteria))]

    def count(self, criteria: OrderCriteria) -> int:
        stmt = sa.select(sa.func.count(OrderRow.id)).where(*self._filters(criteria))
        return int(self._session.scalar(stmt) or 0)

    # --- Query helpers --------------------------------------------------------

    @staticmethod
    def _with_items() -> sa.Select:
        return (
            sa.select(OrderRow)
            .options(selectinload(OrderRow.items))
            .execution_options(populate_existing=True)
        )

    def _ordered(self, criteria: OrderCriteria) -> sa.Select:
        direction = OrderRow.id.desc() if criteria.descending else OrderRow.id.asc()
        return self._with_items().where(*self._filters(criteria)).order_by(direction)

    @staticmethod
    def _filters(criteria: OrderCriteria) -> list:
        clauses: list = []
        if criteria.date_from is not None:
            clauses.append(OrderRow.order_date >= criteria.date_from)
        if criteria.date_to is not None:
            clauses.append(OrderRow.order_date <= criteria.date_to)
        return clauses

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _apply(row: OrderRow, order: Order) -> None:
        row.order_date = order.order_date
        row.total_price = order.total_price.amount
        row.status = order.status.value
        row.created_at = order.created_at
        row.updated_at = order.updated_at

    @staticmethod
    def _new_item_row(item: OrderItem) -> OrderItemRow:
        return OrderItemRow(
            product_id=item.product_id,
            quantity=item.quantity.value,
            price=item.price.amount,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )

    @staticmethod
    def _to_domain(row: OrderRow) -> Order:
        items = [
            OrderItem(
                id=i.id,
                product_id=i.product_id,
                quantity=Quantity(i.quantity),
                price=Money(i.price),
                created_at=i.created_at,
                updated_at=i.updated_at,
            )
            for i in row.items
        ]
        return Order(
            id=row.id,
            order_date=row.order_date,
            items=items,
            status=OrderStatus(row.status),
            total_price=Money(row.total_price),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
