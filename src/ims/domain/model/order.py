"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its line items.
All business invariants are enforced here:

- ``total_price`` always equals the sum of ``price * quantity`` over the
  current items and is recomputed after every item mutation.
- Items can only be added, changed or removed while the order is pending.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum

from ims.domain.exceptions import InvalidStateError, NotFoundError, ValidationError
from ims.domain.model.product import Product
from ims.domain.model.value_objects import Money, Quantity


def _now() -> datetime:
    return datetime.now(timezone.utc)


class OrderStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not OrderStatus.PENDING

    def can_transition_to(self, target: OrderStatus) -> bool:
        return target in _TRANSITIONS[self]

    @staticmethod
    def parse(raw: str) -> OrderStatus:
        try:
            return OrderStatus(raw.strip().lower())
        except ValueError:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError(
                f"Unknown order status '{raw}' (expected one of: {allowed})"
            ) from None


_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


@dataclass
class OrderItem:
    """A line item with the product price captured when it was added.

    The price never follows later product edits, so historical totals
    stay stable.
    """

    id: int | None
    product_id: int
    quantity: Quantity
    price: Money  # snapshot
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime | None = None

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for orders.

    Use the ``Order.create()`` factory for new orders. The ``__init__`` is
    intentionally simple so the repository can reconstitute persisted
    orders without re-validating.
    """

    id: int | None
    order_date: date
    items: list[OrderItem]
    status: OrderStatus = OrderStatus.PENDING
    total_price: Money = field(default_factory=Money.zero)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_date: date,
        items: list[OrderItem] | None = None,
        status: OrderStatus = OrderStatus.PENDING,
    ) -> Order:
        """Create a new order; the caller supplies each item's price snapshot."""
        order = Order(id=None, order_date=order_date, items=list(items or []), status=status)
        order._recalculate_total()
        return order

    # --- Line items -----------------------------------------------------------

    def add_item(self, product: Product, quantity: Quantity) -> OrderItem:
        """Add a line item priced at the product's *current* price."""
        self._ensure_pending()
        if product.is_disabled:
            raise ValidationError(f"Product '{product.name}' is disabled")
        item = OrderItem(
            id=None,
            product_id=product.id,  # type: ignore[arg-type]
            quantity=quantity,
            price=product.price,
        )
        self.items.append(item)
        self._recalculate_total()
        self.updated_at = _now()
        return item

    def update_item(self, item_id: int, quantity: Quantity) -> OrderItem:
        """Change a line item's quantity; its price snapshot is kept."""
        self._ensure_pending()
        item = self._find_item(item_id)
        item.quantity = quantity
        item.updated_at = _now()
        self._recalculate_total()
        self.updated_at = item.updated_at
        return item

    def remove_item(self, item_id: int) -> OrderItem:
        self._ensure_pending()
        item = self._find_item(item_id)
        self.items.remove(item)
        self._recalculate_total()
        self.updated_at = _now()
        return item

    def remove_items_for_product(self, product_id: int) -> list[OrderItem]:
        """Drop every line item of a product that is being disabled.

        Pending and cancelled orders lose the items; completed orders are
        history and keep them.
        """
        if self.status is OrderStatus.COMPLETED:
            return []
        removed = [item for item in self.items if item.product_id == product_id]
        if removed:
            self.items = [item for item in self.items if item.product_id != product_id]
            self._recalculate_total()
            self.updated_at = _now()
        return removed

    # --- State transitions ----------------------------------------------------

    def complete(self) -> None:
        """Transition PENDING -> COMPLETED.

        Restocking the products must happen in the same transaction
        (coordinated by the application handler via the domain service).
        """
        self._ensure_pending()
        if not self.items:
            raise ValidationError("Cannot complete an order with no items")
        self.status = OrderStatus.COMPLETED
        self.updated_at = _now()

    def change_status(self, target: OrderStatus) -> None:
        if target is self.status:
            return
        if target is OrderStatus.COMPLETED and self.status is OrderStatus.PENDING:
            raise InvalidStateError(
                "Pending orders are completed through the complete operation, "
                "which restocks their products"
            )
        if not self.status.can_transition_to(target):
            raise InvalidStateError(
                f"Cannot change order #{self.id} from {self.status.value} to {target.value}"
            )
        self.status = target
        self.updated_at = _now()

    def reschedule(self, order_date: date) -> None:
        self.order_date = order_date
        self.updated_at = _now()

    # --- Computed properties --------------------------------------------------

    @property
    def item_count(self) -> int:
        """Total number of units across all line items."""
        return sum(item.quantity.value for item in self.items)

    # --- Internal helpers -----------------------------------------------------

    def _recalculate_total(self) -> None:
        total = Money.zero()
        for item in self.items:
            total = total + item.line_total
        self.total_price = total

    def _ensure_pending(self) -> None:
        if self.status is not OrderStatus.PENDING:
            raise InvalidStateError(
                f"Order #{self.id} is already {self.status.value}; "
                f"only pending orders can be changed"
            )

    def _find_item(self, item_id: int) -> OrderItem:
        for item in self.items:
            if item.id == item_id:
                return item
        raise NotFoundError(f"Item #{item_id} not found in order #{self.id}")
