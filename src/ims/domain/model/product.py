"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, stock is corrected by hand, and products are disabled
(never physically removed) so completed orders keep their history.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from ims.domain.exceptions import ValidationError
from ims.domain.model.value_objects import Money, check_quantity_limit

MAX_NAME_LENGTH = 256
MAX_DESCRIPTION_LENGTH = 256


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ProductStatus(Enum):
    ACTIVE = "active"
    DISABLED = "disabled"


@dataclass
class Product:
    """A product in the catalog.

    Use ``Product.create()`` for new products. The ``__init__`` stays
    simple so repositories can reconstitute stored rows without
    re-validating them.
    """

    id: int | None
    name: str
    price: Money
    quantity: int
    description: str | None = None
    status: ProductStatus = ProductStatus.ACTIVE
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime | None = None

    @staticmethod
    def create(
        name: str,
        price: Money,
        quantity: int,
        description: str | None = None,
    ) -> Product:
        return Product(
            id=None,
            name=_clean_name(name),
            price=price,
            quantity=_check_stock(quantity),
            description=_clean_description(description),
        )

    @property
    def is_disabled(self) -> bool:
        return self.status is ProductStatus.DISABLED

    def update(
        self,
        *,
        name: str | None = None,
        description: str | None = None,
        price: Money | None = None,
        quantity: int | None = None,
    ) -> None:
        """Apply a partial patch; ``None`` leaves a field untouched.

        A blank description clears it. Price edits never reach existing
        orders, whose line items captured their own price snapshot.
        """
        if name is not None:
            self.name = _clean_name(name)
        if description is not None:
            self.description = _clean_description(description)
        if price is not None:
            self.price = price
        if quantity is not None:
            self.quantity = _check_stock(quantity)
        self.updated_at = _now()

    def disable(self) -> None:
        self.status = ProductStatus.DISABLED
        self.updated_at = _now()

    def restore(self) -> None:
        self.status = ProductStatus.ACTIVE
        self.updated_at = _now()


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Name is required")
    if len(cleaned) > MAX_NAME_LENGTH:
        raise ValidationError(f"Name must be at most {MAX_NAME_LENGTH} characters")
    return cleaned


def _clean_description(description: str | None) -> str | None:
    if description is None:
        return None
    cleaned = description.strip()
    if len(cleaned) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters"
        )
    return cleaned or None


def _check_stock(quantity: int) -> int:
    if quantity < 0:
        raise ValidationError("Quantity must be non-negative")
    return check_quantity_limit(quantity)
