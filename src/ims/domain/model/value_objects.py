"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from ims.domain.exceptions import ValidationError

_CENTS = Decimal("0.01")
# numeric(10, 2) in the store
MAX_AMOUNT = Decimal("99999999.99")
# integer columns in the store
MAX_QUANTITY = 2_147_483_647


@dataclass(frozen=True, order=True)
class Money:
    """Monetary amount, always held with exactly two decimal places.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError("Price must be a valid number")
        if self.amount < Decimal("0"):
            raise ValidationError("Price must be non-negative")
        # Compare first: quantize() overflows the context for huge values
        if self.amount > MAX_AMOUNT:
            raise ValidationError(f"Price must not exceed {MAX_AMOUNT}")
        quantized = self.amount.quantize(_CENTS, rounding=ROUND_HALF_UP)
        if quantized > MAX_AMOUNT:
            raise ValidationError(f"Price must not exceed {MAX_AMOUNT}")
        object.__setattr__(self, "amount", quantized)

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + other.amount)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.amount:.2f}"

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0.00"))

    @staticmethod
    def parse(raw: str | int | Decimal) -> Money:
        """Parse user input such as ``"9,90"`` or ``"9.90"``.

        The first comma is read as the decimal separator.
        """
        if isinstance(raw, Decimal):
            return Money(raw)
        text = str(raw).strip()
        if not text:
            raise ValidationError("Price is required")
        text = text.replace(",", ".", 1)
        try:
            amount = Decimal(text)
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Price must be a valid number, got {raw!r}") from exc
        return Money(amount)


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that a line item cannot hold zero or negative units.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")
        check_quantity_limit(self.value)

    def __str__(self) -> str:
        return str(self.value)

    @staticmethod
    def parse(raw: str | int) -> Quantity:
        return Quantity(_parse_int(raw))


def parse_stock_quantity(raw: str | int) -> int:
    """Parse a stock level: a non-negative integer."""
    value = _parse_int(raw)
    if value < 0:
        raise ValidationError("Quantity must be non-negative")
    return check_quantity_limit(value)


def check_quantity_limit(value: int) -> int:
    if abs(value) > MAX_QUANTITY:
        raise ValidationError(f"Quantity must not exceed {MAX_QUANTITY}")
    return value


def _parse_int(raw: str | int) -> int:
    if isinstance(raw, bool):
        raise ValidationError("Quantity must be an integer")
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    if not text:
        raise ValidationError("Quantity is required")
    try:
        return int(text, 10)
    except ValueError as exc:
        raise ValidationError(f"Quantity must be an integer, got {raw!r}") from exc
