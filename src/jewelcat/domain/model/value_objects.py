"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum

from jewelcat.domain.exceptions import ValidationError

DEFAULT_CURRENCY = "INR"
MINOR_UNIT = Decimal("0.01")


class MaterialKind(Enum):
    METAL = "metal"
    GEMSTONE = "gemstone"


class MakingChargeType(Enum):
    FLAT = "flat"
    PERCENTAGE = "percentage"


def new_id() -> str:
    """Generate an opaque identifier for aggregates and variants."""
    return uuid.uuid4().hex


def to_decimal(value: str | float | int | Decimal, label: str = "value") -> Decimal:
    """Coerce user input to Decimal, going through ``str`` for floats."""
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {label}: {value!r}")
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid {label}: {value!r}") from exc
    if not result.is_finite():
        raise ValidationError(f"Invalid {label}: {value!r}")
    return result


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.  Intermediate amounts keep
    full precision; ``rounded()`` is applied by callers at the point a
    figure is finalised.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        result = self.amount - other.amount
        if result < Decimal("0"):
            raise ValidationError("Money subtraction would result in a negative amount")
        return Money(result, self.currency)

    def __mul__(self, factor: int | Decimal) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, (int, Decimal)):
            raise TypeError(
                f"Can only multiply Money by int or Decimal, got {type(factor).__name__}"
            )
        return Money(self.amount * factor, self.currency)

    def __lt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        self._assert_same_currency(other)
        return self.amount >= other.amount

    def rounded(self) -> Money:
        """Quantize to minor-currency-unit precision, rounding half up."""
        return Money(self.amount.quantize(MINOR_UNIT, rounding=ROUND_HALF_UP), self.currency)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.currency} {self.amount:,.2f}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = DEFAULT_CURRENCY) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        return Money(to_decimal(amount, "money amount"), currency)

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> Money:
        return Money(Decimal("0"), currency)


@dataclass(frozen=True)
class Percentage:
    """A percentage between 0 and 100 inclusive."""

    value: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal):
            raise ValidationError(
                f"Percentage must be a Decimal, got {type(self.value).__name__}"
            )
        if not Decimal("0") <= self.value <= Decimal("100"):
            raise ValidationError(
                f"Percentage must be between 0 and 100, got {self.value}"
            )

    def of(self, amount: Money) -> Money:
        """Return ``amount × value / 100`` without rounding."""
        return Money(amount.amount * self.value / Decimal("100"), amount.currency)

    def __str__(self) -> str:
        return f"{self.value}%"

    @staticmethod
    def parse(value: str | float | int | Decimal) -> Percentage:
        return Percentage(to_decimal(value, "percentage"))


@dataclass(frozen=True)
class MaterialQuantity:
    """A positive weight: grams for metal, carats for gemstone."""

    value: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal):
            raise ValidationError(
                f"Quantity must be a Decimal, got {type(self.value).__name__}"
            )
        if not self.value.is_finite() or self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)

    @staticmethod
    def parse(value: str | float | int | Decimal) -> MaterialQuantity:
        return MaterialQuantity(to_decimal(value, "quantity"))
