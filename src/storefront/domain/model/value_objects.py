"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from storefront.domain.exceptions import ValidationError

DEFAULT_CURRENCY = "VND"
DEFAULT_COUNTRY = "Vietnam"


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal so that catalog prices multiplied by quantities add up
    exactly.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        self._assert_same_currency(other)
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.amount:,.2f} {self.currency}"

    # --- Internal helpers -----------------------------------------------------

    def _assert_same_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValidationError(
                f"Cannot combine {self.currency} with {other.currency}"
            )

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0"))

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(Decimal(str(amount)))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Booleans are rejected even though Python treats them as ints.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class ShippingAddress:
    """Where an order is delivered.

    ``address`` and ``city`` are required; ``postal_code`` defaults to
    empty and ``country`` to the store's home country.
    """

    address: str
    city: str
    postal_code: str = ""
    country: str = DEFAULT_COUNTRY

    def __post_init__(self) -> None:
        if not _is_filled(self.address) or not _is_filled(self.city):
            raise ValidationError(
                "Shipping address is required with address and city"
            )

    @staticmethod
    def of(
        address: str | None,
        city: str | None,
        postal_code: str | None = None,
        country: str | None = None,
    ) -> ShippingAddress:
        """Normalize raw input, filling in the optional defaults."""
        return ShippingAddress(
            address=address.strip() if isinstance(address, str) else address,  # type: ignore[arg-type]
            city=city.strip() if isinstance(city, str) else city,  # type: ignore[arg-type]
            postal_code=(postal_code or "").strip(),
            country=(country or "").strip() or DEFAULT_COUNTRY,
        )


def _is_filled(value: object) -> bool:
    return isinstance(value, str) and bool(value.strip())
