"""Value objects for the billing domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import StrEnum

from ulid import ULID

_CENTS = Decimal("0.01")
_CURRENCY_RE = re.compile(r"^[A-Z]{3}$")
_TAX_ID_RE = re.compile(r"^[A-Z0-9]{8,15}$")
_TAX_ID_SEPARATORS = re.compile(r"[\s.\-]")


class InvoiceStatus(StrEnum):
    """Lifecycle status of an invoice."""

    DRAFT = "draft"
    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"


class ClientStatus(StrEnum):
    """Lifecycle status of a client."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    ARCHIVED = "archived"


@dataclass(frozen=True)
class InvoiceId:
    """Identifier for an Invoice aggregate.

    Uses ULID for sortability and distribution-friendly generation.
    """

    value: str

    def __str__(self) -> str:
        """Return string representation."""
        return self.value

    @classmethod
    def generate(cls) -> InvoiceId:
        """Generate a new InvoiceId using ULID."""
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> InvoiceId:
        """Create InvoiceId from string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            parsed = ULID.from_str(value.upper())
        except ValueError as e:
            raise ValueError(f"Invalid InvoiceId: {value}") from e

        return cls(value=str(parsed))


@dataclass(frozen=True)
class ClientId:
    """Identifier for a Client aggregate."""

    value: str

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls) -> ClientId:
        return cls(value=str(ULID()))

    @classmethod
    def from_string(cls, value: str) -> ClientId:
        """Create ClientId from string value.

        Raises:
            ValueError: If value is not a valid ULID
        """
        try:
            parsed = ULID.from_str(value.upper())
        except ValueError as e:
            raise ValueError(f"Invalid ClientId: {value}") from e

        return cls(value=str(parsed))


@dataclass(frozen=True)
class Money:
    """An amount in a single currency, rounded to cents.

    Amounts of different currencies never mix: adding or subtracting them
    raises ValueError instead of silently converting.
    """

    amount: Decimal
    currency: str

    def __post_init__(self) -> None:
        try:
            amount = Decimal(str(self.amount)).quantize(_CENTS, rounding=ROUND_HALF_UP)
        except InvalidOperation as e:
            raise ValueError(f"Invalid amount: {self.amount!r}") from e
        if not amount.is_finite():
            raise ValueError(f"Invalid amount: {self.amount!r}")

        currency = str(self.currency).strip().upper()
        if not _CURRENCY_RE.match(currency):
            raise ValueError(f"Invalid currency code: {self.currency!r}")

        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "currency", currency)

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    @classmethod
    def of(cls, amount: Decimal | int | str, currency: str = "EUR") -> Money:
        """Build a Money value from anything Decimal accepts."""
        return cls(amount=Decimal(str(amount)), currency=currency)

    @classmethod
    def zero(cls, currency: str = "EUR") -> Money:
        return cls(amount=Decimal("0"), currency=currency)

    @property
    def is_positive(self) -> bool:
        return self.amount > 0

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    def _check_currency(self, other: Money) -> None:
        if self.currency != other.currency:
            raise ValueError(
                f"Currency mismatch: {self.currency} and {other.currency}"
            )

    def __add__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_currency(other)
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def __sub__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        self._check_currency(other)
        return Money(amount=self.amount - other.amount, currency=self.currency)


@dataclass(frozen=True)
class TaxId:
    """Fiscal identifier of a client (Spanish NIF/CIF or similar).

    Stored in normalized form: uppercase, with spaces, dots and hyphens
    removed.
    """

    value: str

    def __post_init__(self) -> None:
        normalized = _TAX_ID_SEPARATORS.sub("", str(self.value)).upper()
        if not _TAX_ID_RE.match(normalized):
            raise ValueError(f"Invalid tax ID: {self.value!r}")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value
