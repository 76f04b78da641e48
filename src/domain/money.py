"""Domain value object for currency amounts."""

from dataclasses import dataclass
from decimal import Decimal

from src.domain.errors import CurrencyMismatchError
from src.utils.decimal_utils import coerce_decimal


@dataclass(frozen=True)
class Money:
    """Exact decimal amount tagged with a currency code.

    Attributes:
        amount: Exact decimal value.
        currency: ISO-4217-like currency code (e.g. GBP).
    """

    amount: Decimal
    currency: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "amount", coerce_decimal(self.amount))
        object.__setattr__(
            self,
            "currency",
            (self.currency or "").strip().upper(),
        )

    @classmethod
    def zero(cls, currency: str) -> "Money":
        """Return a zero amount in the given currency."""
        return cls(Decimal("0"), currency)

    def _check_currency(self, other: "Money", operation: str) -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchError(
                f"Cannot {operation} different currencies: "
                f"{self.currency} and {other.currency}"
            )

    def __add__(self, other: "Money") -> "Money":
        self._check_currency(other, "add")
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: "Money") -> "Money":
        self._check_currency(other, "subtract")
        return Money(self.amount - other.amount, self.currency)

    def __neg__(self) -> "Money":
        return Money(-self.amount, self.currency)

    def __abs__(self) -> "Money":
        return Money(abs(self.amount), self.currency)

    def __lt__(self, other: "Money") -> bool:
        self._check_currency(other, "compare")
        return self.amount < other.amount

    def __le__(self, other: "Money") -> bool:
        self._check_currency(other, "compare")
        return self.amount <= other.amount

    def is_negative(self) -> bool:
        return self.amount < 0

    def is_zero(self) -> bool:
        return self.amount == 0


__all__ = ["Money"]
