"""Currency metadata and display formatting for Money values."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Hashable, Protocol

from src.domain.constants import (
    CURRENCY_SYMBOLS,
    DEFAULT_DECIMAL_PLACES,
    MINUS_SIGN,
)
from src.domain.money import Money


@dataclass(frozen=True)
class CurrencyInfo:
    """Display metadata for a currency."""

    code: str
    symbol: str | None
    decimal_places: int = DEFAULT_DECIMAL_PLACES


class CurrencyMetadataPort(Protocol):
    """Provider of currency display metadata."""

    def lookup(self, code: str) -> CurrencyInfo | None:
        """Return metadata for a currency code, or None when unknown."""


class StaticCurrencyMetadata(CurrencyMetadataPort):
    """Currency metadata backed by an in-process table."""

    def __init__(
        self,
        table: dict[str, tuple[str, int]] | None = None,
    ) -> None:
        self._table = dict(CURRENCY_SYMBOLS if table is None else table)

    def lookup(self, code: str) -> CurrencyInfo | None:
        if not code:
            return None
        normalized = code.strip().upper()
        entry = self._table.get(normalized)
        if entry is None:
            return None
        symbol, decimal_places = entry
        return CurrencyInfo(
            code=normalized,
            symbol=symbol,
            decimal_places=decimal_places,
        )


class AmountSign(str, Enum):
    """Sign applied to an amount when rendered for a viewpoint."""

    POSITIVE = "positive"
    NEGATIVE = "negative"


@dataclass(frozen=True)
class FormatOptions:
    """Options for rendering a ledger item amount from a viewpoint.

    Attributes:
        debit: Sign used when the item is a debit for ``self_id``.
        credit: Sign used when the item is a credit for ``self_id``.
        self_id: Viewpoint party id. None denotes the owning party.
    """

    debit: AmountSign = AmountSign.POSITIVE
    credit: AmountSign = AmountSign.POSITIVE
    self_id: Hashable | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "debit", AmountSign(self.debit))
        object.__setattr__(self, "credit", AmountSign(self.credit))


class CurrencyFormatter:
    """Render Money values with currency symbol and thousands grouping.

    Negative values use the Unicode minus sign ahead of the symbol
    (``−£1,234.50``) regardless of locale conventions. Currencies without
    a known symbol render as ``1,234.50 XYZ``. Formatting never changes the
    underlying amount.
    """

    def __init__(self, metadata: CurrencyMetadataPort | None = None) -> None:
        self._metadata = metadata or StaticCurrencyMetadata()

    def format(self, money: Money) -> str:
        info = self._metadata.lookup(money.currency)
        places = info.decimal_places if info else DEFAULT_DECIMAL_PLACES
        quantum = Decimal(1).scaleb(-places)
        magnitude = abs(money.amount).quantize(quantum, rounding=ROUND_HALF_UP)
        digits = f"{magnitude:,.{places}f}"
        sign = MINUS_SIGN if money.amount < 0 and magnitude != 0 else ""
        if info is None or not info.symbol:
            return f"{sign}{digits} {money.currency}"
        return f"{sign}{info.symbol}{digits}"

    def format_amount(self, amount: Decimal | None, currency: str) -> str | None:
        """Format a raw amount, passing None through unchanged."""
        if amount is None:
            return None
        return self.format(Money(amount, currency))


__all__ = [
    "CurrencyInfo",
    "CurrencyMetadataPort",
    "StaticCurrencyMetadata",
    "AmountSign",
    "FormatOptions",
    "CurrencyFormatter",
]
