"""Domain model for per-currency account summaries."""

from dataclasses import dataclass, field
from decimal import Decimal

from src.domain.currency import CurrencyFormatter
from src.domain.errors import UnknownFieldError

SUMMARY_FIELDS = (
    "sales",
    "purchases",
    "sale_receipts",
    "purchase_payments",
    "balance",
)

_FORMATTED_SUFFIX = "_formatted"


@dataclass(frozen=True)
class AccountSummary:
    """Totals of a party's dealings in a single currency.

    Attributes:
        currency: Currency code of every amount in the summary.
        sales: Invoices and credit notes sent by self.
        purchases: Invoices and credit notes received by self.
        sale_receipts: Payments recorded by self for its sales.
        purchase_payments: Payments recorded by counterparties for
            self's purchases.
    """

    currency: str
    sales: Decimal = Decimal("0.00")
    purchases: Decimal = Decimal("0.00")
    sale_receipts: Decimal = Decimal("0.00")
    purchase_payments: Decimal = Decimal("0.00")
    formatter: CurrencyFormatter = field(
        default_factory=CurrencyFormatter,
        compare=False,
        repr=False,
    )

    @property
    def balance(self) -> Decimal:
        """Net amount owed to self (positive) or by self (negative)."""
        return (
            self.sales
            - self.purchases
            - self.sale_receipts
            + self.purchase_payments
        )

    def __getattr__(self, name: str):
        if name.startswith("_") or name == "formatter":
            raise AttributeError(name)
        if name.endswith(_FORMATTED_SUFFIX):
            base = name[: -len(_FORMATTED_SUFFIX)]
            if base in SUMMARY_FIELDS:
                return self.formatter.format_amount(
                    getattr(self, base),
                    self.currency,
                )
        raise UnknownFieldError(
            f"AccountSummary has no field {name!r}"
        )

    def __getitem__(self, name: str):
        if name in SUMMARY_FIELDS or (
            name.endswith(_FORMATTED_SUFFIX)
            and name[: -len(_FORMATTED_SUFFIX)] in SUMMARY_FIELDS
        ):
            return getattr(self, name)
        raise UnknownFieldError(f"AccountSummary has no field {name!r}")

    def __str__(self) -> str:
        return "; ".join(
            f"{name} = {getattr(self, name + _FORMATTED_SUFFIX)}"
            for name in SUMMARY_FIELDS
        )


__all__ = ["AccountSummary", "SUMMARY_FIELDS"]
