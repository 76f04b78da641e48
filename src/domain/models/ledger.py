"""Domain models for ledger items and their line items."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Hashable, Protocol

from src.domain.errors import AmbiguousPartyError, UnimplementedCapabilityError
from src.domain.models.kinds import LEDGER_ITEM, KindRegistry, LedgerItemKind
from src.domain.money import Money
from src.domain.currency import (
    AmountSign,
    CurrencyFormatter,
    FormatOptions,
)
from src.utils.decimal_utils import coerce_decimal, coerce_optional_decimal

LEDGER_CAPABILITIES = ("sender_details", "recipient_details", "line_items")

_DEFAULT_FORMATTER = CurrencyFormatter()
_DEFAULT_OPTIONS = FormatOptions()


class LedgerItemStatus(str, Enum):
    """Lifecycle status of a ledger item."""

    OPEN = "open"
    PENDING = "pending"
    CLOSED = "closed"
    CLEARED = "cleared"
    CANCELLED = "cancelled"
    FAILED = "failed"


def normalize_status(status) -> str:
    """Return the lower-case string value of a status."""
    return str(getattr(status, "value", status)).strip().lower()


@dataclass(frozen=True)
class PartyDetails:
    """Display details of a sender or recipient.

    Attributes:
        id: Party identifier.
        name: Display name.
        is_self: Whether the party is the owner of the ledger.
    """

    id: Hashable | None
    name: str | None = None
    is_self: bool = False
    contact_name: str | None = None
    address: str | None = None
    country_code: str | None = None
    tax_number: str | None = None


@dataclass
class LineItem:
    """Single net and tax contribution to a ledger item."""

    net_amount: Decimal
    tax_amount: Decimal = Decimal("0")
    id: Hashable | None = None
    description: str | None = None
    quantity: Decimal | None = None

    def __post_init__(self) -> None:
        self.net_amount = coerce_decimal(self.net_amount)
        self.tax_amount = coerce_decimal(self.tax_amount)
        self.quantity = coerce_optional_decimal(self.quantity)

    @property
    def gross_amount(self) -> Decimal:
        return coerce_decimal(self.net_amount) + coerce_decimal(self.tax_amount)


class LedgerRecord(Protocol):
    """Capabilities a transaction record must supply to become a ledger item."""

    def sender_details(self) -> PartyDetails:
        """Return details of the party that issued the record."""

    def recipient_details(self) -> PartyDetails:
        """Return details of the party the record is addressed to."""

    def line_items(self) -> list[LineItem]:
        """Return the line items composing the record."""


@dataclass
class LedgerItem:
    """Invoice, credit note, payment or other transaction between two parties.

    Totals are derived from ``line_items`` whenever there are any; items
    without line items keep their explicitly assigned totals.
    """

    kind: LedgerItemKind = LEDGER_ITEM
    id: Hashable | None = None
    sender_id: Hashable | None = None
    recipient_id: Hashable | None = None
    currency: str = ""
    issue_date: date | None = None
    due_date: date | None = None
    total_amount: Decimal | None = None
    tax_amount: Decimal | None = None
    status: str = LedgerItemStatus.OPEN.value
    identifier: str | None = None
    description: str | None = None
    period_start: date | None = None
    period_end: date | None = None
    uuid: str | None = None
    sender: PartyDetails | None = None
    recipient: PartyDetails | None = None
    line_items: list[LineItem] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.currency = (self.currency or "").strip().upper()
        self.status = normalize_status(self.status)
        self.total_amount = coerce_optional_decimal(self.total_amount)
        self.tax_amount = coerce_optional_decimal(self.tax_amount)
        self.line_items = list(self.line_items)
        self.recompute_totals()

    @classmethod
    def from_record(
        cls,
        record,
        registry: KindRegistry | None = None,
    ) -> "LedgerItem":
        """Build a ledger item from any record implementing LedgerRecord.

        Args:
            record: Object exposing ledger attributes and the
                ``sender_details``, ``recipient_details`` and ``line_items``
                capabilities.
            registry: Registry used to resolve kind names.

        Returns:
            LedgerItem: Item with totals recomputed from its line items.

        Raises:
            UnimplementedCapabilityError: If a capability is missing or
                returns nothing.
        """
        supplied = {}
        for capability in LEDGER_CAPABILITIES:
            method = getattr(record, capability, None)
            if not callable(method):
                raise UnimplementedCapabilityError(
                    f"{type(record).__name__} must implement {capability}()"
                )
            value = method()
            if value is None:
                raise UnimplementedCapabilityError(
                    f"{type(record).__name__}.{capability}() returned nothing"
                )
            supplied[capability] = value

        kind = getattr(record, "kind", LEDGER_ITEM)
        if isinstance(kind, str):
            kind = (registry or KindRegistry()).get(kind)
        sender = supplied["sender_details"]
        recipient = supplied["recipient_details"]
        return cls(
            kind=kind,
            id=getattr(record, "id", None),
            sender_id=getattr(record, "sender_id", sender.id),
            recipient_id=getattr(record, "recipient_id", recipient.id),
            currency=getattr(record, "currency", ""),
            issue_date=getattr(record, "issue_date", None),
            due_date=getattr(record, "due_date", None),
            total_amount=getattr(record, "total_amount", None),
            tax_amount=getattr(record, "tax_amount", None),
            status=getattr(record, "status", LedgerItemStatus.OPEN),
            identifier=getattr(record, "identifier", None),
            description=getattr(record, "description", None),
            period_start=getattr(record, "period_start", None),
            period_end=getattr(record, "period_end", None),
            uuid=getattr(record, "uuid", None),
            sender=sender,
            recipient=recipient,
            line_items=list(supplied["line_items"]),
        )

    def sender_details(self) -> PartyDetails:
        if self.sender is None:
            raise UnimplementedCapabilityError(
                f"Ledger item {self.id!r} has no sender details"
            )
        return self.sender

    def recipient_details(self) -> PartyDetails:
        if self.recipient is None:
            raise UnimplementedCapabilityError(
                f"Ledger item {self.id!r} has no recipient details"
            )
        return self.recipient

    # Totals

    def recompute_totals(self) -> None:
        """Derive total and tax amounts from the line items, if any."""
        if not self.line_items:
            return
        total = Decimal("0")
        tax = Decimal("0")
        for line_item in self.line_items:
            net_amount = coerce_decimal(line_item.net_amount)
            tax_amount = coerce_decimal(line_item.tax_amount)
            total += net_amount + tax_amount
            tax += tax_amount
        self.total_amount = total
        self.tax_amount = tax

    def add_line_item(self, line_item: LineItem) -> None:
        self.line_items.append(line_item)
        self.recompute_totals()

    def remove_line_item(self, line_item: LineItem) -> None:
        self.line_items.remove(line_item)
        self.recompute_totals()

    def update_line_item(
        self,
        index: int,
        net_amount: Decimal | None = None,
        tax_amount: Decimal | None = None,
    ) -> LineItem:
        """Change the amounts of one line item and refresh the totals."""
        line_item = self.line_items[index]
        if net_amount is not None:
            line_item.net_amount = coerce_decimal(net_amount)
        if tax_amount is not None:
            line_item.tax_amount = coerce_decimal(tax_amount)
        self.recompute_totals()
        return line_item

    @property
    def net_amount(self) -> Decimal | None:
        if self.total_amount is None:
            return None
        return self.total_amount - (self.tax_amount or Decimal("0"))

    @property
    def total(self) -> Money | None:
        if self.total_amount is None:
            return None
        return Money(self.total_amount, self.currency)

    # Classification

    def is_sent_by(self, party_id: Hashable | None) -> bool:
        """Return True if ``party_id`` sent this item.

        ``None`` denotes the owning party and matches a sender whose
        details are flagged ``is_self``.
        """
        if party_id is None:
            return self.sender_details().is_self
        return self.sender_id == party_id

    def is_received_by(self, party_id: Hashable | None) -> bool:
        """Return True if ``party_id`` received this item."""
        if party_id is None:
            return self.recipient_details().is_self
        return self.recipient_id == party_id

    def is_debit(self, self_id: Hashable | None) -> bool:
        """Return True if this item is a debit from the viewpoint of self_id.

        Raises:
            AmbiguousPartyError: If self_id is neither sender nor recipient,
                or is both.
        """
        sender_is_self = self.is_sent_by(self_id)
        recipient_is_self = self.is_received_by(self_id)
        if not sender_is_self and not recipient_is_self:
            raise AmbiguousPartyError(
                f"self_id {self_id!r} is neither sender nor recipient "
                f"of ledger item {self.id!r}"
            )
        if sender_is_self and recipient_is_self:
            raise AmbiguousPartyError(
                f"self_id {self_id!r} is both sender and recipient "
                f"of ledger item {self.id!r}"
            )
        if self.kind.debit_when_sent_by_self:
            return sender_is_self
        return recipient_is_self

    # Formatting

    def _signed(self, amount: Decimal | None, options: FormatOptions):
        if amount is None:
            return None
        if AmountSign.NEGATIVE not in (options.debit, options.credit):
            return amount
        is_debit = self.is_debit(options.self_id)
        sign = options.debit if is_debit else options.credit
        return -amount if sign is AmountSign.NEGATIVE else amount

    def _format(
        self,
        amount: Decimal | None,
        options: FormatOptions | None,
        formatter: CurrencyFormatter | None,
    ) -> str | None:
        signed = self._signed(amount, options or _DEFAULT_OPTIONS)
        return (formatter or _DEFAULT_FORMATTER).format_amount(
            signed,
            self.currency,
        )

    def total_amount_formatted(
        self,
        options: FormatOptions | None = None,
        formatter: CurrencyFormatter | None = None,
    ) -> str | None:
        """Render the total amount signed for the options' viewpoint."""
        return self._format(self.total_amount, options, formatter)

    def tax_amount_formatted(
        self,
        options: FormatOptions | None = None,
        formatter: CurrencyFormatter | None = None,
    ) -> str | None:
        return self._format(self.tax_amount, options, formatter)

    def net_amount_formatted(
        self,
        options: FormatOptions | None = None,
        formatter: CurrencyFormatter | None = None,
    ) -> str | None:
        return self._format(self.net_amount, options, formatter)


__all__ = [
    "LEDGER_CAPABILITIES",
    "LedgerItemStatus",
    "normalize_status",
    "PartyDetails",
    "LineItem",
    "LedgerRecord",
    "LedgerItem",
]
