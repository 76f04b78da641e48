"""Ledger item kinds and their debit/credit descriptors.

A kind is a closed, statically declared variant: each descriptor carries the
flags used for capability discovery and the polarity rule used for debit and
credit classification. Subtypes copy every flag from their base kind, so
classification never depends on the concrete subtype.
"""

from dataclasses import dataclass, replace

from src.domain.errors import UnknownFieldError, UnknownKindError


@dataclass(frozen=True)
class LedgerItemKind:
    """Descriptor of a ledger item kind.

    Attributes:
        name: Unique kind name (e.g. Invoice).
        is_invoice: Whether the kind is an invoice.
        is_credit_note: Whether the kind is a credit note.
        is_payment: Whether the kind is a payment.
        debit_when_sent_by_self: True when sending the item debits the
            sender (invoices, credit notes); False when it credits the
            sender (payments, receipts).
        base: Name of the kind this one was derived from.
    """

    name: str
    is_invoice: bool = False
    is_credit_note: bool = False
    is_payment: bool = False
    debit_when_sent_by_self: bool = False
    base: str | None = None

    def subtype(self, name: str) -> "LedgerItemKind":
        """Return a new kind inheriting this kind's flags and polarity."""
        return replace(self, name=name, base=self.name)


LEDGER_ITEM = LedgerItemKind(name="LedgerItem")
INVOICE = LedgerItemKind(
    name="Invoice",
    is_invoice=True,
    debit_when_sent_by_self=True,
)
CREDIT_NOTE = LedgerItemKind(
    name="CreditNote",
    is_credit_note=True,
    debit_when_sent_by_self=True,
)
PAYMENT = LedgerItemKind(name="Payment", is_payment=True)

DEFAULT_KINDS = (LEDGER_ITEM, INVOICE, CREDIT_NOTE, PAYMENT)

DESCRIPTOR_ATTRIBUTES = (
    "is_invoice",
    "is_credit_note",
    "is_payment",
    "debit_when_sent_by_self",
)


class KindRegistry:
    """Closed table of the ledger item kinds known to a ledger."""

    def __init__(self, kinds=DEFAULT_KINDS) -> None:
        self._kinds: dict[str, LedgerItemKind] = {}
        for kind in kinds:
            self.register(kind)

    def register(self, kind: LedgerItemKind) -> LedgerItemKind:
        """Add a kind to the registry.

        Args:
            kind: Descriptor to register.

        Returns:
            LedgerItemKind: The registered descriptor.

        Raises:
            ValueError: If another descriptor already uses the name.
        """
        existing = self._kinds.get(kind.name)
        if existing is not None and existing != kind:
            raise ValueError(f"Ledger item kind already registered: {kind.name}")
        if kind.base is not None and kind.base not in self._kinds:
            raise UnknownKindError(f"Unknown base kind: {kind.base}")
        self._kinds[kind.name] = kind
        return kind

    def declare_subtype(self, name: str, base: str) -> LedgerItemKind:
        """Register a subtype of an already registered kind."""
        return self.register(self.get(base).subtype(name))

    def get(self, name: str) -> LedgerItemKind:
        try:
            return self._kinds[name]
        except KeyError:
            raise UnknownKindError(f"Unknown ledger item kind: {name}") from None

    def __contains__(self, name: object) -> bool:
        return name in self._kinds

    def __iter__(self):
        return iter(sorted(self._kinds.values(), key=lambda kind: kind.name))

    def __len__(self) -> int:
        return len(self._kinds)

    def select_matching_subclasses(
        self,
        attribute: str,
        value: bool,
    ) -> list[LedgerItemKind]:
        """Return kinds whose descriptor attribute equals ``value``.

        Args:
            attribute: Descriptor flag such as ``is_invoice``.
            value: Expected flag value.

        Returns:
            list[LedgerItemKind]: Matching kinds ordered by name.

        Raises:
            UnknownFieldError: If the attribute is not a descriptor flag.
        """
        if attribute not in DESCRIPTOR_ATTRIBUTES:
            raise UnknownFieldError(
                f"Unknown ledger item kind attribute: {attribute}"
            )
        return [kind for kind in self if getattr(kind, attribute) == value]


__all__ = [
    "LedgerItemKind",
    "KindRegistry",
    "LEDGER_ITEM",
    "INVOICE",
    "CREDIT_NOTE",
    "PAYMENT",
    "DEFAULT_KINDS",
    "DESCRIPTOR_ATTRIBUTES",
]
