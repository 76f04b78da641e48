"""Domain models package."""

from .kinds import (
    CREDIT_NOTE,
    INVOICE,
    LEDGER_ITEM,
    PAYMENT,
    KindRegistry,
    LedgerItemKind,
)
from .ledger import (
    LedgerItem,
    LedgerItemStatus,
    LedgerRecord,
    LineItem,
    PartyDetails,
)
from .summary import AccountSummary

__all__ = [
    "AccountSummary",
    "CREDIT_NOTE",
    "INVOICE",
    "KindRegistry",
    "LEDGER_ITEM",
    "LedgerItem",
    "LedgerItemKind",
    "LedgerItemStatus",
    "LedgerRecord",
    "LineItem",
    "PAYMENT",
    "PartyDetails",
]
