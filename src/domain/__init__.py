"""Domain package for ledger classification and aggregation rules."""

from .constants import DEFAULT_SUMMARY_STATUSES, MINUS_SIGN
from .currency import (
    AmountSign,
    CurrencyFormatter,
    CurrencyInfo,
    FormatOptions,
    StaticCurrencyMetadata,
)
from .errors import (
    AmbiguousPartyError,
    CurrencyMismatchError,
    LedgerError,
    NotFoundError,
    UnimplementedCapabilityError,
    UnknownFieldError,
    UnknownKindError,
)
from .money import Money
from .models import (
    AccountSummary,
    KindRegistry,
    LedgerItem,
    LedgerItemKind,
    LedgerItemStatus,
    LineItem,
    PartyDetails,
)
from .services import compute_account_summaries, compute_account_summary

__all__ = [
    "AccountSummary",
    "AmbiguousPartyError",
    "AmountSign",
    "CurrencyFormatter",
    "CurrencyInfo",
    "CurrencyMismatchError",
    "DEFAULT_SUMMARY_STATUSES",
    "FormatOptions",
    "KindRegistry",
    "LedgerError",
    "LedgerItem",
    "LedgerItemKind",
    "LedgerItemStatus",
    "LineItem",
    "MINUS_SIGN",
    "Money",
    "NotFoundError",
    "PartyDetails",
    "StaticCurrencyMetadata",
    "UnimplementedCapabilityError",
    "UnknownFieldError",
    "UnknownKindError",
    "compute_account_summaries",
    "compute_account_summary",
]
