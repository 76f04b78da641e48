"""Application ports package."""

from .database import DatabaseEnginePort
from .ledger_filter import LedgerItemFilter, sort_ledger_items
from .ledger_repository import LedgerItemRepositoryPort

__all__ = [
    "DatabaseEnginePort",
    "LedgerItemFilter",
    "LedgerItemRepositoryPort",
    "sort_ledger_items",
]
