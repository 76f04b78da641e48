"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.ledger_repository import LedgerItemRepositoryPort
from src.application.use_cases.get_account_summaries import (
    GetAccountSummariesUseCase,
)
from src.application.use_cases.get_account_summary import (
    GetAccountSummaryUseCase,
)
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.ledger_repository_factory import (
    create_ledger_repository,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import LedgerSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_ledger_repository(
    db_port: DatabaseEnginePort | None = None,
) -> LedgerItemRepositoryPort:
    """Return the configured ledger repository."""
    resolved_db = db_port or build_database_adapter()
    settings = LedgerSettings.from_env()
    return create_ledger_repository(
        resolved_db,
        logger=get_app_logger(),
        settings=settings,
    )


def build_account_summary_use_case(
    repository: LedgerItemRepositoryPort | None = None,
) -> GetAccountSummaryUseCase:
    """Return the account summary use case wired to the repository."""
    return GetAccountSummaryUseCase(
        repository or build_ledger_repository(),
        logger=get_app_logger(),
    )


def build_account_summaries_use_case(
    repository: LedgerItemRepositoryPort | None = None,
) -> GetAccountSummariesUseCase:
    """Return the per-counterparty summaries use case."""
    return GetAccountSummariesUseCase(
        repository or build_ledger_repository(),
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_ledger_repository",
    "build_account_summary_use_case",
    "build_account_summaries_use_case",
]
