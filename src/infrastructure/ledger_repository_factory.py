"""Factory helpers to select the ledger repository backend."""

import os

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.ledger_repository import LedgerItemRepositoryPort
from src.domain.models.kinds import KindRegistry
from src.infrastructure.in_memory_ledger_repository import (
    InMemoryLedgerItemRepository,
)
from src.infrastructure.ledger_repository import SqlAlchemyLedgerItemRepository
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import LedgerSettings


def create_ledger_repository(
    db_port: DatabaseEnginePort,
    logger=None,
    backend: str | None = None,
    settings: LedgerSettings | None = None,
    registry: KindRegistry | None = None,
) -> LedgerItemRepositoryPort:
    """Return a ledger repository implementation based on configuration.

    Args:
        db_port: Port providing access to the ledger engine (SQL backend).
        logger: Optional logger compatible with logging.Logger-like API.
        backend: Optional backend override (sqlalchemy or memory).
        settings: Optional settings; read from the environment when omitted.
        registry: Optional registry of ledger item kinds.

    Returns:
        LedgerItemRepositoryPort: Concrete repository implementation.
    """
    resolved_logger = logger or get_app_logger()
    if backend is None and settings is not None:
        backend = settings.backend
    selected_backend = (
        backend or os.getenv("LEDGER_BACKEND", "sqlalchemy")
    ).strip().lower()

    if selected_backend == "sqlalchemy":
        return SqlAlchemyLedgerItemRepository(
            db_port,
            registry=registry,
            logger=resolved_logger,
        )

    if selected_backend == "memory":
        resolved_logger.warning(
            "Using the in-memory ledger backend; data is not persisted"
        )
        return InMemoryLedgerItemRepository(
            registry=registry,
            logger=resolved_logger,
        )

    raise ValueError(
        "Unsupported ledger backend: "
        f"{selected_backend}. Expected sqlalchemy or memory."
    )


__all__ = ["create_ledger_repository"]
