"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

from src.domain.constants import DEFAULT_SUMMARY_STATUSES
from src.infrastructure.logging.logger import get_app_logger

SUPPORTED_BACKENDS = ("sqlalchemy", "memory")


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for selecting the ledger backend.

    Attributes:
        backend: Backend identifier (sqlalchemy or memory).
        summary_statuses: Statuses included in account summaries by default.
    """

    backend: str = "sqlalchemy"
    summary_statuses: tuple[str, ...] = DEFAULT_SUMMARY_STATUSES

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        logger = get_app_logger()
        backend = os.getenv("LEDGER_BACKEND", "sqlalchemy").strip().lower()
        if backend not in SUPPORTED_BACKENDS:
            logger.warning(
                f"Unknown LEDGER_BACKEND '{backend}'. "
                f"Expected one of {', '.join(SUPPORTED_BACKENDS)}."
            )
        statuses = cls._parse_statuses(os.getenv("LEDGER_SUMMARY_STATUSES"))
        return cls(
            backend=backend,
            summary_statuses=statuses or DEFAULT_SUMMARY_STATUSES,
        )

    @staticmethod
    def _parse_statuses(raw: str | None) -> tuple[str, ...]:
        """Split a comma separated status list.

        Args:
            raw: Raw environment value.

        Returns:
            tuple[str, ...]: Lower-cased statuses, empty when unset.
        """
        if not raw:
            return ()
        return tuple(
            status.strip().lower() for status in raw.split(",") if status.strip()
        )


__all__ = ["LedgerSettings", "SUPPORTED_BACKENDS"]
