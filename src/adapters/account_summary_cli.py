"""CLI adapter printing account summaries for a party."""

from datetime import date, timedelta
import os

from src.application.ports.ledger_filter import LedgerItemFilter
from src.domain.errors import LedgerError
from src.infrastructure.container import (
    build_account_summaries_use_case,
    build_account_summary_use_case,
    build_ledger_repository,
)
from src.infrastructure.logging.logger import get_app_logger, get_usage_logger
from src.infrastructure.settings import LedgerSettings

TRUTHY = ("1", "true", "yes", "on")


def _parse_date(value: str | None, logger) -> date | None:
    """Parse an ISO date string into a date.

    Args:
        value: Date string in YYYY-MM-DD format.
        logger: Logger used for warnings.

    Returns:
        date | None: Parsed date or None when invalid.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        logger.warning(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        )
        return None


def _parse_party_id(value: str | None):
    """Return the party id as int when numeric, else the stripped string."""
    if value is None or not value.strip():
        return None
    cleaned = value.strip()
    return int(cleaned) if cleaned.isdigit() else cleaned


def _build_scope(start_date: date | None, end_date: date | None):
    if start_date is None and end_date is None:
        return None
    return LedgerItemFilter(
        issue_date_from=start_date,
        issue_date_before=end_date + timedelta(days=1) if end_date else None,
    )


def main() -> None:
    """Print account summaries configured through environment variables."""
    logger = get_app_logger()
    self_id = _parse_party_id(os.getenv("SUMMARY_SELF_ID"))
    if self_id is None:
        logger.warning("SUMMARY_SELF_ID is required to compute a summary.")
        return

    other_id = _parse_party_id(os.getenv("SUMMARY_OTHER_ID"))
    start_date = _parse_date(os.getenv("SUMMARY_START_DATE"), logger)
    end_date = _parse_date(os.getenv("SUMMARY_END_DATE"), logger)
    all_parties = os.getenv("SUMMARY_ALL_PARTIES", "").strip().lower() in TRUTHY
    settings = LedgerSettings.from_env()
    scope = _build_scope(start_date, end_date)
    get_usage_logger().info(
        f"account_summary_cli self={self_id} other={other_id} "
        f"start={start_date} end={end_date} all_parties={all_parties}"
    )

    repository = build_ledger_repository()
    try:
        if all_parties:
            summaries = build_account_summaries_use_case(repository).execute(
                self_id,
                with_status=settings.summary_statuses,
                scope=scope,
            )
            names = repository.party_display_names(summaries.keys())
            for party_id, by_currency in summaries.items():
                for currency, summary in by_currency.items():
                    print(
                        f"{names.get(party_id, party_id)} [{currency}]: "
                        f"{summary}"
                    )
            return

        summary = build_account_summary_use_case(repository).execute(
            self_id,
            other_id,
            with_status=settings.summary_statuses,
            scope=scope,
        )
    except LedgerError as exc:
        logger.error(str(exc))
        return

    if not summary:
        print(f"No ledger items for party {self_id}.")
    for currency, account_summary in summary.items():
        print(f"[{currency}] {account_summary}")


if __name__ == "__main__":  # pragma: no cover
    main()
