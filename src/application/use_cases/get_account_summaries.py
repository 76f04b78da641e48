"""Use case to summarize a party's ledger per counterparty."""

from collections.abc import Hashable, Iterable

from src.application.ports.ledger_filter import LedgerItemFilter
from src.application.ports.ledger_repository import LedgerItemRepositoryPort
from src.application.use_cases.get_account_summary import build_summary_filter
from src.domain.currency import CurrencyFormatter
from src.domain.models.summary import AccountSummary
from src.domain.services.summaries import compute_account_summaries
from src.infrastructure.logging.logger import get_app_logger


class GetAccountSummariesUseCase:
    """Compute account summaries for every counterparty of a party."""

    def __init__(
        self,
        ledger_repository: LedgerItemRepositoryPort,
        logger=None,
        formatter: CurrencyFormatter | None = None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()
        self._formatter = formatter or CurrencyFormatter()

    def execute(
        self,
        self_id: Hashable,
        with_status: Iterable[str] | None = None,
        scope: LedgerItemFilter | None = None,
    ) -> dict[Hashable, dict[str, AccountSummary]]:
        """Return summaries keyed by counterparty id, then currency.

        Args:
            self_id: Party the summaries are computed for.
            with_status: Optional statuses overriding closed and cleared.
            scope: Optional caller criteria narrowing the ledger items.

        Returns:
            dict[Hashable, dict[str, AccountSummary]]: Nested summaries.
        """
        criteria = build_summary_filter(self_id, None, with_status, scope)
        items = self._ledger_repository.filtered(criteria)
        summaries = compute_account_summaries(
            items,
            self_id,
            formatter=self._formatter,
            logger=self._logger,
        )
        self._logger.info(
            f"Computed account summaries for {self_id} "
            f"with {len(summaries)} counterparties"
        )
        return summaries


__all__ = ["GetAccountSummariesUseCase"]
