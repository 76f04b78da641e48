"""Use case to summarize a party's ledger per currency."""

from collections.abc import Hashable, Iterable

from src.application.ports.ledger_filter import LedgerItemFilter
from src.application.ports.ledger_repository import LedgerItemRepositoryPort
from src.domain.constants import DEFAULT_SUMMARY_STATUSES
from src.domain.currency import CurrencyFormatter
from src.domain.models.ledger import normalize_status
from src.domain.models.summary import AccountSummary
from src.domain.services.summaries import compute_account_summary
from src.infrastructure.logging.logger import get_app_logger


def build_summary_filter(
    self_id: Hashable,
    other_id: Hashable | None,
    with_status: Iterable[str] | None,
    scope: LedgerItemFilter | None,
) -> LedgerItemFilter:
    """Layer party and status constraints on top of a caller scope.

    Args:
        self_id: Party the summary is computed for.
        other_id: Optional counterparty.
        with_status: Statuses to include; defaults to the scope's statuses,
            or closed and cleared when the scope sets none.
        scope: Caller-supplied criteria such as an issue date range.

    Returns:
        LedgerItemFilter: Criteria passed to the repository.
    """
    base = scope or LedgerItemFilter()
    return base.narrow(
        sent_or_received_by=self_id,
        involving=other_id if other_id is not None else base.involving,
        statuses=_summary_statuses(with_status, base.statuses),
    )


def _summary_statuses(
    with_status: Iterable[str] | None,
    scope_statuses: tuple[str, ...] | None,
) -> tuple[str, ...]:
    """Combine requested statuses with those the scope already allows.

    The scope only ever narrows: when both are given the result is their
    intersection, in requested order.
    """
    requested = (
        tuple(normalize_status(status) for status in with_status)
        if with_status
        else None
    )
    if scope_statuses is None:
        return requested or DEFAULT_SUMMARY_STATUSES
    if requested is None:
        return scope_statuses
    return tuple(status for status in requested if status in scope_statuses)


class GetAccountSummaryUseCase:
    """Compute account summaries between a party and its counterparties."""

    def __init__(
        self,
        ledger_repository: LedgerItemRepositoryPort,
        logger=None,
        formatter: CurrencyFormatter | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port providing filtered ledger items.
            logger: Optional logger compatible with logging.Logger-like API.
            formatter: Optional formatter attached to the summaries.
        """
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()
        self._formatter = formatter or CurrencyFormatter()

    def execute(
        self,
        self_id: Hashable,
        other_id: Hashable | None = None,
        with_status: Iterable[str] | None = None,
        scope: LedgerItemFilter | None = None,
    ) -> dict[str, AccountSummary]:
        """Return summaries keyed by currency.

        Args:
            self_id: Party the summary is computed for.
            other_id: Optional counterparty; all counterparties when None.
            with_status: Optional statuses overriding closed and cleared.
            scope: Optional caller criteria narrowing the ledger items.

        Returns:
            dict[str, AccountSummary]: Summary per currency code.
        """
        criteria = build_summary_filter(self_id, other_id, with_status, scope)
        items = self._ledger_repository.filtered(criteria)
        summaries = compute_account_summary(
            items,
            self_id,
            other_id,
            formatter=self._formatter,
            logger=self._logger,
        )
        for currency, summary in summaries.items():
            self._logger.info(
                f"Account summary for {self_id} "
                f"(other={other_id}, {currency}): {summary}"
            )
        return summaries


__all__ = ["GetAccountSummaryUseCase", "build_summary_filter"]
