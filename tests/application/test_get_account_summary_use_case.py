"""Tests for the account summary use cases."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from src.application.ports.ledger_filter import LedgerItemFilter
from src.application.use_cases.get_account_summaries import (
    GetAccountSummariesUseCase,
)
from src.application.use_cases.get_account_summary import (
    GetAccountSummaryUseCase,
    build_summary_filter,
)
from tests.support.ledger_fixtures import build_repository


def _use_case() -> GetAccountSummaryUseCase:
    logger = MagicMock()
    return GetAccountSummaryUseCase(
        ledger_repository=build_repository(logger=logger),
        logger=logger,
    )


def _summaries_use_case() -> GetAccountSummariesUseCase:
    logger = MagicMock()
    return GetAccountSummariesUseCase(
        ledger_repository=build_repository(logger=logger),
        logger=logger,
    )


def test_account_summary() -> None:
    """Closed and cleared items between two parties are summarized."""
    summary = _use_case().execute(1, 2)

    assert list(summary) == ["GBP"]
    gbp = summary["GBP"]
    assert gbp.sales == Decimal("257.50")
    assert gbp.purchases == Decimal("141.97")
    assert gbp.sale_receipts == Decimal("256.50")
    assert gbp.purchase_payments == Decimal("0.00")
    assert gbp.balance == Decimal("-140.97")


def test_account_summary_with_scope() -> None:
    """Caller scopes narrow the summarized items."""
    scope = LedgerItemFilter(
        issue_date_from=date(2008, 1, 1),
        issue_date_before=date(2009, 1, 1),
    )

    summary = _use_case().execute(1, 2, scope=scope)

    gbp = summary["GBP"]
    assert gbp.sales == Decimal("257.50")
    assert gbp.purchases == Decimal("0.00")
    assert gbp.sale_receipts == Decimal("256.50")
    assert gbp.balance == Decimal("1.00")


def test_account_summary_over_all_others() -> None:
    summary = _use_case().execute(1)

    assert list(summary) == ["GBP"]
    gbp = summary["GBP"]
    assert gbp.sales == Decimal("257.50")
    assert gbp.purchases == Decimal("666808.63")
    assert gbp.sale_receipts == Decimal("256.50")
    assert gbp.purchase_payments == Decimal("0.00")
    assert gbp.balance == Decimal("-666807.63")


def test_account_summary_with_explicit_status() -> None:
    """Explicit statuses replace the closed and cleared default."""
    summary = _use_case().execute(
        1,
        with_status=["open", "closed", "cleared"],
    )

    gbp = summary["GBP"]
    assert gbp.sales == Decimal("269.00")
    assert gbp.purchases == Decimal("666808.63")
    assert gbp.sale_receipts == Decimal("256.50")
    assert gbp.balance == Decimal("-666796.13")


def test_account_summary_to_string() -> None:
    summary = _use_case().execute(1, 2)

    assert str(summary["GBP"]) == (
        "sales = £257.50; purchases = £141.97; sale_receipts = £256.50; "
        "purchase_payments = £0.00; balance = −£140.97"
    )


def test_account_summary_formatting() -> None:
    gbp = _use_case().execute(1)["GBP"]

    assert gbp.purchases_formatted == "£666,808.63"
    assert gbp.balance_formatted == "−£666,807.63"


def test_account_summary_logs_each_currency() -> None:
    logger = MagicMock()
    use_case = GetAccountSummaryUseCase(
        ledger_repository=build_repository(logger=MagicMock()),
        logger=logger,
    )

    use_case.execute(2)

    messages = [call.args[0] for call in logger.info.call_args_list]
    assert any("GBP" in message for message in messages)
    assert any("USD" in message for message in messages)


def test_account_summaries() -> None:
    summaries = _summaries_use_case().execute(2)

    assert list(summaries) == [1, 3]
    assert list(summaries[1]) == ["GBP"]
    first = summaries[1]["GBP"]
    assert first.sales == Decimal("141.97")
    assert first.purchases == Decimal("257.50")
    assert first.sale_receipts == Decimal("0.00")
    assert first.purchase_payments == Decimal("256.50")
    assert first.balance == Decimal("140.97")
    assert list(summaries[3]) == ["USD"]
    milk = summaries[3]["USD"]
    assert milk.sale_receipts == Decimal("432.10")
    assert milk.balance == Decimal("-432.10")


def test_account_summaries_with_scope() -> None:
    scope = LedgerItemFilter(issue_date_before=date(2008, 7, 1))

    summaries = _summaries_use_case().execute(2, scope=scope)

    first = summaries[1]["GBP"]
    assert first.sales == Decimal("0.00")
    assert first.purchases == Decimal("315.00")
    assert first.sale_receipts == Decimal("0.00")
    assert first.purchase_payments == Decimal("0.00")
    assert first.balance == Decimal("-315.00")


def test_build_summary_filter_keeps_scope_criteria() -> None:
    """Party and status constraints are layered over the caller scope."""
    scope = LedgerItemFilter(involving=3, currency="usd")

    criteria = build_summary_filter(2, None, None, scope)

    assert criteria.sent_or_received_by == 2
    assert criteria.involving == 3
    assert criteria.currency == "USD"
    assert criteria.statuses == ("closed", "cleared")


def test_build_summary_filter_prefers_explicit_other() -> None:
    scope = LedgerItemFilter(involving=3)

    criteria = build_summary_filter(1, 2, ["Open"], scope)

    assert criteria.involving == 2
    assert criteria.statuses == ("open",)


def test_account_summary_keeps_scope_statuses() -> None:
    """A scope limited to open items is not widened to closed ones."""
    scope = LedgerItemFilter(statuses=("open",))

    gbp = _use_case().execute(1, 2, scope=scope)["GBP"]

    assert gbp.sales == Decimal("11.50")
    assert gbp.purchases == Decimal("0.00")
    assert gbp.sale_receipts == Decimal("0.00")
    assert gbp.balance == Decimal("11.50")


def test_account_summary_intersects_explicit_and_scope_statuses() -> None:
    scope = LedgerItemFilter.open_or_pending()

    summary = _use_case().execute(
        1,
        2,
        with_status=["open", "closed"],
        scope=scope,
    )

    assert summary["GBP"].sales == Decimal("11.50")
    assert _use_case().execute(
        1, 2, with_status=["closed"], scope=scope
    ) == {}


def test_build_summary_filter_intersects_statuses() -> None:
    scope = LedgerItemFilter(statuses=("open", "pending"))

    assert build_summary_filter(1, 2, None, scope).statuses == (
        "open",
        "pending",
    )
    criteria = build_summary_filter(1, 2, ["Pending", "closed"], scope)
    assert criteria.statuses == ("pending",)
