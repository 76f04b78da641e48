"""Tests for the account_summary_cli adapter."""

from datetime import date
from unittest.mock import MagicMock

import pytest

from src.adapters import account_summary_cli
from src.infrastructure import container
from tests.support.ledger_fixtures import build_repository


@pytest.fixture
def fake_logger(monkeypatch):
    logger = MagicMock()
    usage_logger = MagicMock()
    monkeypatch.setattr(account_summary_cli, "get_app_logger", lambda: logger)
    monkeypatch.setattr(
        account_summary_cli,
        "get_usage_logger",
        lambda: usage_logger,
    )
    monkeypatch.setattr(container, "get_app_logger", lambda: logger)
    monkeypatch.setattr(
        account_summary_cli,
        "build_ledger_repository",
        lambda: build_repository(logger=logger),
    )
    for name in (
        "SUMMARY_SELF_ID",
        "SUMMARY_OTHER_ID",
        "SUMMARY_START_DATE",
        "SUMMARY_END_DATE",
        "SUMMARY_ALL_PARTIES",
        "LEDGER_SUMMARY_STATUSES",
    ):
        monkeypatch.delenv(name, raising=False)
    logger.usage = usage_logger
    return logger


def test_main_requires_self_id(fake_logger, capsys) -> None:
    account_summary_cli.main()

    fake_logger.warning.assert_called_once()
    assert capsys.readouterr().out == ""


def test_main_prints_summary_between_parties(
    fake_logger,
    monkeypatch,
    capsys,
) -> None:
    """The CLI prints one line per currency."""
    monkeypatch.setenv("SUMMARY_SELF_ID", "1")
    monkeypatch.setenv("SUMMARY_OTHER_ID", "2")

    account_summary_cli.main()

    out = capsys.readouterr().out.strip().splitlines()
    assert out == [
        "[GBP] sales = £257.50; purchases = £141.97; "
        "sale_receipts = £256.50; purchase_payments = £0.00; "
        "balance = −£140.97"
    ]
    fake_logger.usage.info.assert_called_once()


def test_main_applies_inclusive_date_range(
    fake_logger,
    monkeypatch,
    capsys,
) -> None:
    monkeypatch.setenv("SUMMARY_SELF_ID", "1")
    monkeypatch.setenv("SUMMARY_OTHER_ID", "2")
    monkeypatch.setenv("SUMMARY_START_DATE", "2008-01-01")
    monkeypatch.setenv("SUMMARY_END_DATE", "2008-12-31")

    account_summary_cli.main()

    assert "balance = £1.00" in capsys.readouterr().out


def test_main_prints_all_parties(fake_logger, monkeypatch, capsys) -> None:
    """Every counterparty is listed by display name."""
    monkeypatch.setenv("SUMMARY_SELF_ID", "2")
    monkeypatch.setenv("SUMMARY_ALL_PARTIES", "yes")

    account_summary_cli.main()

    out = capsys.readouterr().out.strip().splitlines()
    assert len(out) == 2
    assert out[0].startswith("Unlimited Limited [GBP]: ")
    assert out[0].endswith("balance = £140.97")
    assert out[1].startswith("I drink milk [USD]: ")
    assert out[1].endswith("balance = −$432.10")


def test_main_reports_empty_ledger(fake_logger, monkeypatch, capsys) -> None:
    monkeypatch.setenv("SUMMARY_SELF_ID", "99")

    account_summary_cli.main()

    assert "No ledger items for party 99." in capsys.readouterr().out


def test_main_logs_ledger_errors(fake_logger, monkeypatch, capsys) -> None:
    """Domain errors are logged rather than raised."""
    monkeypatch.setenv("SUMMARY_SELF_ID", "self")
    failing = MagicMock()
    failing.execute.side_effect = account_summary_cli.LedgerError("boom")
    monkeypatch.setattr(
        account_summary_cli,
        "build_account_summary_use_case",
        lambda repository: failing,
    )

    account_summary_cli.main()

    fake_logger.error.assert_called_once_with("boom")
    assert capsys.readouterr().out == ""


def test_parse_helpers() -> None:
    logger = MagicMock()

    assert account_summary_cli._parse_party_id(" 42 ") == 42
    assert account_summary_cli._parse_party_id("acme") == "acme"
    assert account_summary_cli._parse_party_id("  ") is None
    assert account_summary_cli._parse_date("2009-01-31", logger) == date(
        2009, 1, 31
    )
    assert account_summary_cli._parse_date("31/01/2009", logger) is None
    logger.warning.assert_called_once()
