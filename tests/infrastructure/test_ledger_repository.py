"""Tests for the SQLAlchemy ledger repository on an in-memory SQLite DB."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.pool import StaticPool

from src.application.ports.ledger_filter import LedgerItemFilter
from src.application.use_cases.get_account_summary import (
    GetAccountSummaryUseCase,
)
from src.application.use_cases.update_line_items import (
    LineItemChange,
    UpdateLineItemsUseCase,
)
from src.domain.errors import NotFoundError, UnimplementedCapabilityError
from src.domain.models.kinds import INVOICE
from src.domain.models.ledger import LedgerItem, LineItem
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.ledger_repository import (
    SqlAlchemyLedgerItemRepository,
)
from tests.support.ledger_fixtures import (
    PARTIES,
    build_registry,
    seed_repository,
)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    yield engine
    engine.dispose()


@pytest.fixture
def repository(engine):
    repository = SqlAlchemyLedgerItemRepository(
        SqlAlchemyDatabaseEngineAdapter(engine),
        registry=build_registry(),
        logger=MagicMock(),
    )
    repository.create_schema()
    seed_repository(repository)
    return repository


def _ids(repository, criteria=None) -> list:
    return [item.id for item in repository.filtered(criteria)]


def test_find_loads_item_with_lines_and_parties(repository) -> None:
    item = repository.find(1)

    assert item.kind.name == "Invoice"
    assert item.currency == "GBP"
    assert item.issue_date == date(2008, 6, 30)
    assert item.total_amount == Decimal("315")
    assert item.tax_amount == Decimal("15")
    assert [line.net_amount for line in item.line_items] == [
        Decimal("200"),
        Decimal("100"),
    ]
    assert item.sender_details().is_self
    assert item.recipient_details().name == "Lovely Customer Inc."


def test_find_resolves_registered_kinds(repository) -> None:
    assert repository.find(2).kind.name == "InvoiceSubtype"
    assert repository.find(6).kind.debit_when_sent_by_self


def test_find_unknown_raises(repository) -> None:
    with pytest.raises(NotFoundError):
        repository.find(404)


def test_filtered_matches_in_memory_scopes(repository) -> None:
    """SQL filtering agrees with the in-process criteria."""
    assert _ids(repository, LedgerItemFilter(sent_by=2)) == [2, 5]
    assert _ids(repository, LedgerItemFilter.open_or_pending()) == [8, 9]
    assert _ids(repository, LedgerItemFilter.in_effect()) == [
        1, 2, 3, 4, 5, 6, 11,
    ]
    assert _ids(repository, LedgerItemFilter(due_at=date(2009, 1, 30))) == [
        1, 3, 4, 7, 8, 10, 11,
    ]


def test_filtered_sorts_by_column(repository) -> None:
    assert _ids(repository, LedgerItemFilter(sort_by="issue_date")) == [
        5, 1, 4, 3, 8, 2, 6, 7, 9, 10, 11,
    ]


def test_summary_over_sql_backend(repository) -> None:
    use_case = GetAccountSummaryUseCase(repository, logger=MagicMock())

    gbp = use_case.execute(1)["GBP"]

    assert gbp.sales == Decimal("257.50")
    assert gbp.purchases == Decimal("666808.63")
    assert gbp.balance == Decimal("-666807.63")


def test_update_line_items_round_trip(repository) -> None:
    """Saving rewrites line items and totals in one transaction."""
    use_case = UpdateLineItemsUseCase(repository, logger=MagicMock())

    reloaded = use_case.execute(
        9,
        [LineItemChange(index=0, net_amount=Decimal("20"), tax_amount=3)],
    )

    assert reloaded.total_amount == Decimal("23")
    assert reloaded.tax_amount == Decimal("3")
    assert len(reloaded.line_items) == 1
    assert repository.find(9).total_amount == Decimal("23")


def test_save_new_item_assigns_id(repository) -> None:
    item = repository.find(4)
    item.id = None
    item.uuid = None

    saved = repository.save(item)

    assert saved.id == 12
    assert saved.uuid
    assert repository.find(12).total_amount == Decimal("256.50")


def test_missing_party_rows_fail_loudly(repository, engine) -> None:
    """Stored items whose parties are gone cannot be rebuilt."""
    with engine.begin() as conn:
        conn.execute(text("DELETE FROM parties WHERE id = 4"))

    with pytest.raises(UnimplementedCapabilityError):
        repository.find(6)


def test_party_display_names(repository) -> None:
    assert repository.party_display_names([2, 3, 99]) == {
        2: "Lovely Customer Inc.",
        3: "I drink milk",
    }
    assert repository.party_display_names([]) == {}
    with pytest.raises(NotFoundError):
        repository.party_display_name(99)


def test_large_amounts_round_trip_exactly(repository) -> None:
    """Amounts keep every cent through storage."""
    invoice = LedgerItem(
        kind=INVOICE,
        sender_id=1,
        recipient_id=2,
        currency="GBP",
        status="closed",
        sender=PARTIES[1],
        recipient=PARTIES[2],
        line_items=[
            LineItem(Decimal("1234567890123456.78")),
            LineItem(Decimal("0.01"), Decimal("0.0001")),
        ],
    )

    saved = repository.save(invoice)
    reloaded = repository.find(saved.id)

    assert reloaded.total_amount == Decimal("1234567890123456.7901")
    assert reloaded.tax_amount == Decimal("0.0001")
    assert reloaded.line_items[0].net_amount == Decimal("1234567890123456.78")


def test_filtered_sorts_amounts_numerically(repository) -> None:
    """Decimal text columns still sort by value."""
    ids = _ids(repository, LedgerItemFilter(sort_by="total_amount"))

    assert ids == [3, 8, 9, 2, 4, 1, 5, 10, 6, 7, 11]
