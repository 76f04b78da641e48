"""Tests for the AccountSummary model."""

from decimal import Decimal

import pytest

from src.domain.errors import UnknownFieldError
from src.domain.models.summary import AccountSummary


def _summary() -> AccountSummary:
    return AccountSummary(
        currency="GBP",
        sales=Decimal("257.50"),
        purchases=Decimal("141.97"),
        sale_receipts=Decimal("256.50"),
    )


def test_balance_combines_buckets() -> None:
    assert _summary().balance == Decimal("-140.97")


def test_string_lists_every_field() -> None:
    """The string form renders every bucket and the balance."""
    assert str(_summary()) == (
        "sales = £257.50; purchases = £141.97; sale_receipts = £256.50; "
        "purchase_payments = £0.00; balance = −£140.97"
    )


def test_formatted_accessors() -> None:
    summary = _summary()

    assert summary.sales_formatted == "£257.50"
    assert summary.balance_formatted == "−£140.97"
    assert summary["purchases_formatted"] == "£141.97"
    assert summary["sale_receipts"] == Decimal("256.50")


@pytest.mark.parametrize("name", ["something_formatted", "refunds", "total"])
def test_unknown_fields_raise(name) -> None:
    """Unknown names fail instead of returning nothing."""
    summary = _summary()

    with pytest.raises(UnknownFieldError):
        getattr(summary, name)
    with pytest.raises(UnknownFieldError):
        summary[name]


def test_unknown_field_is_attribute_error() -> None:
    assert not hasattr(_summary(), "foo_formatted")


def test_equality_ignores_formatter() -> None:
    assert _summary() == _summary()
