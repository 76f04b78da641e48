"""Helpers for Decimal and date normalization."""

from datetime import date, datetime
from decimal import Decimal


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def coerce_optional_decimal(value) -> Decimal | None:
    """Normalize numeric values to Decimal, keeping missing values as None."""
    if value is None:
        return None
    return coerce_decimal(value)


def coerce_date(value) -> date | None:
    """Normalize date-like values from SQL drivers.

    Args:
        value: A date, datetime, ISO string or None.

    Returns:
        date | None: Parsed calendar date.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


__all__ = ["coerce_decimal", "coerce_optional_decimal", "coerce_date"]
