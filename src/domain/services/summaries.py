"""Domain services aggregating ledger items into account summaries."""

from collections.abc import Hashable, Iterable
from decimal import Decimal
from logging import Logger

from src.domain.currency import CurrencyFormatter
from src.domain.errors import AmbiguousPartyError
from src.domain.models.ledger import LedgerItem
from src.domain.models.summary import AccountSummary

BUCKETS = ("sales", "purchases", "sale_receipts", "purchase_payments")

_Totals = dict[tuple[Hashable, str], dict[str, Decimal]]


def classify_for_summary(
    item: LedgerItem,
    self_id: Hashable,
) -> tuple[str, Hashable]:
    """Return the summary bucket and counterparty of an item.

    Args:
        item: Ledger item involving ``self_id``.
        self_id: Party the summary is computed for.

    Returns:
        tuple[str, Hashable]: Bucket name and the other party's id.

    Raises:
        AmbiguousPartyError: If ``self_id`` is not exactly one side of the
            item.
    """
    sent = item.sender_id == self_id
    received = item.recipient_id == self_id
    if sent == received:
        side = "both sender and recipient" if sent else "not involved"
        raise AmbiguousPartyError(
            f"Cannot classify ledger item {item.id!r}: "
            f"party {self_id!r} is {side}"
        )
    if item.kind.debit_when_sent_by_self:
        bucket = "sales" if sent else "purchases"
    else:
        bucket = "sale_receipts" if sent else "purchase_payments"
    other_id = item.recipient_id if sent else item.sender_id
    return bucket, other_id


def _accumulate(
    items: Iterable[LedgerItem],
    self_id: Hashable,
    logger: Logger | None,
) -> _Totals:
    if self_id is None:
        raise AmbiguousPartyError("Account summaries require an explicit self_id")
    totals: _Totals = {}
    for item in items:
        bucket, other_id = classify_for_summary(item, self_id)
        key = (other_id, item.currency)
        buckets = totals.setdefault(
            key,
            {name: Decimal("0.00") for name in BUCKETS},
        )
        if item.total_amount is None:
            if logger is not None:
                logger.debug(
                    f"Ledger item {item.id!r} has no total; counted as zero"
                )
            continue
        buckets[bucket] += item.total_amount
    return totals


def _party_order(party_id: Hashable) -> tuple:
    # Numeric ids first, then other ids by their text, then None.
    if party_id is None:
        return (2, "")
    if isinstance(party_id, (int, float, Decimal)):
        return (0, party_id)
    return (1, str(party_id))


def _summary_order(key: tuple[Hashable, str]) -> tuple:
    party_id, currency = key
    return (_party_order(party_id), currency)


def _build_summary(
    currency: str,
    buckets: dict[str, Decimal],
    formatter: CurrencyFormatter,
) -> AccountSummary:
    return AccountSummary(currency=currency, formatter=formatter, **buckets)


def compute_account_summary(
    items: Iterable[LedgerItem],
    self_id: Hashable,
    other_id: Hashable | None = None,
    *,
    formatter: CurrencyFormatter | None = None,
    logger: Logger | None = None,
) -> dict[str, AccountSummary]:
    """Sum ledger items per currency from the viewpoint of ``self_id``.

    Args:
        items: Already filtered ledger items involving ``self_id``.
        self_id: Party the summary is computed for.
        other_id: Optional counterparty restricting the summary.
        formatter: Formatter attached to the summaries.
        logger: Optional logger for diagnostics.

    Returns:
        dict[str, AccountSummary]: Summaries keyed by currency code.
    """
    resolved_formatter = formatter or CurrencyFormatter()
    merged: dict[str, dict[str, Decimal]] = {}
    for (counterparty, currency), buckets in _accumulate(
        items, self_id, logger
    ).items():
        if other_id is not None and counterparty != other_id:
            continue
        target = merged.setdefault(
            currency,
            {name: Decimal("0.00") for name in BUCKETS},
        )
        for name, amount in buckets.items():
            target[name] += amount
    return {
        currency: _build_summary(currency, merged[currency], resolved_formatter)
        for currency in sorted(merged)
    }


def compute_account_summaries(
    items: Iterable[LedgerItem],
    self_id: Hashable,
    *,
    formatter: CurrencyFormatter | None = None,
    logger: Logger | None = None,
) -> dict[Hashable, dict[str, AccountSummary]]:
    """Sum ledger items per counterparty and currency.

    Args:
        items: Already filtered ledger items involving ``self_id``.
        self_id: Party the summaries are computed for.
        formatter: Formatter attached to the summaries.
        logger: Optional logger for diagnostics.

    Returns:
        dict[Hashable, dict[str, AccountSummary]]: Summaries keyed by
        counterparty id, then currency code.
    """
    resolved_formatter = formatter or CurrencyFormatter()
    totals = _accumulate(items, self_id, logger)
    summaries: dict[Hashable, dict[str, AccountSummary]] = {}
    for counterparty, currency in sorted(totals, key=_summary_order):
        summaries.setdefault(counterparty, {})[currency] = _build_summary(
            currency,
            totals[(counterparty, currency)],
            resolved_formatter,
        )
    return summaries


__all__ = [
    "BUCKETS",
    "classify_for_summary",
    "compute_account_summary",
    "compute_account_summaries",
]
