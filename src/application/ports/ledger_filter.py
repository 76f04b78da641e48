"""Filter criteria applied by ledger item repositories."""

from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass, field, replace
from datetime import date

from src.domain.constants import IN_EFFECT_STATUSES, OPEN_OR_PENDING_STATUSES
from src.domain.models.ledger import LedgerItem, normalize_status

SORTABLE_COLUMNS = (
    "id",
    "identifier",
    "issue_date",
    "due_date",
    "currency",
    "total_amount",
    "tax_amount",
    "status",
    "sender_id",
    "recipient_id",
)


@dataclass(frozen=True)
class LedgerItemFilter:
    """Composable criteria narrowing a set of ledger items.

    Every criterion left as None is ignored. ``condition`` is an arbitrary
    predicate evaluated after all structured criteria.
    """

    sent_by: Hashable | None = None
    received_by: Hashable | None = None
    sent_or_received_by: Hashable | None = None
    involving: Hashable | None = None
    statuses: tuple[str, ...] | None = None
    due_at: date | None = None
    currency: str | None = None
    issue_date_from: date | None = None
    issue_date_before: date | None = None
    exclude_empty_invoices: bool = False
    sort_by: str | None = None
    condition: Callable[[LedgerItem], bool] | None = field(
        default=None,
        compare=False,
    )

    def __post_init__(self) -> None:
        if self.statuses is not None:
            object.__setattr__(
                self,
                "statuses",
                tuple(normalize_status(status) for status in self.statuses),
            )
        if self.currency is not None:
            object.__setattr__(self, "currency", self.currency.strip().upper())

    @classmethod
    def in_effect(cls, **criteria) -> "LedgerItemFilter":
        """Items whose status is closed or cleared."""
        return cls(statuses=IN_EFFECT_STATUSES, **criteria)

    @classmethod
    def open_or_pending(cls, **criteria) -> "LedgerItemFilter":
        """Items still open or pending."""
        return cls(statuses=OPEN_OR_PENDING_STATUSES, **criteria)

    def narrow(self, **criteria) -> "LedgerItemFilter":
        """Return a copy with the given criteria replaced."""
        return replace(self, **criteria)

    def matches(self, item: LedgerItem) -> bool:
        """Return True if the item satisfies every criterion."""
        if self.sent_by is not None and item.sender_id != self.sent_by:
            return False
        if self.received_by is not None and item.recipient_id != self.received_by:
            return False
        for party_id in (self.sent_or_received_by, self.involving):
            if party_id is not None and party_id not in (
                item.sender_id,
                item.recipient_id,
            ):
                return False
        if self.statuses is not None and item.status not in self.statuses:
            return False
        if (
            self.due_at is not None
            and item.due_date is not None
            and item.due_date > self.due_at
        ):
            return False
        if self.currency is not None and item.currency != self.currency:
            return False
        if self.issue_date_from is not None and (
            item.issue_date is None or item.issue_date < self.issue_date_from
        ):
            return False
        if self.issue_date_before is not None and (
            item.issue_date is None or item.issue_date >= self.issue_date_before
        ):
            return False
        if (
            self.exclude_empty_invoices
            and item.kind.is_invoice
            and not item.total_amount
        ):
            return False
        if self.condition is not None and not self.condition(item):
            return False
        return True


def sort_ledger_items(
    items: Iterable[LedgerItem],
    sort_by: str | None,
) -> list[LedgerItem]:
    """Sort items by a column, falling back to id order.

    Unknown columns sort by id. Missing values sort last and ties are broken
    by id.
    """
    column = sort_by if sort_by in SORTABLE_COLUMNS else "id"

    def _key(item: LedgerItem):
        value = getattr(item, column)
        return (value is None, value if value is not None else 0, item.id)

    return sorted(items, key=_key)


__all__ = ["LedgerItemFilter", "SORTABLE_COLUMNS", "sort_ledger_items"]
