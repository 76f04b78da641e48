"""In-process ledger item repository."""

import copy
import threading
import uuid
from collections.abc import Hashable, Iterable

from src.application.ports.ledger_filter import (
    LedgerItemFilter,
    sort_ledger_items,
)
from src.application.ports.ledger_repository import LedgerItemRepositoryPort
from src.domain.errors import NotFoundError
from src.domain.models.kinds import KindRegistry
from src.domain.models.ledger import LedgerItem, PartyDetails
from src.infrastructure.logging.logger import get_app_logger


class InMemoryLedgerItemRepository(LedgerItemRepositoryPort):
    """Repository keeping ledger items in memory.

    Items are copied on the way in and out, so edits to a loaded item are
    only visible to other readers once saved.
    """

    def __init__(
        self,
        items: Iterable = (),
        parties: Iterable[PartyDetails] = (),
        registry: KindRegistry | None = None,
        logger=None,
    ) -> None:
        """Initialize the repository.

        Args:
            items: Ledger items or records implementing LedgerRecord.
            parties: Known parties used for display names.
            registry: Registry resolving kind names of records.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._registry = registry or KindRegistry()
        self._logger = logger or get_app_logger()
        self._lock = threading.Lock()
        self._items: dict[Hashable, LedgerItem] = {}
        self._parties: dict[Hashable, PartyDetails] = {
            party.id: party for party in parties
        }
        for item in items:
            self.add(item)

    def add(self, record) -> LedgerItem:
        """Store a ledger item or a record implementing LedgerRecord."""
        if isinstance(record, LedgerItem):
            item = copy.deepcopy(record)
        else:
            item = LedgerItem.from_record(record, self._registry)
        return self.save(item)

    def add_party(self, party: PartyDetails) -> None:
        self._parties[party.id] = party

    def find(self, ledger_item_id: Hashable) -> LedgerItem:
        with self._lock:
            item = self._items.get(ledger_item_id)
            if item is None:
                raise NotFoundError(f"Ledger item not found: {ledger_item_id}")
            return copy.deepcopy(item)

    def filtered(
        self,
        criteria: LedgerItemFilter | None = None,
    ) -> list[LedgerItem]:
        resolved = criteria or LedgerItemFilter()
        with self._lock:
            snapshot = list(self._items.values())
        matches = [item for item in snapshot if resolved.matches(item)]
        return [
            copy.deepcopy(item)
            for item in sort_ledger_items(matches, resolved.sort_by)
        ]

    def save(self, item: LedgerItem) -> LedgerItem:
        with self._lock:
            item.recompute_totals()
            if item.id is None:
                item.id = self._next_id()
            if item.uuid is None:
                item.uuid = str(uuid.uuid4())
            self._items[item.id] = copy.deepcopy(item)
        self._logger.debug(f"Saved ledger item {item.id}")
        return item

    def party_display_name(self, party_id: Hashable) -> str:
        party = self._parties.get(party_id)
        if party is None:
            raise NotFoundError(f"Party not found: {party_id}")
        return party.name or str(party_id)

    def party_display_names(
        self,
        party_ids: Iterable[Hashable],
    ) -> dict[Hashable, str]:
        return {
            party_id: self._parties[party_id].name or str(party_id)
            for party_id in party_ids
            if party_id in self._parties
        }

    def _next_id(self) -> int:
        numeric_ids = [key for key in self._items if isinstance(key, int)]
        return max(numeric_ids, default=0) + 1


__all__ = ["InMemoryLedgerItemRepository"]
