"""Application port for ledger item storage and lookup."""

from collections.abc import Hashable, Iterable
from typing import Protocol

from src.application.ports.ledger_filter import LedgerItemFilter
from src.domain.models.ledger import LedgerItem


class LedgerItemRepositoryPort(Protocol):
    """Port exposing ledger items and party names to use cases."""

    def find(self, ledger_item_id: Hashable) -> LedgerItem:
        """Return one ledger item.

        Raises:
            NotFoundError: If no ledger item has the given id.
        """

    def filtered(
        self,
        criteria: LedgerItemFilter | None = None,
    ) -> list[LedgerItem]:
        """Return the ledger items matching the criteria."""

    def save(self, item: LedgerItem) -> LedgerItem:
        """Persist an item and its line items as one unit."""

    def party_display_name(self, party_id: Hashable) -> str:
        """Return the display name of a party.

        Raises:
            NotFoundError: If the party is unknown.
        """

    def party_display_names(
        self,
        party_ids: Iterable[Hashable],
    ) -> dict[Hashable, str]:
        """Return display names by id, omitting unknown parties."""


__all__ = ["LedgerItemRepositoryPort"]
