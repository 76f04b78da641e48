"""Use case to resolve party ids to display names."""

from collections.abc import Hashable, Iterable

from src.application.ports.ledger_repository import LedgerItemRepositoryPort
from src.infrastructure.logging.logger import get_app_logger


class GetPartyNamesUseCase:
    """Map sender and recipient ids to their display names."""

    def __init__(
        self,
        ledger_repository: LedgerItemRepositoryPort,
        logger=None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(self, party_ids: Iterable[Hashable]) -> dict[Hashable, str]:
        """Return display names for the known ids.

        Args:
            party_ids: Ids to resolve.

        Returns:
            dict[Hashable, str]: Names by id; unknown ids are omitted.
        """
        requested = list(dict.fromkeys(party_ids))
        names = self._ledger_repository.party_display_names(requested)
        missing = [party_id for party_id in requested if party_id not in names]
        if missing:
            self._logger.warning(f"No party record for ids: {missing}")
        return names


__all__ = ["GetPartyNamesUseCase"]
