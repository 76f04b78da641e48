"""Use case to edit the line items of a ledger item."""

from collections.abc import Hashable, Iterable
from dataclasses import dataclass
from decimal import Decimal

from src.application.ports.ledger_repository import LedgerItemRepositoryPort
from src.domain.models.ledger import LedgerItem, LineItem
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class LineItemChange:
    """Change to apply to a ledger item's line items.

    Attributes:
        index: Position of the line item to update; None appends a new one.
        net_amount: New net amount.
        tax_amount: New tax amount.
        remove: Remove the line item at ``index`` instead of updating it.
    """

    index: int | None = None
    net_amount: Decimal | None = None
    tax_amount: Decimal | None = None
    description: str | None = None
    remove: bool = False


class UpdateLineItemsUseCase:
    """Apply line item changes and persist the ledger item atomically."""

    def __init__(
        self,
        ledger_repository: LedgerItemRepositoryPort,
        logger=None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()

    def execute(
        self,
        ledger_item_id: Hashable,
        changes: Iterable[LineItemChange],
    ) -> LedgerItem:
        """Load, edit, save and reload a ledger item.

        Args:
            ledger_item_id: Id of the ledger item to edit.
            changes: Changes applied in order.

        Returns:
            LedgerItem: The item as stored after the update.

        Raises:
            NotFoundError: If the ledger item does not exist.
        """
        item = self._ledger_repository.find(ledger_item_id)
        for change in changes:
            if change.index is None:
                item.add_line_item(
                    LineItem(
                        net_amount=change.net_amount or Decimal("0"),
                        tax_amount=change.tax_amount or Decimal("0"),
                        description=change.description,
                    )
                )
            elif change.remove:
                item.remove_line_item(item.line_items[change.index])
            else:
                item.update_line_item(
                    change.index,
                    net_amount=change.net_amount,
                    tax_amount=change.tax_amount,
                )
        self._ledger_repository.save(item)
        reloaded = self._ledger_repository.find(ledger_item_id)
        self._logger.info(
            f"Updated line items of ledger item {ledger_item_id}: "
            f"total={reloaded.total_amount}, tax={reloaded.tax_amount}"
        )
        return reloaded


__all__ = ["LineItemChange", "UpdateLineItemsUseCase"]
