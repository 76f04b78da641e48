"""Application use cases package."""

from .get_account_summaries import GetAccountSummariesUseCase
from .get_account_summary import GetAccountSummaryUseCase
from .get_party_names import GetPartyNamesUseCase
from .update_line_items import LineItemChange, UpdateLineItemsUseCase

__all__ = [
    "GetAccountSummaryUseCase",
    "GetAccountSummariesUseCase",
    "GetPartyNamesUseCase",
    "LineItemChange",
    "UpdateLineItemsUseCase",
]
