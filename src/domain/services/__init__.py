"""Domain services package."""

from .summaries import (
    classify_for_summary,
    compute_account_summaries,
    compute_account_summary,
)

__all__ = [
    "classify_for_summary",
    "compute_account_summary",
    "compute_account_summaries",
]
