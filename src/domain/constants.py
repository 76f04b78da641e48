"""Domain constants for ledger formatting and aggregation."""

MINUS_SIGN = "−"

# code: (symbol, decimal places)
CURRENCY_SYMBOLS = {
    "AUD": ("A$", 2),
    "CAD": ("C$", 2),
    "CHF": ("CHF ", 2),
    "CNY": ("CN¥", 2),
    "EUR": ("€", 2),
    "GBP": ("£", 2),
    "INR": ("₹", 2),
    "JPY": ("¥", 0),
    "KRW": ("₩", 0),
    "NZD": ("NZ$", 2),
    "USD": ("$", 2),
}

DEFAULT_DECIMAL_PLACES = 2

DEFAULT_SUMMARY_STATUSES = (
    "closed",
    "cleared",
)

IN_EFFECT_STATUSES = (
    "closed",
    "cleared",
)

OPEN_OR_PENDING_STATUSES = (
    "open",
    "pending",
)


__all__ = [
    "MINUS_SIGN",
    "CURRENCY_SYMBOLS",
    "DEFAULT_DECIMAL_PLACES",
    "DEFAULT_SUMMARY_STATUSES",
    "IN_EFFECT_STATUSES",
    "OPEN_OR_PENDING_STATUSES",
]
