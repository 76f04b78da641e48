"""Domain errors for ledger classification and aggregation."""


class LedgerError(Exception):
    """Base class for ledger domain errors."""


class AmbiguousPartyError(LedgerError, ValueError):
    """Raised when a viewpoint cannot be resolved to one side of an item."""


class NotFoundError(LedgerError, LookupError):
    """Raised when a repository lookup finds no record."""


class UnimplementedCapabilityError(LedgerError, NotImplementedError):
    """Raised when a record does not supply mandatory ledger data."""


class UnknownFieldError(LedgerError, AttributeError):
    """Raised when accessing a field that a summary or kind does not define."""


class CurrencyMismatchError(LedgerError, ValueError):
    """Raised when combining amounts in different currencies."""


class UnknownKindError(LedgerError, LookupError):
    """Raised when a ledger item kind name is not registered."""


__all__ = [
    "LedgerError",
    "AmbiguousPartyError",
    "NotFoundError",
    "UnimplementedCapabilityError",
    "UnknownFieldError",
    "CurrencyMismatchError",
    "UnknownKindError",
]
