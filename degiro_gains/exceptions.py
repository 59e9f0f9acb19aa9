"""Custom exception hierarchy for degiro-gains."""

from typing import Any


class DegiroGainsError(Exception):
    """Base exception for all degiro-gains errors."""


class LedgerError(DegiroGainsError):
    """Raised when the ledger rows cannot be turned into transactions."""


class MalformedDescriptionError(LedgerError):
    """Raised when an order's description row does not match the action-line grammar."""

    def __init__(self, description: str, row: Any = None) -> None:
        self.description = description
        self.row = row
        message = f"Malformed order description: {description!r}"
        if row is not None:
            message += f" (row: {row!r})"
        super().__init__(message)

    def __reduce__(self):
        return (self.__class__, (self.description, self.row))


class MissingFxRowError(LedgerError):
    """Raised when a USD order has no FX Credit/Debit row in its group."""

    def __init__(self, order_id: str, label: str) -> None:
        self.order_id = order_id
        self.label = label
        super().__init__(f"Order {order_id} has no {label!r} row")

    def __reduce__(self):
        return (self.__class__, (self.order_id, self.label))


class UnmatchedSaleError(LedgerError):
    """Raised when a sale's matched cost basis is zero."""

    def __init__(self, sale: Any) -> None:
        self.sale = sale
        super().__init__(
            f"Sale of {sale.product} on {sale.date:%Y-%m-%d} has no matching purchase cost"
        )

    def __reduce__(self):
        return (self.__class__, (self.sale,))


class LedgerFormatError(DegiroGainsError):
    """Raised when a CSV row cannot be decoded into a ledger row."""


class ConfigurationError(DegiroGainsError):
    """Raised when configuration is invalid or missing."""


class SinkError(DegiroGainsError):
    """Raised when a sink operation fails."""
