"""Ledger row model: one decoded line of a DEGIRO account statement."""

from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal

from degiro_gains.models.enums import Currency


@dataclass(frozen=True)
class LedgerRow:
    """Account statement line.

    ``amount`` is the signed cash delta of the line in ``currency``;
    ``description`` is free text and drives all order parsing.
    """

    date: date
    time: time
    value_date: date | None
    product: str
    isin: str
    description: str
    fx_rate: Decimal | None
    currency: Currency
    amount: Decimal
    balance: Decimal
    order_id: str | None = None  # may be garbled past the first 19 chars

    @property
    def timestamp(self) -> datetime:
        """Date and time of the line combined."""
        return datetime.combine(self.date, self.time)
