"""Derived reporting records: earnings and dividends."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from degiro_gains.models.enums import Currency, ProductType


@dataclass(frozen=True)
class Earning:
    """Realized gain or loss of one sale, in EUR."""

    date: datetime
    product: str
    isin: str
    product_type: ProductType
    value: Decimal
    percent: Decimal | None  # None when the matched cost basis is zero


@dataclass(frozen=True)
class Dividend:
    """Gross dividend of a product in a year and its withholding tax."""

    year: int
    product: str
    isin: str
    value: Decimal
    value_tax: Decimal
    currency: Currency


@dataclass(frozen=True)
class EarningsSummary:
    """Totals over the earnings of a period."""

    count: int
    total: Decimal
    average_percent: Decimal | None
