"""Domain models for DEGIRO statements."""

from degiro_gains.models.earning import Dividend, Earning, EarningsSummary
from degiro_gains.models.enums import (
    Currency,
    Description,
    Period,
    ProductType,
    TxnType,
    ZeroCostBasisPolicy,
)
from degiro_gains.models.ledger import LedgerRow
from degiro_gains.models.transaction import Transaction

__all__ = [
    "Currency",
    "Description",
    "Dividend",
    "Earning",
    "EarningsSummary",
    "LedgerRow",
    "Period",
    "ProductType",
    "Transaction",
    "TxnType",
    "ZeroCostBasisPolicy",
]
