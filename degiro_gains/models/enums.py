"""Enumeration types for ledger entities."""

from enum import Enum


class Currency(str, Enum):
    EUR = "EUR"
    USD = "USD"


class TxnType(str, Enum):
    BUY = "Buy"
    SELL = "Sell"


class ProductType(str, Enum):
    SHARES = "SHARES"
    ETF = "ETF"


class Period(int, Enum):
    """Sub-period of a tax year (Irish CGT splits Jan-Nov from December)."""

    INITIAL = 1
    LATER = 2
    ALL = 3


class ZeroCostBasisPolicy(str, Enum):
    """What to do with a sale whose matched purchase cost is zero."""

    UNDEFINED = "undefined"
    RAISE = "raise"


class Description(str, Enum):
    """Fixed description labels used by DEGIRO statements."""

    TRANSACTION_FEE = "DEGIRO Transaction Fee"
    EXCHANGE_CONNECTION_FEE = "DEGIRO Exchange Connection Fee"
    FX_CREDIT = "FX Credit"
    FX_DEBIT = "FX Debit"
    DEPOSIT = "Deposit"
    FLATEX_DEPOSIT = "flatex Deposit"
    DIVIDEND = "Dividend"
    DIVIDEND_TAX = "Dividend Tax"
