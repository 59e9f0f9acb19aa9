"""Period filters and yearly totals over transactions and ledger rows."""

from decimal import Decimal
from typing import Iterable

from degiro_gains.models.earning import Dividend, Earning, EarningsSummary
from degiro_gains.models.enums import Description, Period, TxnType
from degiro_gains.models.ledger import LedgerRow
from degiro_gains.models.transaction import Transaction

ZERO = Decimal("0")
CENTS = Decimal("0.01")

_DEPOSITS = (Description.DEPOSIT, Description.FLATEX_DEPOSIT)


def in_period(txn: Transaction, year: int, period: Period = Period.ALL) -> bool:
    """Return True if ``txn`` falls in ``period`` of ``year``."""
    if txn.date.year != year:
        return False
    if period == Period.INITIAL:
        return txn.date.month < 12
    if period == Period.LATER:
        return txn.date.month == 12
    return True


def get_sell_txns_in_period(
    txns: Iterable[Transaction],
    year: int,
    period: Period = Period.ALL,
) -> list[Transaction]:
    """Return the sales of ``year`` in the given sub-period, newest first.

    Cancelled sales (zero quantity) sold nothing and are left out.
    """
    sells = [
        txn
        for txn in txns
        if txn.direction == TxnType.SELL and txn.quantity > 0 and in_period(txn, year, period)
    ]
    return sorted(sells, key=lambda txn: txn.date, reverse=True)


def _is_fee(row: LedgerRow) -> bool:
    return row.description == Description.TRANSACTION_FEE or row.description.startswith(
        Description.EXCHANGE_CONNECTION_FEE.value
    )


def get_total_year_fees(rows: Iterable[LedgerRow], year: int) -> Decimal:
    """Sum transaction and exchange connection fees paid in ``year``."""
    return sum((row.amount for row in rows if row.date.year == year and _is_fee(row)), ZERO)


def get_total_deposits(rows: Iterable[LedgerRow]) -> Decimal:
    """Sum all deposits of the statement."""
    return sum((row.amount for row in rows if row.description in _DEPOSITS), ZERO)


def get_total_year_deposits(rows: Iterable[LedgerRow], year: int) -> Decimal:
    """Sum the deposits made in ``year``."""
    return get_total_deposits(row for row in rows if row.date.year == year)


def get_all_dividends(rows: Iterable[LedgerRow], year: int) -> list[Dividend]:
    """Collect the dividends of ``year``, one record per product and currency.

    Gross dividends and their withholding tax lines are summed
    separately, so ``value_tax`` keeps its negative sign.
    """
    gross: dict[tuple, Decimal] = {}
    tax: dict[tuple, Decimal] = {}
    for row in rows:
        if row.date.year != year:
            continue
        key = (row.product, row.isin, row.currency)
        if row.description == Description.DIVIDEND:
            gross[key] = gross.get(key, ZERO) + row.amount
        elif row.description == Description.DIVIDEND_TAX:
            tax[key] = tax.get(key, ZERO) + row.amount

    keys = list(gross) + [key for key in tax if key not in gross]
    return [
        Dividend(
            year=year,
            product=product,
            isin=isin,
            value=gross.get((product, isin, currency), ZERO),
            value_tax=tax.get((product, isin, currency), ZERO),
            currency=currency,
        )
        for product, isin, currency in keys
    ]


def summarize_earnings(earnings: Iterable[Earning]) -> EarningsSummary:
    """Total P/L and average percentage of a set of earnings.

    Earnings with an undefined percentage count towards the total only.
    """
    earnings = list(earnings)
    total = sum((e.value for e in earnings), ZERO)
    percents = [e.percent for e in earnings if e.percent is not None]
    average = (sum(percents, ZERO) / len(percents)).quantize(CENTS) if percents else None
    return EarningsSummary(count=len(earnings), total=total, average_percent=average)
