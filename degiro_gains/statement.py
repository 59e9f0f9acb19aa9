"""Account statement: ledger rows with their derived transactions."""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path

from degiro_gains.config import LedgerConfig
from degiro_gains.engine import (
    build_transactions,
    get_all_dividends,
    get_sell_txns_in_period,
    get_sells_earnings,
    get_total_deposits,
    get_total_year_deposits,
    get_total_year_fees,
    group_rows_by_order,
    summarize_earnings,
)
from degiro_gains.models import (
    Dividend,
    Earning,
    EarningsSummary,
    LedgerRow,
    Period,
    Transaction,
    ZeroCostBasisPolicy,
)
from degiro_gains.parsing import load_ledger

logger = logging.getLogger(__name__)


@dataclass
class AccountStatement:
    """In-memory statement with lazily built order groups and transactions."""

    rows: list[LedgerRow]
    workers: int = 1

    _groups: dict[str, list[LedgerRow]] | None = field(default=None, init=False, repr=False)
    _transactions: list[Transaction] | None = field(default=None, init=False, repr=False)

    @classmethod
    def from_csv(cls, path: str | Path, config: LedgerConfig | None = None, workers: int = 1) -> "AccountStatement":
        """Load a statement from a DEGIRO ``Account.csv`` export."""
        return cls(rows=load_ledger(path, config), workers=workers)

    @property
    def groups(self) -> dict[str, list[LedgerRow]]:
        """Rows of each order, by grouping key."""
        if self._groups is None:
            self._groups = group_rows_by_order(self.rows)
            logger.debug("Found %d orders in %d rows", len(self._groups), len(self.rows))
        return self._groups

    @property
    def transactions(self) -> list[Transaction]:
        """One transaction per order."""
        if self._transactions is None:
            self._transactions = build_transactions(self.groups, workers=self.workers)
        return self._transactions

    def sells(self, year: int, period: Period = Period.ALL) -> list[Transaction]:
        """Sales of ``year`` in ``period``, newest first."""
        return get_sell_txns_in_period(self.transactions, year, period)

    def earnings(
        self,
        year: int,
        period: Period = Period.ALL,
        policy: ZeroCostBasisPolicy = ZeroCostBasisPolicy.UNDEFINED,
    ) -> list[Earning]:
        """Realized earnings of the sales of ``year`` in ``period``."""
        return get_sells_earnings(self.sells(year, period), self.transactions, policy)

    def summary(
        self,
        year: int,
        period: Period = Period.ALL,
        policy: ZeroCostBasisPolicy = ZeroCostBasisPolicy.UNDEFINED,
    ) -> EarningsSummary:
        """Total P/L and average percentage of the sales of ``year`` in ``period``."""
        return summarize_earnings(self.earnings(year, period, policy))

    def fees(self, year: int) -> Decimal:
        """Transaction and exchange connection fees paid in ``year``."""
        return get_total_year_fees(self.rows, year)

    def deposits(self, year: int | None = None) -> Decimal:
        """Deposits of ``year``, or of the whole statement when ``year`` is None."""
        if year is None:
            return get_total_deposits(self.rows)
        return get_total_year_deposits(self.rows, year)

    def dividends(self, year: int) -> list[Dividend]:
        """Dividends of ``year``, one record per product and currency."""
        return get_all_dividends(self.rows, year)
