"""Order reconstruction, lot matching and period aggregation."""

from degiro_gains.engine.aggregate import (
    get_all_dividends,
    get_sell_txns_in_period,
    get_total_deposits,
    get_total_year_deposits,
    get_total_year_fees,
    in_period,
    summarize_earnings,
)
from degiro_gains.engine.builder import build_transaction, build_transactions, infer_product_type
from degiro_gains.engine.grouping import group_key, group_rows_by_order
from degiro_gains.engine.matching import compute_earning, get_sells_earnings, purchases_before

__all__ = [
    "build_transaction",
    "build_transactions",
    "compute_earning",
    "get_all_dividends",
    "get_sell_txns_in_period",
    "get_sells_earnings",
    "get_total_deposits",
    "get_total_year_deposits",
    "get_total_year_fees",
    "group_key",
    "group_rows_by_order",
    "in_period",
    "infer_product_type",
    "purchases_before",
    "summarize_earnings",
]
