"""Grouping of ledger rows by the order they belong to."""

from collections import defaultdict
from typing import Iterable

from degiro_gains.models.ledger import LedgerRow

# Some exports garble the tail of the order id; only this prefix is trusted.
ORDER_KEY_LENGTH = 19


def group_key(order_id: str) -> str:
    """Return the grouping key of an order id (its first 19 characters)."""
    return str(order_id)[:ORDER_KEY_LENGTH]


def group_rows_by_order(rows: Iterable[LedgerRow]) -> dict[str, list[LedgerRow]]:
    """Group the rows carrying an order id by :func:`group_key`.

    Rows keep their ledger order inside each group. Rows without an
    order id (deposits, dividends, interest, connection fees) are dropped.
    """
    groups: defaultdict[str, list[LedgerRow]] = defaultdict(list)
    for row in rows:
        if row.order_id:
            groups[group_key(row.order_id)].append(row)
    return dict(groups)
