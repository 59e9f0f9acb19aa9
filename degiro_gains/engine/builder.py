"""Reconstruction of transactions from the ledger rows of one order."""

import logging
import multiprocessing as mp
import re
from decimal import Decimal
from typing import Iterable, Mapping, Sequence

from degiro_gains.exceptions import MalformedDescriptionError, MissingFxRowError
from degiro_gains.models.enums import Currency, Description, ProductType, TxnType
from degiro_gains.models.ledger import LedgerRow
from degiro_gains.models.transaction import Transaction
from degiro_gains.parsing.description import ActionLine, is_action_line, parse_action_line

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

# Product names of exchange traded funds: issuer brands or explicit markers
_ETF_RE = re.compile(
    r"\bETF\b|\bUCITS\b|^(VANGUARD|ISHARES|SPDR|LYXOR|AMUNDI|XTRACKERS|INVESCO|WISDOMTREE)\b",
    re.IGNORECASE,
)


def infer_product_type(product: str) -> ProductType:
    """Tell ETFs apart from shares by their product name."""
    return ProductType.ETF if _ETF_RE.search(product.strip()) else ProductType.SHARES


def build_transaction(key: str, rows: Sequence[LedgerRow]) -> Transaction:
    """Reduce the ledger rows of one order into a :class:`Transaction`.

    Parameters
    ----------
    key : str
        Grouping key of the order.
    rows : Sequence[LedgerRow]
        Rows of the order, in ledger order.

    Returns
    -------
    Transaction
        The order with its fills, FX conversions and fees folded in.

    Raises
    ------
    MalformedDescriptionError
        If no row of the group is a valid Buy/Sell action line.
    MissingFxRowError
        If a USD order has no FX row for its direction.
    """
    rows = list(rows)
    if not rows:
        raise ValueError(f"Order {key} has no rows")

    fills: list[tuple[LedgerRow, ActionLine]] = [
        (row, parse_action_line(row.description, row))
        for row in rows
        if is_action_line(row.description)
    ]
    if not fills:
        last = rows[-1]
        raise MalformedDescriptionError(last.description, last)

    # The description row is the last action line of the group
    desc_row, action = fills[-1]
    order_id = desc_row.order_id or key

    quantity = 0
    for _, fill in fills:
        quantity += fill.quantity if fill.direction == action.direction else -fill.quantity

    has_opposite = any(fill.direction != action.direction for _, fill in fills)
    if quantity == 0 and has_opposite:
        logger.debug("Order %s was cancelled and compensated", order_id)
        return _transaction(desc_row, action, order_id, 0, ZERO, ZERO, ZERO)

    direction = action.direction
    if quantity < 0:
        direction = TxnType.BUY if direction == TxnType.SELL else TxnType.SELL
        quantity = -quantity

    if action.currency == Currency.EUR:
        total_cost = sum((row.amount for row, _ in fills), ZERO)
    else:
        total_cost = _fx_cost(rows, direction, order_id)

    fees = sum(
        (row.amount for row in rows if row.description == Description.TRANSACTION_FEE),
        ZERO,
    )

    logger.debug(
        "Order %s: %s %d %s for %s EUR (fees %s)",
        order_id,
        direction.value,
        quantity,
        desc_row.product,
        total_cost,
        fees,
        extra={"order_id": order_id},
    )
    return _transaction(
        desc_row,
        action,
        order_id,
        quantity,
        action.unit_price,
        total_cost,
        fees,
        direction=direction,
    )


def _fx_cost(rows: Sequence[LedgerRow], direction: TxnType, order_id: str) -> Decimal:
    """Sum the EUR side of the currency conversions of a USD order."""
    label = Description.FX_CREDIT if direction == TxnType.SELL else Description.FX_DEBIT
    fx_rows = [row for row in rows if row.description == label]
    if not fx_rows:
        raise MissingFxRowError(order_id, label.value)
    return sum((row.amount for row in fx_rows), ZERO)


def _transaction(
    row: LedgerRow,
    action: ActionLine,
    order_id: str,
    quantity: int,
    unit_price: Decimal,
    total_cost: Decimal,
    fees: Decimal,
    direction: TxnType | None = None,
) -> Transaction:
    return Transaction(
        date=row.timestamp,
        direction=direction or action.direction,
        product=row.product,
        isin=action.isin or row.isin,
        product_type=infer_product_type(row.product),
        quantity=quantity,
        unit_price=unit_price,
        total_cost=total_cost,
        value_currency=action.currency,
        fees=fees,
        order_id=order_id,
    )


def _build_item(item: tuple[str, list[LedgerRow]]) -> Transaction:
    return build_transaction(*item)


def build_transactions(
    groups: Mapping[str, Iterable[LedgerRow]],
    workers: int = 1,
) -> list[Transaction]:
    """Build one transaction per order group.

    Parameters
    ----------
    groups : Mapping[str, Iterable[LedgerRow]]
        Rows grouped by order key.
    workers : int
        Number of worker processes; groups are independent so they can
        be built in parallel.

    Returns
    -------
    list[Transaction]
        Transactions in group order.
    """
    items = [(key, list(rows)) for key, rows in groups.items()]

    if workers > 1 and len(items) > 1:
        logger.info("Building %d transactions with %d workers", len(items), workers)
        with mp.Pool(processes=workers) as pool:
            txns = pool.map(_build_item, items)
    else:
        txns = [_build_item(item) for item in items]

    logger.info("Built %d transactions", len(txns))
    return txns
