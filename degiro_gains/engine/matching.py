"""Matching of sales against prior purchases to compute realized earnings.

Purchases are consumed most recent first (LIFO). This is NOT the FIFO
order required by Irish CGT rules, so the figures are indicative only.
"""

import logging
from decimal import Decimal
from typing import Iterable, Sequence

from degiro_gains.exceptions import UnmatchedSaleError
from degiro_gains.models.earning import Earning
from degiro_gains.models.enums import TxnType, ZeroCostBasisPolicy
from degiro_gains.models.transaction import Transaction

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENTS = Decimal("0.01")


def _same_instrument(buy: Transaction, sale: Transaction) -> bool:
    # A renamed product keeps its instrument id
    if buy.product == sale.product:
        return True
    return bool(buy.isin) and buy.isin == sale.isin


def purchases_before(txns: Iterable[Transaction], sale: Transaction) -> list[Transaction]:
    """Return the purchases of the sold product made before the sale, newest first."""
    buys = [
        txn
        for txn in txns
        if txn.direction == TxnType.BUY and txn.date < sale.date and _same_instrument(txn, sale)
    ]
    return sorted(buys, key=lambda txn: txn.date, reverse=True)


def matched_cost_basis(buys: Sequence[Transaction], quantity: int) -> Decimal:
    """Accumulate the cost of ``quantity`` shares walking ``buys`` in order.

    A purchase larger than the remaining quantity contributes the
    proportional share of its cost and ends the walk.
    """
    remaining = quantity
    basis = ZERO
    for buy in buys:
        if remaining == 0:
            break
        if buy.quantity <= remaining:
            basis += buy.total_cost
            remaining -= buy.quantity
        else:
            basis += buy.total_cost / buy.quantity * remaining
            remaining = 0

    if remaining:
        logger.debug("%d shares left unmatched", remaining)
    return basis


def compute_earning(
    txns: Iterable[Transaction],
    sale: Transaction,
    policy: ZeroCostBasisPolicy = ZeroCostBasisPolicy.UNDEFINED,
) -> tuple[Decimal, Decimal | None]:
    """Compute the realized gain of a sale and its percentage return.

    Parameters
    ----------
    txns : Iterable[Transaction]
        All transactions of the account.
    sale : Transaction
        The sell transaction.
    policy : ZeroCostBasisPolicy
        Behaviour when no purchase cost is matched.

    Returns
    -------
    tuple[Decimal, Decimal | None]
        Gain in EUR and percentage over the matched cost, rounded to
        2 decimals (None when the cost basis is zero under the
        ``UNDEFINED`` policy).

    Raises
    ------
    UnmatchedSaleError
        If the cost basis is zero under the ``RAISE`` policy.
    """
    if sale.quantity == 0:
        # Cancelled sale: nothing was sold
        return sale.total_cost, None

    basis = matched_cost_basis(purchases_before(txns, sale), sale.quantity)

    # Purchase costs are negative cash movements
    gain = sale.total_cost + basis

    if basis == ZERO:
        if policy == ZeroCostBasisPolicy.RAISE:
            raise UnmatchedSaleError(sale)
        logger.warning(
            "Sale of %s on %s has no matched purchase cost, percentage undefined",
            sale.product,
            sale.date.date(),
            extra={"order_id": sale.order_id},
        )
        return gain, None

    percent = (gain / -basis * HUNDRED).quantize(CENTS)
    return gain, percent


def get_sells_earnings(
    sells: Iterable[Transaction],
    txns: Iterable[Transaction],
    policy: ZeroCostBasisPolicy = ZeroCostBasisPolicy.UNDEFINED,
) -> list[Earning]:
    """Return the :class:`Earning` of each sale."""
    txns = list(txns)
    earnings = []
    for sale in sells:
        value, percent = compute_earning(txns, sale, policy)
        earnings.append(
            Earning(
                date=sale.date,
                product=sale.product,
                isin=sale.isin,
                product_type=sale.product_type,
                value=value,
                percent=percent,
            )
        )
    return earnings
