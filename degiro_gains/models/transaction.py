"""Transaction model: one logical order rebuilt from its ledger rows."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from degiro_gains.models.enums import Currency, ProductType, TxnType


@dataclass(frozen=True)
class Transaction:
    """Buy or sell order executed on DEGIRO.

    ``total_cost`` is the signed EUR cash movement of the whole order
    (negative for purchases), ``unit_price`` the per-share price quoted
    in ``value_currency``.
    """

    date: datetime
    direction: TxnType
    product: str
    isin: str
    product_type: ProductType
    quantity: int
    unit_price: Decimal
    total_cost: Decimal
    value_currency: Currency
    fees: Decimal
    order_id: str
