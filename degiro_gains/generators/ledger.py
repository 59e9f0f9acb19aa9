"""Generator of synthetic DEGIRO account statement rows.

Orders are laid out the way the export lists them: newest line first,
each fill as its FX lines, its fee line and finally its action line.
"""

import random
from datetime import date, datetime, timedelta
from decimal import Decimal

from degiro_gains.generators.base import BaseGenerator
from degiro_gains.models.enums import Currency, Description, TxnType
from degiro_gains.models.ledger import LedgerRow

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


class LedgerGenerator(BaseGenerator):
    """Generate synthetic statement rows: orders, deposits, dividends and fees."""

    ETF_NAMES = [
        "VANGUARD FTSE AW",
        "SPDR S&P 500",
        "ISHARES S&P 500",
        "LYXOR ETF CAC 40",
    ]

    DEFAULT_FEE = Decimal("-0.50")
    DEFAULT_FX_RATE = Decimal("1.2000")

    def order_id(self) -> str:
        return self.fake.uuid4()

    def isin(self, country: str = "US") -> str:
        return country + self.fake.numerify("##########")

    def product(self, etf: bool = False) -> str:
        """Random product name, an ETF brand when ``etf`` is set."""
        if etf:
            return random.choice(self.ETF_NAMES)
        return f"{self.fake.last_name().upper()} {random.choice(['INC', 'CORP', 'PLC', 'AG'])}"

    def split_quantity(self, quantity: int, fills: int) -> list[int]:
        """Split ``quantity`` into ``fills`` positive parts."""
        if not 1 <= fills <= quantity:
            raise ValueError(f"Cannot split {quantity} shares into {fills} fills")
        cuts = sorted(random.sample(range(1, quantity), fills - 1))
        bounds = [0, *cuts, quantity]
        return [b - a for a, b in zip(bounds, bounds[1:])]

    def generate_order(
        self,
        direction: TxnType,
        quantity: int,
        unit_price: Decimal,
        when: datetime,
        currency: Currency = Currency.EUR,
        product: str | None = None,
        isin: str | None = None,
        fills: int = 1,
        fx_rate: Decimal | None = None,
        fee: Decimal | None = None,
        order_id: str | None = None,
    ) -> list[LedgerRow]:
        """Generate the rows of one order.

        Parameters
        ----------
        direction : TxnType
            Buy or Sell.
        quantity : int
            Total shares of the order, spread over ``fills`` executions.
        unit_price : Decimal
            Price per share in ``currency``.
        when : datetime
            Time of the first fill; later fills follow one minute apart.
        currency : Currency
            Quote currency; USD orders get FX Credit/Debit lines.
        product, isin, order_id : str | None
            Random when not given.
        fills : int
            Number of partial executions.
        fx_rate : Decimal | None
            USD per EUR for USD orders.
        fee : Decimal | None
            Transaction fee charged on each fill (negative).

        Returns
        -------
        list[LedgerRow]
            Rows of the order, newest first.
        """
        product = product or self.product()
        isin = isin or self.isin()
        order_id = order_id or self.order_id()
        fx_rate = fx_rate or self.DEFAULT_FX_RATE
        fee = self.DEFAULT_FEE if fee is None else fee

        rows: list[LedgerRow] = []
        for i, fill_quantity in enumerate(self.split_quantity(quantity, fills)):
            fill_rows = self._fill_rows(
                direction,
                fill_quantity,
                unit_price,
                when + timedelta(minutes=i),
                currency,
                product,
                isin,
                fx_rate,
                fee,
                order_id,
            )
            rows = fill_rows + rows
        return rows

    def generate_cancelled_order(
        self,
        quantity: int,
        unit_price: Decimal,
        when: datetime,
        currency: Currency = Currency.EUR,
        product: str | None = None,
        isin: str | None = None,
        fee: Decimal | None = None,
    ) -> list[LedgerRow]:
        """Generate a purchase reversed by the broker under the same order id.

        The compensating sale mirrors every amount of the purchase and its
        action line carries no instrument id.
        """
        product = product or self.product()
        isin = isin or self.isin()
        order_id = self.order_id()

        buy_rows = self.generate_order(
            TxnType.BUY,
            quantity,
            unit_price,
            when,
            currency=currency,
            product=product,
            isin=isin,
            fee=fee,
            order_id=order_id,
        )

        reversal = when + timedelta(hours=1)
        sell_rows = []
        for row in buy_rows:
            description = row.description
            if description.startswith(TxnType.BUY.value):
                description = f"Sell {quantity} {product}@{unit_price} {currency.value}"
            sell_rows.append(
                LedgerRow(
                    date=reversal.date(),
                    time=reversal.time(),
                    value_date=reversal.date(),
                    product=row.product,
                    isin=row.isin,
                    description=description,
                    fx_rate=row.fx_rate,
                    currency=row.currency,
                    amount=-row.amount,
                    balance=ZERO,
                    order_id=order_id,
                )
            )
        return sell_rows + buy_rows

    def generate_deposit(self, amount: Decimal, when: datetime, flatex: bool = False) -> LedgerRow:
        label = Description.FLATEX_DEPOSIT if flatex else Description.DEPOSIT
        return self._cash_row(when, "", "", label.value, Currency.EUR, amount)

    def generate_dividend(
        self,
        product: str,
        isin: str,
        amount: Decimal,
        tax: Decimal,
        when: datetime,
        currency: Currency = Currency.USD,
    ) -> list[LedgerRow]:
        """Generate a dividend line and its withholding tax line."""
        return [
            self._cash_row(when, product, isin, Description.DIVIDEND_TAX.value, currency, tax),
            self._cash_row(when, product, isin, Description.DIVIDEND.value, currency, amount),
        ]

    def generate_connection_fee(
        self,
        when: datetime,
        exchange: str = "Euronext Amsterdam - EAM",
        amount: Decimal = Decimal("-2.50"),
    ) -> LedgerRow:
        description = f"{Description.EXCHANGE_CONNECTION_FEE.value} {when.year} ({exchange})"
        return self._cash_row(when, "", "", description, Currency.EUR, amount)

    def _fill_rows(
        self,
        direction: TxnType,
        quantity: int,
        unit_price: Decimal,
        when: datetime,
        currency: Currency,
        product: str,
        isin: str,
        fx_rate: Decimal,
        fee: Decimal,
        order_id: str,
    ) -> list[LedgerRow]:
        sign = -1 if direction == TxnType.BUY else 1
        gross = (unit_price * quantity * sign).quantize(CENTS)
        action = f"{direction.value} {quantity} {product}@{unit_price:,} {currency.value} ({isin})"

        def row(description: str, row_currency: Currency, amount: Decimal, rate: Decimal | None = None) -> LedgerRow:
            return LedgerRow(
                date=when.date(),
                time=when.time(),
                value_date=when.date(),
                product=product,
                isin=isin,
                description=description,
                fx_rate=rate,
                currency=row_currency,
                amount=amount,
                balance=ZERO,
                order_id=order_id,
            )

        rows = []
        if currency == Currency.USD:
            eur = (gross / fx_rate).quantize(CENTS)
            if direction == TxnType.BUY:
                rows.append(row(Description.FX_CREDIT.value, Currency.USD, -gross, fx_rate))
                rows.append(row(Description.FX_DEBIT.value, Currency.EUR, eur))
            else:
                rows.append(row(Description.FX_DEBIT.value, Currency.USD, -gross, fx_rate))
                rows.append(row(Description.FX_CREDIT.value, Currency.EUR, eur))
        if fee:
            rows.append(row(Description.TRANSACTION_FEE.value, Currency.EUR, fee))
        rows.append(row(action, currency, gross))
        return rows

    def _cash_row(
        self,
        when: datetime | date,
        product: str,
        isin: str,
        description: str,
        currency: Currency,
        amount: Decimal,
    ) -> LedgerRow:
        if not isinstance(when, datetime):
            when = datetime.combine(when, datetime.min.time())
        return LedgerRow(
            date=when.date(),
            time=when.time(),
            value_date=when.date(),
            product=product,
            isin=isin,
            description=description,
            fx_rate=None,
            currency=currency,
            amount=amount,
            balance=ZERO,
        )
