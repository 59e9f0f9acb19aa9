"""Console sink printing the capital-gains report."""

from decimal import Decimal
from typing import Iterable

from degiro_gains.models import Dividend, Earning, EarningsSummary, Period

RULE_WIDTH = 68


class ConsoleSink:
    """Print report sections to stdout."""

    def __init__(self, product_width: int = 40) -> None:
        self.product_width = product_width

    def write_no_sells(self, year: int, period: Period) -> None:
        print(f"No sells recorded in {year}, period {period.name.capitalize()}.")

    def write_earnings(self, earnings: Iterable[Earning]) -> None:
        """Print one line per sale: date, product, P/L and P/L percentage."""
        w = self.product_width
        print(f"{'Date':<10} {'Product':<{w}} {'P/L (€)':>9} {'P/L %':>8}")
        print("-" * RULE_WIDTH)
        for e in earnings:
            percent = f"{e.percent:7.1f}%" if e.percent is not None else f"{'n/a':>8}"
            print(f"{e.date:%Y-%m-%d} {e.product[:w]:<{w}} {e.value:9.2f} {percent}")

    def write_summary(self, summary: EarningsSummary) -> None:
        print(f"\nTot. P/L (€): {summary.total:.2f}")
        if summary.average_percent is not None:
            print(f"Avg % P/L: {summary.average_percent:.2f}%")
        else:
            print("Avg % P/L: n/a")

    def write_fees(self, year: int, fees: Decimal) -> None:
        print(f"\nTot. DeGiro fees in {year} (€): {fees:.2f}")

    def write_deposits(self, year: int, total: Decimal, year_total: Decimal) -> None:
        print(f"\nTot. deposits (€): {total:.2f}")
        print(f"Tot. deposits in {year} (€): {year_total:.2f}")

    def write_dividends(self, year: int, dividends: list[Dividend]) -> None:
        if not dividends:
            print(f"\nNo dividends recorded in {year}.")
            return
        w = self.product_width
        print(f"\nDividends in {year}")
        print(f"{'Product':<{w}} {'Gross':>9} {'Tax':>8} Cur")
        print("-" * RULE_WIDTH)
        for d in dividends:
            print(f"{d.product[:w]:<{w}} {d.value:9.2f} {d.value_tax:8.2f} {d.currency.value}")
