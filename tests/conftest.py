"""Pytest configuration and fixtures."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable

import pytest

from degiro_gains.generators import LedgerGenerator
from degiro_gains.models import Currency, ProductType, Transaction, TxnType
from degiro_gains.parsing import parse_ledger

HEADER = "Date,Time,Value date,Product,ISIN,Description,FX,Change,,Balance,,Order ID"


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging during a test."""
    root = logging.getLogger()
    package = logging.getLogger("degiro_gains")
    handlers, level, package_level = root.handlers[:], root.level, package.level
    yield
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler and handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
    package.setLevel(package_level)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def ledger_gen(seed: int) -> LedgerGenerator:
    """Seeded synthetic ledger generator."""
    return LedgerGenerator(seed=seed)


@pytest.fixture
def header() -> str:
    """Header line of the DEGIRO Account.csv export."""
    return HEADER


@pytest.fixture
def ledger() -> Callable:
    """Decode statement rows given as CSV lines without header."""

    def _ledger(lines: str):
        return parse_ledger(HEADER + "\n" + lines)

    return _ledger


@pytest.fixture
def make_txn() -> Callable[..., Transaction]:
    """Build a transaction with sensible defaults."""

    def _make_txn(**overrides) -> Transaction:
        values = dict(
            date=datetime(2019, 4, 4),
            direction=TxnType.BUY,
            product="Acme Inc A",
            isin="ABC",
            product_type=ProductType.SHARES,
            quantity=5,
            unit_price=Decimal("20"),
            total_cost=Decimal("-100.0"),
            value_currency=Currency.EUR,
            fees=Decimal("2.5"),
            order_id="00000000-0000-0000-0000-000000000001",
        )
        values.update(overrides)
        return Transaction(**values)

    return _make_txn
