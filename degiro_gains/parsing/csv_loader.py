"""Decoding of the DEGIRO ``Account.csv`` export into ledger rows."""

import io
import logging
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from pathlib import Path

import pandas as pd

from degiro_gains.config import LedgerConfig
from degiro_gains.engine.grouping import group_key
from degiro_gains.exceptions import LedgerFormatError
from degiro_gains.models.enums import Currency
from degiro_gains.models.ledger import LedgerRow

logger = logging.getLogger(__name__)

# Date,Time,Value date,Product,ISIN,Description,FX,Change,,Balance,,Order ID
COLUMNS = [
    "date",
    "time",
    "value_date",
    "product",
    "isin",
    "description",
    "fx",
    "currency",
    "amount",
    "balance_currency",
    "balance",
    "order_id",
]


def load_ledger(path: str | Path, config: LedgerConfig | None = None) -> list[LedgerRow]:
    """Load an account statement CSV file.

    Parameters
    ----------
    path : str | Path
        Path to the DEGIRO ``Account.csv`` export.
    config : LedgerConfig | None
        Date and number formats (defaults to the English export).

    Returns
    -------
    list[LedgerRow]
        Rows in file order.
    """
    config = config or LedgerConfig()
    path = Path(path)
    if not path.exists():
        raise LedgerFormatError(f"Statement file not found: {path}")

    logger.info("Loading statement %s", path)
    with open(path, "r", encoding=config.encoding, newline="") as f:
        text = f.read()
    if not text.strip():
        raise LedgerFormatError(f"Statement file is empty: {path}")
    return _read(io.StringIO(text), config)


def parse_ledger(text: str, config: LedgerConfig | None = None) -> list[LedgerRow]:
    """Decode statement rows from CSV text (header line included)."""
    if not text.strip():
        raise LedgerFormatError("Statement is empty")
    return _read(io.StringIO(text.strip()), config or LedgerConfig())


def _read(buffer: io.TextIOBase, config: LedgerConfig) -> list[LedgerRow]:
    try:
        frame = pd.read_csv(
            buffer,
            header=0,
            names=COLUMNS,
            dtype=str,
            keep_default_na=False,
            index_col=False,
            skipinitialspace=True,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise LedgerFormatError(f"Cannot read statement: {e}") from e

    rows: list[LedgerRow] = []
    skipped = 0
    skipped_orders: set[str] = set()
    for idx, record in enumerate(frame.to_dict("records")):
        record = {k: (v or "").strip() for k, v in record.items()}
        if not record["date"]:
            continue

        row = row_from_record(record, config, line=idx + 2)
        if row is None:
            skipped += 1
            if record.get("order_id"):
                skipped_orders.add(group_key(record["order_id"]))
            continue
        rows.append(row)

    # An order traded in another currency still has EUR fee and FX rows
    if skipped_orders:
        kept = [row for row in rows if not (row.order_id and group_key(row.order_id) in skipped_orders)]
        skipped += len(rows) - len(kept)
        rows = kept

    if skipped:
        logger.warning(
            "Skipped %d rows of %d orders in currencies other than EUR/USD",
            skipped,
            len(skipped_orders),
            extra={"skipped_rows": skipped},
        )
    logger.debug("Decoded %d ledger rows", len(rows))
    return rows


def row_from_record(
    record: dict[str, str],
    config: LedgerConfig,
    line: int | None = None,
) -> LedgerRow | None:
    """Convert one CSV record into a :class:`LedgerRow`.

    Returns None for rows in a currency other than EUR or USD.
    """
    currency_code = record.get("currency", "")
    if currency_code not in Currency.__members__:
        logger.debug("Line %s: unsupported currency %r", line, currency_code)
        return None

    try:
        return LedgerRow(
            date=_parse_date(record["date"], config),
            time=_parse_time(record.get("time", ""), config),
            value_date=_parse_date(record["value_date"], config) if record.get("value_date") else None,
            product=record.get("product", ""),
            isin=record.get("isin", ""),
            description=record.get("description", ""),
            fx_rate=_parse_number(record["fx"], config) if record.get("fx") else None,
            currency=Currency(currency_code),
            amount=_parse_number(record.get("amount", ""), config),
            balance=_parse_number(record.get("balance", ""), config),
            order_id=record.get("order_id") or None,
        )
    except (ValueError, InvalidOperation) as e:
        raise LedgerFormatError(f"Line {line}: cannot decode row {record!r}: {e}") from e


def _parse_date(text: str, config: LedgerConfig) -> date:
    return datetime.strptime(text, config.date_format).date()


def _parse_time(text: str, config: LedgerConfig) -> time:
    if not text:
        return time(0, 0)
    return datetime.strptime(text, config.time_format).time()


def _parse_number(text: str, config: LedgerConfig) -> Decimal:
    if not text:
        return Decimal("0")
    normalized = text.replace(config.thousands_separator, "")
    if config.decimal_separator != ".":
        normalized = normalized.replace(config.decimal_separator, ".")
    return Decimal(normalized)
