"""Grammar of DEGIRO order action lines.

An action line is the description of the ledger row that records a fill::

    Buy 85 ACME INC. COM@9.45 USD (US0000000001)
    Sell 10 ACME Inc@7.215 USD
    ISIN CHANGE: Sell 28 ORIGINAL NAME@40.47 USD (US12008C1234)

The verb, the quantity, the product name up to the first ``@``, the unit
price, the currency token and an optional parenthesized instrument id are
captured into an :class:`ActionLine`.
"""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from degiro_gains.exceptions import MalformedDescriptionError
from degiro_gains.models.enums import Currency, TxnType

_ACTION_RE = re.compile(
    r"^(?:ISIN CHANGE: )?"
    r"(?P<direction>Buy|Sell) "
    r"(?P<quantity>\d[\d,]*) "
    r"(?P<name>.+?)@"
    r"(?P<price>\d[\d.,]*) "
    r"(?P<currency>EUR|USD)"
    r"(?: \((?P<isin>[^)]*)\))?"
)


@dataclass(frozen=True)
class ActionLine:
    """Typed capture of an action line."""

    direction: TxnType
    quantity: int
    product_name: str
    unit_price: Decimal
    currency: Currency
    isin: str  # empty when the line carries no parenthesized id


def is_action_line(description: str) -> bool:
    """Return True if ``description`` is a Buy/Sell action line."""
    return _ACTION_RE.match(description.strip()) is not None


def parse_action_line(description: str, row: Any = None) -> ActionLine:
    """Parse an action line.

    Parameters
    ----------
    description : str
        Description text of a ledger row.
    row : Any
        Ledger row the description comes from, attached to the error.

    Returns
    -------
    ActionLine
        Parsed direction, quantity, price, currency and instrument id.

    Raises
    ------
    MalformedDescriptionError
        If the text does not follow the action-line grammar.
    """
    match = _ACTION_RE.match(description.strip())
    if match is None:
        raise MalformedDescriptionError(description, row)

    try:
        quantity = int(match.group("quantity").replace(",", ""))
        unit_price = parse_grouped_number(match.group("price"))
    except (ValueError, InvalidOperation):
        raise MalformedDescriptionError(description, row) from None

    return ActionLine(
        direction=TxnType(match.group("direction")),
        quantity=quantity,
        product_name=match.group("name").strip(),
        unit_price=unit_price,
        currency=Currency(match.group("currency")),
        isin=(match.group("isin") or "").strip(),
    )


def parse_grouped_number(text: str) -> Decimal:
    """Parse a price that may contain thousands separators.

    Both ``1,154.97`` and ``1.154,97`` give ``Decimal("1154.97")``. With a
    single kind of separator, ``,`` followed by 3-digit groups only is read
    as grouping (``1,154``), and a repeated ``.`` as well (``1.154.000``).
    """
    text = text.strip()
    if "," in text and "." in text:
        decimal_sep = "," if text.rfind(",") > text.rfind(".") else "."
        group_sep = "." if decimal_sep == "," else ","
        return Decimal(text.replace(group_sep, "").replace(decimal_sep, "."))

    if "," in text:
        head, *groups = text.split(",")
        if head and all(len(g) == 3 for g in groups):
            return Decimal(text.replace(",", ""))
        if len(groups) == 1:
            return Decimal(f"{head}.{groups[0]}")
        raise ValueError(f"Ambiguous number {text!r}")

    if text.count(".") > 1:
        return Decimal(text.replace(".", ""))

    return Decimal(text)
