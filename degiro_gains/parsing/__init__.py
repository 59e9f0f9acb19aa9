"""Decoding of statement files and order descriptions."""

from degiro_gains.parsing.csv_loader import load_ledger, parse_ledger, row_from_record
from degiro_gains.parsing.description import (
    ActionLine,
    is_action_line,
    parse_action_line,
    parse_grouped_number,
)

__all__ = [
    "ActionLine",
    "is_action_line",
    "load_ledger",
    "parse_action_line",
    "parse_grouped_number",
    "parse_ledger",
    "row_from_record",
]
