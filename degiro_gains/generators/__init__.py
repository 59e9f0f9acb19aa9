"""Synthetic DEGIRO ledger generators."""

from degiro_gains.generators.ledger import LedgerGenerator

__all__ = ["LedgerGenerator"]
