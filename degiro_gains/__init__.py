"""Capital-gains statistics from DEGIRO account statements."""

__version__ = "0.3.0"
