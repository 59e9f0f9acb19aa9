"""Output sinks for report records."""

from degiro_gains.sinks.console import ConsoleSink
from degiro_gains.sinks.json_file import JsonFileSink

__all__ = ["ConsoleSink", "JsonFileSink"]
