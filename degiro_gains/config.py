"""Configuration management for degiro-gains."""

from dataclasses import dataclass, field
from pathlib import Path

from degiro_gains.exceptions import ConfigurationError
from degiro_gains.models.enums import Period, ZeroCostBasisPolicy


@dataclass
class LedgerConfig:
    """How the DEGIRO CSV export is decoded."""

    date_format: str = "%d-%m-%Y"
    time_format: str = "%H:%M"
    decimal_separator: str = "."
    thousands_separator: str = ","
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        if self.decimal_separator == self.thousands_separator:
            raise ConfigurationError(
                f"Decimal and thousands separators must differ, both are {self.decimal_separator!r}"
            )


@dataclass
class ReportConfig:
    """Earnings report options."""

    period: Period = Period.ALL
    zero_cost_basis: ZeroCostBasisPolicy = ZeroCostBasisPolicy.UNDEFINED
    workers: int = 1

    def __post_init__(self) -> None:
        if self.workers < 1:
            raise ConfigurationError(f"workers must be >= 1, got {self.workers}")


@dataclass
class OutputConfig:
    """Output configuration."""

    json_output_dir: Path | None = None
    pretty_json: bool = False


@dataclass
class GainsConfig:
    """Main configuration for degiro-gains."""

    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "GainsConfig":
        """Create config from environment variables."""
        import os

        ledger = LedgerConfig(
            date_format=os.getenv("DEGIRO_DATE_FORMAT", "%d-%m-%Y"),
            decimal_separator=os.getenv("DEGIRO_DECIMAL_SEPARATOR", "."),
            thousands_separator=os.getenv("DEGIRO_THOUSANDS_SEPARATOR", ","),
        )

        report = ReportConfig(
            period=parse_period(os.getenv("REPORT_PERIOD", "3")),
            zero_cost_basis=parse_zero_cost_basis(os.getenv("ZERO_COST_BASIS", "undefined")),
            workers=_parse_int("WORKERS", os.getenv("WORKERS", "1")),
        )

        output_dir = os.getenv("OUTPUT_DIR")
        output = OutputConfig(
            json_output_dir=Path(output_dir) if output_dir else None,
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        return cls(
            ledger=ledger,
            report=report,
            output=output,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )


def parse_period(value: str | int) -> Period:
    """Parse a sub-period selector given by number (1, 2, 3) or name."""
    text = str(value).strip()
    try:
        if text.isdigit():
            return Period(int(text))
        return Period[text.upper()]
    except (KeyError, ValueError):
        raise ConfigurationError(
            f"Invalid period {value!r}, expected 1 (Initial), 2 (Later) or 3 (All)"
        ) from None


def parse_zero_cost_basis(value: str) -> ZeroCostBasisPolicy:
    """Parse a zero-cost-basis policy name."""
    try:
        return ZeroCostBasisPolicy(value.strip().lower())
    except ValueError:
        choices = ", ".join(p.value for p in ZeroCostBasisPolicy)
        raise ConfigurationError(
            f"Invalid zero cost basis policy {value!r}, expected one of: {choices}"
        ) from None


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from None
