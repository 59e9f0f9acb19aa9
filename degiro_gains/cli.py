"""Command-line report of capital gains, fees, deposits and dividends.

Usage::

    degiro-gains Account.csv 2020          # whole year
    degiro-gains Account.csv 2020 1        # Jan-Nov (first CGT period)
    degiro-gains Account.csv 2020 2        # December (second CGT period)
    degiro-gains Account.csv 2020 --json-out report/
"""

import argparse
from pathlib import Path

from degiro_gains.config import GainsConfig, parse_period, parse_zero_cost_basis
from degiro_gains.engine import summarize_earnings
from degiro_gains.exceptions import DegiroGainsError
from degiro_gains.logging import get_logger, setup_logging
from degiro_gains.sinks import ConsoleSink, JsonFileSink
from degiro_gains.statement import AccountStatement

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="degiro-gains",
        description="Capital gains statistics from a DEGIRO account statement",
    )
    parser.add_argument("statement", type=Path, help="Path to the Account.csv export")
    parser.add_argument("year", type=int, help="Tax year")
    parser.add_argument(
        "period",
        nargs="?",
        default=None,
        help="1 = Jan-Nov, 2 = December, 3 = whole year (default: REPORT_PERIOD or 3)",
    )
    parser.add_argument(
        "--zero-cost-basis",
        choices=["undefined", "raise"],
        default=None,
        help="Sales without matched purchase cost: report n/a or fail",
    )
    parser.add_argument("--json-out", type=Path, default=None, help="Directory for JSON output")
    parser.add_argument("--pretty", action="store_true", help="Pretty-print JSON output")
    parser.add_argument("--workers", type=int, default=None, help="Worker processes for order building")
    parser.add_argument("--log-level", default=None, help="Log level (default: LOG_LEVEL or INFO)")
    parser.add_argument(
        "--log-format",
        choices=["standard", "json"],
        default=None,
        help="Log format (default: LOG_FORMAT or standard)",
    )
    return parser


def _apply_args(config: GainsConfig, args: argparse.Namespace) -> GainsConfig:
    if args.period is not None:
        config.report.period = parse_period(args.period)
    if args.zero_cost_basis is not None:
        config.report.zero_cost_basis = parse_zero_cost_basis(args.zero_cost_basis)
    if args.workers is not None:
        config.report.workers = max(1, args.workers)
    if args.json_out is not None:
        config.output.json_output_dir = args.json_out
    if args.pretty:
        config.output.pretty_json = True
    if args.log_level is not None:
        config.log_level = args.log_level
    if args.log_format is not None:
        config.log_format = args.log_format
    return config


def run(args: argparse.Namespace) -> int:
    """Run the report; returns the process exit code."""
    config = _apply_args(GainsConfig.from_env(), args)
    setup_logging(config.log_level, config.log_format)

    year = args.year
    period = config.report.period
    policy = config.report.zero_cost_basis

    statement = AccountStatement.from_csv(args.statement, config.ledger, workers=config.report.workers)
    console = ConsoleSink()

    sells = statement.sells(year, period)
    if not sells:
        console.write_no_sells(year, period)
        return 0

    earnings = statement.earnings(year, period, policy)
    summary = summarize_earnings(earnings)
    dividends = statement.dividends(year)

    console.write_earnings(earnings)
    console.write_summary(summary)
    console.write_fees(year, statement.fees(year))
    console.write_deposits(year, statement.deposits(), statement.deposits(year))
    console.write_dividends(year, dividends)

    if config.output.json_output_dir is not None:
        sink = JsonFileSink(config.output.json_output_dir, pretty=config.output.pretty_json)
        sink.write_batch("transactions", statement.transactions)
        sink.write_batch("earnings", earnings)
        sink.write_batch("dividends", dividends)
        sink.close()

    logger.info("Reported %d sales for %d, period %s", summary.count, year, period.name)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return run(args)
    except DegiroGainsError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
