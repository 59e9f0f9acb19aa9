"""Tests for sinks and serialization."""

import json
from datetime import date, datetime, time
from decimal import Decimal
from pathlib import Path

import pytest

from degiro_gains.exceptions import SinkError
from degiro_gains.models import (
    Currency,
    Dividend,
    Earning,
    EarningsSummary,
    Period,
    ProductType,
    TxnType,
)
from degiro_gains.sinks import ConsoleSink, JsonFileSink
from degiro_gains.sinks.serialization import serialize_value, to_dict, to_records


@pytest.fixture
def earnings() -> list[Earning]:
    return [
        Earning(
            date=datetime(2020, 12, 5, 10, 0),
            product="ACME Inc",
            isin="US0000000001",
            product_type=ProductType.SHARES,
            value=Decimal("300.00"),
            percent=Decimal("100.00"),
        ),
        Earning(
            date=datetime(2020, 6, 10, 10, 0),
            product="ORPHAN",
            isin="",
            product_type=ProductType.ETF,
            value=Decimal("30.00"),
            percent=None,
        ),
    ]


@pytest.fixture
def dividends() -> list[Dividend]:
    return [
        Dividend(
            year=2020,
            product="ACME Inc",
            isin="US0000000001",
            value=Decimal("10.5"),
            value_tax=Decimal("-1.58"),
            currency=Currency.USD,
        )
    ]


class TestSerialization:
    """Tests for serialization helpers."""

    def test_serialize_values(self) -> None:
        assert serialize_value(Decimal("1.10")) == "1.10"
        assert serialize_value(TxnType.SELL) == "Sell"
        assert serialize_value(datetime(2020, 1, 2, 3, 4)) == "2020-01-02T03:04:00"
        assert serialize_value(date(2020, 1, 2)) == "2020-01-02"
        assert serialize_value(time(15, 30)) == "15:30:00"
        assert serialize_value([Decimal("1"), (Currency.EUR,)]) == ["1", ["EUR"]]
        assert serialize_value({"a": Decimal("2")}) == {"a": "2"}
        assert serialize_value(None) is None

    def test_to_dict_dataclass(self, earnings: list[Earning]) -> None:
        result = to_dict(earnings[1])

        assert result == {
            "date": "2020-06-10T10:00:00",
            "product": "ORPHAN",
            "isin": "",
            "product_type": "ETF",
            "value": "30.00",
            "percent": None,
        }

    def test_to_records(self, dividends: list[Dividend]) -> None:
        assert to_records(dividends) == [to_dict(dividends[0])]
        assert to_records([]) == []

    def test_to_dict_other(self) -> None:
        assert to_dict({"x": Period.LATER}) == {"x": 2}
        assert to_dict(Decimal("5")) == {"value": "5"}


class TestConsoleSink:
    """Tests for ConsoleSink."""

    def test_no_sells(self, capsys: pytest.CaptureFixture) -> None:
        ConsoleSink().write_no_sells(2021, Period.LATER)

        assert capsys.readouterr().out == "No sells recorded in 2021, period Later.\n"

    def test_earnings(self, capsys: pytest.CaptureFixture, earnings: list[Earning]) -> None:
        ConsoleSink().write_earnings(earnings)
        lines = capsys.readouterr().out.splitlines()

        assert "P/L (€)" in lines[0]
        assert lines[2].startswith("2020-12-05 ACME Inc")
        assert lines[2].endswith("300.00   100.0%")
        assert lines[3].endswith("n/a")

    def test_truncates_long_product_names(self, capsys: pytest.CaptureFixture, earnings: list[Earning]) -> None:
        ConsoleSink(product_width=4).write_earnings(earnings[:1])

        assert "ACME " in capsys.readouterr().out

    def test_summary(self, capsys: pytest.CaptureFixture) -> None:
        sink = ConsoleSink()

        sink.write_summary(EarningsSummary(count=2, total=Decimal("330"), average_percent=Decimal("100.00")))
        sink.write_summary(EarningsSummary(count=0, total=Decimal("0"), average_percent=None))
        out = capsys.readouterr().out

        assert "Tot. P/L (€): 330.00" in out
        assert "Avg % P/L: 100.00%" in out
        assert "Avg % P/L: n/a" in out

    def test_fees_and_deposits(self, capsys: pytest.CaptureFixture) -> None:
        sink = ConsoleSink()

        sink.write_fees(2019, Decimal("-6.53"))
        sink.write_deposits(2019, Decimal("2200"), Decimal("1000"))
        out = capsys.readouterr().out

        assert "Tot. DeGiro fees in 2019 (€): -6.53" in out
        assert "Tot. deposits (€): 2200.00" in out
        assert "Tot. deposits in 2019 (€): 1000.00" in out

    def test_dividends(self, capsys: pytest.CaptureFixture, dividends: list[Dividend]) -> None:
        sink = ConsoleSink()

        sink.write_dividends(2020, dividends)
        sink.write_dividends(2021, [])
        out = capsys.readouterr().out

        assert "Dividends in 2020" in out
        assert "10.50" in out
        assert "-1.58 USD" in out
        assert "No dividends recorded in 2021." in out


class TestJsonFileSink:
    """Tests for JsonFileSink."""

    def test_creates_directory(self, tmp_path: Path) -> None:
        output = tmp_path / "nested" / "report"

        JsonFileSink(output)

        assert output.is_dir()

    def test_write_batch(self, tmp_path: Path, dividends: list[Dividend]) -> None:
        sink = JsonFileSink(tmp_path)

        path = sink.write_batch("dividends", dividends)

        assert path == tmp_path / "dividends.json"
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data == [
            {
                "year": 2020,
                "product": "ACME Inc",
                "isin": "US0000000001",
                "value": "10.5",
                "value_tax": "-1.58",
                "currency": "USD",
            }
        ]
        assert sink._counts["dividends"] == 1

    def test_pretty(self, tmp_path: Path, earnings: list[Earning]) -> None:
        path = JsonFileSink(tmp_path, pretty=True).write_batch("earnings", earnings)

        text = path.read_text(encoding="utf-8")
        assert text.startswith("[\n  {")
        assert len(json.loads(text)) == 2

    def test_close_logs_counts(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        sink = JsonFileSink(tmp_path)
        sink.write_batch("earnings", [])

        with caplog.at_level("INFO", logger="degiro_gains"):
            sink.close()

        assert "earnings: 0 records" in caplog.text

    def test_unwritable_directory(self, tmp_path: Path) -> None:
        """Test that a file in place of the directory raises SinkError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("x")

        with pytest.raises(SinkError):
            JsonFileSink(blocker / "out")

    def test_write_failure(self, tmp_path: Path) -> None:
        sink = JsonFileSink(tmp_path)
        (tmp_path / "earnings.json").mkdir()

        with pytest.raises(SinkError, match="Cannot write"):
            sink.write_batch("earnings", [])
