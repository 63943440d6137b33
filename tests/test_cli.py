"""Tests for the CSV loader and command-line entry point."""

import pytest
from datetime import datetime, timedelta, timezone

import orjson

from equity_signals.__main__ import main
from equity_signals.config import get_settings
from equity_signals.loader import BarLoadError, iter_csv_rows, load_bars

START = datetime(2024, 4, 1, 14, 30, tzinfo=timezone.utc)


def _write_csv(path, prices, with_symbol: bool = False):
    header = "symbol,last_price,volume,timestamp" if with_symbol else "last_price,volume,timestamp"
    lines = [header]
    for i, price in enumerate(prices):
        ts = (START + timedelta(days=i)).isoformat()
        row = f"{price},1000,{ts}"
        lines.append(f"ACME,{row}" if with_symbol else row)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestLoader:
    def test_symbol_from_file_stem(self, tmp_path):
        path = _write_csv(tmp_path / "acme.csv", [100, 101, 102])
        bars = load_bars(path)
        assert len(bars) == 3
        assert bars[0].symbol == "ACME"
        assert bars[-1].volume == 1000

    def test_symbol_column_wins(self, tmp_path):
        path = _write_csv(tmp_path / "prices.csv", [100, 101], with_symbol=True)
        bars = load_bars(path, symbol="OTHER")
        assert {b.symbol for b in bars} == {"ACME"}

    def test_empty_cells_use_defaults(self):
        text = "last_price,volume,timestamp\n100,,2024-04-01T14:30:00+00:00\n"
        bars = list(iter_csv_rows(text, "ACME"))
        assert bars[0].volume == 0

    def test_missing_columns(self):
        with pytest.raises(BarLoadError, match="timestamp"):
            list(iter_csv_rows("last_price\n100\n", "ACME"))

    def test_bad_row(self):
        text = "last_price,timestamp\n-5,2024-04-01T14:30:00+00:00\n"
        with pytest.raises(BarLoadError, match="line 2"):
            list(iter_csv_rows(text, "ACME"))


class TestMain:
    def test_console_report(self, tmp_path, capsys):
        path = _write_csv(tmp_path / "acme.csv", [100 + 2 * i for i in range(25)])
        assert main([str(path)]) == 0

        out = capsys.readouterr().out
        assert "TECHNICAL ANALYSIS" in out
        assert "Moving Average" in out
        assert "Prediction: Bullish direction" in out

    def test_json_output(self, tmp_path, capsys):
        path = _write_csv(tmp_path / "acme.csv", [100] * 25)
        assert main([str(path), "--symbol", "XYZ", "--json"]) == 0

        payload = orjson.loads(capsys.readouterr().out)
        assert payload["analysis"]["symbol"] == "XYZ"
        assert payload["prediction"]["direction"] == "NEUTRAL"
        assert payload["prediction"]["target_price"] == "100"
        assert payload["analysis"]["input_length"] == 25

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.csv")]) == 1
        assert "Error" in capsys.readouterr().err

    def test_strategy_selection(self, tmp_path, capsys):
        path = _write_csv(tmp_path / "acme.csv", [100 + 2 * i for i in range(25)])
        assert main([str(path), "--strategy", "volume", "--strategy", "rsi", "--json"]) == 0

        payload = orjson.loads(capsys.readouterr().out)
        assert [s["name"] for s in payload["analysis"]["strategies"]] == ["RSI", "Volume Analysis"]

    def test_unknown_strategy_rejected(self, tmp_path, capsys):
        path = _write_csv(tmp_path / "acme.csv", [100] * 25)
        with pytest.raises(SystemExit) as exc:
            main([str(path), "--strategy", "nope"])
        assert exc.value.code == 2
        assert "invalid choice" in capsys.readouterr().err
