"""CLI entry point: technical analysis and prediction for one CSV of bars.

Usage:
    python -m equity_signals bars.csv
    python -m equity_signals bars.csv --symbol AAPL --json
"""

import argparse
import logging
import sys

import orjson

from equity_signals.config import get_settings
from equity_signals.engine import build_engine
from equity_signals.loader import BarLoadError, load_bars
from equity_signals.report import ReportFormatter
from equity_signals.strategy import display_names, strategy_keys


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Technical analysis and heuristic prediction for price bars",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m equity_signals bars.csv
  python -m equity_signals bars.csv --symbol AAPL --json
  python -m equity_signals bars.csv --strategy rsi --strategy macd

Strategies:
""" + "\n".join(f"  {key:<16} {name}" for key, name in display_names().items()),
    )
    parser.add_argument("path", help="CSV file with one bar per row")
    parser.add_argument(
        "--symbol",
        type=str,
        default=None,
        help="Symbol for rows without a symbol column (default: file name)",
    )
    parser.add_argument(
        "--strategy",
        action="append",
        choices=strategy_keys(),
        default=None,
        help="Strategy to run (repeatable, default: all)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON instead of the console report",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose logging",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()

    level = logging.DEBUG if args.verbose else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

    try:
        bars = load_bars(args.path, args.symbol)
    except (OSError, BarLoadError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    symbol = args.symbol or (bars[0].symbol if bars else args.path)
    if args.strategy:
        settings = settings.model_copy(update={"strategies": args.strategy})
    engine = build_engine(settings)
    analysis = engine.analyze(symbol, bars)
    prediction = engine.predict(symbol, bars)

    if args.json:
        payload = ReportFormatter.to_dict(analysis, prediction)
        sys.stdout.write(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode() + "\n")
    else:
        ReportFormatter.print_console(analysis, prediction)
    return 0


if __name__ == "__main__":
    sys.exit(main())
