"""CSV bar loader.

Expected header uses Bar field names; only ``last_price`` and ``timestamp``
are required. Empty cells fall back to the field default.
"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Iterator

from pydantic import ValidationError

from equity_signals.models import Bar

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("last_price", "timestamp")


class BarLoadError(ValueError):
    """Raised when a CSV file cannot be turned into bars."""


def iter_csv_rows(text: str, symbol: str) -> Iterator[Bar]:
    """Parse CSV text into bars for ``symbol`` (a ``symbol`` column wins)."""
    reader = csv.DictReader(io.StringIO(text))
    missing = [c for c in REQUIRED_COLUMNS if c not in (reader.fieldnames or [])]
    if missing:
        raise BarLoadError(f"missing required columns: {', '.join(missing)}")

    for line_no, row in enumerate(reader, start=2):
        data = {k: v for k, v in row.items() if k and v not in (None, "")}
        data.setdefault("symbol", symbol)
        try:
            yield Bar.model_validate(data)
        except ValidationError as e:
            raise BarLoadError(f"line {line_no}: {e}") from e


def load_bars(path: str | Path, symbol: str | None = None) -> list[Bar]:
    """Load all bars from a CSV file. Symbol defaults to the file stem."""
    path = Path(path)
    bars = list(iter_csv_rows(path.read_text(encoding="utf-8"), symbol or path.stem.upper()))
    logger.info("Loaded %d bars from %s", len(bars), path)
    return bars
