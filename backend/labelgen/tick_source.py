"""Tick data source for label generation.

Reads `timestamp,bid,ask` CSV files lazily, one row at a time.
Prices are parsed as Decimal so pip arithmetic downstream is exact.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterator
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Protocol

from labelcore.models.tick import Tick

logger = logging.getLogger(__name__)


class TickSource(Protocol):
    """Protocol for tick data access."""

    def __iter__(self) -> Iterator[Tick]: ...

    def load(self) -> list[Tick]: ...


def parse_tick(row: list[str]) -> Tick | None:
    """Parse one CSV row into a Tick, or None if it is malformed.

    Naive timestamps are treated as UTC.
    """
    if len(row) < 3:
        return None

    try:
        timestamp = datetime.fromisoformat(row[0].strip())
        bid = Decimal(row[1].strip())
        ask = Decimal(row[2].strip())
    except (ValueError, InvalidOperation):
        return None

    if not (bid.is_finite() and ask.is_finite()):
        return None

    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)

    return Tick(timestamp=timestamp, bid=bid, ask=ask)


class CsvTickSource:
    """Stream ticks from a CSV file.

    Blank lines and lines starting with '#' are skipped. Malformed rows
    are logged with their line number and skipped. Undecodable bytes
    are replaced and fail parsing like any other malformed row.
    """

    def __init__(
        self,
        path: str | Path,
        has_header: bool = True,
        progress_every: int = 10_000,
    ):
        self.path = Path(path)
        self.has_header = has_header
        self.progress_every = progress_every
        self.skipped = 0

    def __iter__(self) -> Iterator[Tick]:
        if not self.path.exists():
            raise FileNotFoundError(f"Tick data file not found: {self.path}")

        self.skipped = 0
        yielded = 0

        with open(self.path, newline="", encoding="utf-8-sig", errors="replace") as f:
            for line_no, row in enumerate(csv.reader(f), start=1):
                if line_no == 1 and self.has_header:
                    continue
                if not row or not "".join(row).strip():
                    continue
                if row[0].lstrip().startswith("#"):
                    continue

                tick = parse_tick(row)
                if tick is None:
                    self.skipped += 1
                    logger.warning(f"Error parsing line {line_no} of {self.path.name}")
                    continue

                yield tick
                yielded += 1

                if self.progress_every > 0 and yielded % self.progress_every == 0:
                    logger.debug(f"Loaded {yielded:,} ticks (line {line_no:,})")

        logger.info(
            f"Loaded {yielded:,} ticks from {self.path}"
            + (f" ({self.skipped:,} malformed lines skipped)" if self.skipped else "")
        )

    def load(self) -> list[Tick]:
        """Load all ticks into memory."""
        return list(self)
