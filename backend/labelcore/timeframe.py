"""Timeframe parsing and period alignment.

Decision points fall on bar boundaries: the first tick of a new period
completes the previous bar. Periods are aligned to the Unix epoch, so a
5m bar always starts at a minute divisible by 5.
"""

from __future__ import annotations

from datetime import datetime, timezone

# Timeframe to seconds mapping
TIMEFRAME_SECONDS = {
    "1s": 1,
    "5s": 5,
    "15s": 15,
    "30s": 30,
    "1m": 60,
    "3m": 180,
    "5m": 300,
    "15m": 900,
    "30m": 1800,
    "1h": 3600,
}


def timeframe_seconds(timeframe: str) -> int:
    """Get the period length of a timeframe in seconds."""
    try:
        return TIMEFRAME_SECONDS[timeframe]
    except KeyError:
        raise ValueError(
            f"Unsupported timeframe '{timeframe}' "
            f"(expected one of {', '.join(TIMEFRAME_SECONDS)})"
        ) from None


def period_start(timestamp: datetime, period_seconds: int) -> int:
    """Get the epoch second at which timestamp's period starts.

    Naive timestamps are treated as UTC.
    """
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return (int(timestamp.timestamp()) // period_seconds) * period_seconds
