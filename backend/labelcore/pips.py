"""Pip conversion and guarded arithmetic helpers."""

from __future__ import annotations

from decimal import Decimal

from labelcore.models.config import PIP

# Denominators smaller than this are treated as zero
EPSILON = 1e-10


def to_pips(price_delta: Decimal, pip_size: Decimal = PIP) -> float:
    """Convert a price difference to pips."""
    return float(price_delta / pip_size)


def from_pips(pips: float, pip_size: Decimal = PIP) -> Decimal:
    """Convert a pip distance to a price difference.

    Goes through str() so 3.5 pips is exactly 0.00035 rather than the
    binary expansion of the float.
    """
    return Decimal(str(pips)) * pip_size


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide, returning default when the denominator is effectively zero."""
    if abs(denominator) < EPSILON:
        return default
    return numerator / denominator


def clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return min(hi, max(lo, value))
