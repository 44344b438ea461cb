"""Batch label generation for the 3-class tick classifier.

Only depends on labelcore/ for business logic.

Usage:
    python -m labelgen data/ticks_data.csv
    python -m labelgen data/ticks_data.csv --config labels.yaml --workers 4
"""

from labelgen.runner import LabelRunConfig, LabelRunner, LabelRunResult
from labelgen.stats import LabelStatistics, LabelStatisticsCalculator

__all__ = [
    "LabelRunConfig",
    "LabelRunner",
    "LabelRunResult",
    "LabelStatistics",
    "LabelStatisticsCalculator",
]
