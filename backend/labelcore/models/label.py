"""Trade simulation and label result models.

Results use @dataclass(slots=True, frozen=True): one TrailingStopResult
per direction and one LabelResult per decision point are created on the
hot path, so they skip pydantic validation.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(int, Enum):
    """Trade direction."""

    LONG = 1
    SHORT = -1

    @property
    def is_long(self) -> bool:
        return self is Direction.LONG


class ExitReason(str, Enum):
    """Why a simulated trade was closed."""

    STOP_LOSS = "stop_loss"
    TAKE_PROFIT = "take_profit"
    TRAILING_STOP = "trailing_stop"
    TIME_LIMIT = "time_limit"


class TrailState(str, Enum):
    """Trailing-stop state for a single simulated trade."""

    WAITING_FOR_ACTIVATION = "waiting_for_activation"
    TRAILING = "trailing"


@dataclass(slots=True, frozen=True)
class TrailingStopResult:
    """Outcome of one directional trailing-stop simulation.

    All distances are in pips. Excursions are running maxima over the
    whole path and are never negative.
    """

    profit_pips: float
    max_favorable_excursion_pips: float
    max_adverse_excursion_pips: float
    time_to_exit: int  # Index into the future-tick window
    exit_reason: ExitReason
    trailing_activated: bool


@dataclass(slots=True, frozen=True)
class LabelResult:
    """Final training label for one decision point."""

    label: int  # 1 = long, -1 = short, 0 = neutral
    confidence: float
    long_profit_pips: float
    short_profit_pips: float
    max_adverse_excursion: float
    max_favorable_excursion: float
    time_to_target: int
    risk_reward_ratio: float
    quality_score: float

    @classmethod
    def neutral(cls) -> LabelResult:
        """Label for windows too short to simulate."""
        return cls(
            label=0,
            confidence=0.0,
            long_profit_pips=0.0,
            short_profit_pips=0.0,
            max_adverse_excursion=0.0,
            max_favorable_excursion=0.0,
            time_to_target=0,
            risk_reward_ratio=0.0,
            quality_score=0.0,
        )

    @property
    def direction(self) -> Direction | None:
        """Winning direction, or None for a neutral label."""
        if self.label == 0:
            return None
        return Direction(self.label)
