"""Trailing-stop trade simulator.

Runs one hypothetical long or short trade forward over a bounded window
of future ticks and reports how it ended.

Pricing (spread cost on both legs):
- LONG: enter at ask, mark/exit at bid
- SHORT: enter at bid, mark/exit at ask

Exit priority on every tick (first match wins):
1. StopLoss      mark crosses the hard stop (touch counts), fill at the stop
2. TakeProfit    favorable move >= 3 x activation distance, fill at mark
3. TrailingStop  once activated, mark crosses the ratcheted level, fill at level
4. TimeLimit     tick index reaches MAX_TIME_LIMIT_TICKS, fill at mark

Excursions are updated before the exit checks. If the window runs out
first, the trade closes at the last tick's mark with TimeLimit.

All price arithmetic stays in Decimal; boundary touches compare exactly.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from labelcore.models.config import (
    DEFAULT_MIN_SL_PIPS,
    DEFAULT_SPREAD_MULT,
    MAX_TIME_LIMIT_TICKS,
    MIN_FUTURE_TICKS,
    PIP,
    TAKE_PROFIT_MULTIPLIER,
    LabelGenerationConfig,
)
from labelcore.models.label import Direction, ExitReason, TrailingStopResult, TrailState
from labelcore.models.tick import Tick
from labelcore.pips import from_pips, to_pips

ZERO = Decimal("0")


def infer_stop_loss_pips(config: LabelGenerationConfig, entry_tick: Tick) -> float:
    """Resolve the hard stop-loss distance for one decision point.

    A positive configured value is used as-is. Otherwise the stop is the
    largest of DEFAULT_MIN_SL_PIPS, the trailing distance and three times
    the entry spread. Both directions share the returned value.
    """
    if config.stop_loss_pips > 0:
        return config.stop_loss_pips

    spread_pips = to_pips(entry_tick.spread, config.pip_size)
    return max(
        DEFAULT_MIN_SL_PIPS,
        max(config.distance_pips, spread_pips * DEFAULT_SPREAD_MULT),
    )


class TrailingStopSimulator:
    """Simulate a single trailing-stop managed trade.

    Stateless; one instance can be shared across decision points.
    """

    def __init__(
        self,
        pip_size: Decimal = PIP,
        max_time_limit_ticks: int = MAX_TIME_LIMIT_TICKS,
    ):
        self.pip_size = pip_size
        self.max_time_limit_ticks = max_time_limit_ticks

    def simulate(
        self,
        entry_tick: Tick,
        future_ticks: Sequence[Tick],
        trigger_pips: float,
        distance_pips: float,
        stop_loss_pips: float,
        direction: Direction,
    ) -> TrailingStopResult:
        """Run one directional trade over future_ticks.

        Args:
            entry_tick: Tick at the decision point
            future_ticks: Window of ticks after the entry (at least 10)
            trigger_pips: Favorable move that activates the trailing stop
            distance_pips: Trailing distance behind the best mark
            stop_loss_pips: Hard stop distance; <= 0 disables the hard stop
            direction: LONG or SHORT

        Returns:
            TrailingStopResult with pips measured from the entry price
        """
        if len(future_ticks) < MIN_FUTURE_TICKS:
            raise ValueError(
                f"simulate requires at least {MIN_FUTURE_TICKS} future ticks, "
                f"got {len(future_ticks)}"
            )

        is_long = direction.is_long
        sign = Decimal(direction.value)
        entry_price = entry_tick.entry_price(is_long)

        activation_distance = from_pips(trigger_pips, self.pip_size)
        trail_distance = from_pips(distance_pips, self.pip_size)
        stop_loss_distance = from_pips(max(0.0, stop_loss_pips), self.pip_size)
        take_profit_distance = activation_distance * TAKE_PROFIT_MULTIPLIER

        stop_loss_price: Decimal | None = None
        if stop_loss_distance > 0:
            stop_loss_price = entry_price - sign * stop_loss_distance

        state = TrailState.WAITING_FOR_ACTIVATION
        trailing_level = ZERO
        max_favorable = ZERO
        max_adverse = ZERO

        exit_price: Decimal | None = None
        exit_index = -1
        exit_reason = ExitReason.TIME_LIMIT

        for i, tick in enumerate(future_ticks):
            price = tick.mark_price(is_long)
            move = (price - entry_price) * sign

            if move >= 0:
                max_favorable = max(max_favorable, move)
            else:
                max_adverse = max(max_adverse, -move)

            # 1. Hard stop (a touch is a hit)
            if stop_loss_price is not None and (price - stop_loss_price) * sign <= 0:
                exit_price = stop_loss_price
                exit_index = i
                exit_reason = ExitReason.STOP_LOSS
                break

            # 2. Take profit
            if move >= take_profit_distance:
                exit_price = price
                exit_index = i
                exit_reason = ExitReason.TAKE_PROFIT
                break

            # 3. Trailing stop
            if state is TrailState.WAITING_FOR_ACTIVATION:
                if move >= activation_distance:
                    state = TrailState.TRAILING
                    trailing_level = price - sign * trail_distance
            else:
                candidate = price - sign * trail_distance
                if is_long:
                    trailing_level = max(trailing_level, candidate)
                else:
                    trailing_level = min(trailing_level, candidate)

                if (price - trailing_level) * sign <= 0:
                    exit_price = trailing_level
                    exit_index = i
                    exit_reason = ExitReason.TRAILING_STOP
                    break

            # 4. Time limit
            if i >= self.max_time_limit_ticks:
                exit_price = price
                exit_index = i
                exit_reason = ExitReason.TIME_LIMIT
                break

        if exit_price is None:
            exit_price = future_ticks[-1].mark_price(is_long)
            exit_index = len(future_ticks) - 1

        return TrailingStopResult(
            profit_pips=to_pips((exit_price - entry_price) * sign, self.pip_size),
            max_favorable_excursion_pips=to_pips(max_favorable, self.pip_size),
            max_adverse_excursion_pips=to_pips(max_adverse, self.pip_size),
            time_to_exit=exit_index,
            exit_reason=exit_reason,
            trailing_activated=state is TrailState.TRAILING,
        )
