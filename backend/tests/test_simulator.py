"""Tests for TrailingStopSimulator and stop-loss inference."""

import pytest
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from labelcore.labeling.simulator import TrailingStopSimulator, infer_stop_loss_pips
from labelcore.models.config import PIP, LabelGenerationConfig
from labelcore.models.label import Direction, ExitReason
from labelcore.models.tick import Tick


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

BASE_PRICE = Decimal("1.10000")
BASE_TIME = datetime(2025, 6, 2, 9, 0, tzinfo=timezone.utc)


def make_tick(bid_pips: float = 0, spread_pips: float = 0, offset: int = 0) -> Tick:
    """Build a tick whose bid sits bid_pips away from BASE_PRICE."""
    bid = BASE_PRICE + Decimal(str(bid_pips)) * PIP
    ask = bid + Decimal(str(spread_pips)) * PIP
    return Tick(timestamp=BASE_TIME + timedelta(seconds=offset), bid=bid, ask=ask)


def make_path(bid_pips: list[float], spread_pips: float = 0) -> list[Tick]:
    """Build future ticks from a list of bid offsets (in pips)."""
    return [make_tick(p, spread_pips, offset=i + 1) for i, p in enumerate(bid_pips)]


def run(
    path: list[Tick],
    direction: Direction = Direction.LONG,
    entry: Tick | None = None,
    trigger: float = 3.5,
    distance: float = 2.5,
    stop_loss: float = 0.0,
):
    simulator = TrailingStopSimulator()
    return simulator.simulate(
        entry or make_tick(0),
        path,
        trigger,
        distance,
        stop_loss,
        direction,
    )


# ---------------------------------------------------------------------------
# Preconditions
# ---------------------------------------------------------------------------

class TestPreconditions:
    def test_fewer_than_ten_ticks_raises(self):
        with pytest.raises(ValueError, match="at least 10"):
            run(make_path([0] * 9))

    def test_exactly_ten_ticks_accepted(self):
        result = run(make_path([0] * 10))
        assert result.time_to_exit == 9


# ---------------------------------------------------------------------------
# Exit rules
# ---------------------------------------------------------------------------

class TestTakeProfit:
    """Take profit sits at 3x the activation distance."""

    def test_long_take_profit(self):
        """trigger 3.5 → TP at 10.5 pips; first mark at or above is 11."""
        path = make_path([1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15])
        result = run(path)

        assert result.exit_reason == ExitReason.TAKE_PROFIT
        assert result.time_to_exit == 10
        assert result.profit_pips == pytest.approx(11.0)
        assert result.max_favorable_excursion_pips == pytest.approx(11.0)
        assert result.max_adverse_excursion_pips == 0.0
        assert result.trailing_activated is True

    def test_take_profit_exact_touch(self):
        path = make_path([2, 4, 6, 8, 10.5] + [0] * 10)
        result = run(path)

        assert result.exit_reason == ExitReason.TAKE_PROFIT
        assert result.time_to_exit == 4
        assert result.profit_pips == pytest.approx(10.5)

    def test_short_take_profit(self):
        path = make_path([-2, -4, -6, -8, -11] + [0] * 10)
        result = run(path, direction=Direction.SHORT)

        assert result.exit_reason == ExitReason.TAKE_PROFIT
        assert result.time_to_exit == 4
        assert result.profit_pips == pytest.approx(11.0)


class TestTrailingStop:
    def test_long_trailing_exit_on_exact_touch(self):
        """Activates at 4 pips, ratchets to 3.5, exits when bid touches 3.5."""
        path = make_path([1, 2, 3, 4, 5, 6, 5, 4, 3.5, 3, 2, 1])
        result = run(path)

        assert result.exit_reason == ExitReason.TRAILING_STOP
        assert result.time_to_exit == 8
        assert result.profit_pips == pytest.approx(3.5)
        assert result.max_favorable_excursion_pips == pytest.approx(6.0)
        assert result.trailing_activated is True

    def test_trailing_level_never_loosens(self):
        """A pullback after the peak must not lower the long trailing level."""
        path = make_path([4, 8, 6, 5.6, 5.5, 5.4, 0, 0, 0, 0, 0])
        result = run(path)

        # Peak mark 8 → level 5.5, exit on the touch at index 4
        assert result.exit_reason == ExitReason.TRAILING_STOP
        assert result.time_to_exit == 4
        assert result.profit_pips == pytest.approx(5.5)

    def test_short_trailing_exit(self):
        path = make_path([-1, -2, -3, -4, -5, -6, -5, -4, -3.5, -3, -2, -1])
        result = run(path, direction=Direction.SHORT)

        assert result.exit_reason == ExitReason.TRAILING_STOP
        assert result.time_to_exit == 8
        assert result.profit_pips == pytest.approx(3.5)
        assert result.trailing_activated is True

    def test_no_activation_below_trigger(self):
        path = make_path([1, 2, 3, 3.4, 3, 2, 1, 0, -1, -2])
        result = run(path)

        assert result.trailing_activated is False
        assert result.exit_reason == ExitReason.TIME_LIMIT
        assert result.time_to_exit == 9
        assert result.profit_pips == pytest.approx(-2.0)


class TestStopLoss:
    def test_long_stop_loss_exact_touch(self):
        path = make_path([-1, -2, -3, -4, -5, -6, -7, -8, -9, -10])
        result = run(path, stop_loss=5.0)

        assert result.exit_reason == ExitReason.STOP_LOSS
        assert result.time_to_exit == 4
        assert result.profit_pips == pytest.approx(-5.0)
        assert result.max_adverse_excursion_pips == pytest.approx(5.0)

    def test_stop_loss_fills_at_stop_price_on_gap(self):
        """A gap through the stop still fills at the stop."""
        path = make_path([-1, -20] + [0] * 10)
        result = run(path, stop_loss=5.0)

        assert result.exit_reason == ExitReason.STOP_LOSS
        assert result.time_to_exit == 1
        assert result.profit_pips == pytest.approx(-5.0)
        assert result.max_adverse_excursion_pips == pytest.approx(20.0)

    def test_short_stop_loss(self):
        path = make_path([1, 2, 3, 4, 5, 6, 7, 8, 9, 10])
        result = run(path, direction=Direction.SHORT, stop_loss=5.0)

        assert result.exit_reason == ExitReason.STOP_LOSS
        assert result.time_to_exit == 4
        assert result.profit_pips == pytest.approx(-5.0)

    @pytest.mark.parametrize("stop_loss", [0.0, -3.0])
    def test_non_positive_stop_loss_disables_hard_stop(self, stop_loss):
        path = make_path([-10, -20, -30, -40, -50, -50, -50, -50, -50, -50])
        result = run(path, stop_loss=stop_loss)

        assert result.exit_reason == ExitReason.TIME_LIMIT
        assert result.time_to_exit == 9
        assert result.profit_pips == pytest.approx(-50.0)


class TestTimeLimit:
    def test_window_exhausted_closes_at_last_mark(self):
        path = make_path([0, 1, 0, -1, 0, 1, 0, -1, 0, 1, 2])
        result = run(path)

        assert result.exit_reason == ExitReason.TIME_LIMIT
        assert result.time_to_exit == len(path) - 1
        assert result.profit_pips == pytest.approx(2.0)

    def test_hard_cap_at_600_ticks(self):
        path = make_path([0] * 800)
        result = run(path)

        assert result.exit_reason == ExitReason.TIME_LIMIT
        assert result.time_to_exit == 600

    def test_custom_time_cap(self):
        simulator = TrailingStopSimulator(max_time_limit_ticks=20)
        result = simulator.simulate(
            make_tick(0), make_path([0] * 50), 3.5, 2.5, 0.0, Direction.LONG
        )

        assert result.exit_reason == ExitReason.TIME_LIMIT
        assert result.time_to_exit == 20


# ---------------------------------------------------------------------------
# Exit priority
# ---------------------------------------------------------------------------

class TestExitPriority:
    def test_stop_loss_beats_trailing_stop_on_same_tick(self):
        """A gap through both the trailing level and the hard stop → StopLoss."""
        path = make_path([4, 5, 6, -10] + [0] * 10)
        result = run(path, stop_loss=5.0)

        assert result.trailing_activated is True
        assert result.exit_reason == ExitReason.STOP_LOSS
        assert result.time_to_exit == 3
        assert result.profit_pips == pytest.approx(-5.0)

    def test_take_profit_beats_time_limit_on_same_tick(self):
        path = make_path([0] * 600 + [12] + [0] * 20)
        result = run(path)

        assert result.exit_reason == ExitReason.TAKE_PROFIT
        assert result.time_to_exit == 600

    def test_stop_loss_beats_time_limit_on_same_tick(self):
        path = make_path([0] * 600 + [-6] + [0] * 20)
        result = run(path, stop_loss=5.0)

        assert result.exit_reason == ExitReason.STOP_LOSS
        assert result.time_to_exit == 600


# ---------------------------------------------------------------------------
# Pricing and excursions
# ---------------------------------------------------------------------------

class TestPricing:
    def test_long_pays_spread(self):
        """Long enters at ask and marks at bid: a flat market costs the spread."""
        entry = make_tick(0, spread_pips=1)
        path = make_path([0] * 12, spread_pips=1)
        result = run(path, entry=entry)

        assert result.profit_pips == pytest.approx(-1.0)
        assert result.max_adverse_excursion_pips == pytest.approx(1.0)
        assert result.max_favorable_excursion_pips == 0.0

    def test_short_pays_spread(self):
        entry = make_tick(0, spread_pips=1)
        path = make_path([0] * 12, spread_pips=1)
        result = run(path, direction=Direction.SHORT, entry=entry)

        assert result.profit_pips == pytest.approx(-1.0)
        assert result.max_adverse_excursion_pips == pytest.approx(1.0)

    def test_excursions_are_running_maxima(self):
        path = make_path([2, -3, 1, -1, 0, 0.5, -0.5, 0, 0, 0])
        result = run(path)

        assert result.max_favorable_excursion_pips == pytest.approx(2.0)
        assert result.max_adverse_excursion_pips == pytest.approx(3.0)

    def test_jpy_pip_size(self):
        simulator = TrailingStopSimulator(pip_size=Decimal("0.01"))
        entry = Tick(timestamp=BASE_TIME, bid=Decimal("150.000"), ask=Decimal("150.000"))
        path = [
            Tick(
                timestamp=BASE_TIME + timedelta(seconds=i + 1),
                bid=Decimal("150.000") + Decimal("0.01") * (i + 1),
                ask=Decimal("150.000") + Decimal("0.01") * (i + 1),
            )
            for i in range(15)
        ]
        result = simulator.simulate(entry, path, 3.5, 2.5, 0.0, Direction.LONG)

        assert result.exit_reason == ExitReason.TAKE_PROFIT
        assert result.profit_pips == pytest.approx(11.0)

    def test_repeated_runs_are_identical(self):
        path = make_path([1, 2, 3, 4, 5, 6, 5, 4, 3.5, 3, 2, 1])
        assert run(path) == run(path)


# ---------------------------------------------------------------------------
# Worked example: 1-pip spread, rise 0.5 pip/tick then fall 1 pip/tick
# ---------------------------------------------------------------------------

class TestRiseThenFallExample:
    ENTRY = make_tick(0, spread_pips=1)  # bid 1.10000, ask 1.10010
    PATH = make_path(
        [0.5 * (k + 1) for k in range(10)] + [5.0 - (k + 1) for k in range(10)],
        spread_pips=1,
    )

    def test_long_trails_then_exits_on_retrace(self):
        result = run(self.PATH, entry=self.ENTRY, stop_loss=5.0)

        # Activation at k=8 (bid 4.5 → move 3.5), peak bid 5.0 → level 2.5
        assert result.trailing_activated is True
        assert result.exit_reason == ExitReason.TRAILING_STOP
        assert result.time_to_exit == 12
        assert result.profit_pips == pytest.approx(1.5)
        assert result.max_favorable_excursion_pips == pytest.approx(4.0)
        assert result.max_adverse_excursion_pips == pytest.approx(0.5)

    def test_short_hits_stop(self):
        result = run(self.PATH, direction=Direction.SHORT, entry=self.ENTRY, stop_loss=5.0)

        assert result.trailing_activated is False
        assert result.exit_reason == ExitReason.STOP_LOSS
        assert result.time_to_exit == 7
        assert result.profit_pips == pytest.approx(-5.0)
        assert result.max_adverse_excursion_pips == pytest.approx(5.0)


# ---------------------------------------------------------------------------
# Stop-loss inference
# ---------------------------------------------------------------------------

class TestInferStopLoss:
    def test_configured_value_used_directly(self):
        config = LabelGenerationConfig(stop_loss_pips=12.0)
        assert infer_stop_loss_pips(config, make_tick(0, spread_pips=10)) == 12.0

    def test_one_pip_spread_uses_floor(self):
        """max(5, max(2.5, 1 * 3)) = 5."""
        config = LabelGenerationConfig(trigger_pips=3.5, distance_pips=2.5)
        assert infer_stop_loss_pips(config, make_tick(0, spread_pips=1)) == pytest.approx(5.0)

    def test_wide_spread_dominates(self):
        """max(5, max(2.5, 10 * 3)) = 30."""
        config = LabelGenerationConfig()
        assert infer_stop_loss_pips(config, make_tick(0, spread_pips=10)) == pytest.approx(30.0)

    def test_distance_dominates(self):
        config = LabelGenerationConfig(distance_pips=8.0)
        assert infer_stop_loss_pips(config, make_tick(0, spread_pips=1)) == pytest.approx(8.0)

    def test_negative_config_infers(self):
        config = LabelGenerationConfig(stop_loss_pips=-1.0)
        assert infer_stop_loss_pips(config, make_tick(0, spread_pips=0)) == pytest.approx(5.0)
