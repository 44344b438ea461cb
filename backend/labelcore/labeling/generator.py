"""End-to-end label generation for a single decision point."""

from __future__ import annotations

from collections.abc import Sequence

from labelcore.labeling.decision import LabelDecisionMaker
from labelcore.labeling.simulator import TrailingStopSimulator, infer_stop_loss_pips
from labelcore.models.config import MIN_FUTURE_TICKS, LabelGenerationConfig
from labelcore.models.label import Direction, LabelResult
from labelcore.models.tick import Tick


class LabelGenerator:
    """Label decision points with a fixed LabelGenerationConfig.

    Usage:
        generator = LabelGenerator(LabelGenerationConfig())
        result = generator.generate(ticks[i], ticks[i + 1 : i + 601])

    Holds no per-call state; identical inputs always produce identical
    results.
    """

    def __init__(
        self,
        config: LabelGenerationConfig,
        simulator: TrailingStopSimulator | None = None,
        decision_maker: LabelDecisionMaker | None = None,
    ):
        self.config = config
        self.simulator = simulator or TrailingStopSimulator(pip_size=config.pip_size)
        self.decision_maker = decision_maker or LabelDecisionMaker()

    def generate(self, entry_tick: Tick, future_ticks: Sequence[Tick]) -> LabelResult:
        """Simulate both directions from entry_tick and pick the label.

        The window is truncated to max_future_ticks. Windows holding fewer
        than MIN_FUTURE_TICKS ticks yield the neutral result without
        running the simulator.
        """
        window = future_ticks[: self.config.max_future_ticks]
        if len(window) < MIN_FUTURE_TICKS:
            return LabelResult.neutral()

        stop_loss_pips = infer_stop_loss_pips(self.config, entry_tick)

        long_result = self.simulator.simulate(
            entry_tick,
            window,
            self.config.trigger_pips,
            self.config.distance_pips,
            stop_loss_pips,
            Direction.LONG,
        )
        short_result = self.simulator.simulate(
            entry_tick,
            window,
            self.config.trigger_pips,
            self.config.distance_pips,
            stop_loss_pips,
            Direction.SHORT,
        )

        return self.decision_maker.decide(long_result, short_result, self.config)


def generate_label(
    config: LabelGenerationConfig,
    entry_tick: Tick,
    future_ticks: Sequence[Tick],
) -> LabelResult:
    """Convenience wrapper around LabelGenerator.generate."""
    return LabelGenerator(config).generate(entry_tick, future_ticks)
