"""Label generation configuration.

Two layers:
- LabelGenSettings: run-level settings from LABELGEN_* environment
  variables or a .env file (tick file, timeframe, workers)
- load_label_config: engine parameters from labels.yaml

Backward compatible: no YAML file = production defaults.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

from labelcore.models.config import LabelGenerationConfig

logger = logging.getLogger(__name__)


class LabelGenSettings(BaseSettings):
    """Batch label generation settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="LABELGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    tick_file: str = "data/ticks_data.csv"
    config_file: str = "labels.yaml"

    # Bar period that defines decision points
    timeframe: str = "1m"

    # Decision points skipped at the start (feature warmup upstream)
    warmup_bars: int = 0

    # Worker processes for labeling; 1 = run in-process
    workers: int = 1


@lru_cache
def get_settings() -> LabelGenSettings:
    """Get cached settings instance."""
    return LabelGenSettings()


_DEFAULT_PATH = Path("labels.yaml")


def load_label_config(path: Path | None = None) -> LabelGenerationConfig:
    """Load label generation parameters from a YAML file.

    Falls back to defaults if the file doesn't exist. A .env next to the
    YAML file is loaded first so LABELGEN_* settings can live beside it.
    """
    config_path = path or _DEFAULT_PATH

    env_path = config_path.parent / ".env"
    load_dotenv(env_path, override=False)

    if not config_path.exists():
        logger.info("No label config found at %s, using defaults", config_path)
        return LabelGenerationConfig()

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(
            f"Label config {config_path} must be a mapping, got {type(raw).__name__}"
        )

    config = LabelGenerationConfig(**raw)
    logger.info(
        "Loaded label config: trigger=%.2f distance=%.2f stop_loss=%s "
        "max_future_ticks=%d min_confidence=%.2f min_score=%.2f pip=%s",
        config.trigger_pips,
        config.distance_pips,
        "infer" if config.infers_stop_loss else f"{config.stop_loss_pips:.2f}",
        config.max_future_ticks,
        config.min_confidence_threshold,
        config.min_score_threshold,
        config.pip_size,
    )
    return config
