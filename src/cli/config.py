"""Configuration loading and management."""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from diary.keywords import ExtractOptions
from diary.sentiment import SentimentThresholds

from .config_models import DiaryConfig


def find_config() -> Optional[Path]:
    """Find config file in standard locations."""
    locations = [
        Path.cwd() / "config.yaml",
        Path.home() / ".mood-diary" / "config.yaml",
    ]
    for loc in locations:
        if loc.exists():
            return loc
    return None


def load_config_model(config_path: Optional[Path] = None) -> DiaryConfig:
    """Load configuration as Pydantic model with validation."""
    base_config = {}

    path = config_path or find_config()
    if path and path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                base_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")

    try:
        return DiaryConfig.from_dict(base_config)
    except ValidationError as e:
        raise ValueError(f"Config validation failed: {e}")


def extract_options(config: DiaryConfig) -> ExtractOptions:
    analysis = config.analysis
    return ExtractOptions(
        case_sensitive=analysis.case_sensitive,
        min_token_length=analysis.min_token_length,
        policy=analysis.policy,
        max_edit_distance=analysis.max_edit_distance,
        mode=analysis.mode,
    )


def sentiment_thresholds(config: DiaryConfig) -> SentimentThresholds:
    s = config.sentiment
    return SentimentThresholds(
        positive=s.positive_threshold,
        negative=s.negative_threshold,
        very_positive=s.very_positive_threshold,
        very_negative=s.very_negative_threshold,
        normalize=s.normalize,
    )
