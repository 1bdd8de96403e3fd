"""Pydantic configuration models for mood-diary."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from shared_types import ExtractionMode, MatchPolicyName

VALID_WINDOWS = (14, 30, 90)


class PathsConfig(BaseModel):
    """File paths configuration."""

    data_dir: Path = Path("~/mood-diary")
    dictionary: Optional[Path] = None  # None = bundled dictionary
    log_file: Optional[Path] = None

    @model_validator(mode="after")
    def expand_paths(self):
        """Expand ~ in all paths."""
        self.data_dir = self.data_dir.expanduser()
        if self.dictionary is not None:
            self.dictionary = self.dictionary.expanduser()
        if self.log_file is not None:
            self.log_file = self.log_file.expanduser()
        return self


class AnalysisConfig(BaseModel):
    """Keyword matching configuration."""

    policy: MatchPolicyName = MatchPolicyName.AFFIX
    max_edit_distance: int = 1
    case_sensitive: bool = False
    min_token_length: int = 1
    mode: ExtractionMode = ExtractionMode.DIRECT

    @field_validator("min_token_length")
    @classmethod
    def validate_min_token_length(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"min_token_length must be >= 1, got {v}")
        return v

    @field_validator("max_edit_distance")
    @classmethod
    def validate_distance(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"max_edit_distance must be >= 0, got {v}")
        return v


class SentimentConfig(BaseModel):
    """Label thresholds for sentiment scores."""

    positive_threshold: float = 0.3
    negative_threshold: float = -0.3
    very_positive_threshold: float = 0.6
    very_negative_threshold: float = -0.6
    normalize: bool = True

    @model_validator(mode="after")
    def validate_order(self):
        """Thresholds must be ordered around zero."""
        ordered = [
            self.very_negative_threshold,
            self.negative_threshold,
            0.0,
            self.positive_threshold,
            self.very_positive_threshold,
        ]
        if ordered != sorted(ordered):
            raise ValueError(
                "Sentiment thresholds must satisfy "
                "very_negative <= negative <= 0 <= positive <= very_positive"
            )
        return self


class StatsConfig(BaseModel):
    """Statistics defaults."""

    default_days: int = 14

    @field_validator("default_days")
    @classmethod
    def validate_window(cls, v: int) -> int:
        if v not in VALID_WINDOWS:
            raise ValueError(f"default_days must be one of {VALID_WINDOWS}, got {v}")
        return v


VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    json_mode: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class DiaryConfig(BaseModel):
    """Main configuration model."""

    paths: PathsConfig = Field(default_factory=PathsConfig)
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    sentiment: SentimentConfig = Field(default_factory=SentimentConfig)
    stats: StatsConfig = Field(default_factory=StatsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict) -> "DiaryConfig":
        """Create config from a raw dict (e.g. parsed YAML)."""
        return cls.model_validate(data or {})

    def to_dict(self) -> dict:
        return self.model_dump(mode="python")
