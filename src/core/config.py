"""Configuration models and YAML loader for the people search engine."""

import os
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

_DEFAULT_API_BASE_URL = "http://localhost:8000"


class RankingConfig(BaseModel):
    """Weights and limits for candidate re-ranking.

    The defaults are hand-tuned and must stay as they are for results to
    match what the search UI shows.
    """

    model_config = ConfigDict(allow_inf_nan=False)

    signal_weight: float = Field(default=2.5, ge=0.0)
    live_status_bonus: float = Field(default=4.0, ge=0.0)
    state_alignment_bonus: float = Field(default=5.0, ge=0.0)
    coverage_weight: float = Field(default=14.0, ge=0.0)
    freshness_max_bonus: float = Field(default=12.0, ge=0.0)
    freshness_decay_minutes: float = Field(default=30.0, gt=0.0)
    default_freshness_minutes: int = Field(default=60, ge=0)
    primary_fallback_limit: int = Field(default=30, ge=0)
    related_fallback_limit: int = Field(default=25, ge=0)


class ApiConfig(BaseModel):
    """Remote search API connection settings."""

    base_url: str = Field(
        default_factory=lambda: os.environ.get("SEARCH_API_BASE_URL", _DEFAULT_API_BASE_URL),
        validate_default=True,
    )
    timeout_seconds: float = Field(default=10.0, ge=1.0, le=300.0)

    @field_validator("base_url")
    @classmethod
    def base_url_not_empty(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v:
            msg = "base_url must not be empty"
            raise ValueError(msg)
        return v


class DataConfig(BaseModel):
    """Local candidate fixture location."""

    candidates_path: str = "config/candidates.yaml"


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    source: Literal["fixture", "remote"] = "fixture"
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)
    data: DataConfig = Field(default_factory=DataConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
