"""Core data models for the people search engine.

Attributes are snake_case; every model also accepts and emits the camelCase
names used by the search UI (``matchScore``, ``relevanceScore``, ...).
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

ALL_STATES = "All States"

RecordStatus = Literal["Live", "Archived"]
MatchCategory = Literal["direct", "adjacent"]

_MODEL_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class CandidateRecord(BaseModel):
    """A person or organization eligible for matching against a query.

    Frozen — ranking derives RankedResult copies, it never mutates records.
    """

    model_config = _MODEL_CONFIG

    id: str
    name: str
    location: str = ""
    match_score: float = Field(default=0.0, allow_inf_nan=False)
    insights: tuple[str, ...] = ()
    status: RecordStatus = "Live"
    updated: str = ""


class RankedResult(CandidateRecord):
    """A CandidateRecord annotated with its ranking signals."""

    relevance_score: int
    coverage_ratio: float = Field(ge=0.0, le=1.0)
    tokens_matched: int = Field(ge=0)
    freshness_minutes: int = Field(ge=0)
    insight_footprint: int = Field(ge=0)
    state_aligned: bool
    match_category: MatchCategory
    rank: int = Field(ge=1)


class SearchMeta(BaseModel):
    """Aggregate metadata over the full candidate set of one search."""

    model_config = _MODEL_CONFIG

    total_candidates: int = 0
    query_tokens: tuple[str, ...] = ()
    state_filter: str = ALL_STATES
    live_count: int = 0
    archived_count: int = 0
    last_refresh_minutes: int = 60
    signal_coverage: dict[str, int] = Field(default_factory=dict)


class SearchEngineResponse(BaseModel):
    """Two-tier ranked result set: direct matches first, adjacent ones second."""

    model_config = _MODEL_CONFIG

    primary: tuple[RankedResult, ...] = ()
    related: tuple[RankedResult, ...] = ()
    meta: SearchMeta = Field(default_factory=SearchMeta)
