"""Candidate re-ranking: token coverage, weighted scoring and tiered results.

Score = match_score + signal + status + state + coverage + freshness bonuses,
rounded half-up to an integer. Weights come from RankingConfig.

Results are split into two tiers:
  - direct:   every query token found in the name or location
  - adjacent: some but not all tokens found
An empty tier is back-filled from the top of the sorted list so the caller
always has something to show.
"""

import logging
import math
import re
from dataclasses import dataclass

from src.core.config import RankingConfig
from src.core.schemas import (
    ALL_STATES,
    CandidateRecord,
    MatchCategory,
    RankedResult,
    SearchEngineResponse,
    SearchMeta,
)
from src.ranking.freshness import WHITESPACE_CLASS, relative_label_to_minutes

logger = logging.getLogger(__name__)

_TOKEN_SPLIT_RE = re.compile(f"{WHITESPACE_CLASS}+")


@dataclass(frozen=True)
class ScoredCandidate:
    """Per-candidate ranking signals before tier assignment."""

    record: CandidateRecord
    relevance_score: int
    coverage_ratio: float
    tokens_matched: int
    freshness_minutes: int
    insight_footprint: int
    state_aligned: bool
    all_tokens_matched: bool

    def to_result(self, category: MatchCategory, rank: int) -> RankedResult:
        return RankedResult(
            **self.record.model_dump(include=set(CandidateRecord.model_fields)),
            relevance_score=self.relevance_score,
            coverage_ratio=self.coverage_ratio,
            tokens_matched=self.tokens_matched,
            freshness_minutes=self.freshness_minutes,
            insight_footprint=self.insight_footprint,
            state_aligned=self.state_aligned,
            match_category=category,
            rank=rank,
        )


def tokenize_query(query: str) -> list[str]:
    """Lower-case the query and split it on whitespace runs."""
    return [t for t in _TOKEN_SPLIT_RE.split((query or "").lower()) if t]


def is_state_aligned(location: str, state_filter: str) -> bool:
    """True when no state constraint applies or the location contains it."""
    if state_filter == ALL_STATES:
        return True
    return state_filter.lower() in location.lower()


def score_candidate(
    record: CandidateRecord,
    query_tokens: list[str],
    state_filter: str,
    config: RankingConfig,
) -> ScoredCandidate:
    """Compute the ranking signals and relevance score for one record."""
    name = record.name.lower()
    location = record.location.lower()

    tokens_matched = sum(1 for t in query_tokens if t in name or t in location)
    if query_tokens:
        coverage_ratio = tokens_matched / len(query_tokens)
        all_tokens_matched = tokens_matched == len(query_tokens)
    else:
        coverage_ratio = 1.0
        all_tokens_matched = True

    state_aligned = is_state_aligned(record.location, state_filter)
    freshness_minutes = relative_label_to_minutes(
        record.updated, default=config.default_freshness_minutes,
    )
    insight_footprint = len(record.insights)

    signal_weight = insight_footprint * config.signal_weight
    status_weight = config.live_status_bonus if record.status == "Live" else 0.0
    state_weight = config.state_alignment_bonus if state_aligned else 0.0
    coverage_weight = coverage_ratio * config.coverage_weight
    freshness_weight = _freshness_bonus(freshness_minutes, config)

    raw_score = (
        record.match_score
        + signal_weight
        + status_weight
        + state_weight
        + coverage_weight
        + freshness_weight
    )

    return ScoredCandidate(
        record=record,
        relevance_score=_round_half_up(raw_score),
        coverage_ratio=coverage_ratio,
        tokens_matched=tokens_matched,
        freshness_minutes=freshness_minutes,
        insight_footprint=insight_footprint,
        state_aligned=state_aligned,
        all_tokens_matched=all_tokens_matched,
    )


def summarize_candidates(
    candidates: list[CandidateRecord],
    query_tokens: list[str],
    state_filter: str,
    config: RankingConfig,
) -> SearchMeta:
    """Aggregate status counts, freshest update and signal coverage.

    Covers the whole candidate set, not only what ends up in the result tiers.
    """
    live_count = sum(1 for c in candidates if c.status == "Live")

    freshness = [
        relative_label_to_minutes(c.updated, default=config.default_freshness_minutes)
        for c in candidates
    ]
    last_refresh = min(freshness) if freshness else config.default_freshness_minutes

    # A label repeated on one candidate still counts that candidate once.
    signal_coverage: dict[str, int] = {}
    for c in candidates:
        for label in dict.fromkeys(c.insights):
            signal_coverage[label] = signal_coverage.get(label, 0) + 1

    return SearchMeta(
        total_candidates=len(candidates),
        query_tokens=tuple(query_tokens),
        state_filter=state_filter,
        live_count=live_count,
        archived_count=len(candidates) - live_count,
        last_refresh_minutes=last_refresh,
        signal_coverage=signal_coverage,
    )


def rank_candidates(
    query: str,
    state_filter: str,
    candidates: list[CandidateRecord],
    config: RankingConfig | None = None,
) -> SearchEngineResponse:
    """Rank candidates against a free-text query and a state filter.

    Args:
        query: Free text; may be empty or whitespace only.
        state_filter: ``"All States"`` or a region token matched against location.
        candidates: The full universe to score. Not modified.
        config: Weights and fallback limits; defaults to RankingConfig().

    Returns:
        SearchEngineResponse with ``primary`` (direct) and ``related``
        (adjacent) tiers, each sorted by relevance and ranked from 1.
    """
    config = config or RankingConfig()
    query_tokens = tokenize_query(query)

    scored = [score_candidate(c, query_tokens, state_filter, config) for c in candidates]
    # sorted() is stable, ties keep candidate order
    ranked = sorted(scored, key=lambda s: s.relevance_score, reverse=True)

    direct = [s for s in ranked if s.all_tokens_matched]
    adjacent = [s for s in ranked if not s.all_tokens_matched and s.tokens_matched > 0]

    if not direct:
        direct = ranked[: config.primary_fallback_limit]
        logger.debug("No direct matches for %r, using top %d", query, len(direct))

    if not adjacent:
        direct_ids = {s.record.id for s in direct}
        adjacent = [s for s in ranked if s.record.id not in direct_ids]
        adjacent = adjacent[: config.related_fallback_limit]

    primary = tuple(s.to_result("direct", i) for i, s in enumerate(direct, start=1))
    related = tuple(s.to_result("adjacent", i) for i, s in enumerate(adjacent, start=1))

    logger.debug(
        "Ranked %d candidates for %r (%s): %d primary, %d related",
        len(candidates), query, state_filter, len(primary), len(related),
    )

    return SearchEngineResponse(
        primary=primary,
        related=related,
        meta=summarize_candidates(candidates, query_tokens, state_filter, config),
    )


def _freshness_bonus(freshness_minutes: int, config: RankingConfig) -> float:
    """Linear decay from freshness_max_bonus down to 0, never negative."""
    decayed = min(freshness_minutes / config.freshness_decay_minutes, config.freshness_max_bonus)
    return max(0.0, config.freshness_max_bonus - decayed)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
