"""Orchestrator: wires a candidate source, the ranking engine and the session.

Data flow:
  1. Session -> searching
  2. Source fetch -> candidate universe
  3. Ranking engine -> primary / related tiers + meta
  4. Session -> success (or error if the source failed)
"""

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from src.api.client import ApiClient
from src.api.exceptions import ApiError
from src.api.schemas import SearchParams, SearchType
from src.core.config import RankingConfig
from src.core.schemas import CandidateRecord, SearchEngineResponse
from src.pipeline.search_state import SearchQuery, SearchSession
from src.ranking.adapters import response_to_candidates
from src.ranking.engine import rank_candidates

logger = logging.getLogger(__name__)


class CandidateSource(ABC):
    """Base class for anything that can supply a candidate universe."""

    @property
    @abstractmethod
    def source_id(self) -> str:
        """Short identifier for logs and run summaries (e.g. 'fixture')."""

    @abstractmethod
    def fetch(self, query: str) -> list[CandidateRecord]:
        """Return the candidates to rank for ``query``."""


class FixtureSource(CandidateSource):
    """Serves an injected, fixed candidate list regardless of the query."""

    def __init__(self, candidates: list[CandidateRecord]) -> None:
        self._candidates = list(candidates)

    @property
    def source_id(self) -> str:
        return "fixture"

    def fetch(self, query: str) -> list[CandidateRecord]:
        return list(self._candidates)


class RemoteSource(CandidateSource):
    """Fetches organizations/affiliates from the search API for local re-ranking."""

    def __init__(
        self,
        client: ApiClient,
        search_type: SearchType = "both",
        limit: int = 100,
        related_limit: int = 20,
    ) -> None:
        self._client = client
        self._search_type = search_type
        self._limit = limit
        self._related_limit = related_limit

    @property
    def source_id(self) -> str:
        return "remote"

    def fetch(self, query: str) -> list[CandidateRecord]:
        if not query.strip():
            logger.info("Empty query, skipping remote search")
            return []
        params = SearchParams(
            q=query,
            search_type=self._search_type,
            limit=self._limit,
            related_limit=self._related_limit,
        )
        response = self._client.search(params)
        logger.info(
            "Remote search '%s' took %.1fms: %d organizations, %d affiliates",
            params.q,
            response.query_time_ms,
            len(response.organizations) + len(response.related_organizations),
            len(response.affiliates) + len(response.related_affiliates),
        )
        return response_to_candidates(response)


@dataclass(frozen=True)
class SearchRun:
    """Summary of a single search execution."""

    query: str
    state_filter: str
    source_id: str
    candidate_count: int
    started_at: datetime
    finished_at: datetime
    response: SearchEngineResponse


def run_search(
    query: str,
    state_filter: str,
    source: CandidateSource,
    config: RankingConfig | None = None,
    session: SearchSession | None = None,
) -> SearchRun | None:
    """Fetch candidates from ``source`` and rank them.

    Returns SearchRun on success, None if the source raised an ApiError (the
    session, when given, is left in the error state).
    """
    session = session or SearchSession()
    search_query = SearchQuery(query=query, state_filter=state_filter)
    session.set_status("searching")
    started_at = datetime.now()

    logger.info("Searching '%s' (%s) on %s", query, state_filter, source.source_id)
    try:
        candidates = source.fetch(query)
    except ApiError as e:
        logger.error("Search '%s' failed: %s", query, e)
        session.set_error(str(e))
        return None

    response = rank_candidates(query, state_filter, candidates, config)
    session.set_results(response, search_query)

    finished_at = datetime.now()
    logger.info(
        "Search '%s': %d candidates, %d primary, %d related",
        query, len(candidates), len(response.primary), len(response.related),
    )

    return SearchRun(
        query=query,
        state_filter=state_filter,
        source_id=source.source_id,
        candidate_count=len(candidates),
        started_at=started_at,
        finished_at=finished_at,
        response=response,
    )


def export_response_json(response: SearchEngineResponse) -> str:
    """Export a ranked response as camelCase JSON."""
    return json.dumps(response.model_dump(mode="json", by_alias=True), indent=2)
