"""Integration test: full search pipeline with fixture and mocked remote sources."""

import json
from pathlib import Path
from unittest.mock import MagicMock

from src.api.client import ApiClient
from src.api.exceptions import ApiHTTPError, ApiTimeoutError
from src.api.schemas import AffiliateResult, OrganizationResult, SearchResponse
from src.core.config import RankingConfig
from src.core.fixtures import load_candidates
from src.core.schemas import CandidateRecord
from src.pipeline.orchestrator import (
    FixtureSource,
    RemoteSource,
    SearchRun,
    export_response_json,
    run_search,
)
from src.pipeline.search_state import SearchQuery, SearchSession

CANDIDATES_PATH = Path(__file__).parent.parent.parent / "config" / "candidates.yaml"


def _fixture_source() -> FixtureSource:
    return FixtureSource(load_candidates(CANDIDATES_PATH))


def _remote_client(response: SearchResponse | None = None) -> MagicMock:
    client = MagicMock(spec=ApiClient)
    client.search.return_value = response or SearchResponse(query="")
    return client


# ---------------------------------------------------------------------------
# Fixture source
# ---------------------------------------------------------------------------


class TestFixturePipeline:
    def test_direct_and_adjacent(self) -> None:
        run = run_search("John Smith", "All States", _fixture_source())

        assert isinstance(run, SearchRun)
        assert run.source_id == "fixture"
        assert run.candidate_count == 6
        assert run.finished_at >= run.started_at
        assert [r.name for r in run.response.primary] == ["John Smith", "Johnathan Smith"]
        assert len(run.response.related) > 0
        assert all(r.coverage_ratio < 1 for r in run.response.related)

    def test_no_match_fallback(self) -> None:
        run = run_search("nonexistent person", "All States", _fixture_source())
        assert run is not None
        assert len(run.response.primary) == 6
        assert run.response.related == ()
        scores = [r.relevance_score for r in run.response.primary]
        assert scores == sorted(scores, reverse=True)

    def test_state_filter_and_meta(self) -> None:
        run = run_search("", "TX", _fixture_source())
        assert run is not None
        aligned = [r for r in run.response.primary if r.state_aligned]
        assert len(aligned) == 3
        meta = run.response.meta
        assert meta.live_count == 4
        assert meta.archived_count == 2
        assert meta.last_refresh_minutes == 5
        assert meta.signal_coverage["Court docket"] == 2

    def test_session_updated(self) -> None:
        session = SearchSession()
        run = run_search("smith", "TX", _fixture_source(), session=session)
        assert run is not None
        assert session.status == "success"
        assert session.results is run.response
        assert session.last_query == SearchQuery(query="smith", state_filter="TX")

    def test_custom_config(self) -> None:
        config = RankingConfig(primary_fallback_limit=2, related_fallback_limit=1)
        run = run_search("zzz", "All States", _fixture_source(), config)
        assert run is not None
        assert len(run.response.primary) == 2
        assert len(run.response.related) == 1

    def test_source_returns_copies(self) -> None:
        records = [CandidateRecord(id="1", name="A")]
        source = FixtureSource(records)
        fetched = source.fetch("anything")
        fetched.clear()
        assert len(source.fetch("anything")) == 1


# ---------------------------------------------------------------------------
# Remote source
# ---------------------------------------------------------------------------


class TestRemotePipeline:
    def test_reranks_remote_records(self) -> None:
        response = SearchResponse(
            query="john smith",
            query_time_ms=8.0,
            organizations=[OrganizationResult(organization_id=1, approvedName="John Smith Ventures",
                                              city="Lagos", state="Lagos", status="ACTIVE")],
            affiliates=[AffiliateResult(affiliate_id="a1", firstname="John", surname="Smith",
                                        city="Abuja", state="FCT")],
            related_affiliates=[AffiliateResult(affiliate_id="a2", firstname="Jane", surname="Smith",
                                                match_score=2)],
        )
        client = _remote_client(response)
        run = run_search("John Smith", "All States", RemoteSource(client))

        assert run is not None
        assert run.source_id == "remote"
        assert run.candidate_count == 3
        assert {r.id for r in run.response.primary} == {"org-1", "aff-a1"}
        assert [r.id for r in run.response.related] == ["aff-a2"]

        params = client.search.call_args.args[0]
        assert params.q == "John Smith"
        assert params.search_type == "both"
        assert params.limit == 100
        assert params.related_limit == 20

    def test_search_type_forwarded(self) -> None:
        client = _remote_client()
        run_search("acme", "All States", RemoteSource(client, search_type="organizations", limit=10))
        params = client.search.call_args.args[0]
        assert params.search_type == "organizations"
        assert params.limit == 10

    def test_empty_query_skips_api(self) -> None:
        client = _remote_client()
        run = run_search("  ", "All States", RemoteSource(client))
        client.search.assert_not_called()
        assert run is not None
        assert run.candidate_count == 0
        assert run.response.primary == ()
        assert run.response.meta.last_refresh_minutes == 60

    def test_api_error_sets_session_error(self) -> None:
        client = _remote_client()
        client.search.side_effect = ApiHTTPError("HTTP 500: Server Error", status_code=500,
                                                 url="http://api.test/search")
        session = SearchSession()
        run = run_search("john", "All States", RemoteSource(client), session=session)

        assert run is None
        assert session.status == "error"
        assert session.error_message == "HTTP 500: Server Error"
        assert session.results is None

    def test_timeout_sets_session_error(self) -> None:
        client = _remote_client()
        client.search.side_effect = ApiTimeoutError("timed out", url="http://api.test/search")
        session = SearchSession()
        assert run_search("john", "All States", RemoteSource(client), session=session) is None
        assert session.status == "error"


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------


class TestExportJson:
    def test_camel_case_contract(self) -> None:
        run = run_search("John Smith", "All States", _fixture_source())
        assert run is not None
        data = json.loads(export_response_json(run.response))

        assert set(data) == {"primary", "related", "meta"}
        top = data["primary"][0]
        assert top["name"] == "John Smith"
        assert top["relevanceScore"] == 128
        assert top["matchCategory"] == "direct"
        assert top["rank"] == 1
        assert top["matchScore"] == 88.0
        assert top["insights"] == ["Court docket", "Property filings"]
        assert data["meta"]["queryTokens"] == ["john", "smith"]
        assert data["meta"]["totalCandidates"] == 6
        assert data["meta"]["stateFilter"] == "All States"

    def test_empty_response(self) -> None:
        run = run_search("x", "All States", FixtureSource([]))
        assert run is not None
        data = json.loads(export_response_json(run.response))
        assert data["primary"] == []
        assert data["related"] == []
        assert data["meta"]["signalCoverage"] == {}
