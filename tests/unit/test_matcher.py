"""Tests for the legacy name/state filter chain: each filter in isolation + full chain."""

from src.core.schemas import CandidateRecord
from src.pipeline.matcher import (
    NameTermFilter,
    StateFilter,
    filter_candidate_records,
    run_filter_chain,
)


def _candidate(
    *,
    id: str = "1",
    name: str = "John Smith",
    location: str = "Austin, TX USA",
) -> CandidateRecord:
    return CandidateRecord(id=id, name=name, location=location)


def _records() -> list[CandidateRecord]:
    return [
        _candidate(id="1", name="John Smith", location="Austin, TX USA"),
        _candidate(id="2", name="Johnathan Smith", location="Dallas, TX USA"),
        _candidate(id="3", name="Joanna Smith", location="Nairobi, Kenya"),
        _candidate(id="4", name="Michael Johnson", location="Houston, TX USA"),
        _candidate(id="5", name="Emily Davis", location="Chicago, IL USA"),
    ]


# ---------------------------------------------------------------------------
# NameTermFilter
# ---------------------------------------------------------------------------


class TestNameTermFilter:
    def test_keeps_matching_names(self) -> None:
        f = NameTermFilter("john")
        result = f(_records())
        assert [c.id for c in result] == ["1", "2", "4"]

    def test_case_insensitive(self) -> None:
        f = NameTermFilter("SMITH")
        assert len(f(_records())) == 3

    def test_empty_term_passes_all(self) -> None:
        f = NameTermFilter("")
        assert len(f(_records())) == 5

    def test_ignores_location(self) -> None:
        f = NameTermFilter("austin")
        assert f(_records()) == []


# ---------------------------------------------------------------------------
# StateFilter
# ---------------------------------------------------------------------------


class TestStateFilter:
    def test_all_states_passes_all(self) -> None:
        f = StateFilter("All States")
        assert len(f(_records())) == 5

    def test_keeps_matching_location(self) -> None:
        f = StateFilter("TX")
        assert [c.id for c in f(_records())] == ["1", "2", "4"]

    def test_case_sensitive(self) -> None:
        f = StateFilter("tx")
        assert f(_records()) == []


# ---------------------------------------------------------------------------
# Full chain
# ---------------------------------------------------------------------------


class TestRunFilterChain:
    def test_no_filters(self) -> None:
        records = _records()
        assert run_filter_chain(records, []) == records

    def test_filters_applied_in_order(self) -> None:
        result = run_filter_chain(_records(), [NameTermFilter("smith"), StateFilter("TX")])
        assert [c.id for c in result] == ["1", "2"]


class TestFilterCandidateRecords:
    def test_first_last_and_state(self) -> None:
        result = filter_candidate_records("john", "smith", "TX", _records())
        assert [c.name for c in result] == ["John Smith", "Johnathan Smith"]

    def test_all_states(self) -> None:
        result = filter_candidate_records("jo", "smith", "All States", _records())
        assert [c.id for c in result] == ["1", "2", "3"]

    def test_no_match_returns_everything(self) -> None:
        records = _records()
        result = filter_candidate_records("nobody", "here", "All States", records)
        assert result == records

    def test_state_mismatch_returns_everything(self) -> None:
        records = _records()
        result = filter_candidate_records("emily", "davis", "TX", records)
        assert len(result) == len(records)

    def test_empty_names_keep_state_constraint(self) -> None:
        result = filter_candidate_records("", "", "Kenya", _records())
        assert [c.id for c in result] == ["3"]

    def test_empty_universe(self) -> None:
        assert filter_candidate_records("john", "smith", "TX", []) == []
