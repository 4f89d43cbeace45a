"""Filter chain for the legacy first/last name + state search.

Filter order:
  1. NameTermFilter(first)  — case-insensitive substring of the name
  2. NameTermFilter(last)   — case-insensitive substring of the name
  3. StateFilter            — case-sensitive substring of the location
If the chain leaves nothing, the whole candidate list is returned instead.
"""

import logging
from collections.abc import Callable

from src.core.schemas import ALL_STATES, CandidateRecord

logger = logging.getLogger(__name__)

# A filter is a callable that takes candidates and returns a subset.
Filter = Callable[[list[CandidateRecord]], list[CandidateRecord]]


class NameTermFilter:
    """Keep candidates whose name contains the term (case-insensitive).

    An empty term matches every name.
    """

    def __init__(self, term: str) -> None:
        self._term = term.lower()

    def __call__(self, candidates: list[CandidateRecord]) -> list[CandidateRecord]:
        result = [c for c in candidates if self._term in c.name.lower()]
        excluded = len(candidates) - len(result)
        if excluded:
            logger.debug("NameTermFilter(%r): removed %d candidates", self._term, excluded)
        return result


class StateFilter:
    """Keep candidates whose location contains the state token.

    Case-sensitive, matching the legacy search form. ``"All States"`` passes
    everything through.
    """

    def __init__(self, state_filter: str) -> None:
        self._state = state_filter

    def __call__(self, candidates: list[CandidateRecord]) -> list[CandidateRecord]:
        if self._state == ALL_STATES:
            return candidates
        result = [c for c in candidates if self._state in c.location]
        excluded = len(candidates) - len(result)
        if excluded:
            logger.debug("StateFilter(%r): removed %d candidates", self._state, excluded)
        return result


def run_filter_chain(
    candidates: list[CandidateRecord],
    filters: list[Filter],
) -> list[CandidateRecord]:
    """Apply filters in order, returning the surviving candidates."""
    result = candidates
    for f in filters:
        result = f(result)
    return result


def filter_candidate_records(
    first_name: str,
    last_name: str,
    state_filter: str,
    candidates: list[CandidateRecord],
) -> list[CandidateRecord]:
    """Filter by first name, last name and state, or return everything if none match."""
    filters: list[Filter] = [
        NameTermFilter(first_name),
        NameTermFilter(last_name),
        StateFilter(state_filter),
    ]
    filtered = run_filter_chain(candidates, filters)
    if not filtered:
        logger.info("No records matched %s %s (%s), returning all", first_name, last_name, state_filter)
        return list(candidates)
    return filtered
