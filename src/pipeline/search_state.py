"""Search session state: status, last query, results and error message."""

from dataclasses import dataclass
from typing import Literal

from src.core.schemas import SearchEngineResponse

SearchStatus = Literal["idle", "searching", "success", "error"]


@dataclass(frozen=True)
class SearchQuery:
    query: str
    state_filter: str


class SearchSession:
    """Holds the state of the current search for one caller.

    Not thread-safe; create one per user/session.
    """

    def __init__(self) -> None:
        self.status: SearchStatus = "idle"
        self.error_message: str | None = None
        self.last_query: SearchQuery | None = None
        self.results: SearchEngineResponse | None = None

    def set_status(self, status: SearchStatus) -> None:
        self.status = status

    def set_error(self, message: str | None) -> None:
        self.error_message = message
        self.status = "error"

    def set_results(self, results: SearchEngineResponse | None, query: SearchQuery) -> None:
        self.results = results
        self.last_query = query
        self.status = "success"
        self.error_message = None

    def clear_results(self) -> None:
        """Drop results and the last query. The error message is kept."""
        self.results = None
        self.last_query = None
        self.status = "idle"

    def reset(self) -> None:
        self.status = "idle"
        self.error_message = None
        self.last_query = None
        self.results = None
