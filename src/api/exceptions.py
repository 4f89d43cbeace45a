"""Exceptions raised by the search API client."""


class ApiError(Exception):
    """Base exception for all search API failures.

    Catch this at the orchestration level to turn a failed request into a
    search error state instead of aborting.
    """


class ApiHTTPError(ApiError):
    """Request failed with a 4xx/5xx status or never reached the server.

    ``status_code`` is 0 for transport-level failures (DNS, refused connection).
    """

    def __init__(self, message: str, status_code: int, url: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class ApiTimeoutError(ApiError):
    """Request did not complete within the configured timeout."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class ApiResponseError(ApiError):
    """Response body was not JSON or did not match the expected schema."""
