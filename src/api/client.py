"""HTTP client for the remote people/organization search API."""

import logging
from typing import Any, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from src.api.exceptions import ApiHTTPError, ApiResponseError, ApiTimeoutError
from src.api.schemas import (
    AffiliateResult,
    HealthResponse,
    OrganizationResult,
    PaginatedResponse,
    SearchParams,
    SearchResponse,
)
from src.core.config import ApiConfig

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class ApiClient:
    """Thin wrapper over a requests.Session bound to one API base URL.

    Usable as a context manager; closing releases the underlying session.
    """

    def __init__(self, config: ApiConfig | None = None) -> None:
        self._config = config or ApiConfig()
        self._session = requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})

    @property
    def base_url(self) -> str:
        return self._config.base_url

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    def health(self) -> HealthResponse:
        """Check API liveness via ``GET /health``."""
        return self._get("/health", HealthResponse)

    def search(self, params: SearchParams) -> SearchResponse:
        """Run a tiered search across organizations and/or affiliates."""
        return self._get("/search", SearchResponse, params=params.model_dump())

    def search_organizations(
        self, query: str, page: int = 1, limit: int = 10,
    ) -> PaginatedResponse[OrganizationResult]:
        return self._get(
            "/search/organizations",
            PaginatedResponse[OrganizationResult],
            params={"query": query, "page": page, "limit": limit},
        )

    def search_affiliates(
        self, query: str, page: int = 1, limit: int = 10,
    ) -> PaginatedResponse[AffiliateResult]:
        return self._get(
            "/search/affiliates",
            PaginatedResponse[AffiliateResult],
            params={"query": query, "page": page, "limit": limit},
        )

    def _get(self, path: str, model: type[M], params: dict[str, Any] | None = None) -> M:
        """GET ``path`` and validate the JSON body into ``model``.

        Raises:
            ApiHTTPError: On 4xx/5xx status or a transport failure.
            ApiTimeoutError: When the request times out.
            ApiResponseError: When the body is not JSON or fails validation.
        """
        url = f"{self._config.base_url}{path}"
        logger.debug("GET %s", url)

        try:
            response = self._session.get(url, params=params, timeout=self._config.timeout_seconds)
        except requests.exceptions.Timeout as e:
            logger.warning(
                "Request to %s timed out after %ss", url, self._config.timeout_seconds,
            )
            msg = f"Request to {url} timed out after {self._config.timeout_seconds} seconds"
            raise ApiTimeoutError(msg, url=url) from e
        except requests.exceptions.RequestException as e:
            logger.error("Request to %s failed: %s", url, e)
            msg = f"Request to {url} failed: {e}"
            raise ApiHTTPError(msg, status_code=0, url=url) from e

        if response.status_code >= 400:
            level = logging.WARNING if response.status_code >= 500 else logging.ERROR
            logger.log(level, "HTTP %d error from %s", response.status_code, url)
            msg = f"HTTP {response.status_code}: {response.reason}"
            raise ApiHTTPError(msg, status_code=response.status_code, url=url)

        try:
            data = response.json()
        except ValueError as e:
            logger.error("Failed to parse JSON response from %s", url)
            msg = f"Failed to parse JSON response from {url}: {e}"
            raise ApiResponseError(msg) from e

        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.error("Unexpected response shape from %s", url)
            msg = f"Unexpected response shape from {url}: {e}"
            raise ApiResponseError(msg) from e
