"""Wire models for the remote search API."""

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

SearchType = Literal["organizations", "affiliates", "both"]

T = TypeVar("T")


class OrganizationResult(BaseModel):
    """Organization record as returned by the search API.

    ``match_score`` is only set for related (partial token) results:
    +2 per name column hit, +1 per other column hit.
    """

    model_config = ConfigDict(frozen=True)

    organization_id: int | None = None
    rcNumber: str | None = None
    approvedName: str | None = None
    objectives: str | None = None
    address: str | None = None
    state: str | None = None
    city: str | None = None
    email: str | None = None
    status: str | None = None
    registrationDate: str | None = None
    match_score: float | None = None


class AffiliateResult(BaseModel):
    """Affiliate (director, shareholder, ...) record as returned by the search API."""

    model_config = ConfigDict(frozen=True)

    affiliate_id: str | None = None
    organization_id: int | None = None
    surname: str | None = None
    firstname: str | None = None
    otherName: str | None = None
    email: str | None = None
    phoneNumber: str | None = None
    occupation: str | None = None
    city: str | None = None
    state: str | None = None
    nationality: str | None = None
    affiliate_type: str | None = None
    date_of_birth: str | None = None
    shares_allotted: str | None = None
    share_type: str | None = None
    gender: str | None = None
    identity_number: str | None = None
    match_score: float | None = None


class SearchParams(BaseModel):
    """Query parameters for ``GET /search``."""

    q: str
    search_type: SearchType = "both"
    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=100, ge=1, le=1000)
    related_limit: int = Field(default=20, ge=1, le=100)

    @field_validator("q")
    @classmethod
    def query_not_empty(cls, v: str) -> str:
        if not v.strip():
            msg = "q must not be empty"
            raise ValueError(msg)
        return v.strip()


class SearchResponse(BaseModel):
    """Tiered search response.

    Primary lists hold records matching every query token; related lists hold
    partial matches sorted by ``match_score``.
    """

    query: str
    query_time_ms: float = 0.0
    offset: int = 0
    limit: int = 0
    total_matched_organizations: int = 0
    total_matched_affiliates: int = 0
    total_related_organizations: int = 0
    total_related_affiliates: int = 0
    total_in_response: int = 0
    organizations_in_response: int = 0
    affiliates_in_response: int = 0
    organizations: list[OrganizationResult] = Field(default_factory=list)
    affiliates: list[AffiliateResult] = Field(default_factory=list)
    related_organizations: list[OrganizationResult] = Field(default_factory=list)
    related_affiliates: list[AffiliateResult] = Field(default_factory=list)


class PaginatedResponse(BaseModel, Generic[T]):
    """Page of results from the per-entity search endpoints."""

    items: list[T] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10
    totalPages: int = 0


class HealthResponse(BaseModel):
    status: str
    timestamp: str | None = None
