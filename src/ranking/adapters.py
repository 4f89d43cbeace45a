"""Map remote API records onto CandidateRecord so one ranking engine serves both.

Organizations and affiliates only expose name, city/state and a handful of
contact fields. Populated fields become insight labels; there is no relative
update label, so freshness falls back to the engine default.
"""

from src.api.schemas import AffiliateResult, OrganizationResult, SearchResponse
from src.core.schemas import CandidateRecord, RecordStatus

_LIVE_STATUSES = frozenset({"active", "live"})


def organization_to_candidate(org: OrganizationResult, position: int = 0) -> CandidateRecord:
    """Convert an organization result; ``position`` disambiguates records without ids."""
    if org.organization_id is not None:
        record_id = f"org-{org.organization_id}"
    elif org.rcNumber:
        record_id = f"org-rc-{org.rcNumber}"
    else:
        record_id = f"org-#{position}"

    insights = _labels(
        ("Business registration", org.rcNumber),
        ("Registered address", org.address),
        ("Email on file", org.email),
    )

    return CandidateRecord(
        id=record_id,
        name=org.approvedName or org.rcNumber or "Unknown organization",
        location=_join_location(org.city, org.state),
        match_score=org.match_score or 0.0,
        insights=insights,
        status=_status(org.status),
    )


def affiliate_to_candidate(aff: AffiliateResult, position: int = 0) -> CandidateRecord:
    """Convert an affiliate result. Affiliates carry no status and rank as Live."""
    record_id = f"aff-{aff.affiliate_id}" if aff.affiliate_id else f"aff-#{position}"
    name = " ".join(p.strip() for p in (aff.firstname, aff.otherName, aff.surname) if p and p.strip())

    insights = _labels(
        ("Email on file", aff.email),
        ("Phone on file", aff.phoneNumber),
        ("Identity document", aff.identity_number),
        ("Shareholding", aff.shares_allotted),
        ("Occupation", aff.occupation),
    )

    return CandidateRecord(
        id=record_id,
        name=name or "Unknown affiliate",
        location=_join_location(aff.city, aff.state, aff.nationality),
        match_score=aff.match_score or 0.0,
        insights=insights,
        status="Live",
    )


def response_to_candidates(response: SearchResponse) -> list[CandidateRecord]:
    """Flatten primary and related results: organizations first, then affiliates."""
    orgs = [*response.organizations, *response.related_organizations]
    affs = [*response.affiliates, *response.related_affiliates]
    candidates = [organization_to_candidate(o, i) for i, o in enumerate(orgs)]
    candidates.extend(affiliate_to_candidate(a, i) for i, a in enumerate(affs))
    return candidates


def _status(raw: str | None) -> RecordStatus:
    if raw and raw.strip().lower() in _LIVE_STATUSES:
        return "Live"
    return "Archived"


def _join_location(city: str | None, state: str | None, country: str | None = None) -> str:
    """Format as "City, State Country", skipping missing parts."""
    region = " ".join(p.strip() for p in (state, country) if p and p.strip())
    return ", ".join(p for p in ((city or "").strip(), region) if p)


def _labels(*pairs: tuple[str, str | None]) -> tuple[str, ...]:
    return tuple(label for label, value in pairs if value and value.strip())
