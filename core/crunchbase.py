# =============================================================================
# core/crunchbase.py  -  Crunchbase API Adapter
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Wraps every outbound call to the Crunchbase v4 REST API.  Each public
#   method takes one typed request (core/requests.py), issues one or more
#   GETs, and returns the decoded JSON untouched.  Failures come out as one
#   of the classified errors in core/errors.py, never as a raw httpx error.
#
# NAME RESOLUTION:
#   Assistants say "OpenAI", but /entities/organizations/{id} wants a UUID.
#   get_company_details() therefore:
#     1. searches organizations for the name, limit 1
#     2. fetches the first hit by its UUID
#   The two calls are sequential and NOT atomic.  A company renamed or
#   created between them can produce a mismatch; that is accepted as
#   best-effort.  Funding and acquisition lookups reuse this resolution.
#
# QUERY EXPRESSIONS:
#   Filters become `field:value` clauses AND-ed onto the free-text term in a
#   fixed order.  Absent or empty filters are left out entirely.
# =============================================================================

import logging
from typing import Any, Optional, Sequence

import httpx

from core.config import Settings
from core.errors import (
    CrunchbaseError,
    NotFoundError,
    TransportError,
    UpstreamError,
    classify_http_error,
)
from core.models import Acquisition, Company, FundingRound, Person
from core.requests import (
    AcquisitionsRequest,
    FundingRoundsRequest,
    SearchCompaniesRequest,
    SearchPeopleRequest,
)

logger = logging.getLogger(__name__)

RANK_DESC = "rank DESC"
ANNOUNCED_DESC = "announced_on DESC"


def build_query(text: Optional[str], clauses: Sequence[tuple[str, Optional[str]]]) -> str:
    """AND together the free-text term and every present `field:value` clause.

    >>> build_query("AI", [("location:", "San Francisco"), ("status:", None)])
    'AI AND location:San Francisco'
    """
    terms = [text] if text else []
    terms.extend(f"{prefix}{value}" for prefix, value in clauses if value)
    return " AND ".join(terms)


def _entity_uuid(entity: dict[str, Any]) -> Optional[str]:
    # Search hits and entity lookups both carry the id at the top level,
    # but entity lookups may nest it under properties.identifier.
    if entity.get("uuid"):
        return entity["uuid"]
    identifier = (entity.get("properties") or {}).get("identifier") or {}
    return identifier.get("uuid")


class CrunchbaseClient:
    """Async adapter over the Crunchbase v4 API.

    Usage:
        async with CrunchbaseClient(settings) as client:
            companies = await client.search_companies(SearchCompaniesRequest(query="AI"))
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._http = httpx.AsyncClient(
            base_url=settings.base_url,
            headers={
                "Accept": "application/json",
                "X-cb-user-key": settings.api_key,
            },
            transport=transport,
        )

    async def __aenter__(self) -> "CrunchbaseClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------
    async def _get(self, path: str, params: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """GET `path` and return the decoded JSON body, or raise classified."""
        try:
            response = await self._http.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise classify_http_error(
                exc.response.status_code,
                _decode_body(exc.response),
                exc.response.reason_phrase,
            ) from exc
        except httpx.HTTPError as exc:
            raise TransportError(str(exc) or type(exc).__name__) from exc
        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamError(response.status_code, "Invalid JSON in response body") from exc
        # Every v4 endpoint answers with an object, entity or list envelope.
        if not isinstance(payload, dict):
            raise UpstreamError(response.status_code, "Expected a JSON object in response body")
        return payload

    async def _list(self, path: str, params: dict[str, Any]) -> list[Any]:
        payload = await self._get(path, params)
        return payload.get("data", [])

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------
    async def search_companies(self, request: SearchCompaniesRequest) -> list[Company]:
        """Search organizations, most popular first."""
        query = build_query(request.query, [
            ("location:", request.location),
            ("category:", request.category),
            ("founded_on:>=", request.founded_after),
            ("founded_on:<=", request.founded_before),
            ("status:", request.status),
        ])
        try:
            return await self._list("/searches/organizations", {
                "query": query,
                "limit": request.limit,
                "order": RANK_DESC,
            })
        except CrunchbaseError as exc:
            logger.error("Error searching companies: %s", exc)
            raise

    async def get_company_details(self, name_or_id: str) -> Company:
        """Resolve a name (or id) to a UUID, then fetch the full profile.

        Raises:
            NotFoundError: "Company not found: <name_or_id>" when the search
                returns no hits.
        """
        try:
            hits = await self._list("/searches/organizations", {
                "query": name_or_id,
                "limit": 1,
            })
            company_id = _entity_uuid(hits[0]) if hits else None
            if not company_id:
                raise NotFoundError(f"Company not found: {name_or_id}")
            return await self._get(f"/entities/organizations/{company_id}")
        except CrunchbaseError as exc:
            logger.error("Error getting company details: %s", exc)
            raise

    async def _resolve_company_id(self, name_or_id: str) -> str:
        company = await self.get_company_details(name_or_id)
        company_id = _entity_uuid(company)
        if not company_id:
            raise NotFoundError(f"Company not found: {name_or_id}")
        return company_id

    async def get_funding_rounds(self, request: FundingRoundsRequest) -> list[FundingRound]:
        """Funding rounds for one company, newest first."""
        try:
            company_id = await self._resolve_company_id(request.company_name_or_id)
            return await self._list(f"/entities/organizations/{company_id}/funding_rounds", {
                "limit": request.limit,
                "order": ANNOUNCED_DESC,
            })
        except CrunchbaseError as exc:
            logger.error("Error getting funding rounds: %s", exc)
            raise

    async def get_acquisitions(self, request: AcquisitionsRequest) -> list[Acquisition]:
        """Acquisitions made by OR of a company; all recent ones without a company."""
        try:
            query = ""
            if request.company_name_or_id:
                company_id = await self._resolve_company_id(request.company_name_or_id)
                query = (
                    f"acquirer_identifier.uuid:{company_id} "
                    f"OR acquiree_identifier.uuid:{company_id}"
                )
            return await self._list("/searches/acquisitions", {
                "query": query,
                "limit": request.limit,
                "order": ANNOUNCED_DESC,
            })
        except CrunchbaseError as exc:
            logger.error("Error getting acquisitions: %s", exc)
            raise

    async def search_people(self, request: SearchPeopleRequest) -> list[Person]:
        """Search people by name, current employer and job title."""
        query = build_query(request.query, [
            ("featured_job_organization_name:", request.company),
            ("featured_job_title:", request.title),
        ])
        try:
            return await self._list("/searches/people", {
                "query": query,
                "limit": request.limit,
                "order": RANK_DESC,
            })
        except CrunchbaseError as exc:
            logger.error("Error searching people: %s", exc)
            raise


def _decode_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
