# =============================================================================
# tools/mcp_server.py  -  FastMCP Server (the catalog the assistant sees)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Registers the 5 Crunchbase tools and 4 resources with FastMCP.  Each
#   registration is a thin shim: it hands the raw arguments (or URI) to
#   CrunchbaseRouter, which owns coercion, dispatch and error handling.
#
# WHY ARE THE TOOL PARAMETERS TYPED `Any`?
#   The published JSON schema still says "string" / "number" (via
#   WithJsonSchema), but validation is left to core/requests.py.  That keeps
#   the coercion policy in one place: a wrong-typed OPTIONAL argument is
#   dropped and the call proceeds, instead of FastMCP rejecting it.
#
# ERRORS:
#   Tool failures are re-raised as ToolError, which FastMCP returns as an
#   `isError` text result (in-band, the assistant can read it).
#   Resource failures arrive from the router as McpError and propagate as
#   protocol faults with their error code (see CrunchbaseMCP).
#
# RUNNING THIS SERVER:
#   python main.py   (stdio transport; needs CRUNCHBASE_API_KEY)
# =============================================================================

from typing import Annotated, Any
from urllib.parse import quote

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from mcp.server.lowlevel.helper_types import ReadResourceContents
from pydantic import AnyUrl, WithJsonSchema

from tools.router import (
    ACQUISITIONS_TEMPLATE,
    COMPANY_TEMPLATE,
    FUNDING_TEMPLATE,
    JSON_MIME_TYPE,
    SCHEME,
    TRENDING_RESOURCE,
    CrunchbaseRouter,
)

SERVER_NAME = "crunchbase-mcp-server"


def _arg(json_type: str, description: str) -> WithJsonSchema:
    return WithJsonSchema({"type": json_type, "description": description})


_LIMIT = _arg("number", "Maximum number of results to return (default: 10)")
_COMPANY_REF = _arg("string", "Company name or UUID")


def _present(**arguments: Any) -> dict[str, Any]:
    """Drop the parameters the caller didn't send."""
    return {key: value for key, value in arguments.items() if value is not None}


def _company_uri(name: str, suffix: str = "") -> str:
    # FastMCP hands template parameters over already decoded.
    return f"{SCHEME}://companies/{quote(name, safe='')}{suffix}"


class CrunchbaseMCP(FastMCP):
    """FastMCP whose resources/read goes straight to the router.

    FastMCP's resource manager turns any exception raised by a resource
    function into a ResourceError, which the client receives with code 0.
    Reading through the router instead lets its McpError reach the client
    with INVALID_REQUEST or INTERNAL_ERROR intact.  The registered resource
    functions still provide the catalog for resources/list and
    resources/templates/list.
    """

    def __init__(self, router: CrunchbaseRouter, name: str = SERVER_NAME):
        super().__init__(name)
        self._router = router

    async def _read_resource(self, uri: AnyUrl | str) -> list[ReadResourceContents]:
        text = await self._router.read_resource(str(uri))
        return [ReadResourceContents(content=text, mime_type=JSON_MIME_TYPE)]


def create_server(router: CrunchbaseRouter) -> CrunchbaseMCP:
    """Build the FastMCP server bound to one router (and so one API key)."""

    mcp = CrunchbaseMCP(router)

    async def run_tool(name: str, arguments: dict[str, Any]) -> str:
        response = await router.call_tool(name, arguments)
        if response.is_error:
            raise ToolError(response.text)
        return response.text

    # =========================================================================
    # Tools
    # =========================================================================
    @mcp.tool()
    async def search_companies(
        query: Annotated[Any, _arg("string", "Search query (e.g., company name, description)")] = None,
        location: Annotated[Any, _arg("string", 'Filter by location (e.g., "San Francisco", "New York")')] = None,
        category: Annotated[Any, _arg("string", 'Filter by category (e.g., "Artificial Intelligence", "Fintech")')] = None,
        founded_after: Annotated[Any, _arg("string", "Filter by founding date (YYYY-MM-DD)")] = None,
        founded_before: Annotated[Any, _arg("string", "Filter by founding date (YYYY-MM-DD)")] = None,
        status: Annotated[Any, _arg("string", 'Filter by company status (e.g., "active", "closed")')] = None,
        limit: Annotated[Any, _LIMIT] = None,
    ) -> str:
        """Search for companies based on various criteria.

        Results are ordered by Crunchbase rank (most popular first).  Every
        filter is optional; filters are combined with AND.
        """
        return await run_tool("search_companies", _present(
            query=query, location=location, category=category,
            founded_after=founded_after, founded_before=founded_before,
            status=status, limit=limit,
        ))

    @mcp.tool()
    async def get_company_details(name_or_id: Annotated[Any, _COMPANY_REF]) -> str:
        """Get detailed information about a specific company.

        Accepts a plain company name ("OpenAI"); the best search match is
        resolved to its Crunchbase UUID and the full profile is returned.
        """
        return await run_tool("get_company_details", _present(name_or_id=name_or_id))

    @mcp.tool()
    async def get_funding_rounds(
        company_name_or_id: Annotated[Any, _COMPANY_REF],
        limit: Annotated[Any, _LIMIT] = None,
    ) -> str:
        """Get funding rounds for a specific company, most recent first."""
        return await run_tool("get_funding_rounds", _present(
            company_name_or_id=company_name_or_id, limit=limit,
        ))

    @mcp.tool()
    async def get_acquisitions(
        company_name_or_id: Annotated[Any, _COMPANY_REF] = None,
        limit: Annotated[Any, _LIMIT] = None,
    ) -> str:
        """Get acquisitions made by or of a specific company.

        Without a company, returns the most recently announced acquisitions.
        """
        return await run_tool("get_acquisitions", _present(
            company_name_or_id=company_name_or_id, limit=limit,
        ))

    @mcp.tool()
    async def search_people(
        query: Annotated[Any, _arg("string", "Search query (e.g., person name)")] = None,
        company: Annotated[Any, _arg("string", "Filter by company name")] = None,
        title: Annotated[Any, _arg("string", "Filter by job title")] = None,
        limit: Annotated[Any, _LIMIT] = None,
    ) -> str:
        """Search for people based on various criteria."""
        return await run_tool("search_people", _present(
            query=query, company=company, title=title, limit=limit,
        ))

    # =========================================================================
    # Resources
    # =========================================================================
    @mcp.resource(
        TRENDING_RESOURCE.uri,
        name=TRENDING_RESOURCE.name,
        description=TRENDING_RESOURCE.description,
        mime_type=TRENDING_RESOURCE.mime_type,
    )
    async def trending_companies() -> str:
        return await router.read_resource(TRENDING_RESOURCE.uri)

    @mcp.resource(
        COMPANY_TEMPLATE.uri,
        name=COMPANY_TEMPLATE.name,
        description=COMPANY_TEMPLATE.description,
        mime_type=COMPANY_TEMPLATE.mime_type,
    )
    async def company_details(name: str) -> str:
        return await router.read_resource(_company_uri(name))

    @mcp.resource(
        FUNDING_TEMPLATE.uri,
        name=FUNDING_TEMPLATE.name,
        description=FUNDING_TEMPLATE.description,
        mime_type=FUNDING_TEMPLATE.mime_type,
    )
    async def company_funding(name: str) -> str:
        return await router.read_resource(_company_uri(name, "/funding"))

    @mcp.resource(
        ACQUISITIONS_TEMPLATE.uri,
        name=ACQUISITIONS_TEMPLATE.name,
        description=ACQUISITIONS_TEMPLATE.description,
        mime_type=ACQUISITIONS_TEMPLATE.mime_type,
    )
    async def company_acquisitions(name: str) -> str:
        return await router.read_resource(_company_uri(name, "/acquisitions"))

    return mcp
