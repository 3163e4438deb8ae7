# =============================================================================
# tools/router.py  -  Request Router (tool calls & resource reads)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Sits between the MCP surface (tools/mcp_server.py) and the Crunchbase
#   adapter (core/crunchbase.py).  It knows nothing about FastMCP, so every
#   routing rule can be exercised directly in tests.
#
# HOW IT WORKS (the flow):
#   tool call:     name + raw args -> coerce_tool_request() -> adapter -> JSON
#   resource read: URI -> match literal / template -> adapter -> JSON
#
# THE ERROR ASYMMETRY (keep it this way):
#   - Tool errors are DATA.  Any classified failure is caught here and
#     returned as ToolResponse(is_error=True) so the assistant can read the
#     message and react ("Company not found: Foo" -> try another spelling).
#   - Resource errors are FAULTS.  They propagate as McpError:
#       unmatched URI   -> INVALID_REQUEST
#       adapter failure -> INTERNAL_ERROR
# =============================================================================

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, Optional
from urllib.parse import unquote

from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_REQUEST, ErrorData

from core.crunchbase import CrunchbaseClient
from core.errors import CrunchbaseError, InvalidRequestError
from core.requests import (
    AcquisitionsRequest,
    CompanyDetailsRequest,
    FundingRoundsRequest,
    SearchCompaniesRequest,
    SearchPeopleRequest,
    ToolRequest,
    coerce_tool_request,
)

logger = logging.getLogger(__name__)

SCHEME = "crunchbase"
TRENDING_COMPANIES_URI = f"{SCHEME}://trending/companies"
JSON_MIME_TYPE = "application/json"

# =============================================================================
# Logging helpers
# =============================================================================
# Logs go to STDERR (configured in main.py); STDOUT is the MCP transport.
# Colors: CYAN = incoming call, YELLOW = status, GREEN = response.
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"


def _log_request(operation: str, **params) -> None:
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{operation} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    logger.info(f"{_YELLOW}  -> {message}{_RESET}")


def _log_response(operation: str, text: str) -> str:
    logger.info(f"{_GREEN}  <- {operation} response: {len(text)} chars{_RESET}")
    return text


def to_json(result: Any) -> str:
    """Pretty-print a result the way every tool and resource returns it."""
    return json.dumps(result, indent=2, ensure_ascii=False)


@dataclass(frozen=True)
class ToolResponse:
    """Text payload of a tool call; is_error is the side-channel flag."""

    text: str
    is_error: bool = False


# =============================================================================
# Resource catalog
# =============================================================================
@dataclass(frozen=True)
class ResourceSpec:
    uri: str
    name: str
    description: str
    mime_type: str = JSON_MIME_TYPE


TRENDING_RESOURCE = ResourceSpec(
    uri=TRENDING_COMPANIES_URI,
    name="Trending Companies",
    description="List of trending companies on Crunchbase",
)

COMPANY_TEMPLATE = ResourceSpec(
    uri=f"{SCHEME}://companies/{{name}}",
    name="Company Details",
    description="Detailed information about a specific company",
)

FUNDING_TEMPLATE = ResourceSpec(
    uri=f"{SCHEME}://companies/{{name}}/funding",
    name="Company Funding Rounds",
    description="Funding rounds for a specific company",
)

ACQUISITIONS_TEMPLATE = ResourceSpec(
    uri=f"{SCHEME}://companies/{{name}}/acquisitions",
    name="Company Acquisitions",
    description="Acquisitions made by or of a specific company",
)

RESOURCE_TEMPLATES = (COMPANY_TEMPLATE, FUNDING_TEMPLATE, ACQUISITIONS_TEMPLATE)


def _template_pattern(template: ResourceSpec) -> "re.Pattern[str]":
    # "{name}" is exactly one path segment.
    return re.compile("^" + re.escape(template.uri).replace(r"\{name\}", "([^/]+)") + "$")


# =============================================================================
# Router
# =============================================================================
class CrunchbaseRouter:
    """Dispatches validated tool calls and resource reads to the adapter."""

    def __init__(self, client: CrunchbaseClient):
        self.client = client
        self._tool_handlers: dict[type, Callable[[Any], Awaitable[Any]]] = {
            SearchCompaniesRequest: client.search_companies,
            CompanyDetailsRequest: lambda request: client.get_company_details(request.name_or_id),
            FundingRoundsRequest: client.get_funding_rounds,
            AcquisitionsRequest: client.get_acquisitions,
            SearchPeopleRequest: client.search_people,
        }
        self._templates = [
            (_template_pattern(COMPANY_TEMPLATE), self._read_company),
            (_template_pattern(FUNDING_TEMPLATE), self._read_funding),
            (_template_pattern(ACQUISITIONS_TEMPLATE), self._read_acquisitions),
        ]

    # -------------------------------------------------------------------------
    # Tools
    # -------------------------------------------------------------------------
    async def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResponse:
        """Run one tool.  Never raises for classified failures.

        Returns:
            ToolResponse with pretty JSON on success, or the one-line error
            message with is_error=True.
        """
        _log_request(name, arguments=arguments)
        try:
            request = coerce_tool_request(name, arguments)
            result = await self.dispatch(request)
        except CrunchbaseError as exc:
            _log_status(f"{type(exc).__name__}: {exc}")
            return ToolResponse(text=str(exc), is_error=True)

        if isinstance(result, list):
            _log_status(f"{len(result)} result(s)")
        return ToolResponse(text=_log_response(name, to_json(result)))

    async def dispatch(self, request: ToolRequest) -> Any:
        """Send an already-coerced request to the matching adapter method."""
        return await self._tool_handlers[type(request)](request)

    # -------------------------------------------------------------------------
    # Resources
    # -------------------------------------------------------------------------
    async def read_resource(self, uri: str) -> str:
        """Read a crunchbase:// resource and return its JSON text.

        Raises:
            McpError: INVALID_REQUEST for an unknown URI, INTERNAL_ERROR when
                the adapter fails.
        """
        _log_request("read_resource", uri=uri)
        try:
            reader = self._match(uri)
            result = await reader()
        except InvalidRequestError as exc:
            _log_status(str(exc))
            raise McpError(ErrorData(code=INVALID_REQUEST, message=str(exc))) from exc
        except CrunchbaseError as exc:
            _log_status(f"{type(exc).__name__}: {exc}")
            raise McpError(ErrorData(code=INTERNAL_ERROR, message=str(exc))) from exc
        return _log_response(uri, to_json(result))

    def _match(self, uri: str) -> Callable[[], Awaitable[Any]]:
        if uri == TRENDING_COMPANIES_URI:
            return self._read_trending
        for pattern, reader in self._templates:
            match = pattern.match(uri)
            if match:
                name = unquote(match.group(1))
                return lambda: reader(name)
        raise InvalidRequestError(f"Invalid URI: {uri}")

    async def _read_trending(self) -> Any:
        return await self.client.search_companies(SearchCompaniesRequest())

    async def _read_company(self, name: str) -> Any:
        return await self.client.get_company_details(name)

    async def _read_funding(self, name: str) -> Any:
        return await self.client.get_funding_rounds(FundingRoundsRequest(company_name_or_id=name))

    async def _read_acquisitions(self, name: str) -> Any:
        return await self.client.get_acquisitions(AcquisitionsRequest(company_name_or_id=name))
