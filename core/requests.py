# =============================================================================
# core/requests.py  -  Typed Tool Requests & Argument Coercion
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns the loose JSON argument object an MCP host sends with a tool call
#   into one small frozen dataclass per tool.  Nothing downstream ever sees
#   the raw dict.
#
# COERCION POLICY (permissive for optional, strict for required):
#   - A value is kept only if it is present AND of the exact primitive type
#     the tool declares (a string, or a number that isn't a bool).
#   - A wrong-typed OPTIONAL value is silently dropped, as if it was never
#     sent.  The call still goes ahead.
#   - A missing or wrong-typed REQUIRED value (name_or_id,
#     company_name_or_id) raises InvalidParamsError right here, before the
#     adapter is ever called, so no network request is issued.
# =============================================================================

from dataclasses import dataclass
from typing import Any, ClassVar, Mapping, Optional, Union

from core.errors import InvalidParamsError, UnknownOperationError

DEFAULT_LIMIT = 10


# -----------------------------------------------------------------------------
# Primitive pickers
# -----------------------------------------------------------------------------
def _optional_str(arguments: Mapping[str, Any], key: str) -> Optional[str]:
    value = arguments.get(key)
    return value if isinstance(value, str) else None


def _optional_int(arguments: Mapping[str, Any], key: str) -> Optional[int]:
    value = arguments.get(key)
    # bool is a subclass of int; JSON true/false is not a number.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not value.is_integer():
        return None
    return int(value)


def _limit(arguments: Mapping[str, Any]) -> int:
    limit = _optional_int(arguments, "limit")
    return limit if limit and limit > 0 else DEFAULT_LIMIT


def _required_str(arguments: Mapping[str, Any], key: str) -> str:
    value = arguments.get(key)
    if not isinstance(value, str):
        raise InvalidParamsError(f"Missing or invalid {key} parameter")
    return value


# -----------------------------------------------------------------------------
# One request type per tool
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class SearchCompaniesRequest:
    """Filters for search_companies.  Every field is optional."""

    tool_name: ClassVar[str] = "search_companies"

    query: Optional[str] = None
    location: Optional[str] = None
    category: Optional[str] = None
    founded_after: Optional[str] = None     # YYYY-MM-DD
    founded_before: Optional[str] = None    # YYYY-MM-DD
    status: Optional[str] = None            # "active", "closed", ...
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "SearchCompaniesRequest":
        return cls(
            query=_optional_str(arguments, "query"),
            location=_optional_str(arguments, "location"),
            category=_optional_str(arguments, "category"),
            founded_after=_optional_str(arguments, "founded_after"),
            founded_before=_optional_str(arguments, "founded_before"),
            status=_optional_str(arguments, "status"),
            limit=_limit(arguments),
        )


@dataclass(frozen=True)
class CompanyDetailsRequest:
    tool_name: ClassVar[str] = "get_company_details"

    name_or_id: str

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "CompanyDetailsRequest":
        return cls(name_or_id=_required_str(arguments, "name_or_id"))


@dataclass(frozen=True)
class FundingRoundsRequest:
    tool_name: ClassVar[str] = "get_funding_rounds"

    company_name_or_id: str
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "FundingRoundsRequest":
        return cls(
            company_name_or_id=_required_str(arguments, "company_name_or_id"),
            limit=_limit(arguments),
        )


@dataclass(frozen=True)
class AcquisitionsRequest:
    """No company means "most recent acquisitions anywhere"."""

    tool_name: ClassVar[str] = "get_acquisitions"

    company_name_or_id: Optional[str] = None
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "AcquisitionsRequest":
        return cls(
            company_name_or_id=_optional_str(arguments, "company_name_or_id"),
            limit=_limit(arguments),
        )


@dataclass(frozen=True)
class SearchPeopleRequest:
    tool_name: ClassVar[str] = "search_people"

    query: Optional[str] = None
    company: Optional[str] = None           # Current employer name
    title: Optional[str] = None             # Current job title
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "SearchPeopleRequest":
        return cls(
            query=_optional_str(arguments, "query"),
            company=_optional_str(arguments, "company"),
            title=_optional_str(arguments, "title"),
            limit=_limit(arguments),
        )


ToolRequest = Union[
    SearchCompaniesRequest,
    CompanyDetailsRequest,
    FundingRoundsRequest,
    AcquisitionsRequest,
    SearchPeopleRequest,
]

REQUEST_TYPES = {
    request_type.tool_name: request_type
    for request_type in (
        SearchCompaniesRequest,
        CompanyDetailsRequest,
        FundingRoundsRequest,
        AcquisitionsRequest,
        SearchPeopleRequest,
    )
}


def coerce_tool_request(name: str, arguments: Any) -> ToolRequest:
    """Build the typed request for tool `name` from its raw arguments.

    Args:
        name: The tool name from the MCP call.
        arguments: The raw argument object (None is treated as `{}`).

    Raises:
        UnknownOperationError: `name` is not one of the five tools.
        InvalidParamsError: the payload isn't an object, or a required
            field is missing / not a string.
    """
    request_type = REQUEST_TYPES.get(name)
    if request_type is None:
        raise UnknownOperationError(name)
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise InvalidParamsError("Invalid parameters")
    return request_type.from_arguments(arguments)
