# =============================================================================
# core/errors.py  -  Error Taxonomy (every way a request can fail)
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Defines one exception class per failure KIND.  Callers branch on the
#   class (`except RateLimitError:`), never on the message text.  The
#   message (`str(error)`) is the one-line text the assistant ends up seeing.
#
# TWO FAMILIES:
#   Adapter-level errors are raised by core/crunchbase.py while talking to
#   the Crunchbase API:
#       AuthenticationError, NotFoundError, RateLimitError,
#       UpstreamError, TransportError
#   Router-level errors are raised by core/requests.py and tools/router.py
#   BEFORE any network call is made:
#       InvalidParamsError, InvalidRequestError, UnknownOperationError
#
# classify_http_error() is the only place an HTTP status code is turned into
# one of these classes.  It is a pure function so it can be tested without
# a network.
# =============================================================================

from typing import Any


class CrunchbaseError(Exception):
    """Base class for every classified failure in this server."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(CrunchbaseError):
    """Raised at startup when required configuration is missing."""


# -----------------------------------------------------------------------------
# Adapter-level errors
# -----------------------------------------------------------------------------
class AuthenticationError(CrunchbaseError):
    """HTTP 401: the API key was rejected."""

    def __init__(self, message: str = "Unauthorized: Invalid API key"):
        super().__init__(message)


class NotFoundError(CrunchbaseError):
    """HTTP 404, or a name that resolved to zero companies."""

    def __init__(self, message: str = "Not found: The requested resource does not exist"):
        super().__init__(message)


class RateLimitError(CrunchbaseError):
    """HTTP 429: the API key's quota is exhausted for now."""

    def __init__(self, message: str = "Rate limit exceeded: Too many requests"):
        super().__init__(message)


class UpstreamError(CrunchbaseError):
    """Any other HTTP error status, carrying the upstream message."""

    def __init__(self, status: int, message: str):
        super().__init__(f"Crunchbase API error ({status}): {message}")
        self.status = status
        self.upstream_message = message


class TransportError(CrunchbaseError):
    """The request never produced an HTTP response (DNS, connect, timeout)."""


# -----------------------------------------------------------------------------
# Router-level errors
# -----------------------------------------------------------------------------
class InvalidParamsError(CrunchbaseError):
    """A required tool argument is missing or has the wrong type."""


class InvalidRequestError(CrunchbaseError):
    """A resource URI that matches none of the published resources."""


class UnknownOperationError(CrunchbaseError):
    """A tool name that is not in the catalog."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


# =============================================================================
# Status classification
# =============================================================================
def _upstream_message(body: Any, fallback: str) -> str:
    """Pull a human-readable message out of an error response body.

    Crunchbase usually answers with a list of error objects
    (`[{"code": ..., "message": ...}]`), but a single object or plain text
    also shows up behind proxies and gateways.
    """
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    if isinstance(body, list):
        messages = [str(item["message"]) for item in body
                    if isinstance(item, dict) and item.get("message")]
        if messages:
            return "; ".join(messages)
    if isinstance(body, str) and body.strip():
        return body.strip()
    return fallback


def classify_http_error(status: int, body: Any = None, reason: str = "") -> CrunchbaseError:
    """Map an HTTP status (and its decoded body) to an error instance.

    Args:
        status: The HTTP status code of the failed response.
        body: The decoded JSON body, the raw text, or None.
        reason: The HTTP reason phrase, used when the body says nothing.

    Returns:
        The matching CrunchbaseError subclass instance (not raised).
    """
    if status == 401:
        return AuthenticationError()
    if status == 404:
        return NotFoundError()
    if status == 429:
        return RateLimitError()
    return UpstreamError(status, _upstream_message(body, reason or "Unknown error"))
