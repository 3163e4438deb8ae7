"""
Shared fixtures for the Crunchbase MCP server tests.

This module provides:
- A fake Crunchbase API (an httpx.MockTransport handler) that records every
  request and answers from canned per-path responses
- A CrunchbaseClient and CrunchbaseRouter wired to that fake
- Small payload factories for companies, funding rounds, acquisitions, people
"""

from __future__ import annotations

from typing import Any, Optional

import httpx
import pytest

from core.config import Settings
from core.crunchbase import CrunchbaseClient
from tools.router import CrunchbaseRouter

API_PREFIX = "/api/v4"


# =============================================================================
# Payload factories
# =============================================================================


def make_company(uuid: str = "c-1", name: str = "Acme Inc", **extra: Any) -> dict[str, Any]:
    company = {
        "uuid": uuid,
        "name": name,
        "short_description": f"{name} builds things",
        "website_url": "https://example.com",
    }
    company.update(extra)
    return company


def make_funding_round(uuid: str = "f-1", name: str = "Series A - Acme Inc") -> dict[str, Any]:
    return {
        "uuid": uuid,
        "name": name,
        "announced_on": "2023-05-01",
        "investment_type": "series_a",
        "money_raised": 12000000,
        "money_raised_currency_code": "USD",
        "created_at": "2023-05-02T00:00:00Z",
        "updated_at": "2023-05-02T00:00:00Z",
    }


def make_acquisition(uuid: str = "a-1") -> dict[str, Any]:
    return {
        "uuid": uuid,
        "acquirer_identifier": {"uuid": "c-1", "name": "Acme Inc"},
        "acquiree_identifier": {"uuid": "c-2", "name": "Widgets Ltd"},
        "announced_on": "2022-01-10",
        "created_at": "2022-01-11T00:00:00Z",
        "updated_at": "2022-01-11T00:00:00Z",
    }


def make_person(uuid: str = "p-1") -> dict[str, Any]:
    return {
        "uuid": uuid,
        "first_name": "Ada",
        "last_name": "Lovelace",
        "name": "Ada Lovelace",
        "featured_job_organization_name": "Acme Inc",
        "featured_job_title": "CTO",
        "created_at": "2020-01-01T00:00:00Z",
        "updated_at": "2020-01-01T00:00:00Z",
    }


def listing(items: list[dict[str, Any]]) -> dict[str, Any]:
    return {"data": items, "count": len(items), "total_count": len(items)}


# =============================================================================
# Fake API
# =============================================================================


class FakeCrunchbase:
    """MockTransport handler keyed by API path (without the /api/v4 prefix)."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[str, dict[str, Any]] = {}
        self._error: Optional[Exception] = None

    def add(self, path: str, payload: Any = None, status: int = 200, text: Optional[str] = None) -> None:
        body = {"text": text} if text is not None else {"json": payload}
        self._routes[path] = {"status_code": status, **body}

    def fail_with(self, error: Exception) -> None:
        self._error = error

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._error is not None:
            raise self._error
        path = request.url.path
        if path.startswith(API_PREFIX):
            path = path[len(API_PREFIX):]
        if path not in self._routes:
            return httpx.Response(500, json={"message": f"unexpected path {path}"})
        return httpx.Response(**self._routes[path])

    @property
    def paths(self) -> list[str]:
        return [request.url.path[len(API_PREFIX):] for request in self.requests]

    def params(self, index: int = -1) -> dict[str, str]:
        return dict(self.requests[index].url.params)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-key")


@pytest.fixture
def fake_api() -> FakeCrunchbase:
    return FakeCrunchbase()


@pytest.fixture
async def client(settings, fake_api):
    async with CrunchbaseClient(settings, transport=httpx.MockTransport(fake_api)) as crunchbase:
        yield crunchbase


@pytest.fixture
def router(client) -> CrunchbaseRouter:
    return CrunchbaseRouter(client)


@pytest.fixture
def known_company(fake_api) -> dict[str, Any]:
    """Register "Acme Inc" so name resolution succeeds."""
    company = make_company(founded_on="2015-03-01")
    fake_api.add("/searches/organizations", listing([make_company()]))
    fake_api.add("/entities/organizations/c-1", company)
    return company
