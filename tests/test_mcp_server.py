"""
Tests for the FastMCP registration layer, driven through fastmcp's
in-memory Client.
"""
import json

import pytest
from fastmcp import Client
from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_REQUEST

from tools.mcp_server import create_server
from tools.router import TRENDING_COMPANIES_URI
from tests.conftest import listing, make_company, make_funding_round


@pytest.fixture
def server(router):
    return create_server(router)


class TestCatalog:

    async def test_lists_five_tools(self, server):
        async with Client(server) as mcp_client:
            tools = await mcp_client.list_tools()

        assert {tool.name for tool in tools} == {
            "search_companies",
            "get_company_details",
            "get_funding_rounds",
            "get_acquisitions",
            "search_people",
        }

    async def test_required_arguments_in_schema(self, server):
        async with Client(server) as mcp_client:
            tools = {tool.name: tool for tool in await mcp_client.list_tools()}

        assert tools["get_company_details"].inputSchema["required"] == ["name_or_id"]
        assert tools["get_funding_rounds"].inputSchema["required"] == ["company_name_or_id"]
        assert not tools["search_companies"].inputSchema.get("required")
        assert tools["search_companies"].inputSchema["properties"]["limit"]["type"] == "number"

    async def test_lists_trending_resource_and_templates(self, server):
        async with Client(server) as mcp_client:
            resources = await mcp_client.list_resources()
            templates = await mcp_client.list_resource_templates()

        assert [str(resource.uri) for resource in resources] == [TRENDING_COMPANIES_URI]
        assert {
            "crunchbase://companies/{name}",
            "crunchbase://companies/{name}/funding",
            "crunchbase://companies/{name}/acquisitions",
        } == {template.uriTemplate for template in templates}
        assert len(templates) == 3


class TestCalls:

    async def test_tool_success(self, server, fake_api):
        fake_api.add("/searches/organizations", listing([make_company()]))

        async with Client(server) as mcp_client:
            result = await mcp_client.call_tool_mcp("search_companies", {"query": "AI", "limit": 5})

        assert not result.isError
        assert json.loads(result.content[0].text) == [make_company()]

    async def test_tool_error_is_returned_in_band(self, server, fake_api):
        async with Client(server) as mcp_client:
            result = await mcp_client.call_tool_mcp("get_company_details", {"name_or_id": 42})

        assert result.isError
        assert "Missing or invalid name_or_id parameter" in result.content[0].text
        assert fake_api.requests == []

    async def test_funding_resource(self, server, fake_api, known_company):
        fake_api.add("/entities/organizations/c-1/funding_rounds", listing([make_funding_round()]))

        async with Client(server) as mcp_client:
            contents = await mcp_client.read_resource("crunchbase://companies/Acme%20Inc/funding")

        assert json.loads(contents[0].text) == [make_funding_round()]
        assert fake_api.params(0)["query"] == "Acme Inc"

    async def test_missing_required_argument_is_in_band_error(self, server, fake_api):
        async with Client(server) as mcp_client:
            result = await mcp_client.call_tool_mcp("get_company_details", {})

        assert result.isError
        assert fake_api.requests == []

    async def test_resource_name_is_decoded_once(self, server, fake_api, known_company):
        async with Client(server) as mcp_client:
            contents = await mcp_client.read_resource("crunchbase://companies/50%2525%20Off")

        assert json.loads(contents[0].text) == known_company
        assert contents[0].mimeType == "application/json"
        assert fake_api.params(0)["query"] == "50%25 Off"


class TestResourceFaults:
    """Resource failures reach the client as protocol errors with their code."""

    @pytest.mark.parametrize("uri", [
        "crunchbase://badpath",
        "crunchbase://companies/Acme/people",
    ])
    async def test_unmatched_uri_is_invalid_request(self, server, fake_api, uri):
        async with Client(server) as mcp_client:
            with pytest.raises(McpError) as excinfo:
                await mcp_client.read_resource(uri)

        assert excinfo.value.error.code == INVALID_REQUEST
        assert excinfo.value.error.message.startswith("Invalid URI: ")
        assert fake_api.requests == []

    async def test_rate_limit_is_internal_error(self, server, fake_api):
        fake_api.add("/searches/organizations", {}, status=429)

        async with Client(server) as mcp_client:
            with pytest.raises(McpError) as excinfo:
                await mcp_client.read_resource(TRENDING_COMPANIES_URI)

        assert excinfo.value.error.code == INTERNAL_ERROR
        assert excinfo.value.error.message == "Rate limit exceeded: Too many requests"

    async def test_unknown_company_is_internal_error(self, server, fake_api):
        fake_api.add("/searches/organizations", listing([]))

        async with Client(server) as mcp_client:
            with pytest.raises(McpError) as excinfo:
                await mcp_client.read_resource("crunchbase://companies/Nobody/funding")

        assert excinfo.value.error.code == INTERNAL_ERROR
        assert excinfo.value.error.message == "Company not found: Nobody"
