"""
Tests for the company / partner tools.

The filter builders and handlers are plain functions and are tested with an
AsyncMock standing in for the ODXProxy client.
"""

import json
from unittest.mock import AsyncMock

import pytest
from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from odx_mcp.client import OdxRemoteError
from odx_mcp.tools import (
    company_domain,
    connection_settings,
    create_partner,
    get_companies,
    get_partners,
    partner_domain,
    partner_values,
    register_base_tools,
    register_config_tool,
)


def mock_client(result=None):
    client = AsyncMock()
    client.search_read.return_value = {"result": result if result is not None else []}
    client.create.return_value = {"result": [42]}
    return client


class TestCompanyDomain:

    def test_no_filters(self):
        assert company_domain() == []

    def test_name_only(self):
        assert company_domain(name="acme") == [["name", "ilike", "acme"]]

    def test_name_and_id_are_combined(self):
        assert company_domain(name="acme", id=3) == [["name", "ilike", "acme"], ["id", "=", 3]]


class TestPartnerDomain:

    def test_id_wins_outright(self):
        assert partner_domain(id=7, email="x@y.com", name="x") == [["id", "=", 7]]

    def test_email_or_name(self):
        assert partner_domain(email="a@b.com", name="Acme") == [
            "|", ["email", "=", "a@b.com"], ["name", "ilike", "Acme"]
        ]

    def test_email_is_lowercased(self):
        assert partner_domain(email="Bob@Example.COM") == [["email", "=", "bob@example.com"]]

    def test_name_only(self):
        assert partner_domain(name="Acme") == [["name", "ilike", "Acme"]]

    def test_nothing_given(self):
        assert partner_domain() is None


class TestHandlers:

    @pytest.mark.asyncio
    async def test_get_companies_queries_res_company(self):
        client = mock_client([{"id": 1, "name": "Acme"}])
        result = await get_companies(client, name="ac", tz="Asia/Singapore")
        assert result == [{"id": 1, "name": "Acme"}]
        client.search_read.assert_awaited_once_with(
            "res.company", [["name", "ilike", "ac"]], {"context": {"tz": "Asia/Singapore"}}
        )

    @pytest.mark.asyncio
    async def test_get_companies_without_filters_still_queries(self):
        client = mock_client()
        assert await get_companies(client) == []
        client.search_read.assert_awaited_once_with("res.company", [], {"context": {"tz": "UTC"}})

    @pytest.mark.asyncio
    async def test_get_partners_empty_input_makes_no_call(self):
        client = mock_client()
        assert await get_partners(client) == []
        client.search_read.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_partners_by_id(self):
        client = mock_client([{"id": 7}])
        assert await get_partners(client, id=7, email="x@y.com", name="x") == [{"id": 7}]
        assert client.search_read.await_args.args[1] == [["id", "=", 7]]

    @pytest.mark.asyncio
    async def test_missing_result_is_empty_list(self):
        client = AsyncMock()
        client.search_read.return_value = {}
        assert await get_partners(client, name="x") == []

    @pytest.mark.asyncio
    async def test_create_partner_defaults(self):
        client = mock_client()
        assert await create_partner(client, name="Bob") is True
        client.create.assert_awaited_once_with(
            "res.partner",
            [{"name": "Bob", "email": False, "phone": False, "is_company": False}],
            {"context": {"tz": "UTC"}},
        )

    @pytest.mark.asyncio
    async def test_create_partner_errors_propagate(self):
        client = AsyncMock()
        client.create.side_effect = OdxRemoteError(200, "Odoo Server Error")
        with pytest.raises(OdxRemoteError):
            await create_partner(client, name="Bob")

    def test_partner_values_keeps_given_fields(self):
        assert partner_values("Acme", "info@acme.com", "+65 1234", True) == {
            "name": "Acme", "email": "info@acme.com", "phone": "+65 1234", "is_company": True,
        }


class TestRegistration:

    @pytest.mark.asyncio
    async def test_tools_registered(self, settings):
        mcp = FastMCP("test")
        register_config_tool(mcp, settings)
        register_base_tools(mcp, mock_client(), settings)
        names = sorted(t.name for t in await mcp.list_tools())
        assert names == ["create_partner", "get_companies", "get_partners", "odx_config"]

    @pytest.mark.asyncio
    async def test_create_partner_requires_name(self, settings):
        mcp = FastMCP("test")
        register_base_tools(mcp, mock_client(), settings)
        tool = next(t for t in await mcp.list_tools() if t.name == "create_partner")
        assert tool.inputSchema["required"] == ["name"]
        assert set(tool.inputSchema["properties"]) == {"name", "email", "phone", "is_company"}

    def test_connection_settings(self, settings):
        assert connection_settings(settings) == {
            "url": "https://odoo.example.com",
            "database": "prod",
            "gateway": "https://gateway.test",
            "userUid": 2,
        }


def only_text(result):
    """The single text block of a call_tool result (with or without structured output)."""
    content = result[0] if isinstance(result, tuple) else result
    assert len(content) == 1
    return content[0].text


class TestCallTool:
    """Calls go through FastMCP, so argument validation and error wrapping are exercised too."""

    @pytest.fixture
    def client(self):
        return mock_client([{"id": 7, "name": "Acme"}])

    @pytest.fixture
    def mcp(self, settings, client):
        mcp = FastMCP("test")
        register_config_tool(mcp, settings)
        register_base_tools(mcp, client, settings)
        return mcp

    @pytest.mark.asyncio
    async def test_get_partners_without_input_returns_empty_list(self, mcp, client):
        assert only_text(await mcp.call_tool("get_partners", {})) == "[]"
        client.search_read.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_partners_by_email_and_name(self, mcp, client, settings):
        text = only_text(await mcp.call_tool("get_partners", {"email": "Info@Acme.com", "name": "Acme"}))
        assert json.loads(text) == [{"id": 7, "name": "Acme"}]
        client.search_read.assert_awaited_once_with(
            "res.partner",
            ["|", ["email", "=", "info@acme.com"], ["name", "ilike", "Acme"]],
            {"context": {"tz": settings.query_tz}},
        )

    @pytest.mark.asyncio
    async def test_create_partner_returns_true_literal(self, mcp, client):
        assert only_text(await mcp.call_tool("create_partner", {"name": "Bob"})) == "true"
        client.create.assert_awaited_once_with(
            "res.partner",
            [{"name": "Bob", "email": False, "phone": False, "is_company": False}],
            {"context": {"tz": "UTC"}},
        )

    @pytest.mark.asyncio
    async def test_create_partner_failure_is_a_tool_error(self, mcp, client):
        client.create.side_effect = OdxRemoteError(200, "Odoo Server Error")
        with pytest.raises(ToolError, match="create_partner"):
            await mcp.call_tool("create_partner", {"name": "Bob"})

    @pytest.mark.asyncio
    async def test_odx_config_returns_settings(self, mcp, settings):
        text = only_text(await mcp.call_tool("odx_config", {}))
        assert json.loads(text) == connection_settings(settings)
