import asyncio

import pytest

from odx_mcp.config import load_config


ENV = {
    "ODX_INSTANCE_URL": "https://odoo.example.com/",
    "ODX_INSTANCE_DB": "prod",
    "ODX_INSTANCE_API_KEY": "odoo-key",
    "ODX_USER_ID": "2",
    "ODX_API_KEY": "gw-key",
    "ODX_GATEWAY_URL": "https://gateway.test",
}


class FakeClient:
    """Stands in for OdxProxyClient; fields_get answers from a per-model table."""

    def __init__(self, fields=None, failing=(), delays=None):
        self.fields = fields or {}
        self.failing = set(failing)
        self.delays = delays or {}
        self.calls = []

    async def fields_get(self, model, keyword=None):
        self.calls.append(("fields_get", model, keyword))
        if model in self.delays:
            await asyncio.sleep(self.delays[model])
        if model in self.failing:
            raise ConnectionError(f"gateway unreachable for {model}")
        if model not in self.fields:
            return {}
        return {"result": self.fields[model]}


@pytest.fixture
def env():
    return dict(ENV)


@pytest.fixture
def settings(env):
    return load_config(env)


@pytest.fixture
def fake_client():
    return FakeClient(
        fields={
            "res.partner": {"name": {"type": "char", "string": "Name"}},
            "sale.order": {"state": {"type": "selection", "string": "Status"}},
        }
    )
