"""
client.py
Async client for the ODXProxy gateway, which relays Odoo ORM calls
(search_read, fields_get, create, ...) to a configured Odoo instance.

Every call is one POST to ``<gateway>/api/odoo/execute``. Failures are
raised as ``OdxProxyError`` subclasses; callers decide whether to recover.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

import httpx

from odx_mcp.config import DEFAULT_GATEWAY_URL, DEFAULT_TIMEOUT, OdxProxyClientInfo

logger = logging.getLogger(__name__)

EXECUTE_PATH = "/api/odoo/execute"


class OdxProxyError(Exception):
    """Base class for every failure of a gateway call."""


class OdxTransportError(OdxProxyError):
    """Network failure, timeout, HTTP error status or undecodable body."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class OdxRemoteError(OdxProxyError):
    """The gateway answered, but Odoo (or the gateway) reported an error."""

    def __init__(self, code: Any, message: str, data: Any = None):
        super().__init__(f"[{code}] {message}")
        self.code = code
        self.message = message
        self.data = data


class OdxProxyClient:
    def __init__(self, info: OdxProxyClientInfo, timeout: float = DEFAULT_TIMEOUT):
        self.info = info
        self.base = (info.gateway_url or DEFAULT_GATEWAY_URL).rstrip("/")
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "x-api-key": self.info.odx_api_key,
        }

    def _envelope(self, action: str, model: str, params: List[Any], keyword: Optional[dict]) -> Dict[str, Any]:
        instance = self.info.instance
        return {
            "id": uuid.uuid4().hex,
            "action": action,
            "model_id": model,
            "keyword": keyword or {},
            "params": params,
            "odoo_instance": {
                "url": instance.url,
                "user_id": instance.user_id,
                "db": instance.db,
                "api_key": instance.api_key,
            },
        }

    async def execute(self, action: str, model: str, params: List[Any], keyword: Optional[dict] = None) -> Dict[str, Any]:
        body = self._envelope(action, model, params, keyword)
        url = self.base + EXECUTE_PATH
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(url, json=body, headers=self._headers())
        except httpx.HTTPError as e:
            raise OdxTransportError(f"{action} {model}: {e}") from e

        if resp.status_code >= 400:
            raise OdxTransportError(
                f"{action} {model}: gateway returned {resp.status_code}: {resp.text[:200]}",
                status=resp.status_code,
            )
        try:
            data = resp.json() if resp.text else {}
        except ValueError as e:
            raise OdxTransportError(f"{action} {model}: response is not JSON", status=resp.status_code) from e
        if not isinstance(data, dict):
            raise OdxTransportError(f"{action} {model}: unexpected response type {type(data).__name__}",
                                    status=resp.status_code)

        error = data.get("error")
        if error:
            if isinstance(error, dict):
                raise OdxRemoteError(error.get("code"), error.get("message", ""), error.get("data"))
            raise OdxRemoteError(None, str(error))

        logger.debug("%s %s -> %s", action, model, resp.status_code)
        return data

    # --- ORM helpers

    async def search(self, model: str, domain: list, keyword: Optional[dict] = None) -> Dict[str, Any]:
        return await self.execute("search", model, [domain], keyword)

    async def search_read(self, model: str, domain: list, keyword: Optional[dict] = None) -> Dict[str, Any]:
        return await self.execute("search_read", model, [domain], keyword)

    async def read(self, model: str, ids: List[int], keyword: Optional[dict] = None) -> Dict[str, Any]:
        return await self.execute("read", model, [ids], keyword)

    async def search_count(self, model: str, domain: list, keyword: Optional[dict] = None) -> Dict[str, Any]:
        return await self.execute("search_count", model, [domain], keyword)

    async def fields_get(self, model: str, keyword: Optional[dict] = None) -> Dict[str, Any]:
        return await self.execute("fields_get", model, [], keyword)

    async def create(self, model: str, values: List[dict], keyword: Optional[dict] = None) -> Dict[str, Any]:
        return await self.execute("create", model, [values], keyword)

    async def write(self, model: str, ids: List[int], values: dict, keyword: Optional[dict] = None) -> Dict[str, Any]:
        return await self.execute("write", model, [ids, values], keyword)

    async def remove(self, model: str, ids: List[int], keyword: Optional[dict] = None) -> Dict[str, Any]:
        return await self.execute("unlink", model, [ids], keyword)

    async def call_method(self, model: str, method: str, params: List[Any],
                          keyword: Optional[dict] = None) -> Dict[str, Any]:
        return await self.execute("call_method", model, params, {**(keyword or {}), "method": method})
