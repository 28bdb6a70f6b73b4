# http_app.py - small HTTP wrapper for container health checks

from typing import Optional

from fastapi import FastAPI

from odx_mcp import __version__
from odx_mcp.server import OdxMCPServer


def create_app(server: Optional[OdxMCPServer] = None) -> FastAPI:
    app = FastAPI(title="ODXProxy MCP Wrapper", version=__version__)

    @app.get("/health")
    def health():
        """
        Simple health check to prove the container + app are running.
        """
        body = {
            "status": "ok",
            "service": "odxproxy-mcpserver",
            "version": __version__,
        }
        if server is not None:
            body["gateway"] = server.settings.client.gateway_url
            body["glossary"] = [e.model for e in server.glossary]
        return body

    return app


app = create_app()
