# server.py - ODXProxy MCP server (FastMCP)
import asyncio
import logging
import sys
from typing import Iterable, List, Optional

from mcp.server.fastmcp import FastMCP

from odx_mcp import __version__
from odx_mcp.client import OdxProxyClient
from odx_mcp.config import Settings, load_config
from odx_mcp.glossary import GlossaryEntry, load_glossary, validate_catalog
from odx_mcp.glossary_loader import load_glossary_file
from odx_mcp.resources import FastMCPRegistrar, publish_glossary
from odx_mcp.tools import register_base_tools, register_config_tool

logger = logging.getLogger(__name__)

SERVER_NAME = "odxproxy-mcpserver"
TRANSPORTS = ("stdio", "sse", "streamable-http")


class OdxMCPServer:
    """FastMCP server bound to one Odoo instance through ODXProxy."""

    def __init__(self, settings: Settings, client=None):
        self.settings = settings
        self.client = client or OdxProxyClient(settings.client, timeout=settings.timeout)
        self.mcp = FastMCP(SERVER_NAME)
        self.glossary: List[GlossaryEntry] = []
        register_config_tool(self.mcp, settings)

    async def load_glossaries(self, glossary: Optional[Iterable[GlossaryEntry]]) -> List[str]:
        """Enrich the glossary and publish one resource per entry. Call before run()."""
        if not glossary:
            return []
        entries = validate_catalog(glossary)
        self.glossary = await load_glossary(
            entries, self.client, max_concurrency=self.settings.glossary_concurrency
        )
        return publish_glossary(self.glossary, FastMCPRegistrar(self.mcp))

    def init_base_resource(self):
        """Register the company / partner tools."""
        register_base_tools(self.mcp, self.client, self.settings)

    def run(self, transport: str = "stdio"):
        self.mcp.run(transport)


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=level,
        stream=sys.stderr,     # stdout carries the stdio transport
        format="%(levelname)s:%(name)s:%(message)s",
    )


def build_server(settings: Settings) -> OdxMCPServer:
    server = OdxMCPServer(settings)
    if settings.glossary_path:
        entries = load_glossary_file(settings.glossary_path)
        asyncio.run(server.load_glossaries(entries))
    server.init_base_resource()
    return server


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    transport = argv[0] if argv else "stdio"
    if transport not in TRANSPORTS:
        print(f"unknown transport {transport!r}, expected one of: {', '.join(TRANSPORTS)}", file=sys.stderr)
        return 2

    settings = load_config()
    configure_logging(settings.log_level)
    logger.info("odxproxy-mcpserver %s, gateway=%s", __version__, settings.client.gateway_url)

    server = build_server(settings)
    if settings.dry_run:
        logger.info("DRY_RUN set, not starting transport=%s", transport)
        return 0

    logger.info("Starting MCP server using transport=%s", transport)
    server.run(transport)
    return 0


if __name__ == "__main__":
    sys.exit(main())
