"""
ODXProxy MCP server: exposes an Odoo instance, reached through the
ODXProxy gateway, as MCP tools plus one ``glossary://<model>`` resource
per glossary entry.

    from odx_mcp import OdxMCPServer, GlossaryEntry, load_config

    server = OdxMCPServer(load_config())
    await server.load_glossaries([GlossaryEntry("res.partner", fields_source="dynamic")])
    server.init_base_resource()
"""

__version__ = "0.1.0"

from odx_mcp.client import OdxProxyClient, OdxProxyError, OdxRemoteError, OdxTransportError
from odx_mcp.config import OdxInstanceInfo, OdxProxyClientInfo, Settings, load_config
from odx_mcp.glossary import FieldsSource, GlossaryEntry, isolate_and_degrade, load_glossary
from odx_mcp.glossary_loader import load_glossary_file
from odx_mcp.resources import publish_glossary
from odx_mcp.server import OdxMCPServer

__all__ = [
    "OdxMCPServer",
    "OdxInstanceInfo",
    "OdxProxyClientInfo",
    "Settings",
    "load_config",
    "GlossaryEntry",
    "FieldsSource",
    "load_glossary",
    "load_glossary_file",
    "isolate_and_degrade",
    "publish_glossary",
    "OdxProxyClient",
    "OdxProxyError",
    "OdxRemoteError",
    "OdxTransportError",
]
