"""
Publishes glossary entries as MCP resources, one per entry, at
``glossary://<model>``. The resource body is the whole entry as JSON,
including the field metadata fetched during enrichment.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Iterable, List

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.resources import FunctionResource

from odx_mcp.glossary import GlossaryEntry

logger = logging.getLogger(__name__)

DEFAULT_TAG = "odoo"
GLOSSARY_SCHEME = "glossary"

ContentProducer = Callable[[str], Awaitable[str]]


@dataclass
class ResourceDescriptor:
    title: str
    description: str = ""
    tags: List[str] = field(default_factory=list)
    examples: List[Any] = field(default_factory=list)
    mime_type: str = "application/json"


def resource_name(model: str) -> str:
    return f"glossary_{model}"


def resource_uri(model: str) -> str:
    return f"{GLOSSARY_SCHEME}://{model}"


def describe(entry: GlossaryEntry) -> ResourceDescriptor:
    tags = [entry.category or DEFAULT_TAG]
    for alias in entry.aliases or []:
        if alias not in tags:
            tags.append(alias)
    return ResourceDescriptor(
        title=f"{entry.model} Glossary",
        description=entry.description or "",
        tags=tags,
        examples=list(entry.examples or []),
    )


def make_producer(entry: GlossaryEntry) -> ContentProducer:
    async def produce(uri: str) -> str:
        return json.dumps(entry.to_dict(), indent=2, ensure_ascii=False, default=str)
    return produce


class FastMCPRegistrar:
    """Registers resources on a FastMCP server."""

    def __init__(self, mcp: FastMCP):
        self.mcp = mcp

    def register_resource(self, name: str, uri: str, descriptor: ResourceDescriptor, producer: ContentProducer):
        async def read() -> str:
            return await producer(uri)

        # tags and examples reach clients as the resource's _meta
        self.mcp.add_resource(FunctionResource(
            uri=uri,
            name=name,
            title=descriptor.title,
            description=descriptor.description,
            mime_type=descriptor.mime_type,
            meta={"tags": descriptor.tags, "examples": descriptor.examples},
            fn=read,
        ))


def publish_glossary(glossary: Iterable[GlossaryEntry], registrar) -> List[str]:
    """Register one resource per entry and return the registered URIs."""
    uris = []
    for entry in glossary:
        uri = resource_uri(entry.model)
        registrar.register_resource(resource_name(entry.model), uri, describe(entry), make_producer(entry))
        uris.append(uri)
    logger.info("Published %d glossary resources", len(uris))
    return uris
