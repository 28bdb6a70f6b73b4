"""
Glossary of Odoo models.

A glossary entry maps the business terms a user (or an LLM) would use,
such as "customer" or "vendor", onto a technical Odoo model such as
``res.partner``, together with the actions, hints and field metadata
that help the model pick the right query.

Entries with ``fields_source="dynamic"`` get their ``fields`` from a live
``fields_get`` call at startup. Each of those calls is one RPC that
serializes every field definition of the model, so keep dynamic loading
to the models where field metadata actually matters, or freeze a
snapshot with ``odx-glossary-snapshot``.
"""

import asyncio
import copy
import dataclasses
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, TypeVar

logger = logging.getLogger(__name__)

# fields_get labels are rendered in this timezone so results don't depend on the caller
FIELDS_TZ = "UTC"

T = TypeVar("T")


class FieldsSource(str, Enum):
    STATIC = "static"
    DYNAMIC = "dynamic"


@dataclass
class GlossaryEntry:
    model: str
    aliases: List[str] = field(default_factory=list)
    category: Optional[str] = None
    description: Optional[str] = None
    extra_description: Optional[str] = None
    available_actions: List[str] = field(default_factory=list)
    model_specific_actions: Dict[str, Any] = field(default_factory=dict)
    aliases_many2one_fields: List[str] = field(default_factory=list)
    fields_source: FieldsSource = FieldsSource.STATIC
    fields: Dict[str, Any] = field(default_factory=dict)
    examples: List[Any] = field(default_factory=list)
    hints: List[str] = field(default_factory=list)

    def __post_init__(self):
        if not isinstance(self.model, str) or not self.model.strip():
            raise ValueError("glossary entry needs a non-empty 'model'")
        self.fields_source = FieldsSource(self.fields_source)
        if self.fields is None:
            self.fields = {}

    @property
    def is_dynamic(self) -> bool:
        return self.fields_source is FieldsSource.DYNAMIC

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GlossaryEntry":
        if not isinstance(data, dict):
            raise ValueError(f"glossary entry must be an object, got {type(data).__name__}")
        if not data.get("model"):
            raise ValueError("glossary entry needs a non-empty 'model'")
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"glossary entry {data.get('model')!r} has unknown keys: {', '.join(unknown)}")
        # JSON null means "not given"
        return cls(**{k: v for k, v in data.items() if v is not None})

    def to_dict(self) -> Dict[str, Any]:
        out = dataclasses.asdict(self)
        out["fields_source"] = self.fields_source.value
        return out


@dataclass
class EnrichmentFailure:
    component: str
    subject: str
    error: str


def validate_catalog(glossary: Iterable[GlossaryEntry]) -> List[GlossaryEntry]:
    """Return the catalog as a list, raising ValueError on duplicate models."""
    entries = list(glossary)
    seen = set()
    for entry in entries:
        if entry.model in seen:
            raise ValueError(f"duplicate glossary model: {entry.model}")
        seen.add(entry.model)
    return entries


async def isolate_and_degrade(
    operation: Callable[[], Awaitable[T]],
    fallback: T,
    *,
    component: str,
    subject: str,
    failures: Optional[List[EnrichmentFailure]] = None,
) -> T:
    """Run ``operation``; on any error log it and return ``fallback`` instead."""
    try:
        return await operation()
    except Exception as e:
        logger.error("%s failed for %s: %s", component, subject, e)
        if failures is not None:
            failures.append(EnrichmentFailure(component, subject, f"{type(e).__name__}: {e}"))
        return fallback


async def load_glossary(
    glossary: Iterable[GlossaryEntry],
    client,
    *,
    max_concurrency: Optional[int] = None,
    failures: Optional[List[EnrichmentFailure]] = None,
) -> List[GlossaryEntry]:
    """
    Enrich dynamic entries with live ``fields_get`` metadata.

    Returns new entries in input order; the given entries are not modified.
    A failed fetch leaves that entry with empty ``fields`` and never stops
    the others from loading.
    """
    entries = list(glossary)
    limit = asyncio.Semaphore(max_concurrency) if max_concurrency else None

    async def fetch_fields(model: str) -> Dict[str, Any]:
        if limit is None:
            res = await client.fields_get(model, {"context": {"tz": FIELDS_TZ}})
        else:
            async with limit:
                res = await client.fields_get(model, {"context": {"tz": FIELDS_TZ}})
        result = res.get("result") if isinstance(res, dict) else None
        return result if isinstance(result, dict) else {}

    async def enrich(entry: GlossaryEntry) -> GlossaryEntry:
        copied = copy.deepcopy(entry)
        if not entry.is_dynamic:
            return copied
        copied.fields = await isolate_and_degrade(
            lambda: fetch_fields(entry.model),
            {},
            component="glossary.fields_get",
            subject=entry.model,
            failures=failures,
        )
        return copied

    enriched = await asyncio.gather(*(enrich(e) for e in entries))

    dynamic = sum(1 for e in entries if e.is_dynamic)
    empty = sum(1 for e in enriched if e.is_dynamic and not e.fields)
    logger.info("Loaded glossary: %d entries, %d dynamic, %d without fields", len(entries), dynamic, empty)
    return list(enriched)
