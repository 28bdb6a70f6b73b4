#!/usr/bin/env python3
"""
snapshot.py - freeze dynamic glossary fields to disk

Runs fields_get once for every dynamic entry and writes a glossary where
those entries become static, so server startups stop paying one RPC per
model. Entries whose fetch failed stay dynamic and are retried at the
next start.

  odx-glossary-snapshot --glossary glossary.json --out glossary.frozen.json
"""

import argparse
import asyncio
import sys
from typing import List

from odx_mcp.client import OdxProxyClient
from odx_mcp.config import load_config
from odx_mcp.glossary import EnrichmentFailure, FieldsSource, GlossaryEntry, load_glossary
from odx_mcp.glossary_loader import dump_glossary_file, load_glossary_file
from odx_mcp.server import configure_logging


async def build_snapshot(entries: List[GlossaryEntry], client, failures: List[EnrichmentFailure] = None):
    failures = [] if failures is None else failures
    enriched = await load_glossary(entries, client, failures=failures)
    failed = {f.subject for f in failures}
    for entry in enriched:
        if entry.is_dynamic and entry.model not in failed:
            entry.fields_source = FieldsSource.STATIC
    return enriched


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Freeze dynamic glossary field metadata into a static glossary file")
    parser.add_argument("--glossary", required=True, help="input glossary JSON")
    parser.add_argument("--out", required=True, help="where to write the frozen glossary")
    args = parser.parse_args(argv)

    settings = load_config()
    configure_logging(settings.log_level)

    entries = load_glossary_file(args.glossary)
    client = OdxProxyClient(settings.client, timeout=settings.timeout)
    failures: List[EnrichmentFailure] = []
    frozen = asyncio.run(build_snapshot(entries, client, failures))
    out = dump_glossary_file(frozen, args.out)

    print("✔ glossary snapshot written")
    print("→ File:", out)
    print("→ Entries:", len(frozen))
    if failures:
        print("→ Still dynamic (fetch failed):", ", ".join(f.subject for f in failures))
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
