import json
from pathlib import Path
from typing import List, Union

from odx_mcp.glossary import GlossaryEntry, validate_catalog


def load_glossary_file(path: Union[str, Path]) -> List[GlossaryEntry]:
    """Load a glossary catalog (a JSON list of entry objects) from disk."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Glossary file not found: {p}")
    data = json.loads(p.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{p.name} must contain a JSON list of glossary entries")
    return validate_catalog(GlossaryEntry.from_dict(item) for item in data)


def dump_glossary_file(entries: List[GlossaryEntry], path: Union[str, Path]) -> Path:
    p = Path(path)
    p.write_text(json.dumps([e.to_dict() for e in entries], indent=2, ensure_ascii=False), encoding="utf-8")
    return p
