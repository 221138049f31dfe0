"""
Document record loader.

Records come from the upstream scrape/geocode stage as either a JSON file (a list of
objects, or `{"documents": [...]}`) or a CSV file with a header row. We validate them into
typed Pydantic models so clustering code can assume a consistent shape.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter

from geozones.domain.models import DocumentRecord


_DOCUMENTS_ADAPTER = TypeAdapter(list[DocumentRecord])

# Exported document CSVs name `sale_date` as `instrument_date`.
_CSV_COLUMN_ALIASES = {"instrument_date": "sale_date"}


def _normalize_row(row: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in row.items():
        if key is None:
            continue
        name = key.strip()
        alias = _CSV_COLUMN_ALIASES.get(name)
        if alias and alias not in row:
            name = alias
        if isinstance(value, str):
            value = value.strip() or None
        out[name] = value
    return out


def parse_documents_payload(payload: Any) -> list[DocumentRecord]:
    """Validate an already-decoded JSON payload into DocumentRecords."""
    if isinstance(payload, dict):
        payload = payload.get("documents")
    if not isinstance(payload, list):
        raise ValueError("Expected a list of documents or an object with a 'documents' list.")
    rows = [_normalize_row(r) if isinstance(r, dict) else r for r in payload]
    return _DOCUMENTS_ADAPTER.validate_python(rows)


def load_documents_json(path: str | Path) -> list[DocumentRecord]:
    resolved = Path(path).expanduser().resolve()
    payload = json.loads(resolved.read_text(encoding="utf-8"))
    return parse_documents_payload(payload)


def load_documents_csv(path: str | Path) -> list[DocumentRecord]:
    resolved = Path(path).expanduser().resolve()
    with resolved.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        if not reader.fieldnames:
            return []
        rows = [_normalize_row(r) for r in reader]
    return _DOCUMENTS_ADAPTER.validate_python(rows)


def load_documents(path: str | Path) -> list[DocumentRecord]:
    """Load records from `.json` or `.csv` (picked by file extension)."""
    suffix = Path(path).suffix.lower()
    if suffix == ".json":
        return load_documents_json(path)
    if suffix == ".csv":
        return load_documents_csv(path)
    raise ValueError(f"Unsupported record file type '{suffix}' for {path}; expected .json or .csv")
