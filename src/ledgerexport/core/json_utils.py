#!/usr/bin/env python3
"""
JSON Utilities Module

Reading and writing of the JSON documents the exporter deals with: cache
files, JSON mapping files and the REST bridge's response envelopes.
"""

import json
from pathlib import Path
from typing import Any


def write_json(filepath: str | Path, data: Any) -> Path:
    """
    Write a pretty-printed UTF-8 JSON document, creating parent directories.

    Returns:
        The path written to
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write("\n")
    return filepath


def read_json(filepath: str | Path) -> Any:
    """
    Parse a UTF-8 JSON document.

    Raises:
        ValueError: If the file is not valid JSON (json.JSONDecodeError)
    """
    with open(filepath, encoding="utf-8") as f:
        return json.load(f)


def unwrap_data_envelope(payload: Any) -> Any:
    """Return payload["data"] for {"data": ...} envelopes, else the payload itself."""
    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload
