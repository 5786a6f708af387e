#!/usr/bin/env python3
"""
JSON Utilities Module

Reading and writing of transaction exports and analysis reports. Output is
pretty-printed and strict: NaN and infinity are rejected so that every report
stays valid JSON for downstream consumers.
"""

import json
from pathlib import Path
from typing import Any


def to_serializable(data: Any) -> Any:
    """
    Convert result objects into plain JSON-compatible structures.

    Objects exposing to_dict() are converted with it; lists and dicts are
    converted recursively. Floats are passed through untouched.
    """
    if hasattr(data, "to_dict"):
        return data.to_dict()
    if isinstance(data, dict):
        return {key: to_serializable(value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [to_serializable(item) for item in data]
    return data


def write_json(filepath: str | Path, data: Any, sort_keys: bool = False) -> None:
    """
    Write data (or a report object) to a JSON file with standard pretty-printing.

    Args:
        filepath: Path to the JSON file
        data: Data or result object to write
        sort_keys: If True, sort dictionary keys (default: False)
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(to_serializable(data), f, indent=2, ensure_ascii=False, sort_keys=sort_keys, allow_nan=False)


def read_json(filepath: str | Path) -> Any:
    """
    Read data from a JSON file.

    Args:
        filepath: Path to the JSON file

    Returns:
        The parsed JSON data
    """
    with open(filepath, encoding="utf-8") as f:
        return json.load(f)


def format_json(data: Any, sort_keys: bool = False) -> str:
    """
    Format data (or a report object) as a pretty-printed JSON string.

    Args:
        data: Data or result object to format
        sort_keys: If True, sort dictionary keys (default: False)

    Returns:
        Pretty-printed JSON string
    """
    return json.dumps(to_serializable(data), indent=2, ensure_ascii=False, sort_keys=sort_keys, allow_nan=False)
