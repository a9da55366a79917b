"""
Persistent storage for the normalized itinerary.

This module manages the file:

    data/travel_data.json

The JSON document is the hand-off to the itinerary viewer: a list of days,
each with its periods and timeline events (see tripsheet.model).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence

from tripsheet.model import Day, documents_to_dicts


def _default_itinerary_path() -> Path:
    """
    Return the default path of travel_data.json inside the package.

    Using a function instead of a constant makes testing easier,
    because tests can override the path.
    """
    base_dir = Path(__file__).resolve().parent
    return base_dir / "data" / "travel_data.json"


def write_itinerary(days: Sequence[Day], path: str | Path | None = None) -> int:
    """
    Write the itinerary as JSON and return the number of days written.

    Creates parent directories if needed.
    """
    out_path = Path(path) if path is not None else _default_itinerary_path()
    out_path.parent.mkdir(parents=True, exist_ok=True)

    payload = documents_to_dicts(list(days))
    out_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    return len(payload)


def load_itinerary(path: str | Path | None = None) -> list[dict[str, Any]]:
    """
    Load a previously written itinerary.

    Returns an empty list if the file does not exist or is invalid,
    so the viewer commands never crash on a missing sync.
    """
    in_path = Path(path) if path is not None else _default_itinerary_path()

    if not in_path.exists():
        return []

    try:
        data = json.loads(in_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError):
        return []

    if not isinstance(data, list):
        return []
    return [d for d in data if isinstance(d, dict)]
