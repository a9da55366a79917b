"""
Overview helpers for written itineraries.

These work on the JSON dicts (as loaded by tripsheet.storage), the same shape
the itinerary viewer consumes.
"""

from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Any, Optional


def _iso(day_date: str) -> str:
    # 2026/03/10 -> 2026-03-10
    return day_date.strip().replace("/", "-")


def _events(day: dict[str, Any]) -> list[dict[str, Any]]:
    out: list[dict[str, Any]] = []
    for p in day.get("periods") or []:
        out.extend(p.get("timeline") or [])
    return out


def count_events(day: dict[str, Any]) -> int:
    return len(_events(day))


def main_city(day: dict[str, Any]) -> str:
    """
    Most frequent city of the day ("" if no event names a city).

    Ties go to the city seen first.
    """
    cities = Counter()
    for ev in _events(day):
        city = str(ev.get("city") or "").strip()
        if city:
            cities[city] += 1

    if not cities:
        return ""
    # Counter keeps insertion order, max() returns the first maximal key
    return max(cities, key=lambda c: cities[c])


def filter_days(
    days: list[dict[str, Any]],
    start: Optional[str] = None,
    end: Optional[str] = None,
    from_today: bool = False,
    today: Optional[date] = None,
) -> list[dict[str, Any]]:
    """
    Keep days whose date lies within [start, end] (ISO "YYYY-MM-DD", inclusive).

    from_today additionally drops days before today.
    """
    today_str = (today or date.today()).isoformat()

    out: list[dict[str, Any]] = []
    for day in days:
        d = _iso(str(day.get("date", "")))
        if from_today and d < today_str:
            continue
        if start and d < start:
            continue
        if end and d > end:
            continue
        out.append(day)
    return out
