"""
Central data model definitions used across the project.

This module defines the canonical structure of itinerary records and of the
Day -> Period -> TimelineEvent document so that:
- the normalization passes and the JSON writer share the same field names
- the JSON keys consumed by the itinerary viewer are defined in one place
- nothing is mutated after a document has been built (all classes are frozen)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


# ---------------------------------------------------------------------------
# Flat records (one per sheet row)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Record:
    """
    Represents one itinerary row after column lookup.

    date / day_of_week / period / group_id are structural: they decide where
    the row ends up in the document and are not part of the timeline payload.
    """

    date: str
    day_of_week: str = ""
    period: str = ""
    group_id: str = ""
    time: str = ""
    type: str = ""
    city: str = ""
    event: str = ""
    description: str = ""
    transport_info: str = ""
    transport_type: str = ""
    payment: str = ""
    start: str = ""
    end: str = ""
    frequency: str = ""
    duration: str = ""
    cost: Optional[str] = None
    link: str = ""
    attraction_website: str = ""
    attraction_price: str = ""
    attraction_hours: str = ""
    attraction_intro: str = ""
    attraction_duration: str = ""
    special_notes: str = ""
    map_url: Optional[str] = None


@dataclass(frozen=True)
class Alternative:
    """
    Another way to do the same transport step (same group id, later row).
    """

    transport_type: str = ""
    payment: str = ""
    start: str = ""
    end: str = ""
    frequency: str = ""
    duration: str = ""
    cost: Optional[str] = None
    link: str = ""

    @classmethod
    def from_record(cls, record: Record) -> "Alternative":
        return cls(
            transport_type=record.transport_type,
            payment=record.payment,
            start=record.start,
            end=record.end,
            frequency=record.frequency,
            duration=record.duration,
            cost=record.cost,
            link=record.link,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "transportType": self.transport_type,
            "payment": self.payment,
            "start": self.start,
            "end": self.end,
            "transportFreq": self.frequency,
            "duration": self.duration,
            "cost": self.cost,
            "link": self.link,
        }


@dataclass(frozen=True)
class MergedRecord:
    """
    A primary record plus the alternatives folded into it.
    """

    record: Record
    alternatives: Tuple[Alternative, ...] = ()


# ---------------------------------------------------------------------------
# Document (Day -> Period -> TimelineEvent)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TimelineEvent:
    """
    One visible entry on a day's timeline.
    """

    time: str = ""
    type: str = ""
    city: str = ""
    event: str = ""
    description: str = ""
    transport_info: str = ""
    transport_type: str = ""
    payment: str = ""
    cost: Optional[str] = None
    link: str = ""
    map_url: Optional[str] = None
    start: str = ""
    end: str = ""
    duration: str = ""
    frequency: str = ""
    attraction_website: str = ""
    attraction_price: str = ""
    attraction_hours: str = ""
    attraction_intro: str = ""
    attraction_duration: str = ""
    special_notes: str = ""
    alternatives: Tuple[Alternative, ...] = ()

    @classmethod
    def from_merged(cls, merged: MergedRecord) -> "TimelineEvent":
        r = merged.record
        return cls(
            time=r.time,
            type=r.type,
            city=r.city,
            event=r.event,
            description=r.description,
            transport_info=r.transport_info,
            transport_type=r.transport_type,
            payment=r.payment,
            cost=r.cost,
            link=r.link,
            map_url=r.map_url,
            start=r.start,
            end=r.end,
            duration=r.duration,
            frequency=r.frequency,
            attraction_website=r.attraction_website,
            attraction_price=r.attraction_price,
            attraction_hours=r.attraction_hours,
            attraction_intro=r.attraction_intro,
            attraction_duration=r.attraction_duration,
            special_notes=r.special_notes,
            alternatives=merged.alternatives,
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "time": self.time,
            "type": self.type,
            "city": self.city,
            "event": self.event,
            "description": self.description,
            "transportInfo": self.transport_info,
            "transportType": self.transport_type,
            "payment": self.payment,
            "cost": self.cost,
            "link": self.link,
            "mapUrl": self.map_url,
            "start": self.start,
            "end": self.end,
            "duration": self.duration,
            "transportFreq": self.frequency,
            "attractionWebsite": self.attraction_website,
            "attractionPrice": self.attraction_price,
            "attractionHours": self.attraction_hours,
            "attractionIntro": self.attraction_intro,
            "attractionDuration": self.attraction_duration,
            "specialNotes": self.special_notes,
        }
        # only grouped steps carry the key at all
        if self.alternatives:
            out["alternatives"] = [a.to_dict() for a in self.alternatives]
        return out


@dataclass(frozen=True)
class Period:
    """
    A named part of the day (早上 / 下午 / 晚上 / 全日 ...).
    """

    period: str
    time_range: str = ""
    timeline: Tuple[TimelineEvent, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "period": self.period,
            "timeRange": self.time_range,
            "timeline": [e.to_dict() for e in self.timeline],
        }


@dataclass(frozen=True)
class Day:
    """
    Represents one calendar day of the trip.
    """

    date: str
    day_of_week: str = ""
    periods: Tuple[Period, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "dayOfWeek": self.day_of_week,
            "periods": [p.to_dict() for p in self.periods],
        }


def documents_to_dicts(days: List[Day]) -> List[Dict[str, Any]]:
    """
    Convert a whole itinerary to plain JSON-ready structures.
    """
    return [d.to_dict() for d in days]
