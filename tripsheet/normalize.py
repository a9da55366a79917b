"""
Normalization (rows -> itinerary document).

- flatten_rows():  one Record per data row
- merge_groups():  rows sharing a group id -> one primary + alternatives
- build_days():    Records -> Day -> Period -> TimelineEvent

Each pass is a pure function; itinerary_from_text() chains them.

Important rules (DO NOT CHANGE):
- rows with an empty date, or a date equal to the header's date label
  (a repeated header inside the export), are dropped
- the FIRST row of a group is the visible one
- one Day per date, one Period per label within a Day, source order kept
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from tripsheet.columns import COLUMNS, DATE, DEFAULT_PERIOD, LOCATION, HeaderIndex
from tripsheet.csvparse import parse_delimited
from tripsheet.maps import resolve_map_url
from tripsheet.model import Alternative, Day, MergedRecord, Period, Record, TimelineEvent

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pass 1: rows -> records
# ---------------------------------------------------------------------------


def _record_from_row(row: Sequence[str], index: HeaderIndex) -> Record:
    values: Dict[str, Optional[str]] = {
        name: index.get(row, label) for name, label in COLUMNS.items()
    }

    # Defaults for blank / placeholder cells
    values["period"] = values["period"] or DEFAULT_PERIOD
    if values["cost"] == "-":
        values["cost"] = None
    values["map_url"] = resolve_map_url(index.get(row, LOCATION))

    return Record(**values)


def flatten_rows(rows: Sequence[Sequence[str]]) -> List[Record]:
    """
    Map every data row (all rows after the header) to a Record.
    """
    if len(rows) < 2:
        return []

    index = HeaderIndex(rows[0])
    header_date = index.label(DATE)

    records: List[Record] = []
    for line_no, row in enumerate(rows[1:], start=2):
        date = index.get(row, DATE)
        if not date or date == header_date:
            logger.debug("skipping row %d (date=%r)", line_no, date)
            continue
        records.append(_record_from_row(row, index))

    return records


# ---------------------------------------------------------------------------
# Pass 2: group merge
# ---------------------------------------------------------------------------


def merge_groups(records: Sequence[Record]) -> List[MergedRecord]:
    """
    Fold rows that share a non-empty group id into the first row of the group.

    Later rows of a group do not get their own timeline slot; their transport
    fields are appended to the primary's alternatives in row order.
    """
    primaries: List[Record] = []
    alternatives: List[List[Alternative]] = []
    # group id -> position of its primary in `primaries`
    seen: Dict[str, int] = {}

    for record in records:
        gid = record.group_id
        if gid and gid in seen:
            alternatives[seen[gid]].append(Alternative.from_record(record))
            continue

        if gid:
            seen[gid] = len(primaries)
        primaries.append(record)
        alternatives.append([])

    return [
        MergedRecord(record=r, alternatives=tuple(alts))
        for r, alts in zip(primaries, alternatives)
    ]


# ---------------------------------------------------------------------------
# Pass 3: hierarchy
# ---------------------------------------------------------------------------


class _DayBuilder:
    """
    Collects the periods of one Day while records are folded in.
    """

    def __init__(self, date: str, day_of_week: str) -> None:
        self.date = date
        self.day_of_week = day_of_week
        # period label -> events, insertion order = first-seen order
        self.periods: Dict[str, List[TimelineEvent]] = {}

    def add(self, period: str, event: TimelineEvent) -> None:
        self.periods.setdefault(period, []).append(event)

    def build(self) -> Day:
        return Day(
            date=self.date,
            day_of_week=self.day_of_week,
            periods=tuple(
                Period(period=label, time_range="", timeline=tuple(events))
                for label, events in self.periods.items()
            ),
        )


def build_days(merged: Sequence[MergedRecord]) -> List[Day]:
    """
    Fold merged records into Days, each holding its Periods in order.

    A date that shows up again after other dates is merged into the Day
    created at its first appearance (and reported as a warning).
    """
    days: Dict[str, _DayBuilder] = {}
    current: Optional[str] = None

    for m in merged:
        r = m.record
        if r.date != current:
            if r.date in days:
                logger.warning("date %s appears again after other dates; merged into its first block", r.date)
            current = r.date

        day = days.get(r.date)
        if day is None:
            day = _DayBuilder(r.date, r.day_of_week)
            days[r.date] = day

        day.add(r.period, TimelineEvent.from_merged(m))

    return [d.build() for d in days.values()]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_itinerary(rows: Sequence[Sequence[str]]) -> List[Day]:
    """
    Run all three passes over parsed rows (header first).
    """
    return build_days(merge_groups(flatten_rows(rows)))


def itinerary_from_text(text: str, delimiter: str = ",") -> List[Day]:
    """
    Raw export text -> itinerary document.

    Empty or header-only input gives an empty itinerary instead of an error.
    """
    rows = parse_delimited(text, delimiter)
    days = build_itinerary(rows)
    logger.debug("parsed %d rows into %d days", len(rows), len(days))
    return days
