"""
Spreadsheet column labels and tolerant field lookup.

The itinerary sheet is edited by hand, so columns get reordered, added or
removed. Every lookup goes through HeaderIndex.get(), which returns "" instead
of failing when a column (or a cell at the end of a short row) is missing.
"""

from __future__ import annotations

from typing import Dict, List, Sequence


# ---------------------------------------------------------------------------
# Column table (record attribute -> header label)
# ---------------------------------------------------------------------------

DATE = "日期"
DAY_OF_WEEK = "星期"
PERIOD = "時段"
GROUP_ID = "群組ID"
LOCATION = "地點/導航"

COLUMNS: Dict[str, str] = {
    "date": DATE,
    "day_of_week": DAY_OF_WEEK,
    "period": PERIOD,
    "group_id": GROUP_ID,
    "time": "時間",
    "type": "類型",
    "city": "城市",
    "event": "活動標題",
    "description": "內容詳情",
    "transport_info": "交通/票價資訊",
    "transport_type": "交通方式",
    "payment": "支付方式",
    "start": "起始站",
    "end": "終點站",
    "frequency": "班次頻率/時刻資訊",
    "duration": "移動時間",
    "cost": "費用",
    "link": "相關連結(官網/時刻表)",
    "attraction_website": "景點官網",
    "attraction_price": "景點票價 (JPY)",
    "attraction_hours": "營業時間/狀態",
    "attraction_intro": "景點簡介",
    "attraction_duration": "景點建議停留時間",
    "special_notes": "景點特殊狀況",
}

# Label used when a row has no period
DEFAULT_PERIOD = "全日"


class HeaderIndex:
    """
    Header label -> column position, built once from the header row.
    """

    def __init__(self, header: Sequence[str]) -> None:
        self.header: List[str] = list(header)
        # later duplicates overwrite earlier ones
        self._index: Dict[str, int] = {label: i for i, label in enumerate(self.header)}

    def __contains__(self, column: str) -> bool:
        return column in self._index

    def get(self, row: Sequence[str], column: str) -> str:
        """
        Return the row's value for a column label, or "" if there is none.
        """
        i = self._index.get(column)
        if i is None or i >= len(row):
            return ""
        return row[i] or ""

    def label(self, column: str) -> str:
        """
        Return the header's own text for a column ("" if absent).
        """
        return self.get(self.header, column)
