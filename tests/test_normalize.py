"""
Unit tests for the normalization passes (rows -> records -> merged -> days).

Rules covered here:
- stray header rows and rows without a date are dropped
- the first row of a group id is the visible entry, later rows are alternatives
- one Day per date, one Period per label within a day, row order kept
"""

import unittest

from tripsheet.model import MergedRecord, Record
from tripsheet.normalize import build_days, build_itinerary, flatten_rows, itinerary_from_text, merge_groups


HEADER = ["日期", "星期", "時段", "群組ID", "時間", "類型", "活動標題", "交通方式", "費用", "地點/導航"]


def _row(date, period="", gid="", time="", type_="", event="", transport="", cost="", location=""):
    return [date, "二", period, gid, time, type_, event, transport, cost, location]


class TestFlattenRows(unittest.TestCase):
    def test_less_than_two_rows_is_empty(self) -> None:
        self.assertEqual(flatten_rows([]), [])
        self.assertEqual(flatten_rows([HEADER]), [])

    def test_skips_empty_date_and_repeated_header(self) -> None:
        rows = [HEADER, _row("2026/03/10", event="A"), _row("", event="B"), list(HEADER), _row("2026/03/10", event="C")]
        records = flatten_rows(rows)
        self.assertEqual([r.event for r in records], ["A", "C"])

    def test_defaults(self) -> None:
        rec = flatten_rows([HEADER, _row("2026/03/10", event="A", cost="-", location="-")])[0]
        self.assertEqual(rec.period, "全日")
        self.assertEqual(rec.group_id, "")
        self.assertIsNone(rec.cost)
        self.assertIsNone(rec.map_url)
        # columns missing from the header are empty strings
        self.assertEqual(rec.city, "")
        self.assertEqual(rec.special_notes, "")

    def test_values_are_read_by_label(self) -> None:
        rec = flatten_rows([HEADER, _row("2026/03/10", "早上", "G1", "09:00", "交通", "去機場", "JR", "¥1,500", "Tokyo Station")])[0]
        self.assertEqual(rec.date, "2026/03/10")
        self.assertEqual(rec.day_of_week, "二")
        self.assertEqual(rec.period, "早上")
        self.assertEqual(rec.group_id, "G1")
        self.assertEqual(rec.time, "09:00")
        self.assertEqual(rec.type, "交通")
        self.assertEqual(rec.transport_type, "JR")
        self.assertEqual(rec.cost, "¥1,500")
        self.assertIn("Tokyo%20Station", rec.map_url or "")


class TestMergeGroups(unittest.TestCase):
    def test_first_record_is_primary(self) -> None:
        records = [
            Record(date="d1", group_id="G", event="bus", transport_type="Bus"),
            Record(date="d1", event="lunch"),
            Record(date="d1", group_id="G", event="train", transport_type="Train"),
            Record(date="d1", group_id="G", event="taxi", transport_type="Taxi"),
        ]
        merged = merge_groups(records)
        self.assertEqual([m.record.event for m in merged], ["bus", "lunch"])
        self.assertEqual([a.transport_type for a in merged[0].alternatives], ["Train", "Taxi"])
        self.assertEqual(merged[1].alternatives, ())

    def test_ungrouped_records_are_never_merged(self) -> None:
        records = [Record(date="d1", event="a"), Record(date="d1", event="b")]
        self.assertEqual(len(merge_groups(records)), 2)

    def test_no_two_primaries_share_a_group(self) -> None:
        records = [
            Record(date="d1", group_id="A", event="a1"),
            Record(date="d1", group_id="B", event="b1"),
            Record(date="d2", group_id="A", event="a2", start="X"),
            Record(date="d2", group_id="B", event="b2", start="Y"),
        ]
        merged = merge_groups(records)
        gids = [m.record.group_id for m in merged]
        self.assertEqual(gids, ["A", "B"])
        self.assertEqual(merged[0].alternatives[0].start, "X")
        self.assertEqual(merged[1].alternatives[0].start, "Y")


class TestBuildDays(unittest.TestCase):
    def test_periods_merge_within_day(self) -> None:
        merged = [
            MergedRecord(Record(date="d1", period="早上", event="a")),
            MergedRecord(Record(date="d1", period="下午", event="b")),
            MergedRecord(Record(date="d1", period="早上", event="c")),
        ]
        days = build_days(merged)
        self.assertEqual(len(days), 1)
        self.assertEqual([p.period for p in days[0].periods], ["早上", "下午"])
        self.assertEqual([e.event for e in days[0].periods[0].timeline], ["a", "c"])
        self.assertEqual(days[0].periods[0].time_range, "")

    def test_non_adjacent_date_is_merged_and_reported(self) -> None:
        merged = [
            MergedRecord(Record(date="d1", day_of_week="一", period="早上", event="a")),
            MergedRecord(Record(date="d2", period="早上", event="b")),
            MergedRecord(Record(date="d1", period="晚上", event="c")),
        ]
        with self.assertLogs("tripsheet.normalize", level="WARNING"):
            days = build_days(merged)
        self.assertEqual([d.date for d in days], ["d1", "d2"])
        self.assertEqual(days[0].day_of_week, "一")
        self.assertEqual([p.period for p in days[0].periods], ["早上", "晚上"])

    def test_structural_fields_not_in_output(self) -> None:
        days = build_days([MergedRecord(Record(date="d1", group_id="G", period="早上", event="a"))])
        ev = days[0].to_dict()["periods"][0]["timeline"][0]
        for key in ("date", "dayOfWeek", "period", "groupId", "group_id"):
            self.assertNotIn(key, ev)
        self.assertNotIn("alternatives", ev)


class TestEndToEnd(unittest.TestCase):
    def test_same_period_two_rows(self) -> None:
        text = "日期\t時段\t時間\t活動標題\n2026/03/10\t早上\t09:00\t築地\n2026/03/10\t早上\t11:00\t銀座\n"
        days = itinerary_from_text(text, "\t")
        self.assertEqual(len(days), 1)
        self.assertEqual(days[0].date, "2026/03/10")
        self.assertEqual(len(days[0].periods), 1)
        period = days[0].periods[0]
        self.assertEqual(period.period, "早上")
        self.assertEqual([e.event for e in period.timeline], ["築地", "銀座"])

    def test_grouped_transport_rows(self) -> None:
        rows = [
            HEADER,
            _row("2026/03/10", "早上", "T1", "08:00", "交通", "去京都", "新幹線", "¥14,170"),
            _row("2026/03/10", "早上", "T1", "08:00", "交通", "去京都", "高速巴士", "¥5,000"),
        ]
        days = build_itinerary(rows)
        timeline = days[0].to_dict()["periods"][0]["timeline"]
        self.assertEqual(len(timeline), 1)
        self.assertEqual(timeline[0]["transportType"], "新幹線")
        self.assertEqual(len(timeline[0]["alternatives"]), 1)
        self.assertEqual(timeline[0]["alternatives"][0]["transportType"], "高速巴士")
        self.assertEqual(timeline[0]["alternatives"][0]["cost"], "¥5,000")

    def test_empty_text_is_empty_itinerary(self) -> None:
        self.assertEqual(itinerary_from_text(""), [])
        self.assertEqual(itinerary_from_text("日期,時段\n"), [])

    def test_document_keys(self) -> None:
        text = "日期,星期,時段,活動標題\n2026/03/10,二,,抵達\n"
        doc = [d.to_dict() for d in itinerary_from_text(text)]
        self.assertEqual(doc[0]["date"], "2026/03/10")
        self.assertEqual(doc[0]["dayOfWeek"], "二")
        self.assertEqual(doc[0]["periods"][0]["period"], "全日")
        self.assertEqual(doc[0]["periods"][0]["timeRange"], "")
        ev = doc[0]["periods"][0]["timeline"][0]
        self.assertEqual(ev["event"], "抵達")
        self.assertIsNone(ev["mapUrl"])
        self.assertEqual(ev["cost"], "")


if __name__ == "__main__":
    unittest.main()
