"""
CLI (Command Line Interface).

    tripsheet sync [--url URL] [--local PATH] [--out PATH] [--format csv|tsv]
    tripsheet convert <input> [--out PATH] [--format csv|tsv]
    tripsheet show [--data PATH] [--start YYYY-MM-DD] [--end YYYY-MM-DD] [--from-today]

Note:
- sync prefers the remote sheet (SHEET_URL) and falls back to the local copy
- all settings come from .env / the environment, flags override them
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table

from tripsheet.config import Settings, load_settings
from tripsheet.csvparse import delimiter_for
from tripsheet.normalize import itinerary_from_text
from tripsheet.overview import count_events, filter_days, main_city
from tripsheet.source import SourceError, load_source_text, read_local
from tripsheet.storage import load_itinerary, write_itinerary

EXIT_OK = 0
EXIT_FATAL = 1

console = Console()


def _write(text: str, delimiter: str, out_path: Path) -> int:
    """
    Transform export text and write travel_data.json.
    """
    days = itinerary_from_text(text, delimiter)
    n = write_itinerary(days, out_path)
    print(f"PROCESSED: {n} days.")
    return n


def _cmd_sync(args: argparse.Namespace, settings: Settings) -> int:
    """
    Fetch the sheet (remote, else local copy) and write the itinerary JSON.
    """
    sync = replace(
        settings,
        sheet_url=(args.url or settings.sheet_url or "").strip() or None,
        sheet_format=args.format or settings.sheet_format,
        local_path=Path(args.local) if args.local else settings.local_path,
    )
    out = Path(args.out) if args.out else sync.output_path

    print("--- Travel Planner Sync ---")
    try:
        text, origin = load_source_text(sync.sheet_url, sync.local_csv_path)
    except SourceError as e:
        print(f"FATAL: Data source unavailable. {e}")
        return EXIT_FATAL

    # same delimiter for remote text and the local mirror of it
    _write(text, sync.delimiter, out)

    if origin == "remote":
        print("SUCCESS: Remote sync complete.")
    return EXIT_OK


def _cmd_convert(args: argparse.Namespace, settings: Settings) -> int:
    """
    Transform a local CSV/TSV export.
    """
    src = Path(args.input)
    out = Path(args.out) if args.out else settings.output_path

    try:
        text = read_local(src)
    except SourceError as e:
        print(f"FATAL: {e}")
        return EXIT_FATAL

    _write(text, delimiter_for(str(src), args.format), out)
    return EXIT_OK


def _numbered(days: list[dict[str, Any]], shown: list[dict[str, Any]]) -> list[tuple[int, dict[str, Any]]]:
    """
    Pair each shown day with its number in the full itinerary (1-based).

    filter_days() returns the same dict objects, so identity is enough and
    two days with equal content still keep their own numbers.
    """
    number_by_id = {id(day): i for i, day in enumerate(days, start=1)}
    return [(number_by_id[id(day)], day) for day in shown]


def _cmd_show(args: argparse.Namespace, settings: Settings) -> int:
    """
    Print a one-line-per-day overview of the written itinerary.
    """
    data = Path(args.data) if args.data else settings.output_path
    days = load_itinerary(data)
    if not days:
        print(f"No itinerary data in {data}. Run 'tripsheet sync' first.")
        return EXIT_OK

    shown = filter_days(days, start=args.start, end=args.end, from_today=args.from_today)

    table = Table(title=f"Itinerary ({len(shown)} days)", box=box.SIMPLE_HEAVY)
    table.add_column("Day", justify="right")
    table.add_column("Date")
    table.add_column("Weekday")
    table.add_column("City")
    table.add_column("Events", justify="right")

    for n, day in _numbered(days, shown):
        table.add_row(
            str(n),
            str(day.get("date", "")),
            str(day.get("dayOfWeek", "")),
            main_city(day),
            str(count_events(day)),
        )

    console.print(table)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="tripsheet", description="Itinerary sheet -> JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--env-file", type=str, default=None, help="Path to .env (default: ./.env)")
    sub = parser.add_subparsers(dest="command", required=True)

    p_sync = sub.add_parser("sync", help="Fetch the sheet and write travel_data.json")
    p_sync.add_argument("--url", type=str, default=None, help="Export URL (overrides SHEET_URL)")
    p_sync.add_argument("--local", type=str, default=None, help="Local CSV/TSV copy used as fallback")
    p_sync.add_argument("--out", type=str, default=None, help="Output JSON path")
    p_sync.add_argument("--format", choices=["csv", "tsv"], default=None, help="Export format")

    p_convert = sub.add_parser("convert", help="Convert a local CSV/TSV file")
    p_convert.add_argument("input", type=str, help="Input file (e.g. data/template_v2.csv)")
    p_convert.add_argument("--out", type=str, default=None, help="Output JSON path")
    p_convert.add_argument("--format", choices=["csv", "tsv"], default=None, help="Input format")

    p_show = sub.add_parser("show", help="Show an overview of the itinerary")
    p_show.add_argument("--data", type=str, default=None, help="Itinerary JSON path")
    p_show.add_argument("--start", type=str, default=None, help="First date (YYYY-MM-DD)")
    p_show.add_argument("--end", type=str, default=None, help="Last date (YYYY-MM-DD)")
    p_show.add_argument("--from-today", action="store_true", help="Hide days before today")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = load_settings(args.env_file)

    if args.command == "sync":
        raise SystemExit(_cmd_sync(args, settings))
    if args.command == "convert":
        raise SystemExit(_cmd_convert(args, settings))
    if args.command == "show":
        raise SystemExit(_cmd_show(args, settings))

    raise SystemExit(2)
