"""
Parsing (delimited text -> rows).

Spreadsheet exports (Google Sheets "publish to web" CSV/TSV) are read with a
small hand-written scanner instead of csv.reader, because the exports we get
are not always well-formed:

- a UTF-8 BOM may be present at the start
- quoted cells may span several lines
- a quote may be left open at the very end of the file

Important rules (DO NOT CHANGE):
- parse_delimited() never raises for any string input
- every field is stripped of surrounding whitespace
- blank lines do not produce rows
"""

from __future__ import annotations

import csv
import io
from typing import Iterable, List, Sequence

QUOTE = '"'
BOM = "\ufeff"


# ---------------------------------------------------------------------------
# Scanner (CORE LOGIC)
# ---------------------------------------------------------------------------


def parse_delimited(text: str, delimiter: str = ",") -> List[List[str]]:
    """
    Split raw export text into rows of string fields.
    """
    rows: List[List[str]] = []
    row: List[str] = []
    field: List[str] = []
    in_quote = False

    if text.startswith(BOM):
        text = text[1:]

    i = 0
    n = len(text)
    while i < n:
        c = text[i]

        if in_quote:
            if c == QUOTE and i + 1 < n and text[i + 1] == QUOTE:
                # "" inside a quoted cell is one literal quote
                field.append(QUOTE)
                i += 2
                continue
            if c == QUOTE:
                in_quote = False
            else:
                field.append(c)
        elif c == QUOTE:
            in_quote = True
        elif c == delimiter:
            row.append("".join(field).strip())
            field = []
        elif c == "\r":
            pass
        elif c == "\n":
            row.append("".join(field).strip())
            if row != [""]:
                rows.append(row)
            row = []
            field = []
        else:
            field.append(c)

        i += 1

    # Flush the last line (no trailing newline, or an unterminated quote)
    if field or row:
        row.append("".join(field).strip())
        if row != [""]:
            rows.append(row)

    return rows


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def format_delimited(rows: Iterable[Sequence[str]], delimiter: str = ",") -> str:
    """
    Write rows back to delimited text that parse_delimited() reads unchanged.
    """
    out = io.StringIO(newline="")
    # CRLF makes csv.writer quote cells holding a lone \r; the scanner drops bare CRs
    writer = csv.writer(out, delimiter=delimiter, quotechar=QUOTE, lineterminator="\r\n")
    for row in rows:
        writer.writerow(list(row))
    return out.getvalue()


def delimiter_for(source: str, sheet_format: str | None = None) -> str:
    """
    Pick the delimiter for a source path or export URL.

    An explicit format ("csv" / "tsv") wins; otherwise TSV is detected from a
    ".tsv" suffix or an "output=tsv" / "format=tsv" query parameter.
    """
    if sheet_format:
        return "\t" if sheet_format.strip().lower() == "tsv" else ","

    lowered = (source or "").strip().lower()
    if lowered.endswith(".tsv") or "output=tsv" in lowered or "format=tsv" in lowered:
        return "\t"
    return ","
