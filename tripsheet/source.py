"""
Sheet export source (remote download with a local fallback copy).

Also runnable on its own to just download the export:

    python -m tripsheet.source <url> <out-file> [--timeout SECONDS]
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Tuple

import requests


logger = logging.getLogger(__name__)

# A real export is always longer than this; shorter bodies are usually an
# access-denied or sign-in page.
MIN_BODY_LENGTH = 100


class SourceError(Exception):
    """Raised when the itinerary text cannot be obtained."""


# ---------------------------------------------------------------------------
# Core logic
# ---------------------------------------------------------------------------


def fetch_remote(url: str, timeout: float = 30) -> str:
    """
    Download the published sheet export (redirects are followed).
    """
    resp = requests.get(url, timeout=timeout)
    resp.raise_for_status()

    # Sheets exports are UTF-8 but often come without a charset header
    resp.encoding = "utf-8"
    body = resp.text

    if len(body) < MIN_BODY_LENGTH:
        raise SourceError("received data too short (potential access denied)")
    return body


def read_local(path: Path) -> str:
    """
    Read the local copy of the export.
    """
    if not path.exists():
        raise SourceError(f"local file not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceError(f"cannot read {path}: {e}") from e


def load_source_text(url: Optional[str], local_path: Path, timeout: float = 30) -> Tuple[str, str]:
    """
    Get the raw export text, preferring the remote sheet.

    Returns (text, origin) where origin is "remote" or "local".
    A successful download is mirrored to local_path so the next run still
    works offline.
    """
    if url:
        try:
            text = fetch_remote(url, timeout=timeout)
        except (requests.RequestException, SourceError) as e:
            print(f"Remote sync failed: {e}")
            logger.warning("remote fetch of %s failed, falling back to %s", url, local_path)
        else:
            try:
                local_path.parent.mkdir(parents=True, exist_ok=True)
                local_path.write_text(text, encoding="utf-8")
            except OSError as e:
                # the download is still usable, only the offline copy is stale
                logger.warning("could not mirror export to %s: %s", local_path, e)
            return text, "remote"
    else:
        print("SHEET_URL not set. Skipping remote fetch.")

    print("Using local fallback...")
    return read_local(local_path), "local"


# ---------------------------------------------------------------------------
# CLI entry
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tripsheet.source", description="Download the itinerary sheet export")
    p.add_argument("url", type=str, help="Published CSV/TSV export URL")
    p.add_argument("out", type=Path, help="Where to store the downloaded text")
    p.add_argument("--timeout", type=float, default=30, help="Request timeout in seconds")
    return p


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    text = fetch_remote(args.url.strip(), timeout=args.timeout)
    args.out.parent.mkdir(parents=True, exist_ok=True)
    args.out.write_text(text, encoding="utf-8")
    print(f"Saved {len(text)} characters to {args.out}")


if __name__ == "__main__":
    main()
