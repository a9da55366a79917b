"""
Runtime settings (data source location, data directory).

Values come from the environment, after loading a .env file with
python-dotenv. Existing environment variables are not overwritten.

    SHEET_URL           published CSV/TSV export of the itinerary sheet
    TRIPSHEET_DATA_DIR  directory for template_v2.csv / travel_data.json
    SHEET_FORMAT        "csv" or "tsv" (default: guessed from the URL/path)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from tripsheet.csvparse import delimiter_for

PACKAGE_DIR = Path(__file__).resolve().parent

OUTPUT_NAME = "travel_data.json"
LOCAL_CSV_NAME = "template_v2.csv"


@dataclass(frozen=True)
class Settings:
    sheet_url: Optional[str]
    data_dir: Path
    sheet_format: Optional[str] = None
    # overrides data_dir / template_v2.csv (sync --local)
    local_path: Optional[Path] = None

    @property
    def output_path(self) -> Path:
        return self.data_dir / OUTPUT_NAME

    @property
    def local_csv_path(self) -> Path:
        if self.local_path is not None:
            return self.local_path
        return self.data_dir / LOCAL_CSV_NAME

    @property
    def delimiter(self) -> str:
        # the local copy mirrors the remote sheet, so the URL decides when set
        return delimiter_for(self.sheet_url or str(self.local_csv_path), self.sheet_format)


def load_settings(env_file: str | Path | None = None) -> Settings:
    """
    Load .env (if present) and build Settings from the environment.
    """
    env_path = Path(env_file) if env_file is not None else Path(".env")
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)

    sheet_url = (os.getenv("SHEET_URL") or "").strip() or None
    data_dir = (os.getenv("TRIPSHEET_DATA_DIR") or "").strip()
    sheet_format = (os.getenv("SHEET_FORMAT") or "").strip().lower() or None

    return Settings(
        sheet_url=sheet_url,
        data_dir=Path(data_dir) if data_dir else PACKAGE_DIR / "data",
        sheet_format=sheet_format,
    )
