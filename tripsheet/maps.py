"""
Location -> embeddable map URL.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import quote

MAP_EMBED_URL = "https://maps.google.com/maps?q={query}&output=embed"

# "-" in the sheet means "not applicable"
_PLACEHOLDERS = {"", "-"}


def resolve_map_url(location: Optional[str]) -> Optional[str]:
    """
    Turn the sheet's location/navigation cell into a map URL.

    - empty, whitespace-only or "-" -> None (no map)
    - an absolute http(s) URL is kept as-is
    - anything else is used as a search query
    """
    if location is None:
        return None

    value = location.strip()
    if value in _PLACEHOLDERS:
        return None

    if value.lower().startswith(("http://", "https://")):
        return value

    return MAP_EMBED_URL.format(query=quote(value, safe=""))
