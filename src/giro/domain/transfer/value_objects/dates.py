"""Date conversion between ISO (``YYYY-MM-DD``) and German display format.

The display format is ``DD.MM.YYYY``; single-digit day and month
(``D.M.YYYY``) are accepted when parsing typed input.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Optional

from giro.domain.shared.time import today_local

ISO_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
DISPLAY_DATE_PATTERN = re.compile(r"^(\d{1,2})\.(\d{1,2})\.(\d{4})$")


def _parse_iso(iso_date: str) -> Optional[date]:
    match = ISO_DATE_PATTERN.match(iso_date.strip()) if iso_date else None
    if not match:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def iso_today() -> str:
    """Return today's local date as zero-padded ISO text."""
    return today_local().isoformat()


def iso_to_local_display(iso_date: str) -> str:
    """Convert ``2025-04-30`` to ``30.04.2025``.

    Returns an empty string for empty or unparsable input.
    """
    parsed = _parse_iso(iso_date)
    if parsed is None:
        return ""
    return parsed.strftime("%d.%m.%Y")


def local_display_to_iso(text: str) -> Optional[str]:
    """Convert ``30.04.2025`` (or ``1.5.2025``) to ISO text.

    Returns None when the text is malformed or names a day that does not
    exist, e.g. ``31.04.2025`` is rejected rather than rolled over to May 1st.
    """
    if not text:
        return None

    match = DISPLAY_DATE_PATTERN.match(text.strip())
    if not match:
        return None

    day, month, year = (int(part) for part in match.groups())
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None


def is_future_or_today(iso_date: str, today: Optional[date] = None) -> bool:
    """Check that an ISO date is today or later.

    Comparison is by calendar day only. Unparsable input is never valid.
    """
    parsed = _parse_iso(iso_date)
    if parsed is None:
        return False
    return parsed >= (today or today_local())
