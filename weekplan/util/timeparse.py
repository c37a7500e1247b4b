# weekplan/util/timeparse.py
from __future__ import annotations

import datetime as dt
import re
from typing import Tuple

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_hhmm(s: str) -> Tuple[int, int]:
    m = _HHMM_RE.match(s.strip())
    if not m:
        raise ValueError(f"Invalid HH:MM: {s!r}")
    hh = int(m.group(1))
    mm = int(m.group(2))
    if not (0 <= hh <= 23 and 0 <= mm <= 59):
        raise ValueError(f"Invalid HH:MM: {s!r}")
    return hh, mm


def parse_date_yyyy_mm_dd(s: str) -> dt.date:
    return dt.datetime.strptime(s.strip(), "%Y-%m-%d").date()


def day_key(d: dt.date) -> str:
    """Calendar-date string used to index per-day task lists (yyyy-MM-dd)."""
    return d.strftime("%Y-%m-%d")


def parse_instant(s: str) -> dt.datetime:
    """Parse an ISO-8601 timestamp into a naive local datetime.

    Accepts naive values as written by this package, and "Z" / "+HH:MM"
    suffixed values as written by a browser's Date.toISOString(); aware
    values are converted to host local time.
    """
    raw = s.strip()
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    value = dt.datetime.fromisoformat(raw)
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value


def parse_day(s: str) -> dt.date:
    """Parse either a bare date or a full timestamp into a calendar date."""
    raw = s.strip()
    try:
        return parse_date_yyyy_mm_dd(raw)
    except ValueError:
        return parse_instant(raw).date()


def at_hour(d: dt.date, hour: int, minute: int = 0) -> dt.datetime:
    return dt.datetime(d.year, d.month, d.day, int(hour), int(minute))
