# timelane/util/dates.py
from __future__ import annotations

import datetime as dt
import math
import re

_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def parse_iso_date(s: str) -> dt.date:
    """Parse a calendar date in YYYY-MM-DD form.

    A trailing time component ("2024-03-01T00:00:00") is tolerated and dropped,
    since some exporters write midnight timestamps for whole-day items.
    """
    if isinstance(s, dt.datetime):
        return s.date()
    if isinstance(s, dt.date):
        return s
    ss = str(s).strip()
    if "T" in ss:
        ss = ss.split("T", 1)[0]
    m = _ISO_DATE_RE.match(ss)
    if not m:
        raise ValueError(f"Invalid YYYY-MM-DD date: {s!r}")
    return dt.date(int(m.group(1)), int(m.group(2)), int(m.group(3)))


def format_iso_date(d: dt.date) -> str:
    return d.isoformat()


def add_days(d: dt.date, days: int) -> dt.date:
    return d + dt.timedelta(days=int(days))


def diff_days(later: dt.date, earlier: dt.date) -> int:
    """Whole days from `earlier` to `later` (negative when `later` is earlier)."""
    return (later - earlier).days


def round_half_up(x: float) -> int:
    # Half-integers round toward +inf: -2.5 -> -2, 2.5 -> 3.
    return int(math.floor(x + 0.5))


def format_date(d: dt.date, fmt: str) -> str:
    """Render `d` with one of the axis label tokens.

    Supported tokens: "M", "MMM", "MMMM", "d", "MMM d", "MMM d, yyyy",
    "MMMM yyyy". Month names are English regardless of the process locale so
    labels are stable across machines.
    """
    month = _MONTHS[d.month - 1]
    if fmt == "M":
        return str(d.month)
    if fmt == "MMM":
        return month[:3]
    if fmt == "MMMM":
        return month
    if fmt == "d":
        return str(d.day)
    if fmt == "MMM d":
        return f"{month[:3]} {d.day}"
    if fmt == "MMM d, yyyy":
        return f"{month[:3]} {d.day}, {d.year:04d}"
    if fmt == "MMMM yyyy":
        return f"{month} {d.year:04d}"
    raise ValueError(f"Unsupported date format token: {fmt!r}")


def format_span_label(start: dt.date, end: dt.date) -> str:
    """Item caption, e.g. "Mar 1 - Mar 5, 2024"."""
    return f"{format_date(start, 'MMM d')} - {format_date(end, 'MMM d, yyyy')}"
