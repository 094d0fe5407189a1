# timelane/axis.py
"""Axis ticks and month dividers.

Pure functions of (start_date, total_days, day_width) so a renderer can redraw
the axis without recomputing lanes or geometry.
"""

from __future__ import annotations

import datetime as dt
import math
from typing import List

from .model import MonthDivider, Tick
from .util.dates import add_days, format_date


def tick_interval(day_width: float) -> int:
    """Days between ticks; coarser as days get narrower so labels never collide."""
    if day_width < 3:
        return 30
    if day_width < 5:
        return 21
    if day_width < 10:
        return 14
    if day_width < 20:
        return 7
    if day_width < 40:
        return 3
    return 1


def tick_label_format(day_width: float, interval: int) -> str:
    if day_width < 3:
        return "M"
    if day_width < 5:
        return "MMM"
    if interval >= 14:
        return "MMM"
    if interval >= 3:
        return "MMM d"
    if day_width < 60:
        return "d"
    return "MMM d, yyyy"


def month_label_format(day_width: float) -> str:
    if day_width < 3:
        return "M"
    if day_width < 20:
        return "MMM"
    return "MMMM yyyy"


def show_month_labels(day_width: float) -> bool:
    return day_width >= 2


def show_date_ticks(day_width: float) -> bool:
    return day_width >= 1.5


def date_ticks(start_date: dt.date, total_days: int, day_width: float) -> List[Tick]:
    interval = tick_interval(day_width)
    fmt = tick_label_format(day_width, interval)
    count = int(math.ceil(total_days / interval)) if total_days > 0 else 0

    out: List[Tick] = []
    for i in range(count):
        d = add_days(start_date, i * interval)
        out.append(
            Tick(
                position=i * interval * day_width,
                width=interval * day_width,
                label=format_date(d, fmt),
                date=d,
            )
        )
    return out


def month_dividers(start_date: dt.date, total_days: int, day_width: float) -> List[MonthDivider]:
    """One divider per calendar month the range touches.

    A range ending exactly on the 1st yields a trailing zero-width divider for
    that month, which renderers are expected to skip.
    """
    fmt = month_label_format(day_width)
    out: List[MonthDivider] = []

    month_start: dt.date | None = None
    position = 0.0
    for day in range(total_days + 1):
        d = add_days(start_date, day)
        if day == 0 or d.day == 1:
            if month_start is not None:
                out.append(
                    MonthDivider(
                        position=position,
                        width=day * day_width - position,
                        label=format_date(month_start, fmt),
                    )
                )
            month_start = d
            position = day * day_width

    if month_start is not None:
        out.append(
            MonthDivider(
                position=position,
                width=total_days * day_width - position,
                label=format_date(month_start, fmt),
            )
        )
    return out


__all__ = [
    "date_ticks",
    "month_dividers",
    "month_label_format",
    "show_date_ticks",
    "show_month_labels",
    "tick_interval",
    "tick_label_format",
]
