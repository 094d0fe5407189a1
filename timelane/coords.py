# timelane/coords.py
from __future__ import annotations

import datetime as dt
from typing import Sequence

from .config import DEFAULT_CONFIG, TimelineConfig
from .model import DateRange, ItemGeometry, TimelineItem, Viewport
from .util.dates import add_days, diff_days, round_half_up


class EmptyTimelineError(ValueError):
    """Raised when a date range is requested for an empty item list."""


def day_width(
    zoom: float,
    container_width: float,
    total_days: int,
    cfg: TimelineConfig = DEFAULT_CONFIG,
) -> float:
    """Pixels per day for the current zoom and container.

    Below the fill threshold (0.5) with a measured container, the timeline
    stretches to fill the container instead of shrinking further. The two
    branches do not meet at the threshold, so day width jumps at zoom 0.5.
    """
    standard = max(cfg.base_day_width * zoom, cfg.min_day_width)

    if zoom < cfg.fill_zoom_threshold and container_width > 0:
        # total_days is >= 2 * date_pad_days for any non-empty range.
        days = total_days if total_days > 0 else 1
        fill = (container_width - cfg.fill_padding_px) / days
        return max(fill, cfg.min_day_width)

    return standard


def date_range(items: Sequence[TimelineItem], cfg: TimelineConfig = DEFAULT_CONFIG) -> DateRange:
    """Span of all items padded by `date_pad_days` on each side."""
    if not items:
        raise EmptyTimelineError("date range of an empty timeline is undefined")

    lo = min(min(it.start, it.end) for it in items)
    hi = max(max(it.start, it.end) for it in items)

    start_date = add_days(lo, -cfg.date_pad_days)
    end_date = add_days(hi, cfg.date_pad_days)
    return DateRange(start_date=start_date, end_date=end_date, total_days=diff_days(end_date, start_date))


def day_offset(d: dt.date, start_date: dt.date) -> int:
    return diff_days(d, start_date)


def date_at_offset(start_date: dt.date, days: int) -> dt.date:
    return add_days(start_date, days)


def day_offset_at(px: float, day_width_px: float) -> int:
    """Nearest day boundary for a pixel x (drag release, resize)."""
    return round_half_up(px / day_width_px)


def snap_to_grid(px: float, day_width_px: float) -> float:
    return day_offset_at(px, day_width_px) * day_width_px


def item_geometry(item: TimelineItem, start_date: dt.date, day_width_px: float) -> ItemGeometry:
    left = diff_days(item.start, start_date) * day_width_px
    width = (diff_days(item.end, item.start) + 1) * day_width_px  # end date is inclusive
    return ItemGeometry(left=left, width=width)


def timeline_width(total_days: int, day_width_px: float) -> float:
    return total_days * day_width_px


# --- zoom controls ------------------------------------------------------------

def clamp_zoom(zoom: float, cfg: TimelineConfig = DEFAULT_CONFIG) -> float:
    return min(max(float(zoom), cfg.zoom_min), cfg.zoom_max)


def zoom_in(zoom: float, cfg: TimelineConfig = DEFAULT_CONFIG) -> float:
    return min(zoom + cfg.zoom_step, cfg.zoom_max)


def zoom_out(zoom: float, cfg: TimelineConfig = DEFAULT_CONFIG) -> float:
    return max(zoom - cfg.zoom_step, cfg.zoom_min)


def zoom_percent(zoom: float) -> int:
    return round_half_up(zoom * 100)


def viewport_day_width(viewport: Viewport, rng: DateRange, cfg: TimelineConfig = DEFAULT_CONFIG) -> float:
    return day_width(clamp_zoom(viewport.zoom, cfg), max(0.0, float(viewport.container_width)), rng.total_days, cfg)


__all__ = [
    "EmptyTimelineError",
    "clamp_zoom",
    "date_at_offset",
    "date_range",
    "day_offset",
    "day_offset_at",
    "day_width",
    "item_geometry",
    "snap_to_grid",
    "timeline_width",
    "viewport_day_width",
    "zoom_in",
    "zoom_out",
    "zoom_percent",
]
