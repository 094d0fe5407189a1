# timelane/payload.py
from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Optional, Sequence

from .axis import date_ticks, month_dividers, show_date_ticks, show_month_labels, tick_interval
from .config import DEFAULT_CONFIG, TimelineConfig
from .coords import clamp_zoom, date_range, item_geometry, timeline_width, viewport_day_width, zoom_percent
from .io import item_to_dict
from .lanes import assign_lanes, max_concurrency
from .model import TimelineItem, Viewport
from .palette import color_properties
from .util.dates import format_iso_date, format_span_label

LAYOUT_SCHEMA_NAME = "timelane.layout"
LAYOUT_SCHEMA_VERSION = 1


def _meta() -> Dict[str, Any]:
    generated_at = dt.datetime.now(dt.timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")
    return {
        "generated_at": generated_at,
        "schema": {"name": LAYOUT_SCHEMA_NAME, "version": LAYOUT_SCHEMA_VERSION},
    }


def _viewport_dict(viewport: Viewport, cfg: TimelineConfig) -> Dict[str, Any]:
    zoom = clamp_zoom(viewport.zoom, cfg)
    return {
        "zoom": zoom,
        "zoom_percent": zoom_percent(zoom),
        "container_width": max(0.0, float(viewport.container_width)),
    }


def build_layout(
    items: Sequence[TimelineItem],
    viewport: Optional[Viewport] = None,
    cfg: TimelineConfig = DEFAULT_CONFIG,
) -> Dict[str, Any]:
    """Everything a renderer needs to paint the timeline, as one JSON-ready dict.

    An empty item list has no date range; the layout then carries empty lanes
    and no axis rather than failing.
    """
    viewport = viewport or Viewport()
    out: Dict[str, Any] = {
        "schema_version": LAYOUT_SCHEMA_VERSION,
        "meta": _meta(),
        "cfg": cfg.to_dict(),
        "viewport": _viewport_dict(viewport, cfg),
    }

    if not items:
        out.update(
            {
                "range": None,
                "day_width": None,
                "timeline_width": 0,
                "tick_interval": None,
                "lanes": [],
                "items": [],
                "ticks": [],
                "months": [],
                "summary": {"item_count": 0, "lane_count": 0, "max_concurrency": 0},
            }
        )
        return out

    rng = date_range(items, cfg)
    dw = viewport_day_width(viewport, rng, cfg)
    lanes = assign_lanes(items)

    items_out: List[Dict[str, Any]] = []
    for lane_index, lane in enumerate(lanes):
        for it in lane:
            geo = item_geometry(it, rng.start_date, dw)
            colors = color_properties(it.color_scheme)
            d = item_to_dict(it)
            d.update(
                {
                    "laneIndex": lane_index,
                    "left": geo.left,
                    "width": geo.width,
                    "label": format_span_label(it.start, it.end),
                    "background": colors.background,
                    "border": colors.border,
                }
            )
            items_out.append(d)

    ticks = date_ticks(rng.start_date, rng.total_days, dw) if show_date_ticks(dw) else []
    months = month_dividers(rng.start_date, rng.total_days, dw) if show_month_labels(dw) else []

    out.update(
        {
            "range": {
                "start_date": format_iso_date(rng.start_date),
                "end_date": format_iso_date(rng.end_date),
                "total_days": rng.total_days,
            },
            "day_width": dw,
            "timeline_width": timeline_width(rng.total_days, dw),
            "tick_interval": tick_interval(dw),
            "lanes": [[it.id for it in lane] for lane in lanes],
            "items": items_out,
            "ticks": [{"position": t.position, "width": t.width, "label": t.label} for t in ticks],
            "months": [{"position": m.position, "width": m.width, "label": m.label} for m in months if m.width > 0],
            "summary": {
                "item_count": len(items),
                "lane_count": len(lanes),
                "max_concurrency": max_concurrency(items),
            },
        }
    )
    return out


__all__ = [
    "LAYOUT_SCHEMA_NAME",
    "LAYOUT_SCHEMA_VERSION",
    "build_layout",
]
