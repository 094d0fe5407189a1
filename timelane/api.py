"""timelane.api

Stable *library* entrypoint for timelane.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from timelane.axis import date_ticks, month_dividers, tick_interval
from timelane.config import DEFAULT_CONFIG, TimelineConfig, config_from_env, config_from_mapping
from timelane.coords import (
    EmptyTimelineError,
    date_range,
    day_width,
    item_geometry,
    snap_to_grid,
    zoom_in,
    zoom_out,
)
from timelane.gaps import LaneMove, Rejected, propose_lane_change, resolve_lane_move
from timelane.interaction import (
    DragOutcome,
    TimelineController,
    finish_drag,
    preview_drag,
    propose_new_item,
    propose_rename,
    propose_resize,
)
from timelane.io import change_to_dict, item_to_dict, load_items, load_items_from_json
from timelane.lanes import assign_lanes, overlaps
from timelane.model import DateRange, ItemChange, TimelineItem, Viewport, apply_change
from timelane.palette import COLOR_SCHEMES, next_color_scheme
from timelane.payload import build_layout
from timelane.validate import ItemValidationError, validate_items

__all__ = [
    "COLOR_SCHEMES",
    "DEFAULT_CONFIG",
    "DateRange",
    "DragOutcome",
    "EmptyTimelineError",
    "ItemChange",
    "ItemValidationError",
    "LaneMove",
    "Rejected",
    "TimelineConfig",
    "TimelineController",
    "TimelineItem",
    "Viewport",
    "apply_change",
    "assign_lanes",
    "build_layout",
    "change_to_dict",
    "config_from_env",
    "config_from_mapping",
    "date_range",
    "date_ticks",
    "day_width",
    "finish_drag",
    "item_geometry",
    "item_to_dict",
    "load_items",
    "load_items_from_json",
    "month_dividers",
    "next_color_scheme",
    "overlaps",
    "preview_drag",
    "propose_lane_change",
    "propose_new_item",
    "propose_rename",
    "propose_resize",
    "resolve_lane_move",
    "snap_to_grid",
    "tick_interval",
    "validate_items",
    "zoom_in",
    "zoom_out",
]
