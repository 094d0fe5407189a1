# timelane/interaction.py
"""Pointer interactions as proposals.

Functions here translate host coordinates into candidate date/lane changes and
never touch the item list; the caller commits accepted proposals with
`timelane.model.apply_change`. Coordinates are in the host's space with x
measured from the timeline origin unless a function takes `origin_x`.

`TimelineController` keeps only the transient gesture state a UI needs
(who is being dragged, resized or edited) and enforces that those gestures
exclude each other.
"""

from __future__ import annotations

import datetime as dt
import math
import uuid
from dataclasses import dataclass, replace
from typing import Callable, List, Optional, Sequence

from .config import DEFAULT_CONFIG, TimelineConfig
from .coords import day_offset_at, snap_to_grid
from .gaps import Rejected, resolve_lane_move
from .lanes import assign_lanes
from .model import ItemChange, ItemId, LaneBounds, TimelineItem, find_item
from .palette import default_color_scheme, propose_color_cycle
from .throttle import Throttle
from .util.dates import add_days

LEFT = "left"
RIGHT = "right"
RESIZE_DIRECTIONS = (LEFT, RIGHT)

IDLE = "idle"
DRAGGING = "dragging"
RESIZING = "resizing"


# --- create -------------------------------------------------------------------

def propose_new_item(
    offset_x: float,
    day_width: float,
    start_date: dt.date,
    item_count: int,
    new_id: ItemId,
    cfg: TimelineConfig = DEFAULT_CONFIG,
) -> TimelineItem:
    """Item for a click at `offset_x`; the clicked day is floored, not rounded."""
    day = int(math.floor(offset_x / day_width))
    start = add_days(start_date, day)
    return TimelineItem(
        id=new_id,
        start=start,
        end=add_days(start, cfg.default_duration_days),
        name=cfg.new_item_name,
        color_scheme=default_color_scheme(item_count),
    )


# --- drag ---------------------------------------------------------------------

@dataclass(frozen=True)
class DragPreview:
    left: float
    lane_index: Optional[int]


@dataclass(frozen=True)
class DragOutcome:
    change: ItemChange
    lane_rejected: bool = False
    rejection: Optional[Rejected] = None


def uniform_lane_bounds(lane_count: int, lane_height: float, top: float = 0.0) -> List[LaneBounds]:
    return [(top + i * lane_height, top + (i + 1) * lane_height) for i in range(max(0, lane_count))]


def lane_at_y(y: float, lane_bounds: Sequence[LaneBounds]) -> Optional[int]:
    for i, (top, bottom) in enumerate(lane_bounds):
        if top <= y <= bottom:
            return i
    return None


def drag_offset_within(pointer_x: float, item_left: float) -> float:
    return pointer_x - item_left


def preview_drag(
    pointer_x: float,
    pointer_y: float,
    origin_x: float,
    drag_offset: float,
    day_width: float,
    lane_bounds: Sequence[LaneBounds],
) -> DragPreview:
    left = pointer_x - origin_x - drag_offset
    return DragPreview(left=snap_to_grid(left, day_width), lane_index=lane_at_y(pointer_y, lane_bounds))


def finish_drag(
    items: Sequence[TimelineItem],
    item_id: ItemId,
    original_lane: int,
    snapped_left: float,
    release_lane: Optional[int],
    start_date: dt.date,
    day_width: float,
    cfg: TimelineConfig = DEFAULT_CONFIG,
) -> DragOutcome:
    """Dates from the released position; lane change only if the target lane has room.

    A rejected lane move still commits the new dates in the original lane.
    """
    item = find_item(items, item_id)
    if item is None:
        return DragOutcome(change=ItemChange(id=item_id))

    new_start = add_days(start_date, day_offset_at(snapped_left, day_width))
    new_end = add_days(new_start, item.duration_days)
    dates_only = ItemChange(id=item_id, start=new_start, end=new_end)

    if release_lane is None or release_lane == original_lane:
        return DragOutcome(change=dates_only)

    lanes = assign_lanes(items)
    target = lanes[release_lane] if 0 <= release_lane < len(lanes) else []
    moved = replace(item, start=new_start, end=new_end)

    res = resolve_lane_move(moved, target, max_shift_days=cfg.max_gap_search_days)
    if isinstance(res, Rejected):
        return DragOutcome(change=dates_only, lane_rejected=True, rejection=res)

    return DragOutcome(change=ItemChange(id=item_id, start=res.start, end=res.end, lane_index=release_lane))


class DragSession:
    """Preview state for one drag; discard it (or call cancel) to abandon."""

    def __init__(self, item: TimelineItem, lane_index: int, drag_offset: float) -> None:
        self.item = item
        self.lane_index = lane_index
        self.drag_offset = drag_offset
        self.preview: Optional[DragPreview] = None
        self.cancelled = False

    def move(
        self,
        pointer_x: float,
        pointer_y: float,
        origin_x: float,
        day_width: float,
        lane_bounds: Sequence[LaneBounds],
    ) -> DragPreview:
        self.preview = preview_drag(pointer_x, pointer_y, origin_x, self.drag_offset, day_width, lane_bounds)
        return self.preview

    def finish(
        self,
        items: Sequence[TimelineItem],
        pointer_x: float,
        pointer_y: float,
        origin_x: float,
        start_date: dt.date,
        day_width: float,
        lane_bounds: Sequence[LaneBounds],
        cfg: TimelineConfig = DEFAULT_CONFIG,
    ) -> DragOutcome:
        p = self.move(pointer_x, pointer_y, origin_x, day_width, lane_bounds)
        release_lane = p.lane_index if p.lane_index is not None else self.lane_index
        return finish_drag(items, self.item.id, self.lane_index, p.left, release_lane, start_date, day_width, cfg)

    def cancel(self) -> None:
        self.preview = None
        self.cancelled = True


# --- resize -------------------------------------------------------------------

def propose_resize(
    item: TimelineItem,
    direction: str,
    pointer_x: float,
    start_date: dt.date,
    day_width: float,
) -> Optional[ItemChange]:
    """Move one edge to the day nearest `pointer_x`; None unless start < end still holds."""
    if direction not in RESIZE_DIRECTIONS:
        raise ValueError(f"Unknown resize direction: {direction!r}")

    edge = add_days(start_date, day_offset_at(pointer_x, day_width))
    if direction == LEFT:
        if edge < item.end:
            return ItemChange(id=item.id, start=edge, end=item.end)
        return None
    if edge > item.start:
        return ItemChange(id=item.id, start=item.start, end=edge)
    return None


class ResizeSession:
    """Throttled resize of one item edge.

    `move` returns the accepted proposal for events that pass the throttle, and
    None for held or rejected events. `finish` runs the last held event and
    returns the net change against the item as it was when the gesture began.
    """

    def __init__(
        self,
        item: TimelineItem,
        direction: str,
        start_date: dt.date,
        day_width: float,
        throttle_ms: float = DEFAULT_CONFIG.resize_throttle_ms,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        if direction not in RESIZE_DIRECTIONS:
            raise ValueError(f"Unknown resize direction: {direction!r}")
        self.original = item
        self.current = item
        self.direction = direction
        self.start_date = start_date
        self.day_width = day_width
        self._throttle = Throttle(self._apply, throttle_ms, clock=clock)

    def _apply(self, pointer_x: float) -> Optional[ItemChange]:
        change = propose_resize(self.current, self.direction, pointer_x, self.start_date, self.day_width)
        if change is None:
            return None
        self.current = replace(self.current, start=change.start, end=change.end)
        return change

    def move(self, pointer_x: float) -> Optional[ItemChange]:
        return self._throttle(pointer_x)

    def finish(self) -> Optional[ItemChange]:
        self._throttle.flush()
        if self.current.start == self.original.start and self.current.end == self.original.end:
            return None
        return ItemChange(id=self.original.id, start=self.current.start, end=self.current.end)

    def cancel(self) -> None:
        self._throttle.cancel()
        self.current = self.original


# --- edit ---------------------------------------------------------------------

def propose_rename(item: TimelineItem, new_name: str) -> ItemChange:
    return ItemChange(id=item.id, name=str(new_name))


# --- controller ---------------------------------------------------------------

def _new_id() -> str:
    return uuid.uuid4().hex


class TimelineController:
    """Gesture state machine for one timeline.

    Drag and resize are mutually exclusive; editing an item blocks dragging or
    resizing it, and a gesture in progress blocks entering edit mode.
    """

    def __init__(
        self,
        cfg: TimelineConfig = DEFAULT_CONFIG,
        *,
        clock: Optional[Callable[[], float]] = None,
        id_factory: Optional[Callable[[], ItemId]] = None,
    ) -> None:
        self.cfg = cfg
        self._clock = clock
        self._id_factory = id_factory or _new_id
        self.drag: Optional[DragSession] = None
        self.resize: Optional[ResizeSession] = None
        self.editing_item_id: Optional[ItemId] = None
        self._click_started = False

    @property
    def state(self) -> str:
        if self.drag is not None:
            return DRAGGING
        if self.resize is not None:
            return RESIZING
        return IDLE

    @property
    def is_editing(self) -> bool:
        return self.editing_item_id is not None

    def lane_bounds(self, lane_count: int, top: float = 0.0) -> List[LaneBounds]:
        """Vertical extents of `lane_count` lanes of `cfg.lane_height` each."""
        return uniform_lane_bounds(lane_count, self.cfg.lane_height, top)

    # create-on-click
    def background_press(self) -> None:
        self._click_started = True

    def background_click(
        self,
        items: Sequence[TimelineItem],
        offset_x: float,
        start_date: dt.date,
        day_width: float,
    ) -> Optional[TimelineItem]:
        """New item for a click that also began on the background; enters edit mode."""
        started = self._click_started
        self._click_started = False
        if not started or self.state != IDLE:
            return None
        item = propose_new_item(offset_x, day_width, start_date, len(items), self._id_factory(), self.cfg)
        self.editing_item_id = item.id
        return item

    # drag
    def begin_drag(self, item: TimelineItem, lane_index: int, pointer_x: float, item_left: float) -> Optional[DragSession]:
        if self.state != IDLE or self.editing_item_id == item.id:
            return None
        self.drag = DragSession(item, lane_index, drag_offset_within(pointer_x, item_left))
        return self.drag

    def drag_move(
        self,
        pointer_x: float,
        pointer_y: float,
        origin_x: float,
        day_width: float,
        lane_bounds: Sequence[LaneBounds],
    ) -> Optional[DragPreview]:
        if self.drag is None:
            return None
        return self.drag.move(pointer_x, pointer_y, origin_x, day_width, lane_bounds)

    def end_drag(
        self,
        items: Sequence[TimelineItem],
        pointer_x: float,
        pointer_y: float,
        origin_x: float,
        start_date: dt.date,
        day_width: float,
        lane_bounds: Sequence[LaneBounds],
    ) -> Optional[DragOutcome]:
        session = self.drag
        if session is None:
            return None
        self.drag = None
        return session.finish(items, pointer_x, pointer_y, origin_x, start_date, day_width, lane_bounds, self.cfg)

    def cancel_drag(self) -> None:
        if self.drag is not None:
            self.drag.cancel()
        self.drag = None

    # resize
    def begin_resize(
        self,
        item: TimelineItem,
        direction: str,
        start_date: dt.date,
        day_width: float,
    ) -> Optional[ResizeSession]:
        if self.state != IDLE or self.editing_item_id == item.id:
            return None
        self._click_started = False
        self.resize = ResizeSession(
            item,
            direction,
            start_date,
            day_width,
            throttle_ms=self.cfg.resize_throttle_ms,
            clock=self._clock,
        )
        return self.resize

    def resize_move(self, pointer_x: float) -> Optional[ItemChange]:
        if self.resize is None:
            return None
        return self.resize.move(pointer_x)

    def end_resize(self) -> Optional[ItemChange]:
        session = self.resize
        if session is None:
            return None
        self.resize = None
        return session.finish()

    def cancel_resize(self) -> None:
        if self.resize is not None:
            self.resize.cancel()
        self.resize = None

    # edit
    def begin_edit(self, item_id: ItemId) -> bool:
        if self.state != IDLE:
            return False
        self.editing_item_id = item_id
        return True

    def submit_edit(self, items: Sequence[TimelineItem], new_name: str) -> Optional[ItemChange]:
        """Commit the edited name; blur goes through here too."""
        item_id = self.editing_item_id
        self.editing_item_id = None
        if item_id is None:
            return None
        item = find_item(items, item_id)
        if item is None:
            return None
        return propose_rename(item, new_name)

    blur_edit = submit_edit

    def cancel_edit(self) -> None:
        self.editing_item_id = None

    # color
    def cycle_color(self, item: TimelineItem) -> ItemChange:
        return propose_color_cycle(item)


__all__ = [
    "DRAGGING",
    "DragOutcome",
    "DragPreview",
    "DragSession",
    "IDLE",
    "LEFT",
    "RESIZE_DIRECTIONS",
    "RESIZING",
    "RIGHT",
    "ResizeSession",
    "TimelineController",
    "drag_offset_within",
    "finish_drag",
    "lane_at_y",
    "preview_drag",
    "propose_new_item",
    "propose_rename",
    "propose_resize",
    "uniform_lane_bounds",
]
