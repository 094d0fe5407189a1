# timelane/gaps.py
"""Overlap resolution for lane moves.

When an item is dropped into another lane and collides there, it is pushed
forward a day at a time (duration unchanged) until it fits. The search stops
after `max_gap_search_days`; a lane that crowded rejects the move instead of
parking the item arbitrarily far away.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Sequence, Union

from .config import DEFAULT_CONFIG, TimelineConfig
from .lanes import assign_lanes, lane_index_of, overlaps
from .model import ItemChange, ItemId, TimelineItem, find_item
from .util.dates import add_days

MAX_GAP_SEARCH_DAYS = DEFAULT_CONFIG.max_gap_search_days


@dataclass(frozen=True)
class LaneMove:
    start: dt.date
    end: dt.date
    shift_days: int = 0


@dataclass(frozen=True)
class Rejected:
    reason: str


def has_overlap(item_id: ItemId, start: dt.date, end: dt.date, lane: Sequence[TimelineItem]) -> bool:
    for other in lane:
        if other.id == item_id:
            continue
        if overlaps(start, end, other.start, other.end):
            return True
    return False


def resolve_lane_move(
    item: TimelineItem,
    target_lane: Sequence[TimelineItem],
    max_shift_days: int = MAX_GAP_SEARCH_DAYS,
) -> Union[LaneMove, Rejected]:
    if not has_overlap(item.id, item.start, item.end, target_lane):
        return LaneMove(start=item.start, end=item.end, shift_days=0)

    duration = item.duration_days
    for shift in range(1, int(max_shift_days) + 1):
        start = add_days(item.start, shift)
        end = add_days(start, duration)
        if not has_overlap(item.id, start, end, target_lane):
            return LaneMove(start=start, end=end, shift_days=shift)

    return Rejected(reason=f"no free slot within {int(max_shift_days)} days in target lane")


def propose_lane_change(
    items: Sequence[TimelineItem],
    item_id: ItemId,
    target_lane_index: int,
    cfg: TimelineConfig = DEFAULT_CONFIG,
) -> Union[ItemChange, Rejected]:
    """Resolve moving `item_id` into lane `target_lane_index` of the current layout.

    Lanes are recomputed from the snapshot. An index past the last lane is an
    empty lane, so the move is accepted as is.
    """
    item = find_item(items, item_id)
    if item is None:
        return Rejected(reason=f"unknown item id: {item_id!r}")
    if target_lane_index < 0:
        return Rejected(reason=f"invalid lane index: {target_lane_index}")

    lanes = assign_lanes(items)
    if lane_index_of(lanes, item_id) == target_lane_index:
        return ItemChange(id=item_id)

    target = lanes[target_lane_index] if target_lane_index < len(lanes) else []
    res = resolve_lane_move(item, target, max_shift_days=cfg.max_gap_search_days)
    if isinstance(res, Rejected):
        return res

    return ItemChange(id=item_id, start=res.start, end=res.end, lane_index=target_lane_index)


__all__ = [
    "LaneMove",
    "MAX_GAP_SEARCH_DAYS",
    "Rejected",
    "has_overlap",
    "propose_lane_change",
    "resolve_lane_move",
]
