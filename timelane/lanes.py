# timelane/lanes.py
from __future__ import annotations

import datetime as dt
from typing import List, Optional, Sequence, Tuple

from .model import ItemId, Lane, TimelineItem


def overlaps(a_start: dt.date, a_end: dt.date, b_start: dt.date, b_end: dt.date) -> bool:
    """Inclusive ranges intersect unless one ends before the other begins."""
    return a_start <= b_end and b_start <= a_end


def items_overlap(a: TimelineItem, b: TimelineItem) -> bool:
    return overlaps(a.start, a.end, b.start, b.end)


def assign_lanes(items: Sequence[TimelineItem]) -> List[Lane]:
    """Greedy interval partitioning into the fewest non-overlapping lanes.

    Items are taken in start order (stable, so ties keep input order) and each
    goes into the first lane whose last item ends strictly before it starts.
    Pure: the same input order always yields the same partition.
    """
    ordered = sorted(items, key=lambda it: it.start)

    lanes: List[Lane] = []
    lane_ends: List[dt.date] = []
    for it in ordered:
        lane_index = -1
        for i, lane_end in enumerate(lane_ends):
            if lane_end < it.start:
                lane_index = i
                break
        if lane_index < 0:
            lanes.append([it])
            lane_ends.append(it.end)
        else:
            lanes[lane_index].append(it)
            lane_ends[lane_index] = it.end
    return lanes


def lane_index_of(lanes: Sequence[Sequence[TimelineItem]], item_id: ItemId) -> Optional[int]:
    for i, lane in enumerate(lanes):
        for it in lane:
            if it.id == item_id:
                return i
    return None


def max_concurrency(items: Sequence[TimelineItem]) -> int:
    """Most items covering any single day (sweep line over day boundaries)."""
    pts: List[Tuple[dt.date, int]] = []
    for it in items:
        pts.append((it.start, +1))
        pts.append((it.end + dt.timedelta(days=1), -1))  # end is inclusive
    # Leaving before entering at the same boundary: back-to-back days don't overlap.
    pts.sort(key=lambda x: (x[0], x[1]))

    active = 0
    best = 0
    for _t, kind in pts:
        active += kind
        if active > best:
            best = active
    return best


__all__ = [
    "assign_lanes",
    "items_overlap",
    "lane_index_of",
    "max_concurrency",
    "overlaps",
]
