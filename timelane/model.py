# timelane/model.py
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple, Union

ItemId = Union[int, str]


@dataclass(frozen=True)
class TimelineItem:
    id: ItemId
    start: dt.date         # inclusive
    end: dt.date           # inclusive, start <= end
    name: str = ""
    color_scheme: str = "primary"

    @property
    def duration_days(self) -> int:
        return (self.end - self.start).days


# Lanes are derived from the item list on demand and never stored.
Lane = List[TimelineItem]


@dataclass(frozen=True)
class Viewport:
    zoom: float = 1.0
    container_width: float = 0.0


@dataclass(frozen=True)
class DateRange:
    start_date: dt.date
    end_date: dt.date
    total_days: int


@dataclass(frozen=True)
class ItemChange:
    """Proposed mutation of one item; None fields are left unchanged."""

    id: ItemId
    start: Optional[dt.date] = None
    end: Optional[dt.date] = None
    lane_index: Optional[int] = None
    name: Optional[str] = None
    color_scheme: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return (
            self.start is None
            and self.end is None
            and self.lane_index is None
            and self.name is None
            and self.color_scheme is None
        )


@dataclass(frozen=True)
class ItemGeometry:
    left: float
    width: float


@dataclass(frozen=True)
class Tick:
    position: float
    width: float
    label: str
    date: dt.date


@dataclass(frozen=True)
class MonthDivider:
    position: float
    width: float
    label: str


LaneBounds = Tuple[float, float]  # (top, bottom) in the host's y space


def apply_change(items: Sequence[TimelineItem], change: ItemChange) -> List[TimelineItem]:
    """Commit `change` against a snapshot and return the new item list.

    `lane_index` is not stored on items; lanes are recomputed from the returned
    list. Unknown ids leave the list unchanged.
    """
    out: List[TimelineItem] = []
    for it in items:
        if it.id != change.id:
            out.append(it)
            continue
        updated = it
        if change.start is not None:
            updated = replace(updated, start=change.start)
        if change.end is not None:
            updated = replace(updated, end=change.end)
        if change.name is not None:
            updated = replace(updated, name=change.name)
        if change.color_scheme is not None:
            updated = replace(updated, color_scheme=change.color_scheme)
        out.append(updated)
    return out


def find_item(items: Sequence[TimelineItem], item_id: ItemId) -> Optional[TimelineItem]:
    for it in items:
        if it.id == item_id:
            return it
    return None


__all__ = [
    "DateRange",
    "ItemChange",
    "ItemGeometry",
    "ItemId",
    "Lane",
    "LaneBounds",
    "MonthDivider",
    "Tick",
    "TimelineItem",
    "Viewport",
    "apply_change",
    "find_item",
]
