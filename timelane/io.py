"""JSON boundary: ISO-date item dicts <-> TimelineItem."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from .gaps import Rejected
from .model import ItemChange, TimelineItem
from .palette import default_color_scheme
from .util.dates import format_iso_date, parse_iso_date
from .validate import ItemValidationError, assert_valid_items

JsonPath = Union[str, Path]


def parse_item(raw: Dict[str, Any], index: int) -> TimelineItem:
    """Build an item from its JSON form; a missing colorScheme is assigned round-robin by index."""
    cs = raw.get("colorScheme")
    return TimelineItem(
        id=raw["id"],
        start=parse_iso_date(raw["start"]),
        end=parse_iso_date(raw["end"]),
        name=str(raw.get("name") or ""),
        color_scheme=cs if isinstance(cs, str) and cs else default_color_scheme(index),
    )


def _items_list(obj: Any) -> Any:
    # Accept either a bare list or {"items": [...]}.
    if isinstance(obj, dict) and "items" in obj:
        return obj.get("items")
    return obj


def load_items(obj: Any) -> List[TimelineItem]:
    raw_items = _items_list(obj)
    assert_valid_items(raw_items)
    return [parse_item(raw, i) for i, raw in enumerate(raw_items)]


def load_items_from_json(path: JsonPath) -> List[TimelineItem]:
    p = Path(path)
    try:
        obj = json.loads(p.read_text(encoding="utf-8", errors="replace"))
    except json.JSONDecodeError as e:
        raise ItemValidationError(f"{p}: invalid JSON ({e})") from e
    return load_items(obj)


def item_to_dict(item: TimelineItem) -> Dict[str, Any]:
    return {
        "id": item.id,
        "start": format_iso_date(item.start),
        "end": format_iso_date(item.end),
        "name": item.name,
        "colorScheme": item.color_scheme,
    }


def items_to_json(items: List[TimelineItem]) -> str:
    return json.dumps([item_to_dict(it) for it in items], indent=2, ensure_ascii=False) + "\n"


def change_to_dict(change: ItemChange) -> Dict[str, Any]:
    """Sparse mutation: only proposed fields are present."""
    out: Dict[str, Any] = {"id": change.id}
    if change.start is not None:
        out["start"] = format_iso_date(change.start)
    if change.end is not None:
        out["end"] = format_iso_date(change.end)
    if change.lane_index is not None:
        out["laneIndex"] = int(change.lane_index)
    if change.name is not None:
        out["name"] = change.name
    if change.color_scheme is not None:
        out["colorScheme"] = change.color_scheme
    return out


def rejection_to_dict(rej: Rejected) -> Dict[str, Any]:
    return {"rejected": True, "reason": rej.reason}


__all__ = [
    "change_to_dict",
    "item_to_dict",
    "items_to_json",
    "load_items",
    "load_items_from_json",
    "parse_item",
    "rejection_to_dict",
]
