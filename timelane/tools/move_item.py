#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from timelane.config import config_from_env
from timelane.coords import date_range, day_offset
from timelane.interaction import finish_drag
from timelane.io import change_to_dict, items_to_json, load_items_from_json
from timelane.lanes import assign_lanes, lane_index_of
from timelane.model import ItemId, TimelineItem, apply_change
from timelane.util.console import die
from timelane.util.dates import add_days

PROG = "timelane-move"


def _match_id(items: List[TimelineItem], raw: str) -> Optional[ItemId]:
    # CLI ids arrive as strings; JSON ids may be ints.
    for it in items:
        if str(it.id) == raw:
            return it.id
    return None


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog=PROG,
        description="Propose moving one item to another lane and/or by whole days (gap search on collision).",
        epilog=(
            "Output: 'to_lane' is the lane the move asked for; 'lane_after' is the lane the item "
            "lands in once lanes are re-packed from the updated items."
        ),
    )
    ap.add_argument("--in", dest="in_json", required=True, help="Items JSON path")
    ap.add_argument("--id", dest="item_id", required=True, help="Id of the item to move")
    ap.add_argument("--lane", type=int, default=None, help="Target lane index (default: current lane)")
    ap.add_argument("--shift-days", type=int, default=0, help="Move the item by this many days first (default: 0)")
    ap.add_argument("--apply", default=None, help="Write the updated items JSON to this path")
    ns = ap.parse_args(argv)

    in_path = Path(ns.in_json)
    if not in_path.exists():
        return die(PROG, f"Missing input JSON: {in_path}")

    try:
        items = load_items_from_json(in_path)
    except (OSError, ValueError) as e:
        return die(PROG, f"Failed to load items: {in_path} ({e})")

    item_id = _match_id(items, str(ns.item_id))
    if item_id is None:
        return die(PROG, f"Unknown item id: {ns.item_id}")
    if ns.lane is not None and ns.lane < 0:
        return die(PROG, f"--lane must be >= 0 (got {ns.lane})")

    cfg = config_from_env()
    lanes = assign_lanes(items)
    current_lane = lane_index_of(lanes, item_id)
    if current_lane is None:
        return die(PROG, f"Item {ns.item_id} is not in any lane")
    target_lane = current_lane if ns.lane is None else int(ns.lane)

    # Drive the drag path with one pixel per day, so the released left edge is the day offset.
    rng = date_range(items, cfg)
    item = next(it for it in items if it.id == item_id)
    new_start = add_days(item.start, ns.shift_days)
    outcome = finish_drag(
        items,
        item_id,
        current_lane,
        float(day_offset(new_start, rng.start_date)),
        target_lane,
        rng.start_date,
        1.0,
        cfg,
    )

    # Lanes are not stored; the item's lane after the move is whatever the packing gives.
    updated = apply_change(items, outcome.change)
    result = {
        "change": change_to_dict(outcome.change),
        "from_lane": current_lane,
        "to_lane": target_lane if not outcome.lane_rejected else current_lane,
        "lane_after": lane_index_of(assign_lanes(updated), item_id),
        "lane_rejected": outcome.lane_rejected,
    }
    if outcome.rejection is not None:
        result["reason"] = outcome.rejection.reason
    sys.stdout.write(json.dumps(result, indent=2, sort_keys=True) + "\n")

    if ns.apply:
        out_path = Path(ns.apply).expanduser()
        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(items_to_json(updated), encoding="utf-8")
        except OSError as e:
            return die(PROG, f"Cannot write output '{out_path}': {e}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
