from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import List

from .config import config_from_env, config_from_mapping
from .io import load_items_from_json
from .model import Viewport
from .payload import build_layout
from .util.console import die, warn

PROG = "timelane"


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        warn(PROG, f"ignoring non-numeric {name}={raw!r}")
        return default


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog=PROG,
        description="Compute lanes, pixel geometry and axis ticks for a timeline items JSON.",
    )
    ap.add_argument("--in", dest="in_json", required=True, help="Items JSON path (list, or object with 'items')")
    ap.add_argument("--out", default=None, help="Output layout JSON path (default: stdout)")
    ap.add_argument(
        "--zoom",
        type=float,
        default=_float_env("TIMELANE_ZOOM", 1.0),
        help="Zoom level, clamped to [0.125, 3.0] (default: env TIMELANE_ZOOM or 1.0)",
    )
    ap.add_argument(
        "--container-width",
        type=float,
        default=_float_env("TIMELANE_CONTAINER_WIDTH", 0.0),
        help="Container width in px; 0 means unmeasured (default: env TIMELANE_CONTAINER_WIDTH or 0)",
    )
    ap.add_argument("--config", default=None, help="JSON file of config overrides (keys of TimelineConfig)")
    ap.add_argument("--indent", type=int, default=2, help="JSON indent (default: 2; 0 for compact)")

    ns = ap.parse_args(argv)

    cfg = config_from_env()
    if ns.config:
        try:
            raw_cfg = json.loads(Path(ns.config).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            return die(PROG, f"Failed to load config: {ns.config} ({e})")
        if not isinstance(raw_cfg, dict):
            return die(PROG, "config must be a JSON object")
        merged = cfg.to_dict()
        merged.update(raw_cfg)
        cfg = config_from_mapping(merged)

    in_path = Path(ns.in_json)
    if not in_path.exists():
        return die(PROG, f"Missing input JSON: {in_path}")

    try:
        items = load_items_from_json(in_path)
    except (OSError, ValueError) as e:
        return die(PROG, f"Failed to load items: {in_path} ({e})")

    if ns.container_width < 0:
        warn(PROG, f"negative --container-width {ns.container_width} treated as 0")

    layout = build_layout(items, Viewport(zoom=ns.zoom, container_width=max(0.0, ns.container_width)), cfg)

    indent = ns.indent if ns.indent and ns.indent > 0 else None
    text = json.dumps(layout, indent=indent, ensure_ascii=False, sort_keys=True) + "\n"

    if not ns.out:
        sys.stdout.write(text)
        return 0

    out_path = Path(ns.out).expanduser()
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8", newline="\n")
    except OSError as e:
        return die(PROG, f"Cannot write output '{out_path}': {e}")

    print(str(out_path))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
