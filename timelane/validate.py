"""Item list validation helpers (library-facing)."""

from __future__ import annotations

from typing import Any, List, Set

from timelane.util.dates import parse_iso_date


class ItemValidationError(ValueError):
    """Raised when an item list fails validation."""


def _require(cond: bool, msg: str, errs: List[str]) -> None:
    if not cond:
        errs.append(msg)


def _valid_id(v: Any) -> bool:
    if isinstance(v, bool):
        return False
    if isinstance(v, int):
        return True
    return isinstance(v, str) and bool(v.strip())


def validate_item(raw: Any, *, label: str) -> List[str]:
    errs: List[str] = []
    if not isinstance(raw, dict):
        return [f"{label} must be an object"]

    _require(_valid_id(raw.get("id")), f"{label}.id must be an int or non-empty string", errs)

    dates = {}
    for k in ("start", "end"):
        v = raw.get(k)
        if not isinstance(v, str):
            errs.append(f"{label}.{k} must be a YYYY-MM-DD string")
            continue
        try:
            dates[k] = parse_iso_date(v)
        except ValueError:
            errs.append(f"{label}.{k} is not a valid date: {v!r}")

    if "start" in dates and "end" in dates:
        _require(
            dates["start"] <= dates["end"],
            f"{label} must have start <= end ({dates['start'].isoformat()} > {dates['end'].isoformat()})",
            errs,
        )

    name = raw.get("name")
    if name is not None:
        _require(isinstance(name, str), f"{label}.name must be a string", errs)
    cs = raw.get("colorScheme")
    if cs is not None:
        _require(isinstance(cs, str), f"{label}.colorScheme must be a string", errs)

    return errs


def validate_items(raw_items: Any, *, label: str = "items") -> List[str]:
    """Return every problem found; an empty list means the items load cleanly."""
    if not isinstance(raw_items, list):
        return [f"{label} must be a list"]

    errs: List[str] = []
    seen: Set[Any] = set()
    for i, raw in enumerate(raw_items):
        errs.extend(validate_item(raw, label=f"{label}[{i}]"))
        if isinstance(raw, dict) and _valid_id(raw.get("id")):
            key = raw["id"]
            if key in seen:
                errs.append(f"{label}[{i}].id duplicates an earlier item: {key!r}")
            seen.add(key)
    return errs


def assert_valid_items(raw_items: Any) -> None:
    errs = validate_items(raw_items)
    if errs:
        raise ItemValidationError(errs[0])


__all__ = [
    "ItemValidationError",
    "assert_valid_items",
    "validate_item",
    "validate_items",
]
