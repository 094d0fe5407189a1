# timelane/palette.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .model import ItemChange, TimelineItem


@dataclass(frozen=True)
class ColorScheme:
    name: str
    background: str
    border: str
    hover_shadow: str


COLOR_SCHEMES: Tuple[ColorScheme, ...] = (
    ColorScheme("primary", "#e3f2fd", "#b3e5fc", "0 2px 6px rgba(33, 150, 243, 0.3)"),
    ColorScheme("secondary", "#e1f5fe", "#81d4fa", "0 2px 6px rgba(3, 169, 244, 0.3)"),
    ColorScheme("tertiary", "#e8eaf6", "#9fa8da", "0 2px 6px rgba(63, 81, 181, 0.3)"),
)

SCHEME_NAMES: Tuple[str, ...] = tuple(cs.name for cs in COLOR_SCHEMES)


def _index_of(name: str | None) -> int:
    for i, cs in enumerate(COLOR_SCHEMES):
        if cs.name == name:
            return i
    return -1


def default_color_scheme(index: int) -> str:
    """Round-robin scheme for the item at `index` (or the index-th created item)."""
    return COLOR_SCHEMES[int(index) % len(COLOR_SCHEMES)].name


def color_properties(name: str | None) -> ColorScheme:
    """Colors for a scheme name; unknown names paint as primary."""
    i = _index_of(name)
    return COLOR_SCHEMES[i] if i >= 0 else COLOR_SCHEMES[0]


def next_color_scheme(name: str | None) -> str:
    # Unknown names restart the cycle at primary (index -1 + 1).
    return COLOR_SCHEMES[(_index_of(name) + 1) % len(COLOR_SCHEMES)].name


def propose_color_cycle(item: TimelineItem) -> ItemChange:
    return ItemChange(id=item.id, color_scheme=next_color_scheme(item.color_scheme))


__all__ = [
    "COLOR_SCHEMES",
    "ColorScheme",
    "SCHEME_NAMES",
    "color_properties",
    "default_color_scheme",
    "next_color_scheme",
    "propose_color_cycle",
]
