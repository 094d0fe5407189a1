# timelane/config.py
from __future__ import annotations

import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping, Optional

ENV_PREFIX = "TIMELANE_"


@dataclass(frozen=True)
class TimelineConfig:
    """Tunables for geometry, gap search and interaction.

    Defaults reproduce the reference timeline exactly; override them only when
    embedding the core in a host with different visual metrics.
    """

    base_day_width: float = 40.0
    min_day_width: float = 5.0
    fill_padding_px: float = 20.0
    fill_zoom_threshold: float = 0.5
    date_pad_days: int = 5

    max_gap_search_days: int = 30

    default_duration_days: int = 7
    new_item_name: str = "New Event"

    zoom_min: float = 0.125
    zoom_max: float = 3.0
    zoom_step: float = 0.2

    resize_throttle_ms: int = 50
    lane_height: float = 60.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULT_CONFIG = TimelineConfig()


def _coerce(value: Any, default: Any) -> Any:
    # bool is an int subclass; never accept it for numeric knobs.
    if value is None or isinstance(value, bool):
        return default
    if isinstance(default, str):
        s = str(value).strip()
        return s or default
    try:
        if isinstance(default, int):
            if isinstance(value, (int, float)):
                return int(value)
            return int(float(str(value).strip()))
        if isinstance(default, float):
            return float(str(value).strip())
    except (TypeError, ValueError, OverflowError):
        return default
    return default


def _sane(cfg: TimelineConfig) -> TimelineConfig:
    out = dict(asdict(cfg))
    d = DEFAULT_CONFIG
    if out["base_day_width"] <= 0:
        out["base_day_width"] = d.base_day_width
    if out["min_day_width"] <= 0:
        out["min_day_width"] = d.min_day_width
    if out["fill_padding_px"] < 0:
        out["fill_padding_px"] = d.fill_padding_px
    if out["date_pad_days"] < 0:
        out["date_pad_days"] = d.date_pad_days
    if out["max_gap_search_days"] < 0:
        out["max_gap_search_days"] = d.max_gap_search_days
    if out["default_duration_days"] < 1:
        out["default_duration_days"] = d.default_duration_days
    if out["zoom_min"] <= 0 or out["zoom_max"] < out["zoom_min"]:
        out["zoom_min"], out["zoom_max"] = d.zoom_min, d.zoom_max
    if out["zoom_step"] <= 0:
        out["zoom_step"] = d.zoom_step
    if out["resize_throttle_ms"] < 0:
        out["resize_throttle_ms"] = d.resize_throttle_ms
    if out["lane_height"] <= 0:
        out["lane_height"] = d.lane_height
    return TimelineConfig(**out)


def config_from_mapping(cfg: Optional[Mapping[str, Any]]) -> TimelineConfig:
    """Build a config from a loose dict; unknown keys are ignored, bad values fall back."""
    if not isinstance(cfg, Mapping):
        return DEFAULT_CONFIG
    kwargs: Dict[str, Any] = {}
    for f in fields(TimelineConfig):
        default = getattr(DEFAULT_CONFIG, f.name)
        kwargs[f.name] = _coerce(cfg.get(f.name), default)
    return _sane(TimelineConfig(**kwargs))


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> TimelineConfig:
    """Read TIMELANE_<FIELD> variables, e.g. TIMELANE_MAX_GAP_SEARCH_DAYS=45."""
    env = os.environ if environ is None else environ
    raw: Dict[str, Any] = {}
    for f in fields(TimelineConfig):
        key = ENV_PREFIX + f.name.upper()
        if key in env:
            raw[f.name] = env[key]
    return config_from_mapping(raw)


__all__ = [
    "DEFAULT_CONFIG",
    "ENV_PREFIX",
    "TimelineConfig",
    "config_from_env",
    "config_from_mapping",
]
