"""
settings.py
===========

Does: Load and validate `data/picker_settings.json` (tolerances, random ranges,
      spread width, defaults) and expose it as a frozen, cached snapshot.
Returns: PickerSettings via get_picker_settings(); reload_picker_settings()
         drops the snapshot so the next call re-reads the file.
Used By: compare (tolerances), constraints (random ranges, spread width),
         session (defaults), names (fuzzy cutoff).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from palette_studio.picker.types import (
    AxisMode,
    ColorSpace,
    as_axis_mode,
    as_color_space,
)
from palette_studio.utils.load_config import ConfigTypeError, clear_config_cache, load_config

__all__ = [
    "Tolerance",
    "PickerSettings",
    "get_picker_settings",
    "reload_picker_settings",
    "validate_picker_settings",
]

log = logging.getLogger(__name__)

SETTINGS_FILE = "picker_settings"


@dataclass(frozen=True)
class Tolerance:
    lightness: float
    hue: float
    saturation: float


@dataclass(frozen=True)
class PickerSettings:
    default_space: ColorSpace
    default_mode: AxisMode
    fallback_color: str
    tolerances: dict[str, Tolerance]
    random_ranges: dict[str, tuple[float, float]]
    min_spread: float
    fuzzy_cutoff: float

    def tolerance(self, space: ColorSpace) -> Tolerance:
        return self.tolerances[space]


def _unit_float(value: Any, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigTypeError(f"{where}: expected a number, got {type(value).__name__}")
    v = float(value)
    if not 0.0 <= v <= 1.0:
        raise ValueError(f"{where}: {v} is outside [0, 1]")
    return v


def validate_picker_settings(data: dict[str, Any]) -> dict[str, Any]:
    """Does: Check shapes/ranges and coerce tags; raise on anything malformed."""
    defaults = data.get("defaults", {})
    out: dict[str, Any] = {
        "default_space": as_color_space(defaults.get("color_space", "hsl")),
        "default_mode": as_axis_mode(defaults.get("mode", "shared_lightness")),
        "fallback_color": str(defaults.get("fallback_color", "#ff0000")).lower(),
    }

    tolerances = data.get("tolerances")
    if not isinstance(tolerances, dict):
        raise ConfigTypeError("tolerances: expected an object keyed by color space")
    out["tolerances"] = {}
    for space, tol in tolerances.items():
        space = as_color_space(space)
        out["tolerances"][space] = Tolerance(
            lightness=_unit_float(tol.get("lightness"), f"tolerances.{space}.lightness"),
            hue=_unit_float(tol.get("hue"), f"tolerances.{space}.hue"),
            saturation=_unit_float(tol.get("saturation"), f"tolerances.{space}.saturation"),
        )
    missing = {"hsl", "okhsl"} - set(out["tolerances"])
    if missing:
        raise ConfigTypeError(f"tolerances: missing color spaces {sorted(missing)}")

    out["random_ranges"] = {}
    for axis in ("hue", "saturation", "lightness"):
        pair = data.get("random_ranges", {}).get(axis)
        if not isinstance(pair, list) or len(pair) != 2:
            raise ConfigTypeError(f"random_ranges.{axis}: expected [low, high]")
        lo = _unit_float(pair[0], f"random_ranges.{axis}[0]")
        hi = _unit_float(pair[1], f"random_ranges.{axis}[1]")
        if lo > hi:
            raise ValueError(f"random_ranges.{axis}: low {lo} > high {hi}")
        out["random_ranges"][axis] = (lo, hi)

    out["min_spread"] = _unit_float(data.get("spread", {}).get("min_range", 0.1), "spread.min_range")
    cutoff = data.get("names", {}).get("fuzzy_cutoff", 85)
    if isinstance(cutoff, bool) or not isinstance(cutoff, (int, float)) or not 0 <= cutoff <= 100:
        raise ValueError(f"names.fuzzy_cutoff: expected a score in [0, 100], got {cutoff!r}")
    out["fuzzy_cutoff"] = float(cutoff)
    return out


@lru_cache(maxsize=1)
def get_picker_settings() -> PickerSettings:
    """Does: Return the validated settings snapshot (cached until reload)."""
    data = load_config(SETTINGS_FILE, mode="validated_dict", validator=validate_picker_settings)
    settings = PickerSettings(**data)
    log.debug(
        "Picker settings loaded: space=%s mode=%s min_spread=%.3f",
        settings.default_space,
        settings.default_mode,
        settings.min_spread,
    )
    return settings


def reload_picker_settings() -> None:
    """Does: Forget the cached snapshot and the underlying file cache."""
    get_picker_settings.cache_clear()
    clear_config_cache()
