"""
types.py.

Does: Define the tags (color space, axis mode, spread axis, normalization
      context), value aliases, and the converter/confirmation contracts shared
      by the picker core.
Used by: convert, compare, constraints, session, and the CLI.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Literal, cast, get_args

__all__ = [
    "ColorSpace",
    "AxisMode",
    "PickerMode",
    "SpreadAxis",
    "NormalizationContext",
    "HSL",
    "RGB",
    "ColorSet",
    "ConfirmNormalization",
    "ColorModeConverter",
    "SHARED_LIGHTNESS",
    "SHARED_HUE_SATURATION",
    "COLOR_SPACES",
    "AXIS_MODES",
    "SPREAD_AXES",
    "as_color_space",
    "as_axis_mode",
    "as_spread_axis",
    "picker_mode_for",
]

ColorSpace = Literal["hsl", "okhsl"]
AxisMode = Literal["shared_lightness", "shared_hue_saturation"]
PickerMode = Literal["wheel", "slider"]
SpreadAxis = Literal["hue", "saturation", "lightness"]
NormalizationContext = Literal["initialization", "modeChange", "colorSpaceChange"]

HSL = tuple[float, float, float]
RGB = tuple[int, int, int]
ColorSet = tuple[str, ...]

ConfirmNormalization = Callable[[NormalizationContext], Awaitable[bool]]

SHARED_LIGHTNESS: AxisMode = "shared_lightness"
SHARED_HUE_SATURATION: AxisMode = "shared_hue_saturation"

COLOR_SPACES: tuple[ColorSpace, ...] = get_args(ColorSpace)
AXIS_MODES: tuple[AxisMode, ...] = get_args(AxisMode)
SPREAD_AXES: tuple[SpreadAxis, ...] = get_args(SpreadAxis)

# wheel: every color shares one lightness; slider: every color shares hue+saturation
_PICKER_ALIASES: dict[str, AxisMode] = {
    "wheel": SHARED_LIGHTNESS,
    "slider": SHARED_HUE_SATURATION,
}


@dataclass(frozen=True)
class ColorModeConverter:
    """Pair of (h, s, l) → color callables for one color space."""

    to_hex: Callable[[float, float, float], str]
    to_rgb: Callable[[float, float, float], RGB]


def as_color_space(value: str) -> ColorSpace:
    """Does: Validate a color-space tag (case-insensitive)."""
    key = str(value).strip().lower()
    if key not in COLOR_SPACES:
        raise ValueError(f"Unknown color space '{value}' (expected one of {COLOR_SPACES})")
    return cast(ColorSpace, key)


def as_axis_mode(value: str) -> AxisMode:
    """Does: Validate an axis-mode tag, accepting the picker names 'wheel'/'slider'."""
    key = str(value).strip().lower().replace("-", "_")
    if key in _PICKER_ALIASES:
        return _PICKER_ALIASES[key]
    if key not in AXIS_MODES:
        raise ValueError(
            f"Unknown axis mode '{value}' (expected one of {AXIS_MODES} or wheel/slider)"
        )
    return cast(AxisMode, key)


def as_spread_axis(value: str) -> SpreadAxis:
    key = str(value).strip().lower()
    if key not in SPREAD_AXES:
        raise ValueError(f"Unknown spread axis '{value}' (expected one of {SPREAD_AXES})")
    return cast(SpreadAxis, key)


def picker_mode_for(mode: AxisMode) -> PickerMode:
    """Does: Map an axis mode back to the picker widget name."""
    return "wheel" if mode == SHARED_LIGHTNESS else "slider"
