"""
compare.py
==========

Does: Tolerance-based color comparisons ("same lightness", "same hue and
      saturation") in a given color space, plus set-level checks and a few
      hex helpers the picker uses when editing single channels.
Used By: constraint detection, change-significance tests in the
         normalization protocol, and the session's hex/HSL edits.
Returns: Booleans; derived_color returns a hex string.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from palette_studio.picker.convert import hex_to_space, space_to_hex
from palette_studio.picker.settings import get_picker_settings
from palette_studio.picker.types import HSL, ColorSpace

__all__ = [
    "ColorLike",
    "have_same_lightness",
    "have_same_hue_and_saturation",
    "all_same_lightness",
    "all_same_hue_and_saturation",
    "colors_equivalent",
    "hue_distance",
    "is_valid_hex_color",
    "derived_color",
]
__docformat__ = "google"

logger = logging.getLogger(__name__)

ColorLike = str | HSL

_STRICT_HEX_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


def _as_triple(color: ColorLike, space: ColorSpace) -> HSL | None:
    if isinstance(color, str):
        return hex_to_space(color, space)
    return color


def hue_distance(h1: float, h2: float) -> float:
    """Does: Plain difference of two hues in turns (no wraparound at 0/1)."""
    return abs(h1 - h2)


def have_same_lightness(a: ColorLike, b: ColorLike, space: ColorSpace = "hsl") -> bool:
    """Does: True when both colors' lightness differ by less than the space tolerance."""
    t1, t2 = _as_triple(a, space), _as_triple(b, space)
    if t1 is None or t2 is None:
        return False
    tol = get_picker_settings().tolerance(space)
    return abs(t1[2] - t2[2]) < tol.lightness


def have_same_hue_and_saturation(a: ColorLike, b: ColorLike, space: ColorSpace = "hsl") -> bool:
    """Does: True when hue and saturation both sit inside the space tolerances."""
    t1, t2 = _as_triple(a, space), _as_triple(b, space)
    if t1 is None or t2 is None:
        return False
    tol = get_picker_settings().tolerance(space)
    return hue_distance(t1[0], t2[0]) < tol.hue and abs(t1[1] - t2[1]) < tol.saturation


def all_same_lightness(colors: Sequence[ColorLike], space: ColorSpace = "hsl") -> bool:
    """Does: Every color matches colors[0] on lightness (empty/single → True)."""
    if not colors:
        return True
    ref = _as_triple(colors[0], space)
    return all(have_same_lightness(c, ref, space) for c in colors) if ref else False


def all_same_hue_and_saturation(colors: Sequence[ColorLike], space: ColorSpace = "hsl") -> bool:
    """Does: Every color matches colors[0] on hue and saturation."""
    if not colors:
        return True
    ref = _as_triple(colors[0], space)
    return all(have_same_hue_and_saturation(c, ref, space) for c in colors) if ref else False


def colors_equivalent(
    colors1: Sequence[ColorLike],
    colors2: Sequence[ColorLike],
    space: ColorSpace = "hsl",
) -> bool:
    """Does: Element-wise equivalence of two color sets within the space tolerances.

    Two sets are equivalent when they have the same length and every pair of
    colors at the same index agrees on hue, saturation and lightness.
    """
    if len(colors1) != len(colors2):
        return False
    return all(
        have_same_hue_and_saturation(c1, c2, space) and have_same_lightness(c1, c2, space)
        for c1, c2 in zip(colors1, colors2)
    )


def is_valid_hex_color(value: object) -> bool:
    """Does: Strict '#rrggbb' check (what the core emits)."""
    return isinstance(value, str) and bool(_STRICT_HEX_RE.match(value))


def derived_color(
    color: str,
    space: ColorSpace = "hsl",
    *,
    hue: float | None = None,
    saturation: float | None = None,
    lightness: float | None = None,
) -> str:
    """Does: Replace some channels of `color` in `space`; hue is given in degrees.

    Returns the input unchanged when it cannot be decoded.
    """
    values = hex_to_space(color, space)
    if values is None:
        logger.debug("derived_color: cannot decode %r, returning as-is", color)
        return color
    h = (hue / 360.0) % 1.0 if hue is not None else values[0]
    s = saturation if saturation is not None else values[1]
    l = lightness if lightness is not None else values[2]
    return space_to_hex(h, s, l, space)
