"""
names.py
========

Does: Resolve free text typed into the hex field (hex digits, CSS names,
      XKCD names, or a near-miss spelling of either) to a canonical hex, and
      find the closest named color for a hex (labels/tooltips).
Used By: Hex input handling in UI collaborators and the CLI.
Returns: '#rrggbb' strings or names; None when nothing matches.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache

import webcolors
from rapidfuzz import fuzz, process  # performant, no numpy dependency

from palette_studio.picker.convert import (
    hex_to_rgb,
    linear_srgb_to_oklab,
    rgb_to_hex,
    srgb_transfer_inv,
)
from palette_studio.picker.settings import get_picker_settings
from palette_studio.picker.types import RGB

__all__ = [
    "normalize_name",
    "named_colors",
    "resolve_color_input",
    "nearest_color_name",
    "oklab_distance",
]
__docformat__ = "google"

logger = logging.getLogger(__name__)


def normalize_name(text: str) -> str:
    """Does: Lowercase, map '_'/'-' to spaces, and collapse whitespace."""
    t = (text or "").lower().strip().replace("_", " ").replace("-", " ")
    return re.sub(r"\s+", " ", t)


# =============================================================================
# 1) NAMED COLOR MAP (lazy import)
# =============================================================================

@lru_cache(maxsize=1)
def named_colors() -> dict[str, str]:
    """Does: Merge CSS and XKCD colors into {normalized name: '#rrggbb'}.

    CSS names win on collisions; matplotlib is imported on first use only.
    """
    from matplotlib.colors import CSS4_COLORS, XKCD_COLORS

    named: dict[str, str] = {}
    for css_name, hx in CSS4_COLORS.items():
        named[normalize_name(css_name)] = webcolors.normalize_hex(hx)
    for xkcd_name, hx in XKCD_COLORS.items():
        named.setdefault(normalize_name(xkcd_name.replace("xkcd:", "")), webcolors.normalize_hex(hx))
    logger.debug("Loaded %d named colors", len(named))
    return named


# =============================================================================
# 2) RESOLUTION
# =============================================================================

def resolve_color_input(text: str, *, fuzzy: bool = True) -> str | None:
    """Does: Turn hex text or a color name into a canonical '#rrggbb'.

    Order: hex digits → exact CSS name (webcolors) → exact CSS/XKCD name
    (matplotlib) → fuzzy match over all names (rapidfuzz, cutoff from settings).
    """
    if not isinstance(text, str) or not text.strip():
        return None

    rgb = hex_to_rgb(text.strip())
    if rgb is not None:
        return rgb_to_hex(*rgb)

    key = normalize_name(text)
    try:
        return webcolors.name_to_hex(key.replace(" ", ""))
    except ValueError:
        pass

    names = named_colors()
    if key in names:
        return names[key]
    if not fuzzy:
        return None

    hit = process.extractOne(
        key,
        list(names),
        scorer=fuzz.WRatio,
        score_cutoff=get_picker_settings().fuzzy_cutoff,
    )
    if hit is None:
        logger.debug("No color name close to %r", text)
        return None
    name, score, _ = hit
    logger.debug("Fuzzy color match %r → %r (score=%.1f)", text, name, score)
    return names[name]


# =============================================================================
# 3) NEAREST NAME
# =============================================================================

@lru_cache(maxsize=8192)
def _oklab(rgb: RGB) -> tuple[float, float, float]:
    r, g, b = (srgb_transfer_inv(c / 255.0) for c in rgb)
    return linear_srgb_to_oklab(r, g, b)


def oklab_distance(rgb1: RGB, rgb2: RGB) -> float:
    """Does: Euclidean distance in OKLab (≈ perceived difference)."""
    L1, a1, b1 = _oklab(rgb1)
    L2, a2, b2 = _oklab(rgb2)
    return ((L1 - L2) ** 2 + (a1 - a2) ** 2 + (b1 - b2) ** 2) ** 0.5


def nearest_color_name(color: str, known: dict[str, str] | None = None) -> str | None:
    """Does: Return the named color closest to `color` (None if malformed)."""
    rgb = hex_to_rgb(color)
    if rgb is None:
        return None
    known = known or named_colors()
    best_name, best_d = None, float("inf")
    for name, hx in known.items():
        ref = hex_to_rgb(hx)
        if ref is None:
            continue
        d = oklab_distance(rgb, ref)
        if d < best_d:
            best_name, best_d = name, d
    return best_name
