"""
constraints.py
==============

Does: Keep a multi-color selection inside one shared-axis constraint:
      detect which (space, mode) a set already satisfies, normalize a set onto
      a target constraint (optionally randomizing the free axis), evenly spread
      one axis across the set, and run the consent-gated normalization protocol.
Used By: PickerSession, the CLI, and any UI collaborator editing several colors.
Returns: Tuples of hex strings (input order and length preserved) and
         NormalizationOutcome values; nothing here mutates its inputs.

Failure semantics: a color that cannot be decoded is left as-is by every
operation; degenerate spreads return the input unchanged.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass

from palette_studio.picker.compare import (
    all_same_hue_and_saturation,
    all_same_lightness,
    colors_equivalent,
)
from palette_studio.picker.convert import hex_to_rgb, hex_to_space, space_to_hex
from palette_studio.picker.settings import get_picker_settings
from palette_studio.picker.types import (
    HSL,
    SHARED_HUE_SATURATION,
    SHARED_LIGHTNESS,
    AxisMode,
    ColorSet,
    ColorSpace,
    ConfirmNormalization,
    NormalizationContext,
    SpreadAxis,
    as_axis_mode,
    as_color_space,
    as_spread_axis,
)
from palette_studio.utils.log import debug

__all__ = [
    "NormalizationOutcome",
    "DETECTION_ORDER",
    "detect_constraint",
    "satisfies_constraint",
    "normalize_colors",
    "spread_axis",
    "spread_hue",
    "spread_saturation",
    "spread_lightness",
    "request_normalization",
    "initialize_colors",
]
__docformat__ = "google"

logger = logging.getLogger(__name__)

# Tie-break: HSL before OKHSL, shared lightness before shared hue/saturation.
DETECTION_ORDER: tuple[tuple[ColorSpace, AxisMode], ...] = (
    ("hsl", SHARED_LIGHTNESS),
    ("hsl", SHARED_HUE_SATURATION),
    ("okhsl", SHARED_LIGHTNESS),
    ("okhsl", SHARED_HUE_SATURATION),
)

_CHANNEL = {"hue": 0, "saturation": 1, "lightness": 2}


@dataclass(frozen=True)
class NormalizationOutcome:
    """Result of one run of the normalization protocol.

    Attributes:
        context: Which trigger asked for the normalization.
        space: Color space the caller should switch to when `accepted`.
        mode: Axis mode the caller should switch to when `accepted`.
        colors: Colors to display; the input set unless a change was accepted.
        changed: The target constraint required editing at least one color.
        accepted: The switch may be applied (no change needed, or confirmed).
        reset_history: Accepted initialization that changed colors; the
            caller starts a fresh color history from `colors`.
    """

    context: NormalizationContext
    space: ColorSpace
    mode: AxisMode
    colors: ColorSet
    changed: bool
    accepted: bool
    reset_history: bool = False

    @property
    def declined(self) -> bool:
        return self.changed and not self.accepted


# =============================================================================
# 1) DETECTION
# =============================================================================

def satisfies_constraint(colors: Sequence[str], mode: AxisMode, space: ColorSpace) -> bool:
    """Does: True when the whole set already shares the axis `mode` fixes."""
    if mode == SHARED_LIGHTNESS:
        return all_same_lightness(colors, space)
    return all_same_hue_and_saturation(colors, space)


def detect_constraint(
    colors: Sequence[str],
    default_space: ColorSpace | None = None,
    default_mode: AxisMode | None = None,
) -> tuple[ColorSpace, AxisMode]:
    """Does: Return the first (space, mode) in DETECTION_ORDER the set satisfies.

    Sets with at most one color, and sets matching nothing, get the defaults
    (from the picker settings when not given).
    """
    settings = get_picker_settings()
    fallback = (
        as_color_space(default_space) if default_space else settings.default_space,
        as_axis_mode(default_mode) if default_mode else settings.default_mode,
    )
    if len(colors) <= 1:
        return fallback

    for space, mode in DETECTION_ORDER:
        if satisfies_constraint(colors, mode, space):
            logger.debug("Detected constraint %s/%s for %d colors", space, mode, len(colors))
            return space, mode

    debug(f"no constraint matched {list(colors)}; using defaults {fallback}", topic="constraints")
    return fallback


# =============================================================================
# 2) NORMALIZATION
# =============================================================================

def _check_anchor(colors: Sequence[str], anchor_index: int) -> None:
    if not 0 <= anchor_index < len(colors):
        raise IndexError(f"anchor index {anchor_index} out of range for {len(colors)} colors")


def normalize_colors(
    colors: Sequence[str],
    anchor_index: int,
    mode: AxisMode,
    space: ColorSpace,
    randomize: bool = False,
    rng: random.Random | None = None,
) -> ColorSet:
    """Does: Move every non-anchor color onto the anchor's shared axis.

    shared_lightness keeps each color's hue/saturation (or draws random ones)
    under the anchor's lightness; shared_hue_saturation keeps each color's
    lightness (or draws a random one) under the anchor's hue and saturation.
    The anchor itself is never touched.
    """
    mode = as_axis_mode(mode)
    space = as_color_space(space)
    current = tuple(colors)
    if not current:
        return current
    _check_anchor(current, anchor_index)

    ref = hex_to_space(current[anchor_index], space)
    if ref is None:
        logger.debug("Anchor %r is malformed; normalization skipped", current[anchor_index])
        return current

    rng = rng or random.Random()
    ranges = get_picker_settings().random_ranges
    out = list(current)
    for i, color in enumerate(current):
        if i == anchor_index:
            continue
        values = hex_to_space(color, space)
        if values is None:
            logger.debug("Skipping malformed color %r at index %d", color, i)
            continue

        if mode == SHARED_LIGHTNESS:
            h = rng.uniform(*ranges["hue"]) % 1.0 if randomize else values[0]
            s = rng.uniform(*ranges["saturation"]) if randomize else values[1]
            out[i] = space_to_hex(h, s, ref[2], space)
        else:
            l = rng.uniform(*ranges["lightness"]) if randomize else values[2]
            out[i] = space_to_hex(ref[0], ref[1], l, space)

    return tuple(out)


# =============================================================================
# 3) SPREADING
# =============================================================================

def spread_hue(colors: Sequence[str], anchor_index: int, space: ColorSpace) -> ColorSet:
    """Does: Space hues 1/N turn apart starting at the anchor, in index order.

    Every non-anchor color takes the anchor's saturation and lightness.
    """
    current = tuple(colors)
    n = len(current)
    if n < 2:
        return current
    _check_anchor(current, anchor_index)

    ref = hex_to_space(current[anchor_index], space)
    if ref is None:
        return current
    h0, s0, l0 = ref

    out = list(current)
    for i, color in enumerate(current):
        if i == anchor_index or hex_to_rgb(color) is None:
            continue
        out[i] = space_to_hex((h0 + (i - anchor_index) / n) % 1.0, s0, l0, space)
    return tuple(out)


def _widen(lo: float, hi: float, min_range: float) -> tuple[float, float]:
    """Grow [lo, hi] symmetrically to at least `min_range`, staying inside [0, 1]."""
    gap = min_range - (hi - lo)
    if gap <= 0:
        return lo, hi
    lo, hi = lo - gap / 2, hi + gap / 2
    if lo < 0:
        hi, lo = min(1.0, hi - lo), 0.0
    if hi > 1:
        lo, hi = max(0.0, lo - (hi - 1.0)), 1.0
    return lo, hi


def _spread_channel(colors: Sequence[str], channel: int, space: ColorSpace) -> ColorSet:
    current = tuple(colors)
    decoded: list[tuple[int, HSL]] = []
    for i, color in enumerate(current):
        values = hex_to_space(color, space)
        if values is not None:
            decoded.append((i, values))
    if len(decoded) < 3:
        return current

    lo = min(v[channel] for _, v in decoded)
    hi = max(v[channel] for _, v in decoded)
    lo, hi = _widen(lo, hi, get_picker_settings().min_spread)

    # sorted() is stable: equal values keep their original index order
    ranked = sorted(decoded, key=lambda item: item[1][channel])
    step = (hi - lo) / (len(ranked) - 1)

    out = list(current)
    for rank, (i, values) in enumerate(ranked):
        new = list(values)
        new[channel] = lo + step * rank
        out[i] = space_to_hex(new[0], new[1], new[2], space)
    return tuple(out)


def spread_saturation(colors: Sequence[str], space: ColorSpace) -> ColorSet:
    """Does: Evenly space saturations over the set's range, keeping rank order."""
    return _spread_channel(colors, _CHANNEL["saturation"], space)


def spread_lightness(colors: Sequence[str], space: ColorSpace) -> ColorSet:
    """Does: Evenly space lightnesses over the set's range, keeping rank order."""
    return _spread_channel(colors, _CHANNEL["lightness"], space)


def spread_axis(
    colors: Sequence[str],
    axis: SpreadAxis,
    anchor_index: int,
    space: ColorSpace,
) -> ColorSet:
    """Does: Dispatch to the hue/saturation/lightness spread."""
    axis = as_spread_axis(axis)
    space = as_color_space(space)
    if axis == "hue":
        return spread_hue(colors, anchor_index, space)
    if axis == "saturation":
        return spread_saturation(colors, space)
    return spread_lightness(colors, space)


# =============================================================================
# 4) NORMALIZATION PROTOCOL
# =============================================================================

async def request_normalization(
    colors: Sequence[str],
    anchor_index: int,
    mode: AxisMode,
    space: ColorSpace,
    context: NormalizationContext,
    confirm: ConfirmNormalization | None = None,
    randomize: bool = False,
    rng: random.Random | None = None,
) -> NormalizationOutcome:
    """Does: Normalize onto (space, mode), asking `confirm` before changing colors.

    A set that already satisfies the constraint, or whose normalization is
    equivalent to itself, is accepted without asking. Otherwise the proposed
    set stays local until `confirm(context)` resolves; rejection returns the
    original colors with `accepted=False`. Without a `confirm` callback the
    change is accepted.
    """
    mode = as_axis_mode(mode)
    space = as_color_space(space)
    current = tuple(colors)

    if len(current) <= 1 or satisfies_constraint(current, mode, space):
        return NormalizationOutcome(context, space, mode, current, changed=False, accepted=True)

    proposed = normalize_colors(current, anchor_index, mode, space, randomize=randomize, rng=rng)
    if colors_equivalent(proposed, current, space):
        return NormalizationOutcome(context, space, mode, current, changed=False, accepted=True)

    confirmed = True if confirm is None else bool(await confirm(context))
    if not confirmed:
        logger.info("Normalization to %s/%s declined (%s)", space, mode, context)
        return NormalizationOutcome(context, space, mode, current, changed=True, accepted=False)

    logger.info("Normalized %d colors to %s/%s (%s)", len(proposed), space, mode, context)
    return NormalizationOutcome(
        context,
        space,
        mode,
        proposed,
        changed=True,
        accepted=True,
        reset_history=context == "initialization",
    )


async def initialize_colors(
    colors: Sequence[str],
    anchor_index: int = 0,
    default_space: ColorSpace | None = None,
    default_mode: AxisMode | None = None,
    confirm: ConfirmNormalization | None = None,
) -> NormalizationOutcome:
    """Does: Detect the set's constraint and normalize onto it (no randomizing)."""
    space, mode = detect_constraint(colors, default_space, default_mode)
    return await request_normalization(
        colors, anchor_index, mode, space, "initialization", confirm=confirm
    )
