"""
picker.
=======

Does: Aggregate the constrained multi-color model: color-space math, tolerance
      comparisons, the group-constraint engine, and the picker session.
Used By: UI collaborators (wheel/slider renderers, dialogs) and the CLI.
Returns: Pure functions over hex strings and (h, s, l) triples, plus PickerSession.
"""

from .compare import (
    all_same_hue_and_saturation,
    all_same_lightness,
    colors_equivalent,
    derived_color,
    have_same_hue_and_saturation,
    have_same_lightness,
    is_valid_hex_color,
)
from .constraints import (
    NormalizationOutcome,
    detect_constraint,
    initialize_colors,
    normalize_colors,
    request_normalization,
    spread_axis,
)
from .convert import (
    get_converter,
    hex_to_hsl,
    hex_to_okhsl,
    hex_to_rgb,
    hex_to_space,
    hsl_to_hex,
    hsl_to_rgb,
    okhsl_to_hex,
    okhsl_to_srgb,
    rgb_to_hex,
    rgb_to_hsl,
    space_to_hex,
    srgb_to_okhsl,
)
from .session import PickerSession
from .types import (
    SHARED_HUE_SATURATION,
    SHARED_LIGHTNESS,
    AxisMode,
    ColorModeConverter,
    ColorSpace,
    NormalizationContext,
    SpreadAxis,
    as_axis_mode,
    as_color_space,
)

__all__ = [
    # types
    "ColorSpace",
    "AxisMode",
    "SpreadAxis",
    "NormalizationContext",
    "ColorModeConverter",
    "SHARED_LIGHTNESS",
    "SHARED_HUE_SATURATION",
    "as_color_space",
    "as_axis_mode",
    # convert
    "hex_to_rgb",
    "rgb_to_hex",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "hsl_to_hex",
    "hex_to_hsl",
    "srgb_to_okhsl",
    "okhsl_to_srgb",
    "okhsl_to_hex",
    "hex_to_okhsl",
    "hex_to_space",
    "space_to_hex",
    "get_converter",
    # compare
    "have_same_lightness",
    "have_same_hue_and_saturation",
    "all_same_lightness",
    "all_same_hue_and_saturation",
    "colors_equivalent",
    "is_valid_hex_color",
    "derived_color",
    # constraints
    "NormalizationOutcome",
    "detect_constraint",
    "normalize_colors",
    "spread_axis",
    "request_normalization",
    "initialize_colors",
    # session
    "PickerSession",
]
