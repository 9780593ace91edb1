"""
color.
======

Does: Display-side color helpers around the picker core: WCAG contrast and
      named-color input/lookup.
Used By: Bottom-bar contrast readout, hex field input, tooltips, the CLI.
"""

from .contrast import (
    ContrastRating,
    contrast_ratio,
    contrast_text_color,
    relative_luminance,
    wcag_rating,
)
from .names import (
    named_colors,
    nearest_color_name,
    resolve_color_input,
)

__all__ = [
    "ContrastRating",
    "relative_luminance",
    "contrast_ratio",
    "contrast_text_color",
    "wcag_rating",
    "named_colors",
    "resolve_color_input",
    "nearest_color_name",
]
