"""
contrast.py
===========

Does: WCAG 2.x relative luminance and contrast ratio for the bottom-bar
      readout (ratio, AA/AAA pass flags, black-or-white text color).
Returns: Floats and a small rating dataclass.
"""

from __future__ import annotations

from dataclasses import dataclass

from palette_studio.picker.convert import hex_to_rgb

__all__ = [
    "ContrastRating",
    "relative_luminance",
    "contrast_ratio",
    "contrast_text_color",
    "wcag_rating",
]

AA_NORMAL = 4.5
AAA_NORMAL = 7.0


@dataclass(frozen=True)
class ContrastRating:
    ratio: float
    aa: bool
    aaa: bool


def _channel(c: int) -> float:
    v = c / 255.0
    return v / 12.92 if v <= 0.03928 else ((v + 0.055) / 1.055) ** 2.4


def relative_luminance(color: str) -> float:
    rgb = hex_to_rgb(color)
    if rgb is None:
        raise ValueError(f"Not a hex color: {color!r}")
    r, g, b = (_channel(c) for c in rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(color1: str, color2: str) -> float:
    """Does: (L_lighter + 0.05) / (L_darker + 0.05), in [1, 21]."""
    l1, l2 = relative_luminance(color1), relative_luminance(color2)
    return (max(l1, l2) + 0.05) / (min(l1, l2) + 0.05)


def contrast_text_color(background: str) -> str:
    return "#000000" if relative_luminance(background) > 0.5 else "#ffffff"


def wcag_rating(ratio: float) -> ContrastRating:
    return ContrastRating(ratio=ratio, aa=ratio >= AA_NORMAL, aaa=ratio >= AAA_NORMAL)
