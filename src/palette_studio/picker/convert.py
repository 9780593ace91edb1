"""
convert.py
==========

Does: Convert colors between hex, sRGB, HSL and OKHSL (Björn Ottosson's
      perceptual hue/saturation/lightness construction on top of OKLab).
Used By: compare, constraints, session, and any per-pixel renderer that
         paints wheel/slider gradients through `get_converter(space)`.
Returns: Hex strings ('#rrggbb', lowercase), 8-bit RGB triples, and
         (h, s, l) triples with every channel in [0, 1] (hue in turns).

Notes:
  * Hex input accepts 3 or 6 hex digits with or without '#'; anything else
    decodes to None (callers skip that color).
  * The gamut cusp search is a fixed polynomial guess plus one Halley step,
    so every conversion is O(1) and allocation-light.
"""

from __future__ import annotations

import math
import re

import webcolors

from palette_studio.picker.types import HSL, RGB, ColorModeConverter, ColorSpace

__all__ = [
    "hex_to_rgb",
    "rgb_to_hex",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "hsl_to_hex",
    "hex_to_hsl",
    "srgb_transfer",
    "srgb_transfer_inv",
    "linear_srgb_to_oklab",
    "oklab_to_linear_srgb",
    "toe",
    "toe_inv",
    "compute_max_saturation",
    "find_cusp",
    "find_gamut_intersection",
    "get_st_max",
    "get_st_mid",
    "get_cs",
    "srgb_to_okhsl",
    "okhsl_to_srgb",
    "okhsl_to_hex",
    "hex_to_okhsl",
    "hex_to_space",
    "space_to_hex",
    "space_to_rgb",
    "get_converter",
]
__docformat__ = "google"

_HEX_RE = re.compile(r"#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})")

# toe() constants
_K1 = 0.206
_K2 = 0.03
_K3 = (1.0 + _K1) / (1.0 + _K2)


# =============================================================================
# 1) HEX / RGB
# =============================================================================

def _to_byte(x: float) -> int:
    """Round half-up and clamp to [0, 255]."""
    v = math.floor(x + 0.5)
    return 0 if v < 0 else 255 if v > 255 else int(v)


def hex_to_rgb(value: str) -> RGB | None:
    """Does: Decode '#rgb'/'#rrggbb' (the '#' is optional) into an 8-bit triple.

    Returns None for anything that is not exactly 3 or 6 hex digits.
    """
    if not isinstance(value, str):
        return None
    m = _HEX_RE.fullmatch(value)
    if not m:
        return None
    rgb = webcolors.hex_to_rgb(f"#{m.group(1)}")
    return (rgb.red, rgb.green, rgb.blue)


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Does: Encode channels as '#rrggbb' after rounding and clamping each one."""
    return webcolors.rgb_to_hex((_to_byte(r), _to_byte(g), _to_byte(b)))


# =============================================================================
# 2) HSL
# =============================================================================

def rgb_to_hsl(r: float, g: float, b: float) -> HSL:
    """Does: sRGB (0–255) → (h, s, l) with h in [0, 1)."""
    r, g, b = r / 255.0, g / 255.0, b / 255.0
    mx = max(r, g, b)
    mn = min(r, g, b)
    h = s = 0.0
    l = (mx + mn) / 2.0

    if mx != mn:
        d = mx - mn
        s = d / (2.0 - mx - mn) if l > 0.5 else d / (mx + mn)
        if mx == r:
            h = (g - b) / d + (6.0 if g < b else 0.0)
        elif mx == g:
            h = (b - r) / d + 2.0
        else:
            h = (r - g) / d + 4.0
        h /= 6.0

    return (h % 1.0, s, l)


def _hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """Does: (h, s, l) → 8-bit sRGB. Lightness 0/1 short-circuit to black/white."""
    if l <= 0:
        return (0, 0, 0)
    if l >= 1:
        return (255, 255, 255)

    if s <= 0:
        r = g = b = l  # achromatic: hue is irrelevant
    else:
        q = l * (1 + s) if l < 0.5 else l + s - l * s
        p = 2 * l - q
        r = _hue_to_channel(p, q, h + 1 / 3)
        g = _hue_to_channel(p, q, h)
        b = _hue_to_channel(p, q, h - 1 / 3)

    return (_to_byte(r * 255), _to_byte(g * 255), _to_byte(b * 255))


def hsl_to_hex(h: float, s: float, l: float) -> str:
    return rgb_to_hex(*hsl_to_rgb(h, s, l))


def hex_to_hsl(value: str) -> HSL | None:
    rgb = hex_to_rgb(value)
    if rgb is None:
        return None
    return rgb_to_hsl(*rgb)


# =============================================================================
# 3) OKLAB
# =============================================================================

def _cbrt(x: float) -> float:
    return math.copysign(abs(x) ** (1.0 / 3.0), x)


def srgb_transfer(a: float) -> float:
    """Does: Linear → gamma-encoded sRGB (0–1)."""
    return 12.92 * a if a <= 0.0031308 else 1.055 * a ** (1 / 2.4) - 0.055


def srgb_transfer_inv(a: float) -> float:
    """Does: Gamma-encoded sRGB (0–1) → linear."""
    return a / 12.92 if a <= 0.04045 else ((a + 0.055) / 1.055) ** 2.4


def linear_srgb_to_oklab(r: float, g: float, b: float) -> tuple[float, float, float]:
    l = 0.4122214708 * r + 0.5363325363 * g + 0.0514459929 * b
    m = 0.2119034982 * r + 0.6806995451 * g + 0.1073969566 * b
    s = 0.0883024619 * r + 0.2817188376 * g + 0.6299787005 * b

    l_ = _cbrt(l)
    m_ = _cbrt(m)
    s_ = _cbrt(s)

    return (
        0.2104542553 * l_ + 0.7936177850 * m_ - 0.0040720468 * s_,
        1.9779984951 * l_ - 2.4285922050 * m_ + 0.4505937099 * s_,
        0.0259040371 * l_ + 0.7827717662 * m_ - 0.8086757660 * s_,
    )


def oklab_to_linear_srgb(L: float, a: float, b: float) -> tuple[float, float, float]:
    l_ = L + 0.3963377774 * a + 0.2158037573 * b
    m_ = L - 0.1055613458 * a - 0.0638541728 * b
    s_ = L - 0.0894841775 * a - 1.2914855480 * b

    l = l_ * l_ * l_
    m = m_ * m_ * m_
    s = s_ * s_ * s_

    return (
        +4.0767416621 * l - 3.3077115913 * m + 0.2309699292 * s,
        -1.2684380046 * l + 2.6097574011 * m - 0.3413193965 * s,
        -0.0041960863 * l - 0.7034186147 * m + 1.7076147010 * s,
    )


def toe(x: float) -> float:
    """Does: Remap OKLab L to the perceptual lightness used by OKHSL."""
    return 0.5 * (_K3 * x - _K1 + math.sqrt((_K3 * x - _K1) ** 2 + 4 * _K2 * _K3 * x))


def toe_inv(x: float) -> float:
    """Does: Exact algebraic inverse of toe()."""
    return (x * x + _K1 * x) / (_K3 * (x + _K2))


# =============================================================================
# 4) GAMUT GEOMETRY
# =============================================================================

def compute_max_saturation(a: float, b: float) -> float:
    """Does: Max S = C/L for hue (a, b) that stays in sRGB; (a, b) must be unit length."""
    # whichever of r, g, b hits zero first bounds the saturation
    if -1.88170328 * a - 0.80936493 * b > 1:
        k0, k1, k2, k3, k4 = 1.19086277, 1.76576728, 0.59662641, 0.75515197, 0.56771245
        wl, wm, ws = 4.0767416621, -3.3077115913, 0.2309699292
    elif 1.81444104 * a - 1.19445276 * b > 1:
        k0, k1, k2, k3, k4 = 0.73956515, -0.45954404, 0.08285427, 0.12541070, 0.14503204
        wl, wm, ws = -1.2684380046, 2.6097574011, -0.3413193965
    else:
        k0, k1, k2, k3, k4 = 1.35733652, -0.00915799, -1.15130210, -0.50559606, 0.00692167
        wl, wm, ws = -0.0041960863, -0.7034186147, 1.7076147010

    S = k0 + k1 * a + k2 * b + k3 * a * a + k4 * a * b

    kl = 0.3963377774 * a + 0.2158037573 * b
    km = -0.1055613458 * a - 0.0638541728 * b
    ks = -0.0894841775 * a - 1.2914855480 * b

    # one Halley step
    l_ = 1 + S * kl
    m_ = 1 + S * km
    s_ = 1 + S * ks

    l = l_ * l_ * l_
    m = m_ * m_ * m_
    s = s_ * s_ * s_

    l_ds = 3 * kl * l_ * l_
    m_ds = 3 * km * m_ * m_
    s_ds = 3 * ks * s_ * s_

    l_ds2 = 6 * kl * kl * l_
    m_ds2 = 6 * km * km * m_
    s_ds2 = 6 * ks * ks * s_

    f = wl * l + wm * m + ws * s
    f1 = wl * l_ds + wm * m_ds + ws * s_ds
    f2 = wl * l_ds2 + wm * m_ds2 + ws * s_ds2

    return S - f * f1 / (f1 * f1 - 0.5 * f * f2)


def find_cusp(a: float, b: float) -> tuple[float, float]:
    """Does: Return (L_cusp, C_cusp), the most saturated in-gamut point for the hue."""
    s_cusp = compute_max_saturation(a, b)
    r, g, bl = oklab_to_linear_srgb(1, s_cusp * a, s_cusp * b)
    l_cusp = _cbrt(1 / max(r, g, bl))
    return (l_cusp, l_cusp * s_cusp)


def find_gamut_intersection(
    a: float,
    b: float,
    L1: float,
    C1: float,
    L0: float,
    cusp: tuple[float, float] | None = None,
) -> float:
    """Does: Find t where the line (L0, 0) → (L1, C1) leaves the gamut triangle."""
    if cusp is None:
        cusp = find_cusp(a, b)
    l_cusp, c_cusp = cusp

    if (L1 - L0) * c_cusp - (l_cusp - L0) * C1 <= 0:
        # lower half
        return c_cusp * L0 / (C1 * l_cusp + c_cusp * (L0 - L1))
    # upper half
    return c_cusp * (L0 - 1) / (C1 * (l_cusp - 1) + c_cusp * (L0 - L1))


def get_st_max(a: float, b: float, cusp: tuple[float, float] | None = None) -> tuple[float, float]:
    if cusp is None:
        cusp = find_cusp(a, b)
    L, C = cusp
    return (C / L, C / (1 - L))


def get_st_mid(a: float, b: float) -> tuple[float, float]:
    """Does: Smooth approximation of the cusp's (S, T), used for the mid chroma."""
    s = 0.11516993 + 1 / (
        7.44778970
        + 4.15901240 * b
        + a * (
            -2.19557347
            + 1.75198401 * b
            + a * (-2.13704948 - 10.02301043 * b + a * (-4.24894561 + 5.38770819 * b + 4.69891013 * a))
        )
    )
    t = 0.11239642 + 1 / (
        1.61320320
        - 0.68124379 * b
        + a * (
            0.40370612
            + 0.90148123 * b
            + a * (-0.27087943 + 0.61223990 * b + a * (0.00299215 - 0.45399568 * b - 0.14661872 * a))
        )
    )
    return (s, t)


def get_cs(L: float, a: float, b: float) -> tuple[float, float, float]:
    """Does: Return (C0, CMid, CMax), the chroma anchors for OKHSL saturation 0→0.8→1."""
    cusp = find_cusp(a, b)

    c_max = find_gamut_intersection(a, b, L, 1, L, cusp)
    s_max, t_max = get_st_max(a, b, cusp)
    s_mid, t_mid = get_st_mid(a, b)

    k = c_max / min(L * s_max, (1 - L) * t_max)

    ca = L * s_mid
    cb = (1 - L) * t_mid
    c_mid = 0.9 * k * math.sqrt(math.sqrt(1 / (1 / ca ** 4 + 1 / cb ** 4)))

    ca = L * 0.4
    cb = (1 - L) * 0.8
    c_0 = math.sqrt(1 / (1 / (ca * ca) + 1 / (cb * cb)))

    return (c_0, c_mid, c_max)


# =============================================================================
# 5) OKHSL
# =============================================================================

def okhsl_to_srgb(h: float, s: float, l: float) -> RGB:
    """Does: OKHSL (all channels 0–1) → 8-bit sRGB."""
    if l <= 0:
        return (0, 0, 0)
    if l >= 1:
        return (255, 255, 255)

    # grays: hue is irrelevant, any unit direction works
    if s == 0:
        a, b = 1.0, 0.0
    else:
        a = math.cos(2 * math.pi * h)
        b = math.sin(2 * math.pi * h)
    L = toe_inv(l)
    if L < 0.0001:
        return (0, 0, 0)

    c_0, c_mid, c_max = get_cs(L, a, b)

    if s < 0.8:
        t = 1.25 * s
        k0 = 0.0
        k1 = 0.8 * c_0
        k2 = 1 - k1 / c_mid
    else:
        t = 5 * (s - 0.8)
        k0 = c_mid
        k1 = 0.2 * c_mid * c_mid * 1.25 * 1.25 / c_0
        k2 = 1 - k1 / (c_max - c_mid)

    C = k0 + t * k1 / (1 - k2 * t)

    r, g, bl = oklab_to_linear_srgb(L, C * a, C * b)
    return (
        _to_byte(255 * srgb_transfer(r)),
        _to_byte(255 * srgb_transfer(g)),
        _to_byte(255 * srgb_transfer(bl)),
    )


def srgb_to_okhsl(r: float, g: float, b: float) -> HSL:
    """Does: 8-bit sRGB → OKHSL (h in [0, 1), s and l in [0, 1])."""
    if r <= 0 and g <= 0 and b <= 0:
        return (0.0, 0.0, 0.0)
    if r >= 255 and g >= 255 and b >= 255:
        return (0.0, 0.0, 1.0)

    L, lab_a, lab_b = linear_srgb_to_oklab(
        srgb_transfer_inv(r / 255),
        srgb_transfer_inv(g / 255),
        srgb_transfer_inv(b / 255),
    )

    C = math.sqrt(lab_a * lab_a + lab_b * lab_b)
    a_ = lab_a / C if C > 0 else 1.0
    b_ = lab_b / C if C > 0 else 0.0

    h = (0.5 + 0.5 * math.atan2(-lab_b, -lab_a) / math.pi) % 1.0

    c_0, c_mid, c_max = get_cs(L, a_, b_)

    if C < c_mid:
        k1 = 0.8 * c_0
        k2 = 1 - k1 / c_mid
        t = C / (k1 + k2 * C)
        s = t * 0.8
    else:
        k0 = c_mid
        k1 = 0.2 * c_mid * c_mid * 1.25 * 1.25 / c_0
        k2 = 1 - k1 / (c_max - c_mid)
        t = (C - k0) / (k1 + k2 * (C - k0))
        s = 0.8 + 0.2 * t

    return (h, s, toe(L))


def okhsl_to_hex(h: float, s: float, l: float) -> str:
    return rgb_to_hex(*okhsl_to_srgb(h, s, l))


def hex_to_okhsl(value: str) -> HSL | None:
    rgb = hex_to_rgb(value)
    if rgb is None:
        return None
    return srgb_to_okhsl(*rgb)


# =============================================================================
# 6) SPACE DISPATCH
# =============================================================================

def hex_to_space(value: str, space: ColorSpace) -> HSL | None:
    """Does: Decode hex into the (h, s, l) triple of `space`; None if malformed."""
    if space == "hsl":
        return hex_to_hsl(value)
    if space == "okhsl":
        return hex_to_okhsl(value)
    raise ValueError(f"Unknown color space '{space}'")


def space_to_hex(h: float, s: float, l: float, space: ColorSpace) -> str:
    if space == "hsl":
        return hsl_to_hex(h, s, l)
    if space == "okhsl":
        return okhsl_to_hex(h, s, l)
    raise ValueError(f"Unknown color space '{space}'")


def space_to_rgb(h: float, s: float, l: float, space: ColorSpace) -> RGB:
    if space == "hsl":
        return hsl_to_rgb(h, s, l)
    if space == "okhsl":
        return okhsl_to_srgb(h, s, l)
    raise ValueError(f"Unknown color space '{space}'")


_CONVERTERS: dict[str, ColorModeConverter] = {
    "hsl": ColorModeConverter(to_hex=hsl_to_hex, to_rgb=hsl_to_rgb),
    "okhsl": ColorModeConverter(to_hex=okhsl_to_hex, to_rgb=okhsl_to_srgb),
}


def get_converter(space: ColorSpace) -> ColorModeConverter:
    """Does: Return the (to_hex, to_rgb) pair a renderer calls per pixel."""
    try:
        return _CONVERTERS[space]
    except KeyError:
        raise ValueError(f"Unknown color space '{space}'") from None
