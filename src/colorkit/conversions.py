"""Color space conversions (sRGB <-> HSL, CMYK, XYZ, CIE LAB).

All conversions use the D65 reference white and the standard sRGB transfer
curve (linear segment below 0.04045, 2.4 power curve above, symmetric inverse
on reconstruction).

Conventions:
 - ``to_*`` functions accept a ``Color`` (or a plain sequence of >= 3 numbers)
   and return a NamedTuple, or None when the input is malformed.
 - ``from_*`` functions clamp their inputs to the documented ranges and always
   return a valid ``Color``; out-of-gamut LAB/XYZ results are clamped per
   channel.
 - ``to_hsl``, ``to_xyz`` and ``to_lab`` accept an optional ``ColorCache``.

Ranges:
    HSL   hue / saturation / lightness in [0, 1]
    CMYK  cyan / magenta / yellow / key in [0, 1]
    XYZ   [0, ~1.09] (Y of white == 1.0)
    LAB   L in [0, 100], a / b in [-128, 127]
"""

from __future__ import annotations

from typing import Any, NamedTuple, Optional, TYPE_CHECKING

from .cache import CacheCategory, color_key
from .color import Color, coerce_color

if TYPE_CHECKING:  # pragma: no cover
    from .cache import ColorCache

__all__ = [
    "HSLComponents",
    "CMYKComponents",
    "XYZComponents",
    "LABComponents",
    "srgb_to_linear",
    "linear_to_srgb",
    "to_hsl",
    "from_hsl",
    "to_cmyk",
    "from_cmyk",
    "to_xyz",
    "from_xyz",
    "to_lab",
    "from_lab",
]

# sRGB (D65) <-> XYZ
_RGB_TO_XYZ = (
    (0.4124564, 0.3575761, 0.1804375),
    (0.2126729, 0.7151522, 0.0721750),
    (0.0193339, 0.1191920, 0.9503041),
)
_XYZ_TO_RGB = (
    (3.2404542, -1.5371385, -0.4985314),
    (-0.9692660, 1.8760108, 0.0415560),
    (0.0556434, -0.2040259, 1.0572252),
)
D65_WHITE = (0.95047, 1.0, 1.08883)

_LAB_EPSILON = 0.008856
_LAB_KAPPA = 7.787
_LAB_OFFSET = 16.0 / 116.0


class HSLComponents(NamedTuple):
    hue: float
    saturation: float
    lightness: float


class CMYKComponents(NamedTuple):
    cyan: float
    magenta: float
    yellow: float
    key: float


class XYZComponents(NamedTuple):
    x: float
    y: float
    z: float


class LABComponents(NamedTuple):
    l: float  # noqa: E741
    a: float
    b: float


def _clamp(v: float, lo: float = 0.0, hi: float = 1.0) -> float:
    if v != v:
        return lo
    return max(lo, min(hi, v))


def srgb_to_linear(c: float) -> float:
    if c <= 0.04045:
        return c / 12.92
    return ((c + 0.055) / 1.055) ** 2.4


def linear_to_srgb(c: float) -> float:
    if c <= 0.0031308:
        return 12.92 * c
    return 1.055 * (c ** (1 / 2.4)) - 0.055


def _cached(cache: Optional["ColorCache"], category: CacheCategory, color: Color, compute):
    if cache is None:
        return compute()
    return cache.get_or_compute(color_key(category, color), compute, source=color.rgba)


# HSL ------------------------------------------------------------------


def _rgb_to_hsl(r: float, g: float, b: float) -> HSLComponents:
    mx = max(r, g, b)
    mn = min(r, g, b)
    l = (mx + mn) / 2  # noqa: E741
    if mx == mn:
        # Achromatic: hue undefined, reported as 0
        return HSLComponents(0.0, 0.0, l)
    d = mx - mn
    s = d / (2 - mx - mn) if l > 0.5 else d / (mx + mn)
    if mx == r:
        h = ((g - b) / d) % 6
    elif mx == g:
        h = (b - r) / d + 2
    else:
        h = (r - g) / d + 4
    return HSLComponents((h / 6) % 1.0, s, l)


def to_hsl(color: Any, cache: Optional["ColorCache"] = None) -> Optional[HSLComponents]:
    c = coerce_color(color)
    if c is None:
        return None
    return _cached(cache, CacheCategory.HSL, c, lambda: _rgb_to_hsl(c.red, c.green, c.blue))


def from_hsl(hue: float, saturation: float, lightness: float, alpha: float = 1.0) -> Color:
    """Build a color from HSL; hue wraps, saturation / lightness are clamped."""

    def channel(p: float, q: float, t: float) -> float:
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

    h = hue % 1.0 if hue == hue else 0.0
    s = _clamp(saturation)
    l = _clamp(lightness)  # noqa: E741
    if s == 0:
        return Color.clamped(l, l, l, alpha)
    q = l * (1 + s) if l < 0.5 else l + s - l * s
    p = 2 * l - q
    return Color.clamped(
        channel(p, q, h + 1 / 3),
        channel(p, q, h),
        channel(p, q, h - 1 / 3),
        alpha,
    )


# CMYK -----------------------------------------------------------------


def to_cmyk(color: Any) -> Optional[CMYKComponents]:
    c = coerce_color(color)
    if c is None:
        return None
    k = 1.0 - max(c.red, c.green, c.blue)
    if k >= 1.0:
        return CMYKComponents(0.0, 0.0, 0.0, 1.0)
    denom = 1.0 - k
    return CMYKComponents(
        (1.0 - c.red - k) / denom,
        (1.0 - c.green - k) / denom,
        (1.0 - c.blue - k) / denom,
        k,
    )


def from_cmyk(cyan: float, magenta: float, yellow: float, key: float, alpha: float = 1.0) -> Color:
    k = _clamp(key)
    return Color.clamped(
        (1.0 - _clamp(cyan)) * (1.0 - k),
        (1.0 - _clamp(magenta)) * (1.0 - k),
        (1.0 - _clamp(yellow)) * (1.0 - k),
        alpha,
    )


# XYZ ------------------------------------------------------------------


def _rgb_to_xyz(r: float, g: float, b: float) -> XYZComponents:
    lin = (srgb_to_linear(r), srgb_to_linear(g), srgb_to_linear(b))
    return XYZComponents(*(sum(m * v for m, v in zip(row, lin)) for row in _RGB_TO_XYZ))


def to_xyz(color: Any, cache: Optional["ColorCache"] = None) -> Optional[XYZComponents]:
    c = coerce_color(color)
    if c is None:
        return None
    return _cached(cache, CacheCategory.XYZ, c, lambda: _rgb_to_xyz(c.red, c.green, c.blue))


def from_xyz(x: float, y: float, z: float, alpha: float = 1.0) -> Color:
    """Convert XYZ back to sRGB; out-of-gamut channels are clamped."""
    xyz = (x, y, z)
    lin = [sum(m * v for m, v in zip(row, xyz)) for row in _XYZ_TO_RGB]
    r, g, b = (linear_to_srgb(_clamp(v)) for v in lin)
    return Color.clamped(r, g, b, alpha)


# LAB ------------------------------------------------------------------


def _f(t: float) -> float:
    return t ** (1 / 3) if t > _LAB_EPSILON else (_LAB_KAPPA * t) + _LAB_OFFSET


def _f_inv(t: float) -> float:
    t3 = t**3
    return t3 if t3 > _LAB_EPSILON else (t - _LAB_OFFSET) / _LAB_KAPPA


def _xyz_to_lab(xyz: XYZComponents) -> LABComponents:
    xn, yn, zn = D65_WHITE
    fx = _f(xyz.x / xn)
    fy = _f(xyz.y / yn)
    fz = _f(xyz.z / zn)
    return LABComponents(116 * fy - 16, 500 * (fx - fy), 200 * (fy - fz))


def to_lab(color: Any, cache: Optional["ColorCache"] = None) -> Optional[LABComponents]:
    c = coerce_color(color)
    if c is None:
        return None
    return _cached(
        cache,
        CacheCategory.LAB,
        c,
        lambda: _xyz_to_lab(_rgb_to_xyz(c.red, c.green, c.blue)),
    )


def from_lab(l: float, a: float, b: float, alpha: float = 1.0) -> Color:  # noqa: E741
    """Convert CIE LAB to sRGB.

    Inputs are clamped to L in [0, 100] and a / b in [-128, 127]. LAB admits
    colors outside the sRGB gamut; those are clamped per channel.
    """
    fy = (_clamp(l, 0.0, 100.0) + 16) / 116
    fx = _clamp(a, -128.0, 127.0) / 500 + fy
    fz = fy - _clamp(b, -128.0, 127.0) / 200
    xn, yn, zn = D65_WHITE
    return from_xyz(xn * _f_inv(fx), yn * _f_inv(fy), zn * _f_inv(fz), alpha)
