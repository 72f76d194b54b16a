"""Color blending and interpolation.

Provides:
- Blend modes (normal, multiply, screen, overlay, darken, lighten, color
  dodge / burn, hard / soft light, difference, exclusion) with an ``amount``
  factor scaled by the overlay's alpha.
- Interpolation between two colors in RGB, HSL (shortest hue path) or LAB.
- ``gradient(a, b, steps)``: evenly spaced interpolated colors.
- Harmony gradients (complementary, analogous, triadic, monochromatic)
  built on ``gradient``.

Blend(A, B) and blend(B, A) differ in general, so cache keys are ordered.
Full-strength blends and all interpolations are cached when a ``ColorCache``
is supplied.

Public API:
    blend(base, overlay, mode, amount=1.0) -> Color
    interpolate(a, b, amount, space=InterpolationSpace.RGB) -> Color
    gradient(a, b, steps, space=InterpolationSpace.RGB) -> list[Color]
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple, TYPE_CHECKING

from .cache import blend_key, interpolation_key
from .color import Color
from .conversions import from_hsl, from_lab, to_hsl, to_lab

if TYPE_CHECKING:  # pragma: no cover
    from .cache import ColorCache

__all__ = [
    "BlendMode",
    "InterpolationSpace",
    "blend",
    "interpolate",
    "gradient",
    "complementary_gradient",
    "analogous_gradient",
    "triadic_gradient",
    "monochromatic_gradient",
]


class BlendMode(Enum):
    NORMAL = "normal"
    MULTIPLY = "multiply"
    SCREEN = "screen"
    OVERLAY = "overlay"
    DARKEN = "darken"
    LIGHTEN = "lighten"
    COLOR_DODGE = "color-dodge"
    COLOR_BURN = "color-burn"
    HARD_LIGHT = "hard-light"
    SOFT_LIGHT = "soft-light"
    DIFFERENCE = "difference"
    EXCLUSION = "exclusion"


class InterpolationSpace(Enum):
    RGB = "rgb"
    HSL = "hsl"
    LAB = "lab"


def _overlay(base: float, top: float) -> float:
    if base < 0.5:
        return 2 * base * top
    return 1 - 2 * (1 - base) * (1 - top)


def _soft_light(base: float, top: float) -> float:
    if top < 0.5:
        return base - (1 - 2 * top) * base * (1 - base)
    d = ((16 * base - 12) * base + 4) * base if base <= 0.25 else math.sqrt(base)
    return base + (2 * top - 1) * (d - base)


def _color_dodge(base: float, top: float) -> float:
    if top >= 1:
        return 1.0
    if top <= 0:
        return base
    return min(1.0, base / (1 - top))


def _color_burn(base: float, top: float) -> float:
    if top <= 0:
        return 0.0
    if top >= 1:
        return base
    return 1 - min(1.0, (1 - base) / top)


_CHANNEL_FUNCS: Dict[BlendMode, Callable[[float, float], float]] = {
    BlendMode.NORMAL: lambda b, t: t,
    BlendMode.MULTIPLY: lambda b, t: b * t,
    BlendMode.SCREEN: lambda b, t: 1 - (1 - b) * (1 - t),
    BlendMode.OVERLAY: _overlay,
    BlendMode.DARKEN: min,
    BlendMode.LIGHTEN: max,
    BlendMode.COLOR_DODGE: _color_dodge,
    BlendMode.COLOR_BURN: _color_burn,
    BlendMode.HARD_LIGHT: lambda b, t: _overlay(t, b),
    BlendMode.SOFT_LIGHT: _soft_light,
    BlendMode.DIFFERENCE: lambda b, t: abs(b - t),
    BlendMode.EXCLUSION: lambda b, t: b + t - 2 * b * t,
}


def _blend(base: Color, overlay: Color, mode: BlendMode, amount: float) -> Color:
    fn = _CHANNEL_FUNCS[mode]
    factor = amount * overlay.alpha
    channels = [
        b + (fn(b, t) - b) * factor for b, t in zip(base.rgb, overlay.rgb)
    ]
    return Color.clamped(*channels, base.alpha)


def blend(
    base: Color,
    overlay: Color,
    mode: BlendMode = BlendMode.NORMAL,
    amount: float = 1.0,
    cache: Optional["ColorCache"] = None,
) -> Color:
    """Blend ``overlay`` onto ``base``.

    ``amount`` (clamped to [0, 1]) scales the effect; 0 returns ``base``
    unchanged. The base alpha is preserved.
    """
    if amount != amount or amount <= 0:
        return base
    amount = min(1.0, amount)
    if cache is None or amount < 1.0:
        return _blend(base, overlay, mode, amount)
    return cache.get_or_compute(
        blend_key(base, overlay, mode.value),
        lambda: _blend(base, overlay, mode, amount),
        source=(base.rgba, overlay.rgba),
    )


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def _interpolate(a: Color, b: Color, t: float, space: InterpolationSpace) -> Color:
    alpha = _lerp(a.alpha, b.alpha, t)
    if space is InterpolationSpace.HSL:
        h1, s1, l1 = to_hsl(a)
        h2, s2, l2 = to_hsl(b)
        # Take the shorter way around the hue wheel
        if abs(h2 - h1) > 0.5:
            if h1 > h2:
                h2 += 1.0
            else:
                h1 += 1.0
        return from_hsl(_lerp(h1, h2, t) % 1.0, _lerp(s1, s2, t), _lerp(l1, l2, t), alpha)
    if space is InterpolationSpace.LAB:
        lab1 = to_lab(a)
        lab2 = to_lab(b)
        return from_lab(*(_lerp(x, y, t) for x, y in zip(lab1, lab2)), alpha=alpha)
    return Color.clamped(*(_lerp(x, y, t) for x, y in zip(a.rgb, b.rgb)), alpha)


def interpolate(
    a: Color,
    b: Color,
    amount: float,
    space: InterpolationSpace = InterpolationSpace.RGB,
    cache: Optional["ColorCache"] = None,
) -> Color:
    """Interpolate from ``a`` (amount 0) to ``b`` (amount 1) in ``space``."""
    t = 0.0 if amount != amount else max(0.0, min(1.0, amount))
    if cache is None:
        return _interpolate(a, b, t, space)
    return cache.get_or_compute(
        interpolation_key(a, b, t, space.value),
        lambda: _interpolate(a, b, t, space),
        source=(a.rgba, b.rgba, t),
    )


def gradient(
    a: Color,
    b: Color,
    steps: int,
    space: InterpolationSpace = InterpolationSpace.RGB,
    cache: Optional["ColorCache"] = None,
) -> List[Color]:
    """Return ``steps`` colors from ``a`` to ``b`` inclusive (at least 2)."""
    steps = max(2, steps)
    return [interpolate(a, b, i / (steps - 1), space, cache) for i in range(steps)]


# Harmony gradients ------------------------------------------------------


def _rotated(color: Color, offset: float) -> Color:
    h, s, l = to_hsl(color)  # noqa: E741
    return from_hsl(h + offset, s, l, color.alpha)


def complementary_gradient(
    color: Color,
    steps: int,
    space: InterpolationSpace = InterpolationSpace.HSL,
    cache: Optional["ColorCache"] = None,
) -> List[Color]:
    """Gradient from ``color`` to the opposite hue on the HSL wheel."""
    return gradient(color, _rotated(color, 0.5), steps, space, cache)


def analogous_gradient(
    color: Color,
    steps: int,
    angle: float = 30 / 360,
    space: InterpolationSpace = InterpolationSpace.HSL,
    cache: Optional["ColorCache"] = None,
) -> List[Color]:
    """Gradient across ``angle`` (hue fraction) centred on ``color``'s hue."""
    return gradient(_rotated(color, -angle / 2), _rotated(color, angle / 2), steps, space, cache)


def triadic_gradient(
    color: Color,
    steps: int,
    space: InterpolationSpace = InterpolationSpace.HSL,
    cache: Optional["ColorCache"] = None,
) -> List[Color]:
    """Closed loop ``color`` -> +120deg -> +240deg -> ``color``.

    Each segment has ``steps`` colors; shared endpoints appear once, so the
    result holds ``3 * (steps - 1) + 1`` colors.
    """
    anchors = [color, _rotated(color, 1 / 3), _rotated(color, 2 / 3), color]
    result = [color]
    for start, end in zip(anchors, anchors[1:]):
        result.extend(gradient(start, end, steps, space, cache)[1:])
    return result


def monochromatic_gradient(
    color: Color,
    steps: int,
    lightness_range: Tuple[float, float] = (0.1, 0.9),
) -> List[Color]:
    """Same hue and saturation, lightness stepped evenly across ``lightness_range``."""
    steps = max(2, steps)
    h, s, _ = to_hsl(color)
    low, high = lightness_range
    return [
        from_hsl(h, s, low + (high - low) * i / (steps - 1), color.alpha) for i in range(steps)
    ]
