"""Perceptual color difference helpers.

We use sRGB -> CIE Lab (D65) with the CIE76 delta-E formula (Euclidean
distance in Lab). It is the distance metric for every "how different do these
look" decision in the engine: the enhancer's distance budget, palette
diversity and variant de-duplication.

API:
    d = perceptual_distance(a, b)
    if is_perceptually_similar(a, b, threshold=5): ...
    diff = compare(a, b)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple, TYPE_CHECKING

from .color import Color
from .config import settings
from .contrast import ContrastLevel, compliance
from .conversions import to_hsl, to_lab

if TYPE_CHECKING:  # pragma: no cover
    from .cache import ColorCache

__all__ = [
    "ColorDifference",
    "delta_e",
    "perceptual_distance",
    "is_perceptually_similar",
    "compare",
]


def delta_e(lab1: Tuple[float, float, float], lab2: Tuple[float, float, float]) -> float:
    return math.sqrt(sum((a - b) ** 2 for a, b in zip(lab1, lab2)))


def perceptual_distance(a: Color, b: Color, cache: Optional["ColorCache"] = None) -> float:
    return delta_e(to_lab(a, cache), to_lab(b, cache))


def is_perceptually_similar(
    a: Color,
    b: Color,
    threshold: float = settings.SIMILARITY_THRESHOLD,
    cache: Optional["ColorCache"] = None,
) -> bool:
    """True when the Lab distance between ``a`` and ``b`` is below ``threshold``."""
    return perceptual_distance(a, b, cache) < threshold


@dataclass(frozen=True)
class ColorDifference:
    """Component-wise and perceptual difference between two colors.

    Attributes
    ----------
    rgb_difference : tuple[float, float, float]
        Absolute channel differences in [0, 1].
    hsl_difference : tuple[float, float, float]
        Hue difference in degrees (shortest arc), saturation and lightness
        differences in percent.
    perceptual_difference : float
        CIE76 delta-E.
    contrast_ratio : float
        WCAG contrast ratio of the pair.
    passing_levels : list[ContrastLevel]
        Levels the pair passes.
    """

    rgb_difference: Tuple[float, float, float]
    hsl_difference: Tuple[float, float, float]
    perceptual_difference: float
    contrast_ratio: float
    passing_levels: List[ContrastLevel]

    def summary(self) -> str:
        levels = ", ".join(level.value for level in self.passing_levels) or "none"
        return (
            f"deltaE={self.perceptual_difference:.2f} "
            f"ratio={self.contrast_ratio:.2f}:1 levels={levels}"
        )


def compare(a: Color, b: Color, cache: Optional["ColorCache"] = None) -> ColorDifference:
    rgb_diff = tuple(abs(x - y) for x, y in zip(a.rgb, b.rgb))
    h1 = to_hsl(a, cache)
    h2 = to_hsl(b, cache)
    hue_gap = abs(h1.hue - h2.hue)
    hsl_diff = (
        min(hue_gap, 1 - hue_gap) * 360,
        abs(h1.saturation - h2.saturation) * 100,
        abs(h1.lightness - h2.lightness) * 100,
    )
    result = compliance(a, b, cache)
    return ColorDifference(
        rgb_difference=rgb_diff,  # type: ignore[arg-type]
        hsl_difference=hsl_diff,
        perceptual_difference=perceptual_distance(a, b, cache),
        contrast_ratio=result.contrast_ratio,
        passing_levels=result.passes,
    )
