"""WCAG 2.1 relative luminance, contrast ratio and compliance levels.

Public API:
- relative_luminance(color) -> float
- contrast_ratio(a, b) -> float
- compliance(a, b) -> ComplianceResult
- meets_level(a, b, level) -> bool
- accessible_contrasting_color(color, level) -> Color
- validate_contrast(pairs, level) -> list[str]

Every function accepts an optional ``ColorCache``; luminance values are cached
per color and contrast ratios per unordered color pair.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple, TYPE_CHECKING

from .cache import CacheCategory, color_key, contrast_key
from .color import BLACK, WHITE, Color
from .conversions import from_hsl, srgb_to_linear, to_hsl

if TYPE_CHECKING:  # pragma: no cover
    from .cache import ColorCache

__all__ = [
    "ContrastLevel",
    "ComplianceResult",
    "relative_luminance",
    "contrast_ratio",
    "compliance",
    "meets_level",
    "accessible_contrasting_color",
    "validate_contrast",
]

# Rec. 709 coefficients used by WCAG
_LUMA = (0.2126, 0.7152, 0.0722)
_OFFSET = 0.05


class ContrastLevel(Enum):
    """WCAG conformance levels.

    Values are labels rather than ratios: AA and AAA_LARGE share the 4.5
    threshold but are distinct levels.
    """

    AA_LARGE = "AA Large"
    AA = "AA"
    AAA_LARGE = "AAA Large"
    AAA = "AAA"

    @property
    def minimum_ratio(self) -> float:
        return _MINIMUM_RATIOS[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_MINIMUM_RATIOS = {
    ContrastLevel.AA_LARGE: 3.0,
    ContrastLevel.AA: 4.5,
    ContrastLevel.AAA_LARGE: 4.5,
    ContrastLevel.AAA: 7.0,
}

_DESCRIPTIONS = {
    ContrastLevel.AA_LARGE: "AA level for large text (18pt+)",
    ContrastLevel.AA: "AA level for normal text",
    ContrastLevel.AAA_LARGE: "AAA level for large text (18pt+)",
    ContrastLevel.AAA: "AAA level for normal text",
}


@dataclass(frozen=True)
class ComplianceResult:
    contrast_ratio: float
    passes_aa: bool
    passes_aa_large: bool
    passes_aaa: bool
    passes_aaa_large: bool

    @property
    def highest_level(self) -> Optional[ContrastLevel]:
        if self.passes_aaa:
            return ContrastLevel.AAA
        if self.passes_aaa_large:
            return ContrastLevel.AAA_LARGE
        if self.passes_aa:
            return ContrastLevel.AA
        if self.passes_aa_large:
            return ContrastLevel.AA_LARGE
        return None

    @property
    def passes(self) -> List[ContrastLevel]:
        flags = (
            (ContrastLevel.AA_LARGE, self.passes_aa_large),
            (ContrastLevel.AA, self.passes_aa),
            (ContrastLevel.AAA_LARGE, self.passes_aaa_large),
            (ContrastLevel.AAA, self.passes_aaa),
        )
        return [level for level, ok in flags if ok]


def _luminance(color: Color) -> float:
    return sum(w * srgb_to_linear(c) for w, c in zip(_LUMA, color.rgb))


def relative_luminance(color: Color, cache: Optional["ColorCache"] = None) -> float:
    if cache is None:
        return _luminance(color)
    return cache.get_or_compute(
        color_key(CacheCategory.LUMINANCE, color), lambda: _luminance(color), source=color.rgba
    )


def _ratio(l1: float, l2: float) -> float:
    lighter = max(l1, l2)
    darker = min(l1, l2)
    return (lighter + _OFFSET) / (darker + _OFFSET)


def contrast_ratio(a: Color, b: Color, cache: Optional["ColorCache"] = None) -> float:
    if cache is None:
        return _ratio(_luminance(a), _luminance(b))
    return cache.get_or_compute(
        contrast_key(a, b),
        lambda: _ratio(relative_luminance(a, cache), relative_luminance(b, cache)),
        source=tuple(sorted((a.rgba, b.rgba))),
    )


def compliance(a: Color, b: Color, cache: Optional["ColorCache"] = None) -> ComplianceResult:
    ratio = contrast_ratio(a, b, cache)
    return ComplianceResult(
        contrast_ratio=ratio,
        passes_aa=ratio >= ContrastLevel.AA.minimum_ratio,
        passes_aa_large=ratio >= ContrastLevel.AA_LARGE.minimum_ratio,
        passes_aaa=ratio >= ContrastLevel.AAA.minimum_ratio,
        passes_aaa_large=ratio >= ContrastLevel.AAA_LARGE.minimum_ratio,
    )


def meets_level(
    a: Color, b: Color, level: ContrastLevel, cache: Optional["ColorCache"] = None
) -> bool:
    return contrast_ratio(a, b, cache) >= level.minimum_ratio


def accessible_contrasting_color(
    color: Color, level: ContrastLevel = ContrastLevel.AA
) -> Color:
    """Return a readable foreground for ``color`` used as a background.

    Black or white, whichever contrasts more, when that meets ``level``;
    otherwise a same-hue variant pushed to lightness 0.1 / 0.9 as a
    best-effort fallback.
    """
    white_c = contrast_ratio(WHITE, color)
    black_c = contrast_ratio(BLACK, color)
    chosen = WHITE if white_c >= black_c else BLACK
    if max(white_c, black_c) >= level.minimum_ratio:
        return chosen
    hsl = to_hsl(color)
    target_lightness = 0.9 if chosen == WHITE else 0.1
    return from_hsl(hsl.hue, hsl.saturation, target_lightness)


def validate_contrast(
    pairs: Iterable[Tuple[Color, Color, str]],
    level: ContrastLevel = ContrastLevel.AA,
    cache: Optional["ColorCache"] = None,
) -> List[str]:
    """Validate a collection of foreground/background pairs.

    Parameters
    ----------
    pairs : Iterable[Tuple[Color, Color, str]]
        Each tuple is (foreground, background, label).
    level : ContrastLevel
        Level every pair must reach.

    Returns
    -------
    list[str]
        A list of failure messages (empty if all pass).
    """
    failures: List[str] = []
    threshold = level.minimum_ratio
    for fg, bg, label in pairs:
        ratio = contrast_ratio(fg, bg, cache)
        if ratio < threshold:
            failures.append(
                f"[contrast-fail] {label}: ratio={ratio:.2f} < {threshold} "
                f"(fg={fg.to_hex()} bg={bg.to_hex()})"
            )
    return failures
