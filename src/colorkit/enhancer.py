"""Accessibility enhancer: nudge a color until it meets a WCAG target.

Given a foreground and a background, produce a new foreground whose contrast
ratio against the background reaches ``target_level.minimum_ratio`` while
staying within ``max_perceptual_distance`` (CIE76 delta-E) of the original.

Approach:
1. Fast path: an already compliant color is returned unchanged.
2. The strategy selects which HSL axes may move and in which order
   (``_STAGES``). Each stage tries its moves; the first stage producing a
   compliant candidate within the distance budget wins.
3. Lightness and saturation moves are bisections over the segment from the
   original value to an extreme, running exactly
   ``settings.ENHANCER_BISECTION_STEPS`` halvings. The hue axis is not
   monotonic, so it is sampled at ``settings.ENHANCER_HUE_SAMPLES`` evenly
   spaced offsets instead.
4. A compliant point beyond the distance budget is pulled back to the budget
   edge by a second bisection. The best in-budget candidate seen (highest
   contrast) is returned when no stage reaches the target.

The enhancer never raises and every loop has a fixed iteration count, so a
call always terminates with a color. Callers that need a hard guarantee must
re-check ``contrast_ratio(result, background)``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from .cache import ColorCache
from .color import Color
from .config import settings
from .contrast import ContrastLevel, contrast_ratio, relative_luminance
from .conversions import HSLComponents, LABComponents, from_hsl, to_hsl, to_lab
from .difference import delta_e, is_perceptually_similar

__all__ = [
    "EnhancementStrategy",
    "EnhancerConfiguration",
    "AccessibilityEnhancer",
    "enhance",
    "suggest_accessible_variants",
    "is_perceptually_similar",
]

_logger = logging.getLogger(__name__)


class EnhancementStrategy(Enum):
    PRESERVE_HUE = "preserve-hue"
    PRESERVE_SATURATION = "preserve-saturation"
    PRESERVE_LIGHTNESS = "preserve-lightness"
    MINIMUM_CHANGE = "minimum-change"


@dataclass(frozen=True)
class EnhancerConfiguration:
    """Immutable enhancer settings.

    Attributes
    ----------
    target_level : ContrastLevel
        Level the result should reach against the background.
    strategy : EnhancementStrategy
        Which HSL components are held fixed.
    max_perceptual_distance : float
        Largest allowed delta-E from the original color. Negative or NaN
        values are normalized to 0.
    prefer_darker : bool | None
        Try darkening (True) or lightening (False) first; None picks the
        compliant direction that changes lightness least. Ignored by
        MINIMUM_CHANGE, which always takes the direction with the smaller
        perceptual distance.
    """

    target_level: ContrastLevel = ContrastLevel.AA
    strategy: EnhancementStrategy = EnhancementStrategy.PRESERVE_HUE
    max_perceptual_distance: float = settings.DEFAULT_MAX_PERCEPTUAL_DISTANCE
    prefer_darker: Optional[bool] = None

    def __post_init__(self) -> None:
        d = self.max_perceptual_distance
        if not d == d or d < 0:
            object.__setattr__(self, "max_perceptual_distance", 0.0)


@dataclass(frozen=True)
class _Candidate:
    color: Color
    ratio: float
    distance: float
    shift: float  # absolute change along the searched axis


@dataclass(frozen=True)
class _Move:
    axis: str  # "lightness" | "saturation" | "hue"
    end: float = 0.0


_DARKEN = _Move("lightness", 0.0)
_LIGHTEN = _Move("lightness", 1.0)
_DESATURATE = _Move("saturation", 0.0)
_SATURATE = _Move("saturation", 1.0)
_ROTATE = _Move("hue")

_LIGHTNESS = "lightness"

# Stages per strategy; a later stage runs only when earlier ones found nothing
_STAGES = {
    EnhancementStrategy.PRESERVE_HUE: (_LIGHTNESS, (_DESATURATE, _SATURATE)),
    EnhancementStrategy.PRESERVE_SATURATION: (_LIGHTNESS, (_ROTATE,)),
    EnhancementStrategy.PRESERVE_LIGHTNESS: ((_DESATURATE, _SATURATE), (_ROTATE,), _LIGHTNESS),
    EnhancementStrategy.MINIMUM_CHANGE: (_LIGHTNESS, (_DESATURATE, _SATURATE), (_ROTATE,)),
}


class _Search:
    """State of a single enhancement run."""

    def __init__(
        self,
        color: Color,
        hsl: HSLComponents,
        lab: LABComponents,
        background_luminance: float,
        target: float,
        budget: float,
    ) -> None:
        self.color = color
        self.hsl = hsl
        self.lab = lab
        self.bg_lum = background_luminance
        self.target = target
        self.budget = budget
        self.evaluations = 0
        self.best = _Candidate(color, self._ratio(color), 0.0, 0.0)

    def _ratio(self, color: Color) -> float:
        lum = relative_luminance(color)
        lighter = max(lum, self.bg_lum)
        darker = min(lum, self.bg_lum)
        return (lighter + 0.05) / (darker + 0.05)

    def meets(self, candidate: _Candidate) -> bool:
        return candidate.ratio >= self.target

    def evaluate(self, axis: str, value: float) -> _Candidate:
        h, s, l = self.hsl  # noqa: E741
        if axis == "hue":
            h = value % 1.0
            gap = abs(h - self.hsl.hue)
            shift = min(gap, 1 - gap)
        elif axis == "saturation":
            s = value
            shift = abs(value - self.hsl.saturation)
        else:
            l = value  # noqa: E741
            shift = abs(value - self.hsl.lightness)
        color = from_hsl(h, s, l, self.color.alpha)
        self.evaluations += 1
        return _Candidate(color, self._ratio(color), delta_e(to_lab(color), self.lab), shift)

    def consider(self, candidate: _Candidate) -> None:
        if candidate.distance <= self.budget and candidate.ratio > self.best.ratio:
            self.best = candidate

    # Axis searches --------------------------------------------------------
    def bisect_axis(self, move: _Move) -> Optional[_Candidate]:
        """Closest compliant in-budget point from the original toward ``move.end``."""
        start = getattr(self.hsl, move.axis)
        if start == move.end:
            return None

        def at(t: float) -> _Candidate:
            return self.evaluate(move.axis, start + (move.end - start) * t)

        steps = settings.ENHANCER_BISECTION_STEPS
        far = at(1.0)
        limit = 1.0
        if self.meets(far):
            lo, hi, hi_c = 0.0, 1.0, far  # lo fails, hi meets
            for _ in range(steps):
                mid = (lo + hi) / 2
                c = at(mid)
                if self.meets(c):
                    hi, hi_c = mid, c
                else:
                    lo = mid
            if hi_c.distance <= self.budget:
                self.consider(hi_c)
                return hi_c
            limit = hi
        elif far.distance <= self.budget:
            self.consider(far)
            return None

        # Pull back to the edge of the distance budget
        lo, hi = 0.0, limit  # lo within budget, hi beyond
        lo_c: Optional[_Candidate] = None
        for _ in range(steps):
            mid = (lo + hi) / 2
            c = at(mid)
            if c.distance <= self.budget:
                lo, lo_c = mid, c
            else:
                hi = mid
        if lo_c is None:
            return None
        self.consider(lo_c)
        return lo_c if self.meets(lo_c) else None

    def sample_hue(self) -> Optional[_Candidate]:
        if self.hsl.saturation == 0:
            return None
        samples = settings.ENHANCER_HUE_SAMPLES
        found: Optional[_Candidate] = None
        for i in range(1, samples + 1):
            c = self.evaluate("hue", self.hsl.hue + i / (samples + 1))
            if c.distance > self.budget:
                continue
            self.consider(c)
            if self.meets(c) and (found is None or c.distance < found.distance):
                found = c
        return found

    def run_moves(
        self, moves: Sequence[_Move], ordered: bool, key: Callable[[_Candidate], float]
    ) -> Optional[_Candidate]:
        found: List[_Candidate] = []
        for move in moves:
            c = self.sample_hue() if move.axis == "hue" else self.bisect_axis(move)
            if c is None:
                continue
            if ordered:
                return c
            found.append(c)
        return min(found, key=key) if found else None


class AccessibilityEnhancer:
    """Bounded-search optimizer for WCAG contrast.

    Parameters
    ----------
    configuration : EnhancerConfiguration | None
        Search settings; defaults to AA / preserve-hue.
    cache : ColorCache | None
        Optional memoization for the original color's Lab values and the
        background luminance.
    """

    def __init__(
        self,
        configuration: Optional[EnhancerConfiguration] = None,
        cache: Optional[ColorCache] = None,
    ) -> None:
        self.configuration = configuration or EnhancerConfiguration()
        self._cache = cache

    def _lightness_moves(self) -> Tuple[Tuple[_Move, ...], bool]:
        prefer = self.configuration.prefer_darker
        if prefer is None:
            return (_DARKEN, _LIGHTEN), False
        return ((_DARKEN, _LIGHTEN) if prefer else (_LIGHTEN, _DARKEN)), True

    def enhance(self, color: Color, background: Color) -> Color:
        cfg = self.configuration
        target = cfg.target_level.minimum_ratio
        if contrast_ratio(color, background) >= target:
            return color

        search = _Search(
            color,
            to_hsl(color, self._cache),
            to_lab(color, self._cache),
            relative_luminance(background, self._cache),
            target,
            cfg.max_perceptual_distance,
        )
        for stage in _STAGES[cfg.strategy]:
            if stage == _LIGHTNESS and cfg.strategy is EnhancementStrategy.MINIMUM_CHANGE:
                # Both directions compete on perceptual distance alone
                result = search.run_moves((_DARKEN, _LIGHTEN), False, key=lambda c: c.distance)
            elif stage == _LIGHTNESS:
                moves, ordered = self._lightness_moves()
                result = search.run_moves(moves, ordered, key=lambda c: c.shift)
            else:
                result = search.run_moves(stage, False, key=lambda c: c.distance)
            if result is not None:
                return result.color

        _logger.debug(
            "target %.1f unreachable for %s on %s within deltaE %.1f "
            "(best ratio %.2f after %d evaluations)",
            target,
            color.to_hex(),
            background.to_hex(),
            cfg.max_perceptual_distance,
            search.best.ratio,
            search.evaluations,
        )
        return search.best.color

    def suggest_accessible_variants(
        self, color: Color, background: Color, count: int = 3
    ) -> List[Color]:
        """Up to ``count`` distinct compliant alternatives for ``color``.

        Tries the unperturbed color under every strategy, then hue rotations
        evenly spaced around the wheel. Fewer than ``count`` variants are
        returned when the bounded attempts do not find enough.
        """
        if count <= 0:
            return []
        cfg = self.configuration
        target = cfg.target_level.minimum_ratio
        variants: List[Color] = []

        def offer(candidate: Color) -> bool:
            if contrast_ratio(candidate, background) < target:
                return False
            if any(
                is_perceptually_similar(candidate, v, settings.VARIANT_DISTINCT_DISTANCE)
                for v in variants
            ):
                return False
            variants.append(candidate)
            return len(variants) >= count

        for strategy in EnhancementStrategy:
            enhancer = AccessibilityEnhancer(replace(cfg, strategy=strategy), self._cache)
            if offer(enhancer.enhance(color, background)):
                return variants

        hsl = to_hsl(color, self._cache)
        attempts = settings.VARIANT_MAX_ATTEMPTS
        for i in range(1, attempts):
            rotated = from_hsl(hsl.hue + i / attempts, hsl.saturation, hsl.lightness, color.alpha)
            if offer(self.enhance(rotated, background)):
                break
        return variants


def enhance(
    color: Color,
    background: Color,
    configuration: Optional[EnhancerConfiguration] = None,
    cache: Optional[ColorCache] = None,
) -> Color:
    return AccessibilityEnhancer(configuration, cache).enhance(color, background)


def suggest_accessible_variants(
    color: Color,
    background: Color,
    count: int = 3,
    configuration: Optional[EnhancerConfiguration] = None,
    cache: Optional[ColorCache] = None,
) -> List[Color]:
    return AccessibilityEnhancer(configuration, cache).suggest_accessible_variants(
        color, background, count
    )
