"""Deterministic accessible palette generation.

Builds ``palette_size`` colors from one seed such that every entry meets the
configured WCAG level against a reference background and no two entries are
perceptually close.

Order of entries:
1. The seed, enhanced against the background.
2. Black and white (``include_black_and_white``), when compliant and distinct.
3. Hue rotations of the seed in ``hue_step`` increments. Each full turn of the
   wheel applies the next offset of ``settings.PALETTE_LIGHTNESS_SCHEDULE`` to
   the seed lightness. Every candidate is enhanced and then filtered by LAB
   distance against the accepted entries.
4. Fallback completion once ``max_iterations`` enhancements are spent: a gray
   ramp and lightness-stepped tints of the rotated hues, then the same pool
   with the similarity filter relaxed to exact duplicates, then repeats of
   whichever of black / white contrasts more with the background.

Generation involves no randomness or wall-clock checks; the same seed and
configuration always produce the same palette.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .cache import ColorCache
from .color import BLACK, WHITE, Color
from .config import settings
from .contrast import ContrastLevel, contrast_ratio
from .conversions import from_hsl, to_hsl
from .difference import is_perceptually_similar
from .enhancer import AccessibilityEnhancer, EnhancementStrategy, EnhancerConfiguration

__all__ = [
    "PaletteConfiguration",
    "PaletteReport",
    "AccessiblePaletteGenerator",
    "generate_accessible_palette",
    "complementary_color",
]

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaletteConfiguration:
    target_level: ContrastLevel = ContrastLevel.AA
    palette_size: int = settings.DEFAULT_PALETTE_SIZE
    include_black_and_white: bool = True
    background: Color = WHITE
    similarity_tolerance: float = settings.PALETTE_SIMILARITY_TOLERANCE
    hue_step: float = settings.PALETTE_HUE_STEP
    max_iterations: int = settings.PALETTE_MAX_ITERATIONS
    max_perceptual_distance: float = settings.PALETTE_MAX_PERCEPTUAL_DISTANCE

    def __post_init__(self) -> None:
        # Out of range values are normalized, never rejected
        if self.palette_size < settings.MIN_PALETTE_SIZE:
            object.__setattr__(self, "palette_size", settings.MIN_PALETTE_SIZE)
        if self.max_iterations < 1:
            object.__setattr__(self, "max_iterations", 1)
        if not 0 < self.hue_step < 1:
            object.__setattr__(self, "hue_step", settings.PALETTE_HUE_STEP)
        tol = self.similarity_tolerance
        if not tol == tol or tol < 0:
            object.__setattr__(self, "similarity_tolerance", 0.0)


@dataclass(frozen=True)
class PaletteReport:
    """Palette plus generation diagnostics.

    ``iterations`` counts enhancer runs, ``fallback_count`` the entries added
    by fallback completion and ``compliant`` whether every entry meets the
    target level against the background.
    """

    colors: Tuple[Color, ...]
    iterations: int
    fallback_count: int
    compliant: bool


class AccessiblePaletteGenerator:
    def __init__(
        self,
        configuration: Optional[PaletteConfiguration] = None,
        cache: Optional[ColorCache] = None,
    ) -> None:
        self.configuration = configuration or PaletteConfiguration()
        self._cache = cache
        self._enhancer = AccessibilityEnhancer(
            EnhancerConfiguration(
                target_level=self.configuration.target_level,
                strategy=EnhancementStrategy.PRESERVE_HUE,
                max_perceptual_distance=self.configuration.max_perceptual_distance,
            ),
            cache,
        )

    def generate(self, seed: Color) -> List[Color]:
        return list(self.generate_report(seed).colors)

    def _meets(self, color: Color) -> bool:
        cfg = self.configuration
        return contrast_ratio(color, cfg.background) >= cfg.target_level.minimum_ratio

    @staticmethod
    def _distinct(color: Color, accepted: List[Color], tolerance: float) -> bool:
        return all(not is_perceptually_similar(color, c, tolerance) for c in accepted)

    def _rotation_candidates(self, seed: Color):
        """Yield rotated / lightness-shifted seed variants, endlessly."""
        cfg = self.configuration
        hsl = to_hsl(seed, self._cache)
        saturation = max(hsl.saturation, settings.PALETTE_MIN_SATURATION)
        per_turn = max(1, int(round(1 / cfg.hue_step)) - 1)
        schedule = settings.PALETTE_LIGHTNESS_SCHEDULE
        turn = 0
        while True:
            lightness = hsl.lightness + schedule[turn % len(schedule)]
            for i in range(1, per_turn + 1):
                yield from_hsl(hsl.hue + i * cfg.hue_step, saturation, lightness, seed.alpha)
            turn += 1

    def generate_report(self, seed: Color) -> PaletteReport:
        cfg = self.configuration
        size = cfg.palette_size
        tolerance = cfg.similarity_tolerance
        accepted: List[Color] = []

        def offer(candidate: Color) -> None:
            if self._meets(candidate) and self._distinct(candidate, accepted, tolerance):
                accepted.append(candidate)

        offer(self._enhancer.enhance(seed, cfg.background))
        iterations = 1
        if cfg.include_black_and_white:
            for extreme in (BLACK, WHITE):
                if len(accepted) < size:
                    offer(extreme)

        candidates = self._rotation_candidates(seed)
        while len(accepted) < size and iterations < cfg.max_iterations:
            offer(self._enhancer.enhance(next(candidates), cfg.background))
            iterations += 1

        fallback_count = 0
        if len(accepted) < size:
            fallback_count = self._complete(seed, accepted, size, tolerance)
            _logger.debug(
                "palette for %s completed with %d fallback colors after %d iterations",
                seed.to_hex(),
                fallback_count,
                iterations,
            )
        return PaletteReport(
            colors=tuple(accepted),
            iterations=iterations,
            fallback_count=fallback_count,
            compliant=all(self._meets(c) for c in accepted),
        )

    def _tints(self, seed: Color) -> List[Color]:
        """Every rotated hue at each ramp lightness, compliant ones only."""
        cfg = self.configuration
        hsl = to_hsl(seed, self._cache)
        saturation = max(hsl.saturation, settings.PALETTE_MIN_SATURATION)
        turns = max(1, int(round(1 / cfg.hue_step)))
        steps = settings.PALETTE_GRAY_STEPS
        tints = []
        for j in range(1, steps):
            for i in range(turns):
                tint = from_hsl(hsl.hue + i * cfg.hue_step, saturation, j / steps, seed.alpha)
                if self._meets(tint):
                    tints.append(tint)
        return tints

    def _complete(self, seed: Color, accepted: List[Color], size: int, tolerance: float) -> int:
        """Fill ``accepted`` up to ``size`` in place; returns the number added.

        Passes, each stopping once the palette is full: compliant grays and
        tints that are distinct from every entry, then ones that merely differ
        from every entry, then repeats of the stronger of black / white.
        """
        start = len(accepted)
        steps = settings.PALETTE_GRAY_STEPS
        grays = [Color(i / steps, i / steps, i / steps) for i in range(steps + 1)]
        pool = [g for g in grays if self._meets(g)] + self._tints(seed)

        for candidate in pool:
            if len(accepted) >= size:
                break
            if self._distinct(candidate, accepted, tolerance):
                accepted.append(candidate)
        for candidate in pool:
            if len(accepted) >= size:
                break
            if candidate not in accepted:
                accepted.append(candidate)

        background = self.configuration.background
        extreme = max(
            (BLACK, WHITE), key=lambda c: contrast_ratio(c, background)
        )
        while len(accepted) < size:
            accepted.append(extreme)
        return len(accepted) - start


def generate_accessible_palette(
    seed: Color,
    configuration: Optional[PaletteConfiguration] = None,
    cache: Optional[ColorCache] = None,
) -> List[Color]:
    return AccessiblePaletteGenerator(configuration, cache).generate(seed)


def complementary_color(color: Color) -> Color:
    """Opposite hue on the HSL wheel, keeping saturation, lightness and alpha."""
    hsl = to_hsl(color)
    return from_hsl(hsl.hue + 0.5, hsl.saturation, hsl.lightness, color.alpha)
