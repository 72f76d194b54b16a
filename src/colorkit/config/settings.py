"""Global configuration and tunable constants for the color engine."""

from __future__ import annotations

import os
from typing import Final

# Cache keys truncate channels to this many decimal places
QUANTIZATION_DIGITS: Final = 3
CACHE_MAX_ENTRIES: Final = int(os.environ.get("COLORKIT_CACHE_MAX_ENTRIES", "512"))

# Accessibility enhancer search schedule
ENHANCER_BISECTION_STEPS: Final = 20
ENHANCER_HUE_SAMPLES: Final = 12
DEFAULT_MAX_PERCEPTUAL_DISTANCE: Final = 30.0
SIMILARITY_THRESHOLD: Final = 10.0
VARIANT_DISTINCT_DISTANCE: Final = 5.0
VARIANT_MAX_ATTEMPTS: Final = 24

# Accessible palette generation
DEFAULT_PALETTE_SIZE: Final = 5
MIN_PALETTE_SIZE: Final = 2
PALETTE_HUE_STEP: Final = 1 / 12
PALETTE_MAX_ITERATIONS: Final = int(os.environ.get("COLORKIT_PALETTE_MAX_ITERATIONS", "60"))
PALETTE_SIMILARITY_TOLERANCE: Final = 12.0
PALETTE_MAX_PERCEPTUAL_DISTANCE: Final = 120.0
PALETTE_MIN_SATURATION: Final = 0.45
# Lightness offsets applied per full hue rotation
PALETTE_LIGHTNESS_SCHEDULE: Final = (0.0, -0.15, 0.15, -0.3, 0.3)
PALETTE_GRAY_STEPS: Final = 20
