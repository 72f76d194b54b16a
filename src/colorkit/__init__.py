"""Perceptual color engine.

Contains the color value type, color space conversions, the WCAG contrast
model, perceptual difference, blending, the accessibility enhancer, the
accessible palette generator and the memoizing cache behind them.

Background QThread workers live in ``colorkit.workers`` (requires PyQt6) and
are not imported here.
"""

from .color import Color, ColorValueError, BLACK, WHITE, coerce_color  # noqa: F401
from .cache import CacheCategory, CacheKey, ColorCache  # noqa: F401
from .conversions import (  # noqa: F401
    HSLComponents,
    CMYKComponents,
    XYZComponents,
    LABComponents,
    to_hsl,
    from_hsl,
    to_cmyk,
    from_cmyk,
    to_xyz,
    from_xyz,
    to_lab,
    from_lab,
)
from .contrast import (  # noqa: F401
    ContrastLevel,
    ComplianceResult,
    relative_luminance,
    contrast_ratio,
    compliance,
    meets_level,
    accessible_contrasting_color,
    validate_contrast,
)
from .difference import (  # noqa: F401
    ColorDifference,
    delta_e,
    perceptual_distance,
    is_perceptually_similar,
    compare,
)
from .blending import (  # noqa: F401
    BlendMode,
    InterpolationSpace,
    blend,
    interpolate,
    gradient,
    complementary_gradient,
    analogous_gradient,
    triadic_gradient,
    monochromatic_gradient,
)
from .enhancer import (  # noqa: F401
    EnhancementStrategy,
    EnhancerConfiguration,
    AccessibilityEnhancer,
    enhance,
    suggest_accessible_variants,
)
from .palette import (  # noqa: F401
    PaletteConfiguration,
    PaletteReport,
    AccessiblePaletteGenerator,
    generate_accessible_palette,
    complementary_color,
)

__version__ = "0.1.0"
