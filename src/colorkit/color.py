"""Immutable sRGB color value type.

Every transform in the engine consumes and produces ``Color`` values. A color
holds gamma-encoded sRGB channels plus alpha, each a float in [0, 1].

Construction paths:
 - ``Color(r, g, b, a)`` validates and raises ``ColorValueError`` on
   non-numeric, NaN or out-of-range input.
 - ``Color.clamped(...)`` clamps instead of raising; cross-space constructors
   (HSL, CMYK, LAB, XYZ) go through it so they always succeed.
 - ``Color.from_rgb255`` / ``Color.from_hex`` for 8-bit and hex sources.

Public API:
    Color, ColorValueError, BLACK, WHITE, coerce_color
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Any, Optional, Tuple

from .config import settings

__all__ = ["Color", "ColorValueError", "BLACK", "WHITE", "coerce_color"]

_HEX_ERR = "Color must be a #rgb, #rgba, #rrggbb or #rrggbbaa hex string: {value}"


class ColorValueError(ValueError):
    """Raised when a color is constructed from invalid component values."""


def _clamp(v: float, lo: float = 0.0, hi: float = 1.0) -> float:
    if v != v:  # NaN
        return lo
    return max(lo, min(hi, v))


def _is_number(v: Any) -> bool:
    return isinstance(v, Real) and not isinstance(v, bool)


@dataclass(frozen=True)
class Color:
    """A gamma-encoded sRGB color with alpha.

    Attributes
    ----------
    red, green, blue : float
        Channel intensities in [0, 1].
    alpha : float
        Opacity in [0, 1]; defaults to fully opaque.
    """

    red: float
    green: float
    blue: float
    alpha: float = 1.0

    def __post_init__(self) -> None:
        for name in ("red", "green", "blue", "alpha"):
            value = getattr(self, name)
            if not _is_number(value) or math.isnan(value):
                raise ColorValueError(f"{name} must be a number, got {value!r}")
            if not 0.0 <= value <= 1.0:
                raise ColorValueError(f"{name} must be within [0, 1], got {value!r}")
            object.__setattr__(self, name, float(value))

    # Constructors -----------------------------------------------------
    @classmethod
    def clamped(cls, red: float, green: float, blue: float, alpha: float = 1.0) -> "Color":
        return cls(_clamp(red), _clamp(green), _clamp(blue), _clamp(alpha))

    @classmethod
    def from_rgb255(cls, red: int, green: int, blue: int, alpha: int = 255) -> "Color":
        return cls.clamped(red / 255.0, green / 255.0, blue / 255.0, alpha / 255.0)

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse ``#rgb``, ``#rgba``, ``#rrggbb`` or ``#rrggbbaa`` (case-insensitive)."""
        if not isinstance(value, str):
            raise ColorValueError(_HEX_ERR.format(value=value))
        h = value.strip()
        if not h.startswith("#"):
            raise ColorValueError(_HEX_ERR.format(value=value))
        h = h[1:]
        if len(h) in (3, 4):
            h = "".join(ch * 2 for ch in h)
        if len(h) not in (6, 8):
            raise ColorValueError(_HEX_ERR.format(value=value))
        try:
            channels = [int(h[i : i + 2], 16) for i in range(0, len(h), 2)]
        except ValueError as exc:
            raise ColorValueError(_HEX_ERR.format(value=value)) from exc
        return cls.from_rgb255(*channels)

    # Accessors --------------------------------------------------------
    @property
    def rgb(self) -> Tuple[float, float, float]:
        return self.red, self.green, self.blue

    @property
    def rgba(self) -> Tuple[float, float, float, float]:
        return self.red, self.green, self.blue, self.alpha

    def to_rgb255(self) -> Tuple[int, int, int]:
        return tuple(int(c * 255 + 0.5) for c in self.rgb)  # type: ignore[return-value]

    def to_hex(self, *, include_alpha: bool = False) -> str:
        r, g, b = self.to_rgb255()
        if include_alpha:
            return f"#{r:02X}{g:02X}{b:02X}{int(self.alpha * 255 + 0.5):02X}"
        return f"#{r:02X}{g:02X}{b:02X}"

    def with_alpha(self, alpha: float) -> "Color":
        return Color.clamped(self.red, self.green, self.blue, alpha)

    def key(self) -> Tuple[int, int, int, int]:
        """Quantized identity used for cache keys.

        Channels are truncated (not rounded) to ``QUANTIZATION_DIGITS`` decimal
        places so float jitter below that precision maps to the same key.
        """
        scale = 10**settings.QUANTIZATION_DIGITS
        return tuple(int(c * scale) for c in self.rgba)  # type: ignore[return-value]


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)


def coerce_color(value: Any) -> Optional[Color]:
    """Return ``value`` as a Color, or None when it is malformed.

    Accepts a Color or any sequence of at least three numbers (RGB, optional
    alpha), which are clamped into range. Anything else yields None.
    """
    if isinstance(value, Color):
        return value
    if isinstance(value, (str, bytes)) or value is None:
        return None
    try:
        parts = list(value)
    except TypeError:
        return None
    if len(parts) < 3 or not all(_is_number(p) for p in parts[:4]):
        return None
    alpha = parts[3] if len(parts) >= 4 else 1.0
    return Color.clamped(parts[0], parts[1], parts[2], alpha)
