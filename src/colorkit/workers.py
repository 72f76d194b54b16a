"""Background worker threads for palette generation and enhancement.

Both workers emit ``finished(result, error)``: ``error`` is an empty string on
success, otherwise the exception text (with ``result`` empty). Requires
PyQt6; the rest of the package does not import this module.
"""

from __future__ import annotations

import logging
import traceback
from typing import Optional

from PyQt6.QtCore import QThread, pyqtSignal

from .cache import ColorCache
from .color import Color
from .enhancer import AccessibilityEnhancer, EnhancerConfiguration
from .palette import AccessiblePaletteGenerator, PaletteConfiguration

__all__ = ["PaletteWorker", "EnhancementWorker"]

_logger = logging.getLogger(__name__)


class PaletteWorker(QThread):
    finished = pyqtSignal(list, str)  # colors, error

    def __init__(
        self,
        seed: Color,
        configuration: Optional[PaletteConfiguration] = None,
        cache: Optional[ColorCache] = None,
    ):
        super().__init__()
        self.seed = seed
        self.configuration = configuration
        self.cache = cache

    def run(self) -> None:  # type: ignore[override]
        try:
            colors = AccessiblePaletteGenerator(self.configuration, self.cache).generate(self.seed)
        except Exception as e:  # pragma: no cover - generation is total
            _logger.debug("palette worker failed: %s", traceback.format_exc())
            self.finished.emit([], str(e))
            return
        self.finished.emit(colors, "")


class EnhancementWorker(QThread):
    finished = pyqtSignal(object, str)  # color or None, error

    def __init__(
        self,
        color: Color,
        background: Color,
        configuration: Optional[EnhancerConfiguration] = None,
        cache: Optional[ColorCache] = None,
    ):
        super().__init__()
        self.color = color
        self.background = background
        self.configuration = configuration
        self.cache = cache

    def run(self) -> None:  # type: ignore[override]
        try:
            result = AccessibilityEnhancer(self.configuration, self.cache).enhance(
                self.color, self.background
            )
        except Exception as e:  # pragma: no cover - enhancement is total
            _logger.debug("enhancement worker failed: %s", traceback.format_exc())
            self.finished.emit(None, str(e))
            return
        self.finished.emit(result, "")
