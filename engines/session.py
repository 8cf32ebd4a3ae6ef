"""Editing session: original vs. current buffer plus the active settings."""

import logging
import time
from typing import Optional, Tuple

from models.crop_rect import DisplaySelection
from models.edit_settings import EditSettings
from models.pixel_buffer import PixelBuffer
from models.render_result import RenderResult
from engines.crop import crop_selection
from engines.pipeline import render
from engines.rotate import rotate
from utils.constants import EXPORT_NAME_PATTERN

logger = logging.getLogger(__name__)


class EditSession:
    """
    Holds the loaded image and the edits applied to it.

    Geometry edits (rotate, crop) replace ``current``; color and style edits
    only change ``settings`` and are re-rendered from ``current``.
    """

    def __init__(self, image: PixelBuffer, settings: Optional[EditSettings] = None):
        self.original = image
        self.current = image
        self.settings = settings or EditSettings()
        self.result: Optional[RenderResult] = None

    def set_settings(self, settings: EditSettings) -> None:
        self.settings = settings
        self.result = None

    def update_settings(self, **changes) -> EditSettings:
        self.settings = self.settings.with_changes(**changes)
        self.result = None
        return self.settings

    def reset_settings(self) -> None:
        self.settings = EditSettings()
        self.result = None

    def reset_all(self) -> None:
        """Default settings and the buffer as originally loaded."""
        self.reset_settings()
        self.current = self.original

    def rotate(self, direction: int) -> PixelBuffer:
        self.current = rotate(self.current, direction)
        self.result = None
        logger.info("Rotated to %dx%d", self.current.width, self.current.height)
        return self.current

    def crop(self, selection: DisplaySelection, displayed_size: Tuple[float, float]) -> PixelBuffer:
        """Crop ``current``; an ``InvalidSelection`` leaves the session untouched."""
        cropped = crop_selection(self.current, selection, displayed_size)
        self.current = cropped
        self.result = None
        logger.info("Cropped to %dx%d", cropped.width, cropped.height)
        return cropped

    def render(self) -> RenderResult:
        self.result = render(self.current, self.settings)
        return self.result

    def accept_result(self, result: RenderResult, source: PixelBuffer) -> bool:
        """Keep a background render of ``source`` only if it is still current.

        Geometry edits replace ``current``, so a render of an earlier buffer
        (even one of the same size) is rejected, as is one for old settings.
        """
        if source is not self.current or result.settings != self.settings:
            return False
        self.result = result
        return True

    def export_buffer(self) -> PixelBuffer:
        """Last rendered image, rendering first when settings changed since."""
        if self.result is None:
            self.render()
        return self.result.image

    @staticmethod
    def suggested_export_name() -> str:
        return EXPORT_NAME_PATTERN.format(stamp=int(time.time() * 1000))
