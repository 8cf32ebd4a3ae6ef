"""Display-to-source crop mapping and sub-buffer extraction."""

import logging
import math
from typing import Tuple

from models.crop_rect import CropRect, DisplaySelection
from models.pixel_buffer import PixelBuffer
from utils.constants import MIN_SELECTION_SIZE
from utils.errors import InvalidSelection

logger = logging.getLogger(__name__)


def selection_to_source(
    selection: DisplaySelection,
    natural_size: Tuple[int, int],
    displayed_size: Tuple[float, float]
) -> CropRect:
    """Scale a display-space selection into source pixels, per axis."""
    if selection.w < MIN_SELECTION_SIZE or selection.h < MIN_SELECTION_SIZE:
        raise InvalidSelection(
            f"Selection {selection.w:g}x{selection.h:g} is below the "
            f"{MIN_SELECTION_SIZE}x{MIN_SELECTION_SIZE} minimum"
        )
    natural_w, natural_h = natural_size
    displayed_w, displayed_h = displayed_size
    if displayed_w <= 0 or displayed_h <= 0:
        raise InvalidSelection(f"Displayed size {displayed_w}x{displayed_h} is not positive")

    scale_x = natural_w / displayed_w
    scale_y = natural_h / displayed_h
    return CropRect(
        x=selection.x * scale_x,
        y=selection.y * scale_y,
        w=selection.w * scale_x,
        h=selection.h * scale_y,
    )


def clamp_rect(rect: CropRect, width: int, height: int) -> Tuple[int, int, int, int]:
    """Integer (x, y, w, h) of the rect's overlap with the buffer.

    Values are truncated with floor; the result is at least one pixel.
    """
    x, w = _clamp_span(math.floor(rect.x), math.floor(rect.w), width)
    y, h = _clamp_span(math.floor(rect.y), math.floor(rect.h), height)
    return x, y, w, h


def _clamp_span(start: int, length: int, limit: int) -> Tuple[int, int]:
    # The part before 0 is cut off the length, not shifted inside
    if start < 0:
        length += start
        start = 0
    start = min(start, limit - 1)
    return start, min(max(length, 1), limit - start)


def crop(buffer: PixelBuffer, rect: CropRect) -> PixelBuffer:
    """Copy the (clamped) rectangle into a new buffer."""
    x, y, w, h = clamp_rect(rect, buffer.width, buffer.height)
    if (x, y, w, h) != (rect.x, rect.y, rect.w, rect.h):
        logger.debug("Crop %s clamped to (%d, %d, %d, %d)", rect, x, y, w, h)
    return buffer.with_pixels(buffer.pixels[y:y + h, x:x + w].copy())


def crop_selection(
    buffer: PixelBuffer,
    selection: DisplaySelection,
    displayed_size: Tuple[float, float]
) -> PixelBuffer:
    """Validate, map and extract a selection drawn on the displayed image."""
    rect = selection_to_source(selection, buffer.size, displayed_size)
    return crop(buffer, rect)
