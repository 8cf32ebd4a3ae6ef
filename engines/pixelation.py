"""Block mosaic: area downsample followed by nearest-neighbour upsample."""

import logging
import math
from typing import Optional

import cv2

from models.pixel_buffer import PixelBuffer
from utils.constants import MIN_FILTER_SIZE, MIN_PIXEL_SIZE, PIXELATE_DIVISIONS
from utils.errors import DimensionTooSmall

logger = logging.getLogger(__name__)


def pixel_size_for(width: int) -> int:
    """Block edge length for an image of the given width."""
    return max(MIN_PIXEL_SIZE, width // PIXELATE_DIVISIONS)


def pixelate(buffer: PixelBuffer, pixel_size: Optional[int] = None) -> PixelBuffer:
    """Replace each block with its area average at the original resolution."""
    try:
        buffer.require_min_size(MIN_FILTER_SIZE, MIN_FILTER_SIZE)
    except DimensionTooSmall as e:
        logger.warning("Skipping pixelation: %s", e)
        return buffer.copy()

    if pixel_size is None:
        pixel_size = pixel_size_for(buffer.width)
    if pixel_size < 1:
        raise ValueError(f"Pixel size must be positive, got {pixel_size}")

    w, h = buffer.width, buffer.height
    small_w = math.ceil(w / pixel_size)
    small_h = math.ceil(h / pixel_size)

    small = cv2.resize(buffer.pixels, (small_w, small_h), interpolation=cv2.INTER_AREA)
    mosaic = cv2.resize(small, (w, h), interpolation=cv2.INTER_NEAREST)
    return buffer.with_pixels(mosaic)
