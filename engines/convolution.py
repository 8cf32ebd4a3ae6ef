"""3x3 spatial convolution with copy-unchanged borders."""

import logging
from dataclasses import dataclass

import numpy as np

from models.pixel_buffer import PixelBuffer
from utils.constants import EMBOSS_OFFSET, KERNEL_MATRICES, MIN_FILTER_SIZE
from utils.errors import DimensionTooSmall

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Kernel:
    """Named 3x3 integer kernel normalised by the sum of its weights."""

    name: str
    weights: np.ndarray

    def __post_init__(self):
        weights = np.asarray(self.weights, dtype=np.int64).reshape(3, 3)
        object.__setattr__(self, 'weights', weights)

    @property
    def divisor(self) -> int:
        """Sum of weights, 1 when the weights cancel out (edge kernels)."""
        total = int(self.weights.sum())
        return total if total != 0 else 1

    def __repr__(self):
        return f"Kernel({self.name!r}, divisor={self.divisor})"


KERNELS = {name: Kernel(name, weights) for name, weights in KERNEL_MATRICES.items()}


def convolve(buffer: PixelBuffer, kernel: Kernel) -> PixelBuffer:
    """Filter interior pixels; border pixels and alpha are copied from the input.

    Neighbourhoods are always read from the unmodified input, so the result
    does not depend on scan order.
    """
    try:
        buffer.require_min_size(MIN_FILTER_SIZE, MIN_FILTER_SIZE)
    except DimensionTooSmall as e:
        logger.warning("Skipping %s convolution: %s", kernel.name, e)
        return buffer.copy()

    h, w = buffer.height, buffer.width
    src = buffer.rgb.astype(np.int64)
    acc = np.zeros((h - 2, w - 2, 3), dtype=np.int64)

    # Sum of shifted interior views, one per kernel tap
    for ky in range(3):
        for kx in range(3):
            weight = kernel.weights[ky, kx]
            if weight:
                acc += weight * src[ky:ky + h - 2, kx:kx + w - 2]

    filtered = np.clip(np.rint(acc / kernel.divisor), 0, 255).astype(np.uint8)

    pixels = buffer.pixels.copy()
    pixels[1:-1, 1:-1, :3] = filtered
    return PixelBuffer(w, h, pixels)


def average_grayscale(buffer: PixelBuffer) -> PixelBuffer:
    """Set R, G and B to their unweighted mean (edge-detection pre-pass)."""
    mean = buffer.rgb.astype(np.float64).sum(axis=2) / 3.0
    gray = np.clip(np.rint(mean), 0, 255).astype(np.uint8)

    pixels = buffer.pixels.copy()
    pixels[:, :, :3] = gray[:, :, None]
    return PixelBuffer(buffer.width, buffer.height, pixels)


def offset_channels(buffer: PixelBuffer, offset: int = EMBOSS_OFFSET) -> PixelBuffer:
    """Saturating add on every pixel's RGB (emboss post-pass)."""
    shifted = buffer.rgb.astype(np.int32) + offset
    pixels = buffer.pixels.copy()
    pixels[:, :, :3] = np.clip(shifted, 0, 255).astype(np.uint8)
    return PixelBuffer(buffer.width, buffer.height, pixels)
