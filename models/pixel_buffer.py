"""RGBA8 pixel buffer passed between pipeline stages."""

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from utils.errors import DimensionTooSmall


@dataclass(eq=False)
class PixelBuffer:
    """Decoded image: ``pixels`` is a (height, width, 4) uint8 RGBA array."""

    width: int
    height: int
    pixels: np.ndarray

    def __post_init__(self):
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Buffer dimensions must be positive, got {self.width}x{self.height}")
        if not isinstance(self.pixels, np.ndarray) or self.pixels.dtype != np.uint8:
            raise ValueError("Pixel data must be a uint8 numpy array")
        if self.pixels.shape != (self.height, self.width, 4):
            raise ValueError(
                f"Pixel array shape {self.pixels.shape} does not match "
                f"{self.width}x{self.height} RGBA"
            )

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'PixelBuffer':
        """Wrap an HxW gray, HxWx3 RGB or HxWx4 RGBA uint8 array (copied)."""
        array = np.asarray(array)
        if array.dtype != np.uint8:
            array = np.clip(array, 0, 255).astype(np.uint8)
        if array.ndim == 2:
            array = np.repeat(array[:, :, None], 3, axis=2)
        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise ValueError(f"Unsupported array shape {array.shape}")
        h, w = array.shape[:2]
        if array.shape[2] == 3:
            rgba = np.empty((h, w, 4), dtype=np.uint8)
            rgba[:, :, :3] = array
            rgba[:, :, 3] = 255
        else:
            rgba = np.ascontiguousarray(array).copy()
        return cls(w, h, rgba)

    @classmethod
    def from_samples(cls, width: int, height: int, samples: Sequence[int]) -> 'PixelBuffer':
        """Build from a flat R,G,B,A sample sequence of length width*height*4."""
        flat = np.asarray(samples)
        if flat.size != width * height * 4:
            raise ValueError(
                f"Expected {width * height * 4} samples for {width}x{height}, got {flat.size}"
            )
        flat = np.clip(flat, 0, 255).astype(np.uint8)
        return cls(width, height, flat.reshape(height, width, 4))

    @classmethod
    def filled(cls, width: int, height: int,
               rgba: Tuple[int, int, int, int] = (255, 255, 255, 255)) -> 'PixelBuffer':
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[:, :] = rgba
        return cls(width, height, pixels)

    @property
    def samples(self) -> np.ndarray:
        """Flat view of all samples, length width*height*4."""
        return self.pixels.reshape(-1)

    @property
    def rgb(self) -> np.ndarray:
        return self.pixels[:, :, :3]

    @property
    def alpha(self) -> np.ndarray:
        return self.pixels[:, :, 3]

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def copy(self) -> 'PixelBuffer':
        return PixelBuffer(self.width, self.height, self.pixels.copy())

    def with_pixels(self, pixels: np.ndarray) -> 'PixelBuffer':
        """New buffer of whatever size ``pixels`` has."""
        h, w = pixels.shape[:2]
        return PixelBuffer(w, h, np.ascontiguousarray(pixels, dtype=np.uint8))

    def require_min_size(self, min_width: int, min_height: int) -> None:
        if self.width < min_width or self.height < min_height:
            raise DimensionTooSmall(self.width, self.height, min_width, min_height)

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        r, g, b, a = self.pixels[y, x]
        return (int(r), int(g), int(b), int(a))

    def __eq__(self, other):
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.pixels, other.pixels)
        )

    def __repr__(self):
        return f"PixelBuffer({self.width}x{self.height})"
