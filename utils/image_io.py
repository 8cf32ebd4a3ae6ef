"""Image I/O using OpenCV; everything is normalised to RGBA8."""

import cv2
import numpy as np

from models.pixel_buffer import PixelBuffer
from utils.errors import DecodeFailure


def _to_rgba8(img: np.ndarray) -> np.ndarray:
    """OpenCV gray/BGR/BGRA of any depth to RGBA uint8."""
    if img.dtype == np.uint16:
        img = (img >> 8).astype(np.uint8)
    elif img.dtype != np.uint8:
        img = cv2.normalize(img, None, 0, 255, cv2.NORM_MINMAX).astype(np.uint8)

    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2RGBA)
    if img.shape[2] == 3:
        return cv2.cvtColor(img, cv2.COLOR_BGR2RGBA)
    if img.shape[2] == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)
    raise DecodeFailure(f"Unsupported channel count: {img.shape[2]}")


def load_image(path: str) -> PixelBuffer:
    """Load image file as an RGBA buffer."""
    img = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if img is None:
        raise DecodeFailure(f"Could not load image from {path}")
    return PixelBuffer.from_array(_to_rgba8(img))


def decode_image(data: bytes) -> PixelBuffer:
    """Decode encoded image bytes (PNG, JPEG, ...) as an RGBA buffer."""
    raw = np.frombuffer(data, dtype=np.uint8)
    img = cv2.imdecode(raw, cv2.IMREAD_UNCHANGED) if raw.size else None
    if img is None:
        raise DecodeFailure("Could not decode image data")
    return PixelBuffer.from_array(_to_rgba8(img))


def encode_png(buffer: PixelBuffer) -> bytes:
    """Lossless PNG bytes of the buffer."""
    ok, encoded = cv2.imencode('.png', cv2.cvtColor(buffer.pixels, cv2.COLOR_RGBA2BGRA))
    if not ok:
        raise OSError("PNG encoding failed")
    return encoded.tobytes()


def save_image(buffer: PixelBuffer, path: str) -> None:
    """Save RGBA buffer; the format follows the file extension."""
    bgra = cv2.cvtColor(buffer.pixels, cv2.COLOR_RGBA2BGRA)
    if str(path).lower().endswith(('.jpg', '.jpeg', '.bmp')):
        bgra = cv2.cvtColor(bgra, cv2.COLOR_BGRA2BGR)
    if not cv2.imwrite(str(path), bgra):
        raise OSError(f"Could not write image to {path}")
