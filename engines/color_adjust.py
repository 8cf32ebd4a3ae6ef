"""Per-pixel color adjustment in a single pass.

Brightness, contrast, saturate, grayscale, sepia and invert are affine maps
of normalised RGB using the CSS Filter Effects reference matrices; runs of
them are multiplied into one 4x4 homogeneous matrix. Hue rotation shifts the
HSL hue and sits between those matrices. Intermediate values are never
rounded or clamped; the clamp to [0, 255] happens once at the end.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Sequence

import numpy as np

from models.pixel_buffer import PixelBuffer

logger = logging.getLogger(__name__)


class AdjustmentKind(Enum):
    BRIGHTNESS = "brightness"
    CONTRAST = "contrast"
    SATURATE = "saturate"
    HUE_ROTATE = "hue-rotate"
    GRAYSCALE = "grayscale"
    SEPIA = "sepia"
    INVERT = "invert"


def brightness_matrix(amount: float) -> np.ndarray:
    """Linear scale of all channels; amount 1.0 is unchanged."""
    m = np.eye(4)
    m[0, 0] = m[1, 1] = m[2, 2] = amount
    return m


def contrast_matrix(amount: float) -> np.ndarray:
    """Scale around mid-gray: c' = (c - 0.5) * amount + 0.5."""
    m = brightness_matrix(amount)
    m[:3, 3] = 0.5 - 0.5 * amount
    return m


def saturate_matrix(amount: float) -> np.ndarray:
    s = amount
    m = np.eye(4)
    m[:3, :3] = [
        [0.213 + 0.787 * s, 0.715 - 0.715 * s, 0.072 - 0.072 * s],
        [0.213 - 0.213 * s, 0.715 + 0.285 * s, 0.072 - 0.072 * s],
        [0.213 - 0.213 * s, 0.715 - 0.715 * s, 0.072 + 0.928 * s],
    ]
    return m


def rotate_hue(rgb: np.ndarray, degrees: float) -> np.ndarray:
    """Shift the HSL hue of float RGB (..., 3) by ``degrees``.

    Lightness and saturation are kept, which is the same as keeping each
    pixel's max and min channel; only the middle channel and the channel
    order change. Values outside [0, 1] are shifted the same way, so a fused
    chain is clamped once at the end.
    """
    R, G, B = rgb[..., 0], rgb[..., 1], rgb[..., 2]
    cmax = rgb.max(axis=-1)
    chroma = cmax - rgb.min(axis=-1)
    safe = np.where(chroma > 0, chroma, 1.0)

    # Hue in sextants [0, 6)
    H = np.where(
        cmax == R, ((G - B) / safe) % 6.0,
        np.where(cmax == G, (B - R) / safe + 2.0, (R - G) / safe + 4.0)
    )
    H = (H + degrees / 60.0) % 6.0

    out = np.empty_like(rgb)
    for channel, n in enumerate((5.0, 3.0, 1.0)):
        k = (n + H) % 6.0
        out[..., channel] = cmax - chroma * np.clip(np.minimum(k, 4.0 - k), 0.0, 1.0)
    return out


def grayscale_matrix(amount: float) -> np.ndarray:
    a = 1.0 - min(1.0, max(0.0, amount))
    m = np.eye(4)
    m[:3, :3] = [
        [0.2126 + 0.7874 * a, 0.7152 - 0.7152 * a, 0.0722 - 0.0722 * a],
        [0.2126 - 0.2126 * a, 0.7152 + 0.2848 * a, 0.0722 - 0.0722 * a],
        [0.2126 - 0.2126 * a, 0.7152 - 0.7152 * a, 0.0722 + 0.9278 * a],
    ]
    return m


def sepia_matrix(amount: float) -> np.ndarray:
    a = 1.0 - min(1.0, max(0.0, amount))
    m = np.eye(4)
    m[:3, :3] = [
        [0.393 + 0.607 * a, 0.769 - 0.769 * a, 0.189 - 0.189 * a],
        [0.349 - 0.349 * a, 0.686 + 0.314 * a, 0.168 - 0.168 * a],
        [0.272 - 0.272 * a, 0.534 - 0.534 * a, 0.131 + 0.869 * a],
    ]
    return m


def invert_matrix(amount: float) -> np.ndarray:
    """c' = amount + c * (1 - 2 * amount); amount 1.0 is a full inversion."""
    a = min(1.0, max(0.0, amount))
    m = brightness_matrix(1.0 - 2.0 * a)
    m[:3, 3] = a
    return m


_MATRIX_BUILDERS = {
    AdjustmentKind.BRIGHTNESS: brightness_matrix,
    AdjustmentKind.CONTRAST: contrast_matrix,
    AdjustmentKind.SATURATE: saturate_matrix,
    AdjustmentKind.GRAYSCALE: grayscale_matrix,
    AdjustmentKind.SEPIA: sepia_matrix,
    AdjustmentKind.INVERT: invert_matrix,
}

# Amount at which each kind leaves pixels untouched
_NEUTRAL_AMOUNTS = {
    AdjustmentKind.BRIGHTNESS: 1.0,
    AdjustmentKind.CONTRAST: 1.0,
    AdjustmentKind.SATURATE: 1.0,
    AdjustmentKind.HUE_ROTATE: 0.0,
    AdjustmentKind.GRAYSCALE: 0.0,
    AdjustmentKind.SEPIA: 0.0,
    AdjustmentKind.INVERT: 0.0,
}


@dataclass(frozen=True)
class AdjustmentOp:
    """One filter function: ratio amounts (1.2 == 120%), degrees for hue-rotate."""

    kind: AdjustmentKind
    amount: float

    @property
    def is_identity(self) -> bool:
        return self.amount == _NEUTRAL_AMOUNTS[self.kind]

    @property
    def is_affine(self) -> bool:
        return self.kind in _MATRIX_BUILDERS

    def matrix(self) -> np.ndarray:
        if not self.is_affine:
            raise ValueError(f"{self.kind.value} is not an affine color transform")
        return _MATRIX_BUILDERS[self.kind](self.amount)

    def __str__(self):
        if self.kind is AdjustmentKind.HUE_ROTATE:
            return f"{self.kind.value}({self.amount:g}deg)"
        return f"{self.kind.value}({self.amount * 100:g}%)"


def base_operations(brightness: int, contrast: int, saturation: int, hue: int) -> List[AdjustmentOp]:
    """Slider values to the ordered brightness/contrast/saturate/hue chain.

    Slider 0 is 100%, -100 is 0% and +100 is 200%; hue is in degrees.
    """
    return [
        AdjustmentOp(AdjustmentKind.BRIGHTNESS, (100 + brightness) / 100.0),
        AdjustmentOp(AdjustmentKind.CONTRAST, (100 + contrast) / 100.0),
        AdjustmentOp(AdjustmentKind.SATURATE, (100 + saturation) / 100.0),
        AdjustmentOp(AdjustmentKind.HUE_ROTATE, float(hue)),
    ]


def fuse_operations(ops: Iterable[AdjustmentOp]) -> np.ndarray:
    """Compose affine operations, first applied first, into one 4x4 matrix."""
    fused = np.eye(4)
    for op in ops:
        if op.is_identity:
            continue
        fused = op.matrix() @ fused
    return fused


def describe_operations(ops: Iterable[AdjustmentOp]) -> str:
    """Filter-string rendering of a chain, e.g. "sepia(60%) contrast(120%)"."""
    return " ".join(str(op) for op in ops if not op.is_identity) or "none"


def _transform(rgb: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    return rgb @ matrix[:3, :3].T + matrix[:3, 3]


def _with_rgb(buffer: PixelBuffer, rgb: np.ndarray) -> PixelBuffer:
    """Round, clamp and pack normalised RGB; alpha is copied."""
    out = np.clip(np.rint(rgb * 255.0), 0, 255).astype(np.uint8)
    pixels = buffer.pixels.copy()
    pixels[:, :, :3] = out.reshape(buffer.height, buffer.width, 3)
    return PixelBuffer(buffer.width, buffer.height, pixels)


def apply_operations(buffer: PixelBuffer, ops: Sequence[AdjustmentOp]) -> PixelBuffer:
    """Run a chain of operations as a single pass with one final clamp.

    Consecutive affine operations are multiplied into one matrix; hue shifts
    are applied between those matrices in float.
    """
    active = [op for op in ops if not op.is_identity]
    if not active:
        return buffer.copy()
    logger.debug("Color pass: %s", describe_operations(active))

    rgb = buffer.rgb.reshape(-1, 3).astype(np.float64) / 255.0
    pending = []
    for op in active:
        if op.is_affine:
            pending.append(op)
            continue
        if pending:
            rgb = _transform(rgb, fuse_operations(pending))
            pending = []
        rgb = rotate_hue(rgb, op.amount)
    if pending:
        rgb = _transform(rgb, fuse_operations(pending))
    return _with_rgb(buffer, rgb)


def adjust_colors(
    buffer: PixelBuffer,
    brightness: int = 0,
    contrast: int = 0,
    saturation: int = 0,
    hue: int = 0,
    extra: Sequence[AdjustmentOp] = ()
) -> PixelBuffer:
    """Brightness -> contrast -> saturation -> hue-rotate, then ``extra``, in one pass."""
    ops = base_operations(brightness, contrast, saturation, hue) + list(extra)
    return apply_operations(buffer, ops)
