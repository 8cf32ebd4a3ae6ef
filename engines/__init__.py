"""Image editing engines - pure computation, no GUI dependencies."""

from .color_adjust import (
    AdjustmentKind, AdjustmentOp, adjust_colors, apply_operations,
    base_operations, fuse_operations, rotate_hue,
)
from .convolution import Kernel, KERNELS, convolve, average_grayscale, offset_channels
from .pixelation import pixelate, pixel_size_for
from .crop import crop, crop_selection, selection_to_source
from .rotate import RotationDirection, rotate, rotate_quarter_turns
from .style_presets import SpecialStage, StylePlan, STYLE_LABELS, resolve_style
from .pipeline import render, process_image
from .session import EditSession

__all__ = [
    'AdjustmentKind',
    'AdjustmentOp',
    'adjust_colors',
    'apply_operations',
    'base_operations',
    'fuse_operations',
    'rotate_hue',
    'Kernel',
    'KERNELS',
    'convolve',
    'average_grayscale',
    'offset_channels',
    'pixelate',
    'pixel_size_for',
    'crop',
    'crop_selection',
    'selection_to_source',
    'RotationDirection',
    'rotate',
    'rotate_quarter_turns',
    'SpecialStage',
    'StylePlan',
    'STYLE_LABELS',
    'resolve_style',
    'render',
    'process_image',
    'EditSession',
]
