"""Shared utilities.

``image_io`` and ``demo_images`` build ``PixelBuffer`` objects and are
imported from their modules directly.
"""

from .constants import KERNEL_WEIGHTS, MIN_SELECTION_SIZE, EMBOSS_OFFSET
from .errors import EditorError, DecodeFailure, InvalidSelection, DimensionTooSmall
from .timing import Timer

__all__ = [
    'KERNEL_WEIGHTS',
    'MIN_SELECTION_SIZE',
    'EMBOSS_OFFSET',
    'EditorError',
    'DecodeFailure',
    'InvalidSelection',
    'DimensionTooSmall',
    'Timer',
]
