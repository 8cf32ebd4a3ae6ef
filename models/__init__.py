"""Data models for pixel buffers, edit settings, crop geometry and results."""

from .pixel_buffer import PixelBuffer
from .edit_settings import EditSettings, StyleId
from .crop_rect import CropRect, DisplaySelection
from .render_result import RenderResult

__all__ = [
    'PixelBuffer',
    'EditSettings',
    'StyleId',
    'CropRect',
    'DisplaySelection',
    'RenderResult',
]
