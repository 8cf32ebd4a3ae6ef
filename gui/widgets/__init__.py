"""GUI widgets for the editor."""

from .image_viewer import ImageViewer, buffer_to_qimage

__all__ = ['ImageViewer', 'buffer_to_qimage']
