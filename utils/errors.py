"""Error taxonomy for the editing core."""


class EditorError(Exception):
    """Base class for editor failures."""


class DecodeFailure(EditorError, ValueError):
    """Image bytes or file could not be decoded into a pixel buffer."""


class InvalidSelection(EditorError, ValueError):
    """Crop selection is too small or has no usable display geometry."""


class DimensionTooSmall(EditorError, ValueError):
    """Buffer is too small for a neighbourhood operation."""

    def __init__(self, width: int, height: int, min_width: int, min_height: int):
        super().__init__(
            f"Buffer {width}x{height} is smaller than required {min_width}x{min_height}"
        )
        self.width = width
        self.height = height
        self.min_width = min_width
        self.min_height = min_height
