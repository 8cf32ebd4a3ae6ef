"""Quarter-turn rotation with exact pixel relocation."""

from enum import IntEnum
from typing import Union

import cv2

from models.pixel_buffer import PixelBuffer


class RotationDirection(IntEnum):
    COUNTER_CLOCKWISE = -1
    CLOCKWISE = 1


_ROTATE_CODES = {
    RotationDirection.CLOCKWISE: cv2.ROTATE_90_CLOCKWISE,
    RotationDirection.COUNTER_CLOCKWISE: cv2.ROTATE_90_COUNTERCLOCKWISE,
}


def rotate(buffer: PixelBuffer, direction: Union[int, RotationDirection]) -> PixelBuffer:
    """Rotate 90 degrees; width and height swap.

    Clockwise maps (x, y) to (height-1-y, x), counter-clockwise to
    (y, width-1-x).
    """
    try:
        code = _ROTATE_CODES[RotationDirection(direction)]
    except ValueError:
        raise ValueError(f"Rotation direction must be -1 or +1, got {direction}") from None
    return buffer.with_pixels(cv2.rotate(buffer.pixels, code))


def rotate_quarter_turns(buffer: PixelBuffer, turns: int) -> PixelBuffer:
    """Rotate by ``turns`` quarter turns; positive is clockwise."""
    turns = turns % 4
    if turns == 0:
        return buffer.copy()
    if turns == 3:
        return rotate(buffer, RotationDirection.COUNTER_CLOCKWISE)
    result = buffer
    for _ in range(turns):
        result = rotate(result, RotationDirection.CLOCKWISE)
    return result
