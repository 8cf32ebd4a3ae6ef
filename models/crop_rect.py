"""Crop geometry in source-pixel and display units."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class CropRect:
    """Rectangle in source-pixel units."""

    x: float
    y: float
    w: float
    h: float

    @classmethod
    def full(cls, width: int, height: int) -> 'CropRect':
        return cls(0.0, 0.0, float(width), float(height))


@dataclass(frozen=True)
class DisplaySelection:
    """Rectangle drawn by the user, in on-screen pixels of the displayed image."""

    x: float
    y: float
    w: float
    h: float

    @classmethod
    def from_drag(cls, start: Tuple[float, float], end: Tuple[float, float]) -> 'DisplaySelection':
        """Normalise a drag in any direction into a positive-size rectangle."""
        (sx, sy), (ex, ey) = start, end
        return cls(min(sx, ex), min(sy, ey), abs(ex - sx), abs(ey - sy))
