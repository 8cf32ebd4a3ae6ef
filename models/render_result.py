"""Output of one pipeline run."""

from dataclasses import dataclass
from typing import Tuple

from models.edit_settings import EditSettings
from models.pixel_buffer import PixelBuffer


@dataclass
class RenderResult:
    """Rendered buffer with the stages that produced it."""

    image: PixelBuffer
    settings: EditSettings
    stages: Tuple[str, ...] = ()

    # Runtime
    adjust_time_ms: float = 0.0
    filter_time_ms: float = 0.0

    @property
    def total_time_ms(self) -> float:
        return self.adjust_time_ms + self.filter_time_ms
