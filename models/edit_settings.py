"""Edit settings: style preset plus the four color sliders."""

from dataclasses import asdict, dataclass, replace
from enum import Enum

from utils.constants import BRIGHTNESS_RANGE, CONTRAST_RANGE, HUE_RANGE, SATURATION_RANGE


class StyleId(Enum):
    """Named visual styles; values are the labels shown to the user."""

    NO_FILTER = "No Filter (Base)"
    GRAYSCALE = "Grayscale"
    SEPIA = "Sepia"
    INVERT = "Invert"
    VINTAGE = "Vintage"
    TECHNICOLOR = "Technicolor"
    POLAROID = "Polaroid"
    WARM = "Warm"
    COOL = "Cool"
    PIXELATE = "Pixelate"
    EDGE_DETECTION = "Edge Detection"
    SHARPEN = "Sharpen"
    BLUR = "Blur"
    GAUSSIAN_BLUR = "Gaussian Blur"
    EMBOSS = "Emboss"

    @classmethod
    def from_label(cls, text: str) -> 'StyleId':
        """Look up a style by label ("Gaussian Blur") or member name ("gaussian_blur")."""
        if isinstance(text, StyleId):
            return text
        wanted = str(text).strip().lower()
        for style in cls:
            if wanted in (style.value.lower(), style.name.lower()):
                return style
        key = wanted.replace(' ', '_').replace('-', '_')
        for style in cls:
            if key == style.name.lower():
                return style
        raise ValueError(f"Unknown style: {text!r}")


def _check_range(name: str, value: int, bounds) -> None:
    low, high = bounds
    if not (low <= value <= high):
        raise ValueError(f"{name} must be {low}..{high}, got {value}")


@dataclass(frozen=True)
class EditSettings:
    """Immutable settings for one pipeline run."""

    style: StyleId = StyleId.NO_FILTER
    brightness: int = 0
    contrast: int = 0
    saturation: int = 0
    hue: int = 0

    def __post_init__(self):
        if not isinstance(self.style, StyleId):
            object.__setattr__(self, 'style', StyleId.from_label(self.style))
        _check_range("Brightness", self.brightness, BRIGHTNESS_RANGE)
        _check_range("Contrast", self.contrast, CONTRAST_RANGE)
        _check_range("Saturation", self.saturation, SATURATION_RANGE)
        _check_range("Hue", self.hue, HUE_RANGE)

    @property
    def is_identity(self) -> bool:
        return (
            self.style is StyleId.NO_FILTER
            and self.brightness == 0
            and self.contrast == 0
            and self.saturation == 0
            and self.hue == 0
        )

    def with_changes(self, **changes) -> 'EditSettings':
        return replace(self, **changes)

    def to_dict(self) -> dict:
        data = asdict(self)
        data['style'] = self.style.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'EditSettings':
        return cls(
            style=StyleId.from_label(data.get('style', StyleId.NO_FILTER.value)),
            brightness=int(data.get('brightness', 0)),
            contrast=int(data.get('contrast', 0)),
            saturation=int(data.get('saturation', 0)),
            hue=int(data.get('hue', 0)),
        )
