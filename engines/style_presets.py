"""Style preset resolution.

Each style maps to a plan: color operations appended to the slider chain,
an optional convolution kernel, and optional special stages around the
kernel or in place of it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from engines.color_adjust import AdjustmentKind, AdjustmentOp
from engines.convolution import KERNELS, Kernel
from models.edit_settings import StyleId


class SpecialStage(Enum):
    PIXELATE = "pixelate"
    EDGE_GRAYSCALE = "edge-grayscale"
    EMBOSS_OFFSET = "emboss-offset"


@dataclass(frozen=True)
class StylePlan:
    """Stages a style adds on top of the base color adjustment."""

    extra_operations: Tuple[AdjustmentOp, ...] = ()
    kernel: Optional[Kernel] = None
    pre_stage: Optional[SpecialStage] = None
    post_stage: Optional[SpecialStage] = None

    @property
    def uses_pixelation(self) -> bool:
        return self.pre_stage is SpecialStage.PIXELATE

    @property
    def uses_convolution(self) -> bool:
        return self.kernel is not None


def _ops(*pairs) -> Tuple[AdjustmentOp, ...]:
    return tuple(AdjustmentOp(kind, amount) for kind, amount in pairs)


_B = AdjustmentKind.BRIGHTNESS
_C = AdjustmentKind.CONTRAST
_S = AdjustmentKind.SATURATE
_H = AdjustmentKind.HUE_ROTATE

_STYLE_PLANS = {
    StyleId.NO_FILTER: StylePlan(),
    StyleId.GRAYSCALE: StylePlan(_ops((AdjustmentKind.GRAYSCALE, 1.0))),
    StyleId.SEPIA: StylePlan(_ops((AdjustmentKind.SEPIA, 1.0))),
    StyleId.INVERT: StylePlan(_ops((AdjustmentKind.INVERT, 1.0))),
    StyleId.VINTAGE: StylePlan(_ops((AdjustmentKind.SEPIA, 0.6), (_C, 1.2), (_B, 0.9))),
    StyleId.TECHNICOLOR: StylePlan(_ops((_S, 2.0), (_C, 1.2))),
    StyleId.POLAROID: StylePlan(_ops((AdjustmentKind.SEPIA, 0.2), (_C, 0.9), (_B, 1.1))),
    StyleId.WARM: StylePlan(_ops((AdjustmentKind.SEPIA, 0.3), (_S, 1.2), (_H, -10.0))),
    StyleId.COOL: StylePlan(_ops((_S, 0.9), (_H, 10.0), (_B, 1.05))),
    StyleId.PIXELATE: StylePlan(pre_stage=SpecialStage.PIXELATE),
    StyleId.EDGE_DETECTION: StylePlan(kernel=KERNELS['edge'], pre_stage=SpecialStage.EDGE_GRAYSCALE),
    StyleId.SHARPEN: StylePlan(kernel=KERNELS['sharpen']),
    StyleId.BLUR: StylePlan(kernel=KERNELS['blur']),
    StyleId.GAUSSIAN_BLUR: StylePlan(kernel=KERNELS['gaussian_blur']),
    StyleId.EMBOSS: StylePlan(kernel=KERNELS['emboss'], post_stage=SpecialStage.EMBOSS_OFFSET),
}

_missing = [style.name for style in StyleId if style not in _STYLE_PLANS]
if _missing:
    raise RuntimeError(f"Styles without a plan: {', '.join(_missing)}")

STYLE_LABELS = [style.value for style in StyleId]


def resolve_style(style) -> StylePlan:
    """Plan for a ``StyleId`` or style label."""
    return _STYLE_PLANS[StyleId.from_label(style)]
