"""Render pipeline: fused color pass, then the style's spatial stage."""

import logging

from models.edit_settings import EditSettings
from models.pixel_buffer import PixelBuffer
from models.render_result import RenderResult
from engines.color_adjust import adjust_colors
from engines.convolution import average_grayscale, convolve, offset_channels
from engines.pixelation import pixelate
from engines.style_presets import SpecialStage, resolve_style
from utils.timing import Timer

logger = logging.getLogger(__name__)


def render(buffer: PixelBuffer, settings: EditSettings) -> RenderResult:
    """Run the full pipeline for one settings record."""
    timer = Timer()
    plan = resolve_style(settings.style)
    stages = ['adjust']

    # === COLOR ===
    image = timer.measure(
        'adjust', adjust_colors, buffer,
        settings.brightness, settings.contrast, settings.saturation, settings.hue,
        plan.extra_operations
    )

    # === SPATIAL ===
    if plan.uses_pixelation:
        image = timer.measure('filter', pixelate, image)
        stages.append(SpecialStage.PIXELATE.value)
    elif plan.uses_convolution:
        if plan.pre_stage is SpecialStage.EDGE_GRAYSCALE:
            image = timer.measure('filter', average_grayscale, image)
            stages.append(plan.pre_stage.value)

        image = timer.measure('filter', convolve, image, plan.kernel)
        stages.append(plan.kernel.name)

        if plan.post_stage is SpecialStage.EMBOSS_OFFSET:
            image = timer.measure('filter', offset_channels, image)
            stages.append(plan.post_stage.value)

    result = RenderResult(
        image=image,
        settings=settings,
        stages=tuple(stages),
        adjust_time_ms=timer.elapsed('adjust'),
        filter_time_ms=timer.elapsed('filter'),
    )
    logger.debug(
        "Rendered %dx%d %s via %s in %.1f ms",
        image.width, image.height, settings.style.value,
        " -> ".join(result.stages), result.total_time_ms
    )
    return result


def process_image(buffer: PixelBuffer, settings: EditSettings) -> PixelBuffer:
    """Rendered buffer only."""
    return render(buffer, settings).image
