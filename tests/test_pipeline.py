"""Tests for the render pipeline."""

import numpy as np
import pytest
from models.edit_settings import EditSettings, StyleId
from models.pixel_buffer import PixelBuffer
from engines.color_adjust import AdjustmentKind, AdjustmentOp, apply_operations, base_operations
from engines.pipeline import process_image, render
from engines.style_presets import resolve_style


def random_buffer(width=24, height=18, seed=7):
    rng = np.random.default_rng(seed)
    return PixelBuffer(width, height, rng.integers(0, 256, (height, width, 4), dtype=np.uint8))


def test_default_settings_identity():
    """No style and zero sliders should leave the image unchanged."""
    buffer = random_buffer()
    result = render(buffer, EditSettings())
    assert result.image == buffer
    assert result.stages == ('adjust',)


def test_brightness_minus_100_is_black():
    buffer = random_buffer()
    image = process_image(buffer, EditSettings(brightness=-100))
    assert np.all(image.rgb == 0)
    assert np.array_equal(image.alpha, buffer.alpha)


def test_style_ops_fused_with_sliders():
    buffer = random_buffer()
    settings = EditSettings(style=StyleId.VINTAGE, brightness=10, hue=30)
    ops = base_operations(10, 0, 0, 30) + list(resolve_style(StyleId.VINTAGE).extra_operations)
    assert process_image(buffer, settings) == apply_operations(buffer, ops)


def test_invert_twice_restores():
    buffer = random_buffer()
    settings = EditSettings(style=StyleId.INVERT)
    assert process_image(process_image(buffer, settings), settings) == buffer


def test_sharpen_white_stays_white():
    buffer = PixelBuffer.filled(4, 4)
    assert process_image(buffer, EditSettings(style="Sharpen")) == buffer


def test_emboss_uniform_gray_saturates():
    """Emboss weights sum to 1, so 128 + 128 offset clamps to 255 everywhere."""
    buffer = PixelBuffer.filled(6, 6, (128, 128, 128, 255))
    result = render(buffer, EditSettings(style=StyleId.EMBOSS))
    assert np.all(result.image.rgb == 255)
    assert result.stages == ('adjust', 'emboss', 'emboss-offset')


def test_edge_detection_uniform_color():
    """Gray pre-pass averages to 150; flat interiors give 0, borders keep 150."""
    buffer = PixelBuffer.filled(6, 5, (100, 150, 200, 255))
    result = render(buffer, EditSettings(style=StyleId.EDGE_DETECTION))
    assert result.stages == ('adjust', 'edge-grayscale', 'edge')
    assert np.all(result.image.rgb[1:-1, 1:-1] == 0)
    assert np.all(result.image.rgb[0] == 150)
    assert np.all(result.image.rgb[:, -1] == 150)


def test_pixelate_stage():
    buffer = PixelBuffer.filled(30, 20, (10, 20, 30, 255))
    result = render(buffer, EditSettings(style=StyleId.PIXELATE))
    assert result.stages == ('adjust', 'pixelate')
    assert result.image == buffer


def test_grayscale_style():
    image = process_image(random_buffer(), EditSettings(style=StyleId.GRAYSCALE))
    assert np.array_equal(image.rgb[:, :, 0], image.rgb[:, :, 1])


def test_input_not_modified():
    buffer = random_buffer()
    before = buffer.pixels.copy()
    process_image(buffer, EditSettings(style=StyleId.EMBOSS, contrast=40))
    assert np.array_equal(buffer.pixels, before)


def test_timings_recorded():
    result = render(random_buffer(), EditSettings(style=StyleId.BLUR))
    assert result.adjust_time_ms >= 0
    assert result.filter_time_ms >= 0
    assert result.total_time_ms == result.adjust_time_ms + result.filter_time_ms


_B = AdjustmentKind.BRIGHTNESS
_C = AdjustmentKind.CONTRAST
_S = AdjustmentKind.SATURATE
_H = AdjustmentKind.HUE_ROTATE
_SEPIA = AdjustmentKind.SEPIA


@pytest.mark.parametrize("style,pairs", [
    (StyleId.GRAYSCALE, [(AdjustmentKind.GRAYSCALE, 1.0)]),
    (StyleId.SEPIA, [(_SEPIA, 1.0)]),
    (StyleId.INVERT, [(AdjustmentKind.INVERT, 1.0)]),
    (StyleId.VINTAGE, [(_SEPIA, 0.6), (_C, 1.2), (_B, 0.9)]),
    (StyleId.TECHNICOLOR, [(_S, 2.0), (_C, 1.2)]),
    (StyleId.POLAROID, [(_SEPIA, 0.2), (_C, 0.9), (_B, 1.1)]),
    (StyleId.WARM, [(_SEPIA, 0.3), (_S, 1.2), (_H, -10.0)]),
    (StyleId.COOL, [(_S, 0.9), (_H, 10.0), (_B, 1.05)]),
])
def test_color_style_applies_its_chain(style, pairs):
    """Color-only styles are the slider chain followed by their own operations."""
    buffer = random_buffer()
    expected = apply_operations(
        buffer, base_operations(-10, 15, 5, 20) + [AdjustmentOp(k, a) for k, a in pairs]
    )
    settings = EditSettings(style=style, brightness=-10, contrast=15, saturation=5, hue=20)
    result = render(buffer, settings)
    assert result.image == expected
    assert result.stages == ('adjust',)


@pytest.mark.parametrize("style", [StyleId.VINTAGE, StyleId.POLAROID, StyleId.WARM])
def test_sepia_styles_tint_gray_warm(style):
    image = process_image(PixelBuffer.filled(4, 4, (128, 128, 128, 255)), EditSettings(style=style))
    r, g, b, _ = image.pixel(0, 0)
    assert r > b


def test_cool_on_gray_only_brightens():
    """Saturation and hue leave gray alone; brightness 105% lifts 100 to 105."""
    image = process_image(PixelBuffer.filled(4, 4, (100, 100, 100, 255)), EditSettings(style=StyleId.COOL))
    assert image.pixel(2, 2) == (105, 105, 105, 255)


def test_technicolor_keeps_gray_and_boosts_color():
    gray = PixelBuffer.filled(2, 2, (128, 128, 128, 255))
    assert process_image(gray, EditSettings(style=StyleId.TECHNICOLOR)) == gray

    color = PixelBuffer.filled(2, 2, (150, 110, 100, 255))
    r, g, b, _ = process_image(color, EditSettings(style=StyleId.TECHNICOLOR)).pixel(0, 0)
    assert r - b > 50


def test_slider_contrast_multiplies_with_style_contrast():
    """On gray, Technicolor with contrast +20 is contrast 120% twice, i.e. 144%."""
    pixels = np.array([[[200, 200, 200, 255], [100, 100, 100, 255], [60, 60, 60, 255]]], dtype=np.uint8)
    buffer = PixelBuffer(3, 1, pixels)
    image = process_image(buffer, EditSettings(style=StyleId.TECHNICOLOR, contrast=20))
    assert [image.pixel(x, 0)[0] for x in range(3)] == [232, 88, 30]
