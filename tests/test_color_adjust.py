"""Tests for fused color adjustment."""

import numpy as np
import pytest
from models.pixel_buffer import PixelBuffer
from engines.color_adjust import (
    AdjustmentKind, AdjustmentOp, adjust_colors, apply_operations, base_operations,
    brightness_matrix, contrast_matrix, describe_operations, fuse_operations,
)


def random_buffer(width=16, height=12, seed=0, low=0, high=256):
    rng = np.random.default_rng(seed)
    pixels = rng.integers(low, high, (height, width, 4), dtype=np.uint8)
    return PixelBuffer(width, height, pixels)


def test_zero_sliders_are_identity():
    """All sliders at 0 should return an equal buffer."""
    buffer = random_buffer()
    assert adjust_colors(buffer) == buffer


def test_brightness_minus_100_is_black():
    """brightness=-100 is 0% brightness: RGB all 0, alpha untouched."""
    buffer = random_buffer()
    result = adjust_colors(buffer, brightness=-100)
    assert np.all(result.rgb == 0)
    assert np.array_equal(result.alpha, buffer.alpha)


def test_brightness_plus_100_doubles_and_clamps():
    buffer = PixelBuffer.from_array(np.array([[[10, 100, 200]]], dtype=np.uint8))
    result = adjust_colors(buffer, brightness=100)
    assert result.pixel(0, 0) == (20, 200, 255, 255)


def test_contrast_minus_100_is_mid_gray():
    """0% contrast collapses every channel to 0.5."""
    buffer = random_buffer()
    result = adjust_colors(buffer, contrast=-100)
    assert np.all(result.rgb == 128)


def test_saturation_minus_100_is_gray():
    buffer = random_buffer()
    result = adjust_colors(buffer, saturation=-100)
    assert np.array_equal(result.rgb[:, :, 0], result.rgb[:, :, 1])
    assert np.array_equal(result.rgb[:, :, 1], result.rgb[:, :, 2])


def test_hue_180_twice_returns_original():
    """Two half turns are a full turn, up to per-pass rounding, over the full 0..255 range."""
    buffer = random_buffer()
    once = adjust_colors(buffer, hue=180)
    twice = adjust_colors(once, hue=180)
    diff = np.abs(twice.rgb.astype(int) - buffer.rgb.astype(int))
    assert diff.max() <= 1
    assert np.array_equal(twice.alpha, buffer.alpha)


@pytest.mark.parametrize("rgb", [(255, 0, 0), (0, 200, 50), (30, 60, 220), (255, 255, 0)])
def test_hue_180_twice_keeps_saturated_colors(rgb):
    buffer = PixelBuffer.from_array(np.array([[rgb]], dtype=np.uint8))
    twice = adjust_colors(adjust_colors(buffer, hue=180), hue=180)
    assert twice == buffer


def test_hue_180_gives_complement():
    """Half a turn keeps each pixel's max and min channel: red becomes cyan."""
    buffer = PixelBuffer.from_array(np.array([[[255, 0, 0], [200, 120, 40]]], dtype=np.uint8))
    result = adjust_colors(buffer, hue=180)
    assert result.pixel(0, 0) == (0, 255, 255, 255)
    assert result.pixel(1, 0) == (40, 120, 200, 255)


def test_hue_leaves_grays_alone():
    buffer = PixelBuffer.filled(3, 3, (90, 90, 90, 255))
    assert adjust_colors(buffer, hue=77) == buffer


def test_hue_shift_between_matrices_is_not_clamped():
    """200% brightness, two hue shifts summing to 360, then 50% restores the input."""
    buffer = random_buffer()
    ops = [
        AdjustmentOp(AdjustmentKind.BRIGHTNESS, 2.0),
        AdjustmentOp(AdjustmentKind.HUE_ROTATE, 120.0),
        AdjustmentOp(AdjustmentKind.HUE_ROTATE, 240.0),
        AdjustmentOp(AdjustmentKind.BRIGHTNESS, 0.5),
    ]
    assert apply_operations(buffer, ops) == buffer


def test_hue_has_no_matrix():
    with pytest.raises(ValueError):
        AdjustmentOp(AdjustmentKind.HUE_ROTATE, 30.0).matrix()


def test_contrast_slider_and_style_contrast_multiply():
    """Slider +20 (120%) next to a style's contrast(120%) acts as contrast(144%)."""
    buffer = PixelBuffer.from_array(np.array([[[200, 100, 60]]], dtype=np.uint8))
    chained = adjust_colors(buffer, contrast=20, extra=[AdjustmentOp(AdjustmentKind.CONTRAST, 1.2)])
    single = apply_operations(buffer, [AdjustmentOp(AdjustmentKind.CONTRAST, 1.44)])
    assert chained.pixel(0, 0) == (232, 88, 30, 255)
    assert chained == single


def test_hue_rotation_changes_color():
    buffer = PixelBuffer.from_array(np.array([[[200, 40, 40]]], dtype=np.uint8))
    result = adjust_colors(buffer, hue=120)
    r, g, b, _ = result.pixel(0, 0)
    assert g > r


def test_invert_is_exact():
    buffer = random_buffer()
    result = apply_operations(buffer, [AdjustmentOp(AdjustmentKind.INVERT, 1.0)])
    assert np.array_equal(result.rgb, 255 - buffer.rgb)


def test_full_grayscale_equalises_channels():
    buffer = random_buffer()
    result = apply_operations(buffer, [AdjustmentOp(AdjustmentKind.GRAYSCALE, 1.0)])
    assert np.array_equal(result.rgb[:, :, 0], result.rgb[:, :, 2])


def test_sepia_on_white():
    """Sepia row sums above 1 clamp; the blue row sums to 0.937."""
    buffer = PixelBuffer.filled(2, 2, (255, 255, 255, 255))
    result = apply_operations(buffer, [AdjustmentOp(AdjustmentKind.SEPIA, 1.0)])
    assert result.pixel(1, 1) == (255, 255, 239, 255)


def test_fuse_composes_in_application_order():
    ops = [
        AdjustmentOp(AdjustmentKind.BRIGHTNESS, 0.5),
        AdjustmentOp(AdjustmentKind.CONTRAST, 2.0),
    ]
    expected = contrast_matrix(2.0) @ brightness_matrix(0.5)
    assert np.allclose(fuse_operations(ops), expected)


def test_fused_pass_skips_intermediate_clamping():
    """Brightness 200% then 50% must come back unchanged, not clipped at 255."""
    buffer = PixelBuffer.from_array(np.array([[[200, 180, 90]]], dtype=np.uint8))
    ops = [
        AdjustmentOp(AdjustmentKind.BRIGHTNESS, 2.0),
        AdjustmentOp(AdjustmentKind.BRIGHTNESS, 0.5),
    ]
    assert apply_operations(buffer, ops) == buffer


def test_base_operations_order_and_percentages():
    ops = base_operations(10, -20, 30, -45)
    assert [op.kind for op in ops] == [
        AdjustmentKind.BRIGHTNESS,
        AdjustmentKind.CONTRAST,
        AdjustmentKind.SATURATE,
        AdjustmentKind.HUE_ROTATE,
    ]
    assert [op.amount for op in ops] == [pytest.approx(1.1), pytest.approx(0.8),
                                         pytest.approx(1.3), -45.0]


def test_describe_operations_skips_identity():
    ops = base_operations(0, 20, 0, 0) + [AdjustmentOp(AdjustmentKind.SEPIA, 0.6)]
    assert describe_operations(ops) == "contrast(120%) sepia(60%)"
    assert describe_operations(base_operations(0, 0, 0, 0)) == "none"


def test_input_buffer_not_modified():
    buffer = random_buffer()
    before = buffer.pixels.copy()
    adjust_colors(buffer, brightness=40, contrast=-30, saturation=50, hue=90)
    assert np.array_equal(buffer.pixels, before)
