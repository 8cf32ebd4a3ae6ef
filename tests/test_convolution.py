"""Tests for 3x3 convolution and its pre/post passes."""

import numpy as np
import pytest
from models.pixel_buffer import PixelBuffer
from engines.convolution import KERNELS, Kernel, average_grayscale, convolve, offset_channels


def random_buffer(width=7, height=5, seed=1):
    rng = np.random.default_rng(seed)
    return PixelBuffer(width, height, rng.integers(0, 256, (height, width, 4), dtype=np.uint8))


def reference_convolve(buffer, kernel):
    """Straightforward per-pixel loop used as the expected result."""
    src = buffer.pixels.astype(np.int64)
    out = buffer.pixels.copy()
    for y in range(1, buffer.height - 1):
        for x in range(1, buffer.width - 1):
            for c in range(3):
                total = 0
                for ky in range(3):
                    for kx in range(3):
                        total += src[y + ky - 1, x + kx - 1, c] * kernel.weights[ky, kx]
                out[y, x, c] = min(255, max(0, int(np.rint(total / kernel.divisor))))
    return out


@pytest.mark.parametrize("name", sorted(KERNELS))
def test_matches_reference_loop(name):
    buffer = random_buffer()
    result = convolve(buffer, KERNELS[name])
    assert np.array_equal(result.pixels, reference_convolve(buffer, KERNELS[name]))


@pytest.mark.parametrize("name", sorted(KERNELS))
def test_border_pixels_unchanged(name):
    """Row 0, last row, column 0 and last column are copied as-is."""
    buffer = random_buffer(9, 6)
    result = convolve(buffer, KERNELS[name])
    assert np.array_equal(result.pixels[0], buffer.pixels[0])
    assert np.array_equal(result.pixels[-1], buffer.pixels[-1])
    assert np.array_equal(result.pixels[:, 0], buffer.pixels[:, 0])
    assert np.array_equal(result.pixels[:, -1], buffer.pixels[:, -1])


def test_alpha_copied_from_source():
    buffer = random_buffer()
    result = convolve(buffer, KERNELS['gaussian_blur'])
    assert np.array_equal(result.alpha, buffer.alpha)


def test_sharpen_white_4x4_stays_white():
    """5*255 - 4*255 = 255 for every interior pixel."""
    buffer = PixelBuffer.filled(4, 4, (255, 255, 255, 255))
    result = convolve(buffer, KERNELS['sharpen'])
    assert result == buffer
    for x, y in [(1, 1), (1, 2), (2, 1), (2, 2)]:
        assert result.pixel(x, y) == (255, 255, 255, 255)


def test_divisors():
    assert KERNELS['blur'].divisor == 9
    assert KERNELS['gaussian_blur'].divisor == 16
    assert KERNELS['sharpen'].divisor == 1
    assert KERNELS['emboss'].divisor == 1
    assert KERNELS['edge'].divisor == 1


def test_zero_sum_kernel_uses_divisor_one():
    """Edge weights sum to 0; the raw weighted sum is used, clamped."""
    pixels = np.zeros((3, 3, 4), dtype=np.uint8)
    pixels[:, :, 3] = 255
    pixels[1, 1, :3] = 20
    buffer = PixelBuffer(3, 3, pixels)
    result = convolve(buffer, KERNELS['edge'])
    assert result.pixel(1, 1) == (160, 160, 160, 255)


def test_uniform_blur_unchanged():
    buffer = PixelBuffer.filled(6, 6, (90, 120, 30, 200))
    assert convolve(buffer, KERNELS['blur']) == buffer


def test_custom_kernel_from_flat_weights():
    kernel = Kernel('shift', [0, 0, 0, 0, 0, 1, 0, 0, 0])
    assert kernel.weights.shape == (3, 3)
    buffer = random_buffer()
    result = convolve(buffer, kernel)
    assert np.array_equal(result.rgb[1:-1, 1:-1], buffer.rgb[1:-1, 2:])


def test_not_in_place():
    """Neighbourhoods must come from the input, never from computed output."""
    buffer = random_buffer(8, 8)
    before = buffer.pixels.copy()
    result = convolve(buffer, KERNELS['blur'])
    assert result.pixels is not buffer.pixels
    assert np.array_equal(buffer.pixels, before)


def test_too_small_returns_copy():
    buffer = random_buffer(2, 2)
    result = convolve(buffer, KERNELS['sharpen'])
    assert result == buffer
    assert result.pixels is not buffer.pixels


def test_average_grayscale_rounds_mean():
    pixels = np.array([[[10, 20, 31, 77], [1, 2, 2, 255]]], dtype=np.uint8)
    result = average_grayscale(PixelBuffer(2, 1, pixels))
    assert result.pixel(0, 0) == (20, 20, 20, 77)
    assert result.pixel(1, 0) == (2, 2, 2, 255)


def test_offset_channels_saturates():
    pixels = np.array([[[200, 10, 127, 50]]], dtype=np.uint8)
    result = offset_channels(PixelBuffer(1, 1, pixels))
    assert result.pixel(0, 0) == (255, 138, 255, 50)
