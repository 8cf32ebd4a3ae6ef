"""Tests for synthetic demo images."""

import pytest
from models.pixel_buffer import PixelBuffer
from utils.demo_images import DEMO_IMAGES, generate_checkerboard, generate_demo_image


@pytest.mark.parametrize("key", sorted(DEMO_IMAGES))
def test_demo_images_are_rgba_buffers(key):
    image = generate_demo_image(key)
    assert isinstance(image, PixelBuffer)
    assert image.size == (512, 512)


def test_unknown_key():
    assert generate_demo_image("nope") is None


def test_checkerboard_alternates():
    board = generate_checkerboard(64, 16)
    assert board.pixel(0, 0) != board.pixel(16, 0)
    assert board.pixel(0, 0) == board.pixel(16, 16)


def test_shapes_has_translucent_corner():
    assert generate_demo_image("shapes").pixel(0, 0)[3] == 128
