"""Synthetic demo images for trying styles without a file."""

import numpy as np

from models.pixel_buffer import PixelBuffer


def generate_checkerboard(size: int = 512, block_size: int = 32) -> PixelBuffer:
    """High-contrast checkerboard - shows edge, emboss and sharpen response."""
    img = np.zeros((size, size, 3), dtype=np.uint8)

    for i in range(0, size, block_size):
        for j in range(0, size, block_size):
            if (i // block_size + j // block_size) % 2 == 0:
                img[i:i+block_size, j:j+block_size] = [30, 30, 30]
            else:
                img[i:i+block_size, j:j+block_size] = [220, 220, 220]

    return PixelBuffer.from_array(img)


def generate_gradient(width: int = 512, height: int = 512) -> PixelBuffer:
    """Smooth diagonal gradient - shows hue rotation and tone presets."""
    y, x = np.mgrid[0:height, 0:width].astype(np.float64)
    t = (x + y) / max(width + height - 2, 1)
    img = np.stack([40 + t * 180, 60 + t * 140, 120 + t * 100], axis=-1)
    return PixelBuffer.from_array(np.clip(img, 0, 255).astype(np.uint8))


def generate_color_bars(width: int = 512, height: int = 512) -> PixelBuffer:
    """Saturated color bars - shows saturation, sepia and invert."""
    colors = [
        [180, 40, 40],    # Red
        [40, 160, 40],    # Green
        [40, 80, 180],    # Blue
        [180, 180, 40],   # Yellow
        [180, 40, 180],   # Magenta
        [40, 180, 180],   # Cyan
        [200, 120, 40],   # Orange
        [120, 40, 180],   # Purple
    ]
    img = np.zeros((height, width, 3), dtype=np.uint8)
    stripe_width = max(width // len(colors), 1)

    for i, color in enumerate(colors):
        x_start = i * stripe_width
        x_end = (i + 1) * stripe_width if i < len(colors) - 1 else width
        img[:, x_start:x_end] = color

    return PixelBuffer.from_array(img)


def generate_shapes(size: int = 512) -> PixelBuffer:
    """Bars and a disc on a light background, with a translucent corner."""
    img = np.full((size, size, 4), 245, dtype=np.uint8)
    margin = size // 10
    bar = max(size // 16, 2)

    img[margin:margin + bar, margin:size - margin, :3] = [25, 25, 25]
    img[margin:size - margin, margin:margin + bar, :3] = [25, 25, 25]

    y, x = np.ogrid[0:size, 0:size]
    disc = (x - size * 0.6) ** 2 + (y - size * 0.6) ** 2 <= (size * 0.2) ** 2
    img[disc, :3] = [200, 70, 50]

    img[:margin, :margin, 3] = 128
    return PixelBuffer(size, size, img)


DEMO_IMAGES = {
    "gradient": ("Gradient", lambda: generate_gradient(512, 512)),
    "checkerboard": ("Checkerboard", lambda: generate_checkerboard(512)),
    "color_bars": ("Color Bars", lambda: generate_color_bars(512, 512)),
    "shapes": ("Shapes", lambda: generate_shapes(512)),
}


def generate_demo_image(key: str) -> PixelBuffer | None:
    """Generate demo image by key."""
    if key in DEMO_IMAGES:
        return DEMO_IMAGES[key][1]()
    return None
