"""Fixed tables and limits shared by engines, GUI and CLI."""

import numpy as np

# 3x3 convolution weights, row-major
KERNEL_WEIGHTS = {
    'sharpen': [0, -1, 0, -1, 5, -1, 0, -1, 0],
    'edge': [-1, -1, -1, -1, 8, -1, -1, -1, -1],
    'emboss': [-2, -1, 0, -1, 1, 1, 0, 1, 2],
    'blur': [1, 1, 1, 1, 1, 1, 1, 1, 1],
    'gaussian_blur': [1, 2, 1, 2, 4, 2, 1, 2, 1],
}

KERNEL_MATRICES = {
    name: np.array(weights, dtype=np.int32).reshape(3, 3)
    for name, weights in KERNEL_WEIGHTS.items()
}

# Pixelation block: max(MIN_PIXEL_SIZE, width // PIXELATE_DIVISIONS)
MIN_PIXEL_SIZE = 5
PIXELATE_DIVISIONS = 100

EMBOSS_OFFSET = 128

# Crop selections smaller than this (display units) are ignored
MIN_SELECTION_SIZE = 10

# Convolution and pixelation need a full 3x3 neighbourhood
MIN_FILTER_SIZE = 3

BRIGHTNESS_RANGE = (-100, 100)
CONTRAST_RANGE = (-100, 100)
SATURATION_RANGE = (-100, 100)
HUE_RANGE = (-180, 180)

RENDER_DEBOUNCE_MS = 50

EXPORT_NAME_PATTERN = "edited-image-{stamp}.png"
