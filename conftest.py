"""
Shared fixtures for the Sticker Slicer tests.
"""

import io

import numpy as np
import pytest
from PIL import Image


def pattern_image(width, height):
    """RGBA image in which every pixel is distinct (for small sizes)."""
    ys, xs = np.mgrid[0:height, 0:width]
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[..., 0] = xs % 256
    pixels[..., 1] = ys % 256
    pixels[..., 2] = (xs // 256 + 16 * (ys // 256)) % 256
    pixels[..., 3] = 255
    return Image.fromarray(pixels)


def encode_image(image, image_format="PNG"):
    buffer = io.BytesIO()
    if image_format == "JPEG":
        image = image.convert("RGB")
    image.save(buffer, format=image_format)
    return buffer.getvalue()


@pytest.fixture
def make_image():
    """Factory: make_image(width, height) -> RGBA PIL Image."""
    return pattern_image


@pytest.fixture
def make_image_bytes():
    """Factory: make_image_bytes(width, height, image_format="PNG") -> bytes."""

    def factory(width, height, image_format="PNG"):
        return encode_image(pattern_image(width, height), image_format)

    return factory
