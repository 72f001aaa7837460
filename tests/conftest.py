import numpy as np
import pytest

from blockpic.image import Image


def _make_image(width, height, alpha=255):
    """Build an image where pixel (x, y) has r=x, g=y, b=x+y*width."""
    data = np.zeros((height, width, 4), dtype=np.uint8)
    for y in range(height):
        for x in range(width):
            data[y, x] = (x, y, x + y * width, alpha)
    return Image(data)


@pytest.fixture
def make_image():
    return _make_image


@pytest.fixture
def gradient():
    return _make_image(4, 4)
