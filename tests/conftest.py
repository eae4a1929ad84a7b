import numpy as np
import pytest
from PIL import Image

from tilepal.core import Colour


def make_colours(count, start=0):
    """Distinct opaque colours, stable for a given start"""
    return [Colour(i % 256, (i // 256) * 8, 77) for i in range(start, start + count)]


@pytest.fixture
def write_png(tmp_path):
    def _write(pixels, name="tiles.png"):
        path = tmp_path / name
        Image.fromarray(np.asarray(pixels, dtype=np.uint8), 'RGBA').save(path)
        return path
    return _write
