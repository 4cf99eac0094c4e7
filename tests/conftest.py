"""Shared fixtures."""
import numpy as np
import pytest
from PIL import Image

BLOCK_COLORS = [(220, 30, 30), (30, 200, 40), (20, 40, 210), (240, 240, 60)]


@pytest.fixture
def block_image(tmp_path):
    """An 8x8 RGB TIFF made of four solid color quadrants."""
    raster = np.zeros((8, 8, 3), dtype=np.uint8)
    raster[:4, :4] = BLOCK_COLORS[0]
    raster[:4, 4:] = BLOCK_COLORS[1]
    raster[4:, :4] = BLOCK_COLORS[2]
    raster[4:, 4:] = BLOCK_COLORS[3]
    path = tmp_path / "blocks.tiff"
    Image.fromarray(raster).save(path)
    return path
