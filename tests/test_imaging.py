"""Tests for raster/point-matrix conversions."""
import numpy as np
import pytest
from PIL import Image

from pixelcomp_analysis.imaging import (
    image_to_points,
    load_image,
    points_to_image,
    render_palette,
    save_image,
)
from pixelcomp_core.errors import DimensionMismatch


def _raster() -> np.ndarray:
    return np.arange(2 * 3 * 3, dtype=np.uint8).reshape(2, 3, 3) * 10


def test_points_follow_raster_scan_order():
    image = _raster()
    points, shape = image_to_points(image)

    assert shape == (2, 3, 3)
    assert points.shape == (6, 3)
    for row in range(2):
        for col in range(3):
            np.testing.assert_array_equal(points[row * 3 + col], image[row, col])


def test_points_to_image_restores_raster():
    image = _raster()
    points, shape = image_to_points(image)
    restored = points_to_image(points, shape)

    assert restored.dtype == np.uint8
    np.testing.assert_array_equal(restored, image)


def test_points_to_image_rounds_and_clips():
    restored = points_to_image(np.array([[-4.0], [12.6], [300.0]]), (1, 3, 1))
    np.testing.assert_array_equal(restored.ravel(), [0, 13, 255])


def test_points_to_image_rejects_wrong_size():
    with pytest.raises(DimensionMismatch):
        points_to_image(np.zeros((5, 3)), (2, 3, 3))


@pytest.mark.parametrize("suffix", [".png", ".tiff"])
def test_save_and_load_round_trip(tmp_path, suffix):
    image = _raster()
    path = save_image(image, tmp_path / "nested" / f"picture{suffix}")

    np.testing.assert_array_equal(load_image(path), image)


def test_load_grayscale_image_has_channel_axis(tmp_path):
    path = tmp_path / "gray.png"
    Image.fromarray(np.full((4, 5), 128, dtype=np.uint8)).save(path)

    image = load_image(path, mode="L")
    assert image.shape == (4, 5, 1)


def test_load_missing_image(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_image(tmp_path / "missing.tiff")


def test_render_palette(tmp_path):
    centroids = np.array([[255.0, 0.0, 0.0], [0.0, 0.0, 255.0]])
    path = render_palette(centroids, tmp_path / "palette.png", swatch=8)

    with Image.open(path) as palette:
        assert palette.size == (16, 8)
        assert palette.getpixel((0, 0)) == (255, 0, 0)
        assert palette.getpixel((15, 7)) == (0, 0, 255)
