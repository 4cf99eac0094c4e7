"""Conversions between raster images and point matrices."""
from __future__ import annotations

from pathlib import Path
from typing import Tuple

import numpy as np
from PIL import Image, ImageDraw

from pixelcomp_core.errors import DimensionMismatch


def load_image(image_path: str | Path, mode: str = "RGB") -> np.ndarray:
    """Read an image (TIFF, PNG, JPEG, ...) as an ``(H, W, C)`` array."""
    image_path = Path(image_path)
    if not image_path.exists():
        raise FileNotFoundError(f"Image not found: {image_path}")
    with Image.open(image_path) as image:
        array = np.asarray(image.convert(mode))
    if array.ndim == 2:
        array = array[:, :, None]
    return array


def image_to_points(image: np.ndarray) -> Tuple[np.ndarray, Tuple[int, ...]]:
    """Flatten an ``(H, W, C)`` raster into ``(H*W, C)`` rows in scan order."""
    array = np.asarray(image)
    if array.ndim == 2:
        array = array[:, :, None]
    if array.ndim != 3:
        raise DimensionMismatch(f"Expected an (H, W, C) image, got shape {array.shape}")
    return array.reshape(-1, array.shape[2]).astype(np.float64), tuple(array.shape)


def points_to_image(points: np.ndarray, shape: Tuple[int, ...]) -> np.ndarray:
    """Reshape rows back into a ``uint8`` raster of the given shape."""
    points = np.asarray(points, dtype=np.float64)
    if points.size != int(np.prod(shape)):
        raise DimensionMismatch(
            f"Cannot reshape {points.shape} point matrix into image shape {shape}"
        )
    return np.clip(np.rint(points), 0, 255).astype(np.uint8).reshape(shape)


def save_image(array: np.ndarray, output_path: Path) -> Path:
    """Write a ``uint8`` raster to disk."""
    array = np.asarray(array, dtype=np.uint8)
    if array.ndim == 3 and array.shape[2] == 1:
        array = array[:, :, 0]
    output_path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(array).save(output_path)
    return output_path


def render_palette(
    centroids: np.ndarray,
    output_path: Path,
    swatch: int = 32,
) -> Path:
    """Draw each centroid color as a square swatch in a single row."""
    colors = np.clip(np.rint(np.asarray(centroids, dtype=np.float64)), 0, 255).astype(int)
    if colors.ndim != 2 or colors.shape[0] == 0:
        raise DimensionMismatch(f"Expected a (K, C) palette, got shape {colors.shape}")
    if colors.shape[1] == 1:
        colors = np.repeat(colors, 3, axis=1)
    elif colors.shape[1] != 3:
        raise DimensionMismatch(
            f"Palette rendering needs 1 or 3 channels, got {colors.shape[1]}"
        )

    image = Image.new("RGB", (swatch * colors.shape[0], swatch), "white")
    draw = ImageDraw.Draw(image)
    for idx, color in enumerate(colors):
        x0 = idx * swatch
        draw.rectangle(
            [x0, 0, x0 + swatch - 1, swatch - 1],
            fill=tuple(int(c) for c in color),
        )
    output_path.parent.mkdir(parents=True, exist_ok=True)
    image.save(output_path)
    return output_path
