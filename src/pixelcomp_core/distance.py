"""Distance and centroid helpers shared by seeding and clustering."""
from __future__ import annotations

import numpy as np

from .errors import DimensionMismatch, EmptyGroup


def as_point_matrix(points: np.ndarray) -> np.ndarray:
    """Return ``points`` as a float ``(N, D)`` array with ``N, D >= 1``."""
    matrix = np.asarray(points, dtype=np.float64)
    if matrix.ndim != 2:
        raise DimensionMismatch(
            f"Expected a 2-D point matrix, got {matrix.ndim} dimension(s)"
        )
    if matrix.shape[0] == 0 or matrix.shape[1] == 0:
        raise DimensionMismatch(
            f"Point matrix must have at least one row and column, got {matrix.shape}"
        )
    return matrix


def squared_distance(p: np.ndarray, q: np.ndarray) -> float:
    """Sum of squared coordinate differences between two points."""
    a = np.asarray(p, dtype=np.float64)
    b = np.asarray(q, dtype=np.float64)
    if a.shape != b.shape:
        raise DimensionMismatch(f"Cannot compare points of shape {a.shape} and {b.shape}")
    diff = a - b
    return float(np.dot(diff.ravel(), diff.ravel()))


def pairwise_squared_distances(points: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Squared distances from every point to every centroid, shape ``(N, K)``."""
    points = np.asarray(points, dtype=np.float64)
    centroids = np.asarray(centroids, dtype=np.float64)
    if points.ndim != 2 or centroids.ndim != 2 or points.shape[1] != centroids.shape[1]:
        raise DimensionMismatch(
            f"Points {points.shape} and centroids {centroids.shape} differ in dimension"
        )
    distances = np.empty((points.shape[0], centroids.shape[0]), dtype=np.float64)
    for idx, center in enumerate(centroids):
        diff = points - center
        distances[:, idx] = np.einsum("nd,nd->n", diff, diff)
    return distances


def centroid(points: np.ndarray) -> np.ndarray:
    """Per-dimension arithmetic mean of a group of points."""
    group = np.asarray(points, dtype=np.float64)
    if group.size == 0 or group.shape[0] == 0:
        raise EmptyGroup("Cannot compute the centroid of an empty group")
    if group.ndim != 2:
        raise DimensionMismatch(f"Expected a 2-D group of points, got shape {group.shape}")
    return group.mean(axis=0)
