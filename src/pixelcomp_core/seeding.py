"""Arg-max k-means++ seeding."""
from __future__ import annotations

from typing import Optional

import numpy as np

from .distance import as_point_matrix, pairwise_squared_distances
from .errors import InvalidClusterCount


def kmeans_plusplus(
    points: np.ndarray,
    k: int,
    rng: np.random.Generator | int | None = None,
) -> Optional[np.ndarray]:
    """Pick ``k`` well separated initial centroids from ``points``.

    The first centroid is drawn uniformly from the first ``min(k, N)`` rows.
    Every later centroid is the point farthest (in squared distance) from
    its nearest already-chosen centroid; ties go to the lowest index.

    Returns ``None`` when ``k < 2``. The returned array is a copy and never
    shares memory with ``points``.
    """
    if k < 2:
        return None
    features = as_point_matrix(points)
    n_points = features.shape[0]
    if k > n_points:
        raise InvalidClusterCount(
            f"Cannot seed {k} centroids from {n_points} point(s)"
        )

    generator = np.random.default_rng(rng)
    first = int(generator.integers(0, min(k, n_points)))

    centroids = np.empty((k, features.shape[1]), dtype=np.float64)
    centroids[0] = features[first]
    nearest = pairwise_squared_distances(features, centroids[:1])[:, 0]

    for idx in range(1, k):
        chosen = int(np.argmax(nearest))
        centroids[idx] = features[chosen]
        to_new = pairwise_squared_distances(features, centroids[idx : idx + 1])[:, 0]
        nearest = np.minimum(nearest, to_new)
    return centroids
