"""k-means vector quantization seeded with arg-max k-means++."""
from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass

import numpy as np

from .distance import as_point_matrix, centroid, pairwise_squared_distances
from .errors import ConvergenceFailed, EmptyGroup, InvalidClusterCount
from .results import IterationStatus
from .seeding import kmeans_plusplus

logger = logging.getLogger(__name__)

MAX_ITER = 200
UNASSIGNED = -1


@dataclass
class ClusterResult:
    """Result of a clustering run."""

    labels: np.ndarray
    centroids: np.ndarray
    status: IterationStatus
    iterations: int
    inertia: float
    empty_clusters: int = 0

    @property
    def converged(self) -> bool:
        return self.status.converged

    @property
    def k(self) -> int:
        return int(self.centroids.shape[0])

    @property
    def quantized(self) -> np.ndarray:
        """Every point replaced by the coordinates of its centroid."""
        return self.centroids[self.labels]

    def cluster_sizes(self) -> np.ndarray:
        return np.bincount(self.labels, minlength=self.k)


def validate_cluster_count(n_points: int, k: int) -> None:
    """Reject cluster counts outside ``2 <= k <= n_points``."""
    if k < 2:
        raise InvalidClusterCount(f"k-means needs at least 2 clusters, got k={k}")
    if k > n_points:
        raise InvalidClusterCount(
            f"Cannot form {k} clusters from {n_points} point(s)"
        )


def assign(features: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Index of the nearest centroid for every point (first wins ties)."""
    return pairwise_squared_distances(features, centroids).argmin(axis=1)


def _recenter(
    features: np.ndarray, labels: np.ndarray, centroids: np.ndarray
) -> int:
    """Move centroids to the mean of their members; empty clusters stay put."""
    empty = 0
    for idx in range(centroids.shape[0]):
        try:
            centroids[idx] = centroid(features[labels == idx])
        except EmptyGroup:
            empty += 1
            logger.debug("Cluster %d has no members; keeping previous centroid", idx)
    return empty


def _inertia(features: np.ndarray, labels: np.ndarray, centroids: np.ndarray) -> float:
    diff = features - centroids[labels]
    return float(np.einsum("nd,nd->", diff, diff))


def kmeans(
    points: np.ndarray,
    k: int,
    max_iter: int = MAX_ITER,
    rng: np.random.Generator | int | None = None,
) -> ClusterResult:
    """Cluster ``points`` into ``k`` groups.

    Each pass assigns every point to its nearest centroid. The run converges
    when a pass leaves every label unchanged; otherwise centroids move to the
    mean of their members and the next pass starts. After ``max_iter`` passes
    without convergence a ``ConvergenceFailed`` warning is issued and the last
    assignment is returned with status ``EXHAUSTED``.

    ``points`` is never modified.
    """
    features = as_point_matrix(points)
    validate_cluster_count(features.shape[0], k)
    if max_iter < 1:
        raise ValueError(f"max_iter must be positive, got {max_iter}")

    centroids = kmeans_plusplus(features, k, rng=rng)
    labels = np.full(features.shape[0], UNASSIGNED, dtype=np.int64)
    status = IterationStatus.EXHAUSTED
    iterations = 0
    empty_clusters = 0

    for _ in range(max_iter):
        new_labels = assign(features, centroids)
        if np.array_equal(new_labels, labels):
            status = IterationStatus.CONVERGED
            break
        labels = new_labels
        iterations += 1
        empty_clusters = _recenter(features, labels, centroids)
        logger.debug(
            "k-means pass %d: %d empty cluster(s)", iterations, empty_clusters
        )

    result = ClusterResult(
        labels=labels,
        centroids=centroids,
        status=status,
        iterations=iterations,
        inertia=_inertia(features, labels, centroids),
        empty_clusters=empty_clusters,
    )
    if not result.converged:
        message = f"k-means with k={k} did not converge within {max_iter} passes"
        logger.warning(message)
        warnings.warn(message, ConvergenceFailed, stacklevel=2)
    else:
        logger.info(
            "k-means converged: k=%d, passes=%d, inertia=%.4f",
            k,
            iterations,
            result.inertia,
        )
    return result


def quantize(
    points: np.ndarray,
    k: int,
    max_iter: int = MAX_ITER,
    rng: np.random.Generator | int | None = None,
) -> np.ndarray:
    """Replace every point with the centroid of its k-means cluster."""
    return kmeans(points, k, max_iter=max_iter, rng=rng).quantized
