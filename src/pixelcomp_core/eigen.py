"""Power iteration and deflation for symmetric matrices.

The principal axes of a point matrix are the eigenvectors of its (centered)
Gram matrix ``X^T X``. They are extracted one at a time: power iteration finds
the dominant eigenpair, and deflation subtracts ``lambda * v v^T`` so the next
run converges to the following one.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from .distance import as_point_matrix
from .errors import DimensionMismatch
from .results import IterationStatus

logger = logging.getLogger(__name__)

MAX_ITER = 100
TOLERANCE = 1e-5
ZERO_EIGENVALUE = 1e-5
NULL_SPACE = 1e-12


@dataclass
class EigenPair:
    """Dominant eigenpair estimate of a symmetric matrix."""

    value: float
    vector: np.ndarray
    residual: float
    iterations: int
    status: IterationStatus

    @property
    def converged(self) -> bool:
        return self.status.converged


@dataclass
class EigenMatrix:
    """Eigenvectors as columns, ordered by non-increasing eigenvalue."""

    vectors: np.ndarray
    values: np.ndarray
    pairs: List[EigenPair]

    @property
    def n_components(self) -> int:
        return int(self.vectors.shape[1])

    @property
    def dimension(self) -> int:
        return int(self.vectors.shape[0])

    def components(self, n_components: Optional[int] = None) -> np.ndarray:
        """Leading ``n_components`` columns (all of them by default)."""
        if n_components is None:
            return self.vectors
        if not 0 < n_components <= self.n_components:
            raise DimensionMismatch(
                f"Requested {n_components} component(s), "
                f"only {self.n_components} available"
            )
        return self.vectors[:, :n_components]

    def project(
        self,
        points: np.ndarray,
        n_components: Optional[int] = None,
        mean: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        """Coordinates of ``points`` along the leading principal axes."""
        features = as_point_matrix(points)
        if features.shape[1] != self.dimension:
            raise DimensionMismatch(
                f"Points have {features.shape[1]} dimension(s), "
                f"axes have {self.dimension}"
            )
        if mean is not None:
            features = features - mean
        return features @ self.components(n_components)

    def reconstruct(
        self, scores: np.ndarray, mean: Optional[np.ndarray] = None
    ) -> np.ndarray:
        """Map projected coordinates back into the original space."""
        scores = np.asarray(scores, dtype=np.float64)
        if scores.ndim != 2 or scores.shape[1] > self.n_components:
            raise DimensionMismatch(
                f"Scores of shape {scores.shape} do not match "
                f"{self.n_components} component(s)"
            )
        restored = scores @ self.vectors[:, : scores.shape[1]].T
        if mean is not None:
            restored = restored + mean
        return restored


def _as_square(matrix: np.ndarray) -> np.ndarray:
    square = np.asarray(matrix, dtype=np.float64)
    if square.ndim != 2 or square.shape[0] != square.shape[1] or square.shape[0] == 0:
        raise DimensionMismatch(f"Expected a non-empty square matrix, got shape {square.shape}")
    return square


def _start_vectors(size: int):
    yield np.ones(size)
    for idx in range(size):
        basis = np.zeros(size)
        basis[idx] = 1.0
        yield basis


def power_iteration(
    matrix: np.ndarray,
    max_iter: int = MAX_ITER,
    tol: float = TOLERANCE,
) -> EigenPair:
    """Estimate the dominant eigenpair of a symmetric matrix.

    Starts from the raw all-ones vector and repeatedly multiplies and normalizes
    until two successive vectors are closer than ``tol``. If the cap is hit
    the last candidate is returned with status ``EXHAUSTED``; check
    ``residual`` when precision matters. A start vector whose image is zero up
    to rounding (relative to the matrix norm) lies in the null space, so the
    next standard basis vector is tried instead.
    """
    square = _as_square(matrix)
    size = square.shape[0]
    scale = np.linalg.norm(square)

    for start in _start_vectors(size):
        image = square @ start
        if np.linalg.norm(image) > NULL_SPACE * scale * np.linalg.norm(start):
            vector = start
            break
    else:
        logger.debug("Power iteration on a zero matrix")
        vector = np.zeros(size)
        vector[0] = 1.0
        return EigenPair(0.0, vector, 0.0, 0, IterationStatus.CONVERGED)

    status = IterationStatus.EXHAUSTED
    iterations = 0
    for iterations in range(1, max_iter + 1):
        image = square @ vector
        norm = np.linalg.norm(image)
        if norm == 0.0:
            # Only reachable after rounding; the current vector is the best estimate.
            break
        candidate = image / norm
        shift = np.linalg.norm(vector - candidate)
        vector = candidate
        if shift < tol:
            status = IterationStatus.CONVERGED
            break

    value = float(vector @ square @ vector)
    residual = float(np.linalg.norm(square @ vector - value * vector))
    if status is IterationStatus.EXHAUSTED:
        logger.debug(
            "Power iteration stopped after %d iterations (residual %.3e)",
            iterations,
            residual,
        )
    return EigenPair(value, vector, residual, iterations, status)


def eigen_matrix(
    matrix: np.ndarray,
    max_iter: int = MAX_ITER,
    tol: float = TOLERANCE,
    zero_tol: float = ZERO_EIGENVALUE,
) -> EigenMatrix:
    """Extract eigenvectors of a symmetric matrix by repeated deflation.

    Extraction stops at the first eigenvalue below ``zero_tol`` (that column is
    not appended) or once the Frobenius norm of the deflated matrix, which
    bounds every remaining eigenvalue, drops below ``zero_tol``. Columns are
    returned in non-increasing eigenvalue order: a start vector lying along a
    weaker eigenvector can surface pairs out of order. The caller's matrix is
    not modified.
    """
    working = _as_square(matrix).copy()
    size = working.shape[0]
    pairs: List[EigenPair] = []

    for _ in range(size):
        if np.linalg.norm(working) < zero_tol:
            break
        pair = power_iteration(working, max_iter=max_iter, tol=tol)
        if pair.value < zero_tol:
            logger.debug("Eigenvalue %.3e treated as zero; stopping", pair.value)
            break
        pairs.append(pair)
        working -= pair.value * np.outer(pair.vector, pair.vector)

    pairs.sort(key=lambda pair: pair.value, reverse=True)

    if pairs:
        vectors = np.column_stack([pair.vector for pair in pairs])
    else:
        vectors = np.zeros((size, 0))
    values = np.array([pair.value for pair in pairs], dtype=np.float64)
    logger.info("Extracted %d of %d eigenpair(s)", len(pairs), size)
    return EigenMatrix(vectors=vectors, values=values, pairs=pairs)


def gram_matrix(points: np.ndarray, center: bool = True) -> np.ndarray:
    """Symmetric ``D x D`` matrix ``X^T X`` of the (optionally centered) points."""
    features = as_point_matrix(points)
    if center:
        features = features - features.mean(axis=0)
    return features.T @ features


def principal_axes(
    points: np.ndarray,
    center: bool = True,
    max_iter: int = MAX_ITER,
    tol: float = TOLERANCE,
    zero_tol: float = ZERO_EIGENVALUE,
) -> EigenMatrix:
    """Principal axes of a point matrix, strongest first."""
    return eigen_matrix(
        gram_matrix(points, center=center),
        max_iter=max_iter,
        tol=tol,
        zero_tol=zero_tol,
    )
