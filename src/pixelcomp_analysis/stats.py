"""Quality and variance statistics for compressed images."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

import numpy as np

from pixelcomp_core.distance import as_point_matrix
from pixelcomp_core.eigen import EigenMatrix
from pixelcomp_core.errors import DimensionMismatch

PEAK_VALUE = 255.0


@dataclass
class QualityMetrics:
    """Reconstruction error between an original and a compressed matrix."""

    mse: float
    psnr: float

    def to_dict(self) -> Dict[str, float]:
        psnr = self.psnr if np.isfinite(self.psnr) else None
        return {"mse": self.mse, "psnr": psnr}


def quantization_error(
    original: np.ndarray, compressed: np.ndarray, peak: float = PEAK_VALUE
) -> QualityMetrics:
    """Mean squared error and PSNR (in dB) of ``compressed`` against ``original``."""
    original = np.asarray(original, dtype=np.float64)
    compressed = np.asarray(compressed, dtype=np.float64)
    if original.shape != compressed.shape:
        raise DimensionMismatch(
            f"Shapes differ: {original.shape} vs {compressed.shape}"
        )
    mse = float(np.mean((original - compressed) ** 2))
    psnr = float("inf") if mse == 0 else float(10.0 * np.log10(peak**2 / mse))
    return QualityMetrics(mse=mse, psnr=psnr)


def unique_colors(points: np.ndarray) -> int:
    """Number of distinct rows in a point matrix."""
    return int(np.unique(as_point_matrix(points), axis=0).shape[0])


def explained_variance(eigenvalues: np.ndarray) -> Dict[str, List[float]]:
    """Share of total variance per component, and its running total."""
    values = np.asarray(eigenvalues, dtype=np.float64)
    total = values.sum()
    ratio = values / total if total > 0 else np.zeros_like(values)
    return {
        "eigenvalues": values.tolist(),
        "ratio": ratio.tolist(),
        "cumulative": np.cumsum(ratio).tolist(),
    }


def projected_variance(
    points: np.ndarray, eigen: EigenMatrix, center: bool = True
) -> np.ndarray:
    """Variance of the points along each principal axis."""
    features = as_point_matrix(points)
    mean = features.mean(axis=0) if center else None
    scores = eigen.project(features, mean=mean)
    if scores.shape[1] == 0:
        return np.zeros(0)
    return scores.var(axis=0)
