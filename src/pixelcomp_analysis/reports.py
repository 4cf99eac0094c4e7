"""Reporting utilities for quantization and projection runs."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from pixelcomp_core.clustering import ClusterResult
from pixelcomp_core.eigen import EigenMatrix

from .stats import explained_variance, quantization_error, unique_colors


def summarize_quantization(
    original: np.ndarray, result: ClusterResult
) -> Dict[str, Any]:
    """Summarize one k-means run against the points it was fitted on."""
    quantized = result.quantized
    return {
        "k": result.k,
        "status": result.status.value,
        "iterations": result.iterations,
        "inertia": result.inertia,
        "empty_clusters": result.empty_clusters,
        "unique_colors_before": unique_colors(original),
        "unique_colors_after": unique_colors(quantized),
        "cluster_sizes": result.cluster_sizes().tolist(),
        "palette": result.centroids.tolist(),
        **quantization_error(original, quantized).to_dict(),
    }


def summarize_projection(
    eigen: EigenMatrix,
    original: Optional[np.ndarray] = None,
    reconstructed: Optional[np.ndarray] = None,
    n_components: Optional[int] = None,
) -> Dict[str, Any]:
    """Summarize an eigen decomposition and, optionally, its reconstruction."""
    summary: Dict[str, Any] = {
        "dimension": eigen.dimension,
        "components_found": eigen.n_components,
        "components_used": n_components or eigen.n_components,
        "axes": eigen.vectors.T.tolist(),
        "residuals": [pair.residual for pair in eigen.pairs],
        "converged": [pair.converged for pair in eigen.pairs],
        "variance": explained_variance(eigen.values),
    }
    if original is not None and reconstructed is not None:
        summary["reconstruction"] = quantization_error(
            original, reconstructed
        ).to_dict()
    return summary


def compare_runs(runs: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Compare quantization runs across cluster counts."""
    if not runs:
        return {"runs": 0, "best_psnr_k": None, "all_converged": True}
    # A missing PSNR means a lossless run.
    best = max(
        runs,
        key=lambda run: float("inf") if run.get("psnr") is None else run["psnr"],
    )
    return {
        "runs": len(runs),
        "best_psnr_k": best["k"],
        "all_converged": all(run["status"] == "converged" for run in runs),
        "mse_by_k": {str(run["k"]): run["mse"] for run in runs},
    }


def runs_frame(runs: List[Dict[str, Any]]) -> pd.DataFrame:
    """Tabulate quantization runs, one row per cluster count."""
    columns = [
        "k",
        "status",
        "iterations",
        "inertia",
        "unique_colors_after",
        "mse",
        "psnr",
    ]
    rows = [{key: run.get(key) for key in columns} for run in runs]
    return pd.DataFrame(rows, columns=columns)


def variance_frame(variance: Dict[str, List[float]]) -> pd.DataFrame:
    """Tabulate explained variance, one row per principal component."""
    eigenvalues = variance.get("eigenvalues", [])
    return pd.DataFrame(
        {
            "component": list(range(1, len(eigenvalues) + 1)),
            "eigenvalue": eigenvalues,
            "ratio": variance.get("ratio", []),
            "cumulative": variance.get("cumulative", []),
        }
    )
