"""End-to-end pipeline for quantizing and projecting an image."""
from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
from tqdm import tqdm

from pixelcomp_core.clustering import kmeans
from pixelcomp_core.eigen import EigenMatrix, principal_axes

from .config import PipelineConfig
from .imaging import (
    image_to_points,
    load_image,
    points_to_image,
    render_palette,
    save_image,
)
from .reports import (
    compare_runs,
    runs_frame,
    summarize_projection,
    summarize_quantization,
    variance_frame,
)
from .visuals import quality_chart, variance_chart, write_chart

logger = logging.getLogger(__name__)


def _write_json(path: Path, payload: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, default=str)


def reconstruct_from_axes(
    points: np.ndarray,
    eigen: EigenMatrix,
    n_components: Optional[int] = None,
    center: bool = True,
) -> np.ndarray:
    """Project onto the leading axes and map back to the original space."""
    mean = points.mean(axis=0) if center else np.zeros(points.shape[1])
    if eigen.n_components == 0:
        return np.tile(mean, (points.shape[0], 1))
    scores = eigen.project(points, n_components=n_components, mean=mean)
    return eigen.reconstruct(scores, mean=mean)


class CompressionPipeline:
    """Orchestrates image loading, quantization, projection and reporting."""

    def __init__(self, config: PipelineConfig) -> None:
        """Initialize the pipeline with a configuration."""
        self.config = config
        self.output_dir = config.output.output_dir

    def run(self) -> Dict[str, Any]:
        """Execute every enabled stage and write the summary artifacts."""
        image = load_image(self.config.image.input_path, mode=self.config.image.mode)
        points, shape = image_to_points(image)
        logger.info(
            "Loaded %s: %dx%d, %d channel(s)",
            self.config.image.input_path,
            shape[0],
            shape[1],
            shape[2],
        )

        summary: Dict[str, Any] = {
            "config": self.summarize(),
            "image": {"shape": list(shape), "pixels": int(points.shape[0])},
        }
        if self.config.quantization.enabled:
            runs = self._quantize(points, shape)
            summary["quantization"] = {"runs": runs, "comparison": compare_runs(runs)}
        if self.config.projection.enabled:
            summary["projection"] = self._project(points, shape)

        _write_json(self.output_dir / "summary.json", summary)
        return summary

    def _quantize(self, points: np.ndarray, shape: tuple) -> List[Dict[str, Any]]:
        """Run k-means once per requested cluster count."""
        settings = self.config.quantization
        runs: List[Dict[str, Any]] = []
        progress = tqdm(settings.cluster_counts, desc="Quantizing")
        for k in progress:
            progress.set_postfix(k=k)
            result = kmeans(points, k, max_iter=settings.max_iter, rng=settings.seed)
            runs.append(summarize_quantization(points, result))
            if self.config.output.save_images:
                save_image(
                    points_to_image(result.quantized, shape),
                    self.output_dir / "quantized" / f"k{k:03d}.png",
                )
                render_palette(
                    result.centroids,
                    self.output_dir / "palettes" / f"k{k:03d}.png",
                )

        frame = runs_frame(runs)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        frame.to_csv(self.output_dir / "runs.csv", index=False)
        if self.config.output.render_charts and runs:
            write_chart(quality_chart(frame), self.output_dir / "quality.html")
        return runs

    def _project(self, points: np.ndarray, shape: tuple) -> Dict[str, Any]:
        """Find principal axes and reconstruct from the leading ones."""
        settings = self.config.projection
        eigen = principal_axes(
            points,
            center=settings.center,
            max_iter=settings.max_iter,
            tol=settings.tol,
            zero_tol=settings.zero_tol,
        )
        n_components = settings.n_components
        if n_components is not None and n_components > eigen.n_components:
            logger.warning(
                "Requested %d component(s) but only %d carry variance",
                n_components,
                eigen.n_components,
            )
            n_components = eigen.n_components or None

        reconstructed = reconstruct_from_axes(
            points, eigen, n_components=n_components, center=settings.center
        )
        summary = summarize_projection(
            eigen,
            original=points,
            reconstructed=reconstructed,
            n_components=n_components,
        )

        frame = variance_frame(summary["variance"])
        self.output_dir.mkdir(parents=True, exist_ok=True)
        frame.to_csv(self.output_dir / "variance.csv", index=False)
        if self.config.output.save_images:
            save_image(
                points_to_image(reconstructed, shape),
                self.output_dir / "projected" / f"components_{summary['components_used']}.png",
            )
        if self.config.output.render_charts and eigen.n_components:
            write_chart(variance_chart(frame), self.output_dir / "variance.html")
        return summary

    def summarize(self) -> Dict[str, Any]:
        """Return configuration for reproducibility."""
        return asdict(self.config)
