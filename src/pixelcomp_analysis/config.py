"""Configuration models for the compression pipeline."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from pixelcomp_core import clustering, eigen


@dataclass
class ImageConfig:
    """Source image settings."""

    input_path: Path
    mode: str = "RGB"


@dataclass
class QuantizationConfig:
    """k-means color quantization settings."""

    cluster_counts: List[int] = field(default_factory=lambda: [2, 4, 8, 16])
    max_iter: int = clustering.MAX_ITER
    seed: Optional[int] = 42
    enabled: bool = True


@dataclass
class ProjectionConfig:
    """Principal-axis projection settings."""

    n_components: Optional[int] = None
    center: bool = True
    max_iter: int = eigen.MAX_ITER
    tol: float = eigen.TOLERANCE
    zero_tol: float = eigen.ZERO_EIGENVALUE
    enabled: bool = True


@dataclass
class OutputConfig:
    """Where and what to write."""

    output_dir: Path
    save_images: bool = True
    render_charts: bool = True


@dataclass
class PipelineConfig:
    """Unified configuration for the compression pipeline."""

    image: ImageConfig
    quantization: QuantizationConfig
    projection: ProjectionConfig
    output: OutputConfig
