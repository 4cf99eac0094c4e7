"""Command-line entrypoints for image compression."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from .config import (
    ImageConfig,
    OutputConfig,
    PipelineConfig,
    ProjectionConfig,
    QuantizationConfig,
)
from .pipeline import CompressionPipeline


def _build_pipeline_config(
    args: argparse.Namespace, quantize: bool, project: bool
) -> PipelineConfig:
    """Build PipelineConfig from CLI args."""
    image_path = Path(args.image)
    if not image_path.exists():
        raise FileNotFoundError(f"Image not found: {image_path}")

    quantization = QuantizationConfig(enabled=quantize)
    if quantize:
        quantization.cluster_counts = list(args.k)
        quantization.max_iter = args.max_iter
        quantization.seed = args.seed

    projection = ProjectionConfig(enabled=project)
    if project:
        projection.n_components = args.components
        projection.center = not args.no_center

    return PipelineConfig(
        image=ImageConfig(input_path=image_path, mode=args.mode),
        quantization=quantization,
        projection=projection,
        output=OutputConfig(
            output_dir=Path(args.output),
            save_images=not args.no_images,
            render_charts=not args.no_charts,
        ),
    )


def cmd_quantize(args: argparse.Namespace) -> None:
    CompressionPipeline(_build_pipeline_config(args, quantize=True, project=False)).run()


def cmd_project(args: argparse.Namespace) -> None:
    CompressionPipeline(_build_pipeline_config(args, quantize=False, project=True)).run()


def cmd_run(args: argparse.Namespace) -> None:
    CompressionPipeline(_build_pipeline_config(args, quantize=True, project=True)).run()


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--image", required=True, help="Path to the input image (TIFF, PNG, ...)")
    parser.add_argument("--output", required=True, help="Output directory")
    parser.add_argument(
        "--mode",
        default="RGB",
        help="Pillow mode the image is converted to before processing.",
    )
    parser.add_argument("--no-images", action="store_true", help="Skip writing images")
    parser.add_argument("--no-charts", action="store_true", help="Skip writing charts")


def _add_quantize(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--k",
        type=int,
        nargs="+",
        default=[2, 4, 8, 16],
        help="Cluster counts to quantize with.",
    )
    parser.add_argument("--max-iter", type=int, default=200)
    parser.add_argument("--seed", type=int, default=42)


def _add_project(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--components",
        type=int,
        default=None,
        help="Principal components kept for reconstruction (default: all).",
    )
    parser.add_argument(
        "--no-center",
        action="store_true",
        help="Use the raw Gram matrix instead of the mean-centered one.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="k-means and principal-axis image compression")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    quantize = subparsers.add_parser("quantize", help="Reduce colors with k-means")
    _add_common(quantize)
    _add_quantize(quantize)
    quantize.set_defaults(func=cmd_quantize)

    project = subparsers.add_parser("project", help="Project colors onto principal axes")
    _add_common(project)
    _add_project(project)
    project.set_defaults(func=cmd_project)

    run = subparsers.add_parser("run", help="Quantize and project in one pass")
    _add_common(run)
    _add_quantize(run)
    _add_project(run)
    run.set_defaults(func=cmd_run)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args.func(args)


if __name__ == "__main__":
    main()
