"""Tests for the pixelcomp command line."""
import json

import pytest

from pixelcomp_analysis.cli import build_parser, main


def test_quantize_command(block_image, tmp_path):
    output_dir = tmp_path / "quantize"
    main([
        "quantize",
        "--image", str(block_image),
        "--output", str(output_dir),
        "--k", "2", "3",
        "--no-charts",
    ])

    with (output_dir / "summary.json").open(encoding="utf-8") as handle:
        summary = json.load(handle)
    assert [run["k"] for run in summary["quantization"]["runs"]] == [2, 3]
    assert "projection" not in summary
    assert (output_dir / "quantized" / "k003.png").exists()
    assert not (output_dir / "quality.html").exists()


def test_project_command(block_image, tmp_path):
    output_dir = tmp_path / "project"
    main([
        "project",
        "--image", str(block_image),
        "--output", str(output_dir),
        "--components", "1",
        "--no-images",
    ])

    with (output_dir / "summary.json").open(encoding="utf-8") as handle:
        summary = json.load(handle)
    assert "quantization" not in summary
    assert summary["projection"]["components_used"] == 1
    assert (output_dir / "variance.csv").exists()


def test_run_command_parses_both_stages():
    args = build_parser().parse_args([
        "run", "--image", "x.tiff", "--output", "out", "--k", "8", "--no-center",
    ])
    assert args.k == [8]
    assert args.no_center is True
    assert args.components is None


def test_missing_image(tmp_path):
    with pytest.raises(FileNotFoundError):
        main(["quantize", "--image", str(tmp_path / "nope.tiff"), "--output", str(tmp_path)])


def test_command_is_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
