"""Charts for variance explained and quantization quality."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go


def variance_chart(frame: pd.DataFrame) -> go.Figure:
    """Bar chart of per-component variance ratio with its cumulative line."""
    fig = px.bar(
        frame,
        x="component",
        y="ratio",
        labels={"component": "Principal component", "ratio": "Variance explained"},
        title="Variance explained by principal component",
    )
    fig.add_trace(
        go.Scatter(
            x=frame["component"],
            y=frame["cumulative"],
            mode="lines+markers",
            name="Cumulative",
        )
    )
    fig.update_layout(yaxis_range=[0, 1.05], xaxis_dtick=1)
    return fig


def quality_chart(frame: pd.DataFrame) -> go.Figure:
    """PSNR of the quantized image as a function of cluster count."""
    return px.line(
        frame,
        x="k",
        y="psnr",
        markers=True,
        labels={"k": "Clusters (K)", "psnr": "PSNR (dB)"},
        title="Quantization quality by cluster count",
    )


def write_chart(fig: go.Figure, output_path: Path) -> Path:
    """Save a figure as a standalone HTML file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(str(output_path), include_plotlyjs="cdn")
    return output_path
