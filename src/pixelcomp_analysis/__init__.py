"""Image compression pipeline, reports and CLI built on pixelcomp_core."""

__all__ = [
    "cli",
    "config",
    "imaging",
    "pipeline",
    "reports",
    "stats",
    "visuals",
]
__version__ = "0.1.0"
