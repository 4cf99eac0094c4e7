"""Numerical primitives for color quantization and principal axes."""

__all__ = [
    "clustering",
    "distance",
    "eigen",
    "errors",
    "results",
    "seeding",
]
__version__ = "0.1.0"
