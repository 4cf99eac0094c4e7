"""Error taxonomy for the clustering and eigen pipelines."""
from __future__ import annotations


class PixelcompError(Exception):
    """Base class for contract violations raised by pixelcomp."""


class DimensionMismatch(PixelcompError, ValueError):
    """Operands have incompatible shapes."""


class EmptyGroup(PixelcompError, ValueError):
    """A centroid was requested for a group with no points."""


class InvalidClusterCount(PixelcompError, ValueError):
    """The requested cluster count is outside ``2 <= k <= n_points``."""


class ConvergenceFailed(RuntimeWarning):
    """An iterative routine hit its iteration cap before stabilizing."""
