"""Typed results for bounded iterative routines."""
from __future__ import annotations

from enum import Enum


class IterationStatus(str, Enum):
    """Outcome of a loop with an iteration cap."""

    CONVERGED = "converged"
    EXHAUSTED = "exhausted"

    @property
    def converged(self) -> bool:
        return self is IterationStatus.CONVERGED
