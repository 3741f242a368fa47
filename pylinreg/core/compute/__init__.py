"""
Shared compute infrastructure for pylinreg.

This module provides timing utilities, numeric constants and the
LAPACK-backed kernels shared by the matrix type and the optimizers.

Submodules:
    timing: Execution timing utilities
    tolerances: Machine epsilon, progress interval, tolerance tiers
    linalg: SVD pseudo-inverse
"""

from pylinreg.core.compute.timing import Timer
from pylinreg.core.compute.tolerances import (
    MACHINE_EPSILON,
    ToleranceTier,
    select_tolerance,
)

__all__ = [
    # Timing
    "Timer",
    # Tolerances
    "MACHINE_EPSILON",
    "ToleranceTier",
    "select_tolerance",
]
