"""
Numeric constants and tolerance tiers.

MACHINE_EPSILON is the float64 epsilon used by the iterative stop rule,
by Adam's denominator guard and as the SVD singular value cutoff.

Tolerance tiers state how closely a trained theta is expected to match
the exact least-squares solution for each family of optimizer:
- closed form (SVD pseudo-inverse): machine precision
- iterative (gradient descent, Adam): the literal epsilon stop rule
  leaves a small residual drift in theta

TrainingSolution.agrees_with() compares two trainings with the looser
tier of their optimizers.
"""

from dataclasses import dataclass

import numpy as np


MACHINE_EPSILON: float = float(np.finfo(np.float64).eps)

FLOAT64_MAX: float = float(np.finfo(np.float64).max)

# Iterations between verbose progress lines of the iterative optimizers
PROGRESS_INTERVAL = 10_000


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


CLOSED_FORM = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='closed_form',
    description='SVD pseudo-inverse solve, machine precision',
)

ITERATIVE = ToleranceTier(
    rtol=0.0,
    atol=1e-4,
    name='iterative',
    description='gradient-based solve stopped on residual-norm delta',
)


def select_tolerance(optimizer_name: str) -> ToleranceTier:
    """Select appropriate tolerance tier for a given optimizer."""
    if optimizer_name == 'pseudo_inverse':
        return CLOSED_FORM
    return ITERATIVE
