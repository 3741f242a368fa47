"""
pylinreg: a small training toolkit for ordinary least-squares regression.

Fixed-shape dense matrices, a linear model, and three interchangeable
optimizers (gradient descent, Adam, SVD pseudo-inverse).

Submodules:
    linalg: Matrix and Vector value types
    regression: LinearModel, optimizers, fit()
"""

__version__ = "0.1.0"

from pylinreg import linalg
from pylinreg import regression
from pylinreg.linalg import Matrix, Vector
from pylinreg.regression import (
    fit,
    LinearModel,
    NaiveGradient,
    Adam,
    AdamParams,
    PseudoInverse,
)

__all__ = [
    "__version__",
    "linalg",
    "regression",
    "Matrix",
    "Vector",
    "fit",
    "LinearModel",
    "NaiveGradient",
    "Adam",
    "AdamParams",
    "PseudoInverse",
]
