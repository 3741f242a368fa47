"""
Ordinary least-squares linear regression.

Public API:
    fit(X, y, optimizer=...) -> TrainingSolution
    LinearModel.train(X, y, optimizer) -> LinearModel

Optimizers:
    NaiveGradient(learning_rate)
    Adam(AdamParams(learning_rate, decay_first_moment, decay_second_moment))
    PseudoInverse()

Example:
    >>> from pylinreg.regression import fit, NaiveGradient
    >>> result = fit(X, y, optimizer=NaiveGradient(0.001))
    >>> print(result.theta)
    >>> print(result.summary())
"""

from pylinreg.regression.design import RegressionDesign
from pylinreg.regression.model import LinearModel
from pylinreg.regression.solution import TrainingSolution, TrainingParams
from pylinreg.regression.optimizers import (
    Optimizer,
    NaiveGradient,
    Adam,
    AdamParams,
    PseudoInverse,
)
from pylinreg.regression.solvers import fit

__all__ = [
    "fit",
    "RegressionDesign",
    "LinearModel",
    "TrainingSolution",
    "TrainingParams",
    "Optimizer",
    "NaiveGradient",
    "Adam",
    "AdamParams",
    "PseudoInverse",
]
