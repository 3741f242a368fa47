"""
Training algorithms for LinearModel.

Available optimizers:
    NaiveGradient: batch gradient descent with a fixed learning rate
    Adam: adaptive moment estimation (AdamParams for hyperparameters)
    PseudoInverse: closed-form SVD least squares
"""

from pylinreg.regression.optimizers.base import Optimizer
from pylinreg.regression.optimizers.naive import NaiveGradient
from pylinreg.regression.optimizers.adam import Adam, AdamParams
from pylinreg.regression.optimizers.pseudo_inverse import PseudoInverse

__all__ = [
    "Optimizer",
    "NaiveGradient",
    "Adam",
    "AdamParams",
    "PseudoInverse",
]
