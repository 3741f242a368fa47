"""
Regression Design.

A design pairs a design matrix X (rows = samples, columns = features)
with a target vector y. It is built once at the public boundary, where
all validation happens; optimizers trust it afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinreg.core.exceptions import ValidationError
from pylinreg.core.validation import (
    check_array,
    check_finite,
    check_2d,
    check_1d,
    check_consistent_length,
    check_min_samples,
)
from pylinreg.linalg.matrix import Matrix, Vector


@dataclass(frozen=True)
class RegressionDesign:
    """
    Validated (X, y) pair for training.
    
    Immutable after construction.
    
    Construction:
        RegressionDesign.build(X, y)   # arrays, nested lists, Matrix/Vector
    """
    _X: Matrix
    _y: Vector
    _n: int
    _p: int
    
    @classmethod
    def build(cls, X: ArrayLike | Matrix, y: ArrayLike | Matrix) -> RegressionDesign:
        """
        Validate X and y and wrap them as Matrix / Vector.
        
        Args:
            X: Design matrix (n x p)
            y: Targets, shape (n,) or (n, 1)
            
        Returns:
            RegressionDesign ready for an optimizer
            
        Raises:
            ValidationError: If inputs are non-numeric, non-finite or empty
            DimensionError: If shapes are wrong or X and y disagree on n
        """
        X_arr = _as_array(X, 'X')
        y_arr = _as_array(y, 'y')
        
        if y_arr.ndim == 2 and y_arr.shape[1] == 1:
            y_arr = y_arr.ravel()
        
        check_2d(X_arr, 'X')
        check_1d(y_arr, 'y')
        check_min_samples(X_arr, 1, 'X')
        if X_arr.shape[1] < 1:
            raise ValidationError("X: requires at least 1 feature column, got 0")
        check_finite(X_arr, 'X')
        check_finite(y_arr, 'y')
        check_consistent_length(X_arr, y_arr, names=('X', 'y'))
        
        n, p = X_arr.shape
        return cls(
            _X=Matrix.from_data(X_arr),
            _y=Vector.from_array(y_arr),
            _n=n,
            _p=p,
        )
    
    # === Properties ===
    
    @property
    def X(self) -> Matrix:
        """Design matrix (n x p)."""
        return self._X
    
    @property
    def y(self) -> Vector:
        """Target vector (n x 1)."""
        return self._y
    
    @property
    def n(self) -> int:
        """Number of samples."""
        return self._n
    
    @property
    def p(self) -> int:
        """Number of features (columns of X, bias column included)."""
        return self._p


def _as_array(value: ArrayLike | Matrix, name: str) -> NDArray[np.float64]:
    if isinstance(value, Matrix):
        return value.to_numpy()
    return check_array(value, name)
