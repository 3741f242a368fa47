"""
Linear model: a single parameter vector theta and the operations every
optimizer needs from it.

A model starts at theta = 0. Optimizers assign theta while training;
once training returns the model is frozen and theta can no longer be
assigned.
"""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from typing import TYPE_CHECKING
from numpy.typing import ArrayLike

from pylinreg.core.exceptions import DimensionError
from pylinreg.core.validation import check_array, check_shape
from pylinreg.linalg.matrix import Matrix, Vector
from pylinreg.regression.design import RegressionDesign

if TYPE_CHECKING:
    from pylinreg.regression.optimizers.base import Optimizer


class LinearModel:
    """
    Ordinary least-squares linear model y ≈ X theta.
    
    theta has exactly one entry per column of the design matrix used to
    train it. A bias term is just a column of ones supplied by the caller.
    
    Example:
        >>> model = LinearModel.train(X, y, NaiveGradient(0.001))
        >>> model.predict([1.0, 4.0])   # close to 4.0
    """
    
    def __init__(self, n_features: int):
        self._theta = Vector.zeros(n_features)
        self._frozen = False
        self._residual_norm: float | None = None
    
    @classmethod
    def train(
        cls,
        X: ArrayLike | Matrix,
        y: ArrayLike | Matrix,
        optimizer: Optimizer,
        *,
        verbose: bool = False,
    ) -> LinearModel:
        """
        Fit a fresh zero-initialized model with the given optimizer.
        
        Args:
            X: Design matrix (M x N)
            y: Targets (length M)
            optimizer: NaiveGradient, Adam or PseudoInverse configuration
            verbose: Print progress and the final residual norm
            
        Returns:
            The trained (frozen) model. Its residual_norm holds the final
            ||y - X theta||; use regression.fit() for iteration count,
            timing and fit diagnostics.
        """
        design = RegressionDesign.build(X, y)
        model = cls(design.p)
        result = optimizer.solve(model, design, verbose=verbose)
        model._freeze(result.params.residual_norm)
        
        if verbose:
            print(f"Trained with {optimizer.name}, "
                  f"residual norm: {model.residual_norm:.6e}")
        return model
    
    # === Parameters ===
    
    @property
    def n_features(self) -> int:
        return self._theta.rows
    
    @property
    def theta(self) -> Vector:
        """Copy of the parameter vector (N x 1)."""
        return self._theta.copy()
    
    @theta.setter
    def theta(self, value: ArrayLike | Vector) -> None:
        if self._frozen:
            raise FrozenInstanceError("cannot assign to field 'theta' of a trained model")
        vector = _as_vector(value, 'theta')
        check_shape(vector.shape, (self.n_features, 1), 'theta')
        self._theta = vector.copy()
    
    @property
    def is_trained(self) -> bool:
        return self._frozen
    
    @property
    def residual_norm(self) -> float | None:
        """Final residual norm reported by training, None before training."""
        return self._residual_norm
    
    def _freeze(self, residual_norm: float) -> None:
        self._residual_norm = float(residual_norm)
        self._frozen = True
    
    # === Prediction ===
    
    def batch_predict(self, X: ArrayLike | Matrix) -> Vector:
        """Predictions X @ theta for every row of X (K x N) -> length K."""
        X = _as_matrix(X, 'X')
        self._check_features(X.cols, 'X')
        return X @ self._theta
    
    def predict(self, x: ArrayLike | Vector) -> float:
        """Prediction x^T @ theta for a single sample of length N."""
        x = _as_vector(x, 'x')
        self._check_features(x.rows, 'x')
        return (x.T @ self._theta)[0, 0]
    
    def gradient(
        self,
        X: Matrix,
        y: Vector,
        y_hat: Vector,
    ) -> Vector:
        """
        Gradient of the mean squared error with respect to theta.
        
            (1/M) X^T (y_hat - y)
        
        Args:
            X: Design matrix (M x N)
            y: Targets (M x 1)
            y_hat: Current predictions (M x 1)
            
        Returns:
            Vector of length N
        """
        X = _as_matrix(X, 'X')
        y = _as_vector(y, 'y')
        y_hat = _as_vector(y_hat, 'y_hat')
        self._check_features(X.cols, 'X')
        check_shape(y.shape, (X.rows, 1), 'y')
        check_shape(y_hat.shape, (X.rows, 1), 'y_hat')
        return (1.0 / X.rows) * (X.T @ (y_hat - y))
    
    def _check_features(self, n: int, name: str) -> None:
        if n != self.n_features:
            raise DimensionError(
                f"{name}: model has {self.n_features} features, got {n}",
                expected=(self.n_features,),
                actual=(n,),
            )
    
    def __repr__(self) -> str:
        state = 'trained' if self._frozen else 'untrained'
        return f"LinearModel(theta={self._theta.to_array()!r}, {state})"


def _as_matrix(value: ArrayLike | Matrix, name: str) -> Matrix:
    if isinstance(value, Matrix):
        return value
    return Matrix.from_data(check_array(value, name))


def _as_vector(value: ArrayLike | Matrix, name: str) -> Vector:
    if isinstance(value, Vector):
        return value
    if isinstance(value, Matrix):
        raise DimensionError(
            f"{name}: expected a single-column vector, got shape {value.shape}",
            actual=value.shape,
        )
    arr = check_array(value, name)
    if arr.ndim == 1:
        return Vector.from_array(arr)
    return Vector.from_data(arr)
