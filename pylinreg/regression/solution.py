"""
Training solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from pylinreg.core.exceptions import DimensionError
from pylinreg.core.result import Result
from pylinreg.core.compute.tolerances import select_tolerance
from pylinreg.linalg.matrix import Vector

if TYPE_CHECKING:
    from pylinreg.regression.design import RegressionDesign
    from pylinreg.regression.model import LinearModel


@dataclass(frozen=True)
class TrainingParams:
    """
    Parameter payload produced by an optimizer.
    
    This is the immutable data computed by optimizers.
    """
    theta: Vector
    residual_norm: float
    iterations: int
    converged: bool


@dataclass
class TrainingSolution:
    """
    User-facing training results.
    
    Wraps the optimizer Result and the trained model, and provides
    fit-quality accessors computed from the training design.
    """
    _result: Result[TrainingParams]
    _design: 'RegressionDesign'
    _model: 'LinearModel'
    
    # Cached computations
    _fitted_values: Vector | None = None
    
    @property
    def model(self) -> 'LinearModel':
        return self._model
    
    @property
    def theta(self) -> Vector:
        return self._result.params.theta.copy()
    
    @property
    def coefficients(self) -> NDArray[np.float64]:
        """theta as a 1-D numpy array."""
        return self._result.params.theta.to_numpy().ravel()
    
    @property
    def residual_norm(self) -> float:
        """||y - y_hat|| as reported by the optimizer."""
        return self._result.params.residual_norm
    
    @property
    def iterations(self) -> int:
        return self._result.params.iterations
    
    @property
    def converged(self) -> bool:
        return self._result.params.converged
    
    @property
    def fitted_values(self) -> Vector:
        if self._fitted_values is None:
            self._fitted_values = self._model.batch_predict(self._design.X)
        return self._fitted_values
    
    @property
    def residuals(self) -> Vector:
        return self._design.y - self.fitted_values
    
    @property
    def rss(self) -> float:
        """Residual sum of squares at the final theta."""
        residuals = self.residuals
        return residuals.dot(residuals)
    
    @property
    def mse(self) -> float:
        return self.rss / self._design.n
    
    @property
    def tss(self) -> float:
        y = self._design.y.to_numpy().ravel()
        return float(np.sum((y - np.mean(y)) ** 2))
    
    @property
    def r_squared(self) -> float:
        if self.tss == 0:
            return 1.0 if self.rss == 0 else 0.0
        return 1.0 - (self.rss / self.tss)
    
    @property
    def info(self) -> dict[str, Any]:
        return self._result.info
    
    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing
    
    @property
    def optimizer_name(self) -> str:
        return self._result.backend_name
    
    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings
    
    def agrees_with(self, other: 'TrainingSolution') -> bool:
        """
        Whether two trainings reached the same theta.
        
        Compares coefficients with the looser tolerance tier of the two
        optimizers, so a closed-form fit and a gradient fit of the same
        data agree once the iterative run has settled.
        
        Raises:
            DimensionError: If the two models have different widths
        """
        if self._design.p != other._design.p:
            raise DimensionError(
                f"agrees_with: other has {other._design.p} features, "
                f"expected {self._design.p}",
                expected=(self._design.p,),
                actual=(other._design.p,),
            )
        tiers = [select_tolerance(self.optimizer_name), select_tolerance(other.optimizer_name)]
        return bool(np.allclose(
            self.coefficients,
            other.coefficients,
            rtol=max(t.rtol for t in tiers),
            atol=max(t.atol for t in tiers),
        ))
    
    def summary(self) -> str:
        """Plain-text training report."""
        lines = [
            "Linear Regression Training Results",
            "=" * 60,
            f"Samples: {self._design.n}",
            f"Features: {self._design.p}",
            f"Optimizer: {self.optimizer_name}",
            f"Iterations: {self.iterations}",
            f"Converged: {self.converged}",
            f"Residual norm: {self.residual_norm:.6e}",
            f"MSE: {self.mse:.6e}",
            f"R-squared: {self.r_squared:.6f}",
            "",
            "Coefficients:",
            "-" * 60,
        ]
        
        for i, coef in enumerate(self.coefficients):
            lines.append(f"  theta[{i}]: {coef:14.6f}")
        
        lines.append("-" * 60)
        if self.timing:
            lines.append(f"Time: {self.timing.get('total_seconds', 0):.4f}s")
        for warning in self.warnings:
            lines.append(f"Warning: {warning}")
        
        return "\n".join(lines)
    
    def __repr__(self) -> str:
        return (
            f"TrainingSolution(n={self._design.n}, p={self._design.p}, "
            f"optimizer={self.optimizer_name!r}, iterations={self.iterations}, "
            f"residual_norm={self.residual_norm:.4e})"
        )
