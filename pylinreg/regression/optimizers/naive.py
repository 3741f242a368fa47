"""
Batch gradient descent with a fixed learning rate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pylinreg.core.result import Result
from pylinreg.core.compute.timing import Timer
from pylinreg.core.validation import check_positive, check_max_iter
from pylinreg.regression.design import RegressionDesign
from pylinreg.regression.solution import TrainingParams
from pylinreg.regression.optimizers.base import OptimizerBase, iterate_until_stable

if TYPE_CHECKING:
    from pylinreg.regression.model import LinearModel


@dataclass(frozen=True)
class NaiveGradient(OptimizerBase):
    """
    Plain batch gradient descent.
    
    Each iteration:
        y_hat = X theta
        theta <- theta - learning_rate * (1/M) X^T (y_hat - y)
    
    Attributes:
        learning_rate: Step size, finite and > 0
        max_iter: Optional bound on iterations (None = run until the
            residual norm settles)
    """
    learning_rate: float
    max_iter: int | None = None
    
    def __post_init__(self):
        check_positive(self.learning_rate, 'learning_rate')
        check_max_iter(self.max_iter)
    
    @property
    def name(self) -> str:
        return 'naive_gradient'
    
    def solve(
        self,
        model: LinearModel,
        design: RegressionDesign,
        *,
        verbose: bool = False,
    ) -> Result[TrainingParams]:
        timer = Timer()
        timer.start()
        
        X, y = design.X, design.y
        learning_rate = self.learning_rate
        
        def step(timestep: int) -> float:
            y_hat = model.batch_predict(X)
            model.theta = model.theta - learning_rate * model.gradient(X, y, y_hat)
            return (y - y_hat).length()
        
        with timer.section('iterations'):
            outcome = iterate_until_stable(
                step,
                max_iter=self.max_iter,
                verbose=verbose,
                label=self.name,
                timer=timer,
            )
        
        return self._build_result(
            model,
            outcome,
            timer,
            info={
                'method': 'gradient_descent',
                'learning_rate': learning_rate,
                'convergence_criterion': 'residual_norm_delta',
            },
        )
