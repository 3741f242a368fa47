"""
Adam: adaptive moment estimation (Kingma & Ba, 2015).

Full-batch variant: every iteration uses the gradient over all samples.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pylinreg.core.result import Result
from pylinreg.core.compute.timing import Timer
from pylinreg.core.compute.tolerances import MACHINE_EPSILON
from pylinreg.core.validation import (
    check_positive,
    check_open_unit_interval,
    check_max_iter,
)
from pylinreg.linalg.matrix import Vector
from pylinreg.regression.design import RegressionDesign
from pylinreg.regression.solution import TrainingParams
from pylinreg.regression.optimizers.base import OptimizerBase, iterate_until_stable

if TYPE_CHECKING:
    from pylinreg.regression.model import LinearModel


@dataclass(frozen=True)
class AdamParams:
    """
    Adam hyperparameters.
    
    Attributes:
        learning_rate: Step size, finite and > 0
        decay_first_moment: beta1, in (0, 1)
        decay_second_moment: beta2, in (0, 1)
    """
    learning_rate: float = 0.9
    decay_first_moment: float = 0.9
    decay_second_moment: float = 0.999
    
    def __post_init__(self):
        check_positive(self.learning_rate, 'learning_rate')
        check_open_unit_interval(self.decay_first_moment, 'decay_first_moment')
        check_open_unit_interval(self.decay_second_moment, 'decay_second_moment')


@dataclass(frozen=True)
class Adam(OptimizerBase):
    """
    Gradient descent with bias-corrected first and second moment estimates.
    
    Per iteration t (starting at 1), with g the MSE gradient:
        m1 <- b1 m1 + (1 - b1) g
        m2 <- b2 m2 + (1 - b2) g**2
        f  =  m1 / (1 - b1**t)
        s  =  m2 / (1 - b2**t)
        theta[i] <- theta[i] - lr f[i] / (sqrt(s[i]) + eps)
    
    eps is float64 machine epsilon. Moments and t start from zero on
    every solve().
    
    Attributes:
        params: AdamParams (defaults 0.9 / 0.9 / 0.999)
        max_iter: Optional bound on iterations
    """
    params: AdamParams = field(default_factory=AdamParams)
    max_iter: int | None = None
    
    def __post_init__(self):
        check_max_iter(self.max_iter)
    
    @property
    def name(self) -> str:
        return 'adam'
    
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
        n = design.p
        learning_rate = self.params.learning_rate
        beta1 = self.params.decay_first_moment
        beta2 = self.params.decay_second_moment
        
        first_moment = Vector.zeros(n)
        second_moment = Vector.zeros(n)
        
        def step(timestep: int) -> float:
            nonlocal first_moment, second_moment
            
            y_hat = model.batch_predict(X)
            grad = model.gradient(X, y, y_hat)
            
            first_moment = beta1 * first_moment + (1.0 - beta1) * grad
            second_moment = beta2 * second_moment + (1.0 - beta2) * grad.pow(2.0)
            
            first_hat = (1.0 / (1.0 - beta1 ** timestep)) * first_moment
            second_hat = (1.0 / (1.0 - beta2 ** timestep)) * second_moment
            
            update = Vector.zeros(n)
            for i in range(n):
                update[i, 0] = (
                    learning_rate * first_hat[i, 0]
                    / (math.sqrt(second_hat[i, 0]) + MACHINE_EPSILON)
                )
            
            model.theta = model.theta - update
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
                'method': 'adam',
                'learning_rate': learning_rate,
                'decay_first_moment': beta1,
                'decay_second_moment': beta2,
                'convergence_criterion': 'residual_norm_delta',
            },
        )
