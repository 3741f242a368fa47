"""
Closed-form least squares through the Moore-Penrose pseudo-inverse.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pylinreg.core.result import Result
from pylinreg.core.compute.timing import Timer
from pylinreg.regression.design import RegressionDesign
from pylinreg.regression.solution import TrainingParams
from pylinreg.regression.optimizers.base import OptimizerBase, LoopOutcome

if TYPE_CHECKING:
    from pylinreg.regression.model import LinearModel


@dataclass(frozen=True)
class PseudoInverse(OptimizerBase):
    """
    theta = pinv(X) y, computed in one step.
    
    Handles rank-deficient X: the minimum-norm least-squares solution is
    returned. Raises DecompositionError if the SVD fails.
    """
    
    @property
    def name(self) -> str:
        return 'pseudo_inverse'
    
    def solve(
        self,
        model: LinearModel,
        design: RegressionDesign,
        *,
        verbose: bool = False,
    ) -> Result[TrainingParams]:
        timer = Timer()
        timer.start()
        
        with timer.section('pseudo_inverse'):
            pinv = design.X.pseudo_inverse()
        
        with timer.section('solve'):
            model.theta = pinv @ design.y
        
        with timer.section('residuals'):
            y_hat = model.batch_predict(design.X)
            residual_norm = (design.y - y_hat).length()
        
        outcome = LoopOutcome(
            residual_norm=residual_norm,
            iterations=1,
            converged=True,
            final_change=0.0,
        )
        return self._build_result(model, outcome, timer, info={'method': 'svd'})
