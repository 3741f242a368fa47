"""
Optimizer protocol and the convergence loop shared by iterative optimizers.

Every optimizer is an immutable configuration object. Its solve() method
trains a LinearModel in place and returns a Result[TrainingParams];
optimize() is the bare form that returns only the final residual norm.

Stop rule for iterative optimizers: keep iterating while the residual
norm changed by more than float64 machine epsilon since the previous
iteration. The rule is applied literally. It can spin forever on a run
that oscillates, and it can stop early if two consecutive residuals
happen to coincide. max_iter is an opt-in bound for callers who cannot
accept an unbounded loop; hitting it is reported, not raised.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Any, Callable, Protocol, TYPE_CHECKING, runtime_checkable
from numpy.typing import ArrayLike

from pylinreg.core.result import Result
from pylinreg.core.compute.timing import Timer
from pylinreg.core.compute.tolerances import (
    FLOAT64_MAX,
    MACHINE_EPSILON,
    PROGRESS_INTERVAL,
)
from pylinreg.regression.design import RegressionDesign
from pylinreg.regression.solution import TrainingParams

if TYPE_CHECKING:
    from pylinreg.linalg.matrix import Matrix
    from pylinreg.regression.model import LinearModel


@runtime_checkable
class Optimizer(Protocol):
    """
    Protocol for training algorithms.
    
    Optimizers are stateless between calls: any state an algorithm needs
    (moment estimates, timestep) lives inside a single solve().
    """
    
    @property
    def name(self) -> str:
        """
        Optimizer identifier.
        
        Examples: 'naive_gradient', 'adam', 'pseudo_inverse'
        """
        ...
    
    def solve(
        self,
        model: LinearModel,
        design: RegressionDesign,
        *,
        verbose: bool = False,
    ) -> Result[TrainingParams]:
        """
        Train model on design, assigning model.theta.
        
        Returns:
            Result envelope whose params carry the final theta and
            residual norm
        """
        ...
    
    def optimize(
        self,
        model: LinearModel,
        X: ArrayLike | Matrix,
        y: ArrayLike | Matrix,
    ) -> float:
        """Train model on (X, y) and return the final residual norm."""
        ...


@dataclass(frozen=True)
class LoopOutcome:
    """Where an iterative optimizer's loop ended."""
    residual_norm: float
    iterations: int
    converged: bool
    final_change: float


def iterate_until_stable(
    step: Callable[[int], float],
    *,
    max_iter: int | None,
    verbose: bool,
    label: str,
    timer: Timer,
) -> LoopOutcome:
    """
    Run step(timestep) until the residual norm stops changing.
    
    Args:
        step: Performs one update for timestep 1, 2, ... and returns the
            residual norm measured during that update
        max_iter: Upper bound on iterations, or None for no bound
        verbose: Print a progress line every PROGRESS_INTERVAL iterations
        label: Name used in progress lines
        timer: Running timer of the solve, read for progress lines
        
    Returns:
        LoopOutcome; converged is False only when max_iter was reached
    """
    prev_error = FLOAT64_MAX
    curr_error = 0.0
    timestep = 0
    
    while abs(prev_error - curr_error) > MACHINE_EPSILON:
        if max_iter is not None and timestep >= max_iter:
            return LoopOutcome(
                residual_norm=curr_error,
                iterations=timestep,
                converged=False,
                final_change=abs(prev_error - curr_error),
            )
        timestep += 1
        prev_error = curr_error
        curr_error = step(timestep)
        
        if verbose and timestep % PROGRESS_INTERVAL == 0:
            print(f"{label}: timestep {timestep}, residual norm {curr_error:.6e}, "
                  f"{timer.elapsed():.1f}s elapsed")
    
    return LoopOutcome(
        residual_norm=curr_error,
        iterations=timestep,
        converged=True,
        final_change=abs(prev_error - curr_error),
    )


class OptimizerBase:
    """Shared plumbing for the built-in optimizers."""
    
    def optimize(
        self,
        model: LinearModel,
        X: ArrayLike | Matrix,
        y: ArrayLike | Matrix,
    ) -> float:
        design = RegressionDesign.build(X, y)
        return self.solve(model, design).params.residual_norm
    
    def _build_result(
        self,
        model: LinearModel,
        outcome: LoopOutcome,
        timer: Timer,
        info: dict[str, Any],
    ) -> Result[TrainingParams]:
        warnings_list = []
        if not outcome.converged:
            message = (
                f"{self.name} stopped at max_iter={outcome.iterations} before the "
                f"residual norm settled (last change: {outcome.final_change:.2e}, "
                f"threshold: {MACHINE_EPSILON:.2e})"
            )
            # Caller of fit(), optimize() or LinearModel.train()
            warnings.warn(message, RuntimeWarning, stacklevel=4)
            warnings_list.append(message)
        
        timer.stop()
        
        params = TrainingParams(
            theta=model.theta,
            residual_norm=outcome.residual_norm,
            iterations=outcome.iterations,
            converged=outcome.converged,
        )
        
        full_info: dict[str, Any] = dict(info)
        full_info['final_residual_change'] = outcome.final_change
        
        return Result(
            params=params,
            info=full_info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
