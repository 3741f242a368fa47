"""
Training dispatch for linear regression.

This module provides the fit() function (public API) and optimizer selection.
"""

from typing import Literal
from numpy.typing import ArrayLike

from pylinreg.linalg.matrix import Matrix
from pylinreg.regression.design import RegressionDesign
from pylinreg.regression.model import LinearModel
from pylinreg.regression.solution import TrainingSolution
from pylinreg.regression.optimizers.base import Optimizer
from pylinreg.regression.optimizers.adam import Adam
from pylinreg.regression.optimizers.pseudo_inverse import PseudoInverse


# Optimizers selectable by name; NaiveGradient needs an explicit learning rate
OptimizerChoice = Literal['pinv', 'pseudo_inverse', 'adam']


def fit(
    X: ArrayLike | Matrix,
    y: ArrayLike | Matrix,
    *,
    optimizer: Optimizer | OptimizerChoice = 'pinv',
    verbose: bool = False,
) -> TrainingSolution:
    """
    Train a linear model.
    
    Minimizes the mean squared error ||y - X theta||² / M over theta,
    starting from theta = 0.
    
    This is the primary public API. Input validation, optimizer selection
    and result wrapping all happen here.
    
    Args:
        X: Design matrix (M x N). Any array-like or a Matrix. Include a
            column of ones to fit a bias term.
        y: Targets (M,) or (M, 1). Any array-like or a Vector.
        optimizer: Training algorithm:
            - 'pinv' / 'pseudo_inverse': closed-form SVD solve (default)
            - 'adam': Adam with default AdamParams
            - an optimizer instance: NaiveGradient(lr), Adam(AdamParams(...)),
              PseudoInverse(), or anything satisfying the Optimizer protocol
        verbose: Print the problem size, periodic progress for iterative
            optimizers, and the final residual norm
            
    Returns:
        TrainingSolution with the trained model, theta, residual norm,
        iteration count and fit diagnostics
        
    Raises:
        ValidationError: If inputs are invalid
        DimensionError: If X and y have inconsistent dimensions
        DecompositionError: If the pseudo-inverse SVD fails
        ValueError: If optimizer is an unknown name
        
    Example:
        >>> from pylinreg.regression import fit, NaiveGradient
        >>> result = fit([[1, 0], [1, 4]], [0, 4], optimizer=NaiveGradient(0.001))
        >>> print(result.coefficients)
        >>> print(result.summary())
    """
    # === Input Validation ===
    # This is the boundary - validate here, trust everywhere else
    design = RegressionDesign.build(X, y)
    
    # === Select Optimizer ===
    optimizer_impl = _get_optimizer(optimizer)
    
    if verbose:
        print(f"Linear regression: {design.n} samples, {design.p} features, "
              f"optimizer: {optimizer_impl.name}")
    
    # === Train ===
    model = LinearModel(design.p)
    result = optimizer_impl.solve(model, design, verbose=verbose)
    model._freeze(result.params.residual_norm)
    
    if verbose:
        print(f"Finished after {result.params.iterations} iterations, "
              f"residual norm: {result.params.residual_norm:.6e}")
    
    # === Wrap and Return ===
    return TrainingSolution(_result=result, _design=design, _model=model)


def _get_optimizer(choice: Optimizer | OptimizerChoice) -> Optimizer:
    """
    Resolve the optimizer argument of fit().
    
    Args:
        choice: Optimizer instance or name
        
    Returns:
        Optimizer instance ready to solve
        
    Raises:
        ValueError: If choice is neither an optimizer nor a known name
    """
    if isinstance(choice, str):
        if choice in ('pinv', 'pseudo_inverse'):
            return PseudoInverse()
        elif choice == 'adam':
            return Adam()
        raise ValueError(f"Unknown optimizer: {choice!r}")
    
    if isinstance(choice, Optimizer):
        return choice
    
    raise ValueError(f"Unknown optimizer: {choice!r}")
