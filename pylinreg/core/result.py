"""
Result envelope returned by every optimizer's solve().

The payload type varies (TrainingParams for the built-in optimizers), the
surrounding fields do not: metadata in info, a timing breakdown, the name
of the optimizer that ran, and any non-fatal warnings such as hitting
max_iter before the residual norm settled.
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable outcome of one training run.

    Attributes:
        params: Payload produced by the optimizer (theta, residual norm, ...)
        info: Optimizer metadata, e.g. {'method': 'svd'} or the Adam
            hyperparameters and final residual change
        timing: Timer.result() of the run, or None if not measured
        backend_name: Name of the optimizer ('adam', 'pseudo_inverse', ...)
        warnings: Messages for problems that did not abort the run

    Examples:
        >>> Result(
        ...     params=TrainingParams(theta=theta, residual_norm=0.0,
        ...                           iterations=1, converged=True),
        ...     info={'method': 'svd'},
        ...     timing={'total_seconds': 0.01},
        ...     backend_name='pseudo_inverse',
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """True if any recorded warning contains substring."""
        return any(substring in w for w in self.warnings)
