"""
Core infrastructure for pylinreg.

This module provides shared abstractions and utilities used by the
matrix type and the regression subpackage.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing, tolerances, SVD kernel
"""

from pylinreg.core.result import Result
from pylinreg.core.exceptions import (
    PyLinRegError,
    ValidationError,
    DimensionError,
    NumericalError,
    DecompositionError,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "PyLinRegError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "DecompositionError",
]
