"""
Exception hierarchy for pylinreg.

Catch PyLinRegError for anything the library raises on purpose.
ValidationError covers bad input and bad optimizer configuration,
DimensionError (a ValidationError) covers shape disagreements, and
NumericalError covers failures inside the numeric kernels. Exceptions
carry the offending shapes as attributes.
"""


class PyLinRegError(Exception):
    """Base exception for all pylinreg errors."""
    pass


class ValidationError(PyLinRegError):
    """
    Input validation failed.
    
    Raised when user-provided inputs or configuration values fail
    validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array or matrix dimensions are incorrect or inconsistent.
    
    Raised when operand shapes don't match what an operation requires
    (e.g. multiplying an R x K matrix by a J x C matrix with K != J).
    
    Attributes:
        expected: Required shape, if a single shape applies
        actual: Shape that was supplied
    """
    
    def __init__(
        self,
        message: str,
        expected: tuple[int, ...] | None = None,
        actual: tuple[int, ...] | None = None,
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class NumericalError(PyLinRegError):
    """
    Numerical computation failed.
    
    Base class for errors arising from numerical issues during computation.
    """
    pass


class DecompositionError(NumericalError):
    """
    A matrix decomposition could not be computed.
    
    Raised when the SVD behind the pseudo-inverse fails (the routine does
    not converge, or the input holds non-finite values).
    
    Attributes:
        matrix_name: Name/description of the problematic matrix
        shape: Shape of the matrix that failed to decompose
    """
    
    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        shape: tuple[int, int] | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.shape = shape
