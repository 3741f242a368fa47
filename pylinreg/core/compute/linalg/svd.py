"""
SVD-based Moore-Penrose pseudo-inverse.

This is the one numerical kernel pylinreg does not implement itself.
The decomposition is delegated to LAPACK through scipy.linalg.svd; the
boundary is deliberately narrow: a flattened row-major R*C array and its
shape go in, a C x R array comes out.
"""

from dataclasses import dataclass
from typing import Any, Sequence
import numpy as np
from numpy.typing import NDArray
from scipy import linalg as sp_linalg

from pylinreg.core.exceptions import DecompositionError
from pylinreg.core.compute.tolerances import MACHINE_EPSILON


@dataclass(frozen=True)
class SVDResult:
    """
    Result of a thin singular value decomposition A = U diag(s) Vt.
    
    Attributes:
        U: Left singular vectors (R x k, k = min(R, C))
        s: Singular values in descending order (k,)
        Vt: Right singular vectors, transposed (k x C)
    """
    U: NDArray[np.floating[Any]]
    s: NDArray[np.floating[Any]]
    Vt: NDArray[np.floating[Any]]


def svd_cpu(A: NDArray[np.floating[Any]], matrix_name: str = 'A') -> SVDResult:
    """
    Thin SVD using LAPACK (via SciPy).
    
    Args:
        A: Matrix to decompose (R x C)
        matrix_name: Name used in error messages
        
    Returns:
        SVDResult with U, s, Vt
        
    Raises:
        DecompositionError: If the routine does not converge or A holds
            NaN/Inf values
    """
    try:
        U, s, Vt = sp_linalg.svd(A, full_matrices=False)
    except np.linalg.LinAlgError as e:
        raise DecompositionError(
            f"SVD of {matrix_name} did not converge: {e}",
            matrix_name=matrix_name,
            shape=A.shape,
        ) from e
    except ValueError as e:
        raise DecompositionError(
            f"SVD of {matrix_name} failed: {e}",
            matrix_name=matrix_name,
            shape=A.shape,
        ) from e
    return SVDResult(U=U, s=s, Vt=Vt)


def pseudo_inverse_svd(
    values: Sequence[float] | NDArray[np.floating[Any]],
    rows: int,
    cols: int,
    *,
    cutoff: float = MACHINE_EPSILON,
    matrix_name: str = 'A',
) -> NDArray[np.float64]:
    """
    Moore-Penrose pseudo-inverse of a row-major flattened matrix.
    
    With A = U diag(s) Vt, the pseudo-inverse is V diag(s⁺) Uᵗ where
    s⁺ᵢ = 1/sᵢ for sᵢ > cutoff and 0 otherwise.
    
    Args:
        values: The R*C entries of A in row-major order
        rows: R
        cols: C
        cutoff: Singular values at or below this are treated as zero
        matrix_name: Name used in error messages
        
    Returns:
        C x R float64 array
        
    Raises:
        ValueError: If len(values) != rows * cols
        DecompositionError: If the SVD fails
    """
    flat = np.asarray(values, dtype=np.float64).ravel()
    if flat.size != rows * cols:
        raise ValueError(
            f"{matrix_name}: expected {rows * cols} values for a {rows}x{cols} "
            f"matrix, got {flat.size}"
        )
    A = flat.reshape(rows, cols)
    
    svd = svd_cpu(A, matrix_name=matrix_name)
    
    s_inv = np.zeros_like(svd.s)
    nonzero = svd.s > cutoff
    s_inv[nonzero] = 1.0 / svd.s[nonzero]
    
    # V diag(s⁺) Uᵗ without materializing the diagonal
    return (svd.Vt.T * s_inv) @ svd.U.T
