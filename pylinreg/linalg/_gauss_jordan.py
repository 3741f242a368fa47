"""
Gauss-Jordan inversion with partial pivoting.

Works in place on a private float64 copy of the input. For every pivot
column the row with the largest absolute value at or below the pivot
index is swapped into place, in both the working matrix and the
accumulating identity. The pivot row is then scaled so the pivot is 1.0
and the pivot column is eliminated from every other row. When the
working matrix has been reduced to the identity, the accumulator holds
the inverse.

A selected pivot of exactly 0.0 means the matrix is singular. There is
no tolerance: nearly singular matrices are inverted as-is.
"""

from typing import Any
import numpy as np
from numpy.typing import NDArray


def gauss_jordan_inverse(A: NDArray[np.floating[Any]]) -> NDArray[np.float64] | None:
    """
    Invert a square matrix.
    
    Args:
        A: Square matrix (n x n). Not modified.
        
    Returns:
        The n x n inverse, or None if a zero pivot was encountered
    """
    n = A.shape[0]
    work = np.array(A, dtype=np.float64, copy=True)
    inverse = np.eye(n, dtype=np.float64)
    
    for col in range(n):
        # Partial pivoting: largest |value| at or below the diagonal
        pivot_row = col + int(np.argmax(np.abs(work[col:, col])))
        if work[pivot_row, col] == 0.0:
            return None
        
        if pivot_row != col:
            work[[col, pivot_row]] = work[[pivot_row, col]]
            inverse[[col, pivot_row]] = inverse[[pivot_row, col]]
        
        pivot = work[col, col]
        work[col] /= pivot
        inverse[col] /= pivot
        
        for row in range(n):
            if row == col:
                continue
            factor = work[row, col]
            if factor != 0.0:
                work[row] -= factor * work[col]
                inverse[row] -= factor * inverse[col]
    
    return inverse
