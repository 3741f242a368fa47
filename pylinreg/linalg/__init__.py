"""
Fixed-shape dense linear algebra.

Public API:
    Matrix: R x C float64 matrix
    Vector: single-column Matrix with dot / length / pow
"""

from pylinreg.linalg.matrix import Matrix, Vector

__all__ = [
    "Matrix",
    "Vector",
]
