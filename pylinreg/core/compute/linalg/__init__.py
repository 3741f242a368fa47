"""
Linear algebra kernels backed by LAPACK.

Only the SVD lives here: every other matrix operation pylinreg needs is
implemented directly on the Matrix type.

Submodules:
    svd: Singular value decomposition and pseudo-inverse
"""

from pylinreg.core.compute.linalg.svd import (
    SVDResult,
    svd_cpu,
    pseudo_inverse_svd,
)

__all__ = [
    "SVDResult",
    "svd_cpu",
    "pseudo_inverse_svd",
]
