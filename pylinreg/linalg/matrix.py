"""
Dense fixed-shape Matrix and Vector value types.

A Matrix owns an R x C block of float64 values. Its shape is set at
construction and never changes; every operation checks that its operands
have the shape it mathematically requires and raises DimensionError
otherwise. A Vector is the single-column case, and any operation whose
result has one column returns a Vector.

Instances never share storage: constructors copy their input and every
arithmetic operation returns a fresh instance. Element assignment
(m[i, j] = v) is the only in-place mutation.

Usage:
    >>> X = Matrix.from_data([[1.0, 0.0], [1.0, 4.0]])
    >>> theta = Vector.from_array([0.0, 1.0])
    >>> y_hat = X @ theta                  # Vector of length 2
    >>> residual = (y - y_hat).length()
"""

from __future__ import annotations

import math
import numbers
import operator
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinreg.core.exceptions import DimensionError, ValidationError
from pylinreg.core.validation import check_array, check_1d, check_2d, check_shape
from pylinreg.core.compute.linalg.svd import pseudo_inverse_svd
from pylinreg.linalg._gauss_jordan import gauss_jordan_inverse


def _wrap(data: NDArray[np.float64]) -> Matrix:
    """Wrap a freshly computed array without copying or validating."""
    cls = Vector if data.shape[1] == 1 else Matrix
    obj = object.__new__(cls)
    obj._data = data
    return obj


def _check_dims(rows: int, cols: int) -> None:
    for name, value in (('rows', rows), ('cols', cols)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise ValidationError(f"{name}: expected int, got {type(value).__name__}")
        if value < 1:
            raise ValidationError(f"{name}: must be >= 1, got {value}")


class Matrix:
    """
    Dense R x C matrix of float64 values.
    
    Construct via the classmethods (zeros, identity, from_data) or as the
    result of arithmetic. Operators:
    
        A + B, A - B     elementwise, same shape
        A @ B            matrix product (R x K) @ (K x C) -> R x C
        s * A, A * s     scale by a real scalar
        -A               scale by -1
        A == B           exact elementwise equality
    """
    
    __slots__ = ('_data',)
    
    # Keep numpy from broadcasting over Matrix operands (np.float64(2) * M)
    __array_ufunc__ = None
    
    def __init__(self, values: ArrayLike):
        data = check_array(values, 'values')
        check_2d(data, 'values')
        _check_dims(*data.shape)
        self._data = np.array(data, dtype=np.float64, copy=True)
    
    # === Construction ===
    
    @classmethod
    def zeros(cls, rows: int, cols: int) -> Matrix:
        """R x C matrix of 0.0."""
        _check_dims(rows, cols)
        return _wrap(np.zeros((rows, cols), dtype=np.float64))
    
    @classmethod
    def identity(cls, n: int) -> Matrix:
        """N x N matrix with 1.0 on the diagonal and 0.0 elsewhere."""
        _check_dims(n, n)
        return _wrap(np.eye(n, dtype=np.float64))
    
    @classmethod
    def from_data(cls, values: ArrayLike) -> Matrix:
        """
        Build from a rectangular R x C nested sequence or 2-D array.
        
        Only the shape is validated. Values are copied.
        
        Raises:
            ValidationError: If values are not numeric
            DimensionError: If values are not 2-D
        """
        return _wrap(Matrix(values)._data)
    
    # === Shape ===
    
    @property
    def shape(self) -> tuple[int, int]:
        return self._data.shape
    
    @property
    def rows(self) -> int:
        return self._data.shape[0]
    
    @property
    def cols(self) -> int:
        return self._data.shape[1]
    
    # === Element access ===
    
    def _index(self, value: Any, bound: int, name: str) -> int:
        idx = operator.index(value)
        if not 0 <= idx < bound:
            raise IndexError(f"{name} index {idx} out of range for {self.rows}x{self.cols} matrix")
        return idx
    
    def __getitem__(self, key):
        """m[i, j] -> float; m[i] -> tuple copy of row i."""
        if isinstance(key, tuple):
            i, j = key
            return float(self._data[self._index(i, self.rows, 'row'),
                                    self._index(j, self.cols, 'column')])
        row = self._data[self._index(key, self.rows, 'row')]
        return tuple(float(v) for v in row)
    
    def __setitem__(self, key: tuple[int, int], value: float) -> None:
        if not isinstance(key, tuple):
            raise TypeError("Matrix assignment requires a (row, column) index")
        i, j = key
        self._data[self._index(i, self.rows, 'row'),
                   self._index(j, self.cols, 'column')] = float(value)
    
    # === Arithmetic ===
    
    def add(self, other: Matrix) -> Matrix:
        check_shape(other.shape, self.shape, 'add: right operand')
        return _wrap(self._data + other._data)
    
    def subtract(self, other: Matrix) -> Matrix:
        check_shape(other.shape, self.shape, 'subtract: right operand')
        return _wrap(self._data - other._data)
    
    def multiply(self, other: Matrix) -> Matrix:
        """
        Matrix product (R x K) @ (K x C) -> R x C.
        
        Every entry is accumulated as sum_k A[i][k] * B[k][j] in
        increasing k, so results are bit-for-bit reproducible.
        """
        if self.cols != other.rows:
            raise DimensionError(
                f"multiply: inner dimensions differ ({self.rows}x{self.cols} @ "
                f"{other.rows}x{other.cols})",
                expected=(self.cols, other.cols),
                actual=other.shape,
            )
        acc = self._data[:, 0:1] * other._data[0:1, :]
        # Rank-1 updates in increasing k keep the sum order and O(R x C) memory
        for k in range(1, self.cols):
            acc += self._data[:, k:k + 1] * other._data[k:k + 1, :]
        return _wrap(acc)
    
    def scale(self, scalar: float) -> Matrix:
        return _wrap(float(scalar) * self._data)
    
    def transpose(self) -> Matrix:
        """C x R transpose."""
        return _wrap(self._data.T.copy())
    
    @property
    def T(self) -> Matrix:
        return self.transpose()
    
    def sum_rows(self) -> Vector:
        """Column sums over all rows, as a Vector of length C."""
        return _wrap(self._data.sum(axis=0).reshape(-1, 1))
    
    def inverse(self) -> Matrix | None:
        """
        Inverse by Gauss-Jordan elimination with partial pivoting.
        
        Returns:
            The N x N inverse, or None if the matrix is singular (a
            selected pivot is exactly 0.0)
            
        Raises:
            DimensionError: If the matrix is not square
        """
        if self.rows != self.cols:
            raise DimensionError(
                f"inverse: matrix must be square, got {self.rows}x{self.cols}",
                actual=self.shape,
            )
        result = gauss_jordan_inverse(self._data)
        if result is None:
            return None
        return _wrap(result)
    
    def pseudo_inverse(self) -> Matrix:
        """
        Moore-Penrose pseudo-inverse (C x R) via SVD.
        
        Singular values at or below machine epsilon are treated as zero.
        
        Raises:
            DecompositionError: If the SVD fails
        """
        pinv = pseudo_inverse_svd(
            self._data.ravel(order='C'), self.rows, self.cols, matrix_name='matrix'
        )
        return _wrap(pinv)
    
    # === Operators ===
    
    def __add__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.add(other)
    
    def __sub__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.subtract(other)
    
    def __matmul__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.multiply(other)
    
    def __mul__(self, other):
        if isinstance(other, Matrix) or not isinstance(other, numbers.Real):
            return NotImplemented
        return self.scale(other)
    
    __rmul__ = __mul__
    
    def __neg__(self) -> Matrix:
        return self.scale(-1.0)
    
    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))
    
    __hash__ = None
    
    # === Conversion ===
    
    def copy(self) -> Matrix:
        return _wrap(self._data.copy())
    
    def to_data(self) -> list[list[float]]:
        """Row-major nested lists."""
        return self._data.tolist()
    
    def to_numpy(self) -> NDArray[np.float64]:
        """Copy of the values as an R x C array."""
        return self._data.copy()
    
    def __array__(self, dtype=None, copy=None):
        return np.array(self._data, dtype=dtype, copy=True)
    
    def __str__(self) -> str:
        lines = []
        for row in self._data:
            cells = "".join(f"{format(value, '.2f'):>8}" for value in row)
            lines.append(f"| {cells} |")
        return "\n".join(lines)
    
    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_data()!r})"


class Vector(Matrix):
    """
    Column vector: a Matrix with exactly one column.
    
    Construct with Vector.zeros(L), Vector.from_array([...]) or
    Vector.from_data([[...], ...]).
    """
    
    __slots__ = ()
    
    def __init__(self, values: ArrayLike):
        super().__init__(values)
        check_shape(self.shape, (self.rows, 1), 'values')
    
    @classmethod
    def zeros(cls, length: int) -> Vector:
        _check_dims(length, 1)
        return _wrap(np.zeros((length, 1), dtype=np.float64))
    
    @classmethod
    def from_data(cls, values: ArrayLike) -> Vector:
        """Build from an L x 1 nested sequence or array."""
        return _wrap(Vector(values)._data)
    
    @classmethod
    def from_array(cls, values: ArrayLike) -> Vector:
        """Build from a flat length-L sequence."""
        data = check_array(values, 'values')
        check_1d(data, 'values')
        _check_dims(data.shape[0], 1)
        return _wrap(data.reshape(-1, 1).copy())
    
    def __len__(self) -> int:
        return self.rows
    
    def dot(self, other: Vector) -> float:
        """Inner product sum_i u[i] * v[i]."""
        if not isinstance(other, Vector):
            raise DimensionError(
                f"dot: right operand must be a vector, got shape {other.shape}",
                actual=other.shape,
            )
        check_shape(other.shape, self.shape, 'dot: right operand')
        return (self.transpose() @ other)[0, 0]
    
    def length(self) -> float:
        """Euclidean norm sqrt(v . v)."""
        return math.sqrt(self.dot(self))
    
    def pow(self, exponent: float) -> Vector:
        """Elementwise value ** exponent."""
        return _wrap(self._data ** float(exponent))
    
    def to_array(self) -> list[float]:
        """Flat list of the L values."""
        return self._data[:, 0].tolist()
