# algebra.matrix.py
#
#       Fixed-size dense real matrix with shape-checked products, plus
#       matrix-vector products over tap-delay vectors of any element type.

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from pydaptivemapper.algebra.descriptor import AlgebraDescriptor
from pydaptivemapper.algebra.tap_delay import TapDelayVector
from pydaptivemapper.errors import DimensionMismatchError
from pydaptivemapper._utils.typing import ArrayLike, T

__all__ = ["DenseMatrix"]


class DenseMatrix:
    """
    ``rows x cols`` grid of float64 values.

    The dimensions are fixed at construction. Every binary operation checks
    the operand shapes first and raises :class:`DimensionMismatchError` on any
    incompatibility; nothing is broadcast, resized or truncated.

    Parameters
    ----------
    rows : int
        Number of rows.
    cols : int, optional
        Number of columns. If None, the matrix is square (``cols = rows``).
    """

    __slots__ = ("_data",)

    def __init__(self, rows: int, cols: Optional[int] = None) -> None:
        rows = int(rows)
        cols = rows if cols is None else int(cols)
        if rows < 1 or cols < 1:
            raise ValueError(f"Matrix dimensions must be positive. Got ({rows}, {cols}).")
        self._data: np.ndarray = np.zeros((rows, cols), dtype=np.float64)

    @classmethod
    def from_array(cls, values: ArrayLike) -> "DenseMatrix":
        arr = np.asarray(values, dtype=np.float64)
        if arr.ndim != 2:
            raise DimensionMismatchError(f"Expected a 2D array. Got shape={arr.shape}.")
        out = cls(arr.shape[0], arr.shape[1])
        out._data[...] = arr
        return out

    @classmethod
    def outer(
        cls,
        left: TapDelayVector,
        right: TapDelayVector,
        algebra: AlgebraDescriptor,
    ) -> "DenseMatrix":
        """``M[i, j] = algebra.dot(left[i], right[j])``."""
        if len(left) == 0 or len(right) == 0:
            raise DimensionMismatchError("Outer product of an empty tap-delay vector.")
        out = cls(len(left), len(right))
        data = out._data

        def _fill(a: T, b: T, i: int, j: int) -> None:
            data[i, j] = algebra.dot(a, b)

        left.indexed_pairwise(right, _fill)
        return out

    # ------------------------------------------------------------------ shape

    @property
    def rows(self) -> int:
        return int(self._data.shape[0])

    @property
    def cols(self) -> int:
        return int(self._data.shape[1])

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    @property
    def is_square(self) -> bool:
        return self.rows == self.cols

    def __getitem__(self, index: Tuple[int, int]) -> float:
        return float(self._data[index])

    def __setitem__(self, index: Tuple[int, int], value: float) -> None:
        self._data[index] = value

    def __repr__(self) -> str:
        return f"DenseMatrix(shape={self.shape}, data={self._data.tolist()!r})"

    def to_array(self) -> np.ndarray:
        return self._data.copy()

    def copy(self) -> "DenseMatrix":
        return DenseMatrix.from_array(self._data)

    def transpose(self) -> "DenseMatrix":
        return DenseMatrix.from_array(self._data.T)

    def is_symmetric(self, atol: float = 1e-9) -> bool:
        return self.is_square and bool(np.allclose(self._data, self._data.T, rtol=0.0, atol=atol))

    # --------------------------------------------------------- matrix algebra

    def multiply(self, other: "DenseMatrix") -> "DenseMatrix":
        """``C[i, j] = sum_k A[i, k] * B[k, j]``."""
        if self.cols != other.rows:
            raise DimensionMismatchError(
                f"Cannot multiply {self.shape} by {other.shape}: inner dimensions differ."
            )
        return DenseMatrix.from_array(self._data @ other._data)

    def add(self, other: "DenseMatrix", sign: float = 1.0) -> "DenseMatrix":
        """``C[i, j] = A[i, j] + sign * B[i, j]``."""
        if self.shape != other.shape:
            raise DimensionMismatchError(f"Cannot add {self.shape} and {other.shape}.")
        return DenseMatrix.from_array(self._data + float(sign) * other._data)

    def subtract(self, other: "DenseMatrix") -> "DenseMatrix":
        return self.add(other, sign=-1.0)

    def identity(self, scale: float = 1.0) -> "DenseMatrix":
        """Overwrite in place with ``scale`` on the diagonal and zeros elsewhere."""
        if not self.is_square:
            raise DimensionMismatchError(f"Identity requires a square matrix. Got {self.shape}.")
        self._data[...] = float(scale) * np.eye(self.rows)
        return self

    def scale_by(self, scale: float) -> "DenseMatrix":
        """Multiply every entry by ``scale`` in place."""
        self._data *= float(scale)
        return self

    # --------------------------------------------------- generic vector algebra

    def left_multiply(self, vector: TapDelayVector, algebra: AlgebraDescriptor) -> TapDelayVector:
        """
        Matrix times vector, ``result[i] = sum_j scale(v[j], M[i, j])``.

        Partial sums use ``algebra.add`` and are seeded by the first term, so
        no generic zero element is involved.
        """
        if len(vector) != self.cols:
            raise DimensionMismatchError(
                f"Cannot multiply {self.shape} matrix by vector of length {len(vector)}."
            )
        items = vector.to_list()
        result: List[T] = []
        for i in range(self.rows):
            row = self._data[i, :].tolist()
            acc = algebra.scale(items[0], row[0])
            for j in range(1, self.cols):
                acc = algebra.add(acc, algebra.scale(items[j], row[j]))
            result.append(acc)
        return TapDelayVector(self.rows, result)

    def right_multiply(self, vector: TapDelayVector, algebra: AlgebraDescriptor) -> TapDelayVector:
        """
        Vector times matrix, ``result[i] = sum_j scale(v[j], M[j, i])``.

        Accumulated left to right starting from the first scaled term.
        """
        if len(vector) != self.rows:
            raise DimensionMismatchError(
                f"Cannot multiply vector of length {len(vector)} by {self.shape} matrix."
            )
        items = vector.to_list()
        result: List[T] = []
        for i in range(self.cols):
            col = self._data[:, i].tolist()
            acc = algebra.scale(items[0], col[0])
            for j in range(1, self.rows):
                acc = algebra.add(acc, algebra.scale(items[j], col[j]))
            result.append(acc)
        return TapDelayVector(self.cols, result)

    def quadratic(self, vector: TapDelayVector, algebra: AlgebraDescriptor) -> float:
        """``v^T M v``, computed as ``dot(right_multiply(v), v)``."""
        return self.right_multiply(vector, algebra).dot(vector, algebra)

    # ---------------------------------------------------------- operator sugar

    def __matmul__(self, other: "DenseMatrix") -> "DenseMatrix":
        return self.multiply(other)

    def __add__(self, other: "DenseMatrix") -> "DenseMatrix":
        return self.add(other)

    def __sub__(self, other: "DenseMatrix") -> "DenseMatrix":
        return self.subtract(other)

    def __mul__(self, scale: float) -> "DenseMatrix":
        return self.copy().scale_by(scale)

    __rmul__ = __mul__
