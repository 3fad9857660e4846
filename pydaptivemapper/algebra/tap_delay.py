# algebra.tap_delay.py
#
#       Fixed-capacity tap-delay line over an arbitrary element type.

from __future__ import annotations

from typing import Callable, Generic, Iterable, Iterator, List, Tuple

from pydaptivemapper.algebra.descriptor import AlgebraDescriptor
from pydaptivemapper.errors import DimensionMismatchError
from pydaptivemapper._utils.typing import T

__all__ = ["TapDelayVector"]


class TapDelayVector(Generic[T]):
    """
    Ordered sequence holding the ``capacity`` most recently pushed items.

    Items are stored newest first, following the regressor convention

    .. math::
        x_k = [x[k], x[k-1], \\ldots, x[k-M]]^T.

    Pushing beyond the capacity evicts the oldest (tail) item. Stored items
    are never modified; every arithmetic operation returns a new vector.

    Parameters
    ----------
    capacity : int
        Maximum number of items (tap count). Must be positive.
    items : iterable, optional
        Initial content, newest first. Truncated to ``capacity``.
    """

    __slots__ = ("_capacity", "_items")

    def __init__(self, capacity: int, items: Iterable[T] = ()) -> None:
        capacity = int(capacity)
        if capacity < 1:
            raise ValueError(f"capacity must be a positive integer. Got {capacity}.")
        self._capacity: int = capacity
        self._items: Tuple[T, ...] = tuple(items)[:capacity]

    # ------------------------------------------------------------------ sizing

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def is_full(self) -> bool:
        return len(self._items) == self._capacity

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TapDelayVector):
            return NotImplemented
        return self._capacity == other._capacity and self._items == other._items

    def __repr__(self) -> str:
        return f"TapDelayVector(capacity={self._capacity}, items={list(self._items)!r})"

    def to_list(self) -> List[T]:
        return list(self._items)

    def copy(self) -> "TapDelayVector[T]":
        return TapDelayVector(self._capacity, self._items)

    # --------------------------------------------------------------- mutation

    def push_front(self, value: T) -> None:
        """Insert ``value`` as the newest item, dropping the oldest if full."""
        self._items = ((value,) + self._items)[: self._capacity]

    # ------------------------------------------------------------- iteration

    def pairwise(self, other: "TapDelayVector", op: Callable[[T, T], None]) -> None:
        """Call ``op(a, b)`` for items at equal positions, up to the shorter length."""
        for a, b in zip(self._items, other._items):
            op(a, b)

    def indexed_pairwise(
        self,
        other: "TapDelayVector",
        op: Callable[[T, T, int, int], None],
    ) -> None:
        """Call ``op(a, b, i, j)`` for every pair of positions ``(i, j)``."""
        for i, a in enumerate(self._items):
            for j, b in enumerate(other._items):
                op(a, b, i, j)

    # ------------------------------------------------------------ arithmetic

    def dot(self, other: "TapDelayVector", algebra: AlgebraDescriptor) -> float:
        """
        Sum of ``algebra.dot`` over lockstep pairs.

        Positions present in only one of the vectors contribute nothing, so
        an empty operand yields ``0.0``.
        """
        acc: List[float] = [0.0]

        def _accumulate(a: T, b: T) -> None:
            acc[0] += float(algebra.dot(a, b))

        self.pairwise(other, _accumulate)
        return acc[0]

    def scale(self, factor: float, algebra: AlgebraDescriptor) -> "TapDelayVector[T]":
        factor = float(factor)
        return TapDelayVector(self._capacity, (algebra.scale(a, factor) for a in self._items))

    def add(self, other: "TapDelayVector", algebra: AlgebraDescriptor) -> "TapDelayVector[T]":
        """
        Elementwise sum.

        When the two vectors hold a different number of items, the missing
        positions of the shorter one are taken as ``algebra.zero``. Both
        vectors must share the same capacity.
        """
        if self._capacity != other._capacity:
            raise DimensionMismatchError(
                f"Cannot add tap-delay vectors of capacity {self._capacity} and {other._capacity}."
            )
        n = max(len(self._items), len(other._items))
        lhs = self._items + (algebra.zero,) * (n - len(self._items))
        rhs = other._items + (algebra.zero,) * (n - len(other._items))
        return TapDelayVector(self._capacity, (algebra.add(a, b) for a, b in zip(lhs, rhs)))

    def padded(self, algebra: AlgebraDescriptor) -> "TapDelayVector[T]":
        """Copy filled up to ``capacity`` with ``algebra.zero`` at the tail."""
        missing = self._capacity - len(self._items)
        return TapDelayVector(self._capacity, self._items + (algebra.zero,) * missing)
