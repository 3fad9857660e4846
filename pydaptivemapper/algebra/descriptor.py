# algebra.descriptor.py
#
#       Algebra descriptors: the bundle of element operations that keeps the
#       tap-delay vectors, the dense matrix products and the RLS recursion
#       generic over the "linear element" type.

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Tuple

from pydaptivemapper._utils.typing import T

__all__ = [
    "AlgebraDescriptor",
    "Pair",
    "SCALAR_ALGEBRA",
    "TUPLE_ALGEBRA",
    "weighted_tuple_algebra",
]


Pair = Tuple[float, float]


@dataclass(frozen=True)
class AlgebraDescriptor(Generic[T]):
    """
    Immutable set of operations over an element type ``T``.

    Parameters
    ----------
    add : callable
        ``add(a, b) -> T``. Elementwise sum of two elements.
    scale : callable
        ``scale(a, s) -> T``. Multiplication of an element by a real scalar.
    dot : callable
        ``dot(a, b) -> float``. Inner product of two elements.
    zero : T
        Additive identity. Used to pad the missing side when two sequences of
        different lengths are combined.
    lift : callable
        ``lift(x) -> T``. Builds a regressor element from a raw input sample.
    name : str
        Short tag used in ``repr`` and error messages.

    Notes
    -----
    ``dot`` must be bilinear and consistent with ``add``/``scale`` for the RLS
    recursion to be meaningful. This is a caller contract and is not checked.
    """

    add: Callable[[T, T], T]
    scale: Callable[[T, float], T]
    dot: Callable[[T, T], float]
    zero: T
    lift: Callable[[float], T]
    name: str = "custom"

    def __repr__(self) -> str:
        return f"<AlgebraDescriptor {self.name}>"


def _scalar_lift(x: Any) -> float:
    return float(x)


SCALAR_ALGEBRA: AlgebraDescriptor[float] = AlgebraDescriptor(
    add=lambda a, b: a + b,
    scale=lambda a, s: a * s,
    dot=lambda a, b: a * b,
    zero=0.0,
    lift=_scalar_lift,
    name="scalar",
)


def weighted_tuple_algebra(
    weights: Pair = (1.0, 1.0),
    bias: float = 1.0,
) -> AlgebraDescriptor[Pair]:
    """
    Build a descriptor over ``(coefficient, bias)`` pairs.

    Parameters
    ----------
    weights : tuple of float, optional
        Component weights ``(w0, w1)`` of the inner product
        ``dot(a, b) = w0*a0*b0 + w1*a1*b1``. Default ``(1.0, 1.0)``.
    bias : float, optional
        Constant placed in the second component of every regressor, so that
        a single tap models ``y = k*x + b``. Default 1.0.

    Returns
    -------
    AlgebraDescriptor
        Descriptor whose elements are plain 2-tuples of floats.
    """
    w0, w1 = float(weights[0]), float(weights[1])
    bias = float(bias)

    def add(a: Pair, b: Pair) -> Pair:
        return (a[0] + b[0], a[1] + b[1])

    def scale(a: Pair, s: float) -> Pair:
        return (a[0] * s, a[1] * s)

    def dot(a: Pair, b: Pair) -> float:
        return w0 * a[0] * b[0] + w1 * a[1] * b[1]

    def lift(x: float) -> Pair:
        return (float(x), bias)

    return AlgebraDescriptor(
        add=add,
        scale=scale,
        dot=dot,
        zero=(0.0, 0.0),
        lift=lift,
        name=f"tuple(w=({w0:g}, {w1:g}), bias={bias:g})",
    )


TUPLE_ALGEBRA: AlgebraDescriptor[Pair] = weighted_tuple_algebra()
