#  algebra.__init__.py

from .descriptor import AlgebraDescriptor, Pair, SCALAR_ALGEBRA, TUPLE_ALGEBRA, weighted_tuple_algebra
from .tap_delay import TapDelayVector
from .matrix import DenseMatrix

__all__ = [
    "AlgebraDescriptor",
    "Pair",
    "SCALAR_ALGEBRA",
    "TUPLE_ALGEBRA",
    "weighted_tuple_algebra",
    "TapDelayVector",
    "DenseMatrix",
]
