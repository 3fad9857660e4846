# pydaptivemapper/__init__.py

from .base import AdaptiveMapper, MappingResult
from .errors import (
    DimensionMismatchError,
    MapperError,
    ModelNotEstablishedError,
    NumericalInstabilityError,
)
from .algebra import *
from .rls import *

__version__ = "0.1.0"
__author__ = "BruninLima"

__all__ = ["AdaptiveMapper", "MappingResult",
    "MapperError", "DimensionMismatchError", "ModelNotEstablishedError", "NumericalInstabilityError",
    "AlgebraDescriptor", "Pair", "SCALAR_ALGEBRA", "TUPLE_ALGEBRA", "weighted_tuple_algebra",
    "TapDelayVector", "DenseMatrix",
    "MapperState", "RLSMapper"]
