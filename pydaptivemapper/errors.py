# pydaptivemapper/errors.py
from __future__ import annotations

__all__ = [
    "MapperError",
    "DimensionMismatchError",
    "ModelNotEstablishedError",
    "NumericalInstabilityError",
]


class MapperError(Exception):
    """Base class for every error raised by pydaptivemapper."""


class DimensionMismatchError(MapperError, ValueError):
    """Operand shapes violate the precondition of a matrix/vector operation."""


class ModelNotEstablishedError(MapperError, RuntimeError):
    """A prediction was requested before the estimator saw any sample."""


class NumericalInstabilityError(MapperError, ArithmeticError):
    """A denominator vanished (or stopped being finite) during an update or inversion."""
