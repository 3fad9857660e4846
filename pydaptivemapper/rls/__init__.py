#  rls.__init__.py

from .rls_mapper import MapperState, RLSMapper

__all__ = [
    "MapperState",
    "RLSMapper",
]
