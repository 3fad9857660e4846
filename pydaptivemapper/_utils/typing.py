# ._utils.typing.py
from __future__ import annotations
from typing import Sequence, TypeVar, Union
import numpy as np

ArrayLike = Union[np.ndarray, Sequence[Union[int, float]]]

# element type of tap-delay vectors / algebra descriptors
T = TypeVar("T")

__all__ = ["ArrayLike", "T"]
