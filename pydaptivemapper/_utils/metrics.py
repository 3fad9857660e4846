import numpy as np
from .typing import ArrayLike

__all__ = ["db10"]


def db10(x: ArrayLike, *, eps: float = 1e-20) -> np.ndarray:
    """10*log10(x) with numerical guard."""
    x = np.asarray(x, dtype=float)
    return 10.0 * np.log10(np.maximum(x, eps))
