# base.py

from __future__ import annotations

import functools
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from pydaptivemapper._utils.metrics import db10
from pydaptivemapper._utils.typing import ArrayLike


@dataclass
class MappingResult:
    """Standard output container for a batch adaptation run.

    Attributes
    ----------
    outputs:
        A priori estimates y_hat[k] = f_{k-1}(x[k]) produced before each update.
    errors:
        A priori errors e[k] = y[k] - y_hat[k].
    coefficients:
        Coefficient history over time, one snapshot per update plus the initial one.
    algorithm:
        Algorithm name (usually class name).
    runtime_ms:
        Runtime in milliseconds.
    error_type:
        Error semantics tag, e.g. "a_priori".
    extra:
        Optional container for a posteriori sequences / internal states.
    """

    outputs: np.ndarray
    errors: np.ndarray
    coefficients: np.ndarray
    algorithm: str
    runtime_ms: float
    error_type: str = "a_priori"
    extra: Optional[Dict[str, Any]] = None

    def mse(self) -> np.ndarray:
        """Instantaneous squared error."""
        return np.abs(self.errors) ** 2

    def mse_db(self, *, eps: float = 1e-20) -> np.ndarray:
        return db10(self.mse(), eps=eps)

    def __repr__(self) -> str:
        return f"<MappingResult algo={self.algorithm} samples={len(self.outputs)}>"


def validate_input(method: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to validate and normalize `optimize` inputs.

    Accepts:
        optimize(input_signal=..., desired_signal=..., **kwargs)
        optimize(input_signal, desired_signal, **kwargs)
        optimize(x=..., y=..., **kwargs)

    Notes
    -----
    - Signals are converted with `np.asarray(..., dtype=float)` and flattened.
    - Complex inputs raise TypeError; the mapper works on real pairs only.
    - Length mismatch raises ValueError.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        input_signal = args[0] if len(args) >= 1 else None
        desired_signal = args[1] if len(args) >= 2 else None

        if "input_signal" in kwargs:
            input_signal = kwargs.pop("input_signal")
        if "desired_signal" in kwargs:
            desired_signal = kwargs.pop("desired_signal")
        if "x" in kwargs:
            input_signal = kwargs.pop("x")
        if "y" in kwargs:
            desired_signal = kwargs.pop("y")

        if input_signal is None or desired_signal is None:
            raise TypeError("Missing signal: pass input_signal and desired_signal (or aliases x, y).")

        if np.iscomplexobj(input_signal) or np.iscomplexobj(desired_signal):
            raise TypeError(f"{self.__class__.__name__} does not support complex inputs.")

        x = np.ravel(np.asarray(input_signal, dtype=float))
        d = np.ravel(np.asarray(desired_signal, dtype=float))
        if x.shape[0] != d.shape[0]:
            raise ValueError(
                f"Inconsistent lengths: input({x.shape[0]}) != desired({d.shape[0]})"
            )

        return method(self, x, d, *args[2:], **kwargs)

    return wrapper


class AdaptiveMapper(ABC):
    """Abstract base class for online x <-> y mappers.

    Subclasses implement the single-sample recursion (`update`) and the two
    prediction directions. The batch driver `optimize`, coefficient history
    and result packaging are shared.

    Notes
    -----
    - Subclasses are expected to call `_record_history()` after every update.
    - `coefficients_snapshot()` must return a flat float array of fixed length
      so that histories stack into a 2D array.
    """

    def __init__(self) -> None:
        self.w_history: List[np.ndarray] = []

    def _record_history(self) -> None:
        """Store a snapshot of current coefficients."""
        self.w_history.append(self.coefficients_snapshot())

    def _pack_results(
        self,
        outputs: np.ndarray,
        errors: np.ndarray,
        runtime_s: float,
        error_type: str = "a_priori",
        extra: Optional[Dict[str, Any]] = None,
    ) -> MappingResult:
        """Centralized output packaging to standardize results."""
        return MappingResult(
            outputs=np.asarray(outputs),
            errors=np.asarray(errors),
            coefficients=np.asarray(self.w_history),
            algorithm=self.__class__.__name__,
            runtime_ms=float(runtime_s) * 1000.0,
            error_type=str(error_type),
            extra=extra,
        )

    def predict(self, input_signal: ArrayLike) -> np.ndarray:
        """Map every entry of `input_signal` through `map_x_to_y` (state is not changed)."""
        x = np.ravel(np.asarray(input_signal, dtype=float))
        return np.array([self.map_x_to_y(float(v)) for v in x], dtype=float)

    @abstractmethod
    def coefficients_snapshot(self) -> np.ndarray:
        raise NotImplementedError

    @abstractmethod
    def reset(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def update(self, x: float, y: float) -> float:
        """Run one adaptation step on the pair (x, y) and return the a priori error."""
        raise NotImplementedError

    @abstractmethod
    def map_x_to_y(self, x: float) -> float:
        raise NotImplementedError

    @abstractmethod
    def map_y_to_x(self, y: float) -> float:
        raise NotImplementedError

    @abstractmethod
    def optimize(
        self,
        input_signal: ArrayLike,
        desired_signal: ArrayLike,
        **kwargs: Any,
    ) -> MappingResult:
        """Run `update` over paired sequences and return a MappingResult."""
        raise NotImplementedError
