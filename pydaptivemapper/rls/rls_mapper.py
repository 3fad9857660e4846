#  rls.rls_mapper.py
#
#       Implements the conventional RLS algorithm as an online x <-> y mapper
#       over a generic linear element type.
#       (Algorithm 5.3 - book: Adaptive Filtering: Algorithms and Practical
#                                                       Implementation, Diniz)

from __future__ import annotations

import enum
import logging
from time import perf_counter
from typing import Any, Dict, List

import numpy as np

from pydaptivemapper.algebra import TUPLE_ALGEBRA, AlgebraDescriptor, DenseMatrix, TapDelayVector
from pydaptivemapper.base import AdaptiveMapper, MappingResult, validate_input
from pydaptivemapper.errors import ModelNotEstablishedError, NumericalInstabilityError

logger = logging.getLogger(__name__)

__all__ = ["MapperState", "RLSMapper"]


class MapperState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    WARMING = "warming"
    TRAINED = "trained"


class RLSMapper(AdaptiveMapper):
    """
    Recursive Least-Squares (RLS) linear mapper.

    Learns the linear relation between paired samples ``(x, y)`` one sample
    at a time and maps ``x -> y`` (any tap count) or ``y -> x`` (single tap)
    from the current estimate, without storing past samples.

    Parameters
    ----------
    tap_count : int, optional
        Number of regressor taps ``M + 1`` (filter order plus one). Default 1.
    forgetting_factor : float, optional
        Exponential forgetting factor ``lambda`` in ``(0, 1]``. ``1`` weights all
        history equally; smaller values track faster. Default 0.99.
    delta : float, optional
        Positive regularization. The inverse-covariance estimate starts as
        ``P(0) = (1/delta) I``. Default 1.0.
    algebra : AlgebraDescriptor, optional
        Element operations. With the default tuple algebra a single tap holds
        ``(k, b)`` and models ``y = k x + b``; with the scalar algebra the
        mapper is a plain FIR RLS. Default ``TUPLE_ALGEBRA``.
    safe_eps : float, optional (keyword-only)
        Smallest admissible magnitude for the gain denominator
        ``lambda + x^T P x`` and for the slope used by ``map_y_to_x``.
        Default 1e-12.

    Notes
    -----
    At each update the regressor window (newest first, zero padded during
    warm-up) is

    .. math::
        x_k = [u(x[k]), u(x[k-1]), \\ldots, u(x[k-M])]^T,

    with ``u`` the algebra's ``lift``. The recursion is

    .. math::
        a(k) = y(k) - x_k^T w(k-1),

    .. math::
        g(k) = \\frac{P(k-1) x_k}{\\lambda + x_k^T P(k-1) x_k},

    .. math::
        P(k) = \\lambda^{-1} \\left[ P(k-1) - g(k) x_k^T P(k-1) \\right],

    .. math::
        w(k) = w(k-1) + a(k)\\, g(k).

    ``P`` is ``tap_count x tap_count``; products between ``P`` and the
    regressor go through the algebra, so non-scalar elements share one
    covariance entry per tap.

    References
    ----------
    .. [1] P. S. R. Diniz, *Adaptive Filtering: Algorithms and Practical
       Implementation*, 5th ed., Algorithm 5.3.
    """

    tap_count: int
    forgetting_factor: float
    delta: float
    inv_delta: float
    algebra: AlgebraDescriptor

    def __init__(
        self,
        tap_count: int = 1,
        forgetting_factor: float = 0.99,
        delta: float = 1.0,
        algebra: AlgebraDescriptor = TUPLE_ALGEBRA,
        *,
        safe_eps: float = 1e-12,
    ) -> None:
        super().__init__()
        if int(tap_count) != tap_count or int(tap_count) < 1:
            raise ValueError(f"tap_count must be a positive integer. Got {tap_count}.")
        if not np.isfinite(forgetting_factor) or not (0.0 < forgetting_factor <= 1.0):
            raise ValueError(f"forgetting_factor must lie in (0, 1]. Got {forgetting_factor}.")
        if not np.isfinite(delta) or delta <= 0.0:
            raise ValueError(f"delta must be positive and finite. Got {delta}.")

        self.tap_count = int(tap_count)
        self.forgetting_factor = float(forgetting_factor)
        self.delta = float(delta)
        self.inv_delta = 1.0 / self.delta
        self.algebra = algebra
        self._safe_eps = float(safe_eps)

        self._ws: TapDelayVector = TapDelayVector(self.tap_count)
        self._xs: TapDelayVector = TapDelayVector(self.tap_count)
        self._p: DenseMatrix = DenseMatrix(self.tap_count)
        self._n_updates: int = 0

        self.reset()

    # ------------------------------------------------------------------ state

    def reset(self) -> None:
        """Back to ``UNINITIALIZED``: ``P = (1/delta) I``, empty weights and regressors."""
        self._p.identity(self.inv_delta)
        self._ws = TapDelayVector(self.tap_count)
        self._xs = TapDelayVector(self.tap_count)
        self._n_updates = 0
        self.w_history = []
        self._record_history()
        logger.debug(
            "RLSMapper reset: taps=%d lambda=%g delta=%g algebra=%s",
            self.tap_count, self.forgetting_factor, self.delta, self.algebra.name,
        )

    @property
    def state(self) -> MapperState:
        if self._n_updates == 0:
            return MapperState.UNINITIALIZED
        if not self._xs.is_full:
            return MapperState.WARMING
        return MapperState.TRAINED

    @property
    def n_updates(self) -> int:
        return self._n_updates

    @property
    def weights(self) -> List[Any]:
        return self._ws.to_list()

    @property
    def regressors(self) -> List[Any]:
        return self._xs.to_list()

    @property
    def covariance(self) -> np.ndarray:
        return self._p.to_array()

    def coefficients_snapshot(self) -> np.ndarray:
        padded = self._ws.padded(self.algebra).to_list()
        return np.ravel(np.asarray(padded, dtype=float))

    # ---------------------------------------------------------------- update

    def update(self, x: float, y: float) -> float:
        """
        One RLS step on the pair ``(x, y)``.

        Returns
        -------
        float
            A priori error ``a = y - x_k^T w(k-1)``.

        Raises
        ------
        NumericalInstabilityError
            If ``lambda + x^T P x`` is not finite or smaller than ``safe_eps``
            in magnitude. The mapper state is left unchanged.
        """
        alg = self.algebra
        lam = self.forgetting_factor

        xs = self._xs.copy()
        xs.push_front(alg.lift(x))
        regressor = xs.padded(alg)

        a = float(y) - regressor.dot(self._ws, alg)

        px = self._p.left_multiply(regressor, alg)
        xpx = self._p.quadratic(regressor, alg)

        den = lam + xpx
        if not np.isfinite(den) or abs(den) < self._safe_eps:
            logger.debug("RLSMapper gain denominator %r at update %d", den, self._n_updates + 1)
            raise NumericalInstabilityError(
                f"Gain denominator lambda + x^T P x = {den!r} is not usable."
            )
        g = px.scale(1.0 / den, alg)

        gx = DenseMatrix.outer(g, regressor, alg)
        gxp = gx.multiply(self._p)

        self._xs = xs
        self._p = self._p.subtract(gxp).scale_by(1.0 / lam)
        self._ws = self._ws.add(g.scale(a, alg), alg)

        self._n_updates += 1
        self._record_history()
        return a

    # ------------------------------------------------------------ prediction

    def _require_model(self) -> None:
        if len(self._ws) == 0:
            raise ModelNotEstablishedError(
                f"{self.__class__.__name__} has no estimate yet: call update() first."
            )

    def map_x_to_y(self, x: float) -> float:
        """Estimate ``y`` for ``x`` pushed onto a copy of the current window."""
        self._require_model()
        window = self._xs.copy()
        window.push_front(self.algebra.lift(x))
        return window.padded(self.algebra).dot(self._ws, self.algebra)

    def map_y_to_x(self, y: float) -> float:
        """
        Invert the single-tap model ``y = K x + y0``.

        ``y0`` is the estimate at ``x = 0`` and ``K`` the slope of the current
        estimate (the first weight component when the algebra weights are 1).

        Raises
        ------
        ModelNotEstablishedError
            Before the first update.
        NotImplementedError
            For ``tap_count > 1``; such models have no single inverse.
        NumericalInstabilityError
            If ``|K| < safe_eps``.
        """
        self._require_model()
        if self.tap_count != 1:
            raise NotImplementedError(
                f"map_y_to_x requires tap_count == 1. Got tap_count={self.tap_count}."
            )
        y0 = self.map_x_to_y(0.0)
        slope = self.map_x_to_y(1.0) - y0
        if not np.isfinite(slope) or abs(slope) < self._safe_eps:
            logger.debug("RLSMapper slope %r cannot be inverted", slope)
            raise NumericalInstabilityError(f"Estimated slope K = {slope!r} cannot be inverted.")
        return (float(y) - y0) / slope

    # ----------------------------------------------------------------- batch

    @validate_input
    def optimize(
        self,
        input_signal: np.ndarray,
        desired_signal: np.ndarray,
        verbose: bool = False,
    ) -> MappingResult:
        """
        Executes ``update`` over paired sequences, continuing from the current state.

        Parameters
        ----------
        input_signal : array_like of float
            Samples ``x[k]`` with shape ``(N,)`` (will be flattened).
        desired_signal : array_like of float
            Samples ``y[k]`` with shape ``(N,)`` (will be flattened).
        verbose : bool, optional
            If True, prints the total runtime after completion.

        Returns
        -------
        MappingResult
            - outputs : a priori estimates, shape ``(N,)``.
            - errors : a priori errors, shape ``(N,)``.
            - coefficients : history, shape ``(n_updates + 1, tap_count * dim)``.
            - extra : ``"outputs_posteriori"`` and ``"errors_posteriori"``.
        """
        tic: float = perf_counter()

        x: np.ndarray = input_signal
        d: np.ndarray = desired_signal
        n_samples: int = int(x.size)

        outputs: np.ndarray = np.zeros(n_samples, dtype=float)
        errors: np.ndarray = np.zeros(n_samples, dtype=float)
        outputs_post: np.ndarray = np.zeros(n_samples, dtype=float)
        errors_post: np.ndarray = np.zeros(n_samples, dtype=float)

        for k in range(n_samples):
            errors[k] = self.update(x[k], d[k])
            outputs[k] = d[k] - errors[k]

            outputs_post[k] = self._xs.padded(self.algebra).dot(self._ws, self.algebra)
            errors_post[k] = d[k] - outputs_post[k]

        runtime_s: float = perf_counter() - tic
        if verbose:
            print(f"[RLSMapper] Completed in {runtime_s * 1000:.03f} ms")

        extra: Dict[str, Any] = {
            "outputs_posteriori": outputs_post,
            "errors_posteriori": errors_post,
        }
        return self._pack_results(
            outputs=outputs,
            errors=errors,
            runtime_s=runtime_s,
            error_type="a_priori",
            extra=extra,
        )

    def __repr__(self) -> str:
        return (
            f"<RLSMapper taps={self.tap_count} lambda={self.forgetting_factor:g} "
            f"delta={self.delta:g} algebra={self.algebra.name} state={self.state.value}>"
        )
# EOF
