# pydaptivemapper/_utils/samples.py
from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from .typing import ArrayLike

__all__ = ["uniform_noise", "make_linear_samples", "make_fir_samples"]


def uniform_noise(rng: np.random.Generator, shape, amplitude: float) -> np.ndarray:
    """Noise uniformly distributed in [-amplitude, amplitude]."""
    a = float(amplitude)
    return rng.uniform(-a, a, size=shape).astype(float)


def make_linear_samples(
    rng: np.random.Generator,
    n_samples: int,
    slope: float,
    intercept: float,
    *,
    x_range: Tuple[float, float] = (0.0, 20.0),
    noise_amplitude: float = 0.0,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Pairs for y = slope*x + intercept + n.

    x is uniform in `x_range` and n is uniform in [-noise_amplitude, noise_amplitude].

    Returns:
      x: (n_samples,) float
      y: (n_samples,) float
    """
    K = int(n_samples)
    lo, hi = float(x_range[0]), float(x_range[1])
    if not hi > lo:
        raise ValueError(f"x_range must be increasing. Got {x_range}.")

    x = rng.uniform(lo, hi, size=K).astype(float)
    y = float(slope) * x + float(intercept)
    if noise_amplitude > 0.0:
        y = y + uniform_noise(rng, K, noise_amplitude)
    return x, y


def make_fir_samples(
    rng: np.random.Generator,
    n_samples: int,
    Wo: ArrayLike,
    *,
    sigma_n2: float = 0.0,
    x: Optional[np.ndarray] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Desired signal for an FIR unknown system:
      y[k] = Wo^T * X_k + n[k]
    where X_k is the tapped delay line with length len(Wo), most recent first,
    zero initial conditions.
    """
    Wo = np.asarray(Wo, dtype=float).ravel()
    K = int(n_samples)
    M = int(Wo.size - 1)

    if x is None:
        x = rng.standard_normal(K).astype(float)
    x = np.asarray(x, dtype=float).ravel()[:K]

    x_pad = np.concatenate((np.zeros(M, dtype=float), x))
    y = np.zeros(K, dtype=float)
    for k in range(K):
        Xk = x_pad[k : k + (M + 1)][::-1]
        y[k] = float(np.dot(Wo, Xk))

    if sigma_n2 > 0.0:
        y = y + np.sqrt(float(sigma_n2)) * rng.standard_normal(K)
    return x, y
