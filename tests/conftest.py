# tests/conftest.py

from __future__ import annotations

import numpy as np
import pytest
from scipy import signal

from pydaptivemapper import RLSMapper
from pydaptivemapper._utils.samples import make_linear_samples


@pytest.fixture
def calculate_msd():
    """Mean-square deviation between true coefficients and an estimate."""
    def _calc(w_true, w_est):
        w_true_flat = np.asarray(w_true, dtype=float).reshape(-1)
        w_hat_flat = np.asarray(w_est, dtype=float).reshape(-1)
        if w_true_flat.shape != w_hat_flat.shape:
            raise ValueError(
                f"MSD shape mismatch: w_true has {w_true_flat.shape}, w_est has {w_hat_flat.shape}"
            )
        return float(np.mean((w_true_flat - w_hat_flat) ** 2))

    return _calc


@pytest.fixture
def linear_data_clean():
    """Noiseless y = 7x + 3 on a well-conditioned range."""
    rng = np.random.default_rng(42)
    x, y = make_linear_samples(rng, 300, 7.0, 3.0, x_range=(-1.0, 1.0))
    return {"x": x, "y": y, "k": 7.0, "b": 3.0}


@pytest.fixture
def linear_data_noisy():
    """100 samples of y = 7x + 3 + U(-0.3, 0.3) with x ~ U(0, 20)."""
    rng = np.random.default_rng(42)
    x, y = make_linear_samples(rng, 100, 7.0, 3.0, x_range=(0.0, 20.0), noise_amplitude=0.3)
    return {"x": x, "y": y, "k": 7.0, "b": 3.0}


@pytest.fixture
def fir_data_real():
    rng = np.random.default_rng(42)
    n_samples = 500

    w_optimal = np.array([0.5, -0.4, 0.2], dtype=np.float64)
    order = int(len(w_optimal) - 1)

    u = rng.standard_normal(n_samples).astype(np.float64, copy=False)
    x = np.zeros(n_samples, dtype=np.float64)
    for i in range(1, n_samples):
        x[i] = 0.5 * x[i - 1] + u[i]

    d = signal.lfilter(w_optimal, 1, x).astype(np.float64, copy=False)

    return {"x": x, "d": d, "w_optimal": w_optimal, "order": order, "n_samples": n_samples}


@pytest.fixture
def trained_mapper(linear_data_clean):
    mapper = RLSMapper(tap_count=1, forgetting_factor=0.1, delta=0.01)
    mapper.optimize(linear_data_clean["x"], linear_data_clean["y"])
    return mapper
