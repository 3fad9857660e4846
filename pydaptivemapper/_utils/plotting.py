# pydaptivemapper/_utils/plotting.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from pydaptivemapper.base import MappingResult

from .metrics import db10

__all__ = [
    "FitPlotConfig",
    "plot_mapping_fit",
    "plot_learning_curve",
]


@dataclass
class FitPlotConfig:
    """
    Configuration for the single-figure mapping summary.

    Parameters
    ----------
    n_grid : int
        Number of points on the x grid used to draw the fitted line.
    coeff_labels : tuple of str, optional
        Legend labels for the coefficient trajectories. Defaults to w[i].
    title : str
        Figure title.
    show : bool
        If True, calls plt.show() at the end.
    """
    n_grid: int = 200
    coeff_labels: Optional[tuple] = None
    title: str = "RLS mapper"
    show: bool = True


def plot_mapping_fit(
    mapper,
    x: np.ndarray,
    y: np.ndarray,
    result: MappingResult,
    cfg: Optional[FitPlotConfig] = None,
):
    """
    Plot samples with the fitted mapping, the squared a priori error in dB,
    and the coefficient trajectories. Returns the matplotlib Figure.
    """
    import matplotlib.pyplot as plt

    cfg = FitPlotConfig() if cfg is None else cfg

    x = np.asarray(x, dtype=float).ravel()
    y = np.asarray(y, dtype=float).ravel()
    coeffs = np.asarray(result.coefficients, dtype=float)
    if coeffs.ndim != 2:
        raise ValueError(f"result.coefficients must be 2D (n_updates+1, n_coeffs). Got {coeffs.shape}.")

    grid = np.linspace(float(np.min(x)), float(np.max(x)), int(cfg.n_grid))
    fitted = mapper.predict(grid)

    fig = plt.figure(figsize=(12, 4))

    ax = fig.add_subplot(1, 3, 1)
    ax.plot(x, y, ".", alpha=0.5, label="samples")
    ax.plot(grid, fitted, "-", label="estimate")
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.grid(True, alpha=0.3)
    ax.legend()

    ax = fig.add_subplot(1, 3, 2)
    ax.plot(np.arange(1, result.errors.size + 1), db10(result.mse()))
    ax.set_xlabel("iteration k")
    ax.set_ylabel("|e[k]|^2 (dB)")
    ax.grid(True, alpha=0.3)

    ax = fig.add_subplot(1, 3, 3)
    labels = cfg.coeff_labels or tuple(f"w[{i}]" for i in range(coeffs.shape[1]))
    for i in range(coeffs.shape[1]):
        ax.plot(coeffs[:, i], label=labels[i] if i < len(labels) else f"w[{i}]")
    ax.set_xlabel("k")
    ax.set_ylabel("coefficient")
    ax.grid(True, alpha=0.3)
    ax.legend()

    fig.suptitle(cfg.title)
    fig.tight_layout()
    if cfg.show:
        plt.show()
    return fig


def plot_learning_curve(mse: np.ndarray, title: str = "", show: bool = True):
    import matplotlib.pyplot as plt

    mse = np.asarray(mse, dtype=float).ravel()
    x = np.arange(1, mse.size + 1)

    fig = plt.figure()
    plt.semilogy(x, np.abs(mse))
    plt.grid(True)
    plt.title(title or "Learning curve")
    plt.xlabel("n")
    plt.ylabel("MSE")
    if show:
        plt.show()
    return fig
