"""
poisson.py — Scalar potential from a divergence grid by Jacobi relaxation.

Solves the discrete Poisson problem  lap(phi) = div  on a regular grid with
the 5-point stencil. Each sweep builds a new buffer from the previous one:

  phi'[j,i] = ((phi[j,i+1] + phi[j,i-1]) dy^2 + (phi[j+1,i] + phi[j-1,i]) dx^2
               - div[j,i] dx^2 dy^2) / (2 (dx^2 + dy^2))

Only interior nodes are updated, so the boundary stays at 0 (homogeneous
Dirichlet). The iteration count is fixed and there is no convergence test:
cost is bounded at O(iterations * rows * cols), but the result is not
guaranteed to be converged. Use poisson_residual(...) to inspect how far off
a given solve is.
"""
from __future__ import annotations
import logging
import numpy as np
from typing import Tuple

from .diffops import partial_x, partial_y


Array = np.ndarray

DEFAULT_ITERATIONS = 200

logger = logging.getLogger(__name__)


def _check_grid(a: Array, name: str) -> None:
    assert a.ndim == 2, f"{name} must be 2D, got ndim={a.ndim}"
    assert a.shape[0] >= 2 and a.shape[1] >= 2, f"{name} needs at least 2x2 cells, got {a.shape}"


def solve_poisson(div: Array, dx: float, dy: float, iterations: int = DEFAULT_ITERATIONS) -> Array:
    """
    Jacobi relaxation for lap(phi) = div starting from phi = 0.

    Args:
        div:        (rows, cols) right-hand side
        dx, dy:     node spacing
        iterations: number of full sweeps (>= 0)
    Returns:
        phi: (rows, cols) potential, zero on the boundary
    """
    div = np.asarray(div, dtype=float)
    _check_grid(div, "div")
    assert iterations >= 0, "iterations must be non-negative"

    dx2, dy2 = dx * dx, dy * dy
    denom = 2.0 * (dx2 + dy2)
    rhs = div[1:-1, 1:-1] * dx2 * dy2

    phi = np.zeros_like(div)
    for _ in range(iterations):
        new_phi = np.zeros_like(phi)
        new_phi[1:-1, 1:-1] = (
            (phi[1:-1, 2:] + phi[1:-1, :-2]) * dy2
            + (phi[2:, 1:-1] + phi[:-2, 1:-1]) * dx2
            - rhs
        ) / denom
        phi = new_phi

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Jacobi solve %s after %d sweeps: residual %.3e",
                     div.shape, iterations, poisson_residual(phi, div, dx, dy))
    return phi


def poisson_residual(phi: Array, div: Array, dx: float, dy: float) -> float:
    """Max |lap(phi) - div| over interior nodes (0.0 when there are none)."""
    phi = np.asarray(phi, dtype=float)
    div = np.asarray(div, dtype=float)
    assert phi.shape == div.shape, f"phi and div shapes differ: {phi.shape} vs {div.shape}"
    if phi.shape[0] < 3 or phi.shape[1] < 3:
        return 0.0
    lap = (
        (phi[1:-1, 2:] - 2.0 * phi[1:-1, 1:-1] + phi[1:-1, :-2]) / (dx * dx)
        + (phi[2:, 1:-1] - 2.0 * phi[1:-1, 1:-1] + phi[:-2, 1:-1]) / (dy * dy)
    )
    return float(np.max(np.abs(lap - div[1:-1, 1:-1])))


def grad_phi(phi: Array, dx: float, dy: float) -> Tuple[Array, Array]:
    """
    Gradient of a potential with the same clamped stencil as the divergence
    and curl operators (one-sided step on the edges).
    Edge values are divided by the single step dx (or dy) actually spanned,
    not by 2 dx, so they are not halved relative to the interior.
    Returns:
        gx, gy: (rows, cols)
    """
    phi = np.asarray(phi, dtype=float)
    _check_grid(phi, "phi")
    return partial_x(phi, dx), partial_y(phi, dy)
