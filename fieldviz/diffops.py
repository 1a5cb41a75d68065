"""
diffops.py — Finite-difference divergence, curl and speed Laplacian on a grid.

Neighbour indices are clamped to the grid, so interior cells get central
differences and edge cells a one-sided step. Each difference is divided by
the index span actually used (2 inside, 1 on an edge):

  du/dx[j,i] = (u[j,ip] - u[j,im]) / ((ip - im) dx)

The "Laplacian" is that of the speed |(u,v)|, not the vector Laplacian:

  lap[j,i] = (m[j,ip] + m[j,im] + m[jp,i] + m[jm,i] - 4 m[j,i]) / (dx dy)

with the same clamped neighbours (a clamped neighbour is the cell itself).
"""
from __future__ import annotations
import numpy as np
from typing import Dict, Tuple


Array = np.ndarray


def _clamped_neighbours(n: int) -> Tuple[Array, Array, Array]:
    idx = np.arange(n)
    lo = np.maximum(idx - 1, 0)
    hi = np.minimum(idx + 1, n - 1)
    return lo, hi, (hi - lo).astype(float)


def _check_pair(u: Array, v: Array) -> None:
    assert u.ndim == 2, f"expected 2D component arrays, got ndim={u.ndim}"
    assert u.shape == v.shape, f"u and v shapes differ: {u.shape} vs {v.shape}"
    rows, cols = u.shape
    assert rows >= 2 and cols >= 2, f"grid needs at least 2x2 cells, got {u.shape}"


def partial_x(f: Array, dx: float) -> Array:
    """d/dx along columns with clamped neighbours."""
    im, ip, span = _clamped_neighbours(f.shape[1])
    return (f[:, ip] - f[:, im]) / (span[None, :] * dx)


def partial_y(f: Array, dy: float) -> Array:
    """d/dy along rows with clamped neighbours."""
    jm, jp, span = _clamped_neighbours(f.shape[0])
    return (f[jp, :] - f[jm, :]) / (span[:, None] * dy)


def speed_laplacian(u: Array, v: Array, dx: float, dy: float) -> Array:
    mag = np.hypot(u, v)
    im, ip, _ = _clamped_neighbours(mag.shape[1])
    jm, jp, _ = _clamped_neighbours(mag.shape[0])
    return (mag[:, ip] + mag[:, im] + mag[jp, :] + mag[jm, :] - 4.0 * mag) / (dx * dy)


def compute_derivatives(u: Array, v: Array, dx: float, dy: float) -> Dict[str, Array]:
    """
    Divergence, scalar curl and speed Laplacian of a sampled field.

    Args:
        u, v:   (rows, cols) components, row index along y
        dx, dy: node spacing (> 0)
    Returns:
        dict with 'div', 'curl', 'lap', each (rows, cols), freshly allocated
    """
    u = np.asarray(u, dtype=float)
    v = np.asarray(v, dtype=float)
    _check_pair(u, v)
    assert dx > 0 and dy > 0, "grid spacing must be positive"

    dudx = partial_x(u, dx)
    dvdx = partial_x(v, dx)
    dudy = partial_y(u, dy)
    dvdy = partial_y(v, dy)
    return {
        "div": dudx + dvdy,
        "curl": dvdx - dudy,
        "lap": speed_laplacian(u, v, dx, dy),
    }
