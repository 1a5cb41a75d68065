"""
advect.py — Explicit Euler transport of particles and streamline tracing.

x_{t+1} = x_t + f(x_t) dt

Particles wrap at the domain edges: leaving past xmin puts a particle on
xmax (and vice versa), same for y. Streamlines do not wrap.
"""
from __future__ import annotations
import numpy as np
from typing import List, Tuple

from .field import DOMAIN, SampleFn


Array = np.ndarray

DEFAULT_DT = 0.02
DEFAULT_STEPS = 200


def seed_points(
    n: int,
    domain: Tuple[float, float, float, float] = DOMAIN,
    rng: np.random.Generator | None = None,
) -> Array:
    """(n, 2) points drawn uniformly from the domain rectangle."""
    if rng is None:
        rng = np.random.default_rng()
    xmin, xmax, ymin, ymax = domain
    P = np.empty((n, 2), dtype=float)
    P[:, 0] = rng.uniform(xmin, xmax, size=n)
    P[:, 1] = rng.uniform(ymin, ymax, size=n)
    return P


def _wrap(c: float, lo: float, hi: float) -> float:
    if c < lo:
        return hi
    if c > hi:
        return lo
    return c


def advect_particles(
    points: Array,
    f: SampleFn,
    dt: float = DEFAULT_DT,
    domain: Tuple[float, float, float, float] = DOMAIN,
) -> Array:
    """
    One Euler step for every particle.
    Args:
        points: (n, 2) positions (not modified)
        f:      sampler (x, y) -> Vector2
        dt:     time step
        domain: wrap rectangle
    Returns:
        (n, 2) new positions
    """
    points = np.asarray(points, dtype=float)
    assert points.ndim == 2 and points.shape[1] == 2, f"points must be (n, 2), got {points.shape}"
    xmin, xmax, ymin, ymax = domain
    out = np.empty_like(points)
    for k, (x, y) in enumerate(points):
        v = f(float(x), float(y))
        out[k, 0] = _wrap(x + v.x * dt, xmin, xmax)
        out[k, 1] = _wrap(y + v.y * dt, ymin, ymax)
    return out


def trace_streamline(f: SampleFn, start, steps: int = DEFAULT_STEPS, dt: float = DEFAULT_DT) -> Array:
    """
    Integrate forward from start.
    Returns:
        X: (steps+1, 2) path including the start point
    """
    x, y = (float(c) for c in start)
    X = np.zeros((steps + 1, 2), dtype=float)
    X[0] = (x, y)
    for t in range(steps):
        v = f(x, y)
        x += v.x * dt
        y += v.y * dt
        X[t + 1] = (x, y)
    return X


def trace_streamlines(f: SampleFn, starts: Array, steps: int = DEFAULT_STEPS, dt: float = DEFAULT_DT) -> List[Array]:
    return [trace_streamline(f, s, steps=steps, dt=dt) for s in np.asarray(starts, dtype=float)]
