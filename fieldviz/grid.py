"""
grid.py — Sampling a vector field on a regular axis-aligned grid.

Node (j, i) sits at x_i = xmin + i*dx, y_j = ymin + j*dy with
dx = (xmax - xmin)/(cols - 1), dy = (ymax - ymin)/(rows - 1).
Arrays are (rows, cols): row 0 is ymin, column 0 is xmin.
"""
from __future__ import annotations
import logging
import numpy as np
from dataclasses import dataclass
from typing import Tuple

from .field import DOMAIN, SampleFn


Array = np.ndarray

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GridSpec:
    xmin: float
    xmax: float
    ymin: float
    ymax: float
    cols: int
    rows: int

    def __post_init__(self):
        assert self.cols >= 2 and self.rows >= 2, \
            f"grid needs at least 2x2 nodes, got rows={self.rows}, cols={self.cols}"
        assert self.xmax > self.xmin and self.ymax > self.ymin, "domain must have positive extent"

    @property
    def dx(self) -> float:
        return (self.xmax - self.xmin) / (self.cols - 1)

    @property
    def dy(self) -> float:
        return (self.ymax - self.ymin) / (self.rows - 1)

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    def xs(self) -> Array:
        """Sampled x coordinates; the last one is xmax exactly."""
        x = self.xmin + np.arange(self.cols) * self.dx
        x[-1] = self.xmax
        return x

    def ys(self) -> Array:
        y = self.ymin + np.arange(self.rows) * self.dy
        y[-1] = self.ymax
        return y

    @staticmethod
    def over(domain: Tuple[float, float, float, float], cols: int, rows: int) -> "GridSpec":
        xmin, xmax, ymin, ymax = domain
        return GridSpec(float(xmin), float(xmax), float(ymin), float(ymax), int(cols), int(rows))


def evaluate_grid(
    func: SampleFn,
    cols: int,
    rows: int,
    domain: Tuple[float, float, float, float] = DOMAIN,
) -> Tuple[Array, Array, GridSpec]:
    """
    Sample func at every grid node.

    Args:
        func: (x, y) -> Vector2
        cols, rows: node counts (both >= 2)
        domain: (xmin, xmax, ymin, ymax)
    Returns:
        u, v: (rows, cols) component arrays
        spec: the GridSpec used
    """
    spec = GridSpec.over(domain, cols, rows)
    xs, ys = spec.xs(), spec.ys()
    u = np.zeros(spec.shape, dtype=float)
    v = np.zeros(spec.shape, dtype=float)
    for j in range(spec.rows):
        y = float(ys[j])
        for i in range(spec.cols):
            f = func(float(xs[i]), y)
            u[j, i] = f.x
            v[j, i] = f.y
    logger.debug("Evaluated %dx%d grid (dx=%.4g, dy=%.4g)", spec.rows, spec.cols, spec.dx, spec.dy)
    return u, v, spec
