"""
jacobian.py — Local linearisation of a field at a point.
"""
from __future__ import annotations
import math
import numpy as np
from dataclasses import dataclass

from .field import SampleFn


DEFAULT_EPS = 1e-3


@dataclass(frozen=True)
class JacobianResult:
    """
    J = [[j11, j12], [j21, j22]] = [[du/dx, du/dy], [dv/dx, dv/dy]]
    eig_a >= eig_b when real; both equal tr/2 for a complex pair.
    """
    j11: float
    j12: float
    j21: float
    j22: float
    eig_a: float
    eig_b: float

    @property
    def trace(self) -> float:
        return self.j11 + self.j22

    @property
    def det(self) -> float:
        return self.j11 * self.j22 - self.j12 * self.j21

    @property
    def discriminant(self) -> float:
        tr = self.trace
        return tr * tr - 4.0 * self.det


def eigenvalues_2x2(j11: float, j12: float, j21: float, j22: float):
    """
    Real eigenvalue estimate from trace and determinant.
    A complex-conjugate pair collapses to its real part (tr/2, tr/2);
    the imaginary part is not reported.
    """
    tr = j11 + j22
    det = j11 * j22 - j12 * j21
    disc = tr * tr - 4.0 * det
    if disc >= 0:
        root = math.sqrt(disc)
        return (tr + root) / 2.0, (tr - root) / 2.0
    return tr / 2.0, tr / 2.0


def jacobian_at(func: SampleFn, x: float, y: float, eps: float = DEFAULT_EPS) -> JacobianResult:
    """
    Forward-difference Jacobian of func at (x, y) with a fixed step eps.
    A degenerate eps is not trapped: eps = 0 yields nan (or inf) entries.
    """
    f0 = func(x, y)
    fx = func(x + eps, y)
    fy = func(x, y + eps)
    h = np.float64(eps)
    with np.errstate(divide="ignore", invalid="ignore"):
        j11 = float(np.float64(fx.x - f0.x) / h)
        j12 = float(np.float64(fy.x - f0.x) / h)
        j21 = float(np.float64(fx.y - f0.y) / h)
        j22 = float(np.float64(fy.y - f0.y) / h)
    eig_a, eig_b = eigenvalues_2x2(j11, j12, j21, j22)
    return JacobianResult(j11, j12, j21, j22, eig_a, eig_b)
