"""
field.py — Point sampling of a 2D vector field with handle perturbations.

The base field is any smooth f(x, y) -> Vector2. Each control handle h pulls
the field toward its own vector h.vector with a Gaussian weight

    w = exp(-|p - h.position|^2 / (2 sigma^2)),   v <- v (1 - w) + h.vector w

Handles are applied in their stored order, so repeated calls with the same
point and handle snapshot are bit-reproducible.

Provides:
- Vector2, Handle: immutable value types
- default_field(...): the reference field  (-y + sin x, x + cos y)
- sample_field(...), field_sampler(...): perturbed sampling
- Transform, apply_transform(...), transform_grid(...): post-sampling rotate/scale/shear
"""
from __future__ import annotations
import math
import numpy as np
from dataclasses import dataclass
from typing import Callable, Sequence, Tuple


DOMAIN: Tuple[float, float, float, float] = (-2.0, 2.0, -2.0, 2.0)
HANDLE_SIGMA = 0.6


@dataclass(frozen=True)
class Vector2:
    x: float
    y: float


SampleFn = Callable[[float, float], Vector2]


@dataclass(frozen=True)
class Handle:
    """A draggable perturbation source: where it sits and what it imposes."""
    position: Vector2
    vector: Vector2

    @staticmethod
    def at(x: float, y: float, vx: float, vy: float) -> "Handle":
        return Handle(Vector2(float(x), float(y)), Vector2(float(vx), float(vy)))


def default_field(x: float, y: float) -> Vector2:
    return Vector2(-y + math.sin(x), x + math.cos(y))


def sample_field(
    x: float,
    y: float,
    handles: Sequence[Handle] = (),
    base: SampleFn = default_field,
    sigma: float = HANDLE_SIGMA,
) -> Vector2:
    """
    Evaluate base(x, y) and blend in every handle, in order.

    Args:
        x, y:    point in the continuous domain
        handles: snapshot of handles (read-only)
        base:    unperturbed field
        sigma:   Gaussian width of a handle's influence
    Returns:
        Vector2 field value
    """
    v = base(x, y)
    vx, vy = v.x, v.y
    two_s2 = 2.0 * sigma * sigma
    for h in handles:
        dxh = x - h.position.x
        dyh = y - h.position.y
        r2 = dxh * dxh + dyh * dyh
        w = math.exp(-r2 / two_s2)
        vx = vx * (1.0 - w) + h.vector.x * w
        vy = vy * (1.0 - w) + h.vector.y * w
    return Vector2(vx, vy)


def field_sampler(
    handles: Sequence[Handle] = (),
    base: SampleFn = default_field,
    sigma: float = HANDLE_SIGMA,
) -> SampleFn:
    """Bind a handle snapshot, returning a plain (x, y) -> Vector2 sampler."""
    snapshot = tuple(handles)

    def f(x: float, y: float) -> Vector2:
        return sample_field(x, y, snapshot, base=base, sigma=sigma)
    return f


# ------------------------
# Display transform
# ------------------------

@dataclass(frozen=True)
class Transform:
    """Rotation in degrees, uniform scale and x-shear applied to sampled vectors."""
    rotate: float = 0.0
    scale: float = 1.0
    shear: float = 0.0


def apply_transform(v: Vector2, transform: Transform) -> Vector2:
    """
    Shear and scale first, then rotate:
      t = (s vx + k vy, s vy),   out = R(theta) t
    """
    theta = math.radians(transform.rotate)
    c, s = math.cos(theta), math.sin(theta)
    tx = v.x * transform.scale + transform.shear * v.y
    ty = v.y * transform.scale
    return Vector2(tx * c - ty * s, tx * s + ty * c)


def transform_grid(u, v, transform: Transform):
    """apply_transform over whole component arrays at once."""
    u = np.asarray(u, dtype=float)
    v = np.asarray(v, dtype=float)
    theta = np.radians(transform.rotate)
    c, s = np.cos(theta), np.sin(theta)
    tx = u * transform.scale + transform.shear * v
    ty = v * transform.scale
    return tx * c - ty * s, tx * s + ty * c
