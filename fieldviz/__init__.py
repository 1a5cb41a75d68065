"""Expose the main public interface for the fieldviz package."""

from .field import Vector2, Handle, Transform, default_field, sample_field, field_sampler, apply_transform
from .grid import GridSpec, evaluate_grid
from .diffops import compute_derivatives
from .jacobian import JacobianResult, jacobian_at
from .poisson import solve_poisson, grad_phi

__all__ = [
    "Vector2", "Handle", "Transform", "default_field", "sample_field", "field_sampler",
    "apply_transform", "GridSpec", "evaluate_grid", "compute_derivatives",
    "JacobianResult", "jacobian_at", "solve_poisson", "grad_phi",
]

import logging as _logging

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
