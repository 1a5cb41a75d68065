"""
driver.py — Per-tick orchestration of the numerical core.

The driver is what a render loop calls once per frame. It does not schedule
anything itself: whoever owns the timer (an animation callback, a CLI loop,
a test) calls tick(). Between ticks it owns only the particle positions, the
random generator and the current handle snapshot.
"""
from __future__ import annotations
import logging
import numpy as np
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .advect import DEFAULT_DT, DEFAULT_STEPS, advect_particles, seed_points, trace_streamlines
from .diffops import compute_derivatives
from .field import DOMAIN, Transform, Vector2, field_sampler, transform_grid
from .grid import GridSpec, evaluate_grid
from .interaction import HandleSet, Viewport, rows_for_aspect
from .jacobian import JacobianResult, jacobian_at
from .poisson import DEFAULT_ITERATIONS, grad_phi, solve_poisson


Array = np.ndarray

MODES = ("arrows", "heat", "normalized")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ViewSettings:
    mode: str = "arrows"
    transform: Transform = field(default_factory=Transform)
    grid: int = 25
    show_div: bool = False
    show_curl: bool = False
    show_lap: bool = False
    particles: bool = False
    streamlines: bool = False
    zoom: float = 1.0
    n_particles: int = 100
    n_streamlines: int = 30
    dt: float = DEFAULT_DT
    streamline_steps: int = DEFAULT_STEPS

    def __post_init__(self):
        assert self.mode in MODES, f"mode must be one of {MODES}, got {self.mode!r}"
        assert self.grid >= 2, f"grid must be >= 2 columns, got {self.grid}"
        assert self.zoom > 0, "zoom must be positive"

    @property
    def wants_derivatives(self) -> bool:
        return self.show_div or self.show_curl or self.show_lap


@dataclass
class Frame:
    """Everything a renderer needs for one repaint."""
    tick: int
    spec: GridSpec
    u: Array
    v: Array
    handles: HandleSet
    div: Optional[Array] = None
    curl: Optional[Array] = None
    lap: Optional[Array] = None
    particles: Optional[Array] = None
    streamlines: Optional[List[Array]] = None

    @property
    def magnitude(self) -> Array:
        return np.hypot(self.u, self.v)


class FrameDriver:
    def __init__(
        self,
        settings: ViewSettings | None = None,
        handles: HandleSet | None = None,
        width: float = 800.0,
        height: float = 800.0,
        domain: Tuple[float, float, float, float] = DOMAIN,
        seed: int | None = None,
    ):
        self.settings = settings if settings is not None else ViewSettings()
        self.handles = handles if handles is not None else HandleSet.default()
        self.width = width
        self.height = height
        self.domain = domain
        self.rng = np.random.default_rng(seed)
        self.ticks = 0
        self.particles = seed_points(self.settings.n_particles, domain, self.rng)

    @property
    def sampler(self):
        return field_sampler(self.handles)

    @property
    def rows(self) -> int:
        return rows_for_aspect(self.settings.grid, self.width, self.height)

    @property
    def viewport(self) -> Viewport:
        return Viewport(self.width, self.height, zoom=self.settings.zoom, domain=self.domain)

    @property
    def window(self) -> Tuple[float, float, float, float]:
        """World rectangle sampled by the grid; particles still live in self.domain."""
        return self.viewport.window()

    def move_handle(self, index: int, position: Vector2) -> HandleSet:
        self.handles = self.handles.moved(index, position)
        logger.debug("Handle %d moved to (%.3f, %.3f), snapshot v%d",
                     index, position.x, position.y, self.handles.version)
        return self.handles

    def tick(self) -> Frame:
        s = self.settings
        # One snapshot for the whole pass.
        handles = self.handles
        f = field_sampler(handles)

        u, v, spec = evaluate_grid(f, s.grid, self.rows, self.window)
        tu, tv = transform_grid(u, v, s.transform)
        frame = Frame(tick=self.ticks, spec=spec, u=tu, v=tv, handles=handles)

        if s.wants_derivatives:
            d = compute_derivatives(u, v, spec.dx, spec.dy)
            frame.div, frame.curl, frame.lap = d["div"], d["curl"], d["lap"]

        if s.particles:
            self.particles = advect_particles(self.particles, f, dt=s.dt, domain=self.domain)
            frame.particles = self.particles.copy()

        if s.streamlines:
            starts = seed_points(s.n_streamlines, self.domain, self.rng)
            frame.streamlines = trace_streamlines(f, starts, steps=s.streamline_steps, dt=s.dt)

        self.ticks += 1
        return frame

    def probe(self, x: float, y: float) -> JacobianResult:
        result = jacobian_at(self.sampler, x, y)
        logger.debug("Probe at (%.3f, %.3f): eig=(%.3f, %.3f)", x, y, result.eig_a, result.eig_b)
        return result

    def potential(self, iterations: int = DEFAULT_ITERATIONS) -> Tuple[Array, Array, Array]:
        """
        Solve for phi from the divergence of the current (untransformed) field.
        Returns:
            phi, gx, gy
        """
        u, v, spec = evaluate_grid(self.sampler, self.settings.grid, self.rows, self.window)
        div = compute_derivatives(u, v, spec.dx, spec.dy)["div"]
        logger.info("Solving Poisson on %dx%d grid, %d iterations", spec.rows, spec.cols, iterations)
        phi = solve_poisson(div, spec.dx, spec.dy, iterations=iterations)
        gx, gy = grad_phi(phi, spec.dx, spec.dy)
        return phi, gx, gy
