"""
interaction.py — Handle snapshots and the screen <-> world viewport mapping.

The pointer layer never mutates handles in place: a drag produces a new
HandleSet with a bumped version, and the sampler only ever sees a snapshot.
"""
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .field import DOMAIN, Handle, Vector2


DEFAULT_HANDLES: Tuple[Handle, ...] = (
    Handle.at(-1.2, -0.8, 1.0, 0.0),
    Handle.at(0.8, 1.0, -1.0, -0.5),
)


@dataclass(frozen=True)
class HandleSet:
    handles: Tuple[Handle, ...]
    version: int = 0

    def __post_init__(self):
        assert isinstance(self.handles, tuple), "handles must be a tuple snapshot"

    @staticmethod
    def default() -> "HandleSet":
        return HandleSet(DEFAULT_HANDLES)

    def __len__(self):
        return len(self.handles)

    def __iter__(self):
        return iter(self.handles)

    def __getitem__(self, index: int) -> Handle:
        return self.handles[index]

    def moved(self, index: int, position: Vector2) -> "HandleSet":
        """New snapshot with handle `index` relocated; its vector is kept."""
        assert 0 <= index < len(self.handles), f"no handle at index {index}"
        hs = list(self.handles)
        hs[index] = replace(hs[index], position=Vector2(float(position.x), float(position.y)))
        return HandleSet(tuple(hs), self.version + 1)

    def pick(self, point: Vector2, radius: float) -> Optional[int]:
        """Index of the first handle strictly within `radius` of point, else None."""
        r2 = radius * radius
        for i, h in enumerate(self.handles):
            dx = h.position.x - point.x
            dy = h.position.y - point.y
            if dx * dx + dy * dy < r2:
                return i
        return None


@dataclass(frozen=True)
class Viewport:
    """
    Pixel canvas looking at the domain. zoom > 1 shows more of the plane.
      s = ((x - xmin)/(xmax - xmin) - 0.5)/zoom + 0.5   (then times width)
    """
    width: float
    height: float
    zoom: float = 1.0
    domain: Tuple[float, float, float, float] = DOMAIN

    def __post_init__(self):
        assert self.width > 0 and self.height > 0, "viewport must have positive size"
        assert self.zoom > 0, "zoom must be positive"

    def world_to_screen(self, x: float, y: float) -> Tuple[float, float]:
        xmin, xmax, ymin, ymax = self.domain
        sx = ((x - xmin) / (xmax - xmin) - 0.5) / self.zoom + 0.5
        sy = ((y - ymin) / (ymax - ymin) - 0.5) / self.zoom + 0.5
        return sx * self.width, sy * self.height

    def screen_to_world(self, sx: float, sy: float) -> Tuple[float, float]:
        xmin, xmax, ymin, ymax = self.domain
        nx = sx / self.width
        ny = sy / self.height
        x = ((nx - 0.5) * self.zoom + 0.5) * (xmax - xmin) + xmin
        y = ((ny - 0.5) * self.zoom + 0.5) * (ymax - ymin) + ymin
        return x, y

    def window(self) -> Tuple[float, float, float, float]:
        """World rectangle (xmin, xmax, ymin, ymax) covered by the canvas at this zoom."""
        x0, y0 = self.screen_to_world(0.0, 0.0)
        x1, y1 = self.screen_to_world(self.width, self.height)
        return x0, x1, y0, y1


def rows_for_aspect(cols: int, width: float, height: float) -> int:
    return max(8, int(round(cols * height / width)))
