"""
Pointer strokes to solver impulses.

A drag from `last` to `current` (continuous grid coordinates) pushes the
fluid along the drag over a disc of cells around the pointer. The tool then
decides what happens to density under the disc.
"""

import logging
import math
from enum import Enum

from .config import BrushConfig
from .field import clamp

logger = logging.getLogger(__name__)


class ToolMode(Enum):
    SMOKE = "smoke"    # velocity + density
    WIND = "wind"      # velocity only
    ERASER = "eraser"  # velocity, density removed


def screen_to_grid(px, py, width, height, n):
    """Map a pixel position on a width x height surface to grid space [0, N+2)."""
    x = px / max(width, 1) * (n + 2)
    y = py / max(height, 1) * (n + 2)
    return x, y


class Brush:
    def __init__(self, config: BrushConfig = None):
        self.config = (config or BrushConfig()).validate()
        self.radius = self.config.radius

    def resize(self, delta):
        cfg = self.config
        self.radius = clamp(self.radius + delta, cfg.min_radius, cfg.max_radius)
        return self.radius

    def force(self, last, current):
        cfg = self.config
        lim = cfg.force_clamp
        fx = clamp((current[0] - last[0]) * cfg.force_multiplier, -lim, lim)
        fy = clamp((current[1] - last[1]) * cfg.force_multiplier, -lim, lim)
        return fx, fy

    def offsets(self):
        r = self.radius
        r2 = r * r
        for dy in range(-r, r + 1):
            for dx in range(-r, r + 1):
                if dx * dx + dy * dy <= r2:
                    yield dx, dy

    def stroke(self, solver, last, current, mode=ToolMode.SMOKE):
        """Apply one drag segment to `solver`; returns the number of cells touched."""
        N = solver.size
        # Keep the centre on the interior so strokes near the edge still land
        mx = clamp(math.floor(current[0]), 1, N)
        my = clamp(math.floor(current[1]), 1, N)
        fx, fy = self.force(last, current)

        touched = 0
        for dx, dy in self.offsets():
            x, y = mx + dx, my + dy
            if not (0 < x <= N and 0 < y <= N):
                continue
            solver.add_velocity(x, y, fx, fy)
            if mode is ToolMode.SMOKE:
                solver.add_density(x, y, self.config.density_deposit)
            elif mode is ToolMode.ERASER:
                solver.erase(x, y)
            touched += 1
        return touched
