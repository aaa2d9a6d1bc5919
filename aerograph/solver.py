import logging
import math
from numbers import Integral, Real

import numpy as np

from . import kernels
from .errors import InvalidConfiguration
from .field import BoundaryKind, GridField

logger = logging.getLogger(__name__)


def _check_rate(name, value):
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidConfiguration(f"{name} must be a real number, got {value!r}")
    if not math.isfinite(value) or value < 0:
        raise InvalidConfiguration(f"{name} must be finite and non-negative, got {value!r}")


class FluidSolver:
    """
    2-D Stable Fluids solver on an N x N grid with one ghost cell per side.

    Owns six buffers of (N+2)^2 floats: density and its work buffer `s`,
    velocity components Vx, Vy and their work buffers Vx0, Vy0. A tick
    (`step`) runs to completion before returning; callers read the density
    between ticks. Nothing here is shared between instances.
    """

    def __init__(self, size, diffusion, viscosity, dt):
        if isinstance(size, bool) or not isinstance(size, Integral) or size < 1:
            raise InvalidConfiguration(f"grid resolution must be a positive integer, got {size!r}")
        _check_rate("diffusion", diffusion)
        _check_rate("viscosity", viscosity)
        _check_rate("dt", dt)

        self.size = int(size)
        self.diff = float(diffusion)
        self.visc = float(viscosity)
        self.dt = float(dt)

        N = self.size
        self.s = GridField(N)
        self.density = GridField(N)
        self.Vx = GridField(N)
        self.Vy = GridField(N)
        self.Vx0 = GridField(N)
        self.Vy0 = GridField(N)

        logger.debug(
            "FluidSolver N=%d diff=%g visc=%g dt=%g (%d cells per buffer)",
            N, self.diff, self.visc, self.dt, len(self.density),
        )

    @classmethod
    def from_config(cls, config):
        config.validate()
        return cls(config.resolution, config.diffusion, config.viscosity, config.dt)

    @property
    def buffers(self):
        return (self.s, self.density, self.Vx, self.Vy, self.Vx0, self.Vy0)

    def IX(self, x, y):
        return self.density.index(x, y)

    # ---- External sources ----
    def add_density(self, x, y, amount):
        self.density.add(x, y, amount)

    def add_velocity(self, x, y, amount_x, amount_y):
        i = self.IX(x, y)
        self.Vx.data[i] += amount_x
        self.Vy.data[i] += amount_y

    def erase(self, x, y):
        self.density.set(x, y, 0.0)

    def reset(self):
        for buf in self.buffers:
            buf.fill(0.0)
        logger.info("Cleared fluid state")

    # ---- Steps ----
    def step(self, iters, fade_rate=0.0):
        dt = self.dt
        Vx, Vy, Vx0, Vy0 = self.Vx, self.Vy, self.Vx0, self.Vy0

        kernels.diffuse(BoundaryKind.VELOCITY_X, Vx0, Vx, self.visc, dt, iters)
        kernels.diffuse(BoundaryKind.VELOCITY_Y, Vy0, Vy, self.visc, dt, iters)

        kernels.project(Vx0, Vy0, Vx, Vy, iters)

        kernels.advect(BoundaryKind.VELOCITY_X, Vx, Vx0, Vx0, Vy0, dt)
        kernels.advect(BoundaryKind.VELOCITY_Y, Vy, Vy0, Vx0, Vy0, dt)

        # project again
        kernels.project(Vx, Vy, Vx0, Vy0, iters)

        kernels.diffuse(BoundaryKind.SCALAR, self.s, self.density, self.diff, dt, iters)
        kernels.advect(BoundaryKind.SCALAR, self.density, self.s, Vx, Vy, dt)

        kernels.fade(self.density, fade_rate)

    # ---- Read access ----
    def density_view(self):
        """Read-only [y, x] view of the padded density grid."""
        view = self.density.grid.view()
        view.flags.writeable = False
        return view

    def total_density(self):
        return float(np.sum(self.density.interior, dtype=np.float64))

    def divergence(self):
        return kernels.divergence(self.Vx, self.Vy)

    def mean_abs_divergence(self):
        return float(np.mean(np.abs(self.divergence()), dtype=np.float64))
