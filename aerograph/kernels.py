"""
Stable Fluids kernels (after Jos Stam, "Real-Time Fluid Dynamics for Games").

Every function works in place on GridField buffers and leaves the ghost ring
consistent through set_bnd. Arrays are indexed [y, x] on the padded grid.
"""

from functools import lru_cache

import numpy as np

from .field import BoundaryKind, GridField, set_bnd

# Pressure solve coefficients: a=1, c=6 regardless of dt.
PRESSURE_A = 1.0
PRESSURE_C = 6.0


@lru_cache(maxsize=None)
def _checkerboard(n):
    """Red and black masks over the N x N interior ((x + y) even first)."""
    y, x = np.mgrid[1:n+1, 1:n+1]
    red = (x + y) % 2 == 0
    red.flags.writeable = False
    black = ~red
    black.flags.writeable = False
    return red, black


# ---- Linear solve ----
def lin_solve(kind, x: GridField, x0: GridField, a, c, iters):
    """
    Relax (I - a*L) x = x0 with red-black Gauss-Seidel sweeps.

    Each half-sweep updates one colour from neighbours of the other colour,
    so the black cells already see the red values of the same sweep.
    """
    g = x.grid
    inner = x.interior
    rhs = x0.interior
    inv_c = 1.0 / c
    for _ in range(iters):
        for colour in _checkerboard(x.n):
            relaxed = (
                rhs + a * (g[1:-1, 2:] + g[1:-1, :-2] + g[2:, 1:-1] + g[:-2, 1:-1])
            ) * inv_c
            inner[colour] = relaxed[colour]
        set_bnd(kind, x)


def diffuse(kind, x: GridField, x0: GridField, diff, dt, iters):
    n = x.n
    a = dt * diff * (n - 2) * (n - 2)
    lin_solve(kind, x, x0, a, 1 + 6 * a, iters)


# ---- Projection to make velocity (approximately) divergence-free ----
def divergence(u: GridField, v: GridField, out=None):
    """Negative half central-difference divergence on the interior, scaled by 1/N."""
    n = u.n
    ug, vg = u.grid, v.grid
    div = -0.5 * (
        ug[1:-1, 2:] - ug[1:-1, :-2] +
        vg[2:, 1:-1] - vg[:-2, 1:-1]
    ) / n
    if out is not None:
        out[...] = div
        return out
    return div


def project(u: GridField, v: GridField, p: GridField, div: GridField, iters):
    n = u.n
    divergence(u, v, out=div.interior)
    p.interior.fill(0.0)
    set_bnd(BoundaryKind.SCALAR, div)
    set_bnd(BoundaryKind.SCALAR, p)

    lin_solve(BoundaryKind.SCALAR, p, div, PRESSURE_A, PRESSURE_C, iters)

    pg = p.grid
    u.interior[...] -= 0.5 * n * (pg[1:-1, 2:] - pg[1:-1, :-2])
    v.interior[...] -= 0.5 * n * (pg[2:, 1:-1] - pg[:-2, 1:-1])
    set_bnd(BoundaryKind.VELOCITY_X, u)
    set_bnd(BoundaryKind.VELOCITY_Y, v)


# ---- Semi-Lagrangian advection ----
def advect(kind, d: GridField, d0: GridField, u: GridField, v: GridField, dt):
    n = d.n
    dt0 = dt * (n - 2)
    J, I = np.mgrid[1:n+1, 1:n+1]

    # Backtrace
    x = I - dt0 * u.interior
    y = J - dt0 * v.interior

    # Clamp so the 2x2 stencil stays on the padded grid
    np.clip(x, 0.5, n + 0.5, out=x)
    np.clip(y, 0.5, n + 0.5, out=y)

    i0 = np.floor(x).astype(np.intp)
    i1 = i0 + 1
    j0 = np.floor(y).astype(np.intp)
    j1 = j0 + 1

    s1 = x - i0
    s0 = 1.0 - s1
    t1 = y - j0
    t0 = 1.0 - t1

    # Bilinear sample from d0
    src = d0.grid
    d.interior[...] = (
        s0 * (t0 * src[j0, i0] + t1 * src[j1, i0]) +
        s1 * (t0 * src[j0, i1] + t1 * src[j1, i1])
    )
    set_bnd(kind, d)


# ---- Dissipation ----
def fade(d: GridField, rate):
    if rate > 0:
        np.multiply(d.data, 1.0 - rate, out=d.data)
        np.maximum(d.data, 0.0, out=d.data)
