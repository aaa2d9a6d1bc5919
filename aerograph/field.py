"""
Padded grid storage and boundary conditions.

A field holds (N+2) x (N+2) floats in one flat buffer: N interior cells per
axis plus a ring of ghost cells. Cell (x, y) lives at offset x + (N+2)*y.
`grid` is a 2-D [y, x] view of the same memory for the vectorised kernels.
"""

from enum import IntEnum

import numpy as np


class BoundaryKind(IntEnum):
    SCALAR = 0
    VELOCITY_X = 1
    VELOCITY_Y = 2


def clamp(x, lo, hi):
    return lo if x < lo else hi if x > hi else x


class GridField:
    def __init__(self, n: int, dtype=np.float32):
        self.n = n
        self.data = np.zeros((n + 2) * (n + 2), dtype=dtype)
        self.grid = self.data.reshape(n + 2, n + 2)

    def __len__(self):
        return self.data.size

    def index(self, x: int, y: int) -> int:
        """Offset of (x, y) after clamping both coordinates into [0, N+1]."""
        edge = self.n + 1
        return int(clamp(x, 0, edge)) + (self.n + 2) * int(clamp(y, 0, edge))

    def get(self, x: int, y: int) -> float:
        return float(self.data[self.index(x, y)])

    def set(self, x: int, y: int, value: float):
        self.data[self.index(x, y)] = value

    def add(self, x: int, y: int, amount: float):
        self.data[self.index(x, y)] += amount

    def fill(self, value: float = 0.0):
        self.data.fill(value)

    @property
    def interior(self):
        return self.grid[1:-1, 1:-1]


# ---- Boundary conditions ----
def set_bnd(kind, field: GridField):
    """
    Recompute the ghost ring from the interior.

    Edge cells copy their interior neighbour. A velocity component is mirrored
    (negated) on the walls normal to it so nothing flows through the box.
    Corners average their two adjacent edge cells.
    """
    x = field.grid
    n = field.n

    # Top/bottom rows (y = 0 and y = N+1)
    if kind == BoundaryKind.VELOCITY_Y:
        x[0, 1:n+1] = -x[1, 1:n+1]
        x[n+1, 1:n+1] = -x[n, 1:n+1]
    else:
        x[0, 1:n+1] = x[1, 1:n+1]
        x[n+1, 1:n+1] = x[n, 1:n+1]

    # Left/right columns (x = 0 and x = N+1)
    if kind == BoundaryKind.VELOCITY_X:
        x[1:n+1, 0] = -x[1:n+1, 1]
        x[1:n+1, n+1] = -x[1:n+1, n]
    else:
        x[1:n+1, 0] = x[1:n+1, 1]
        x[1:n+1, n+1] = x[1:n+1, n]

    # Corners
    x[0, 0] = 0.5 * (x[0, 1] + x[1, 0])
    x[n+1, 0] = 0.5 * (x[n+1, 1] + x[n, 0])
    x[0, n+1] = 0.5 * (x[0, n] + x[1, n+1])
    x[n+1, n+1] = 0.5 * (x[n+1, n] + x[n, n+1])
