"""
Aerograph: interactive smoke painting on a Stable Fluids grid.
"""

from .brush import Brush, ToolMode
from .config import DEFAULT_CONFIG, AppConfig, BrushConfig, DisplayConfig, SimulationConfig
from .errors import AerographError, InvalidConfiguration
from .field import BoundaryKind, GridField, set_bnd
from .solver import FluidSolver

__version__ = "0.1.0"

__all__ = [
    'AerographError',
    'AppConfig',
    'BoundaryKind',
    'Brush',
    'BrushConfig',
    'DEFAULT_CONFIG',
    'DisplayConfig',
    'FluidSolver',
    'GridField',
    'InvalidConfiguration',
    'SimulationConfig',
    'ToolMode',
    'set_bnd',
]
