import math
from dataclasses import dataclass, field, replace

from .errors import InvalidConfiguration


@dataclass
class SimulationConfig:
    resolution: int = 128     # grid size (inner cells are N x N)
    viscosity: float = 1e-5   # fluid thickness
    diffusion: float = 0.0    # 0 keeps smoke crisp instead of thinning out
    fade_rate: float = 0.0    # fraction of density lost per tick, 0 keeps smoke
    iterations: int = 10      # relaxation sweeps per solve
    dt: float = 0.1

    def validate(self):
        if isinstance(self.resolution, bool) or not isinstance(self.resolution, int) or self.resolution < 1:
            raise InvalidConfiguration(f"resolution must be a positive integer, got {self.resolution!r}")
        for name in ("viscosity", "diffusion", "dt"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise InvalidConfiguration(f"{name} must be finite and non-negative, got {value!r}")
        if isinstance(self.iterations, bool) or not isinstance(self.iterations, int) or self.iterations < 0:
            raise InvalidConfiguration(f"iterations must be a non-negative integer, got {self.iterations!r}")
        if not 0.0 <= self.fade_rate <= 1.0:
            raise InvalidConfiguration(f"fade_rate must be within [0, 1], got {self.fade_rate!r}")
        return self


@dataclass
class BrushConfig:
    """How pointer drags turn into impulses. Governs feel, not numerics."""
    radius: int = 4
    force_multiplier: float = 5.0
    force_clamp: float = 50.0       # per-axis cap on the injected velocity
    density_deposit: float = 150.0  # added to every cell under a smoke stroke
    min_radius: int = 1
    max_radius: int = 64

    def validate(self):
        if not self.min_radius <= self.radius <= self.max_radius:
            raise InvalidConfiguration(
                f"brush radius {self.radius} outside [{self.min_radius}, {self.max_radius}]"
            )
        if self.force_clamp < 0:
            raise InvalidConfiguration(f"force_clamp must be non-negative, got {self.force_clamp!r}")
        return self


@dataclass
class DisplayConfig:
    window: int = 800
    fps: int = 60
    background: tuple = (0, 0, 0)
    smoke_color: tuple = (255, 255, 255)


@dataclass
class AppConfig:
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    brush: BrushConfig = field(default_factory=BrushConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)

    def validate(self):
        self.simulation.validate()
        self.brush.validate()
        return self

    def with_overrides(self, **overrides):
        """Copy with simulation fields replaced; None values are ignored."""
        sim = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, simulation=replace(self.simulation, **sim))


DEFAULT_CONFIG = AppConfig()
