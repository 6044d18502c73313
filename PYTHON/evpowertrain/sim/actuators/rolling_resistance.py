"""Rolling resistance calculations."""
from __future__ import annotations

from dataclasses import dataclass

from ...errors import ConfigurationError
from ..validation import coerce_finite

GRAVITY = 9.81  # [m/s^2]


@dataclass(frozen=True)
class RollingResistanceConfig:
    c_rr: float

    def __post_init__(self) -> None:  # type: ignore[override]
        coerce_finite(self, "c_rr")
        if self.c_rr <= 0.0:
            raise ConfigurationError("rolling resistance coefficient must be positive")


class RollingResistance:
    def __init__(self, config: RollingResistanceConfig, gravity: float = GRAVITY) -> None:
        self.config = config
        self.gravity = gravity

    def force(self, mass: float) -> float:
        # Applied at every speed, standstill included.
        return self.config.c_rr * mass * self.gravity
