"""Aerodynamic drag helper."""
from __future__ import annotations

from dataclasses import dataclass

from ...errors import ConfigurationError
from ..validation import coerce_finite

AIR_DENSITY = 1.225  # [kg/m^3]


@dataclass(frozen=True)
class AeroConfig:
    drag_coefficient: float
    frontal_area: float  # [m^2]
    air_density: float = AIR_DENSITY

    def __post_init__(self) -> None:  # type: ignore[override]
        coerce_finite(self, "drag_coefficient", "frontal_area", "air_density")
        if self.drag_coefficient <= 0.0:
            raise ConfigurationError("drag_coefficient must be positive")
        if self.frontal_area <= 0.0:
            raise ConfigurationError("frontal_area must be positive")


class AeroModel:
    def __init__(self, config: AeroConfig) -> None:
        self.config = config

    def drag_force(self, speed: float) -> float:
        """Drag magnitude [N] at ``speed`` [m/s]."""

        cfg = self.config
        return 0.5 * cfg.air_density * cfg.drag_coefficient * cfg.frontal_area * speed * speed
