"""Longitudinal point-mass vehicle dynamics."""
from __future__ import annotations

from dataclasses import dataclass, replace

from ..errors import ConfigurationError
from .validation import coerce_finite
from .actuators.aero import AeroConfig, AeroModel
from .actuators.rolling_resistance import RollingResistance, RollingResistanceConfig

KMH_PER_MS = 3.6
SPEED_LOCK_BAND = 0.5  # [m/s]


@dataclass(frozen=True)
class VehicleConfig:
    mass: float  # [kg]
    frontal_area: float  # [m^2]
    drag_coefficient: float
    rolling_resistance_coeff: float
    wheel_radius: float  # [m]
    regen_efficiency: float

    def __post_init__(self) -> None:  # type: ignore[override]
        coerce_finite(
            self,
            "mass",
            "frontal_area",
            "drag_coefficient",
            "rolling_resistance_coeff",
            "wheel_radius",
            "regen_efficiency",
        )
        if self.mass <= 0.0:
            raise ConfigurationError("mass must be positive")
        if self.wheel_radius <= 0.0:
            raise ConfigurationError("wheel_radius must be positive")
        if not 0.0 < self.regen_efficiency <= 1.0:
            raise ConfigurationError("regen_efficiency must be within (0, 1]")
        # Remaining fields are validated by the force models.
        self.aero_config()
        self.rolling_config()

    def aero_config(self) -> AeroConfig:
        return AeroConfig(drag_coefficient=self.drag_coefficient, frontal_area=self.frontal_area)

    def rolling_config(self) -> RollingResistanceConfig:
        return RollingResistanceConfig(c_rr=self.rolling_resistance_coeff)


@dataclass
class VehicleState:
    speed: float  # [km/h]
    acceleration: float  # [m/s^2]
    position: float  # [m]
    rolling_resistance: float  # [N]
    aero_drag: float  # [N]
    total_resistance: float  # [N]


class VehicleDynamics:
    """Integrates speed and position from wheel torque and road loads."""

    def __init__(self, config: VehicleConfig) -> None:
        self.config = config
        self.aero = AeroModel(config.aero_config())
        self.rolling = RollingResistance(config.rolling_config())
        self._state = self._initial_state()

    @staticmethod
    def _initial_state() -> VehicleState:
        return VehicleState(
            speed=0.0,
            acceleration=0.0,
            position=0.0,
            rolling_resistance=0.0,
            aero_drag=0.0,
            total_resistance=0.0,
        )

    @property
    def state(self) -> VehicleState:
        return replace(self._state)

    def reset(self) -> None:
        self._state = self._initial_state()

    # ------------------------------------------------------------------
    def update_dynamics(
        self,
        motor_torque: float,
        target_speed: float,
        dt: float,
        is_regenerating: bool,
    ) -> VehicleState:
        """Advance one step; ``motor_torque`` is signed, speeds are km/h."""

        state = self._state
        speed_ms = state.speed / KMH_PER_MS

        state.rolling_resistance = self.rolling.force(self.config.mass)
        state.aero_drag = self.aero.drag_force(speed_ms)
        state.total_resistance = state.rolling_resistance + state.aero_drag

        wheel_force = motor_torque / self.config.wheel_radius
        if is_regenerating:
            net_force = -state.total_resistance - abs(wheel_force) * self.config.regen_efficiency
        else:
            net_force = wheel_force - state.total_resistance

        state.acceleration = net_force / self.config.mass

        target_ms = target_speed / KMH_PER_MS
        if abs(target_ms - speed_ms) < SPEED_LOCK_BAND:
            # Speed lock inside the deadband.
            state.speed = max(0.0, target_speed)
            state.acceleration = 0.0
        else:
            new_speed_ms = speed_ms + state.acceleration * dt
            state.speed = max(0.0, new_speed_ms) * KMH_PER_MS
        # Rectangle rule on the speed held at the start of the step.
        state.position += speed_ms * dt

        return self.state


__all__ = ["VehicleConfig", "VehicleState", "VehicleDynamics"]
