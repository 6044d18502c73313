"""Electric traction motor with a banded efficiency map."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from ...errors import ConfigurationError
from ..validation import coerce_finite

AMBIENT_TEMPERATURE = 25.0  # [degC]
KW_RPM_TO_NM = 9549.3
STALL_RPM = 1.0
LOSS_HEATING_GAIN = 0.01
COOLING_PER_CALL = 0.2  # [degC]
MIN_EFFICIENCY = 0.5
MAX_EFFICIENCY = 0.98


class MotorType(str, Enum):
    BLDC = "BLDC"
    PMSM = "PMSM"


@dataclass(frozen=True)
class MotorConfig:
    max_power: float  # [kW]
    max_torque: float  # [Nm]
    max_speed: float  # [rpm]
    efficiency: float
    motor_type: MotorType = MotorType.BLDC

    def __post_init__(self) -> None:  # type: ignore[override]
        if not isinstance(self.motor_type, MotorType):
            try:
                object.__setattr__(self, "motor_type", MotorType(str(self.motor_type).upper()))
            except ValueError:
                raise ConfigurationError(f"unknown motor_type '{self.motor_type}'") from None
        coerce_finite(self, "max_power", "max_torque", "max_speed", "efficiency")
        if self.max_power <= 0.0:
            raise ConfigurationError("max_power must be positive")
        if self.max_torque <= 0.0:
            raise ConfigurationError("max_torque must be positive")
        if self.max_speed <= 0.0:
            raise ConfigurationError("max_speed must be positive")
        if not 0.0 < self.efficiency <= 1.0:
            raise ConfigurationError("efficiency must be within (0, 1]")


@dataclass
class MotorState:
    torque: float  # [Nm]
    speed: float  # [rpm]
    power: float  # [kW]
    efficiency: float
    temperature: float  # [degC]


class ElectricMotor:
    """Maps a power request and vehicle speed to shaft torque and power."""

    def __init__(self, config: MotorConfig) -> None:
        self.config = config
        self._state = self._initial_state()

    def _initial_state(self) -> MotorState:
        return MotorState(
            torque=0.0,
            speed=0.0,
            power=0.0,
            efficiency=float(self.config.efficiency),
            temperature=AMBIENT_TEMPERATURE,
        )

    @property
    def state(self) -> MotorState:
        return replace(self._state)

    def reset(self) -> None:
        self._state = self._initial_state()

    # ------------------------------------------------------------------
    @staticmethod
    def shaft_speed(vehicle_speed: float) -> float:
        """Vehicle speed [km/h] to an equivalent shaft speed [rpm]."""

        return vehicle_speed * 1000.0 / 60.0

    def available_torque(self, requested_power: float, rpm: float) -> float:
        if rpm < STALL_RPM:
            return self.config.max_torque
        power_limit = min(self.config.max_power, requested_power)
        return min(self.config.max_torque, power_limit * KW_RPM_TO_NM / rpm)

    def calculate_efficiency(self, rpm: float, torque: float) -> float:
        speed_ratio = rpm / self.config.max_speed
        torque_ratio = torque / self.config.max_torque

        efficiency = self.config.efficiency
        if speed_ratio < 0.1 or speed_ratio > 0.9:
            efficiency *= 0.85

        if torque_ratio < 0.2:
            efficiency *= 0.8
        elif torque_ratio > 0.8:
            efficiency *= 0.92

        return max(MIN_EFFICIENCY, min(MAX_EFFICIENCY, efficiency))

    def calculate_torque(self, requested_power: float, vehicle_speed: float) -> MotorState:
        """Update torque, power, efficiency and temperature for one call."""

        rpm = self.shaft_speed(vehicle_speed)
        state = self._state
        state.speed = rpm
        state.torque = self.available_torque(requested_power, rpm)
        state.power = state.torque * rpm / KW_RPM_TO_NM if rpm > 0.0 else 0.0
        state.efficiency = self.calculate_efficiency(rpm, state.torque)

        # Cooling is per call, independent of the time step.
        state.temperature += abs(state.power * (1.0 - state.efficiency)) * LOSS_HEATING_GAIN
        state.temperature = max(AMBIENT_TEMPERATURE, state.temperature - COOLING_PER_CALL)

        return self.state


__all__ = ["MotorType", "MotorConfig", "MotorState", "ElectricMotor"]
