"""Subsystem models driven by the simulation engine."""

from .aero import AeroConfig, AeroModel
from .battery import Battery, BatteryConfig, BatteryState
from .motor import ElectricMotor, MotorConfig, MotorState, MotorType
from .rolling_resistance import RollingResistance, RollingResistanceConfig

__all__ = [
    "AeroConfig",
    "AeroModel",
    "Battery",
    "BatteryConfig",
    "BatteryState",
    "ElectricMotor",
    "MotorConfig",
    "MotorState",
    "MotorType",
    "RollingResistance",
    "RollingResistanceConfig",
]
