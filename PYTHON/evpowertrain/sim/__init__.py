"""Simulation core for the EV powertrain energy models."""

from .actuators import (
    Battery,
    BatteryConfig,
    BatteryState,
    ElectricMotor,
    MotorConfig,
    MotorState,
    MotorType,
)
from .driving_cycle import DrivingCycle, DrivingCyclePoint, interpolate_speed
from .simulator import (
    SimulationConfig,
    SimulationDataPoint,
    SimulationEngine,
    SimulationResults,
    run_cycle,
)
from .vehicle_dynamics import VehicleConfig, VehicleDynamics, VehicleState

__all__ = [
    "Battery",
    "BatteryConfig",
    "BatteryState",
    "DrivingCycle",
    "DrivingCyclePoint",
    "ElectricMotor",
    "MotorConfig",
    "MotorState",
    "MotorType",
    "SimulationConfig",
    "SimulationDataPoint",
    "SimulationEngine",
    "SimulationResults",
    "VehicleConfig",
    "VehicleDynamics",
    "VehicleState",
    "interpolate_speed",
    "run_cycle",
]
