"""Fixed-step simulation engine coupling battery, motor and vehicle models."""
from __future__ import annotations

from dataclasses import asdict, dataclass
import logging
from typing import Dict, List, Optional, Tuple

from ..errors import ConfigurationError
from .validation import coerce_finite
from .actuators.battery import Battery, BatteryConfig
from .actuators.motor import ElectricMotor, MotorConfig
from .controllers.speed_tracking import SpeedTrackingController
from .driving_cycle import DrivingCycle
from .vehicle_dynamics import VehicleConfig, VehicleDynamics

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationConfig:
    battery: BatteryConfig
    motor: MotorConfig
    vehicle: VehicleConfig
    driving_cycle: DrivingCycle
    time_step: float = 0.1  # [s]

    def __post_init__(self) -> None:  # type: ignore[override]
        if isinstance(self.battery, dict):
            object.__setattr__(self, "battery", BatteryConfig(**self.battery))
        if isinstance(self.motor, dict):
            object.__setattr__(self, "motor", MotorConfig(**self.motor))
        if isinstance(self.vehicle, dict):
            object.__setattr__(self, "vehicle", VehicleConfig(**self.vehicle))
        if not isinstance(self.driving_cycle, DrivingCycle):
            object.__setattr__(self, "driving_cycle", DrivingCycle(self.driving_cycle))
        coerce_finite(self, "time_step")
        if self.time_step <= 0.0:
            raise ConfigurationError("time_step must be positive")


@dataclass(frozen=True)
class SimulationDataPoint:
    time: float  # [s]
    speed: float  # [km/h]
    target_speed: float  # [km/h]
    acceleration: float  # [m/s^2]
    motor_torque: float  # [Nm]
    motor_power: float  # [kW]
    motor_efficiency: float
    battery_soc: float  # [%]
    battery_current: float  # [A]
    battery_power: float
    energy_flow: float  # [kW], positive = drawn from the battery
    is_regenerating: bool
    distance: float  # [km]

    def as_dict(self) -> Dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class SimulationResults:
    total_distance: float  # [km]
    energy_consumed: float  # [kWh]
    energy_recovered: float  # [kWh]
    final_soc: float  # [%]
    avg_efficiency: float  # [Wh/km]
    regeneration_percentage: float  # [%]

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


class SimulationEngine:
    """Advances the coupled models by one ``time_step`` per :meth:`step` call.

    The engine has no notion of completion; callers compare
    :attr:`current_time` with ``config.driving_cycle.end_time``.
    """

    def __init__(self, config: SimulationConfig) -> None:
        self.config = config
        self.battery = Battery(config.battery)
        self.motor = ElectricMotor(config.motor)
        self.vehicle = VehicleDynamics(config.vehicle)
        self.controller = SpeedTrackingController(config.motor, config.vehicle)

        self._data_points: List[SimulationDataPoint] = []
        self._time = 0.0
        self._energy_consumed = 0.0
        self._energy_recovered = 0.0
        LOGGER.info(
            "SimulationEngine | cycle=%s end=%.1fs dt=%.3fs",
            config.driving_cycle.name,
            config.driving_cycle.end_time,
            config.time_step,
        )

    # ------------------------------------------------------------------
    @property
    def current_time(self) -> float:
        return self._time

    @property
    def data_points(self) -> Tuple[SimulationDataPoint, ...]:
        return tuple(self._data_points)

    @property
    def last_data_point(self) -> Optional[SimulationDataPoint]:
        return self._data_points[-1] if self._data_points else None

    @property
    def total_distance(self) -> float:
        return self.vehicle.state.position / 1000.0

    @property
    def total_energy_consumed(self) -> float:
        return self._energy_consumed

    @property
    def total_energy_recovered(self) -> float:
        return self._energy_recovered

    # ------------------------------------------------------------------
    def reset(self) -> None:
        self.battery.reset()
        self.motor.reset()
        self.vehicle.reset()
        self._data_points = []
        self._time = 0.0
        self._energy_consumed = 0.0
        self._energy_recovered = 0.0
        LOGGER.info("SimulationEngine | reset")

    def step(self) -> SimulationDataPoint:
        dt = self.config.time_step
        target_speed = self.config.driving_cycle.interpolate(self._time)
        vehicle_state = self.vehicle.state
        current_speed = vehicle_state.speed

        request = self.controller.step(target_speed, current_speed, vehicle_state.total_resistance)
        motor_state = self.motor.calculate_torque(abs(request.requested_power), current_speed)

        if request.is_regenerating:
            power_demand = request.requested_power * self.config.vehicle.regen_efficiency
            wheel_torque = -motor_state.torque
        else:
            power_demand = motor_state.power / motor_state.efficiency
            wheel_torque = motor_state.torque

        battery_state = self.battery.update_state(power_demand, dt)
        vehicle_state = self.vehicle.update_dynamics(wheel_torque, target_speed, dt, request.is_regenerating)

        if power_demand > 0.0:
            self._energy_consumed += power_demand * dt / 3600.0
        else:
            self._energy_recovered += abs(power_demand) * dt / 3600.0

        point = SimulationDataPoint(
            time=self._time,
            speed=vehicle_state.speed,
            target_speed=target_speed,
            acceleration=vehicle_state.acceleration,
            motor_torque=motor_state.torque,
            motor_power=motor_state.power,
            motor_efficiency=motor_state.efficiency,
            battery_soc=battery_state.soc,
            battery_current=battery_state.current,
            battery_power=battery_state.power,
            energy_flow=power_demand,
            is_regenerating=request.is_regenerating,
            distance=vehicle_state.position / 1000.0,
        )
        self._data_points.append(point)
        self._time += dt

        LOGGER.debug(
            "Tick | t=%.2fs v=%.2f/%.2f km/h P=%.3f kW soc=%.3f%%",
            point.time,
            point.speed,
            point.target_speed,
            point.energy_flow,
            point.battery_soc,
        )
        return point

    def results(self) -> SimulationResults:
        distance = self.total_distance
        consumed = self._energy_consumed
        recovered = self._energy_recovered
        return SimulationResults(
            total_distance=distance,
            energy_consumed=consumed,
            energy_recovered=recovered,
            final_soc=self.battery.state.soc,
            avg_efficiency=consumed / distance * 1000.0 if distance > 0.0 else 0.0,
            regeneration_percentage=recovered / consumed * 100.0 if consumed > 0.0 else 0.0,
        )


def run_cycle(engine: SimulationEngine, max_steps: Optional[int] = None) -> SimulationResults:
    """Step ``engine`` until the end of its driving cycle and summarise."""

    end_time = engine.config.driving_cycle.end_time
    steps = 0
    while engine.current_time < end_time:
        if max_steps is not None and steps >= max_steps:
            break
        engine.step()
        steps += 1
    results = engine.results()
    LOGGER.info(
        "Run complete | steps=%d distance=%.3f km consumed=%.4f kWh recovered=%.4f kWh soc=%.2f%%",
        steps,
        results.total_distance,
        results.energy_consumed,
        results.energy_recovered,
        results.final_soc,
    )
    return results


__all__ = [
    "SimulationConfig",
    "SimulationDataPoint",
    "SimulationResults",
    "SimulationEngine",
    "run_cycle",
]
