"""Drive/regenerate decision and power request for one tick."""
from __future__ import annotations

from dataclasses import dataclass
import logging

from ..actuators.motor import MotorConfig
from ..vehicle_dynamics import KMH_PER_MS, VehicleConfig

LOGGER = logging.getLogger(__name__)

REGEN_SPEED_ERROR = -1.0  # [km/h]
REGEN_MIN_SPEED = 5.0  # [km/h]
REGEN_POWER_FRACTION = 0.7
REGEN_GAIN = 2.0
DRIVE_GAIN = 5.0


@dataclass(frozen=True)
class PowerRequest:
    requested_power: float  # [kW], negative when braking
    is_regenerating: bool
    speed_error: float  # [km/h]


class SpeedTrackingController:
    """Proportional speed tracker with road-load feed-forward.

    The mode is chosen from the current error alone; nothing is carried
    between calls.
    """

    def __init__(self, motor_cfg: MotorConfig, vehicle_cfg: VehicleConfig) -> None:
        self.motor_cfg = motor_cfg
        self.vehicle_cfg = vehicle_cfg

    def step(self, target_speed: float, current_speed: float, total_resistance: float) -> PowerRequest:
        speed_error = target_speed - current_speed
        is_regenerating = speed_error < REGEN_SPEED_ERROR and current_speed > REGEN_MIN_SPEED
        mass = self.vehicle_cfg.mass
        max_power = self.motor_cfg.max_power

        if is_regenerating:
            requested_power = -min(REGEN_POWER_FRACTION * max_power, abs(speed_error) * mass * REGEN_GAIN)
        else:
            feed_forward = total_resistance * current_speed / KMH_PER_MS / 1000.0
            requested_power = max(0.0, speed_error * mass * DRIVE_GAIN + feed_forward)
            requested_power = min(requested_power, max_power)

        LOGGER.debug(
            "SpeedCtrl | target=%.2f km/h v=%.2f km/h err=%.2f regen=%s -> P=%.3f kW",
            target_speed,
            current_speed,
            speed_error,
            is_regenerating,
            requested_power,
        )

        return PowerRequest(
            requested_power=requested_power,
            is_regenerating=is_regenerating,
            speed_error=speed_error,
        )
