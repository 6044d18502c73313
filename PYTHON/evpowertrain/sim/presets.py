"""Vehicle presets and canonical driving cycles stored as YAML."""
from __future__ import annotations

import logging
import pathlib
from typing import Dict, Optional, Sequence

from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException

from ..errors import ConfigurationError
from .actuators.battery import BatteryConfig
from .actuators.motor import MotorConfig
from .driving_cycle import DrivingCycle
from .simulator import SimulationConfig
from .vehicle_dynamics import VehicleConfig

LOGGER = logging.getLogger(__name__)

CONFIG_ROOT = pathlib.Path(__file__).resolve().parents[1] / "config"

VEHICLE_PRESETS: Dict[str, str] = {
    "scooter": "Electric Scooter",
    "3w_cargo": "3-Wheeler Cargo",
    "passenger_ev": "Passenger EV",
}
DRIVING_CYCLES = ("NEDC", "WLTP", "URBAN", "HIGHWAY")


def _load_yaml(component: str, name: str) -> DictConfig:
    path = CONFIG_ROOT / component / f"{name}.yaml"
    if not path.exists():
        raise ConfigurationError(f"No config for component '{component}' and preset '{name}' ({path})")
    return OmegaConf.load(path)


def load_component_config(component: str, preset: str) -> dict:
    if preset not in VEHICLE_PRESETS:
        raise ConfigurationError(f"Unknown vehicle preset '{preset}'. Options: {sorted(VEHICLE_PRESETS)}")
    return OmegaConf.to_object(_load_yaml(component, preset))


def load_battery_config(preset: str) -> BatteryConfig:
    return BatteryConfig(**load_component_config("battery", preset))


def load_motor_config(preset: str) -> MotorConfig:
    return MotorConfig(**load_component_config("motor", preset))


def load_vehicle_config(preset: str) -> VehicleConfig:
    return VehicleConfig(**load_component_config("vehicle", preset))


def load_driving_cycle(name: str) -> DrivingCycle:
    key = name.upper()
    if key not in DRIVING_CYCLES:
        raise ConfigurationError(f"Unknown driving cycle '{name}'. Options: {list(DRIVING_CYCLES)}")
    data = OmegaConf.to_object(_load_yaml("driving_cycle", key.lower()))
    if "points" not in data:
        raise ConfigurationError(f"driving cycle '{key}' must define 'points'")
    return DrivingCycle(data["points"], name=data.get("name", key))


def build_simulation_config(
    vehicle: str,
    cycle: str,
    time_step: Optional[float] = None,
    overrides: Sequence[str] = (),
) -> SimulationConfig:
    """Assemble a validated config from presets plus ``key=value`` overrides.

    Overrides address the component sections, e.g. ``battery.initial_soc=80``
    or ``simulation.time_step=0.05``. Unknown keys are rejected.
    """

    if vehicle not in VEHICLE_PRESETS:
        raise ConfigurationError(f"Unknown vehicle preset '{vehicle}'. Options: {sorted(VEHICLE_PRESETS)}")

    base = OmegaConf.create(
        {
            "battery": _load_yaml("battery", vehicle),
            "motor": _load_yaml("motor", vehicle),
            "vehicle": _load_yaml("vehicle", vehicle),
            "simulation": OmegaConf.load(CONFIG_ROOT / "simulation" / "default.yaml"),
        }
    )
    OmegaConf.set_struct(base, True)
    try:
        merged = OmegaConf.merge(base, OmegaConf.from_dotlist(list(overrides)))
    except OmegaConfBaseException as exc:
        raise ConfigurationError(f"invalid override: {exc}") from exc

    data = OmegaConf.to_object(merged)
    step = float(time_step) if time_step is not None else float(data["simulation"]["time_step"])
    if overrides:
        LOGGER.info("Preset %s/%s overrides: %s", vehicle, cycle, ", ".join(overrides))

    return SimulationConfig(
        battery=BatteryConfig(**data["battery"]),
        motor=MotorConfig(**data["motor"]),
        vehicle=VehicleConfig(**data["vehicle"]),
        driving_cycle=load_driving_cycle(cycle),
        time_step=step,
    )


__all__ = [
    "CONFIG_ROOT",
    "DRIVING_CYCLES",
    "VEHICLE_PRESETS",
    "build_simulation_config",
    "load_battery_config",
    "load_component_config",
    "load_driving_cycle",
    "load_motor_config",
    "load_vehicle_config",
]
