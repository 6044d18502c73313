from __future__ import annotations

import pathlib
import sys

import pytest

PYTHON_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PYTHON_ROOT) not in sys.path:
    sys.path.insert(0, str(PYTHON_ROOT))

from evpowertrain.errors import ConfigurationError
from evpowertrain.sim.actuators.motor import MotorType
from evpowertrain.sim.presets import (
    DRIVING_CYCLES,
    VEHICLE_PRESETS,
    build_simulation_config,
    load_battery_config,
    load_driving_cycle,
    load_motor_config,
    load_vehicle_config,
)


def test_scooter_preset_values() -> None:
    battery = load_battery_config("scooter")
    assert battery.capacity == 3.0
    assert battery.nominal_voltage == 48.0
    assert battery.max_current == 50.0
    assert battery.initial_soc == 100.0

    motor = load_motor_config("scooter")
    assert motor.max_power == 3.5
    assert motor.motor_type is MotorType.BLDC

    vehicle = load_vehicle_config("scooter")
    assert vehicle.mass == 150.0
    assert vehicle.regen_efficiency == 0.75


@pytest.mark.parametrize("preset", sorted(VEHICLE_PRESETS))
def test_every_preset_loads(preset: str) -> None:
    config = build_simulation_config(preset, "URBAN")
    assert config.time_step == pytest.approx(0.1)
    assert config.vehicle.wheel_radius == 0.3


@pytest.mark.parametrize(
    "name, end_time, max_speed",
    [("NEDC", 195.0, 50.0), ("WLTP", 1000.0, 55.1), ("URBAN", 200.0, 35.0), ("HIGHWAY", 600.0, 100.0)],
)
def test_canonical_cycles(name: str, end_time: float, max_speed: float) -> None:
    cycle = load_driving_cycle(name)
    assert name in DRIVING_CYCLES
    assert cycle.name == name
    assert cycle.start_time == 0.0
    assert cycle.end_time == end_time
    assert cycle.max_speed == pytest.approx(max_speed)


def test_cycle_name_case_insensitive() -> None:
    assert load_driving_cycle("urban") == load_driving_cycle("URBAN")


def test_overrides_are_applied() -> None:
    config = build_simulation_config(
        "passenger_ev",
        "HIGHWAY",
        overrides=["battery.initial_soc=80", "vehicle.mass=1600", "simulation.time_step=0.05"],
    )
    assert config.battery.initial_soc == 80
    assert config.vehicle.mass == 1600
    assert config.time_step == pytest.approx(0.05)


def test_explicit_time_step_wins() -> None:
    config = build_simulation_config("scooter", "NEDC", time_step=0.2, overrides=["simulation.time_step=0.05"])
    assert config.time_step == pytest.approx(0.2)


def test_unknown_override_key_rejected() -> None:
    with pytest.raises(ConfigurationError):
        build_simulation_config("scooter", "URBAN", overrides=["battery.chemistry=lfp"])


def test_override_validated_by_config() -> None:
    with pytest.raises(ConfigurationError):
        build_simulation_config("scooter", "URBAN", overrides=["vehicle.mass=0"])


def test_unknown_names_rejected() -> None:
    with pytest.raises(ConfigurationError):
        build_simulation_config("tram", "URBAN")
    with pytest.raises(ConfigurationError):
        load_driving_cycle("FTP75")
    with pytest.raises(ConfigurationError):
        load_battery_config("tram")


@pytest.mark.parametrize(
    "override",
    [
        "vehicle.mass=.nan",
        "battery.capacity=.inf",
        "motor.max_power=-.inf",
        "simulation.time_step=.nan",
        "vehicle.mass=heavy",
        "battery.initial_soc=full",
    ],
)
def test_non_finite_and_non_numeric_overrides_rejected(override: str) -> None:
    with pytest.raises(ConfigurationError):
        build_simulation_config("scooter", "URBAN", overrides=[override])


def test_numeric_override_coerced_to_float() -> None:
    config = build_simulation_config("scooter", "URBAN", overrides=["vehicle.mass=180"])
    assert isinstance(config.vehicle.mass, float)
    assert config.vehicle.mass == 180.0
