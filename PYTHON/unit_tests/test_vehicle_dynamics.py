from __future__ import annotations

import pathlib
import sys

import pytest

PYTHON_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(PYTHON_ROOT) not in sys.path:
    sys.path.insert(0, str(PYTHON_ROOT))

from evpowertrain.errors import ConfigurationError
from evpowertrain.sim.vehicle_dynamics import VehicleConfig, VehicleDynamics

MASS = 150.0
ROLLING = 0.015 * MASS * 9.81


def _build_vehicle(**overrides: float) -> VehicleDynamics:
    params = dict(
        mass=MASS,
        frontal_area=0.8,
        drag_coefficient=0.7,
        rolling_resistance_coeff=0.015,
        wheel_radius=0.3,
        regen_efficiency=0.75,
    )
    params.update(overrides)
    return VehicleDynamics(VehicleConfig(**params))


def _ramp_to(vehicle: VehicleDynamics, speed_kmh: int, dt: float = 0.1) -> None:
    # 1 km/h increments stay inside the speed-lock band
    for target in range(1, speed_kmh + 1):
        vehicle.update_dynamics(0.0, float(target), dt, False)


def _aero(speed_ms: float) -> float:
    return 0.5 * 1.225 * 0.7 * 0.8 * speed_ms**2


def test_deadband_snaps_to_target() -> None:
    vehicle = _build_vehicle()
    state = vehicle.update_dynamics(motor_torque=150.0, target_speed=1.0, dt=0.1, is_regenerating=False)
    assert state.speed == 1.0
    assert state.acceleration == 0.0


def test_drive_acceleration_from_rest() -> None:
    vehicle = _build_vehicle()
    state = vehicle.update_dynamics(motor_torque=150.0, target_speed=20.0, dt=0.1, is_regenerating=False)
    expected_accel = (150.0 / 0.3 - ROLLING) / MASS
    assert state.rolling_resistance == pytest.approx(ROLLING)
    assert state.aero_drag == 0.0
    assert state.total_resistance == pytest.approx(ROLLING)
    assert state.acceleration == pytest.approx(expected_accel)
    assert state.speed == pytest.approx(expected_accel * 0.1 * 3.6)
    # position integrates the speed held before the update
    assert state.position == 0.0


def test_position_uses_previous_speed() -> None:
    vehicle = _build_vehicle()
    first = vehicle.update_dynamics(150.0, 20.0, 0.1, False)
    second = vehicle.update_dynamics(150.0, 20.0, 0.1, False)
    assert second.position == pytest.approx(first.speed / 3.6 * 0.1)


def test_regenerative_braking_decelerates() -> None:
    vehicle = _build_vehicle()
    _ramp_to(vehicle, 36)
    assert vehicle.state.speed == pytest.approx(36.0)

    state = vehicle.update_dynamics(motor_torque=-30.0, target_speed=0.0, dt=0.1, is_regenerating=True)
    resistance = ROLLING + _aero(10.0)
    expected_accel = (-resistance - 30.0 / 0.3 * 0.75) / MASS
    assert state.aero_drag == pytest.approx(_aero(10.0))
    assert state.acceleration == pytest.approx(expected_accel)
    assert state.speed == pytest.approx((10.0 + expected_accel * 0.1) * 3.6)


def test_regen_force_sign_independent_of_torque_sign() -> None:
    a = _build_vehicle()
    b = _build_vehicle()
    _ramp_to(a, 36)
    _ramp_to(b, 36)
    assert a.update_dynamics(-30.0, 0.0, 0.1, True) == b.update_dynamics(30.0, 0.0, 0.1, True)


def test_speed_never_negative() -> None:
    vehicle = _build_vehicle()
    _ramp_to(vehicle, 36)
    state = vehicle.update_dynamics(motor_torque=-1e6, target_speed=0.0, dt=1.0, is_regenerating=True)
    assert state.speed == 0.0
    assert state.acceleration < 0.0


def test_position_non_decreasing() -> None:
    vehicle = _build_vehicle()
    positions = []
    for torque, target, regen in [(150.0, 30.0, False)] * 30 + [(-150.0, 0.0, True)] * 30:
        positions.append(vehicle.update_dynamics(torque, target, 0.1, regen).position)
    assert all(b >= a for a, b in zip(positions, positions[1:]))
    assert positions[-1] > 0.0


def test_state_copy_and_reset() -> None:
    vehicle = _build_vehicle()
    fresh = vehicle.state
    state = vehicle.update_dynamics(150.0, 20.0, 0.1, False)
    state.position = 1e6
    assert vehicle.state.position == 0.0
    _ramp_to(vehicle, 10)
    vehicle.reset()
    assert vehicle.state == fresh


@pytest.mark.parametrize(
    "field, value",
    [
        ("mass", 0.0),
        ("frontal_area", 0.0),
        ("drag_coefficient", -0.1),
        ("rolling_resistance_coeff", 0.0),
        ("wheel_radius", 0.0),
        ("regen_efficiency", 0.0),
        ("regen_efficiency", 1.5),
    ],
)
def test_invalid_config_rejected(field: str, value: float) -> None:
    with pytest.raises(ConfigurationError):
        _build_vehicle(**{field: value})


@pytest.mark.parametrize("field", ["mass", "wheel_radius", "drag_coefficient", "rolling_resistance_coeff"])
@pytest.mark.parametrize("value", [float("nan"), float("inf"), "heavy"])
def test_non_finite_config_rejected(field: str, value: object) -> None:
    with pytest.raises(ConfigurationError):
        _build_vehicle(**{field: value})
