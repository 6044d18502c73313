from __future__ import annotations

import math
import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent))

import python_scenario_runner  # noqa: E402

SCENARIOS = python_scenario_runner.scenario_keys()


@pytest.fixture(scope="module")
def scenarios():
    return python_scenario_runner.simulate_all()


@pytest.mark.parametrize("vehicle, cycle", SCENARIOS)
def test_scenario_invariants(scenarios, vehicle: str, cycle: str) -> None:
    scenario = scenarios[f"{vehicle}/{cycle}"]
    points = scenario.data_points
    assert points, "simulation produced no samples"

    soc = np.array([p.battery_soc for p in points])
    speed = np.array([p.speed for p in points])
    distance = np.array([p.distance for p in points])
    efficiency = np.array([p.motor_efficiency for p in points])

    assert np.all((soc >= 0.0) & (soc <= 100.0))
    assert np.all(speed >= 0.0)
    assert np.all(np.diff(distance) >= 0.0)
    assert np.all((efficiency >= 0.5) & (efficiency <= 0.98))
    assert np.all(np.diff(scenario.consumed) >= 0.0)
    assert np.all(np.diff(scenario.recovered) >= 0.0)

    for point in points:
        assert all(math.isfinite(float(v)) for v in point.as_dict().values())
        if point.is_regenerating:
            assert point.energy_flow <= 0.0

    results = scenario.results
    assert results.total_distance > 0.0
    assert results.final_soc < 100.0
    assert results.energy_consumed > 0.0
    assert results.regeneration_percentage >= 0.0


def test_soc_only_rises_while_regenerating(scenarios) -> None:
    for label, scenario in scenarios.items():
        previous = None
        for point in scenario.data_points:
            if previous is not None and point.battery_soc > previous:
                assert point.is_regenerating, f"{label}: SoC rose at t={point.time:.1f}s without regeneration"
            previous = point.battery_soc


def test_repeat_runs_match(scenarios) -> None:
    vehicle, cycle = "scooter", "URBAN"
    again = python_scenario_runner.simulate(vehicle, cycle)
    assert again.data_points == scenarios[f"{vehicle}/{cycle}"].data_points


def test_write_csv(scenarios, tmp_path: Path) -> None:
    subset = {label: scenarios[label] for label in sorted(scenarios)[:2]}
    output = tmp_path / "scenarios.csv"
    python_scenario_runner.write_csv(subset, output)
    lines = output.read_text().splitlines()
    assert lines[0].startswith("scenario,time,speed")
    assert len(lines) == 1 + sum(len(s.data_points) for s in subset.values())
