"""Persistence and array export for finished runs."""
from __future__ import annotations

import csv
from dataclasses import asdict, dataclass, fields
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np
import yaml
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from ..errors import PersistenceError
from .simulator import SimulationConfig, SimulationDataPoint, SimulationResults

LOGGER = logging.getLogger(__name__)

SUMMARY_FILE = "summary.yaml"
DATA_POINTS_FILE = "data_points.csv"
DATA_POINT_FIELDS: Tuple[str, ...] = tuple(f.name for f in fields(SimulationDataPoint))


@dataclass(frozen=True)
class RunSummary:
    vehicle_type: str
    driving_cycle: str
    battery_capacity: float  # [kWh]
    motor_power: float  # [kW]
    vehicle_mass: float  # [kg]
    regen_efficiency: float
    total_distance: float
    energy_consumed: float
    energy_recovered: float
    final_soc: float
    avg_efficiency: float
    regeneration_percentage: float

    @classmethod
    def from_run(cls, vehicle_type: str, config: SimulationConfig, results: SimulationResults) -> "RunSummary":
        return cls(
            vehicle_type=vehicle_type,
            driving_cycle=config.driving_cycle.name,
            battery_capacity=config.battery.capacity,
            motor_power=config.motor.max_power,
            vehicle_mass=config.vehicle.mass,
            regen_efficiency=config.vehicle.regen_efficiency,
            **results.as_dict(),
        )


def _format(value: object) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return repr(float(value))


def write_run(
    directory: Path,
    summary: RunSummary,
    data_points: Sequence[SimulationDataPoint],
) -> Tuple[Path, Path]:
    """Write ``summary.yaml`` and ``data_points.csv`` into ``directory``."""

    directory = Path(directory)
    summary_path = directory / SUMMARY_FILE
    points_path = directory / DATA_POINTS_FILE
    try:
        directory.mkdir(parents=True, exist_ok=True)
        OmegaConf.save(OmegaConf.create(asdict(summary)), summary_path)
        with points_path.open("w", newline="") as csvfile:
            writer = csv.writer(csvfile)
            writer.writerow(DATA_POINT_FIELDS)
            for point in data_points:
                writer.writerow([_format(getattr(point, name)) for name in DATA_POINT_FIELDS])
    except OSError as exc:
        LOGGER.exception("Failed to save run to %s", directory)
        raise PersistenceError(f"could not save run to {directory}: {exc}") from exc

    LOGGER.info("Saved %d data points to %s", len(data_points), directory)
    return summary_path, points_path


def load_summary(path: Path) -> RunSummary:
    try:
        data = OmegaConf.to_object(OmegaConf.load(Path(path)))
        return RunSummary(**data)
    except (OSError, OmegaConfBaseException, yaml.YAMLError, TypeError) as exc:
        raise PersistenceError(f"could not read summary {path}: {exc}") from exc


def load_data_points(path: Path) -> List[SimulationDataPoint]:
    points: List[SimulationDataPoint] = []
    try:
        with Path(path).open() as csvfile:
            reader = csv.DictReader(csvfile)
            for row in reader:
                values = {name: float(row[name]) for name in DATA_POINT_FIELDS if name != "is_regenerating"}
                points.append(SimulationDataPoint(is_regenerating=row["is_regenerating"] == "1", **values))
    except (OSError, KeyError, ValueError) as exc:
        raise PersistenceError(f"could not read data points {path}: {exc}") from exc
    return points


def data_points_to_arrays(data_points: Iterable[SimulationDataPoint]) -> Dict[str, np.ndarray]:
    """Column-wise numpy view of a run, one array per data point field."""

    rows = list(data_points)
    arrays: Dict[str, np.ndarray] = {}
    for name in DATA_POINT_FIELDS:
        dtype = bool if name == "is_regenerating" else float
        arrays[name] = np.array([getattr(p, name) for p in rows], dtype=dtype)
    return arrays


__all__ = [
    "DATA_POINT_FIELDS",
    "RunSummary",
    "data_points_to_arrays",
    "load_data_points",
    "load_summary",
    "write_run",
]
