"""Run a vehicle preset over a driving cycle and print the energy summary.

    python PYTHON/scripts/run_cycle.py --vehicle scooter --cycle URBAN \
        --output runs/scooter_urban battery.initial_soc=80

Trailing ``key=value`` arguments override values from the YAML presets.
"""

from __future__ import annotations

import argparse
import logging
import pathlib
import sys
from typing import List

REPO_ROOT = pathlib.Path(__file__).resolve().parents[2]
PYTHON_ROOT = REPO_ROOT / "PYTHON"
if str(PYTHON_ROOT) not in sys.path:
    sys.path.insert(0, str(PYTHON_ROOT))

from evpowertrain.errors import ConfigurationError, PersistenceError
from evpowertrain.sim import SimulationEngine, run_cycle
from evpowertrain.sim.presets import DRIVING_CYCLES, VEHICLE_PRESETS, build_simulation_config
from evpowertrain.sim.recording import RunSummary, write_run

LOGGER = logging.getLogger(__name__)


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--vehicle", default="scooter", choices=sorted(VEHICLE_PRESETS))
    parser.add_argument("--cycle", default="URBAN", type=str.upper, choices=DRIVING_CYCLES)
    parser.add_argument("--time-step", type=float, default=None, help="Override the step size [s]")
    parser.add_argument("--output", type=pathlib.Path, default=None, help="Directory for summary and data points")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every tick")
    parser.add_argument("overrides", nargs="*", help="Preset overrides, e.g. vehicle.mass=180")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = build_simulation_config(args.vehicle, args.cycle, args.time_step, args.overrides)
    except ConfigurationError as exc:
        LOGGER.error("%s", exc)
        return 2

    engine = SimulationEngine(config)
    results = run_cycle(engine)

    print(f"{VEHICLE_PRESETS[args.vehicle]} on {config.driving_cycle.name}")
    print(f"  distance          {results.total_distance:10.3f} km")
    print(f"  energy consumed   {results.energy_consumed:10.4f} kWh")
    print(f"  energy recovered  {results.energy_recovered:10.4f} kWh")
    print(f"  final SoC         {results.final_soc:10.2f} %")
    print(f"  consumption       {results.avg_efficiency:10.1f} Wh/km")
    print(f"  regeneration      {results.regeneration_percentage:10.1f} %")

    if args.output is not None:
        summary = RunSummary.from_run(args.vehicle, config, results)
        try:
            write_run(args.output, summary, engine.data_points)
        except PersistenceError:
            return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
