"""Live dashboard for a driving-cycle simulation using Pygame.

The engine is advanced by one tick per frame.  Choose the vehicle preset and
cycle in the CONFIG dictionary below and launch the script with

    python PYTHON/scripts/pygame_cycle_viewer.py

Controls: SPACE pause/resume, R reset, ESC quit.
"""

from __future__ import annotations

import logging
import math
import pathlib
import sys
from typing import List, Optional, Tuple

import numpy as np
import pygame

REPO_ROOT = pathlib.Path(__file__).resolve().parents[2]
PYTHON_ROOT = REPO_ROOT / "PYTHON"
if str(PYTHON_ROOT) not in sys.path:
    sys.path.insert(0, str(PYTHON_ROOT))

from evpowertrain.sim import SimulationDataPoint, SimulationEngine, SimulationResults
from evpowertrain.sim.presets import VEHICLE_PRESETS, build_simulation_config
from evpowertrain.sim.recording import data_points_to_arrays

logging.basicConfig(level=logging.INFO)
LOGGER = logging.getLogger(__name__)

# ------------------------------------------------------------------------------
# User-facing configuration block
CONFIG = {
    "vehicle": "scooter",  # one of: scooter, 3w_cargo, passenger_ev
    "cycle": "URBAN",  # one of: NEDC, WLTP, URBAN, HIGHWAY
    "steps_per_frame": 1,
    "fps": 60,
    "window_size": (1100, 720),
}

BACKGROUND = (20, 20, 20)
TEXT = (220, 220, 220)
DIM = (90, 90, 90)
TARGET_COLOUR = (200, 200, 40)
ACTUAL_COLOUR = (70, 150, 230)
DRIVE_COLOUR = (230, 120, 60)
REGEN_COLOUR = (70, 200, 110)


def _draw_gauge(
    screen: pygame.Surface,
    font: pygame.font.Font,
    centre: Tuple[int, int],
    radius: int,
    value: float,
    minimum: float,
    maximum: float,
    label: str,
    unit: str,
    colour: Tuple[int, int, int],
) -> None:
    # 240 degree sweep opening downwards.
    start, sweep = math.radians(210.0), math.radians(240.0)
    span = maximum - minimum
    ratio = 0.0 if span <= 0 else min(max((value - minimum) / span, 0.0), 1.0)

    arc = np.linspace(start, start - sweep, 60)
    background = [(centre[0] + radius * math.cos(a), centre[1] - radius * math.sin(a)) for a in arc]
    pygame.draw.lines(screen, DIM, False, background, 6)

    filled = arc[: max(2, int(ratio * len(arc)))]
    points = [(centre[0] + radius * math.cos(a), centre[1] - radius * math.sin(a)) for a in filled]
    if ratio > 0.0:
        pygame.draw.lines(screen, colour, False, points, 6)

    needle = start - ratio * sweep
    tip = (centre[0] + 0.8 * radius * math.cos(needle), centre[1] - 0.8 * radius * math.sin(needle))
    pygame.draw.line(screen, TEXT, centre, tip, 2)
    pygame.draw.circle(screen, TEXT, centre, 4)

    value_surface = font.render(f"{value:6.1f} {unit}", True, TEXT)
    screen.blit(value_surface, value_surface.get_rect(center=(centre[0], centre[1] + radius // 2)))
    label_surface = font.render(label, True, TEXT)
    screen.blit(label_surface, label_surface.get_rect(center=(centre[0], centre[1] + radius + 14)))


def _draw_trace(
    screen: pygame.Surface,
    font: pygame.font.Font,
    rect: pygame.Rect,
    data_points: List[SimulationDataPoint],
    end_time: float,
    max_speed: float,
) -> None:
    pygame.draw.rect(screen, DIM, rect, 1)
    if len(data_points) < 2:
        return
    arrays = data_points_to_arrays(data_points)
    x = rect.left + arrays["time"] / max(end_time, 1e-6) * rect.width
    y_scale = rect.height / max(max_speed * 1.1, 1.0)

    for key, colour in (("target_speed", TARGET_COLOUR), ("speed", ACTUAL_COLOUR)):
        y = rect.bottom - arrays[key] * y_scale
        pygame.draw.lines(screen, colour, False, list(zip(x.tolist(), y.tolist())), 2)

    regen = arrays["is_regenerating"]
    for xi in x[regen].tolist():
        pygame.draw.line(screen, REGEN_COLOUR, (xi, rect.bottom - 4), (xi, rect.bottom), 1)

    legend = font.render("target speed", True, TARGET_COLOUR)
    screen.blit(legend, (rect.left + 8, rect.top + 6))
    legend = font.render("vehicle speed", True, ACTUAL_COLOUR)
    screen.blit(legend, (rect.left + 140, rect.top + 6))


def _draw_dashboard(
    screen: pygame.Surface,
    font: pygame.font.Font,
    engine: SimulationEngine,
    paused: bool,
    results: Optional[SimulationResults],
) -> None:
    screen.fill(BACKGROUND)
    width, _height = screen.get_size()
    config = engine.config
    point = engine.last_data_point
    cycle = config.driving_cycle

    speed = point.speed if point else 0.0
    soc = point.battery_soc if point else config.battery.initial_soc
    flow = point.energy_flow if point else 0.0
    regenerating = point.is_regenerating if point else False

    gauge_y = 170
    _draw_gauge(screen, font, (170, gauge_y), 110, speed, 0.0, cycle.max_speed * 1.2, "Speed", "km/h", ACTUAL_COLOUR)
    _draw_gauge(screen, font, (width // 2, gauge_y), 110, soc, 0.0, 100.0, "Battery SoC", "%", REGEN_COLOUR)
    _draw_gauge(
        screen,
        font,
        (width - 170, gauge_y),
        110,
        abs(flow),
        0.0,
        config.motor.max_power / config.motor.efficiency,
        "Regen power" if regenerating else "Drive power",
        "kW",
        REGEN_COLOUR if regenerating else DRIVE_COLOUR,
    )

    # Energy flow direction between battery and wheels.
    arrow_y = gauge_y + 160
    left, right = width // 2 - 160, width // 2 + 160
    colour = REGEN_COLOUR if regenerating else DRIVE_COLOUR
    if abs(flow) > 1e-6:
        tip, tail = (left, right) if regenerating else (right, left)
        pygame.draw.line(screen, colour, (tail, arrow_y), (tip, arrow_y), 4)
        direction = -1 if regenerating else 1
        pygame.draw.polygon(
            screen, colour, [(tip, arrow_y), (tip - 14 * direction, arrow_y - 8), (tip - 14 * direction, arrow_y + 8)]
        )
    screen.blit(font.render("Battery", True, TEXT), (left - 80, arrow_y - 9))
    screen.blit(font.render("Wheels", True, TEXT), (right + 12, arrow_y - 9))

    trace_rect = pygame.Rect(40, arrow_y + 40, width - 80, 260)
    _draw_trace(screen, font, trace_rect, list(engine.data_points), cycle.end_time, cycle.max_speed)

    text_lines = [
        f"Vehicle: {VEHICLE_PRESETS[CONFIG['vehicle']]}  Cycle: {cycle.name}",
        f"Time: {engine.current_time:6.1f} / {cycle.end_time:.0f} s  Distance: {engine.total_distance:6.3f} km",
        f"Consumed: {engine.total_energy_consumed:7.4f} kWh  Recovered: {engine.total_energy_recovered:7.4f} kWh",
    ]
    if results is not None:
        text_lines.append(
            f"Done: {results.avg_efficiency:6.1f} Wh/km  regen {results.regeneration_percentage:5.1f}%  "
            f"final SoC {results.final_soc:5.1f}%"
        )
    elif paused:
        text_lines.append("Paused")
    text_lines.append("SPACE pause, R reset, ESC quit")
    for i, line in enumerate(text_lines):
        surface = font.render(line, True, TEXT)
        screen.blit(surface, (10, 10 + 18 * i))


def main() -> None:
    if CONFIG["vehicle"] not in VEHICLE_PRESETS:
        raise ValueError(f"Unknown vehicle '{CONFIG['vehicle']}'. Options: {sorted(VEHICLE_PRESETS)}")
    engine = SimulationEngine(build_simulation_config(CONFIG["vehicle"], CONFIG["cycle"]))
    end_time = engine.config.driving_cycle.end_time

    pygame.init()
    pygame.display.set_caption("EV Powertrain Energy Simulation")
    screen = pygame.display.set_mode(CONFIG["window_size"])
    clock = pygame.time.Clock()
    font = pygame.font.Font(None, 24)

    running = True
    paused = False
    results: Optional[SimulationResults] = None
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_SPACE:
                paused = not paused
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_r:
                engine.reset()
                results = None

        if not paused and results is None:
            for _ in range(CONFIG["steps_per_frame"]):
                if engine.current_time >= end_time:
                    results = engine.results()
                    LOGGER.info("Cycle finished: %s", results)
                    break
                engine.step()

        _draw_dashboard(screen, font, engine, paused, results)
        pygame.display.flip()
        clock.tick(CONFIG["fps"])

    pygame.quit()


if __name__ == "__main__":
    main()
