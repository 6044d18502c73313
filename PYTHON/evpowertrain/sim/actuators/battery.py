"""Battery pack model with SOC, voltage and lumped temperature tracking."""
from __future__ import annotations

from dataclasses import dataclass, replace

from ...errors import ConfigurationError
from ..validation import coerce_finite

AMBIENT_TEMPERATURE = 25.0  # [degC]
VOLTAGE_DROPOFF = 0.2
COOLING_RATE = 0.1  # [degC/s]


@dataclass(frozen=True)
class BatteryConfig:
    capacity: float  # [kWh]
    nominal_voltage: float  # [V]
    initial_soc: float  # [%]
    max_current: float  # [A]
    internal_resistance: float  # [Ohm]

    def __post_init__(self) -> None:  # type: ignore[override]
        coerce_finite(self, "capacity", "nominal_voltage", "initial_soc", "max_current", "internal_resistance")
        if self.capacity <= 0.0:
            raise ConfigurationError("battery capacity must be positive")
        if self.nominal_voltage <= 0.0:
            raise ConfigurationError("nominal_voltage must be positive")
        if not 0.0 <= self.initial_soc <= 100.0:
            raise ConfigurationError("initial_soc must be within [0, 100]")
        if self.max_current <= 0.0:
            raise ConfigurationError("max_current must be positive")
        if self.internal_resistance < 0.0:
            raise ConfigurationError("internal_resistance must be non-negative")


@dataclass
class BatteryState:
    soc: float  # [%]
    voltage: float  # [V]
    current: float  # [A], positive = discharge
    power: float
    temperature: float  # [degC]


class Battery:
    """Converts a power demand into current draw and SOC change."""

    def __init__(self, config: BatteryConfig) -> None:
        self.config = config
        self._state = self._initial_state()

    def _initial_state(self) -> BatteryState:
        return BatteryState(
            soc=float(self.config.initial_soc),
            voltage=float(self.config.nominal_voltage),
            current=0.0,
            power=0.0,
            temperature=AMBIENT_TEMPERATURE,
        )

    @property
    def state(self) -> BatteryState:
        return replace(self._state)

    def reset(self) -> None:
        self._state = self._initial_state()

    # ------------------------------------------------------------------
    def voltage_at_soc(self) -> float:
        """Affine SOC to terminal voltage proxy, 0.6 to 1.0 of nominal."""

        soc = self._state.soc / 100.0
        return self.config.nominal_voltage * (0.8 + 0.2 * soc - VOLTAGE_DROPOFF * (1.0 - soc))

    def update_state(self, power_demand: float, dt: float) -> BatteryState:
        """Draw ``power_demand`` [kW] for ``dt`` seconds; negative demand charges."""

        voltage = self.voltage_at_soc()
        limit = self.config.max_current
        current = max(-limit, min(limit, power_demand / voltage))

        energy_change = current * voltage * dt / 3600.0
        soc_change = energy_change / self.config.capacity * 100.0

        state = self._state
        state.soc = max(0.0, min(100.0, state.soc - soc_change))
        state.current = current
        state.voltage = voltage
        state.power = current * voltage

        heat = current * current * self.config.internal_resistance
        state.temperature += heat * dt / 1000.0
        state.temperature = max(AMBIENT_TEMPERATURE, state.temperature - COOLING_RATE * dt)

        return self.state


__all__ = ["BatteryConfig", "BatteryState", "Battery"]
