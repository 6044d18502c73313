"""Reference speed trajectories and time-indexed interpolation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence, Tuple, Union

from ..errors import ConfigurationError
from .validation import coerce_finite


@dataclass(frozen=True)
class DrivingCyclePoint:
    time: float  # [s]
    speed: float  # [km/h]

    def __post_init__(self) -> None:  # type: ignore[override]
        coerce_finite(self, "time", "speed")
        if self.time < 0.0:
            raise ConfigurationError(f"waypoint time must be non-negative, got {self.time}")
        if self.speed < 0.0:
            raise ConfigurationError(f"waypoint speed must be non-negative, got {self.speed}")


PointLike = Union[DrivingCyclePoint, Mapping[str, float], Sequence[float]]


def _as_point(value: PointLike) -> DrivingCyclePoint:
    if isinstance(value, DrivingCyclePoint):
        return value
    if isinstance(value, Mapping):
        return DrivingCyclePoint(time=float(value["time"]), speed=float(value["speed"]))
    time, speed = value
    return DrivingCyclePoint(time=float(time), speed=float(speed))


def interpolate_speed(points: Sequence[DrivingCyclePoint], time: float) -> float:
    """Return the reference speed at ``time``, clamped to the first/last waypoint.

    ``points`` must be strictly increasing in time, as guaranteed by
    :attr:`DrivingCycle.points`.
    """

    if not points:
        raise ConfigurationError("cannot interpolate an empty driving cycle")
    if time <= points[0].time:
        return points[0].speed
    if time >= points[-1].time:
        return points[-1].speed

    for left, right in zip(points, points[1:]):
        if left.time <= time <= right.time:
            span = right.time - left.time
            if span <= 0.0:
                return left.speed
            ratio = (time - left.time) / span
            return left.speed + ratio * (right.speed - left.speed)

    # Only reachable for a NaN time.
    raise ValueError(f"cannot interpolate at time {time!r}")


class DrivingCycle:
    """Immutable, strictly time-ordered waypoint table."""

    def __init__(self, points: Iterable[PointLike], name: str = "custom") -> None:
        converted: Tuple[DrivingCyclePoint, ...] = tuple(_as_point(p) for p in points)
        if not converted:
            raise ConfigurationError(f"driving cycle '{name}' has no waypoints")
        for left, right in zip(converted, converted[1:]):
            if right.time <= left.time:
                raise ConfigurationError(
                    f"driving cycle '{name}' waypoint times must be strictly increasing "
                    f"({left.time} -> {right.time})"
                )
        self._points = converted
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def points(self) -> Tuple[DrivingCyclePoint, ...]:
        return self._points

    @property
    def start_time(self) -> float:
        return self._points[0].time

    @property
    def end_time(self) -> float:
        return self._points[-1].time

    @property
    def max_speed(self) -> float:
        return max(p.speed for p in self._points)

    def interpolate(self, time: float) -> float:
        return interpolate_speed(self._points, time)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self):
        return iter(self._points)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DrivingCycle):
            return NotImplemented
        return self._points == other._points

    def __hash__(self) -> int:
        return hash(self._points)

    def __repr__(self) -> str:
        return f"DrivingCycle(name={self._name!r}, points={len(self._points)}, end_time={self.end_time})"


__all__ = ["DrivingCyclePoint", "DrivingCycle", "interpolate_speed"]
