"""Numeric coercion shared by the configuration dataclasses."""
from __future__ import annotations

import math

from ..errors import ConfigurationError


def coerce_finite(config: object, *names: str) -> None:
    """Replace each named field with a finite ``float`` or raise."""

    for name in names:
        raw = getattr(config, name)
        if isinstance(raw, bool):
            raise ConfigurationError(f"{name} must be a number, got {raw!r}")
        try:
            value = float(raw)
        except (TypeError, ValueError):
            raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None
        if not math.isfinite(value):
            raise ConfigurationError(f"{name} must be finite, got {raw!r}")
        object.__setattr__(config, name, value)


__all__ = ["coerce_finite"]
