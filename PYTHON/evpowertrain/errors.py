"""Exception types raised by the simulation package."""
from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a configuration value would make the models ill-defined."""


class PersistenceError(RuntimeError):
    """Raised when a finished run cannot be written or read back."""
