"""Electric vehicle powertrain energy simulation."""

from .errors import ConfigurationError, PersistenceError

__all__ = ["ConfigurationError", "PersistenceError"]
