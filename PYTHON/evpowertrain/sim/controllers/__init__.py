from .speed_tracking import (  # noqa: F401
    PowerRequest,
    SpeedTrackingController,
)

__all__ = [
    "PowerRequest",
    "SpeedTrackingController",
]
