"""Device capability wrappers."""

from .orientation import OrientationMonitor, OrientationReading, OrientationSignal

__all__ = ["OrientationMonitor", "OrientationReading", "OrientationSignal"]
