"""Spirit-level readings from a device orientation signal.

The sensor itself belongs to the host platform. This module only owns the
subscription so it is always released, and derives whether the device is
held level.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Protocol

logger = logging.getLogger(__name__)

LEVEL_THRESHOLD = 5.0

Unsubscribe = Callable[[], None]


@dataclass(frozen=True, slots=True)
class OrientationReading:
    """Tilt angles in degrees as reported by the device."""

    beta: float = 0.0
    gamma: float = 0.0
    alpha: float = 0.0

    @property
    def is_level(self) -> bool:
        return abs(self.beta) <= LEVEL_THRESHOLD


class OrientationSignal(Protocol):
    """Continuous orientation source provided by the platform."""

    def subscribe(self, callback: Callable[[OrientationReading], None]) -> Unsubscribe:
        ...


class OrientationMonitor:
    """Owns one subscription to an orientation signal."""

    def __init__(
        self,
        signal: OrientationSignal,
        callback: Callable[[OrientationReading], None] | None = None,
    ) -> None:
        self._signal = signal
        self._callback = callback
        self._unsubscribe: Unsubscribe | None = None
        self.latest: OrientationReading | None = None

    @property
    def active(self) -> bool:
        return self._unsubscribe is not None

    def start(self) -> None:
        if self._unsubscribe is not None:
            return
        self._unsubscribe = self._signal.subscribe(self._on_reading)

    def stop(self) -> None:
        """Release the subscription; safe to call more than once."""

        unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is not None:
            unsubscribe()

    def _on_reading(self, reading: OrientationReading) -> None:
        if self._unsubscribe is None:
            logger.debug("Dropping orientation reading after stop.")
            return
        self.latest = reading
        if self._callback is not None:
            self._callback(reading)

    def __enter__(self) -> "OrientationMonitor":
        self.start()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.stop()
