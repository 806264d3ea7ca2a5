"""Quarter-turn rotation helpers."""

from __future__ import annotations

import math
from typing import Protocol

VALID_ANGLES = (0, 90, 180, 270)
QUARTER_TURN = 90


class ScreenOrientationSource(Protocol):
    """Platform signal describing how the screen is currently turned."""

    def angle(self) -> float | None:
        """Return the screen angle in degrees, or ``None`` when unknown."""


def rotate_left(angle: int) -> int:
    """Turn counter-clockwise by a quarter."""

    return (angle - QUARTER_TURN + 360) % 360


def rotate_right(angle: int) -> int:
    """Turn clockwise by a quarter."""

    return (angle + QUARTER_TURN) % 360


def normalize_angle(angle: float) -> int:
    """Snap any angle to the nearest quarter turn in the 0-270 range."""

    quarters = math.floor(angle / QUARTER_TURN + 0.5)
    return int(quarters * QUARTER_TURN) % 360


def initial_rotation(screen_angle: float | None) -> int:
    """Seed the rotation from the screen orientation, defaulting to 0.

    Some platforms report landscape as -90; negative values are wrapped into
    the 0-360 range before snapping.
    """

    if screen_angle is None:
        return 0
    return normalize_angle(screen_angle % 360)


def initial_rotation_from(source: ScreenOrientationSource | None) -> int:
    """Read the screen orientation from ``source`` when one is available."""

    if source is None:
        return 0
    return initial_rotation(source.angle())
