"""
Timeline Clock - Wall-clock frame timestamps to virtual elapsed time.

Invariants enforced:
    1. elapsed never decreases (out-of-order timestamps add zero)
    2. The first timestamp after creation, suspend() or reset() adds zero
    3. Speed changes apply from the next delta; past elapsed is never rescaled
    4. Speed is always finite and positive
"""

from __future__ import annotations

import math

from animatic.errors import InvalidSpeedError


def validate_speed(speed: object) -> float:
    """Return ``speed`` as a float, or raise InvalidSpeedError."""
    if isinstance(speed, bool) or not isinstance(speed, (int, float)):
        raise InvalidSpeedError(speed)
    if not math.isfinite(speed) or speed <= 0:
        raise InvalidSpeedError(speed)
    return float(speed)


class TimelineClock:
    """Virtual clock advanced by successive frame timestamps.

    Example:
        clock = TimelineClock(speed=2.0)
        clock.advance(10.0)   # first tick: 0.0
        clock.advance(11.0)   # 2.0
        clock.elapsed         # 2.0
    """

    def __init__(self, speed: float = 1.0, elapsed: float = 0.0):
        self._speed = validate_speed(speed)
        self._elapsed = max(0.0, float(elapsed))
        self._previous: float | None = None

    @property
    def elapsed(self) -> float:
        """Virtual seconds accumulated so far."""
        return self._elapsed

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def anchored(self) -> bool:
        """Whether a previous timestamp is recorded."""
        return self._previous is not None

    def set_speed(self, speed: float) -> float:
        """Change the speed factor for future deltas.

        Raises:
            InvalidSpeedError: ``speed`` is not finite and positive. The
                previous speed is kept.
        """
        try:
            self._speed = validate_speed(speed)
        except InvalidSpeedError as e:
            e.current = self._speed
            e.details["current"] = self._speed
            raise
        return self._speed

    def advance(self, timestamp: float) -> float:
        """Consume a frame timestamp and return the virtual time added."""
        previous = self._previous

        if previous is None:
            self._previous = timestamp
            return 0.0

        delta = timestamp - previous
        if delta <= 0:
            # Keep the later reference so the stale frame is not recounted
            return 0.0

        self._previous = timestamp
        step = delta * self._speed
        self._elapsed += step
        return step

    def suspend(self) -> None:
        """Forget the previous timestamp so an idle gap is never counted."""
        self._previous = None

    def reset(self) -> None:
        """Rewind to zero. Speed is kept."""
        self._elapsed = 0.0
        self._previous = None
