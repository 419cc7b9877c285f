"""
Frame Sources - Where render ticks come from.

A frame source delivers exactly one future ``callback(timestamp)`` per
``request()``, like a browser's requestAnimationFrame. Timestamps are
monotonic seconds.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Protocol, runtime_checkable


FrameCallback = Callable[[float], None]


@runtime_checkable
class FrameSource(Protocol):
    """Protocol for tick providers."""

    def request(self, callback: FrameCallback) -> None:
        """Schedule one call of ``callback(timestamp)``."""
        ...

    def cancel(self) -> None:
        """Drop the outstanding request, if any."""
        ...


class ManualFrameSource:
    """Frame source driven by the caller.

    Example:
        frames = ManualFrameSource()
        scheduler = Scheduler(registry, frame_source=frames)
        scheduler.start()
        frames.fire(0.0)
        frames.fire(1.0)
    """

    def __init__(self) -> None:
        self._callback: FrameCallback | None = None
        self.requests = 0

    @property
    def pending(self) -> bool:
        """Whether a tick has been requested and not yet fired."""
        return self._callback is not None

    def request(self, callback: FrameCallback) -> None:
        self._callback = callback
        self.requests += 1

    def cancel(self) -> None:
        self._callback = None

    def fire(self, timestamp: float) -> bool:
        """Deliver the pending tick.

        Returns:
            False when no tick was pending.
        """
        callback = self._callback
        if callback is None:
            return False
        self._callback = None
        callback(timestamp)
        return True

    def run(self, timestamps) -> int:
        """Fire ticks for each timestamp until the requests stop.

        Returns:
            Number of ticks delivered.
        """
        fired = 0
        for timestamp in timestamps:
            if not self.fire(timestamp):
                break
            fired += 1
        return fired


class AsyncioFrameSource:
    """Frame source backed by an asyncio event loop.

    Ticks and speech completions scheduled on the same loop never run
    concurrently, so the scheduler needs no locks.
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        interval: float = 1 / 60,
    ):
        if interval <= 0:
            raise ValueError("interval must be > 0")
        self._loop = loop
        self._interval = interval
        self._handle: asyncio.TimerHandle | None = None

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def request(self, callback: FrameCallback) -> None:
        self.cancel()

        def deliver() -> None:
            self._handle = None
            callback(self._loop.time())

        self._handle = self._loop.call_later(self._interval, deliver)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
