"""
Narration Queue - FIFO delivery of speech to a one-at-a-time backend.

Scene enter actions and cues enqueue lines; the queue hands them to the
backend one by one, advancing only when the backend reports completion.

Invariants enforced:
    1. At most one item is in flight
    2. Items are delivered in enqueue order
    3. clear() cancels the in-flight item and empties the pending list
    4. A completion for an item that is no longer in flight is ignored
    5. While disabled (or the backend is unavailable) nothing accumulates
"""

from __future__ import annotations

import itertools
import math
from collections import deque
from dataclasses import dataclass, field

from animatic.monitoring.logging import StructuredLogger, get_logger
from animatic.narration.backend import NullSpeechBackend, SpeechBackend


@dataclass(frozen=True)
class NarrationItem:
    """A line of narration.

    Attributes:
        text: Text to speak.
        rate: Speech rate, fixed when the item is enqueued.
        ticket: Queue-assigned sequence number.
    """

    text: str
    rate: float = 1.0
    ticket: int = field(default=0, compare=False)


class NarrationQueue:
    """Serializes narration onto a speech backend.

    Example:
        queue = NarrationQueue(backend)
        queue.enqueue("The year is 1831.", rate=1.0)
        queue.enqueue("One man stands in the middle.")
        # first line is in flight, second waits for backend completion

        queue.clear()  # scene changed: cancel speech, drop pending
    """

    def __init__(
        self,
        backend: SpeechBackend | None = None,
        enabled: bool = True,
        logger: StructuredLogger | None = None,
    ):
        self._backend: SpeechBackend = backend if backend is not None else NullSpeechBackend()
        self._enabled = enabled
        self._logger = (logger if logger is not None else get_logger()).bind(component="narration")

        self._pending: deque[NarrationItem] = deque()
        self._in_flight: NarrationItem | None = None
        self._tickets = itertools.count(1)

        # Statistics
        self._delivered = 0
        self._completed = 0

    @property
    def backend(self) -> SpeechBackend:
        return self._backend

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def active(self) -> bool:
        """Whether enqueued items will actually be spoken."""
        return self._enabled and self._backend.available

    @property
    def in_flight(self) -> NarrationItem | None:
        """The item currently being spoken."""
        return self._in_flight

    @property
    def pending(self) -> tuple[NarrationItem, ...]:
        """Items waiting behind the in-flight item."""
        return tuple(self._pending)

    @property
    def is_speaking(self) -> bool:
        return self._in_flight is not None

    def __len__(self) -> int:
        return len(self._pending) + (1 if self._in_flight is not None else 0)

    def stats(self) -> dict[str, int]:
        return {
            "delivered": self._delivered,
            "completed": self._completed,
            "pending": len(self._pending),
        }

    def set_enabled(self, enabled: bool) -> None:
        """Switch narration on or off. Switching off clears the queue."""
        if not enabled:
            self.clear()
        self._enabled = enabled

    def enqueue(self, text: str, rate: float = 1.0) -> NarrationItem | None:
        """Append a line and start delivery if the backend is idle.

        Returns:
            The queued item, or None when narration is inactive.
        """
        if not math.isfinite(rate) or rate <= 0:
            raise ValueError(f"Narration rate must be > 0, got {rate!r}")

        if not self.active:
            return None

        item = NarrationItem(text=text, rate=rate, ticket=next(self._tickets))
        self._pending.append(item)
        self.drain()
        return item

    def drain(self) -> NarrationItem | None:
        """Hand the next pending item to the backend if nothing is in flight.

        Returns:
            The item that was started, or None.
        """
        while self.active and self._in_flight is None and self._pending:
            item = self._pending.popleft()
            self._in_flight = item
            self._delivered += 1
            self._logger.narration_start(item.text, item.rate, ticket=item.ticket)

            try:
                self._backend.speak(item, lambda ticket=item.ticket: self._complete(ticket))
            except Exception as e:
                # Narration is best-effort: drop the line, keep the queue moving
                self._logger.error(
                    "narration_failed",
                    str(e),
                    error_type=type(e).__name__,
                    ticket=item.ticket,
                    backend=self._backend.name,
                )
                if self._in_flight is item:
                    self._in_flight = None
                continue

            return item
        return None

    def clear(self) -> int:
        """Cancel in-flight speech and drop all pending items.

        Returns:
            Number of items dropped (including the in-flight one).
        """
        dropped = len(self._pending)
        cancelled = self._in_flight is not None
        if cancelled:
            dropped += 1

        self._pending.clear()
        self._in_flight = None
        # Always forwarded: the backend may still be mid-utterance
        self._backend.cancel()

        if dropped:
            self._logger.narration_cleared(dropped, cancelled)
        return dropped

    def _complete(self, ticket: int) -> None:
        """Backend completion signal for the item with ``ticket``."""
        if self._in_flight is None or self._in_flight.ticket != ticket:
            return

        self._in_flight = None
        self._completed += 1
        self.drain()
