"""
Speech Backends - Narration delivery protocol.

The narration queue never talks to audio hardware. It hands one
NarrationItem at a time to a SpeechBackend and waits for the backend to
call ``on_done``.

BACKEND CONTRACT:
    Backends MUST:
        - Speak at most one item at a time
        - Call ``on_done`` exactly once per finished utterance, asynchronously
          with respect to the frame loop
        - Make ``cancel()`` idempotent and effective mid-utterance
        - Never call ``on_done`` for a cancelled utterance

    Backends MUST NOT:
        - Queue items themselves (ordering belongs to NarrationQueue)
        - Block the caller of ``speak()`` until speech finishes
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Protocol, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from animatic.narration.queue import NarrationItem


DoneCallback = Callable[[], None]


class Cancellable(Protocol):
    """Handle returned by a ``call_later`` scheduler."""

    def cancel(self) -> Any:
        ...


CallLater = Callable[[float, DoneCallback], Cancellable]


@runtime_checkable
class SpeechBackend(Protocol):
    """Protocol for narration backends."""

    @property
    def name(self) -> str:
        """Backend identifier (e.g., 'timed', 'null')."""
        ...

    @property
    def available(self) -> bool:
        """Whether the backend can speak right now."""
        ...

    def speak(self, item: "NarrationItem", on_done: DoneCallback) -> None:
        """Start speaking ``item``; call ``on_done`` when finished."""
        ...

    def cancel(self) -> None:
        """Stop the current utterance, if any."""
        ...


class BaseSpeechBackend(ABC):
    """Base class for speech backends with common functionality."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend identifier."""
        ...

    @property
    def available(self) -> bool:
        return True

    @abstractmethod
    def speak(self, item: "NarrationItem", on_done: DoneCallback) -> None:
        ...

    @abstractmethod
    def cancel(self) -> None:
        ...


class NullSpeechBackend(BaseSpeechBackend):
    """Backend for environments without speech output.

    Reports itself unavailable, so the narration queue degrades to no-ops.
    """

    @property
    def name(self) -> str:
        return "null"

    @property
    def available(self) -> bool:
        return False

    def speak(self, item: "NarrationItem", on_done: DoneCallback) -> None:
        pass

    def cancel(self) -> None:
        pass


class TimedSpeechBackend(BaseSpeechBackend):
    """Backend that simulates speech by waiting for an estimated duration.

    Duration is estimated at ~150ms per word, divided by the item's rate.
    Completion is delivered through ``call_later`` (for example
    ``asyncio.get_running_loop().call_later``), so it arrives on the same
    event loop as frame ticks but independently of them.

    Args:
        call_later: ``(delay_seconds, callback) -> handle`` with ``cancel()``.
        seconds_per_word: Speaking time per word at rate 1.0.
        min_duration: Lower bound for any utterance at rate 1.0.
        on_speak: Optional observer called with each item as it starts.
    """

    def __init__(
        self,
        call_later: CallLater,
        seconds_per_word: float = 0.15,
        min_duration: float = 0.3,
        on_speak: Callable[["NarrationItem"], None] | None = None,
    ):
        self._call_later = call_later
        self._seconds_per_word = seconds_per_word
        self._min_duration = min_duration
        self._on_speak = on_speak
        self._handle: Cancellable | None = None
        self._current: "NarrationItem | None" = None

    @property
    def name(self) -> str:
        return "timed"

    @property
    def speaking(self) -> bool:
        return self._handle is not None

    @property
    def current(self) -> "NarrationItem | None":
        return self._current

    def estimate_duration(self, item: "NarrationItem") -> float:
        """Estimated speaking time of ``item`` in seconds."""
        words = len(item.text.split())
        base = max(self._min_duration, words * self._seconds_per_word)
        return base / item.rate

    def speak(self, item: "NarrationItem", on_done: DoneCallback) -> None:
        if self._handle is not None:
            raise RuntimeError("TimedSpeechBackend is already speaking")

        self._current = item
        if self._on_speak is not None:
            self._on_speak(item)

        def finish() -> None:
            self._handle = None
            self._current = None
            on_done()

        self._handle = self._call_later(self.estimate_duration(item), finish)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._current = None
