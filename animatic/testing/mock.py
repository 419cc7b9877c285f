"""
Speech Mock - Mock speech backend for testing.

Features:
    - Call recording
    - Manual completion (tests decide when an utterance ends)
    - Availability toggle and failure injection
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

from animatic.narration.backend import BaseSpeechBackend, DoneCallback
from animatic.narration.queue import NarrationItem


@dataclass
class CallRecord:
    """Record of a mock backend call."""

    method: str
    item: NarrationItem | None = None
    timestamp: float = field(default_factory=time.time)
    error: Exception | None = None

    @property
    def text(self) -> str:
        return self.item.text if self.item else ""


class SpeechMock(BaseSpeechBackend):
    """
    Mock speech backend for testing.

    Utterances never finish on their own: call ``complete()`` to deliver
    the completion signal, the way a real backend would later on.

    Example:
        mock = SpeechMock()
        queue = NarrationQueue(mock)
        queue.enqueue("one")
        queue.enqueue("two")

        assert mock.spoken_texts == ["one"]
        mock.complete()
        assert mock.spoken_texts == ["one", "two"]

        # Inject failures
        mock.configure(fail_with=RuntimeError("audio device lost"))
    """

    def __init__(self, available: bool = True):
        self._available = available
        self._calls: list[CallRecord] = []
        self._current: NarrationItem | None = None
        self._on_done: DoneCallback | None = None
        self._stale: list[DoneCallback] = []
        self._fail_with: Exception | None = None

    @property
    def name(self) -> str:
        return "mock"

    @property
    def available(self) -> bool:
        return self._available

    @property
    def calls(self) -> list[CallRecord]:
        """Get all call records."""
        return self._calls

    @property
    def speak_calls(self) -> list[CallRecord]:
        return [c for c in self._calls if c.method == "speak"]

    @property
    def cancel_count(self) -> int:
        return sum(1 for c in self._calls if c.method == "cancel")

    @property
    def spoken_texts(self) -> list[str]:
        """Texts handed to speak(), in order."""
        return [c.text for c in self.speak_calls if c.error is None]

    @property
    def current(self) -> NarrationItem | None:
        """Item being spoken right now."""
        return self._current

    @property
    def speaking(self) -> bool:
        return self._current is not None

    def configure(self, **kwargs: Any) -> None:
        """Update ``available`` or ``fail_with``."""
        if "available" in kwargs:
            self._available = kwargs["available"]
        if "fail_with" in kwargs:
            self._fail_with = kwargs["fail_with"]

    def reset(self) -> None:
        """Clear all call records."""
        self._calls.clear()

    def speak(self, item: NarrationItem, on_done: DoneCallback) -> None:
        record = CallRecord(method="speak", item=item)
        self._calls.append(record)

        if self._fail_with is not None:
            record.error = self._fail_with
            raise self._fail_with

        assert self._current is None, "speak() called while another item is in flight"
        self._current = item
        self._on_done = on_done

    def cancel(self) -> None:
        self._calls.append(CallRecord(method="cancel", item=self._current))
        if self._on_done is not None:
            # Kept so tests can deliver a late completion for a cancelled item
            self._stale.append(self._on_done)
        self._current = None
        self._on_done = None

    def complete(self) -> NarrationItem | None:
        """Finish the current utterance and signal completion.

        Returns:
            The item that finished, or None if nothing was in flight.
        """
        item, on_done = self._current, self._on_done
        if on_done is None:
            return None
        self._current = None
        self._on_done = None
        on_done()
        return item

    def complete_stale(self) -> int:
        """Deliver late completions for cancelled utterances.

        Returns:
            Number of completions delivered.
        """
        stale, self._stale = self._stale, []
        for on_done in stale:
            on_done()
        return len(stale)

    def assert_spoken(self, *texts: str) -> None:
        """Assert the exact sequence of texts handed to speak()."""
        actual = self.spoken_texts
        assert actual == list(texts), f"Expected {list(texts)}, spoken {actual}"
