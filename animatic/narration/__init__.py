"""
Narration

One-at-a-time speech delivery for scene narration.

Key Components:
    NarrationQueue      - FIFO queue with a single in-flight item
    NarrationItem       - Text + rate
    SpeechBackend       - Backend protocol (speak / cancel / on_done)
    TimedSpeechBackend  - Simulated speech driven by call_later
    NullSpeechBackend   - Unavailable backend (narration becomes a no-op)
"""

from animatic.narration.queue import (
    NarrationQueue,
    NarrationItem,
)
from animatic.narration.backend import (
    SpeechBackend,
    BaseSpeechBackend,
    NullSpeechBackend,
    TimedSpeechBackend,
)

__all__ = [
    "NarrationQueue",
    "NarrationItem",
    "SpeechBackend",
    "BaseSpeechBackend",
    "NullSpeechBackend",
    "TimedSpeechBackend",
]
