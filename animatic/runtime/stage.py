"""
Stage - What scene callbacks get to touch.

Scenes never see the scheduler. They draw on the canvas, set subtitles
and queue narration through the stage.
"""

from __future__ import annotations

from dataclasses import dataclass

from animatic.narration.queue import NarrationItem, NarrationQueue
from animatic.presentation.subtitles import SubtitleSink
from animatic.render.surface import Canvas
from animatic.runtime.clock import TimelineClock


@dataclass
class Stage:
    """Per-player context handed to ``on_enter`` and ``draw``."""

    canvas: Canvas
    subtitles: SubtitleSink
    narration: NarrationQueue
    clock: TimelineClock

    @property
    def speed(self) -> float:
        """Current playback speed."""
        return self.clock.speed

    def narrate(self, text: str, rate: float = 1.0) -> NarrationItem | None:
        """Queue a line, scaling ``rate`` by the current speed.

        The resulting rate is fixed at this moment; later speed changes do
        not affect it.
        """
        return self.narration.enqueue(text, rate * self.speed)
