"""
Scene - One timed segment of an animated sequence.

A scene has a fixed duration, a draw callback that renders the scene at a
local time, an optional enter callback that runs once each time the
scene becomes active, and optional narration cues placed at local times.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from animatic.runtime.stage import Stage


EnterCallback = Callable[["Stage"], None]
DrawCallback = Callable[["Stage", float], None]


def _draw_nothing(stage: "Stage", t: float) -> None:
    pass


@dataclass(frozen=True)
class Cue:
    """Narration line placed at a scene-local time.

    Attributes:
        at: Local scene time (virtual seconds) at which the line is queued.
        text: Text to speak.
        rate: Base speech rate, multiplied by playback speed when queued.
        subtitle: Subtitle to show when the cue fires (None leaves it alone).
    """

    at: float
    text: str
    rate: float = 1.0
    subtitle: str | None = None

    def __post_init__(self) -> None:
        if not math.isfinite(self.at) or self.at < 0:
            raise ValueError(f"Cue offset must be >= 0, got {self.at!r}")
        if not math.isfinite(self.rate) or self.rate <= 0:
            raise ValueError(f"Cue rate must be > 0, got {self.rate!r}")


@dataclass(frozen=True)
class SceneRange:
    """Cumulative time bounds of a scene: ``[start, end)``."""

    start: float
    end: float

    @property
    def duration(self) -> float:
        return self.end - self.start

    def contains(self, t: float) -> bool:
        return self.start <= t < self.end


@dataclass(frozen=True)
class Scene:
    """
    A timed scene.

    Example:
        def enter(stage):
            stage.subtitles.set("Year: 1831")
            stage.narrate("The year is 1831.")

        def draw(stage, t):
            stage.canvas.fill((47, 42, 37))

        scene = Scene("1831", 3.0, draw=draw, on_enter=enter)
    """

    name: str
    duration: float
    draw: DrawCallback = _draw_nothing
    on_enter: EnterCallback | None = None
    cues: tuple[Cue, ...] = ()

    def __post_init__(self) -> None:
        # Cues are kept sorted so the scheduler can walk them with a cursor
        ordered = tuple(sorted(self.cues, key=lambda c: c.at))
        if ordered != self.cues:
            object.__setattr__(self, "cues", ordered)

    def enter(self, stage: "Stage") -> None:
        """Run the enter action, if any."""
        if self.on_enter is not None:
            self.on_enter(stage)

    def render(self, stage: "Stage", t: float) -> None:
        """Render the scene at local time ``t``."""
        self.draw(stage, t)

    def with_cue(
        self,
        at: float,
        text: str,
        rate: float = 1.0,
        subtitle: str | None = None,
    ) -> "Scene":
        """Return copy with an additional narration cue."""
        return Scene(
            name=self.name,
            duration=self.duration,
            draw=self.draw,
            on_enter=self.on_enter,
            cues=self.cues + (Cue(at, text, rate, subtitle),),
        )
