"""
Shared fixtures: recording scenes, manual frames, mock speech.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from animatic.monitoring.logging import configure_logging
from animatic.narration.queue import NarrationQueue
from animatic.presentation.subtitles import SubtitleSink
from animatic.render.surface import FrameBuffer
from animatic.runtime.clock import TimelineClock
from animatic.runtime.frames import ManualFrameSource
from animatic.runtime.scheduler import Scheduler
from animatic.scenes.registry import SceneRegistry
from animatic.scenes.scene import Cue, Scene
from animatic.testing import SpeechMock


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep scheduler INFO events out of test output."""
    configure_logging(level="error")
    yield


@dataclass
class SceneRecorder:
    """Builds scenes whose callbacks append to a shared event log."""

    events: list[tuple] = field(default_factory=list)

    def scene(
        self,
        name: str,
        duration: float,
        narration: tuple[str, ...] = (),
        subtitle: str | None = None,
        cues: tuple[Cue, ...] = (),
    ) -> Scene:
        def on_enter(stage) -> None:
            self.events.append(("enter", name))
            if subtitle is not None:
                stage.subtitles.set(subtitle)
            for line in narration:
                stage.narrate(line)

        def draw(stage, t: float) -> None:
            self.events.append(("draw", name, t))

        return Scene(name, duration, draw=draw, on_enter=on_enter, cues=cues)

    def enters(self) -> list[str]:
        return [e[1] for e in self.events if e[0] == "enter"]

    def draws(self) -> list[tuple[str, float]]:
        return [(e[1], e[2]) for e in self.events if e[0] == "draw"]

    def kinds(self) -> list[str]:
        return [e[0] for e in self.events]


@dataclass
class Rig:
    """A scheduler wired to test doubles."""

    scheduler: Scheduler
    frames: ManualFrameSource
    speech: SpeechMock
    recorder: SceneRecorder

    def fire(self, *timestamps: float) -> None:
        for ts in timestamps:
            assert self.frames.fire(ts), f"no tick pending at {ts}"


@pytest.fixture
def recorder() -> SceneRecorder:
    return SceneRecorder()


@pytest.fixture
def make_rig(recorder):
    """Factory: ``make_rig(scenes, speed=1.0)`` -> Rig."""

    def factory(scenes=None, speed: float = 1.0, narration_enabled: bool = True) -> Rig:
        if scenes is None:
            scenes = [
                recorder.scene("first", 3.0, narration=("one", "two"), subtitle="First"),
                recorder.scene("second", 1.6, narration=("three",), subtitle="Second"),
            ]
        speech = SpeechMock()
        frames = ManualFrameSource()
        scheduler = Scheduler(
            SceneRegistry(scenes),
            frame_source=frames,
            canvas=FrameBuffer(32, 18),
            subtitles=SubtitleSink(),
            narration=NarrationQueue(speech, enabled=narration_enabled),
            clock=TimelineClock(speed=speed),
        )
        return Rig(scheduler=scheduler, frames=frames, speech=speech, recorder=recorder)

    return factory
