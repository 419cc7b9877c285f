"""
Scheduler - The frame loop that plays a scene registry.

Each tick:
    1. Advance the timeline clock with the frame timestamp
    2. Resolve the active scene from elapsed time
    3. On a scene change: clear narration, switch index, run on_enter
    4. Fire due narration cues of the active scene
    5. Clear the canvas and draw the scene at its local time
    6. Finish at the total duration, otherwise request the next tick

Steps 3-5 always run in this order within one tick, so a scene is never
drawn before its enter action has run.

Invariants enforced:
    1. current_scene_index == registry.resolve(elapsed) after every tick
    2. on_enter fires exactly once per contiguous stay in a scene
    3. Each cue fires at most once per stay and never after leaving
    4. No tick is outstanding unless the state is PLAYING
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from animatic.errors import SchedulerDisposedError
from animatic.monitoring.logging import StructuredLogger, LogLevel, get_logger
from animatic.narration.queue import NarrationQueue
from animatic.presentation.subtitles import SubtitleSink
from animatic.render.surface import Canvas, FrameBuffer
from animatic.runtime.clock import TimelineClock
from animatic.runtime.frames import FrameSource, ManualFrameSource
from animatic.runtime.stage import Stage
from animatic.scenes.registry import SceneRegistry
from animatic.scenes.scene import Scene


class SchedulerState(Enum):
    """Playback lifecycle states."""

    IDLE = "idle"
    PLAYING = "playing"
    FINISHED = "finished"


# Valid state transitions (from -> to)
VALID_TRANSITIONS: dict[SchedulerState, set[SchedulerState]] = {
    SchedulerState.IDLE: {SchedulerState.PLAYING, SchedulerState.IDLE},
    SchedulerState.PLAYING: {SchedulerState.IDLE, SchedulerState.FINISHED},
    SchedulerState.FINISHED: {SchedulerState.PLAYING, SchedulerState.IDLE},
}


def is_valid_transition(from_state: SchedulerState, to_state: SchedulerState) -> bool:
    """Check if a state transition is valid."""
    return to_state in VALID_TRANSITIONS.get(from_state, set())


@dataclass(frozen=True)
class TimelineState:
    """Snapshot of the playback state."""

    elapsed: float
    speed: float
    current_scene_index: int
    playing: bool
    state: SchedulerState = SchedulerState.IDLE


SceneChangeCallback = Callable[[int, Scene], None]
CompleteCallback = Callable[[], None]


class Scheduler:
    """Drives a SceneRegistry from frame ticks.

    Args:
        registry: Scenes to play.
        frame_source: Tick provider (defaults to a ManualFrameSource).
        canvas: Render target (defaults to a 960x540 FrameBuffer).
        subtitles: Subtitle sink.
        narration: Narration queue (defaults to a queue with no backend).
        clock: Timeline clock (defaults to speed 1.0).
        complete_text: Subtitle set when the sequence finishes.
        logger: Structured logger.

    Example:
        frames = ManualFrameSource()
        scheduler = Scheduler(registry, frame_source=frames)
        scheduler.reset()        # scene 0 entered and drawn at t=0
        scheduler.start()
        frames.fire(100.0)       # first tick adds no time
        frames.fire(101.0)       # elapsed == 1.0
    """

    def __init__(
        self,
        registry: SceneRegistry,
        frame_source: FrameSource | None = None,
        canvas: Canvas | None = None,
        subtitles: SubtitleSink | None = None,
        narration: NarrationQueue | None = None,
        clock: TimelineClock | None = None,
        complete_text: str = "Replay?",
        logger: StructuredLogger | None = None,
    ):
        self._registry = registry
        self._frames = frame_source if frame_source is not None else ManualFrameSource()
        self._clock = clock if clock is not None else TimelineClock()
        logger = logger if logger is not None else get_logger()
        self._logger = logger.bind(component="scheduler")
        # An empty NarrationQueue is falsy
        self._narration = narration if narration is not None else NarrationQueue(logger=logger)
        self._subtitles = subtitles if subtitles is not None else SubtitleSink()
        self._stage = Stage(
            canvas=canvas if canvas is not None else FrameBuffer(960, 540),
            subtitles=self._subtitles,
            narration=self._narration,
            clock=self._clock,
        )
        self._complete_text = complete_text

        self._state = SchedulerState.IDLE
        self._index = 0
        self._entered = False
        self._cue_cursor = 0
        self._disposed = False

        # Callbacks
        self._scene_listeners: list[SceneChangeCallback] = []
        self._complete_listeners: list[CompleteCallback] = []

        # Statistics
        self._frames_rendered = 0
        self._ticks = 0

    @property
    def registry(self) -> SceneRegistry:
        return self._registry

    @property
    def stage(self) -> Stage:
        return self._stage

    @property
    def clock(self) -> TimelineClock:
        return self._clock

    @property
    def narration(self) -> NarrationQueue:
        return self._narration

    @property
    def subtitles(self) -> SubtitleSink:
        return self._subtitles

    @property
    def frame_source(self) -> FrameSource:
        return self._frames

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def playing(self) -> bool:
        return self._state == SchedulerState.PLAYING

    @property
    def finished(self) -> bool:
        return self._state == SchedulerState.FINISHED

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def elapsed(self) -> float:
        return self._clock.elapsed

    @property
    def current_scene_index(self) -> int:
        return self._index

    @property
    def current_scene(self) -> Scene:
        return self._registry[self._index]

    @property
    def frames_rendered(self) -> int:
        return self._frames_rendered

    @property
    def timeline(self) -> TimelineState:
        """Snapshot of elapsed, speed, scene index and playing flag."""
        return TimelineState(
            elapsed=self._clock.elapsed,
            speed=self._clock.speed,
            current_scene_index=self._index,
            playing=self.playing,
            state=self._state,
        )

    def on_scene_change(self, callback: SceneChangeCallback) -> "Scheduler":
        """Set callback for scene transitions: ``(index, scene)``."""
        self._scene_listeners.append(callback)
        return self

    def on_complete(self, callback: CompleteCallback) -> "Scheduler":
        """Set callback for the end of the sequence."""
        self._complete_listeners.append(callback)
        return self

    # Lifecycle

    def start(self) -> bool:
        """Begin or resume ticking.

        Elapsed time is never reset here, so this resumes after stop().
        From FINISHED the next tick redraws the last frame and finishes
        again; use replay() or reset() to start over.

        Returns:
            False if already playing.
        """
        if self._disposed:
            raise SchedulerDisposedError("play")
        if self._state == SchedulerState.PLAYING:
            return False

        # No timestamp is recorded until the first tick arrives
        self._clock.suspend()
        self._set_state(SchedulerState.PLAYING)
        self._frames.request(self.tick)
        self._logger.info("play", elapsed=round(self._clock.elapsed, 4))
        return True

    def stop(self) -> bool:
        """Pause: stop ticking and silence narration.

        Returns:
            True if playback was running.
        """
        was_playing = self._state == SchedulerState.PLAYING
        if was_playing:
            self._frames.cancel()
            self._clock.suspend()
            self._set_state(SchedulerState.IDLE)
            self._logger.info("pause", elapsed=round(self._clock.elapsed, 4))

        self._narration.clear()
        return was_playing

    def reset(self) -> None:
        """Rewind to scene 0 and show its first frame without playing.

        Runs scene 0's enter action and one draw at local time 0.
        Calling it repeatedly leaves the same state as calling it once.
        """
        if self._disposed:
            raise SchedulerDisposedError("reset")

        self._frames.cancel()
        self._rewind()
        self._set_state(SchedulerState.IDLE)

        self._enter(0)
        self._render(0, 0.0)
        self._logger.info("reset")

    def replay(self) -> bool:
        """reset() then start(): play again from scene 0."""
        self.reset()
        return self.start()

    def dispose(self) -> None:
        """Stop everything; the scheduler cannot be played again."""
        if self._disposed:
            return
        self._frames.cancel()
        self._clock.suspend()
        self._narration.clear()
        self._state = SchedulerState.IDLE
        self._disposed = True
        self._scene_listeners.clear()
        self._complete_listeners.clear()
        self._logger.info("dispose", frames_rendered=self._frames_rendered)

    def set_speed(self, speed: float) -> float:
        """Change speed for future ticks. Raises InvalidSpeedError."""
        return self._clock.set_speed(speed)

    # Frame loop

    def tick(self, timestamp: float) -> None:
        """Handle one frame. A no-op unless PLAYING."""
        if self._state != SchedulerState.PLAYING:
            return

        self._ticks += 1
        self._clock.advance(timestamp)
        elapsed = self._clock.elapsed

        index = self._registry.resolve(elapsed)
        if index != self._index or not self._entered:
            self._enter(index)

        local_time = self._render(index, elapsed)

        if self._logger.is_enabled_for(LogLevel.DEBUG):
            self._logger.debug(
                "frame",
                index=index,
                elapsed=round(elapsed, 4),
                local_time=round(local_time, 4),
            )

        # An enter action or listener may have paused, reset or disposed
        if self._state != SchedulerState.PLAYING:
            return

        if elapsed >= self._registry.total_duration:
            self._finish()
            return

        self._frames.request(self.tick)

    def _enter(self, index: int) -> None:
        """Switch to scene ``index`` and run its enter action."""
        self._narration.clear()
        self._index = index
        self._entered = True
        self._cue_cursor = 0
        self._subtitles.clear()

        scene = self._registry[index]
        self._logger.scene_enter(index, scene.name, self._clock.elapsed)
        scene.enter(self._stage)

        for callback in list(self._scene_listeners):
            callback(index, scene)

    def _render(self, index: int, elapsed: float) -> float:
        """Fire due cues, then clear and draw. Returns the local time."""
        scene = self._registry[index]
        local_time = max(0.0, elapsed - self._registry.range_of(index).start)

        cues = scene.cues
        while self._cue_cursor < len(cues) and cues[self._cue_cursor].at <= local_time:
            cue = cues[self._cue_cursor]
            self._cue_cursor += 1
            if cue.subtitle is not None:
                self._subtitles.set(cue.subtitle)
            self._stage.narrate(cue.text, cue.rate)

        self._stage.canvas.clear()
        scene.render(self._stage, local_time)
        self._frames_rendered += 1
        return local_time

    def _finish(self) -> None:
        self._frames.cancel()
        self._clock.suspend()
        self._set_state(SchedulerState.FINISHED)
        self._subtitles.set(self._complete_text)
        self._logger.sequence_complete(self._clock.elapsed, frames_rendered=self._frames_rendered)

        for callback in list(self._complete_listeners):
            callback()

    def _rewind(self) -> None:
        self._clock.reset()
        self._index = 0
        self._entered = False
        self._cue_cursor = 0
        self._narration.clear()
        self._subtitles.clear()

    def _set_state(self, state: SchedulerState) -> None:
        if not is_valid_transition(self._state, state):
            raise RuntimeError(f"Invalid scheduler transition {self._state.value} -> {state.value}")
        self._state = state
