"""
Playback Controller - play / pause / reset / speed for a scheduler.

The controller is what presentation code (buttons, sliders, the CLI)
talks to. It never touches scene data directly.
"""

from __future__ import annotations

from animatic.config import PlayerConfig
from animatic.errors import InvalidSpeedError
from animatic.monitoring.logging import StructuredLogger, get_logger
from animatic.narration.backend import SpeechBackend
from animatic.narration.queue import NarrationQueue
from animatic.presentation.subtitles import SubtitleSink
from animatic.render.surface import Canvas, FrameBuffer
from animatic.runtime.clock import TimelineClock
from animatic.runtime.frames import FrameSource, ManualFrameSource
from animatic.runtime.scheduler import Scheduler, TimelineState
from animatic.scenes.registry import SceneRegistry


class PlaybackController:
    """User-facing playback commands.

    Example:
        controller = create_player(PlayerConfig(speed=1.0))
        controller.play()
        controller.set_speed(2.0)
        controller.pause()
        controller.reset()
    """

    def __init__(
        self,
        scheduler: Scheduler,
        logger: StructuredLogger | None = None,
    ):
        self._scheduler = scheduler
        self._logger = (logger if logger is not None else get_logger()).bind(component="controller")

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def narration(self) -> NarrationQueue:
        return self._scheduler.narration

    @property
    def subtitles(self) -> SubtitleSink:
        return self._scheduler.subtitles

    @property
    def state(self) -> TimelineState:
        return self._scheduler.timeline

    @property
    def playing(self) -> bool:
        return self._scheduler.playing

    @property
    def speed(self) -> float:
        return self._scheduler.clock.speed

    def play(self) -> bool:
        """Start or resume. A no-op while already playing."""
        return self._scheduler.start()

    def pause(self) -> bool:
        """Stop ticking and clear narration."""
        return self._scheduler.stop()

    def toggle(self) -> bool:
        """Play if paused, pause if playing. Returns the new playing flag."""
        if self._scheduler.playing:
            self.pause()
        else:
            self.play()
        return self._scheduler.playing

    def reset(self) -> None:
        """Rewind to the first frame of scene 0."""
        self._scheduler.reset()

    def replay(self) -> bool:
        """Rewind to scene 0 and play."""
        return self._scheduler.replay()

    def set_speed(self, speed: float) -> bool:
        """Change playback speed from the next tick on.

        Invalid values (zero, negative, NaN, infinite) are rejected and the
        current speed is kept.

        Returns:
            True if the speed was applied.
        """
        try:
            self._scheduler.set_speed(speed)
        except InvalidSpeedError as e:
            self._logger.speed_rejected(speed, e.current if e.current is not None else self.speed)
            return False

        self._logger.info("speed", speed=self.speed)
        return True

    def set_narration_enabled(self, enabled: bool) -> None:
        """Switch narration on or off. Off clears anything queued."""
        self.narration.set_enabled(enabled)
        self._logger.info("narration_toggled", enabled=enabled)

    def dispose(self) -> None:
        self._scheduler.dispose()


def create_player(
    config: PlayerConfig | None = None,
    registry: SceneRegistry | None = None,
    backend: SpeechBackend | None = None,
    frame_source: FrameSource | None = None,
    canvas: Canvas | None = None,
    logger: StructuredLogger | None = None,
) -> PlaybackController:
    """Build a ready-to-play controller.

    The player is primed with reset(): scene 0 is entered and its first
    frame drawn, but no ticks are requested until play().

    Args:
        config: Player configuration (defaults to PlayerConfig()).
        registry: Scenes to play (defaults to the bundled demo story).
        backend: Speech backend (defaults to no speech output).
        frame_source: Tick source (defaults to a ManualFrameSource).
        canvas: Render target (defaults to a FrameBuffer of config size).
        logger: Structured logger.
    """
    config = config if config is not None else PlayerConfig()
    logger = logger if logger is not None else get_logger()

    if registry is None:
        from animatic.story import old_fangled_future
        registry = old_fangled_future()

    narration = NarrationQueue(
        backend=backend,
        enabled=config.narration_enabled,
        logger=logger,
    )
    scheduler = Scheduler(
        registry,
        frame_source=frame_source if frame_source is not None else ManualFrameSource(),
        canvas=canvas if canvas is not None else FrameBuffer(config.width, config.height),
        narration=narration,
        clock=TimelineClock(speed=config.speed),
        complete_text=config.complete_text,
        logger=logger,
    )

    controller = PlaybackController(scheduler, logger=logger)
    controller.reset()
    return controller
