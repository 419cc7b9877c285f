"""
Runtime

The timeline clock, the frame-loop scheduler and the playback
controller that drives it.

Key Components:
    TimelineClock       - Frame timestamps to virtual elapsed time
    Scheduler           - Frame loop: resolve scene, enter, draw, finish
    PlaybackController  - play / pause / reset / set_speed
    create_player       - Build a primed controller from a PlayerConfig
    ManualFrameSource   - Caller-driven ticks (tests, offline rendering)
    AsyncioFrameSource  - Ticks from an asyncio event loop

Example:
    from animatic.runtime import create_player, ManualFrameSource

    frames = ManualFrameSource()
    player = create_player(frame_source=frames)
    player.play()
    frames.fire(0.0)
    frames.fire(0.016)
"""

from animatic.runtime.clock import TimelineClock
from animatic.runtime.frames import (
    FrameSource,
    ManualFrameSource,
    AsyncioFrameSource,
)
from animatic.runtime.stage import Stage
from animatic.runtime.scheduler import (
    Scheduler,
    SchedulerState,
    TimelineState,
)
from animatic.runtime.controller import (
    PlaybackController,
    create_player,
)

__all__ = [
    "TimelineClock",
    "FrameSource",
    "ManualFrameSource",
    "AsyncioFrameSource",
    "Stage",
    "Scheduler",
    "SchedulerState",
    "TimelineState",
    "PlaybackController",
    "create_player",
]
