"""
animatic - Timed scene playback with narration and subtitles.

Architecture:
    frame tick → Scheduler → TimelineClock → SceneRegistry → on_enter / draw
                                  ↓
                          NarrationQueue → SpeechBackend

Public API (stable):
    create_player       - Build a primed PlaybackController
    PlaybackController  - play / pause / reset / set_speed
    PlayerConfig        - Player configuration
    Scene, Cue          - Scene descriptors
    SceneRegistry       - Immutable ordered scenes
    SceneBuilder        - Fluent sequence construction

Submodules:
    runtime        - TimelineClock, Scheduler, frame sources
    narration      - NarrationQueue, speech backends
    scenes         - Scene, SceneRegistry, SceneBuilder
    render         - Canvas protocol, numpy FrameBuffer
    presentation   - SubtitleSink, CaptionTrack
    monitoring     - StructuredLogger
    testing        - SpeechMock
    story          - Bundled "Old-Fangled Future" sequence

Example:
    from animatic import create_player, PlayerConfig
    from animatic.runtime import ManualFrameSource

    frames = ManualFrameSource()
    player = create_player(PlayerConfig(speed=1.5), frame_source=frames)
    player.play()
    frames.fire(0.0)
    frames.fire(1.0)
    print(player.state.current_scene_index)

    # Real-time, headless:
    #   $ animatic play --speed 1.5 --captions story.vtt
"""

__version__ = "0.3.0"

from animatic.config import PlayerConfig
from animatic.errors import (
    AnimaticError,
    SceneRegistryError,
    InvalidSpeedError,
    SchedulerDisposedError,
)
from animatic.scenes import Scene, Cue, SceneRegistry, SceneBuilder
from animatic.runtime import (
    PlaybackController,
    Scheduler,
    SchedulerState,
    TimelineState,
    create_player,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "create_player",
    "PlaybackController",
    "PlayerConfig",
    "Scheduler",
    "SchedulerState",
    "TimelineState",
    # Scenes
    "Scene",
    "Cue",
    "SceneRegistry",
    "SceneBuilder",
    # Errors
    "AnimaticError",
    "SceneRegistryError",
    "InvalidSpeedError",
    "SchedulerDisposedError",
]
