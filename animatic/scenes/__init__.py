"""
Scenes Module

Timed scene descriptors and the registry that lays them on a timeline.

Components:
    Scene          - Duration + draw / enter callbacks + cues
    Cue            - Narration line at a scene-local time
    SceneRegistry  - Immutable ordered scenes with cumulative lookup
    SceneBuilder   - Fluent registry construction

Usage:
    from animatic.scenes import Scene, SceneRegistry

    registry = SceneRegistry([Scene("intro", 3.0), Scene("outro", 1.6)])
    registry.resolve(3.0)  # 1
"""

from animatic.scenes.scene import (
    Scene,
    SceneRange,
    Cue,
)

from animatic.scenes.registry import SceneRegistry

from animatic.scenes.builder import SceneBuilder

__all__ = [
    "Scene",
    "SceneRange",
    "Cue",
    "SceneRegistry",
    "SceneBuilder",
]
