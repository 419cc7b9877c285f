"""
Animatic Errors - Domain-specific error types.

Error hierarchy:
    AnimaticError (base)
    ├── SceneRegistryError
    ├── InvalidSpeedError (also a ValueError)
    └── SchedulerDisposedError
"""

from __future__ import annotations

from typing import Any


class AnimaticError(Exception):
    """Base error for all animatic errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class SceneRegistryError(AnimaticError):
    """
    Raised when a scene list cannot form a valid timeline.

    Examples:
    - Empty scene list
    - Non-positive or non-finite scene duration
    - Cue placed at or past the end of its scene
    """

    def __init__(
        self,
        message: str,
        scene_name: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.scene_name = scene_name


class InvalidSpeedError(AnimaticError, ValueError):
    """
    Raised when a playback speed is zero, negative, or not finite.

    The clock keeps its previous speed when this is raised.
    """

    def __init__(self, speed: Any, current: float | None = None):
        super().__init__(
            f"Speed must be a finite positive number, got {speed!r}",
            details={"requested": speed, "current": current},
        )
        self.speed = speed
        self.current = current


class SchedulerDisposedError(AnimaticError):
    """Raised when a disposed scheduler is asked to play again."""

    def __init__(self, action: str):
        super().__init__(
            f"Cannot {action}: scheduler has been disposed",
            details={"action": action},
        )
        self.action = action
