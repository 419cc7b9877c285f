"""
Player configuration for animatic.

Defines playback defaults and the render surface size.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass


_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class PlayerConfig:
    """Configuration for a scene player.

    Args:
        speed: Initial playback speed multiplier (virtual seconds per
            wall-clock second).
        narration_enabled: Start with narration switched on.
        width: Render surface width in pixels.
        height: Render surface height in pixels.
        fps: Target frame rate for the tick source.
        complete_text: Subtitle shown when the sequence finishes.

    Example:
        config = PlayerConfig(speed=1.5, narration_enabled=False)
    """

    speed: float = 1.0
    """Playback speed multiplier."""

    narration_enabled: bool = True
    """Whether scene narration is spoken."""

    width: int = 960
    """Surface width in pixels."""

    height: int = 540
    """Surface height in pixels."""

    fps: int = 60
    """Target frames per second."""

    complete_text: str = "Replay?"
    """Subtitle set once the last scene has finished."""

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not isinstance(self.speed, (int, float)) or not math.isfinite(self.speed) or self.speed <= 0:
            raise ValueError(f"speed must be a finite positive number, got {self.speed!r}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be positive")
        if not 1 <= self.fps <= 240:
            raise ValueError("fps must be between 1 and 240")

    @property
    def frame_interval(self) -> float:
        """Seconds between requested frames."""
        return 1.0 / self.fps

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "PlayerConfig":
        """Build a config from ``ANIMATIC_*`` environment variables.

        Reads ``ANIMATIC_SPEED``, ``ANIMATIC_NARRATION`` and ``ANIMATIC_FPS``.
        Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        kwargs: dict = {}

        if env.get("ANIMATIC_SPEED"):
            kwargs["speed"] = float(env["ANIMATIC_SPEED"])

        narration = env.get("ANIMATIC_NARRATION", "").strip().lower()
        if narration in _TRUE_VALUES:
            kwargs["narration_enabled"] = True
        elif narration in _FALSE_VALUES:
            kwargs["narration_enabled"] = False
        elif narration:
            raise ValueError(f"ANIMATIC_NARRATION must be a boolean, got {narration!r}")

        if env.get("ANIMATIC_FPS"):
            kwargs["fps"] = int(env["ANIMATIC_FPS"])

        return cls(**kwargs)
