"""
Adapters - Outer surfaces of the player.

    cli     - ``animatic`` command (play, scenes, version)
    player  - asyncio headless playback
"""

from animatic.adapters.cli import main
from animatic.adapters.player import play_headless, PlaybackSummary

__all__ = [
    "main",
    "play_headless",
    "PlaybackSummary",
]
