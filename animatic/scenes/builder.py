"""
Scene Builder - Fluent sequence construction.

Features:
    - Fluent API for building scene registries
    - Narration cues attached to the most recent scene
    - Subtitle / narration shorthand for simple enter actions
"""

from __future__ import annotations

from dataclasses import dataclass, field

from animatic.errors import SceneRegistryError
from animatic.scenes.registry import SceneRegistry
from animatic.scenes.scene import Cue, DrawCallback, EnterCallback, Scene, _draw_nothing


@dataclass
class _PendingScene:
    """A scene still being assembled by the builder."""

    name: str
    duration: float
    draw: DrawCallback
    on_enter: EnterCallback | None
    subtitle: str | None = None
    narration: tuple[str, float] | None = None
    cues: list[Cue] = field(default_factory=list)

    def build(self) -> Scene:
        return Scene(
            name=self.name,
            duration=self.duration,
            draw=self.draw,
            on_enter=self._enter_action(),
            cues=tuple(self.cues),
        )

    def _enter_action(self) -> EnterCallback | None:
        if self.subtitle is None and self.narration is None:
            return self.on_enter

        subtitle = self.subtitle
        narration = self.narration
        custom = self.on_enter

        def enter(stage) -> None:
            if subtitle is not None:
                stage.subtitles.set(subtitle)
            if narration is not None:
                stage.narrate(narration[0], narration[1])
            if custom is not None:
                custom(stage)

        return enter


class SceneBuilder:
    """
    Fluent builder for scene sequences.

    Example:
        registry = (
            SceneBuilder()
            .scene("1831", 3.0, draw=draw_1831)
            .subtitle("Year: 1831")
            .narrate("The year is 1831.")
            .scene("Teleport", 1.6, draw=draw_teleport)
            .narrate("I'm going to 2030.", rate=1.1)
            .cue(0.8, "Whoosh.")
            .build()
        )
    """

    def __init__(self) -> None:
        self._pending: list[_PendingScene] = []

    def scene(
        self,
        name: str,
        duration: float,
        draw: DrawCallback | None = None,
        on_enter: EnterCallback | None = None,
    ) -> "SceneBuilder":
        """Start a new scene after the current one."""
        self._pending.append(
            _PendingScene(
                name=name,
                duration=duration,
                draw=draw or _draw_nothing,
                on_enter=on_enter,
            )
        )
        return self

    def subtitle(self, text: str) -> "SceneBuilder":
        """Set the subtitle shown when the current scene is entered."""
        self._current("subtitle").subtitle = text
        return self

    def narrate(self, text: str, rate: float = 1.0) -> "SceneBuilder":
        """Speak ``text`` when the current scene is entered."""
        self._current("narrate").narration = (text, rate)
        return self

    def cue(
        self,
        at: float,
        text: str,
        rate: float = 1.0,
        subtitle: str | None = None,
    ) -> "SceneBuilder":
        """Queue ``text`` at local time ``at`` of the current scene."""
        self._current("cue").cues.append(Cue(at, text, rate, subtitle))
        return self

    def build(self) -> SceneRegistry:
        """Build the immutable registry."""
        return SceneRegistry(p.build() for p in self._pending)

    def _current(self, action: str) -> _PendingScene:
        if not self._pending:
            raise SceneRegistryError(f"Call scene() before {action}()")
        return self._pending[-1]
