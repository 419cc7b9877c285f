"""
Scene Registry - Immutable ordered scene list with cumulative timing.

Invariants enforced:
    1. At least one scene
    2. Every duration is finite and positive
    3. Ranges partition [0, total_duration) with no gaps or overlaps
    4. A boundary instant belongs to the later scene
"""

from __future__ import annotations

import math
from bisect import bisect_right
from itertools import accumulate
from collections.abc import Iterable, Iterator, Sequence

from animatic.errors import SceneRegistryError
from animatic.scenes.scene import Scene, SceneRange


class SceneRegistry(Sequence[Scene]):
    """Ordered, immutable collection of scenes.

    Example:
        registry = SceneRegistry([Scene("a", 3.0), Scene("b", 1.6)])
        registry.resolve(2.9)    # 0
        registry.resolve(3.0)    # 1
        registry.range_of(1)     # SceneRange(start=3.0, end=4.6)
    """

    def __init__(self, scenes: Iterable[Scene]):
        scenes = tuple(scenes)
        if not scenes:
            raise SceneRegistryError("A scene registry needs at least one scene")

        for index, scene in enumerate(scenes):
            duration = scene.duration
            if (
                not isinstance(duration, (int, float))
                or not math.isfinite(duration)
                or duration <= 0
            ):
                raise SceneRegistryError(
                    f"Scene {scene.name!r} has invalid duration {duration!r}",
                    scene_name=scene.name,
                    details={"index": index, "duration": duration},
                )
            for cue in scene.cues:
                if cue.at >= duration:
                    raise SceneRegistryError(
                        f"Cue at {cue.at}s falls outside scene {scene.name!r} ({duration}s)",
                        scene_name=scene.name,
                        details={"index": index, "cue_at": cue.at},
                    )

        self._scenes = scenes
        self._ends = tuple(accumulate(float(s.duration) for s in scenes))

    def __getitem__(self, index):
        return self._scenes[index]

    def __len__(self) -> int:
        return len(self._scenes)

    def __iter__(self) -> Iterator[Scene]:
        return iter(self._scenes)

    def __repr__(self) -> str:
        names = ", ".join(s.name for s in self._scenes)
        return f"SceneRegistry([{names}], total={self.total_duration})"

    @property
    def total_duration(self) -> float:
        """Sum of all scene durations."""
        return self._ends[-1]

    @property
    def last_index(self) -> int:
        return len(self._scenes) - 1

    def range_of(self, index: int) -> SceneRange:
        """Cumulative ``[start, end)`` bounds of the scene at ``index``."""
        if not 0 <= index < len(self._scenes):
            raise IndexError(f"Scene index {index} out of range")
        start = self._ends[index - 1] if index > 0 else 0.0
        return SceneRange(start=start, end=self._ends[index])

    def resolve(self, t: float) -> int:
        """Index of the scene active at virtual time ``t``.

        Returns the smallest ``i`` with ``t < end(i)``. Times at or past
        the total duration clamp to the last scene; negative times
        resolve to the first.
        """
        return min(bisect_right(self._ends, t), self.last_index)

    def ranges(self) -> list[SceneRange]:
        """All scene ranges in order."""
        return [self.range_of(i) for i in range(len(self._scenes))]
