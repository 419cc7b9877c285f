"""
Tests for the bundled Old-Fangled Future sequence.
"""

import numpy as np
import pytest

from animatic import PlayerConfig, create_player
from animatic.runtime import ManualFrameSource
from animatic.story import old_fangled_future
from animatic.testing import SpeechMock


def _frames(until, step=0.1):
    count = int(round(until / step)) + 1
    return [i * step for i in range(count)]


class TestSequence:
    """Tests for the scene list."""

    def test_scene_count_and_total(self):
        registry = old_fangled_future()
        assert len(registry) == 7
        assert registry.total_duration == pytest.approx(22.2)

    def test_scene_order(self):
        names = [scene.name for scene in old_fangled_future()]
        assert names[0] == "1831 Civil War"
        assert names[1] == "Teleport"
        assert names[-1] == "End card"

    def test_cues_inside_scenes(self):
        registry = old_fangled_future()
        for scene in registry:
            assert all(cue.at < scene.duration for cue in scene.cues)
        assert len(registry[3].cues) == 3
        assert len(registry[5].cues) == 4


class TestPlaythrough:
    """Full runs of the sequence on manual frames."""

    def test_every_scene_entered_in_order(self):
        frames = ManualFrameSource()
        controller = create_player(PlayerConfig(width=96, height=54), frame_source=frames)
        seen = []
        controller.scheduler.on_scene_change(lambda index, scene: seen.append(index))

        controller.play()
        frames.run(_frames(23.0))

        assert seen == [1, 2, 3, 4, 5, 6]
        assert controller.scheduler.finished
        assert controller.subtitles.text == "Replay?"

    def test_nasa_scene_sets_thud(self):
        frames = ManualFrameSource()
        controller = create_player(PlayerConfig(width=96, height=54), frame_source=frames)
        registry = controller.scheduler.registry
        nasa_start = registry.range_of(5).start

        controller.play()
        frames.run(_frames(nasa_start + 5.0))

        assert controller.state.current_scene_index == 5
        assert controller.subtitles.text == "Thud."

    def test_shop_cues_spoken_when_completed(self):
        frames = ManualFrameSource()
        speech = SpeechMock()
        controller = create_player(
            PlayerConfig(width=96, height=54),
            backend=speech,
            frame_source=frames,
        )
        registry = controller.scheduler.registry
        shop = registry.range_of(3)

        controller.play()
        frames.fire(0.0)
        for ts in _frames(shop.end - 0.1)[1:]:
            frames.fire(ts)
            speech.complete()

        spoken = speech.spoken_texts
        assert "How much do this cost, bucko?" in spoken
        assert "That's normal price for a dirt piece." in spoken
        assert spoken.index("How much do this cost, bucko?") < spoken.index(
            "That's normal price for a dirt piece."
        )

    def test_frames_actually_drawn(self):
        frames = ManualFrameSource()
        controller = create_player(PlayerConfig(width=96, height=54), frame_source=frames)
        canvas = controller.scheduler.stage.canvas

        assert np.any(canvas.pixels != 0)
