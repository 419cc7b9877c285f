"""
Tests for PlaybackController and create_player.
"""

import io
import json

import pytest

from animatic import PlayerConfig, SchedulerState, create_player
from animatic.monitoring import LogLevel, StructuredLogger
from animatic.runtime import ManualFrameSource
from animatic.scenes import SceneRegistry
from animatic.testing import SpeechMock


@pytest.fixture
def player(recorder):
    frames = ManualFrameSource()
    speech = SpeechMock()
    registry = SceneRegistry(
        [
            recorder.scene("first", 3.0, narration=("one", "two"), subtitle="First"),
            recorder.scene("second", 1.6, narration=("three",), subtitle="Second"),
        ]
    )
    controller = create_player(
        PlayerConfig(width=64, height=36),
        registry=registry,
        backend=speech,
        frame_source=frames,
    )
    return controller, frames, speech


class TestCreatePlayer:
    """Tests for the player factory."""

    def test_primed_on_creation(self, player, recorder):
        controller, frames, speech = player

        assert recorder.kinds() == ["enter", "draw"]
        assert controller.subtitles.text == "First"
        assert controller.state.state == SchedulerState.IDLE
        assert not controller.playing
        assert not frames.pending
        speech.assert_spoken("one")

    def test_canvas_uses_config_size(self, player):
        controller, _, _ = player
        canvas = controller.scheduler.stage.canvas
        assert (canvas.width, canvas.height) == (64, 36)

    def test_config_speed_and_narration(self):
        speech = SpeechMock()
        controller = create_player(
            PlayerConfig(speed=1.5, narration_enabled=False),
            backend=speech,
        )
        assert controller.speed == 1.5
        assert not controller.narration.enabled
        assert speech.speak_calls == []

    def test_backend_is_wired_through(self, recorder):
        speech = SpeechMock()
        controller = create_player(
            registry=SceneRegistry([recorder.scene("only", 1.0, narration=("hello",))]),
            backend=speech,
        )

        assert controller.narration.backend is speech
        assert speech.spoken_texts == ["hello"]

    def test_default_registry_is_bundled_story(self):
        controller = create_player()
        assert len(controller.scheduler.registry) == 7
        assert controller.subtitles.text == "Year: 1831 - Civil War"


class TestPlaybackCommands:
    """Tests for play / pause / toggle / reset."""

    def test_play_and_pause(self, player):
        controller, frames, _ = player

        assert controller.play() is True
        assert frames.pending
        assert controller.state.playing

        assert controller.pause() is True
        assert not frames.pending
        assert not controller.narration.is_speaking

    def test_toggle(self, player):
        controller, frames, _ = player

        assert controller.toggle() is True
        assert controller.toggle() is False
        assert controller.toggle() is True

    def test_reset_rewinds(self, player):
        controller, frames, _ = player
        controller.play()
        frames.run([0.0, 1.0, 2.0, 3.5])
        assert controller.state.current_scene_index == 1

        controller.reset()

        assert controller.state.elapsed == 0.0
        assert controller.state.current_scene_index == 0
        assert not controller.playing
        assert controller.subtitles.text == "First"

    def test_play_after_finish_keeps_elapsed(self, player):
        controller, frames, _ = player
        controller.play()
        frames.run([0.0, 10.0])
        assert controller.state.state == SchedulerState.FINISHED

        controller.play()
        frames.run([11.0])

        assert controller.state.elapsed == 10.0
        assert controller.state.state == SchedulerState.FINISHED
        assert controller.subtitles.text == "Replay?"

    def test_replay(self, player, recorder):
        controller, frames, speech = player
        controller.play()
        frames.run([0.0, 10.0])

        assert controller.replay() is True

        assert controller.playing
        assert controller.state.elapsed == 0.0
        assert controller.subtitles.text == "First"
        assert recorder.enters() == ["first", "second", "first"]
        assert speech.spoken_texts[-1] == "one"


class TestSpeed:
    """Tests for set_speed."""

    def test_valid_speed(self, player):
        controller, frames, _ = player
        assert controller.set_speed(2.0) is True
        assert controller.speed == 2.0

        controller.play()
        frames.run([0.0, 1.0])
        assert controller.state.elapsed == 2.0

    @pytest.mark.parametrize("bad", [0.0, -1.0, float("nan"), float("inf")])
    def test_invalid_speed_keeps_current(self, player, bad):
        controller, _, _ = player
        controller.set_speed(1.25)

        assert controller.set_speed(bad) is False
        assert controller.speed == 1.25

    def test_invalid_speed_logged(self, recorder):
        buf = io.StringIO()
        logger = StructuredLogger(level=LogLevel.WARNING, output=buf)
        controller = create_player(
            registry=SceneRegistry([recorder.scene("only", 1.0)]),
            logger=logger,
        )

        controller.set_speed(-3)

        records = [json.loads(line) for line in buf.getvalue().splitlines()]
        assert [r["event"] for r in records] == ["speed_rejected"]
        assert records[0]["current"] == 1.0
        assert records[0]["component"] == "controller"


class TestNarrationToggle:
    """Tests for set_narration_enabled."""

    def test_disable_cancels_speech(self, player):
        controller, frames, speech = player
        assert controller.narration.is_speaking

        controller.set_narration_enabled(False)

        assert not controller.narration.is_speaking
        assert speech.cancel_count >= 1

        controller.play()
        frames.run([0.0, 1.0, 2.0, 3.0])
        speech.assert_spoken("one")

    def test_reenable(self, player):
        controller, frames, speech = player
        controller.set_narration_enabled(False)
        controller.set_narration_enabled(True)

        controller.play()
        frames.run([0.0, 3.0])
        speech.assert_spoken("one", "three")


class TestDispose:
    def test_dispose(self, player):
        controller, frames, _ = player
        controller.play()
        controller.dispose()

        assert not frames.pending
        assert controller.scheduler.disposed
