"""
Headless Player - Play a sequence on an asyncio event loop.

Frame ticks and speech completions are both ``loop.call_later``
callbacks, so they never run at the same time.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from animatic.config import PlayerConfig
from animatic.monitoring.logging import StructuredLogger, get_logger
from animatic.narration.backend import TimedSpeechBackend
from animatic.narration.queue import NarrationItem
from animatic.presentation.subtitles import CaptionFormat, CaptionTrack
from animatic.runtime.controller import create_player
from animatic.runtime.frames import AsyncioFrameSource
from animatic.scenes.registry import SceneRegistry
from animatic.scenes.scene import Scene


@dataclass
class PlaybackSummary:
    """What happened during a headless run."""

    elapsed: float
    wall_seconds: float
    frames_rendered: int
    lines_spoken: int
    captions_path: Path | None = None


async def play_headless(
    config: PlayerConfig | None = None,
    registry: SceneRegistry | None = None,
    captions_path: Path | None = None,
    echo: Callable[[str], None] = print,
    wait_for_speech: bool = True,
    logger: StructuredLogger | None = None,
) -> PlaybackSummary:
    """Play ``registry`` to the end in real time.

    Subtitles and spoken lines are echoed as they happen.

    Args:
        config: Player configuration.
        registry: Scenes to play (defaults to the bundled story).
        captions_path: Write a caption file here when done (.srt or .vtt).
        echo: Where to print subtitles and narration.
        wait_for_speech: Let the last narration finish before returning.
        logger: Structured logger.
    """
    config = config if config is not None else PlayerConfig()
    logger = logger if logger is not None else get_logger()
    loop = asyncio.get_running_loop()
    spoken: list[NarrationItem] = []

    def on_speak(item: NarrationItem) -> None:
        spoken.append(item)
        echo(f"  (voice x{item.rate:.2f}) {item.text}")

    backend = TimedSpeechBackend(loop.call_later, on_speak=on_speak)
    frames = AsyncioFrameSource(loop, config.frame_interval)
    controller = create_player(
        config,
        registry=registry,
        backend=backend,
        frame_source=frames,
        logger=logger,
    )
    scheduler = controller.scheduler

    def announce(index: int, scene: Scene) -> None:
        echo(f"-- scene {index + 1}/{len(scheduler.registry)}: {scene.name}")

    def show(text: str) -> None:
        if text:
            echo(f"[{scheduler.elapsed:6.2f}s] {text}")

    # create_player already entered scene 0; pick up its state here
    announce(scheduler.current_scene_index, scheduler.current_scene)
    show(controller.subtitles.text)

    track = CaptionTrack(lambda: scheduler.elapsed).attach(controller.subtitles)
    track.record(controller.subtitles.text)
    controller.subtitles.subscribe(show)
    scheduler.on_scene_change(announce)

    done: asyncio.Future[None] = loop.create_future()
    scheduler.on_complete(lambda: done.done() or done.set_result(None))

    started = time.monotonic()
    controller.play()
    try:
        await done

        if wait_for_speech:
            while controller.narration.is_speaking:
                await asyncio.sleep(config.frame_interval)
    finally:
        summary = PlaybackSummary(
            elapsed=scheduler.elapsed,
            wall_seconds=time.monotonic() - started,
            frames_rendered=scheduler.frames_rendered,
            lines_spoken=len(spoken),
        )
        controller.dispose()

    if captions_path is not None:
        track.finish(scheduler.elapsed)
        fmt = CaptionFormat.SRT if captions_path.suffix.lower() == ".srt" else CaptionFormat.WEBVTT
        captions_path.write_text(track.export(fmt), encoding="utf-8")
        summary.captions_path = captions_path

    return summary
