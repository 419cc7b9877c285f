"""
CLI Adapter - Command-line interface.

Thin wrapper over the headless player.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path


def main(args: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="animatic",
        description="Play timed scene sequences with narration and subtitles",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # play command
    play_parser = subparsers.add_parser("play", help="Play the sequence headless in real time")
    play_parser.add_argument("-s", "--speed", type=float, help="Speed multiplier (default: 1.0)")
    play_parser.add_argument("--fps", type=int, help="Frames per second (default: 60)")
    play_parser.add_argument("--no-voice", action="store_true", help="Disable narration")
    play_parser.add_argument("--captions", help="Write captions to this .vtt or .srt file")
    play_parser.add_argument("--log-level", default="warning", help="Log level (default: warning)")
    play_parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON")

    # scenes command
    subparsers.add_parser("scenes", help="List scenes and their time ranges")

    # version command
    subparsers.add_parser("version", help="Show version")

    parsed = parser.parse_args(args)

    if parsed.command is None:
        parser.print_help()
        return 0

    if parsed.command == "version":
        from animatic import __version__
        print(f"animatic {__version__}")
        return 0

    if parsed.command == "scenes":
        return _cmd_scenes()

    if parsed.command == "play":
        return _cmd_play(parsed)

    return 1


def _cmd_scenes() -> int:
    """Handle scenes command."""
    from animatic.story import old_fangled_future

    registry = old_fangled_future()

    print(f"{'#':>2}  {'Start':>6}  {'End':>6}  Name")
    for index, scene in enumerate(registry):
        bounds = registry.range_of(index)
        print(f"{index + 1:>2}  {bounds.start:6.2f}  {bounds.end:6.2f}  {scene.name}")
    print(f"Total: {registry.total_duration:.2f}s")
    return 0


def _cmd_play(args: argparse.Namespace) -> int:
    """Handle play command."""
    from animatic.config import PlayerConfig
    from animatic.adapters.player import play_headless
    from animatic.monitoring.logging import configure_logging

    try:
        base = PlayerConfig.from_env()
        config = PlayerConfig(
            speed=args.speed if args.speed is not None else base.speed,
            narration_enabled=base.narration_enabled and not args.no_voice,
            fps=args.fps if args.fps is not None else base.fps,
        )
        logger = configure_logging(level=args.log_level, json_format=args.json_logs)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    captions = Path(args.captions) if args.captions else None

    try:
        summary = asyncio.run(play_headless(config, captions_path=captions, logger=logger))
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        return 130

    print(
        f"Done: {summary.elapsed:.2f}s of timeline in {summary.wall_seconds:.2f}s, "
        f"{summary.frames_rendered} frames, {summary.lines_spoken} lines spoken"
    )
    if summary.captions_path:
        print(f"Captions saved to: {summary.captions_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
