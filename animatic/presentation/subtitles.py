"""
Subtitles & Captions - Accessibility text for the sequence.

Components:
    SubtitleSink   - Current subtitle line, last write wins
    CaptionTrack   - Records subtitle changes against the virtual clock
    CaptionFormat  - Export formats for a recorded track
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable


SubtitleListener = Callable[[str], None]


class SubtitleSink:
    """Holds the subtitle currently on screen.

    Writes are last-write-wins; an empty string clears the line.
    Listeners are notified only when the text actually changes, so a
    draw callback may set the same text every frame.

    Example:
        subtitles = SubtitleSink()
        subtitles.subscribe(print)
        subtitles.set("Year: 1831")   # prints
        subtitles.set("Year: 1831")   # no change, no print
        subtitles.clear()             # prints ""
    """

    def __init__(self) -> None:
        self._text = ""
        self._listeners: list[SubtitleListener] = []
        self.writes = 0

    @property
    def text(self) -> str:
        return self._text

    def subscribe(self, listener: SubtitleListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: SubtitleListener) -> None:
        self._listeners.remove(listener)

    def set(self, text: str | None) -> None:
        text = text or ""
        self.writes += 1
        if text == self._text:
            return
        self._text = text
        for listener in list(self._listeners):
            listener(text)

    def clear(self) -> None:
        self.set("")


class CaptionFormat(Enum):
    """Supported caption file formats."""
    WEBVTT = auto()  # Web Video Text Tracks
    SRT = auto()     # SubRip


@dataclass
class Caption:
    """A single caption entry.

    Attributes:
        text: Caption text
        start_time: Start time in virtual seconds
        end_time: End time in virtual seconds
    """
    text: str
    start_time: float
    end_time: float


class CaptionTrack:
    """Timed record of subtitle changes.

    Attach it to a SubtitleSink with a time source (usually the
    scheduler's elapsed time); each non-empty subtitle becomes a caption
    that lasts until the next change.

    Example:
        track = CaptionTrack(lambda: scheduler.elapsed)
        track.attach(subtitles)
        ...
        track.finish(scheduler.elapsed)
        Path("story.vtt").write_text(track.export(CaptionFormat.WEBVTT))
    """

    def __init__(self, time_source: Callable[[], float]) -> None:
        self._time_source = time_source
        self._captions: list[Caption] = []
        self._open: Caption | None = None

    @property
    def captions(self) -> list[Caption]:
        """Closed captions in order."""
        return list(self._captions)

    def attach(self, sink: SubtitleSink) -> "CaptionTrack":
        sink.subscribe(self.record)
        return self

    def record(self, text: str) -> None:
        """Close the open caption and start ``text`` (if non-empty)."""
        now = self._time_source()
        self._close(now)
        if text:
            self._open = Caption(text=text, start_time=now, end_time=now)

    def finish(self, at: float | None = None) -> None:
        """Close the open caption at ``at`` (default: now)."""
        self._close(self._time_source() if at is None else at)

    def _close(self, now: float) -> None:
        caption = self._open
        self._open = None
        if caption is None:
            return
        # A rewind (reset) ends the caption where it started
        caption.end_time = max(caption.start_time, now)
        if caption.end_time > caption.start_time:
            self._captions.append(caption)

    def export(self, format: CaptionFormat = CaptionFormat.WEBVTT) -> str:
        """Render the closed captions as a caption file."""
        if format == CaptionFormat.SRT:
            return self._to_srt(self._captions)
        return self._to_webvtt(self._captions)

    def _to_webvtt(self, captions: list[Caption]) -> str:
        """Format as WebVTT."""
        lines = ["WEBVTT", ""]

        for i, cap in enumerate(captions, 1):
            start = _format_vtt_time(cap.start_time)
            end = _format_vtt_time(cap.end_time)

            lines.append(f"{i}")
            lines.append(f"{start} --> {end}")
            lines.append(cap.text)
            lines.append("")

        return "\n".join(lines)

    def _to_srt(self, captions: list[Caption]) -> str:
        """Format as SRT."""
        lines = []

        for i, cap in enumerate(captions, 1):
            start = _format_srt_time(cap.start_time)
            end = _format_srt_time(cap.end_time)

            lines.append(str(i))
            lines.append(f"{start} --> {end}")
            lines.append(cap.text)
            lines.append("")

        return "\n".join(lines)


def _format_vtt_time(seconds: float) -> str:
    """Format time for WebVTT (HH:MM:SS.mmm)."""
    millis_total = int(round(seconds * 1000))
    hours, rem = divmod(millis_total, 3_600_000)
    minutes, rem = divmod(rem, 60_000)
    secs, millis = divmod(rem, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{millis:03d}"


def _format_srt_time(seconds: float) -> str:
    """Format time for SRT (HH:MM:SS,mmm)."""
    return _format_vtt_time(seconds).replace(".", ",")
