"""
Structured logging for animatic.

Every record is an event name plus key/value data, written as one line:
JSON for machines, or ``HH:MM:SS LEVEL event message k=v`` for people.
The scheduler, narration queue and controller each bind a ``component``
and log playback events through the helpers at the bottom of
StructuredLogger.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TextIO


class LogLevel(Enum):
    """Log levels used by the player."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def numeric(self) -> int:
        """Matching ``logging`` level number."""
        return getattr(logging, self.name)


@dataclass
class LogRecord:
    """A structured log record.

    Attributes:
        level: Level name.
        event: Event name (``scene_enter``, ``speed_rejected``, ...).
        message: Optional human-readable text.
        data: Bound context plus per-call fields.
        timestamp: Unix time of the call.
    """

    level: str
    event: str
    message: str = ""
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> dict[str, Any]:
        """Flat dict: fixed keys first, then the data fields."""
        d: dict[str, Any] = {
            "ts": round(self.timestamp, 3),
            "level": self.level,
            "event": self.event,
        }
        if self.message:
            d["message"] = self.message
        d.update(self.data)
        return d

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=repr)

    def to_text(self) -> str:
        clock = time.strftime("%H:%M:%S", time.localtime(self.timestamp))
        parts = [clock, self.level.upper(), self.event]
        if self.message:
            parts.append(self.message)
        parts.extend(f"{k}={v}" for k, v in self.data.items())
        return " ".join(parts)


class StructuredLogger:
    """Event logger for the player.

    Example:
        logger = StructuredLogger(json_format=False)
        scheduler_log = logger.bind(component="scheduler")
        scheduler_log.scene_enter(index=1, name="Teleport", elapsed=3.0)
        # 12:00:03 INFO scene_enter Entered scene 1: Teleport component=scheduler ...
    """

    def __init__(
        self,
        level: LogLevel = LogLevel.INFO,
        output: TextIO | None = None,
        json_format: bool = True,
        context: dict[str, Any] | None = None,
    ):
        self._level = level
        self._output = output
        self._json_format = json_format
        self._context = dict(context or {})

    def bind(self, **context: Any) -> "StructuredLogger":
        """New logger sharing level and output, with extra context."""
        return StructuredLogger(
            level=self._level,
            output=self._output,
            json_format=self._json_format,
            context={**self._context, **context},
        )

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level.numeric >= self._level.numeric

    def _log(self, level: LogLevel, event: str, message: str = "", **data: Any) -> None:
        if not self.is_enabled_for(level):
            return

        record = LogRecord(
            level=level.value,
            event=event,
            message=message,
            data={**self._context, **data},
        )
        line = record.to_json() if self._json_format else record.to_text()
        # Resolved per call so pytest's capsys sees the output
        print(line, file=self._output or sys.stderr)

    def debug(self, event: str, message: str = "", **data: Any) -> None:
        self._log(LogLevel.DEBUG, event, message, **data)

    def info(self, event: str, message: str = "", **data: Any) -> None:
        self._log(LogLevel.INFO, event, message, **data)

    def warning(self, event: str, message: str = "", **data: Any) -> None:
        self._log(LogLevel.WARNING, event, message, **data)

    def error(self, event: str, message: str = "", **data: Any) -> None:
        self._log(LogLevel.ERROR, event, message, **data)

    # Playback events

    def scene_enter(self, index: int, name: str, elapsed: float, **extra: Any) -> None:
        self.info(
            "scene_enter",
            f"Entered scene {index}: {name}",
            index=index,
            scene=name,
            elapsed=round(elapsed, 4),
            **extra,
        )

    def sequence_complete(self, elapsed: float, **extra: Any) -> None:
        self.info(
            "sequence_complete",
            f"Sequence complete at {elapsed:.2f}s",
            elapsed=round(elapsed, 4),
            **extra,
        )

    def narration_start(self, text: str, rate: float, **extra: Any) -> None:
        """Per-utterance, so DEBUG."""
        self.debug("narration_start", text_length=len(text), rate=round(rate, 4), **extra)

    def narration_cleared(self, dropped: int, cancelled: bool, **extra: Any) -> None:
        self.debug("narration_cleared", dropped=dropped, cancelled=cancelled, **extra)

    def speed_rejected(self, requested: Any, current: float, **extra: Any) -> None:
        self.warning(
            "speed_rejected",
            f"Ignoring invalid speed {requested!r}, keeping {current}",
            requested=repr(requested),
            current=current,
            **extra,
        )


_global_logger: StructuredLogger | None = None


def configure_logging(
    level: LogLevel | str = LogLevel.INFO,
    output: TextIO | None = None,
    json_format: bool = True,
) -> StructuredLogger:
    """Replace the process-wide logger.

    Args:
        level: A LogLevel or its name (case-insensitive).
        output: Stream to write to (default: stderr at emit time).
        json_format: JSON lines instead of text lines.

    Raises:
        ValueError: Unknown level name.
    """
    global _global_logger

    if isinstance(level, str):
        level = LogLevel(level.lower())

    _global_logger = StructuredLogger(level=level, output=output, json_format=json_format)
    return _global_logger


def get_logger() -> StructuredLogger:
    """The process-wide logger, created with defaults on first use."""
    global _global_logger

    if _global_logger is None:
        _global_logger = StructuredLogger()
    return _global_logger
