"""
Monitoring for animatic.

Components:
    StructuredLogger - JSON / human-readable event logging

Example:
    from animatic.monitoring import configure_logging

    logger = configure_logging(level="debug", json_format=False)
    logger.info("play", message="Playback started")
"""

from animatic.monitoring.logging import (
    StructuredLogger,
    LogLevel,
    LogRecord,
    configure_logging,
    get_logger,
)

__all__ = [
    "StructuredLogger",
    "LogLevel",
    "LogRecord",
    "configure_logging",
    "get_logger",
]
