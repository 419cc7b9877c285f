"""
Presentation-side sinks: subtitles and caption export.
"""

from animatic.presentation.subtitles import (
    SubtitleSink,
    CaptionTrack,
    Caption,
    CaptionFormat,
)

__all__ = [
    "SubtitleSink",
    "CaptionTrack",
    "Caption",
    "CaptionFormat",
]
