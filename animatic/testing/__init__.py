"""
Testing Utilities

Components:
    SpeechMock  - Call-recording speech backend with manual completion
    CallRecord  - One recorded backend call

Usage:
    from animatic.testing import SpeechMock

    mock = SpeechMock()
    player = create_player(backend=mock, frame_source=frames)
    mock.complete()
"""

from animatic.testing.mock import (
    SpeechMock,
    CallRecord,
)

__all__ = [
    "SpeechMock",
    "CallRecord",
]
