"""
Render targets for animatic.

Components:
    Canvas       - Render target protocol (width, height, clear)
    FrameBuffer  - numpy-backed headless RGB surface
"""

from animatic.render.surface import (
    Canvas,
    FrameBuffer,
    parse_color,
)

__all__ = [
    "Canvas",
    "FrameBuffer",
    "parse_color",
]
