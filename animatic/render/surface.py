"""
Render Surface - Fixed-size 2D frame buffer.

Scenes draw through a Canvas; the scheduler clears it before every frame.
FrameBuffer is the headless implementation: an RGB numpy array.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np


Color = tuple[int, int, int]


def parse_color(color: str | Color) -> Color:
    """Accept ``(r, g, b)`` or ``"#rrggbb"``."""
    if isinstance(color, str):
        value = color.lstrip("#")
        if len(value) == 3:
            value = "".join(ch * 2 for ch in value)
        if len(value) != 6:
            raise ValueError(f"Invalid hex color: {color!r}")
        return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))

    r, g, b = color
    return (int(r), int(g), int(b))


@runtime_checkable
class Canvas(Protocol):
    """Render target protocol."""

    @property
    def width(self) -> int:
        ...

    @property
    def height(self) -> int:
        ...

    def clear(self) -> None:
        """Reset the whole surface before a frame."""
        ...

    def fill(self, color: str | Color) -> None:
        ...

    def fill_rect(
        self,
        x: float,
        y: float,
        w: float,
        h: float,
        color: str | Color,
        alpha: float = 1.0,
    ) -> None:
        ...

    def fill_circle(self, cx: float, cy: float, radius: float, color: str | Color) -> None:
        ...


class FrameBuffer:
    """RGB frame buffer backed by a ``(height, width, 3)`` uint8 array.

    Args:
        width: Surface width in pixels.
        height: Surface height in pixels.
        background: Color used by clear().

    Example:
        fb = FrameBuffer(960, 540)
        fb.fill("#2f2a25")
        fb.fill_rect(0, 420, 960, 120, "#3b352e")
        image = fb.snapshot()
    """

    def __init__(
        self,
        width: int,
        height: int,
        background: str | Color = (0, 0, 0),
    ):
        if width <= 0 or height <= 0:
            raise ValueError("FrameBuffer dimensions must be positive")
        self._width = width
        self._height = height
        self._background = parse_color(background)
        self._pixels = np.zeros((height, width, 3), dtype=np.uint8)
        self._pixels[:, :] = self._background
        self.clears = 0

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def pixels(self) -> np.ndarray:
        """Live pixel array (height, width, 3)."""
        return self._pixels

    def clear(self) -> None:
        self._pixels[:, :] = self._background
        self.clears += 1

    def fill(self, color: str | Color) -> None:
        """Paint the whole surface."""
        self._pixels[:, :] = parse_color(color)

    def fill_rect(
        self,
        x: float,
        y: float,
        w: float,
        h: float,
        color: str | Color,
        alpha: float = 1.0,
    ) -> None:
        """Paint an axis-aligned rectangle, clipped to the surface."""
        x0 = max(0, int(round(x)))
        y0 = max(0, int(round(y)))
        x1 = min(self._width, int(round(x + w)))
        y1 = min(self._height, int(round(y + h)))
        if x0 >= x1 or y0 >= y1:
            return

        rgb = np.array(parse_color(color), dtype=np.float32)
        alpha = float(np.clip(alpha, 0.0, 1.0))
        region = self._pixels[y0:y1, x0:x1]
        if alpha >= 1.0:
            region[:, :] = rgb.astype(np.uint8)
        else:
            blended = region.astype(np.float32) * (1.0 - alpha) + rgb * alpha
            region[:, :] = np.round(blended).astype(np.uint8)

    def fill_circle(
        self,
        cx: float,
        cy: float,
        radius: float,
        color: str | Color,
    ) -> None:
        """Paint a filled disc, clipped to the surface."""
        if radius <= 0:
            return
        ys, xs = np.ogrid[: self._height, : self._width]
        mask = (xs - cx) ** 2 + (ys - cy) ** 2 <= radius ** 2
        self._pixels[mask] = parse_color(color)

    def pixel(self, x: int, y: int) -> Color:
        r, g, b = self._pixels[y, x]
        return (int(r), int(g), int(b))

    def snapshot(self) -> np.ndarray:
        """Copy of the current frame."""
        return self._pixels.copy()
