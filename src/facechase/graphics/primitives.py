"""Drawing primitives for numpy RGB frame buffers of shape (height, width, 3)."""

from functools import lru_cache
from typing import Tuple

import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]

GLYPH_WIDTH = 3
GLYPH_HEIGHT = 5

# 3x5 bitmap font, one string per row
_GLYPHS: dict[str, tuple[str, ...]] = {
    'A': ("010", "101", "111", "101", "101"),
    'B': ("110", "101", "110", "101", "110"),
    'C': ("011", "100", "100", "100", "011"),
    'D': ("110", "101", "101", "101", "110"),
    'E': ("111", "100", "110", "100", "111"),
    'F': ("111", "100", "110", "100", "100"),
    'G': ("011", "100", "101", "101", "011"),
    'H': ("101", "101", "111", "101", "101"),
    'I': ("111", "010", "010", "010", "111"),
    'J': ("001", "001", "001", "101", "010"),
    'K': ("101", "101", "110", "101", "101"),
    'L': ("100", "100", "100", "100", "111"),
    'M': ("101", "111", "101", "101", "101"),
    'N': ("101", "111", "111", "101", "101"),
    'O': ("010", "101", "101", "101", "010"),
    'P': ("110", "101", "110", "100", "100"),
    'Q': ("010", "101", "101", "111", "011"),
    'R': ("110", "101", "110", "101", "101"),
    'S': ("011", "100", "010", "001", "110"),
    'T': ("111", "010", "010", "010", "010"),
    'U': ("101", "101", "101", "101", "010"),
    'V': ("101", "101", "101", "010", "010"),
    'W': ("101", "101", "101", "111", "101"),
    'X': ("101", "101", "010", "101", "101"),
    'Y': ("101", "101", "010", "010", "010"),
    'Z': ("111", "001", "010", "100", "111"),
    '0': ("010", "101", "101", "101", "010"),
    '1': ("010", "110", "010", "010", "111"),
    '2': ("010", "101", "001", "010", "111"),
    '3': ("110", "001", "010", "001", "110"),
    '4': ("101", "101", "111", "001", "001"),
    '5': ("111", "100", "110", "001", "110"),
    '6': ("011", "100", "110", "101", "010"),
    '7': ("111", "001", "010", "010", "010"),
    '8': ("010", "101", "010", "101", "010"),
    '9': ("010", "101", "011", "001", "110"),
    '?': ("010", "101", "001", "000", "010"),
    '!': ("010", "010", "010", "000", "010"),
    '.': ("000", "000", "000", "000", "010"),
    ':': ("000", "010", "000", "010", "000"),
    '-': ("000", "000", "111", "000", "000"),
    '+': ("000", "010", "111", "010", "000"),
    '^': ("010", "101", "000", "000", "000"),
    '<': ("001", "010", "100", "010", "001"),
    '>': ("100", "010", "001", "010", "100"),
    'v': ("000", "000", "000", "101", "010"),
}


@lru_cache(maxsize=None)
def glyph_mask(char: str) -> NDArray[np.bool_]:
    """Boolean (5, 3) mask for ``char``; unknown characters render as '?'."""
    rows = _GLYPHS.get(char) or _GLYPHS.get(char.upper()) or _GLYPHS['?']
    return np.array([[c == "1" for c in row] for row in rows], dtype=bool)


def fill(buffer: Buffer, color: Color) -> None:
    """Fill entire buffer with color."""
    buffer[:, :] = color


def draw_rect(
    buffer: Buffer,
    x: int,
    y: int,
    width: int,
    height: int,
    color: Color,
    filled: bool = True,
    thickness: int = 1,
) -> None:
    """Draw a rectangle, clipped to the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
        filled: If True, fill rectangle; if False, draw outline only
        thickness: Line thickness for outline (when filled=False)
    """
    h, w = buffer.shape[:2]

    x1 = max(0, min(x, w))
    y1 = max(0, min(y, h))
    x2 = max(0, min(x + width, w))
    y2 = max(0, min(y + height, h))
    if x2 <= x1 or y2 <= y1:
        return

    if filled:
        buffer[y1:y2, x1:x2] = color
        return

    t = max(1, thickness)
    buffer[y1:min(y1 + t, y2), x1:x2] = color
    buffer[max(y2 - t, y1):y2, x1:x2] = color
    buffer[y1:y2, x1:min(x1 + t, x2)] = color
    buffer[y1:y2, max(x2 - t, x1):x2] = color


def draw_circle(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    color: Color,
    thickness: float = 0.0,
) -> None:
    """Draw a filled circle, or a ring when ``thickness`` > 0.

    Only the circle's bounding box is touched, so cost scales with the
    circle rather than the whole frame.
    """
    h, w = buffer.shape[:2]
    x1 = max(0, int(cx - radius))
    y1 = max(0, int(cy - radius))
    x2 = min(w, int(cx + radius) + 2)
    y2 = min(h, int(cy + radius) + 2)
    if x2 <= x1 or y2 <= y1:
        return

    ys, xs = np.ogrid[y1:y2, x1:x2]
    dist_sq = (xs - cx) ** 2 + (ys - cy) ** 2
    mask = dist_sq <= radius ** 2
    if thickness > 0:
        inner = max(0.0, radius - thickness)
        mask &= dist_sq >= inner ** 2

    buffer[y1:y2, x1:x2][mask] = color


def measure_text(text: str, scale: int = 1) -> Tuple[int, int]:
    """Pixel (width, height) of ``text`` drawn with ``draw_text``."""
    if not text:
        return 0, GLYPH_HEIGHT * scale
    return len(text) * (GLYPH_WIDTH + 1) * scale - scale, GLYPH_HEIGHT * scale


def draw_text(
    buffer: Buffer,
    text: str,
    x: int,
    y: int,
    color: Color,
    scale: int = 1,
) -> Tuple[int, int]:
    """Draw text using the built-in bitmap font.

    Args:
        buffer: Target numpy array (height, width, 3)
        text: Text string to draw
        x: Starting x coordinate
        y: Starting y coordinate
        color: RGB color tuple
        scale: Integer pixel scale

    Returns:
        Tuple of (width, height) of rendered text in pixels
    """
    h, w = buffer.shape[:2]
    cursor_x = x

    for char in text:
        if char != ' ':
            mask = glyph_mask(char)
            if scale > 1:
                mask = np.kron(mask, np.ones((scale, scale), dtype=bool))
            mh, mw = mask.shape

            # Clip glyph against the buffer
            gx1, gy1 = max(0, -cursor_x), max(0, -y)
            gx2, gy2 = min(mw, w - cursor_x), min(mh, h - y)
            if gx2 > gx1 and gy2 > gy1:
                region = buffer[y + gy1:y + gy2, cursor_x + gx1:cursor_x + gx2]
                region[mask[gy1:gy2, gx1:gx2]] = color

        cursor_x += (GLYPH_WIDTH + 1) * scale

    return measure_text(text, scale)


def draw_centered_text(
    buffer: Buffer,
    text: str,
    y: int,
    color: Color,
    scale: int = 1,
    center_x: int | None = None,
) -> Tuple[int, int]:
    """Draw text horizontally centered on ``center_x`` (buffer center by default)."""
    if center_x is None:
        center_x = buffer.shape[1] // 2
    text_w, _ = measure_text(text, scale)
    return draw_text(buffer, text, center_x - text_w // 2, y, color, scale)


def dim(buffer: Buffer, factor: float) -> None:
    """Darken the whole buffer in place (overlay backdrop)."""
    buffer[:] = (buffer.astype(np.float32) * factor).astype(np.uint8)
