"""Frame renderer: a pure function of the published GameSnapshot."""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from facechase.core.state import Phase
from facechase.game.models import GameSnapshot
from facechase.graphics.primitives import (
    Color, dim, draw_centered_text, draw_circle, draw_rect, draw_text, fill
)
from facechase.input.directions import Direction
from facechase.input.touch_pad import PadButton


@dataclass(frozen=True)
class Palette:
    background: Color = (9, 9, 11)
    grid_dot: Color = (34, 34, 34)
    player: Color = (52, 211, 153)
    player_ring: Color = (167, 243, 208)
    enemy: Color = (244, 63, 94)
    enemy_ring: Color = (253, 164, 175)
    point: Color = (56, 189, 248)
    mega_point: Color = (250, 204, 21)
    hud: Color = (52, 211, 153)
    hud_dim: Color = (113, 113, 122)
    title: Color = (255, 255, 255)
    pad: Color = (39, 39, 42)
    pad_active: Color = (16, 185, 129)


PAD_LABELS = {
    Direction.UP: "^",
    Direction.DOWN: "v",
    Direction.LEFT: "<",
    Direction.RIGHT: ">",
}

GRID_SPACING = 40


def new_frame(width: int, height: int) -> NDArray[np.uint8]:
    """Blank (height, width, 3) RGB buffer."""
    return np.zeros((max(1, height), max(1, width), 3), dtype=np.uint8)


class FrameRenderer:
    """Draws snapshots into a reusable frame buffer sized to the viewport."""

    def __init__(self, palette: Optional[Palette] = None) -> None:
        self.palette = palette or Palette()
        self._buffer: Optional[NDArray[np.uint8]] = None

    def buffer_for(self, width: int, height: int) -> NDArray[np.uint8]:
        if self._buffer is None or self._buffer.shape[:2] != (max(1, height), max(1, width)):
            self._buffer = new_frame(width, height)
        return self._buffer

    def render(
        self,
        snapshot: GameSnapshot,
        pad_buttons: Sequence[PadButton] = (),
        pad_pressed: Optional[Direction] = None,
    ) -> NDArray[np.uint8]:
        """Render ``snapshot`` and return the frame buffer."""
        vp = snapshot.viewport
        buffer = self.buffer_for(vp.width, vp.height)
        render_frame(buffer, snapshot, self.palette, pad_buttons, pad_pressed)
        return buffer


def render_frame(
    buffer: NDArray[np.uint8],
    snapshot: GameSnapshot,
    palette: Palette,
    pad_buttons: Sequence[PadButton] = (),
    pad_pressed: Optional[Direction] = None,
) -> None:
    """Draw one complete frame of ``snapshot`` into ``buffer``."""
    fill(buffer, palette.background)
    buffer[::GRID_SPACING, ::GRID_SPACING] = palette.grid_dot

    half = snapshot.player_size / 2

    if snapshot.point is not None:
        _draw_point(buffer, snapshot, palette)

    # Enemy under the player so the catch reads clearly
    ex, ey = snapshot.enemy.x + half, snapshot.enemy.y + half
    draw_circle(buffer, ex, ey, half, palette.enemy)
    draw_circle(buffer, ex, ey, half, palette.enemy_ring, thickness=2)

    px, py = snapshot.player.x + half, snapshot.player.y + half
    draw_circle(buffer, px, py, half, palette.player)
    draw_circle(buffer, px, py, half, palette.player_ring, thickness=2)

    _draw_hud(buffer, snapshot, palette)

    if pad_buttons:
        _draw_pad(buffer, pad_buttons, pad_pressed, palette)

    if snapshot.phase == Phase.NOT_STARTED:
        _draw_start_overlay(buffer, snapshot, palette)
    elif snapshot.phase == Phase.OVER:
        _draw_caught_overlay(buffer, snapshot, palette)


def _draw_point(buffer: NDArray[np.uint8], snapshot: GameSnapshot, palette: Palette) -> None:
    point = snapshot.point
    radius = 15
    cx, cy = point.pos.x + radius, point.pos.y + radius
    if point.mega:
        draw_circle(buffer, cx, cy, radius + 6, palette.mega_point, thickness=2)
        draw_circle(buffer, cx, cy, radius, palette.mega_point)
        draw_centered_text(buffer, "+5", int(cy) - 4, palette.background, scale=2, center_x=int(cx))
    else:
        draw_circle(buffer, cx, cy, radius * 0.7, palette.point)


def _draw_hud(buffer: NDArray[np.uint8], snapshot: GameSnapshot, palette: Palette) -> None:
    draw_text(buffer, str(snapshot.score), 24, 24, palette.hud, scale=6)
    draw_text(buffer, f"RECORD: {snapshot.high_score}", 24, 64, palette.hud_dim, scale=2)


def _draw_pad(
    buffer: NDArray[np.uint8],
    buttons: Sequence[PadButton],
    pressed: Optional[Direction],
    palette: Palette,
) -> None:
    for button in buttons:
        color = palette.pad_active if button.direction == pressed else palette.pad
        draw_rect(buffer, button.x, button.y, button.size, button.size, color)
        label = PAD_LABELS[button.direction]
        draw_centered_text(
            buffer, label, button.y + button.size // 2 - 5, palette.title,
            scale=2, center_x=button.x + button.size // 2,
        )


def _draw_start_overlay(buffer: NDArray[np.uint8], snapshot: GameSnapshot, palette: Palette) -> None:
    dim(buffer, 0.3)
    mid = buffer.shape[0] // 2
    draw_centered_text(buffer, "FACE CHASE", mid - 60, palette.hud, scale=8)
    draw_centered_text(buffer, "PRESS SPACE TO START", mid + 10, palette.title, scale=3)
    draw_centered_text(buffer, f"RECORD: {snapshot.high_score}", mid + 50, palette.hud_dim, scale=2)


def _draw_caught_overlay(buffer: NDArray[np.uint8], snapshot: GameSnapshot, palette: Palette) -> None:
    dim(buffer, 0.2)
    mid = buffer.shape[0] // 2
    draw_centered_text(buffer, "CAUGHT!", mid - 70, palette.title, scale=10)
    draw_centered_text(buffer, f"SCORE: {snapshot.score}", mid + 0, palette.hud_dim, scale=3)
    if snapshot.new_record:
        draw_centered_text(buffer, "NEW RECORD!", mid + 36, palette.mega_point, scale=3)
    draw_centered_text(buffer, "SPACE TO RETRY", mid + 72, palette.hud, scale=3)
