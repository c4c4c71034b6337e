"""On-screen direction pad for narrow (touch) viewports.

Laid out as a 3-column grid centered near the bottom edge:

        [ ]  [UP]  [ ]
      [LEFT][DOWN][RIGHT]
"""

from dataclasses import dataclass
from typing import Optional

from facechase.game.models import Viewport
from facechase.input.directions import Direction, HeldDirections

POINTER_SOURCE = "pointer"


@dataclass(frozen=True)
class PadButton:
    direction: Direction
    x: int
    y: int
    size: int

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px < self.x + self.size and self.y <= py < self.y + self.size


class TouchPad:
    """Direction pad layout, hit testing and pointer state."""

    BUTTON = 48
    GAP = 8
    PADDING = 16
    BOTTOM_MARGIN = 40

    # (column, row) of each direction in the grid
    CELLS = {
        Direction.UP: (1, 0),
        Direction.LEFT: (0, 1),
        Direction.DOWN: (1, 1),
        Direction.RIGHT: (2, 1),
    }

    def __init__(self, held: HeldDirections, breakpoint: int = 768) -> None:
        self.held = held
        self.breakpoint = breakpoint
        self._buttons: list[PadButton] = []
        self._viewport: Optional[Viewport] = None
        self._pressed: Optional[Direction] = None

    def visible(self, viewport: Viewport) -> bool:
        return viewport.width < self.breakpoint

    def layout(self, viewport: Viewport) -> list[PadButton]:
        """Button rectangles for ``viewport`` (cached until it changes)."""
        if viewport == self._viewport:
            return self._buttons

        grid_w = 3 * self.BUTTON + 2 * self.GAP
        grid_h = 2 * self.BUTTON + self.GAP
        left = (viewport.width - grid_w) // 2
        top = viewport.height - self.BOTTOM_MARGIN - self.PADDING - grid_h

        self._buttons = [
            PadButton(
                direction=direction,
                x=left + col * (self.BUTTON + self.GAP),
                y=top + row * (self.BUTTON + self.GAP),
                size=self.BUTTON,
            )
            for direction, (col, row) in self.CELLS.items()
        ]
        self._viewport = viewport
        return self._buttons

    def hit_test(self, viewport: Viewport, px: float, py: float) -> Optional[Direction]:
        if not self.visible(viewport):
            return None
        for button in self.layout(viewport):
            if button.contains(px, py):
                return button.direction
        return None

    @property
    def pressed(self) -> Optional[Direction]:
        return self._pressed

    def pointer_down(self, viewport: Viewport, px: float, py: float) -> bool:
        """Press the button under the pointer. Returns True if one was hit."""
        direction = self.hit_test(viewport, px, py)
        if direction is None:
            return False
        self.held.release_source(POINTER_SOURCE)
        self.held.press(direction, POINTER_SOURCE)
        self._pressed = direction
        return True

    def pointer_up(self) -> None:
        self.held.release_source(POINTER_SOURCE)
        self._pressed = None
