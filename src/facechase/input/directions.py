"""
Held-direction input state.

Keyboard and pointer listeners toggle directions here; the simulation
step only ever reads the set.
"""

from enum import Enum
from typing import Iterator, Optional


class Direction(Enum):
    """Logical movement directions with their unit offsets."""
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


# Key names as reported by pygame.key.name()
KEY_BINDINGS: dict[str, Direction] = {
    "up": Direction.UP,
    "w": Direction.UP,
    "down": Direction.DOWN,
    "s": Direction.DOWN,
    "left": Direction.LEFT,
    "a": Direction.LEFT,
    "right": Direction.RIGHT,
    "d": Direction.RIGHT,
}


def direction_for_key(key_name: str) -> Optional[Direction]:
    """Map a key name to a direction (case-insensitive), or None if unbound."""
    return KEY_BINDINGS.get(key_name.lower())


class HeldDirections:
    """Set of currently held directions.

    Each source (keyboard, touch pad) holds its own claims, so releasing
    the arrow key doesn't cancel a direction still held on the pad.
    """

    def __init__(self) -> None:
        self._held: dict[Direction, set[str]] = {}

    def press(self, direction: Direction, source: str = "keyboard") -> None:
        self._held.setdefault(direction, set()).add(source)

    def release(self, direction: Direction, source: str = "keyboard") -> None:
        sources = self._held.get(direction)
        if not sources:
            return
        sources.discard(source)
        if not sources:
            del self._held[direction]

    def release_source(self, source: str) -> None:
        """Release every direction held by ``source`` (e.g. pointer left the pad)."""
        for direction in list(self._held):
            self.release(direction, source)

    def clear(self) -> None:
        self._held.clear()

    def __contains__(self, direction: object) -> bool:
        return direction in self._held

    def __iter__(self) -> Iterator[Direction]:
        return iter(list(self._held))

    def __len__(self) -> int:
        return len(self._held)

    def snapshot(self) -> frozenset[Direction]:
        return frozenset(self._held)
