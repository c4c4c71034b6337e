"""Value types shared by the simulation, the controller and the renderer."""

from dataclasses import dataclass
import math
from typing import Optional

from facechase.core.state import Phase


@dataclass(frozen=True)
class Vec2:
    """Immutable 2D coordinate (top-left of an entity's bounding box)."""

    x: float
    y: float

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def scaled(self, factor: float) -> "Vec2":
        return Vec2(self.x * factor, self.y * factor)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def distance_to(self, other: "Vec2") -> float:
        return (other - self).length()

    def as_int(self) -> tuple[int, int]:
        return int(round(self.x)), int(round(self.y))


@dataclass(frozen=True)
class Viewport:
    """Playfield bounds in pixels, supplied by the view."""

    width: int
    height: int


@dataclass
class Player:
    pos: Vec2
    size: int = 50


@dataclass
class Enemy:
    pos: Vec2
    speed: float


@dataclass(frozen=True)
class Point:
    """A collectible. ``counter`` is the spawn counter value it was created with."""

    pos: Vec2
    counter: int
    mega: bool = False


@dataclass
class SimulationState:
    """Authoritative game state, mutated only by the controller's tick.

    Attributes:
        player: Player avatar
        enemy: The pursuer
        point: Current collectible (None for variants without points)
        raw_score: Ticks survived (time scoring) or points earned (event scoring)
        ticks: Number of running ticks applied this run
    """

    player: Player
    enemy: Enemy
    point: Optional[Point] = None
    raw_score: int = 0
    ticks: int = 0


@dataclass(frozen=True)
class GameSnapshot:
    """Immutable view of the game handed to the render layer."""

    player: Vec2
    enemy: Vec2
    point: Optional[Point]
    score: int
    high_score: int
    phase: Phase
    viewport: Viewport
    enemy_speed: float
    player_size: int = 50
    tick: int = 0
    new_record: bool = False
