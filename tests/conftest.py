import random

from facechase.config.settings import GameTuning
from facechase.core.events import EventBus
from facechase.core.state import Phase
from facechase.game.controller import GameController
from facechase.game.models import GameSnapshot, Vec2, Viewport
from facechase.game.points import PointSpawner
from facechase.game.variants import COLLECTOR, Variant
from facechase.input.directions import HeldDirections
from facechase.storage.highscore import HighScoreBook, MemoryStore

WIDE = Viewport(1280, 720)
NARROW = Viewport(400, 800)


class Rig:
    """A controller plus the collaborators tests poke at."""

    def __init__(self, variant: Variant = COLLECTOR, best: int | None = None,
                 viewport: Viewport = WIDE, seed: int = 7):
        self.store = MemoryStore({"face_hc": str(best)} if best is not None else None)
        self.bus = EventBus()
        self.held = HeldDirections()
        self.tuning = GameTuning()
        self.controller = GameController(
            variant=variant,
            tuning=self.tuning,
            event_bus=self.bus,
            high_scores=HighScoreBook(self.store),
            held=self.held,
            viewport=viewport,
            spawner=PointSpawner(rng=random.Random(seed)),
        )

    @property
    def state(self):
        return self.controller.state

    def clear_point(self) -> None:
        """Take the random point out of play so it can't be collected by accident."""
        self.state.point = None

    def force_catch(self) -> None:
        self.clear_point()
        self.state.enemy.pos = self.state.player.pos
        self.controller.tick(16.0)

    def count(self, event_type) -> int:
        return len(self.bus.get_history(event_type, limit=1000))


def make_snapshot(**overrides) -> GameSnapshot:
    values = dict(
        player=Vec2(100, 100),
        enemy=Vec2(600, 300),
        point=None,
        score=0,
        high_score=0,
        phase=Phase.RUNNING,
        viewport=WIDE,
        enemy_speed=3.5,
    )
    values.update(overrides)
    return GameSnapshot(**values)
