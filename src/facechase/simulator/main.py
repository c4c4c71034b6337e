"""
Desktop application wiring.

Builds every subsystem from Settings and runs the game in a pygame window.
"""

import logging

from facechase.audio.engine import AudioEngine
from facechase.config.settings import Settings
from facechase.core.events import Event, EventBus, EventType
from facechase.game.controller import GameController
from facechase.game.models import Viewport
from facechase.game.points import PointSpawner
from facechase.game.variants import get_variant
from facechase.input.directions import HeldDirections
from facechase.input.touch_pad import TouchPad
from facechase.simulator.window import GameWindow, WindowConfig
from facechase.storage.highscore import HighScoreBook, JsonFileStore

logger = logging.getLogger(__name__)


class ChaseSimulator:
    """Main application integrating all systems."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self.variant = get_variant(settings.variant)
        tuning = settings.tuning

        # Core systems
        self.event_bus = EventBus()
        self.held = HeldDirections()
        self.touch_pad = TouchPad(self.held, breakpoint=tuning.narrow_breakpoint)

        self.store = JsonFileStore(settings.store_path)
        self.high_scores = HighScoreBook(self.store, key=settings.high_score_key)

        # Audio only for variants that have it; bound before the controller emits anything
        self.audio: AudioEngine | None = None
        if self.variant.audio:
            self.audio = AudioEngine(muted=settings.mute)
            if self.audio.init():
                self.audio.bind(self.event_bus)

        # Window
        self.window_config = WindowConfig(
            width=settings.window.width,
            height=settings.window.height,
            title=settings.window.title,
            fullscreen=settings.window.fullscreen,
            fps=settings.window.fps,
        )

        self.controller = GameController(
            variant=self.variant,
            tuning=tuning,
            event_bus=self.event_bus,
            high_scores=self.high_scores,
            held=self.held,
            viewport=Viewport(self.window_config.width, self.window_config.height),
            spawner=PointSpawner(
                point_size=tuning.point_size,
                inset=tuning.point_inset,
                mega_every=tuning.mega_every,
            ),
        )

        self.window = GameWindow(
            controller=self.controller,
            event_bus=self.event_bus,
            held=self.held,
            touch_pad=self.touch_pad,
            config=self.window_config,
            audio=self.audio,
        )

        self._setup_event_handlers()

        logger.info(f"ChaseSimulator initialized: {self.variant.display_name}")

    def _setup_event_handlers(self) -> None:
        self.event_bus.subscribe(EventType.PLAYER_CAUGHT, self._on_caught)
        self.event_bus.subscribe(EventType.HIGH_SCORE_BEATEN, self._on_high_score)
        self.event_bus.subscribe(EventType.SHUTDOWN, self._on_shutdown)

    def _on_caught(self, event: Event) -> None:
        logger.info(
            f"Caught after {event.data.get('ticks', 0)} ticks: "
            f"score={event.data.get('score', 0)}, record={event.data.get('high_score', 0)}"
        )

    def _on_high_score(self, event: Event) -> None:
        logger.info(f"New high score: {event.data.get('high_score', 0)}")

    def _on_shutdown(self, event: Event) -> None:
        """Stop the simulation and release the mixer. Safe to call twice."""
        self.controller.shutdown()
        if self.audio:
            self.audio.cleanup()

    async def run(self) -> None:
        """Run the game until the window closes."""
        logger.info(f"Starting FACE CHASE ({self.variant.name})...")

        # Needs the running loop, so it can't happen in __init__
        self.controller.enable_frame_task(self.window_config.fps)

        try:
            await self.window.run()
        finally:
            # The window emits SHUTDOWN on a normal exit; this covers errors
            self._on_shutdown(Event(EventType.SHUTDOWN, source="simulator"))


async def run(settings: Settings) -> None:
    """Main entry point."""
    simulator = ChaseSimulator(settings)
    await simulator.run()
