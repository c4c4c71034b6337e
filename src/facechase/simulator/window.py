"""
Desktop game window using pygame.

Renders the controller's published snapshot every frame and turns
keyboard, mouse and touch input into held directions and start/reset
requests on the event bus.
"""

import asyncio
import logging
import time
from dataclasses import dataclass

import pygame

from ..audio.engine import AudioEngine
from ..core.events import Event, EventBus, EventType
from ..core.state import Phase
from ..game.controller import GameController
from ..game.models import Viewport
from ..graphics.renderer import FrameRenderer
from ..input.directions import HeldDirections, direction_for_key
from ..input.touch_pad import TouchPad

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Game window configuration."""
    width: int = 1280
    height: int = 720
    title: str = "FACE CHASE"
    fullscreen: bool = False
    fps: int = 60


class GameWindow:
    """
    Resizable game window.

    Keyboard Mapping:
        ARROWS / WASD: Move
        SPACE / ENTER: Start, or retry after being caught
        M: Toggle mute
        F: Toggle fullscreen
        F1: Toggle debug overlay
        ESC / Q: Quit
    """

    def __init__(
        self,
        controller: GameController,
        event_bus: EventBus,
        held: HeldDirections,
        touch_pad: TouchPad,
        config: WindowConfig | None = None,
        audio: AudioEngine | None = None,
    ) -> None:
        self.config = config or WindowConfig()
        self.controller = controller
        self.event_bus = event_bus
        self.held = held
        self.touch_pad = touch_pad
        self.audio = audio
        self.renderer = FrameRenderer()

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._running = False
        self._frame_count = 0
        self._show_debug = False
        self._windowed_size = (self.config.width, self.config.height)

        logger.info("GameWindow created")

    @property
    def viewport(self) -> Viewport:
        if self._screen is None:
            return Viewport(self.config.width, self.config.height)
        w, h = self._screen.get_size()
        return Viewport(w, h)

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)
        self._set_mode(self.config.fullscreen)
        self._clock = pygame.time.Clock()

        pygame.font.init()
        try:
            self._font = pygame.font.SysFont("DejaVu Sans Mono", 14)
        except Exception as e:
            logger.debug(f"System font unavailable: {e}")
            self._font = pygame.font.Font(None, 18)

        logger.info(f"Pygame initialized: {self.viewport.width}x{self.viewport.height}")
        self._emit_resize()

    def _set_mode(self, fullscreen: bool) -> None:
        if fullscreen:
            info = pygame.display.Info()
            self._screen = pygame.display.set_mode(
                (info.current_w, info.current_h), pygame.FULLSCREEN
            )
        else:
            self._screen = pygame.display.set_mode(self._windowed_size, pygame.RESIZABLE)

    def _emit_resize(self) -> None:
        vp = self.viewport
        self.event_bus.emit(Event(
            EventType.VIEWPORT_RESIZED,
            data={"width": vp.width, "height": vp.height},
            source="window",
        ))

    # ----------------------------------------------------------------- input

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.KEYUP:
                self._handle_keyup(event)

            elif event.type == pygame.VIDEORESIZE:
                if not self.config.fullscreen:
                    self._windowed_size = (event.w, event.h)
                    self._screen = pygame.display.set_mode(self._windowed_size, pygame.RESIZABLE)
                self._emit_resize()

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._pointer_down(*event.pos)

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self.touch_pad.pointer_up()

            elif event.type == pygame.FINGERDOWN:
                vp = self.viewport
                self._pointer_down(event.x * vp.width, event.y * vp.height)

            elif event.type == pygame.FINGERUP:
                self.touch_pad.pointer_up()

            elif event.type == pygame.WINDOWFOCUSLOST:
                # Key-up events are lost while unfocused
                self.held.clear()

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        key_name = pygame.key.name(event.key)
        direction = direction_for_key(key_name)

        if direction is not None:
            self.held.press(direction)
        elif event.key in (pygame.K_ESCAPE, pygame.K_q):
            self._running = False
        elif event.key in (pygame.K_SPACE, pygame.K_RETURN):
            self._request_primary()
        elif event.key == pygame.K_m and self.audio:
            self.audio.toggle_mute()
        elif event.key == pygame.K_f:
            self._toggle_fullscreen()
        elif event.key == pygame.K_F1:
            self._show_debug = not self._show_debug

    def _handle_keyup(self, event: pygame.event.Event) -> None:
        direction = direction_for_key(pygame.key.name(event.key))
        if direction is not None:
            self.held.release(direction)

    def _pointer_down(self, x: float, y: float) -> None:
        if self.touch_pad.pointer_down(self.viewport, x, y):
            return
        # Tapping anywhere else acts as the start / retry button
        if self.controller.phase != Phase.RUNNING:
            self._request_primary()

    def _request_primary(self) -> None:
        """SPACE: start from the start screen, retry after being caught."""
        phase = self.controller.phase
        if phase == Phase.NOT_STARTED:
            self.event_bus.emit(Event(EventType.START_REQUESTED, source="window"))
        elif phase == Phase.OVER:
            self.event_bus.emit(Event(EventType.RESET_REQUESTED, source="window"))

    def _toggle_fullscreen(self) -> None:
        self.config.fullscreen = not self.config.fullscreen
        self._set_mode(self.config.fullscreen)
        self._emit_resize()
        logger.info(f"Fullscreen: {self.config.fullscreen}")

    # ---------------------------------------------------------------- render

    def _render(self) -> None:
        """Render the published snapshot."""
        if not self._screen:
            return

        snapshot = self.controller.published
        vp = self.viewport
        if snapshot.viewport != vp:
            # Published state lags a resize by at most one frame
            return

        pad_buttons = self.touch_pad.layout(vp) if self.touch_pad.visible(vp) else ()
        frame = self.renderer.render(snapshot, pad_buttons, self.touch_pad.pressed)
        pygame.surfarray.blit_array(self._screen, frame.swapaxes(0, 1))

        if self._show_debug:
            self._render_debug(snapshot)

        pygame.display.flip()

    def _render_debug(self, snapshot) -> None:
        if not self._font:
            return
        task = self.controller.frame_task
        lines = [
            f"FPS: {self._clock.get_fps():.1f}" if self._clock else "FPS: --",
            f"Frame: {self._frame_count}",
            f"Variant: {self.controller.variant.name}",
            f"Phase: {snapshot.phase.name}",
            f"Tick: {snapshot.tick}",
            f"Sim frames: {task.frames if task else 0}",
            f"Enemy speed: {snapshot.enemy_speed:.3f}",
            f"Held: {','.join(d.name for d in self.held) or '-'}",
            f"Published: {self.controller.publisher.publish_count}",
        ]
        x = self._screen.get_width() - 220
        y = 16
        for line in lines:
            surface = self._font.render(line, True, (200, 200, 220))
            self._screen.blit(surface, (x, y))
            y += 18

    # ------------------------------------------------------------------ loop

    async def run(self) -> None:
        """Main window loop."""
        self._init_pygame()
        self._running = True
        frame_interval = 1.0 / max(1, self.config.fps)

        logger.info("Game window started")

        while self._running:
            started = time.perf_counter()

            self._handle_events()
            self._render()

            if self._clock:
                self._clock.tick()
            self._frame_count += 1

            # Sleep on the event loop so the simulation task keeps ticking
            elapsed = time.perf_counter() - started
            await asyncio.sleep(max(0.0, frame_interval - elapsed))

        self.event_bus.emit(Event(EventType.SHUTDOWN, source="window"))
        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        pygame.quit()
        logger.info("Game window stopped")

    def stop(self) -> None:
        """Stop the window loop."""
        self._running = False
