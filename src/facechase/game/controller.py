"""Game controller: owns the simulation state and drives runs."""

import logging
from typing import Optional

from facechase.config.settings import GameTuning
from facechase.core.events import Event, EventBus, EventType
from facechase.core.scheduler import FrameTask
from facechase.core.state import Phase, PhaseMachine
from facechase.game.models import Enemy, GameSnapshot, Player, SimulationState, Vec2, Viewport
from facechase.game.points import PointSpawner
from facechase.game.publisher import SnapshotPublisher
from facechase.game.step import StepOutcome, advance, clamp_position
from facechase.game.variants import Scoring, Variant
from facechase.input.directions import HeldDirections
from facechase.storage.highscore import HighScoreBook

logger = logging.getLogger(__name__)


class GameController:
    """Single owner of the authoritative SimulationState.

    Lifecycle:
        1. start() - NOT_STARTED -> RUNNING, frame task begins ticking
        2. tick(delta_ms) - one simulation step per frame while RUNNING
        3. caught - RUNNING -> OVER, high score recorded, frame task stops
        4. reset() - fresh run, back to NOT_STARTED (or RUNNING without a start screen)

    Everything outside the controller sees the game through immutable
    snapshots: ``snapshot`` is rebuilt after every tick, ``published``
    follows it at the variant's publish cadence.
    """

    def __init__(
        self,
        variant: Variant,
        tuning: GameTuning,
        event_bus: EventBus,
        high_scores: HighScoreBook,
        held: HeldDirections,
        viewport: Viewport,
        spawner: Optional[PointSpawner] = None,
    ) -> None:
        self.variant = variant
        self.tuning = tuning
        self.event_bus = event_bus
        self.high_scores = high_scores
        self.held = held
        self._viewport = viewport
        self._spawner = spawner or PointSpawner(
            point_size=tuning.point_size,
            inset=tuning.point_inset,
            mega_every=tuning.mega_every,
        )

        self.publisher = SnapshotPublisher(
            tuning.publish_interval_ms if variant.throttled_publish else 0.0
        )
        self._frame_task: Optional[FrameTask] = None
        self._new_record = False
        self._dirty = False  # Ticks applied since the last reset

        self.phases = PhaseMachine(
            Phase.NOT_STARTED if variant.start_screen else Phase.RUNNING
        )
        self.phases.add_listener(self._on_phase_changed)

        self._state = self._fresh_state()
        self._reset_viewport = viewport
        self._publish(force=True)

        self._unsubscribers = [
            event_bus.subscribe(EventType.START_REQUESTED, lambda e: self.start()),
            event_bus.subscribe(EventType.RESET_REQUESTED, lambda e: self.reset()),
            event_bus.subscribe(EventType.VIEWPORT_RESIZED, self._on_resize_event),
        ]

        logger.info(f"GameController created: variant={variant.name}, viewport={viewport.width}x{viewport.height}")

        if self.phases.is_running:
            # No start screen: the first run is already under way
            self._emit_started()

    # ----------------------------------------------------------------- queries

    @property
    def phase(self) -> Phase:
        return self.phases.phase

    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def score(self) -> int:
        """Score as shown to the player and compared with the high score."""
        if self.variant.scoring is Scoring.TIME:
            return self._state.raw_score // self.tuning.score_divisor
        return self._state.raw_score

    @property
    def snapshot(self) -> GameSnapshot:
        """Authoritative snapshot (latest completed tick)."""
        return self.publisher.authoritative

    @property
    def published(self) -> GameSnapshot:
        """Snapshot the render layer should draw."""
        return self.publisher.published

    @property
    def frame_task(self) -> Optional[FrameTask]:
        return self._frame_task

    # -------------------------------------------------------------- lifecycle

    def enable_frame_task(self, fps: int) -> FrameTask:
        """Drive tick() from a per-frame task (needs a running asyncio loop)."""
        self._frame_task = FrameTask(self.tick, fps=fps, name="simulation")
        if self.phases.is_running:
            self._frame_task.start()
        return self._frame_task

    def start(self) -> bool:
        """Begin a run from the start screen."""
        if self.phase != Phase.NOT_STARTED:
            logger.debug(f"start() ignored in phase {self.phase.name}")
            return False
        return self.phases.transition(Phase.RUNNING)

    def reset(self) -> None:
        """Prepare a fresh run, recording the finished run's score first."""
        target = Phase.NOT_STARTED if self.variant.start_screen else Phase.RUNNING

        if not self._dirty and self.phase == target and self._viewport == self._reset_viewport:
            logger.debug("reset() ignored: already fresh")
            return

        self._record_high_score()

        self._spawner.reset()
        self._state = self._fresh_state()
        self._reset_viewport = self._viewport
        self._new_record = False
        self._dirty = False

        self.event_bus.emit(Event(EventType.RUN_RESET, source="controller"))
        self.phases.force(target)
        self._publish(force=True)
        logger.info("Run reset")

    def set_viewport(self, viewport: Viewport) -> None:
        """Update bounds; the frame task restarts so the next tick sees them."""
        if viewport == self._viewport:
            return
        self._viewport = viewport
        logger.debug(f"Viewport resized to {viewport.width}x{viewport.height}")
        self._fit_to_viewport()

        if self._frame_task is not None and self._frame_task.running:
            self._frame_task.restart()
        self._publish(force=True)

    def shutdown(self) -> None:
        if self._frame_task is not None:
            self._frame_task.stop()
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        logger.info("GameController shut down")

    # ------------------------------------------------------------------- tick

    def tick(self, delta_ms: float = 0.0) -> Optional[StepOutcome]:
        """Apply one simulation step. No-op unless RUNNING."""
        if not self.phases.is_running:
            return None

        outcome = advance(
            self._state,
            self.held.snapshot(),
            self._viewport,
            self.variant,
            self.tuning,
            self._spawner,
        )
        self._dirty = True

        if outcome.collected is not None:
            self.event_bus.emit(Event(
                EventType.POINT_COLLECTED,
                data={
                    "score": self.score,
                    "mega": outcome.collected.mega,
                    "value": outcome.score_delta,
                    "enemy_speed": self._state.enemy.speed,
                },
                source="controller",
            ))

        if outcome.caught:
            self._on_caught()
        else:
            self._publish(elapsed_ms=delta_ms)

        return outcome

    # -------------------------------------------------------------- internals

    def _fresh_state(self) -> SimulationState:
        t = self.tuning
        vp = self._viewport
        enemy_pos = Vec2(vp.width - t.enemy_spawn_offset, vp.height - t.enemy_spawn_offset)

        if not (0 <= enemy_pos.x <= vp.width - t.player_size and 0 <= enemy_pos.y <= vp.height - t.player_size):
            # Left as is: tiny viewports put the spawn outside the playfield
            logger.warning(
                f"Enemy spawn ({enemy_pos.x:.0f}, {enemy_pos.y:.0f}) is outside "
                f"viewport {vp.width}x{vp.height}"
            )

        state = SimulationState(
            player=Player(pos=Vec2(t.player_start_x, t.player_start_y), size=t.player_size),
            enemy=Enemy(pos=enemy_pos, speed=t.initial_enemy_speed),
        )
        if self.variant.has_points:
            state.point = self._spawner.spawn(vp)
        return state

    def _fit_to_viewport(self) -> None:
        """Pull everything back inside the current bounds after a resize."""
        s = self._state
        s.player.pos = clamp_position(s.player.pos, self._viewport, s.player.size)
        s.enemy.pos = clamp_position(s.enemy.pos, self._viewport, self.tuning.player_size)
        if s.point is not None:
            s.point = self._spawner.fit(s.point, self._viewport)

    def _on_caught(self) -> None:
        self.phases.transition(Phase.OVER)
        self._record_high_score()

        self.event_bus.emit(Event(
            EventType.PLAYER_CAUGHT,
            data={"score": self.score, "high_score": self.high_scores.best, "ticks": self._state.ticks},
            source="controller",
        ))
        self._publish(force=True)

    def _record_high_score(self) -> None:
        if self.high_scores.submit(self.score):
            self._new_record = True
            self.event_bus.emit(Event(
                EventType.HIGH_SCORE_BEATEN,
                data={"high_score": self.high_scores.best},
                source="controller",
            ))

    def _on_phase_changed(self, old: Phase, new: Phase) -> None:
        if self._frame_task is not None:
            if new == Phase.RUNNING:
                self._frame_task.start()
            else:
                self._frame_task.stop()

        if new == Phase.RUNNING:
            self._emit_started()
            self._publish(force=True)

    def _emit_started(self) -> None:
        self.event_bus.emit(Event(
            EventType.GAME_STARTED,
            data={"variant": self.variant.name},
            source="controller",
        ))

    def _on_resize_event(self, event: Event) -> None:
        self.set_viewport(Viewport(int(event.data["width"]), int(event.data["height"])))

    def _build_snapshot(self) -> GameSnapshot:
        s = self._state
        return GameSnapshot(
            player=s.player.pos,
            enemy=s.enemy.pos,
            point=s.point,
            score=self.score,
            high_score=self.high_scores.best,
            phase=self.phase,
            viewport=self._viewport,
            enemy_speed=s.enemy.speed,
            player_size=s.player.size,
            tick=s.ticks,
            new_record=self._new_record,
        )

    def _publish(self, elapsed_ms: float = 0.0, force: bool = False) -> None:
        self.publisher.offer(self._build_snapshot(), elapsed_ms=elapsed_ms, force=force)
