"""
Phase machine for a single chase run.

Phases:
    NOT_STARTED: Start screen shown, nothing moves
    RUNNING: Simulation ticks every frame
    OVER: Player was caught, entities frozen until reset
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Coarse game phases."""
    NOT_STARTED = auto()
    RUNNING = auto()
    OVER = auto()


PhaseListener = Callable[[Phase, Phase], None]


class PhaseMachine:
    """
    Manages the game phase and its transitions.

    Only transitions listed in VALID_TRANSITIONS are applied; anything
    else is logged and rejected. Listeners are notified after the phase
    has changed, in registration order.
    """

    VALID_TRANSITIONS: list[tuple[Phase, Phase]] = [
        # start
        (Phase.NOT_STARTED, Phase.RUNNING),

        # caught
        (Phase.RUNNING, Phase.OVER),

        # reset
        (Phase.OVER, Phase.NOT_STARTED),
        (Phase.OVER, Phase.RUNNING),  # No start screen
        (Phase.RUNNING, Phase.NOT_STARTED),
    ]

    def __init__(self, initial_phase: Phase = Phase.NOT_STARTED) -> None:
        self._initial = initial_phase
        self._phase = initial_phase
        self._listeners: list[PhaseListener] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.info(f"PhaseMachine initialized with phase: {initial_phase.name}")

    @property
    def phase(self) -> Phase:
        """Get current phase."""
        return self._phase

    @property
    def is_running(self) -> bool:
        return self._phase == Phase.RUNNING

    def can_transition(self, to_phase: Phase) -> bool:
        """Check if transition to given phase is valid."""
        return (self._phase, to_phase) in self._valid_transitions

    def transition(self, to_phase: Phase) -> bool:
        """
        Attempt to transition to a new phase.

        Args:
            to_phase: Target phase

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_phase):
            logger.warning(
                f"Invalid transition: {self._phase.name} -> {to_phase.name}"
            )
            return False

        old_phase = self._phase
        self._phase = to_phase
        logger.info(f"Phase transition: {old_phase.name} -> {to_phase.name}")

        self._notify(old_phase, to_phase)
        return True

    def add_listener(self, callback: PhaseListener) -> None:
        """Add a phase change listener."""
        self._listeners.append(callback)

    def remove_listener(self, callback: PhaseListener) -> None:
        """Remove a phase change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def force(self, phase: Phase) -> None:
        """Jump straight to ``phase`` (used by reset), notifying listeners if it changed."""
        old_phase = self._phase
        self._phase = phase
        if old_phase != phase:
            logger.info(f"Phase forced: {old_phase.name} -> {phase.name}")
            self._notify(old_phase, phase)

    def _notify(self, old_phase: Phase, new_phase: Phase) -> None:
        for listener in self._listeners:
            try:
                listener(old_phase, new_phase)
            except Exception as e:
                logger.error(f"Error in phase listener: {e}")
