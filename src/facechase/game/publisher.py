"""
Authoritative vs. published game state.

The controller rebuilds a snapshot after every tick, which is the
authoritative state. The render layer reads ``published``, which is only
replaced when ``interval_ms`` of game time has passed since the last
publish, or when a publish is forced (phase change, reset, resize).
Snapshots are frozen, so the published one is always some complete
past state.
"""

import logging
from typing import Callable, Optional

from facechase.game.models import GameSnapshot

logger = logging.getLogger(__name__)

PublishListener = Callable[[GameSnapshot], None]


class SnapshotPublisher:
    """Throttles how often the authoritative snapshot reaches the view."""

    def __init__(self, interval_ms: float = 0.0) -> None:
        self.interval_ms = interval_ms
        self._authoritative: Optional[GameSnapshot] = None
        self._published: Optional[GameSnapshot] = None
        self._since_publish_ms = 0.0
        self._publish_count = 0
        self._listeners: list[PublishListener] = []

    @property
    def authoritative(self) -> Optional[GameSnapshot]:
        return self._authoritative

    @property
    def published(self) -> Optional[GameSnapshot]:
        return self._published

    @property
    def publish_count(self) -> int:
        return self._publish_count

    def add_listener(self, callback: PublishListener) -> None:
        self._listeners.append(callback)

    def offer(self, snapshot: GameSnapshot, elapsed_ms: float = 0.0, force: bool = False) -> bool:
        """Record a new authoritative snapshot and publish it if due.

        Args:
            snapshot: State after a completed tick
            elapsed_ms: Game time since the previous offer
            force: Publish regardless of the interval

        Returns:
            True if the snapshot was published
        """
        self._authoritative = snapshot
        self._since_publish_ms += elapsed_ms

        due = self.interval_ms <= 0 or self._since_publish_ms >= self.interval_ms
        if not (force or due or self._published is None):
            return False

        self._publish(snapshot)
        return True

    def _publish(self, snapshot: GameSnapshot) -> None:
        self._published = snapshot
        self._since_publish_ms = 0.0
        self._publish_count += 1
        for listener in self._listeners:
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"Error in publish listener: {e}")
