"""
High score persistence.

A string-keyed scalar store (the browser's localStorage in spirit) plus
a small book-keeper that reads the best score once and writes it back
only when a run beats it.
"""

from abc import ABC, abstractmethod
import json
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """String-keyed store of string values."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if missing."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""
        ...


class MemoryStore(KeyValueStore):
    """In-process store; nothing survives a restart."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self.writes = 0

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self.writes += 1


class JsonFileStore(KeyValueStore):
    """Persistent store kept as a single JSON object on disk."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._data: dict[str, str] = {}
        self._load()

    def _load(self) -> None:
        """Load data from file."""
        if not self.path.exists():
            return
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if isinstance(data, dict):
                self._data = {str(k): str(v) for k, v in data.items()}
                logger.info(f"Loaded {len(self._data)} stored values from {self.path}")
            else:
                logger.warning(f"Ignoring {self.path}: expected a JSON object")
        except Exception as e:
            logger.error(f"Failed to load {self.path}: {e}")

    def _save(self) -> None:
        """Save data to file."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=2, ensure_ascii=False)
        except Exception as e:
            logger.error(f"Failed to save {self.path}: {e}")

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._save()


def parse_score(raw: Optional[str]) -> int:
    """Parse a stored score, defaulting to 0 for missing or garbage values."""
    if raw is None:
        return 0
    try:
        return max(0, int(raw.strip()))
    except (ValueError, AttributeError):
        logger.warning(f"Unparseable stored high score {raw!r}, using 0")
        return 0


class HighScoreBook:
    """Best score across runs, backed by a KeyValueStore."""

    def __init__(self, store: KeyValueStore, key: str = "face_hc") -> None:
        self._store = store
        self._key = key
        self._best = parse_score(store.get(key))
        logger.info(f"High score loaded: {self._best}")

    @property
    def best(self) -> int:
        return self._best

    def submit(self, score: int) -> bool:
        """Record a finished run. Returns True if it set a new record."""
        if score <= self._best:
            return False
        self._best = score
        self._store.set(self._key, str(score))
        logger.info(f"New high score: {score}")
        return True
