"""High score persistence."""

from .highscore import HighScoreBook, JsonFileStore, KeyValueStore, MemoryStore, parse_score

__all__ = ["HighScoreBook", "JsonFileStore", "KeyValueStore", "MemoryStore", "parse_score"]
