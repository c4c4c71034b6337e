"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested values use a double underscore, e.g. FACECHASE_TUNING__INITIAL_ENEMY_SPEED=4.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

VariantName = Literal["classic", "arcade", "collector", "collector_smooth"]


class GameTuning(BaseModel):
    """Gameplay constants."""

    # Player
    player_size: int = 50
    player_start_x: float = 50.0
    player_start_y: float = 50.0
    step_wide: float = 10.0
    step_narrow: float = 7.0
    narrow_breakpoint: int = 768  # Viewports narrower than this use step_narrow

    # Enemy
    initial_enemy_speed: float = 3.5
    tick_speed_increment: float = 0.001
    point_speed_increment: float = 0.25
    catch_distance: float = 45.0
    enemy_spawn_offset: float = 100.0  # From the bottom-right corner

    # Points
    point_size: int = 30
    point_inset: int = 50
    collect_distance: float = 40.0
    mega_every: int = 10
    mega_value: int = 5

    # Time scoring shows ticks // score_divisor
    score_divisor: int = Field(default=10, ge=1)

    # Throttled publishing for collector_smooth
    publish_interval_ms: float = Field(default=50.0, ge=0.0)


class WindowSettings(BaseModel):
    """Desktop window settings."""

    width: int = 1280
    height: int = 720
    fullscreen: bool = False
    fps: int = Field(default=60, ge=1)
    title: str = "FACE CHASE"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="FACECHASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    variant: VariantName = "collector_smooth"
    debug: bool = False
    mute: bool = False

    # Persistence
    data_path: Path = Field(default_factory=lambda: Path.home() / ".facechase")
    high_score_key: str = "face_hc"

    # Logging
    log_file: Path | None = Path("facechase.log")

    # Nested settings
    tuning: GameTuning = Field(default_factory=GameTuning)
    window: WindowSettings = Field(default_factory=WindowSettings)

    @property
    def store_path(self) -> Path:
        """JSON file backing the key-value store."""
        return self.data_path / "store.json"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
