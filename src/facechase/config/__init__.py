"""Configuration for FACE CHASE."""

from .settings import GameTuning, Settings, WindowSettings, get_settings

__all__ = ["GameTuning", "Settings", "WindowSettings", "get_settings"]
