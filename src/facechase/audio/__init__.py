"""FACE CHASE audio cues."""

from .engine import AudioEngine

__all__ = ["AudioEngine"]
