"""Core framework components for FACE CHASE."""

from .state import Phase, PhaseMachine
from .events import EventBus, Event, EventType
from .scheduler import FrameTask

__all__ = ["Phase", "PhaseMachine", "EventBus", "Event", "EventType", "FrameTask"]
