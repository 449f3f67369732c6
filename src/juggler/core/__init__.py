"""Core framework components for the juggling game."""

from .state import SessionState, StateMachine
from .events import EventBus, Event, EventType
from .clock import FrameClock

__all__ = ["SessionState", "StateMachine", "EventBus", "Event", "EventType", "FrameClock"]
