"""
Event bus for the juggling game.

Input arrives from the window as events and is queued until the start
of the next frame; gameplay events (spawns, catches, drops, level-ups)
are published synchronously by the session for audio, the debug
overlay and tests to observe.
"""

import asyncio
import inspect
import logging
import time
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Built-in event types."""
    # Input
    BUTTON_PRESS = auto()  # Begin / restart
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    LANE_SELECT = auto()

    # Gameplay
    BALL_SPAWNED = auto()
    BALL_CAUGHT = auto()
    BALL_DROPPED = auto()
    LEVEL_UP = auto()
    STATE_CHANGED = auto()


EventKey = EventType | str


@dataclass
class Event:
    """
    A published message.

    Attributes:
        type: EventType member, or a string for ad-hoc events
        data: Payload, e.g. ``{"serial": 3, "streak": 1}`` for a catch
        source: Who published it ("session", "keyboard", "pointer", ...)
        timestamp: ``time.monotonic()`` at creation
    """
    type: EventKey
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "system"
    timestamp: float = field(default_factory=time.monotonic)


Handler = Callable[[Event], None] | Callable[[Event], Awaitable[None]]

# Subscribers to every event are filed under this key
_ANY = None


class EventBus:
    """
    Publish/subscribe hub.

    ``emit`` delivers to plain-function handlers right away; coroutine
    handlers only run when events go through ``queue_event`` and
    ``process_queue``. Whatever a handler raises is logged and dropped,
    so publishers never see subscriber failures.
    """

    def __init__(self, history_limit: int = 100) -> None:
        self._subscribers: dict[Optional[EventKey], list[Handler]] = {}
        self._pending: asyncio.Queue[Event] = asyncio.Queue()
        self._history: deque[Event] = deque(maxlen=history_limit)

    def _add(self, key: Optional[EventKey], handler: Handler) -> Callable[[], None]:
        handlers = self._subscribers.setdefault(key, [])
        handlers.append(handler)

        def unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)
                logger.debug(f"Unsubscribed {getattr(handler, '__name__', handler)} from {key}")

        return unsubscribe

    def subscribe(self, event_type: EventKey, handler: Handler) -> Callable[[], None]:
        """
        Register ``handler`` for one event type.

        Returns:
            A function that removes the subscription (safe to call twice)
        """
        logger.debug(f"Subscribed {getattr(handler, '__name__', handler)} to {event_type}")
        return self._add(event_type, handler)

    def subscribe_all(self, handler: Handler) -> Callable[[], None]:
        """Register ``handler`` for every event. Returns an unsubscribe function."""
        return self._add(_ANY, handler)

    def _handlers_for(self, event: Event) -> list[Handler]:
        return self._subscribers.get(event.type, []) + self._subscribers.get(_ANY, [])

    def _call(self, handler: Handler, event: Event) -> None:
        try:
            handler(event)
        except Exception as e:
            logger.error(f"Handler for {event.type} failed: {e}")

    def emit(self, event: Event) -> None:
        """Publish now to synchronous handlers."""
        self._history.append(event)
        for handler in self._handlers_for(event):
            if not inspect.iscoroutinefunction(handler):
                self._call(handler, event)

    def queue_event(self, event: Event) -> None:
        """Hold ``event`` until the next ``process_queue``."""
        self._pending.put_nowait(event)

    async def process_queue(self) -> None:
        """Deliver every queued event, awaiting coroutine handlers."""
        while not self._pending.empty():
            event = self._pending.get_nowait()
            self._history.append(event)

            coroutines = []
            for handler in self._handlers_for(event):
                if inspect.iscoroutinefunction(handler):
                    coroutines.append(handler(event))
                else:
                    self._call(handler, event)

            if coroutines:
                for outcome in await asyncio.gather(*coroutines, return_exceptions=True):
                    if isinstance(outcome, Exception):
                        logger.error(f"Async handler for {event.type} failed: {outcome}")

            self._pending.task_done()

    def get_history(self, event_type: Optional[EventKey] = None, limit: int = 10) -> list[Event]:
        """Most recent events, oldest first, optionally of one type."""
        events = [e for e in self._history if event_type is None or e.type == event_type]
        return events[-limit:]


def button_press_event(source: str = "button") -> Event:
    """Begin/restart request."""
    return Event(EventType.BUTTON_PRESS, source=source)


def move_event(direction: str, pressed: bool = True, source: str = "keyboard") -> Event:
    """Press or release of ``"left"`` or ``"right"``."""
    event_type = EventType.MOVE_LEFT if direction == "left" else EventType.MOVE_RIGHT
    return Event(event_type, data={"pressed": pressed}, source=source)


def lane_select_event(x: float, source: str = "pointer") -> Event:
    """Pointer pick at world x coordinate ``x``."""
    return Event(EventType.LANE_SELECT, data={"x": x}, source=source)
