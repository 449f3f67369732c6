"""
Input buffering for the game session.

Input arrives asynchronously from the platform (keyboard, pointer) and is
recorded in a pressed-state map. The session consumes the transient
"edge" part of a press once per tick, so one key press moves exactly
one lane no matter how many frames the key stays down.
"""

from __future__ import annotations

import logging
import math
from enum import Enum, auto
from typing import TYPE_CHECKING, Callable, Optional

from juggler.core.events import Event, EventBus, EventType
from juggler.game.models import World

if TYPE_CHECKING:
    from juggler.game.session import GameSession

logger = logging.getLogger(__name__)


class Action(Enum):
    """Directional inputs."""

    LEFT = auto()
    RIGHT = auto()


class Controls:
    """Pressed-state map plus unconsumed press edges and a pending lane pick."""

    def __init__(self) -> None:
        self._held: dict[Action, bool] = {action: False for action in Action}
        self._edges: set[Action] = set()
        self._lane_request: Optional[int] = None

    def press(self, action: Action) -> None:
        # Key repeat while held does not produce a new edge
        if not self._held[action]:
            self._edges.add(action)
        self._held[action] = True

    def release(self, action: Action) -> None:
        self._held[action] = False

    def is_held(self, action: Action) -> bool:
        return self._held[action]

    def consume(self, action: Action) -> bool:
        """Return True once per press, then forget the press."""
        if action in self._edges:
            self._edges.discard(action)
            return True
        return False

    def direction(self) -> int:
        """-1, 0 or +1 from the held left/right state."""
        return int(self.is_held(Action.RIGHT)) - int(self.is_held(Action.LEFT))

    def request_lane(self, lane: int) -> None:
        self._lane_request = lane

    def take_lane_request(self) -> Optional[int]:
        lane, self._lane_request = self._lane_request, None
        return lane

    def clear(self) -> None:
        """Drop everything, including held keys."""
        for action in Action:
            self._held[action] = False
        self._edges.clear()
        self._lane_request = None


def lane_for_pointer(x: float, world: World) -> int:
    """Map a horizontal world coordinate to a lane, clamped to the valid range."""
    return world.clamp_lane(math.floor(x / world.lane_width))


class InputRouter:
    """Feeds input events from the bus into a session."""

    def __init__(self, session: GameSession, event_bus: EventBus) -> None:
        self.session = session
        self._unsubscribers: list[Callable[[], None]] = [
            event_bus.subscribe(EventType.MOVE_LEFT, self._on_move_left),
            event_bus.subscribe(EventType.MOVE_RIGHT, self._on_move_right),
            event_bus.subscribe(EventType.LANE_SELECT, self._on_lane_select),
            event_bus.subscribe(EventType.BUTTON_PRESS, self._on_button),
        ]

    def _apply_move(self, action: Action, event: Event) -> None:
        if event.data.get("pressed", True):
            self.session.controls.press(action)
        else:
            self.session.controls.release(action)

    def _on_move_left(self, event: Event) -> None:
        self._apply_move(Action.LEFT, event)

    def _on_move_right(self, event: Event) -> None:
        self._apply_move(Action.RIGHT, event)

    def _on_lane_select(self, event: Event) -> None:
        x = event.data.get("x")
        if x is None:
            return
        self.session.controls.request_lane(lane_for_pointer(float(x), self.session.world))

    def _on_button(self, event: Event) -> None:
        self.session.begin()

    def detach(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
