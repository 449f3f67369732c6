"""
Lifecycle of a juggling session.

    START --begin--> PLAYING --drop--> GAME_OVER --restart--> PLAYING

START is optional: a session without a start screen is created already
PLAYING. Nothing leads back to START.
"""

from enum import Enum, auto
from typing import Callable
import logging

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """Session states."""
    START = auto()      # Idle screen, waiting for the begin signal
    PLAYING = auto()    # Simulation advancing every tick
    GAME_OVER = auto()  # Frozen after a drop, waiting for restart


Listener = Callable[[SessionState, SessionState], None]


class StateMachine:
    """
    Holds the current SessionState and refuses moves not in SUCCESSORS.

    A refused move is logged and reported as False; it never raises.
    Listeners are told ``(old, new)`` after every accepted move.
    """

    SUCCESSORS: dict[SessionState, frozenset[SessionState]] = {
        SessionState.START: frozenset({SessionState.PLAYING}),
        SessionState.PLAYING: frozenset({SessionState.GAME_OVER}),
        SessionState.GAME_OVER: frozenset({SessionState.PLAYING}),
    }

    def __init__(self, initial_state: SessionState = SessionState.PLAYING) -> None:
        self._state = initial_state
        self._listeners: list[Listener] = []
        logger.debug(f"Session lifecycle starts in {initial_state.name}")

    @property
    def state(self) -> SessionState:
        return self._state

    def can_transition(self, to_state: SessionState) -> bool:
        return to_state in self.SUCCESSORS.get(self._state, frozenset())

    def transition(self, to_state: SessionState) -> bool:
        """Move to ``to_state`` if allowed. Returns whether the move happened."""
        if not self.can_transition(to_state):
            logger.warning(f"Refusing {self._state.name} -> {to_state.name}")
            return False

        old_state, self._state = self._state, to_state
        logger.info(f"Session {old_state.name} -> {to_state.name}")

        for listener in list(self._listeners):
            try:
                listener(old_state, to_state)
            except Exception as e:
                logger.error(f"State listener failed: {e}")

        return True

    def add_listener(self, callback: Listener) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: Listener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)
