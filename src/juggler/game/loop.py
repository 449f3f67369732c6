"""One animation frame: clock tick, one simulation step, one render pass."""

import logging
from typing import Optional

from juggler.core.clock import FrameClock
from juggler.core.events import Event, EventType
from juggler.core.state import SessionState
from juggler.game.interfaces import Renderer
from juggler.game.models import SessionSnapshot
from juggler.game.session import GameSession

logger = logging.getLogger(__name__)


class GameLoop:
    """Drives a session from frame timestamps.

    The renderer only ever sees snapshots, and a renderer that raises is
    logged without affecting the session.

    The clock restarts whenever the session (re)enters PLAYING, so the
    first frame of a new game is one nominal frame.
    """

    def __init__(self, session: GameSession, clock: FrameClock, renderer: Optional[Renderer] = None):
        self.session = session
        self.clock = clock
        self.renderer = renderer
        self.render_failures = 0
        session.event_bus.subscribe(EventType.STATE_CHANGED, self._on_state_changed)

    def _on_state_changed(self, event: Event) -> None:
        if event.data.get("new") == SessionState.PLAYING.name:
            self.clock.reset()

    def frame(self, timestamp_ms: float) -> SessionSnapshot:
        delta = self.clock.tick(timestamp_ms)
        self.session.advance(delta)
        snapshot = self.session.snapshot()

        if self.renderer is not None:
            try:
                self.renderer.render(snapshot)
            except Exception as e:
                self.render_failures += 1
                logger.error(f"Render failed: {e}")

        return snapshot
