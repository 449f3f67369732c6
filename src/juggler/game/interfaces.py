"""
Collaborator contracts for the game core.

The session never depends on rendering or sound succeeding; these
interfaces describe what it calls, and callers wrap every call so a
failing implementation cannot halt the simulation.
"""

from abc import ABC, abstractmethod

from juggler.game.models import SessionSnapshot


class Renderer(ABC):
    """Read-only consumer of session snapshots."""

    @abstractmethod
    def render(self, snapshot: SessionSnapshot) -> None:
        """Draw one frame. Must not mutate the snapshot."""
        ...


class SoundEmitter(ABC):
    """Fire-and-forget audio cues."""

    @abstractmethod
    def on_spawn(self) -> None:
        """Play the cue for a ball entering play."""
        ...

    @abstractmethod
    def start_ambient_loop(self) -> None:
        """Start background music. Calling it again must be harmless."""
        ...

    def toggle_mute(self) -> bool:
        """Flip muting. Returns True if now muted."""
        return False

    def cleanup(self) -> None:
        """Release the audio device."""


class SilentSound(SoundEmitter):
    """SoundEmitter that plays nothing. Used headless and in tests."""

    def on_spawn(self) -> None:
        pass

    def start_ambient_loop(self) -> None:
        pass
