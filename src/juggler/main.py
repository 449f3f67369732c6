"""
Main entry point for the juggling game.

Loads settings from the environment (and .env), wires the session,
input routing, audio and window together, and runs the frame loop.
"""

import asyncio
import logging
import sys

from juggler.config.settings import Settings, get_settings
from juggler.core.clock import FrameClock
from juggler.core.events import Event, EventBus
from juggler.game.controls import InputRouter
from juggler.game.interfaces import SilentSound, SoundEmitter
from juggler.game.loop import GameLoop
from juggler.game.session import create_session

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def log_event(event: Event) -> None:
    """Debug trace of every bus event."""
    name = event.type.name if hasattr(event.type, "name") else event.type
    logger.debug(f"{name} from {event.source}: {event.data}")


def build_sound(settings: Settings) -> SoundEmitter:
    """Audio engine when enabled, otherwise a silent emitter."""
    if not settings.audio.enabled:
        return SilentSound()
    from juggler.audio.engine import AudioEngine

    return AudioEngine(
        master_volume=settings.audio.master_volume,
        beat_ms=settings.audio.beat_ms,
    )


async def run_game(settings: Settings) -> None:
    """Create all components and run the window until it closes."""
    from juggler.app.window import GameWindow, WindowConfig

    event_bus = EventBus()
    if settings.debug:
        event_bus.subscribe_all(log_event)
    sound = build_sound(settings)
    session = create_session(settings, sound=sound, event_bus=event_bus)
    router = InputRouter(session, event_bus)

    clock = FrameClock(
        nominal_frame_ms=settings.timing.nominal_frame_ms,
        max_delta_ms=settings.timing.max_delta_ms,
    )
    window = GameWindow(
        session.world,
        event_bus,
        config=WindowConfig(
            scale=settings.display.scale,
            title=settings.display.title,
            fps=settings.display.fps,
            pointer_lanes=settings.pointer_lanes,
        ),
        sound=sound,
    )
    loop = GameLoop(session, clock, renderer=window)

    try:
        await window.run(loop)
    finally:
        router.detach()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    load_dotenv()

    try:
        settings = get_settings()
    except Exception as e:
        setup_logging()
        logger.exception(f"Invalid configuration: {e}")
        sys.exit(1)

    setup_logging(settings.debug)
    logger.info(f"Juggler starting ({settings.variant})...")

    try:
        asyncio.run(run_game(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("Juggler stopped")


if __name__ == "__main__":
    main()
