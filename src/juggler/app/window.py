"""
Desktop game window using pygame.

Captures keyboard and pointer input onto the event bus, drives the game
loop once per display frame, and presents each snapshot scaled up with
the HUD and message text drawn on top.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

import pygame

from juggler.core.events import EventBus, button_press_event, lane_select_event, move_event
from juggler.game.interfaces import Renderer, SilentSound, SoundEmitter
from juggler.game.loop import GameLoop
from juggler.game.models import SessionSnapshot, World
from juggler.graphics.scene import (
    HUD_BOX,
    MESSAGE_BOX,
    OUTLINE,
    SceneRenderer,
    hud_lines,
    message_for,
    to_surface_array,
)

logger = logging.getLogger(__name__)

LEFT_KEYS = (pygame.K_LEFT, pygame.K_a)
RIGHT_KEYS = (pygame.K_RIGHT, pygame.K_d)
BEGIN_KEYS = (pygame.K_SPACE, pygame.K_RETURN)


@dataclass
class WindowConfig:
    """Game window configuration."""
    scale: int = 3
    title: str = "Juggler"
    fps: int = 60
    pointer_lanes: bool = False

    text_color: tuple[int, int, int] = (230, 230, 240)
    debug_bg: tuple[int, int, int, int] = (20, 25, 35, 200)


class GameWindow(Renderer):
    """
    Pygame window that is both the input source and the renderer.

    Keyboard Mapping:
        LEFT / A: Move left
        RIGHT / D: Move right
        SPACE / RETURN: Begin / restart
        Mouse click: Jump to lane (when pointer lanes are enabled)
        M: Toggle mute
        F1: Toggle debug overlay
        ESC: Quit
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        config: WindowConfig | None = None,
        sound: SoundEmitter | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.config = config or WindowConfig()
        self.sound = sound or SilentSound()
        self.scene = SceneRenderer(world)

        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None
        self._debug_font: pygame.font.Font | None = None
        self._running = False
        self._show_debug = False
        self._frame_count = 0

    @property
    def size(self) -> tuple[int, int]:
        return (self.world.width * self.config.scale, self.world.height * self.config.scale)

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)
        self._screen = pygame.display.set_mode(self.size, pygame.DOUBLEBUF)
        self._clock = pygame.time.Clock()

        pygame.font.init()
        scale = self.config.scale
        self._font = pygame.font.SysFont("Trebuchet MS", 10 * scale)
        self._small_font = pygame.font.SysFont("Trebuchet MS", 8 * scale)
        self._debug_font = pygame.font.SysFont(None, 6 * scale)

        logger.info(f"Pygame initialized: {self.size[0]}x{self.size[1]}")

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)
            elif event.type == pygame.KEYUP:
                self._handle_keyup(event)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._handle_click(event.pos)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        key = event.key

        # First key press also starts the music
        self._start_music()

        if key == pygame.K_ESCAPE:
            self._running = False
        elif key == pygame.K_F1:
            self._show_debug = not self._show_debug
        elif key == pygame.K_m:
            self._toggle_mute()
        elif key in LEFT_KEYS:
            self.event_bus.queue_event(move_event("left", pressed=True))
        elif key in RIGHT_KEYS:
            self.event_bus.queue_event(move_event("right", pressed=True))
        elif key in BEGIN_KEYS:
            self.event_bus.queue_event(button_press_event(source="keyboard"))

    def _handle_keyup(self, event: pygame.event.Event) -> None:
        key = event.key
        if key in LEFT_KEYS:
            self.event_bus.queue_event(move_event("left", pressed=False))
        elif key in RIGHT_KEYS:
            self.event_bus.queue_event(move_event("right", pressed=False))

    def _handle_click(self, pos: tuple[int, int]) -> None:
        if not self.config.pointer_lanes:
            return
        self._start_music()
        self.event_bus.queue_event(lane_select_event(pos[0] / self.config.scale))

    def _toggle_mute(self) -> None:
        try:
            muted = self.sound.toggle_mute()
            logger.info(f"Sound {'muted' if muted else 'unmuted'}")
        except Exception as e:
            logger.error(f"Mute toggle failed: {e}")

    def _start_music(self) -> None:
        try:
            self.sound.start_ambient_loop()
        except Exception as e:
            logger.error(f"Ambient loop failed: {e}")

    # Renderer
    def render(self, snapshot: SessionSnapshot) -> None:
        if not self._screen:
            return

        buffer = self.scene.draw(snapshot)
        surface = pygame.surfarray.make_surface(to_surface_array(buffer))
        self._screen.blit(pygame.transform.scale(surface, self.size), (0, 0))

        self._render_hud(snapshot)
        self._render_message(snapshot)
        if self._show_debug:
            self._render_debug(snapshot)

        pygame.display.flip()

    def _text(self, font: Optional[pygame.font.Font], text: str, x: float, y: float, color=OUTLINE) -> None:
        if font is None or self._screen is None:
            return
        scale = self.config.scale
        surface = font.render(text, True, color)
        self._screen.blit(surface, (int(x * scale), int(y * scale)))

    def _render_hud(self, snapshot: SessionSnapshot) -> None:
        x, y, _, _ = HUD_BOX
        for i, line in enumerate(hud_lines(snapshot)):
            self._text(self._small_font, line, x + 6, y + 3 + i * 10)

    def _render_message(self, snapshot: SessionSnapshot) -> None:
        message = message_for(snapshot)
        if message is None:
            return
        headline, subtext = message
        x, y, _, _ = MESSAGE_BOX
        self._text(self._font, headline, x + 14, y + 16)
        self._text(self._small_font, subtext, x + 14, y + 38)

    def _render_debug(self, snapshot: SessionSnapshot) -> None:
        """Render the debug information panel."""
        if not self._screen or not self._debug_font:
            return

        lines = [
            f"FPS: {self._clock.get_fps():.1f}" if self._clock else "FPS: --",
            f"Frame: {self._frame_count}",
            f"State: {snapshot.state.name}",
            f"Variant: {snapshot.variant.value}",
            f"Target: {snapshot.target_ball_count}  Streak: {snapshot.catch_streak}",
            f"Best: {snapshot.highest_ball_count}  Spawned: {snapshot.balls_spawned}",
            f"In flight: {len(snapshot.balls)}",
        ]
        for event in self.event_bus.get_history(limit=4):
            name = event.type.name if hasattr(event.type, "name") else str(event.type)
            lines.append(f"> {name}")

        scale = self.config.scale
        width, line_h = 150 * scale, 7 * scale
        panel = pygame.Surface((width, line_h * len(lines) + 4 * scale), pygame.SRCALPHA)
        panel.fill(self.config.debug_bg)
        top = self.size[1] - panel.get_height()
        self._screen.blit(panel, (self.size[0] - width, top))

        for i, line in enumerate(lines):
            surface = self._debug_font.render(line, True, self.config.text_color)
            self._screen.blit(surface, (self.size[0] - width + 2 * scale, top + 2 * scale + i * line_h))

    async def run(self, loop: GameLoop) -> None:
        """Main window loop: one simulation step and one render per frame."""
        self._init_pygame()
        self._running = True
        self._start_music()

        logger.info("Game window started")

        while self._running:
            self._handle_events()
            await self.event_bus.process_queue()

            loop.frame(pygame.time.get_ticks())

            if self._clock:
                self._clock.tick(self.config.fps)
            self._frame_count += 1

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        try:
            self.sound.cleanup()
        except Exception as e:
            logger.error(f"Audio cleanup failed: {e}")
        pygame.quit()
        logger.info("Game window closed")

    def stop(self) -> None:
        self._running = False
