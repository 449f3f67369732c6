"""Circus scene drawn from a session snapshot into a numpy frame buffer.

Text (HUD counters, messages) is not rasterized here; :func:`hud_lines`
and :func:`message_for` provide the strings and the window draws them
with its own fonts inside :data:`HUD_BOX` and :data:`MESSAGE_BOX`.
"""

from typing import List, Optional, Tuple

import numpy as np

from juggler.core.state import SessionState
from juggler.game.models import Mood, Player, SessionSnapshot, World
from juggler.graphics.primitives import (
    Buffer,
    blend_rect,
    draw_circle,
    draw_ellipse,
    draw_rect,
    fill,
    hex_color,
    new_buffer,
)

# Palette
SKY = hex_color("#6cc0ff")
TENT_RED = hex_color("#ff7cab")
TENT_PINK = hex_color("#ffd1e8")
SPOTLIGHT = hex_color("#fff4c8")
BANNER = hex_color("#fff6d8")
FLOOR = hex_color("#ffecae")
FLOOR_DASH = hex_color("#ffd17b")
LIGHT = (255, 255, 255)
OUTLINE = hex_color("#3a2b4c")
PANEL = (255, 255, 255)

BALL_RADIUS = 4
STRIPE_WIDTH = 20
TENT_HEIGHT = 80

HUD_BOX = (6, 6, 110, 28)
MESSAGE_BOX = (50, 54, 220, 72)

# Character sprite as (dx, dy, w, h, color) rectangles around the feet anchor
_HAIR_BACK = hex_color("#5a3a2c")
_HAIR_SIDE = hex_color("#6c4735")
_HAIR_TOP = hex_color("#4a2f23")
_SKIN = hex_color("#f6d7c3")
_GLASSES = hex_color("#2b2b2b")
_EARRING = hex_color("#d7d7d7")
_MOUTH = hex_color("#b35252")
_DRESS = hex_color("#c9c5f3")
_DRESS_DARK = hex_color("#b6b0ee")
_DRESS_LIGHT = hex_color("#d7d3f7")
_ARMS = hex_color("#b5b5c8")

SPRITE: List[Tuple[int, int, int, int, Tuple[int, int, int]]] = [
    (-12, -32, 24, 14, _HAIR_BACK),
    (-14, -28, 28, 12, _HAIR_SIDE),
    (-10, -38, 20, 6, _HAIR_TOP),
    (-12, -36, 4, 6, _HAIR_TOP),
    (8, -36, 4, 6, _HAIR_TOP),
    (-6, -24, 12, 10, _SKIN),
    (-7, -16, 14, 8, _SKIN),
    (-7, -22, 6, 4, _GLASSES),
    (1, -22, 6, 4, _GLASSES),
    (-1, -20, 2, 2, _GLASSES),
    (-10, -6, 20, 14, _DRESS),
    (-10, 4, 20, 4, _DRESS_DARK),
    (-6, 0, 12, 6, _DRESS_LIGHT),
    (-14, -4, 4, 10, _ARMS),
    (10, -4, 4, 10, _ARMS),
    (-8, 8, 6, 8, _DRESS_DARK),
    (2, 8, 6, 8, _DRESS_DARK),
]


class SceneRenderer:
    """Rasterizes snapshots at world resolution."""

    def __init__(self, world: World):
        self.world = world
        self._background = self._draw_background()

    def _draw_background(self) -> Buffer:
        world = self.world
        buffer = new_buffer(world.width, world.height)
        fill(buffer, SKY)

        for i, x in enumerate(range(0, world.width, STRIPE_WIDTH)):
            color = TENT_RED if i % 2 == 0 else TENT_PINK
            draw_rect(buffer, x, 0, STRIPE_WIDTH, TENT_HEIGHT, color)

        draw_ellipse(buffer, 80, 40, 50, 26, SPOTLIGHT)
        draw_ellipse(buffer, 240, 36, 55, 28, SPOTLIGHT)

        draw_rect(buffer, 0, TENT_HEIGHT, world.width, 20, BANNER)

        ground = int(world.ground_y)
        draw_rect(buffer, 0, ground, world.width, world.height - ground, FLOOR)
        for x in range(12, world.width, 28):
            draw_rect(buffer, x, ground + 8, 12, 6, FLOOR_DASH)

        for x in range(0, world.width, 24):
            draw_circle(buffer, x + 10, 70, 3, LIGHT)

        return buffer

    def draw(self, snapshot: SessionSnapshot) -> Buffer:
        """Return a fresh frame for ``snapshot``."""
        buffer = self._background.copy()

        for ball in snapshot.balls:
            draw_circle(buffer, ball.x, ball.y, BALL_RADIUS, ball.color)
            draw_circle(buffer, ball.x, ball.y, BALL_RADIUS, OUTLINE, filled=False)

        self._draw_player(buffer, snapshot.player)

        x, y, w, h = HUD_BOX
        blend_rect(buffer, x, y, w, h, PANEL, 0.85)
        draw_rect(buffer, x, y, w, h, OUTLINE, filled=False)

        if message_for(snapshot) is not None:
            x, y, w, h = MESSAGE_BOX
            blend_rect(buffer, x, y, w, h, PANEL, 0.9)
            draw_rect(buffer, x, y, w, h, OUTLINE, filled=False)

        return buffer

    def _draw_player(self, buffer: Buffer, player: Player) -> None:
        x = int(round(player.x))
        y = int(round(player.y))

        for dx, dy, w, h, color in SPRITE:
            draw_rect(buffer, x + dx, y + dy, w, h, color)

        draw_circle(buffer, x - 9, y - 16, 3, _EARRING, filled=False)
        draw_circle(buffer, x + 9, y - 16, 3, _EARRING, filled=False)

        # Sad mouth sits a pixel higher
        mouth_y = y - 10 if player.mood == Mood.SAD else y - 9
        draw_rect(buffer, x - 3, mouth_y, 6, 1, _MOUTH)


def hud_lines(snapshot: SessionSnapshot) -> List[str]:
    """Counter lines shown in the HUD box."""
    return [
        f"Balls: {snapshot.target_ball_count}",
        f"Caught: {snapshot.catch_streak}",
    ]


def message_for(snapshot: SessionSnapshot) -> Optional[Tuple[str, str]]:
    """Headline and subtext for the centered message box, if any."""
    if snapshot.state == SessionState.GAME_OVER:
        return (
            "Game Over!",
            f"You juggled {snapshot.highest_ball_count} balls. Press SPACE to try again.",
        )
    if snapshot.state == SessionState.START:
        return ("Juggler", "Press SPACE to start juggling.")
    return None


def to_surface_array(buffer: Buffer) -> np.ndarray:
    """(h, w, 3) buffer to the (w, h, 3) layout pygame surfarray expects."""
    return buffer.swapaxes(0, 1)
