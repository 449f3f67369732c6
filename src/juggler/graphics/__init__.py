"""Graphics for the juggling game: numpy frame buffers and the circus scene."""

from juggler.graphics.primitives import (
    blend_rect,
    draw_circle,
    draw_ellipse,
    draw_rect,
    fill,
    hex_color,
    new_buffer,
)
from juggler.graphics.scene import SceneRenderer, hud_lines, message_for

__all__ = [
    "SceneRenderer",
    "hud_lines",
    "message_for",
    "blend_rect",
    "draw_circle",
    "draw_ellipse",
    "draw_rect",
    "fill",
    "hex_color",
    "new_buffer",
]
