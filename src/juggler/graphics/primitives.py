"""Basic drawing primitives on numpy RGB frame buffers."""

from typing import Tuple
import numpy as np
from numpy.typing import NDArray

Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]


def new_buffer(width: int, height: int) -> Buffer:
    """Allocate a black (height, width, 3) buffer."""
    return np.zeros((height, width, 3), dtype=np.uint8)


def fill(buffer: Buffer, color: Color) -> None:
    """Fill entire buffer with color."""
    buffer[:, :] = color


def draw_rect(
    buffer: Buffer,
    x: int,
    y: int,
    width: int,
    height: int,
    color: Color,
    filled: bool = True,
) -> None:
    """Draw a rectangle, clipped to the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
        filled: If True, fill rectangle; if False, draw a 1px outline
    """
    h, w = buffer.shape[:2]

    x1 = max(0, min(x, w))
    y1 = max(0, min(y, h))
    x2 = max(0, min(x + width, w))
    y2 = max(0, min(y + height, h))
    if x2 <= x1 or y2 <= y1:
        return

    if filled:
        buffer[y1:y2, x1:x2] = color
        return

    buffer[y1, x1:x2] = color
    buffer[y2 - 1, x1:x2] = color
    buffer[y1:y2, x1] = color
    buffer[y1:y2, x2 - 1] = color


def draw_ellipse(
    buffer: Buffer,
    cx: float,
    cy: float,
    rx: float,
    ry: float,
    color: Color,
    filled: bool = True,
) -> None:
    """Draw an axis-aligned ellipse using a distance mask.

    The outline variant keeps the pixels within one pixel of the edge.
    """
    if rx <= 0 or ry <= 0:
        return
    h, w = buffer.shape[:2]
    y_indices, x_indices = np.ogrid[:h, :w]
    norm = ((x_indices - cx) / rx) ** 2 + ((y_indices - cy) / ry) ** 2

    if filled:
        mask = norm <= 1.0
    else:
        inner_rx = max(rx - 1.0, 0.5)
        inner_ry = max(ry - 1.0, 0.5)
        inner = ((x_indices - cx) / inner_rx) ** 2 + ((y_indices - cy) / inner_ry) ** 2
        mask = (norm <= 1.0) & (inner > 1.0)
    buffer[mask] = color


def draw_circle(
    buffer: Buffer,
    cx: float,
    cy: float,
    radius: float,
    color: Color,
    filled: bool = True,
) -> None:
    """Draw a circle; see draw_ellipse."""
    draw_ellipse(buffer, cx, cy, radius, radius, color, filled=filled)


def hex_color(value: str) -> Color:
    """Parse ``#rrggbb`` into an RGB tuple."""
    value = value.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"expected #rrggbb, got {value!r}")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def blend_rect(
    buffer: Buffer,
    x: int,
    y: int,
    width: int,
    height: int,
    color: Color,
    alpha: float,
) -> None:
    """Alpha-blend a filled rectangle over the buffer contents."""
    h, w = buffer.shape[:2]
    x1, y1 = max(0, x), max(0, y)
    x2, y2 = min(w, x + width), min(h, y + height)
    if x2 <= x1 or y2 <= y1:
        return
    region = buffer[y1:y2, x1:x2].astype(np.float32)
    blended = region * (1.0 - alpha) + np.array(color, dtype=np.float32) * alpha
    buffer[y1:y2, x1:x2] = np.clip(blended, 0, 255).astype(np.uint8)
