"""Desktop front end for the juggling game."""

from .window import GameWindow, WindowConfig

__all__ = ["GameWindow", "WindowConfig"]
