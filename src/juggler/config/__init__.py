"""Configuration for the juggling game."""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
