"""Juggler audio: synthesized spawn chirp and circus music loop."""

from .engine import AudioEngine

__all__ = ["AudioEngine"]
