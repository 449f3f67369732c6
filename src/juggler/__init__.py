"""Juggler - a tiny circus arcade game: keep the balls in the air."""

__version__ = "0.1.0"
