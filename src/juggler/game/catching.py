"""Catch resolution: did the player make it, and what happens to the ball next."""

import random
from abc import ABC, abstractmethod
from typing import Callable, Optional

from juggler.game.models import Ball, Player, World


def next_lane(from_lane: int, world: World, rng: random.Random) -> int:
    """Pick the destination for a ball leaving ``from_lane``.

    Outer lanes always throw to the center; the center throws to either
    outer lane with equal probability. Never center->center or
    outer->outer.
    """
    if from_lane != world.center_lane:
        return world.center_lane
    left, right = world.outer_lanes
    return left if rng.random() < 0.5 else right


class CatchResolver(ABC):
    """Decides the outcome when a ball reaches its catch point."""

    @abstractmethod
    def is_caught(self, ball: Ball, player: Player, world: World) -> bool:
        ...

    @abstractmethod
    def after_catch(self, ball: Ball, world: World, rng: random.Random) -> Optional[Ball]:
        """Return the ball to keep in play, or None to retire it."""
        ...


class LaneCatchResolver(CatchResolver):
    """Caught iff the player stands in the destination lane; balls are recycled in place."""

    def __init__(self, flight_duration: Callable[[random.Random], float]):
        self.flight_duration = flight_duration

    def is_caught(self, ball: Ball, player: Player, world: World) -> bool:
        return player.lane == ball.to_lane

    def after_catch(self, ball: Ball, world: World, rng: random.Random) -> Optional[Ball]:
        ball.from_lane = ball.to_lane
        ball.to_lane = next_lane(ball.from_lane, world, rng)
        ball.progress = 0.0
        ball.duration_ms = self.flight_duration(rng)
        return ball


class FreeFallCatchResolver(CatchResolver):
    """Caught iff the ball lands within ``catch_width`` of the player; caught balls retire."""

    def __init__(self, catch_width: float = 14.0):
        self.catch_width = catch_width

    def is_caught(self, ball: Ball, player: Player, world: World) -> bool:
        return abs(ball.x - player.x) <= self.catch_width

    def after_catch(self, ball: Ball, world: World, rng: random.Random) -> Optional[Ball]:
        return None
