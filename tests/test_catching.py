"""Tests for catch resolution and lane selection."""

import random

import pytest

from juggler.game.catching import FreeFallCatchResolver, LaneCatchResolver, next_lane
from juggler.game.models import Ball, Player


@pytest.mark.parametrize("outer", [0, 2])
def test_outer_lanes_throw_to_center(world, outer):
    rng = random.Random(0)
    for _ in range(20):
        assert next_lane(outer, world, rng) == 1


def test_center_throws_to_both_outer_lanes(world):
    rng = random.Random(42)
    picks = {next_lane(1, world, rng) for _ in range(200)}
    assert picks == {0, 2}


def test_lane_catch_requires_matching_lane(world):
    resolver = LaneCatchResolver(lambda rng: 2100.0)
    ball = Ball(serial=0, color=(0, 0, 0), from_lane=0, to_lane=1, progress=1.0)

    assert resolver.is_caught(ball, Player(x=160.0, y=142.0, lane=1), world)
    assert not resolver.is_caught(ball, Player(x=86.0, y=142.0, lane=0), world)


def test_lane_catch_recycles_ball_in_place(world):
    resolver = LaneCatchResolver(lambda rng: 1999.0)
    ball = Ball(serial=5, color=(1, 2, 3), from_lane=2, to_lane=1, progress=1.02)

    kept = resolver.after_catch(ball, world, random.Random(0))

    assert kept is ball
    assert ball.from_lane == 1
    assert ball.to_lane in (0, 2)
    assert ball.progress == 0.0
    assert ball.duration_ms == 1999.0
    assert ball.serial == 5 and ball.color == (1, 2, 3)


def test_free_fall_catch_window(world):
    resolver = FreeFallCatchResolver(catch_width=14.0)
    player = Player(x=100.0, y=142.0)

    assert resolver.is_caught(Ball(serial=0, color=(0, 0, 0), x=114.0), player, world)
    assert resolver.is_caught(Ball(serial=0, color=(0, 0, 0), x=86.0), player, world)
    assert not resolver.is_caught(Ball(serial=0, color=(0, 0, 0), x=114.5), player, world)


def test_free_fall_catch_retires_ball(world):
    resolver = FreeFallCatchResolver()
    assert resolver.after_catch(Ball(serial=0, color=(0, 0, 0)), world, random.Random(0)) is None
