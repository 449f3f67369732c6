"""Juggling game core: session, motion models, catch and difficulty rules."""

from juggler.game.models import Ball, BallView, Mood, Player, SessionSnapshot, Variant, World
from juggler.game.trajectory import TrajectoryModel, LaneArcTrajectory, FreeFallTrajectory
from juggler.game.spawner import BallSpawner, LaneBallSpawner, FreeFallBallSpawner
from juggler.game.catching import CatchResolver, LaneCatchResolver, FreeFallCatchResolver, next_lane
from juggler.game.difficulty import DifficultyController
from juggler.game.controls import Action, Controls, InputRouter, lane_for_pointer
from juggler.game.interfaces import Renderer, SoundEmitter, SilentSound
from juggler.game.session import GameSession, create_session
from juggler.game.loop import GameLoop

__all__ = [
    "Ball",
    "BallView",
    "Mood",
    "Player",
    "SessionSnapshot",
    "Variant",
    "World",
    "TrajectoryModel",
    "LaneArcTrajectory",
    "FreeFallTrajectory",
    "BallSpawner",
    "LaneBallSpawner",
    "FreeFallBallSpawner",
    "CatchResolver",
    "LaneCatchResolver",
    "FreeFallCatchResolver",
    "next_lane",
    "DifficultyController",
    "Action",
    "Controls",
    "InputRouter",
    "lane_for_pointer",
    "Renderer",
    "SoundEmitter",
    "SilentSound",
    "GameSession",
    "create_session",
    "GameLoop",
]
