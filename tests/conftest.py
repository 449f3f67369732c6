"""Shared fixtures: deterministic sessions and stub collaborators."""

import random

import pytest

from juggler.core.events import EventBus
from juggler.core.state import SessionState
from juggler.game.catching import LaneCatchResolver
from juggler.game.difficulty import DifficultyController
from juggler.game.interfaces import Renderer, SoundEmitter
from juggler.game.models import Variant, World
from juggler.game.session import GameSession
from juggler.game.spawner import LaneBallSpawner
from juggler.game.trajectory import LaneArcTrajectory

COLORS = [(255, 237, 102), (121, 214, 255), (255, 159, 110), (179, 255, 122)]

# 8 nominal frames per flight, so progress steps are exact binary fractions
FLIGHT_MS = 128.0


class RecordingSound(SoundEmitter):
    def __init__(self) -> None:
        self.spawns = 0
        self.ambient_starts = 0
        self.muted = False
        self.cleanups = 0

    def on_spawn(self) -> None:
        self.spawns += 1

    def start_ambient_loop(self) -> None:
        self.ambient_starts += 1

    def toggle_mute(self) -> bool:
        self.muted = not self.muted
        return self.muted

    def cleanup(self) -> None:
        self.cleanups += 1


class FailingSound(SoundEmitter):
    def on_spawn(self) -> None:
        raise RuntimeError("no audio device")

    def start_ambient_loop(self) -> None:
        raise RuntimeError("no audio device")


class RecordingRenderer(Renderer):
    def __init__(self) -> None:
        self.snapshots = []

    def render(self, snapshot) -> None:
        self.snapshots.append(snapshot)


class FailingRenderer(Renderer):
    def render(self, snapshot) -> None:
        raise RuntimeError("display lost")


@pytest.fixture
def world() -> World:
    return World(width=320, height=180, ground_y=142.0, gravity=0.18)


@pytest.fixture
def make_lane_session(world):
    """Factory for lane sessions with exact 8-frame flights and no throw delay."""

    def factory(
        seed: int = 0,
        sound: SoundEmitter | None = None,
        event_bus: EventBus | None = None,
        throw_interval_ms: float = 0.0,
        initial_target: int = 1,
        start_state: SessionState = SessionState.PLAYING,
    ) -> GameSession:
        spawner = LaneBallSpawner(
            COLORS,
            flight_duration_ms=FLIGHT_MS,
            duration_jitter_ms=0.0,
            sound=sound,
        )
        return GameSession(
            world,
            Variant.LANES,
            LaneArcTrajectory(nominal_frame_ms=16.0),
            LaneCatchResolver(spawner.flight_duration),
            spawner,
            DifficultyController(initial_target=initial_target),
            throw_interval_ms=throw_interval_ms,
            nominal_frame_ms=16.0,
            rng=random.Random(seed),
            event_bus=event_bus,
            start_state=start_state,
        )

    return factory


def follow_next_arrival(session: GameSession) -> None:
    """Ask for the lane of the ball closest to landing."""
    if session.balls:
        ball = max(session.balls, key=lambda b: b.progress)
        session.controls.request_lane(ball.to_lane)
