"""Ball spawners: initial trajectory parameters for balls entering play."""

import logging
import random
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from juggler.game.interfaces import SilentSound, SoundEmitter
from juggler.game.models import Ball, Color, Player, World

logger = logging.getLogger(__name__)


class BallSpawner(ABC):
    """Creates new balls and plays the spawn cue.

    Color cycles through the palette by the number of balls spawned so
    far this session. The cue is best effort: a failing SoundEmitter is
    logged and the ball is still returned.
    """

    def __init__(self, colors: Sequence[Color], sound: Optional[SoundEmitter] = None):
        if not colors:
            raise ValueError("palette must contain at least one color")
        self.colors = list(colors)
        self.sound = sound or SilentSound()
        self._spawned = 0

    @property
    def spawned(self) -> int:
        """Balls spawned since the last reset."""
        return self._spawned

    def reset(self) -> None:
        self._spawned = 0

    def spawn(self, world: World, player: Player, rng: random.Random) -> Ball:
        index = self._spawned
        color = self.colors[index % len(self.colors)]
        ball = self._launch(index, color, world, player, rng)
        self._spawned += 1

        self._play_cue()
        logger.debug(f"Spawned ball #{index}")
        return ball

    def _play_cue(self) -> None:
        try:
            self.sound.on_spawn()
        except Exception as e:
            logger.error(f"Spawn cue failed: {e}")

    @abstractmethod
    def _launch(self, index: int, color: Color, world: World, player: Player, rng: random.Random) -> Ball:
        """Build the ball for spawn number ``index``."""


class LaneBallSpawner(BallSpawner):
    """Throws from alternating outer lanes, always toward the center lane."""

    def __init__(
        self,
        colors: Sequence[Color],
        flight_duration_ms: float = 2100.0,
        duration_jitter_ms: float = 220.0,
        sound: Optional[SoundEmitter] = None,
    ):
        super().__init__(colors, sound)
        self.flight_duration_ms = flight_duration_ms
        self.duration_jitter_ms = duration_jitter_ms

    def flight_duration(self, rng: random.Random) -> float:
        """Base duration plus uniform jitter in [0, jitter)."""
        return self.flight_duration_ms + rng.random() * self.duration_jitter_ms

    def _launch(self, index: int, color: Color, world: World, player: Player, rng: random.Random) -> Ball:
        left, right = world.outer_lanes
        return Ball(
            serial=index,
            color=color,
            from_lane=left if index % 2 == 0 else right,
            to_lane=world.center_lane,
            progress=0.0,
            duration_ms=self.flight_duration(rng),
        )


class FreeFallBallSpawner(BallSpawner):
    """Tosses balls straight up from the player's hands with a little drift."""

    def __init__(
        self,
        colors: Sequence[Color],
        launch_speed: float = 5.0,
        launch_jitter: float = 0.6,
        drift: float = 0.6,
        hand_height: float = 20.0,
        sound: Optional[SoundEmitter] = None,
    ):
        super().__init__(colors, sound)
        self.launch_speed = launch_speed
        self.launch_jitter = launch_jitter
        self.drift = drift
        self.hand_height = hand_height

    def _launch(self, index: int, color: Color, world: World, player: Player, rng: random.Random) -> Ball:
        return Ball(
            serial=index,
            color=color,
            x=player.x,
            y=world.ground_y - self.hand_height,
            vx=rng.uniform(-self.drift, self.drift),
            vy=-(self.launch_speed + rng.random() * self.launch_jitter),
        )
