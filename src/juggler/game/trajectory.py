"""Ball motion models.

Both models scale every change by ``delta`` (frames elapsed, see
:class:`juggler.core.clock.FrameClock`) so motion is frame-rate independent.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from juggler.game.models import Ball, World


class TrajectoryModel(ABC):
    """Advances balls and reports where they are."""

    @abstractmethod
    def advance(self, ball: Ball, delta: float, world: World) -> None:
        """Move ``ball`` forward by ``delta`` frames."""

    @abstractmethod
    def position_at(self, ball: Ball, world: World, progress: Optional[float] = None) -> Tuple[float, float]:
        """Return the (x, y) of ``ball``, optionally at an explicit progress."""

    @abstractmethod
    def is_complete(self, ball: Ball, world: World) -> bool:
        """True once the ball has reached its catch point."""


class LaneArcTrajectory(TrajectoryModel):
    """Parabolic hop between two lanes, driven by normalized progress.

    x interpolates linearly between the lane centers; y rises from the
    ground line to ``arc_peak`` at progress 0.5 and falls back.
    """

    def __init__(self, nominal_frame_ms: float = 16.0, arc_peak: float = 56.0, arc_base_offset: float = 6.0):
        self.nominal_frame_ms = nominal_frame_ms
        self.arc_peak = arc_peak
        self.arc_base_offset = arc_base_offset

    def advance(self, ball: Ball, delta: float, world: World) -> None:
        ball.progress += (delta * self.nominal_frame_ms) / ball.duration_ms

    def position_at(self, ball: Ball, world: World, progress: Optional[float] = None) -> Tuple[float, float]:
        t = ball.progress if progress is None else progress
        t = max(0.0, min(1.0, t))
        start_x = world.lane_x(ball.from_lane)
        end_x = world.lane_x(ball.to_lane)
        x = start_x + (end_x - start_x) * t
        y = world.ground_y - self.arc_base_offset - self.arc_peak * (1 - (2 * t - 1) ** 2)
        return x, y

    def is_complete(self, ball: Ball, world: World) -> bool:
        return ball.progress >= 1.0


class FreeFallTrajectory(TrajectoryModel):
    """Explicit velocity integration under the world's gravity.

    The ball completes when it falls back through the catch line
    (``hand_height`` above the ground) while moving downward. Side walls
    reflect horizontal velocity.
    """

    def __init__(self, hand_height: float = 20.0):
        self.hand_height = hand_height

    def catch_line(self, world: World) -> float:
        return world.ground_y - self.hand_height

    def advance(self, ball: Ball, delta: float, world: World) -> None:
        ball.vy += world.gravity * delta
        ball.x += ball.vx * delta
        ball.y += ball.vy * delta

        if ball.x < 0:
            ball.x = -ball.x
            ball.vx = abs(ball.vx)
        elif ball.x > world.width:
            ball.x = 2 * world.width - ball.x
            ball.vx = -abs(ball.vx)

    def position_at(self, ball: Ball, world: World, progress: Optional[float] = None) -> Tuple[float, float]:
        return ball.x, ball.y

    def is_complete(self, ball: Ball, world: World) -> bool:
        return ball.vy > 0 and ball.y >= self.catch_line(world)
