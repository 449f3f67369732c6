"""Data model for a juggling session: geometry, player, balls, snapshots."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple

from juggler.core.state import SessionState

Color = Tuple[int, int, int]


class Variant(Enum):
    """Which motion model a session runs."""

    LANES = "lanes"          # Balls arc between fixed lanes
    FREE_FALL = "free_fall"  # Balls are tossed up and fall under gravity


class Mood(Enum):
    """Cosmetic player state, only read by rendering."""

    HAPPY = auto()
    SAD = auto()


@dataclass(frozen=True)
class World:
    """Playfield geometry, fixed for the lifetime of a session."""

    width: int
    height: int
    ground_y: float
    gravity: float
    lanes: Tuple[float, ...] = (86.0, 160.0, 234.0)

    @property
    def lane_count(self) -> int:
        return len(self.lanes)

    @property
    def center_lane(self) -> int:
        return self.lane_count // 2

    @property
    def outer_lanes(self) -> Tuple[int, int]:
        return (0, self.lane_count - 1)

    @property
    def lane_width(self) -> float:
        return self.width / self.lane_count

    def clamp_lane(self, lane: int) -> int:
        """Clamp a lane index into the valid range."""
        return max(0, min(self.lane_count - 1, lane))

    def lane_x(self, lane: int) -> float:
        return self.lanes[self.clamp_lane(lane)]


@dataclass
class Player:
    """The juggler standing on the ground line."""

    x: float
    y: float
    lane: int = 1
    mood: Mood = Mood.HAPPY
    width: float = 18.0
    facing: int = 1  # -1 left, +1 right


@dataclass(eq=False)
class Ball:
    """A ball in flight.

    Lane balls use ``from_lane``/``to_lane``/``progress``/``duration_ms``;
    free-fall balls use ``x``/``y``/``vx``/``vy``. Compared by identity.
    """

    serial: int
    color: Color
    from_lane: int = 0
    to_lane: int = 1
    progress: float = 0.0
    duration_ms: float = 2100.0
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0


@dataclass(frozen=True)
class BallView:
    """Read-only position of a ball for rendering."""

    serial: int
    color: Color
    x: float
    y: float


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything a renderer needs for one frame. Never aliases live state."""

    world: World
    player: Player
    balls: Tuple[BallView, ...]
    state: SessionState
    variant: Variant
    target_ball_count: int
    catch_streak: int
    highest_ball_count: int
    balls_spawned: int = 0

    @property
    def is_game_over(self) -> bool:
        return self.state == SessionState.GAME_OVER
