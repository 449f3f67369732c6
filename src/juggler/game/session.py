"""
Game session: owns all mutable game state and advances it one tick at a time.

Per tick (only while PLAYING):
    1. Apply buffered input to the player
    2. Spawn a ball if below the target count and the throw interval elapsed
    3. Advance every ball along its trajectory
    4. Resolve completed balls in spawn order; the first miss ends the session
    5. Keep the survivors
"""

import dataclasses
import logging
import random
from typing import Optional

from juggler.config.settings import Settings
from juggler.core.events import Event, EventBus, EventType
from juggler.core.state import SessionState, StateMachine
from juggler.game.catching import CatchResolver, FreeFallCatchResolver, LaneCatchResolver
from juggler.game.controls import Action, Controls
from juggler.game.difficulty import DifficultyController
from juggler.game.interfaces import SoundEmitter
from juggler.game.models import Ball, BallView, Mood, Player, SessionSnapshot, Variant, World
from juggler.game.spawner import BallSpawner, FreeFallBallSpawner, LaneBallSpawner
from juggler.game.trajectory import FreeFallTrajectory, LaneArcTrajectory, TrajectoryModel

logger = logging.getLogger(__name__)


class GameSession:
    """A single juggling game, from first throw to dropped ball and restart.

    Nothing outside the session mutates the player, the balls or the
    counters. Input goes through :attr:`controls`; renderers read
    :meth:`snapshot`.
    """

    def __init__(
        self,
        world: World,
        variant: Variant,
        trajectory: TrajectoryModel,
        resolver: CatchResolver,
        spawner: BallSpawner,
        difficulty: Optional[DifficultyController] = None,
        *,
        throw_interval_ms: float = 5000.0,
        nominal_frame_ms: float = 16.0,
        move_speed: float = 2.5,
        player_width: float = 18.0,
        rng: Optional[random.Random] = None,
        event_bus: Optional[EventBus] = None,
        start_state: SessionState = SessionState.PLAYING,
    ):
        if start_state == SessionState.GAME_OVER:
            raise ValueError("a session cannot start in GAME_OVER")

        self.world = world
        self.variant = variant
        self.trajectory = trajectory
        self.resolver = resolver
        self.spawner = spawner
        self.difficulty = difficulty or DifficultyController()
        self.throw_interval_ms = throw_interval_ms
        self.nominal_frame_ms = nominal_frame_ms
        self.move_speed = move_speed
        self.player_width = player_width
        self.rng = rng or random.Random()
        self.event_bus = event_bus or EventBus()

        self.controls = Controls()
        self.balls: list[Ball] = []
        self.player = self._fresh_player()
        self._since_throw_ms = 0.0

        self._machine = StateMachine(start_state)
        self._machine.add_listener(self._on_state_changed)

    # State accessors
    @property
    def state(self) -> SessionState:
        return self._machine.state

    @property
    def target_ball_count(self) -> int:
        return self.difficulty.target_ball_count

    @property
    def catch_streak(self) -> int:
        return self.difficulty.catch_streak

    @property
    def highest_ball_count(self) -> int:
        return self.difficulty.highest_ball_count

    # Lifecycle
    def _fresh_player(self) -> Player:
        lane = self.world.center_lane
        if self.variant == Variant.FREE_FALL:
            x = self.world.width / 2
        else:
            x = self.world.lane_x(lane)
        return Player(x=x, y=self.world.ground_y, lane=lane, width=self.player_width)

    def reset(self) -> None:
        """Clear balls, counters, input and the player back to a fresh game."""
        self.balls = []
        self._since_throw_ms = 0.0
        self.difficulty.reset()
        self.spawner.reset()
        self.controls.clear()
        self.player = self._fresh_player()

    def begin(self) -> bool:
        """Handle the begin/restart signal.

        Starts a fresh game from START or GAME_OVER. Ignored while
        PLAYING. Returns True if a new game started.
        """
        if not self._machine.can_transition(SessionState.PLAYING):
            logger.debug(f"Begin ignored in state {self.state.name}")
            return False
        self.reset()
        return self._machine.transition(SessionState.PLAYING)

    restart = begin

    # Simulation
    def advance(self, delta: float) -> None:
        """Advance the simulation by ``delta`` frames. No-op unless PLAYING."""
        if self.state != SessionState.PLAYING:
            return

        self._apply_input(delta)
        self._maybe_spawn(delta)

        for ball in self.balls:
            self.trajectory.advance(ball, delta, self.world)

        survivors: list[Ball] = []
        for ball in self.balls:
            if not self.trajectory.is_complete(ball, self.world):
                survivors.append(ball)
                continue

            if not self.resolver.is_caught(ball, self.player, self.world):
                self._drop(ball)
                return

            kept = self._catch(ball)
            if kept is not None:
                survivors.append(kept)

        self.balls = survivors

    def _apply_input(self, delta: float) -> None:
        controls = self.controls
        player = self.player

        if self.variant == Variant.LANES:
            lane = player.lane
            requested = controls.take_lane_request()
            if requested is not None:
                lane = requested
            if controls.consume(Action.LEFT):
                lane -= 1
            if controls.consume(Action.RIGHT):
                lane += 1
            player.lane = self.world.clamp_lane(lane)
            player.x = self.world.lane_x(player.lane)
            return

        # Free fall moves while a direction is held; a tap released before
        # this tick still moves for one tick
        tapped = int(controls.consume(Action.RIGHT)) - int(controls.consume(Action.LEFT))
        controls.take_lane_request()

        direction = controls.direction() or tapped
        if direction:
            player.facing = direction
            half = player.width / 2
            x = player.x + direction * self.move_speed * delta
            player.x = max(half, min(self.world.width - half, x))

    def _maybe_spawn(self, delta: float) -> None:
        self._since_throw_ms += delta * self.nominal_frame_ms
        if len(self.balls) >= self.target_ball_count:
            return
        if self._since_throw_ms <= self.throw_interval_ms:
            return

        ball = self.spawner.spawn(self.world, self.player, self.rng)
        self.balls.append(ball)
        self._since_throw_ms = 0.0
        self._emit(EventType.BALL_SPAWNED, serial=ball.serial, active=len(self.balls))

    def _catch(self, ball: Ball) -> Optional[Ball]:
        leveled_up = self.difficulty.record_catch()
        logger.debug(f"Caught ball #{ball.serial}, streak {self.catch_streak}")
        self._emit(EventType.BALL_CAUGHT, serial=ball.serial, streak=self.catch_streak)
        if leveled_up:
            self._emit(EventType.LEVEL_UP, target=self.target_ball_count)
        return self.resolver.after_catch(ball, self.world, self.rng)

    def _drop(self, ball: Ball) -> None:
        logger.info(f"Dropped ball #{ball.serial}; best {self.highest_ball_count}")
        self.player.mood = Mood.SAD
        self._emit(EventType.BALL_DROPPED, serial=ball.serial)
        self._machine.transition(SessionState.GAME_OVER)

    def _on_state_changed(self, old: SessionState, new: SessionState) -> None:
        self._emit(EventType.STATE_CHANGED, old=old.name, new=new.name)

    def _emit(self, event_type: EventType, **data) -> None:
        self.event_bus.emit(Event(event_type, data=data, source="session"))

    # Rendering
    def snapshot(self) -> SessionSnapshot:
        """Copy of the state a renderer needs; safe to keep across ticks."""
        views = []
        for ball in self.balls:
            x, y = self.trajectory.position_at(ball, self.world)
            views.append(BallView(serial=ball.serial, color=ball.color, x=x, y=y))

        return SessionSnapshot(
            world=self.world,
            player=dataclasses.replace(self.player),
            balls=tuple(views),
            state=self.state,
            variant=self.variant,
            target_ball_count=self.target_ball_count,
            catch_streak=self.catch_streak,
            highest_ball_count=self.highest_ball_count,
            balls_spawned=self.spawner.spawned,
        )


def create_session(
    settings: Settings,
    rng: Optional[random.Random] = None,
    sound: Optional[SoundEmitter] = None,
    event_bus: Optional[EventBus] = None,
) -> GameSession:
    """Build a session for the variant selected in ``settings``."""
    world = World(
        width=settings.world.width,
        height=settings.world.height,
        ground_y=settings.world.ground_y,
        gravity=settings.world.gravity,
        lanes=tuple(settings.lanes.positions),
    )
    if rng is None:
        rng = random.Random(settings.seed)

    trajectory: TrajectoryModel
    resolver: CatchResolver
    spawner: BallSpawner
    if settings.is_free_fall:
        variant = Variant.FREE_FALL
        ff = settings.free_fall
        trajectory = FreeFallTrajectory(hand_height=ff.hand_height)
        resolver = FreeFallCatchResolver(catch_width=ff.catch_width)
        spawner = FreeFallBallSpawner(
            settings.ball_colors,
            launch_speed=ff.launch_speed,
            launch_jitter=ff.launch_jitter,
            drift=ff.drift,
            hand_height=ff.hand_height,
            sound=sound,
        )
    else:
        variant = Variant.LANES
        lanes = settings.lanes
        trajectory = LaneArcTrajectory(
            nominal_frame_ms=settings.timing.nominal_frame_ms,
            arc_peak=lanes.arc_peak,
            arc_base_offset=lanes.arc_base_offset,
        )
        spawner = LaneBallSpawner(
            settings.ball_colors,
            flight_duration_ms=lanes.flight_duration_ms,
            duration_jitter_ms=lanes.duration_jitter_ms,
            sound=sound,
        )
        resolver = LaneCatchResolver(spawner.flight_duration)

    start_state = SessionState.START if settings.start_screen else SessionState.PLAYING
    logger.info(f"Creating {variant.value} session (start={start_state.name})")

    return GameSession(
        world,
        variant,
        trajectory,
        resolver,
        spawner,
        throw_interval_ms=settings.timing.throw_interval_ms,
        nominal_frame_ms=settings.timing.nominal_frame_ms,
        move_speed=settings.free_fall.move_speed,
        rng=rng,
        event_bus=event_bus,
        start_state=start_state,
    )
