"""Difficulty escalation driven by consecutive catches."""

import logging

logger = logging.getLogger(__name__)


class DifficultyController:
    """Raises the number of balls in flight as the player keeps catching.

    Every ``2 * target_ball_count`` consecutive catches the streak resets
    and one more ball is required. ``highest_ball_count`` records the
    level the player was at when they last caught a ball.
    """

    def __init__(self, initial_target: int = 1):
        if initial_target < 1:
            raise ValueError("initial_target must be at least 1")
        self.initial_target = initial_target
        self.target_ball_count = initial_target
        self.catch_streak = 0
        self.highest_ball_count = 0

    @property
    def threshold(self) -> int:
        return 2 * self.target_ball_count

    def reset(self) -> None:
        self.target_ball_count = self.initial_target
        self.catch_streak = 0
        self.highest_ball_count = 0

    def record_catch(self) -> bool:
        """Count one catch. Returns True if it raised the level."""
        self.catch_streak += 1
        self.highest_ball_count = max(self.highest_ball_count, self.target_ball_count)

        if self.catch_streak >= self.threshold:
            self.catch_streak = 0
            self.target_ball_count += 1
            logger.info(f"Level up: {self.target_ball_count} balls")
            return True
        return False
