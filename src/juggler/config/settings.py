"""
Game settings using Pydantic.

Settings are loaded from environment variables (prefix ``JUGGLER_``,
nested groups separated by ``__``) with .env file support.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

Color = tuple[int, int, int]


class WorldSettings(BaseModel):
    """Fixed playfield geometry."""

    width: int = Field(default=320, gt=0)
    height: int = Field(default=180, gt=0)
    ground_y: float = 142.0

    # Pixels per frame squared, free-fall variant only
    gravity: float = Field(default=0.18, gt=0.0)


class LaneSettings(BaseModel):
    """Lane geometry and the arc flown between lanes."""

    positions: list[float] = Field(default=[86.0, 160.0, 234.0], min_length=3)
    flight_duration_ms: float = Field(default=2100.0, gt=0.0)
    duration_jitter_ms: float = Field(default=220.0, ge=0.0)
    arc_peak: float = 56.0
    arc_base_offset: float = 6.0


class FreeFallSettings(BaseModel):
    """Launch and catch parameters for the free-fall variant."""

    launch_speed: float = Field(default=5.0, gt=0.0)
    launch_jitter: float = Field(default=0.6, ge=0.0)
    drift: float = Field(default=0.6, ge=0.0)
    move_speed: float = Field(default=2.5, gt=0.0)
    catch_width: float = Field(default=14.0, gt=0.0)
    hand_height: float = 20.0


class TimingSettings(BaseModel):
    """Frame pacing and spawn cadence."""

    nominal_frame_ms: float = Field(default=16.0, gt=0.0)
    max_delta_ms: float = Field(default=32.0, gt=0.0)
    throw_interval_ms: float = Field(default=5000.0, ge=0.0)

    @model_validator(mode="after")
    def check_delta_bounds(self) -> "TimingSettings":
        if self.max_delta_ms < self.nominal_frame_ms:
            raise ValueError("max_delta_ms must be at least nominal_frame_ms")
        return self


class AudioSettings(BaseModel):
    """Sound output."""

    enabled: bool = True
    master_volume: float = Field(default=0.08, ge=0.0, le=1.0)
    beat_ms: int = Field(default=260, gt=0)


class DisplaySettings(BaseModel):
    """Desktop window."""

    scale: int = Field(default=3, ge=1)
    fps: int = Field(default=60, gt=0)
    title: str = "Juggler"


class Settings(BaseSettings):
    """Main game settings."""

    model_config = SettingsConfigDict(
        env_prefix="JUGGLER_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    variant: Literal["lanes", "free_fall"] = "lanes"
    start_screen: bool = False
    pointer_lanes: bool = False
    seed: Optional[int] = None
    debug: bool = False

    ball_colors: list[Color] = Field(
        default=[
            (0xFF, 0xED, 0x66),
            (0x79, 0xD6, 0xFF),
            (0xFF, 0x9F, 0x6E),
            (0xB3, 0xFF, 0x7A),
        ],
        min_length=1,
    )

    world: WorldSettings = Field(default_factory=WorldSettings)
    lanes: LaneSettings = Field(default_factory=LaneSettings)
    free_fall: FreeFallSettings = Field(default_factory=FreeFallSettings)
    timing: TimingSettings = Field(default_factory=TimingSettings)
    audio: AudioSettings = Field(default_factory=AudioSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)

    @property
    def is_free_fall(self) -> bool:
        """Check if the free-fall variant is selected."""
        return self.variant == "free_fall"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
