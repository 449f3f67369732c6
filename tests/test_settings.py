"""Tests for settings defaults, environment overrides and validation."""

import pytest
from pydantic import ValidationError

from juggler.config.settings import AudioSettings, Settings, TimingSettings
from juggler.game.models import Variant
from juggler.game.session import create_session


def test_defaults():
    settings = Settings()
    assert settings.variant == "lanes"
    assert not settings.is_free_fall
    assert settings.lanes.positions == [86.0, 160.0, 234.0]
    assert settings.lanes.flight_duration_ms == 2100.0
    assert settings.timing.throw_interval_ms == 5000.0
    assert settings.timing.max_delta_ms == 32.0
    assert settings.free_fall.catch_width == 14.0
    assert len(settings.ball_colors) == 4


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("JUGGLER_VARIANT", "free_fall")
    monkeypatch.setenv("JUGGLER_SEED", "7")
    monkeypatch.setenv("JUGGLER_TIMING__THROW_INTERVAL_MS", "250")
    monkeypatch.setenv("JUGGLER_AUDIO__ENABLED", "false")

    settings = Settings()

    assert settings.is_free_fall
    assert settings.seed == 7
    assert settings.timing.throw_interval_ms == 250.0
    assert settings.audio.enabled is False


def test_invalid_values_rejected():
    with pytest.raises(ValidationError):
        Settings(variant="juggle_harder")
    with pytest.raises(ValidationError):
        AudioSettings(master_volume=1.5)
    with pytest.raises(ValidationError):
        Settings(ball_colors=[])
    with pytest.raises(ValidationError):
        TimingSettings(nominal_frame_ms=16.0, max_delta_ms=8.0)
    with pytest.raises(ValidationError):
        Settings(timing={"nominal_frame_ms": 20.0, "max_delta_ms": 10.0})


def test_create_session_from_settings():
    session = create_session(Settings(seed=3))
    assert session.variant == Variant.LANES
    assert session.world.lanes == (86.0, 160.0, 234.0)
    assert session.throw_interval_ms == 5000.0


def test_start_screen_setting():
    from juggler.core.state import SessionState

    session = create_session(Settings(start_screen=True))
    assert session.state == SessionState.START


def test_equal_frame_and_max_delta_is_allowed():
    timing = TimingSettings(nominal_frame_ms=16.0, max_delta_ms=16.0)
    assert timing.max_delta_ms == timing.nominal_frame_ms
