"""Tests for sound synthesis and the audio engine without an audio device."""

import numpy as np
import pytest

from juggler.audio.engine import MELODY, SAMPLE_RATE, AudioEngine, chirp_samples, melody_samples
from juggler.config.settings import AudioSettings, Settings
from juggler.game.interfaces import SilentSound
from juggler.main import build_sound


def test_chirp_shape_and_envelope():
    samples = chirp_samples()
    assert len(samples) == int(SAMPLE_RATE * 0.2)
    assert np.max(np.abs(samples)) <= 0.35 + 1e-9
    # Silent after the decay window
    assert np.all(samples[int(SAMPLE_RATE * 0.18) + 1:] == 0)


def test_melody_has_one_gated_beat_per_note():
    beat = int(SAMPLE_RATE * 260 / 1000)
    samples = melody_samples(MELODY, beat_ms=260)

    assert len(MELODY) == 16
    assert len(samples) == 16 * beat
    assert np.max(np.abs(samples)) <= 1.0
    first = samples[:beat]
    assert np.all(first[int(beat * 0.85):] == 0)


def test_uninitialized_engine_is_silent():
    engine = AudioEngine()
    assert not engine.is_initialized
    assert engine.play("spawn_chirp") is None
    engine.on_spawn()
    engine.cleanup()


def test_ambient_loop_starts_at_most_once(monkeypatch):
    engine = AudioEngine()
    calls = []

    def fake_init():
        calls.append(1)
        return False

    monkeypatch.setattr(engine, "init", fake_init)

    engine.start_ambient_loop()
    engine.start_ambient_loop()

    assert engine.ambient_started
    assert calls == [1]


def test_toggle_mute():
    engine = AudioEngine()
    assert engine.toggle_mute() is True
    assert engine.toggle_mute() is False


@pytest.mark.parametrize("enabled, expected", [(False, SilentSound), (True, AudioEngine)])
def test_build_sound(enabled, expected):
    settings = Settings(audio=AudioSettings(enabled=enabled, master_volume=0.2))
    assert isinstance(build_sound(settings), expected)
