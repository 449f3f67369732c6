"""Tests for window key handling and shutdown, without opening a display."""

import asyncio
from types import SimpleNamespace

import pygame

from conftest import FailingSound, RecordingSound
from juggler.app.window import GameWindow, WindowConfig
from juggler.core.events import EventBus, EventType
from juggler.game.controls import InputRouter


def key(code):
    return SimpleNamespace(key=code)


def test_m_toggles_mute(world):
    sound = RecordingSound()
    window = GameWindow(world, EventBus(), sound=sound)

    window._handle_keydown(key(pygame.K_m))
    assert sound.muted
    window._handle_keydown(key(pygame.K_m))
    assert not sound.muted


def test_first_key_starts_music(world):
    sound = RecordingSound()
    window = GameWindow(world, EventBus(), sound=sound)
    window._handle_keydown(key(pygame.K_F1))
    assert sound.ambient_starts == 1


def test_failing_sound_does_not_break_key_handling(world):
    bus = EventBus()
    window = GameWindow(world, bus, sound=FailingSound())

    window._handle_keydown(key(pygame.K_m))
    window._handle_keydown(key(pygame.K_SPACE))
    asyncio.run(bus.process_queue())

    assert len(bus.get_history(EventType.BUTTON_PRESS)) == 1


def test_movement_keys_are_queued_until_processed(world, make_lane_session):
    bus = EventBus()
    session = make_lane_session(throw_interval_ms=1e9)
    InputRouter(session, bus)
    window = GameWindow(world, bus, sound=RecordingSound())

    window._handle_keydown(key(pygame.K_a))
    window._handle_keyup(key(pygame.K_a))
    assert bus.get_history(EventType.MOVE_LEFT) == []

    asyncio.run(bus.process_queue())
    session.advance(1.0)
    assert session.player.lane == 0


def test_click_selects_lane_only_when_enabled(world):
    bus = EventBus()
    GameWindow(world, bus, config=WindowConfig(scale=3))._handle_click((900, 10))
    GameWindow(world, bus, config=WindowConfig(scale=3, pointer_lanes=True))._handle_click((900, 10))
    asyncio.run(bus.process_queue())

    picks = bus.get_history(EventType.LANE_SELECT)
    assert [e.data["x"] for e in picks] == [300.0]


def test_shutdown_releases_audio(world):
    sound = RecordingSound()
    window = GameWindow(world, EventBus(), sound=sound)
    window._cleanup()
    assert sound.cleanups == 1
