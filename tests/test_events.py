"""Tests for the event bus."""

import asyncio

from juggler.core.events import (
    Event,
    EventBus,
    EventType,
    button_press_event,
    lane_select_event,
    move_event,
)


def test_subscribe_and_emit():
    bus = EventBus()
    received = []
    bus.subscribe(EventType.BALL_CAUGHT, received.append)

    bus.emit(Event(EventType.BALL_CAUGHT, data={"serial": 3}))
    bus.emit(Event(EventType.BALL_DROPPED))

    assert [e.data["serial"] for e in received] == [3]


def test_unsubscribe_stops_delivery():
    bus = EventBus()
    received = []
    unsubscribe = bus.subscribe(EventType.LEVEL_UP, received.append)
    unsubscribe()
    unsubscribe()

    bus.emit(Event(EventType.LEVEL_UP))
    assert received == []


def test_subscribe_all_sees_every_event():
    bus = EventBus()
    received = []
    bus.subscribe_all(lambda e: received.append(e.type))

    bus.emit(Event(EventType.BALL_SPAWNED))
    bus.emit(Event("custom"))

    assert received == [EventType.BALL_SPAWNED, "custom"]


def test_failing_handler_is_isolated():
    """A raising handler neither reaches the emitter nor blocks other handlers."""
    bus = EventBus()
    received = []

    def broken(event):
        raise RuntimeError("boom")

    bus.subscribe(EventType.BALL_SPAWNED, broken)
    bus.subscribe(EventType.BALL_SPAWNED, received.append)

    bus.emit(Event(EventType.BALL_SPAWNED))
    assert len(received) == 1


def test_history_is_bounded_and_filterable():
    bus = EventBus(history_limit=5)
    for i in range(8):
        bus.emit(Event(EventType.BALL_CAUGHT, data={"i": i}))
    bus.emit(Event(EventType.BALL_DROPPED))

    history = bus.get_history(limit=100)
    assert len(history) == 5
    assert history[-1].type == EventType.BALL_DROPPED

    caught = bus.get_history(EventType.BALL_CAUGHT, limit=2)
    assert [e.data["i"] for e in caught] == [6, 7]


def test_queued_events_reach_sync_and_async_handlers():
    bus = EventBus()
    sync_seen = []
    async_seen = []

    async def async_handler(event):
        async_seen.append(event.type)

    bus.subscribe(EventType.BUTTON_PRESS, sync_seen.append)
    bus.subscribe(EventType.BUTTON_PRESS, async_handler)

    bus.queue_event(button_press_event())
    assert sync_seen == []

    asyncio.run(bus.process_queue())

    assert len(sync_seen) == 1
    assert async_seen == [EventType.BUTTON_PRESS]


def test_emit_skips_async_handlers():
    bus = EventBus()
    called = []

    async def async_handler(event):
        called.append(event)

    bus.subscribe(EventType.BUTTON_PRESS, async_handler)
    bus.emit(button_press_event())
    assert called == []


def test_input_event_helpers():
    left = move_event("left")
    right_up = move_event("right", pressed=False)
    pick = lane_select_event(201.5)

    assert left.type == EventType.MOVE_LEFT and left.data["pressed"] is True
    assert right_up.type == EventType.MOVE_RIGHT and right_up.data["pressed"] is False
    assert pick.type == EventType.LANE_SELECT and pick.data["x"] == 201.5
    assert button_press_event(source="keyboard").source == "keyboard"
