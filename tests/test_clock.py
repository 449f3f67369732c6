"""Tests for frame deltas and stall clamping."""

import pytest

from juggler.core.clock import FrameClock


def test_first_frame_is_one_nominal_frame():
    clock = FrameClock()
    assert clock.tick(123456.0) == 1.0
    assert clock.frame_count == 1


def test_delta_is_measured_in_frames():
    clock = FrameClock(nominal_frame_ms=16.0)
    clock.tick(0.0)
    assert clock.tick(16.0) == pytest.approx(1.0)
    assert clock.tick(24.0) == pytest.approx(0.5)


def test_long_stall_is_clamped_to_max_delta():
    """A 10s stall advances by at most two nominal frames."""
    clock = FrameClock(nominal_frame_ms=16.0, max_delta_ms=32.0)
    clock.tick(0.0)
    assert clock.tick(10_000.0) == pytest.approx(2.0)


@pytest.mark.parametrize("gap", [0.0, -50.0])
def test_degenerate_gap_counts_as_one_frame(gap):
    clock = FrameClock()
    clock.tick(1000.0)
    assert clock.tick(1000.0 + gap) == 1.0


def test_clamp_ms():
    clock = FrameClock(nominal_frame_ms=16.0, max_delta_ms=32.0)
    assert clock.clamp_ms(None) == 16.0
    assert clock.clamp_ms(-1.0) == 16.0
    assert clock.clamp_ms(20.0) == 20.0
    assert clock.clamp_ms(500.0) == 32.0


def test_reset_forgets_last_timestamp():
    clock = FrameClock()
    clock.tick(0.0)
    clock.tick(16.0)
    clock.reset()
    assert clock.frame_count == 0
    assert clock.tick(99_999.0) == 1.0


def test_invalid_configuration_rejected():
    with pytest.raises(ValueError):
        FrameClock(nominal_frame_ms=0.0)
    with pytest.raises(ValueError):
        FrameClock(nominal_frame_ms=16.0, max_delta_ms=8.0)
