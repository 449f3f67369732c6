"""Frame clock turning monotonic timestamps into bounded simulation deltas."""

from typing import Optional


class FrameClock:
    """
    Converts animation-frame timestamps into per-tick deltas.

    Deltas are expressed in frames (milliseconds divided by the nominal
    frame interval) so motion scales the same at any frame rate. A stall
    longer than ``max_delta_ms`` counts as exactly ``max_delta_ms``, and
    the first frame (or any non-positive gap) counts as one nominal frame.
    """

    def __init__(self, nominal_frame_ms: float = 16.0, max_delta_ms: float = 32.0) -> None:
        if nominal_frame_ms <= 0:
            raise ValueError("nominal_frame_ms must be positive")
        if max_delta_ms < nominal_frame_ms:
            raise ValueError("max_delta_ms must be at least nominal_frame_ms")
        self._nominal_ms = nominal_frame_ms
        self._max_ms = max_delta_ms
        self._last_timestamp: Optional[float] = None
        self._frame_count = 0

    @property
    def nominal_frame_ms(self) -> float:
        return self._nominal_ms

    @property
    def max_delta_ms(self) -> float:
        return self._max_ms

    @property
    def frame_count(self) -> int:
        return self._frame_count

    def clamp_ms(self, elapsed_ms: Optional[float]) -> float:
        """Bound a raw elapsed time, substituting the nominal frame when degenerate."""
        if elapsed_ms is None or elapsed_ms <= 0:
            return self._nominal_ms
        return min(self._max_ms, elapsed_ms)

    def tick(self, timestamp_ms: float) -> float:
        """Record a new frame timestamp and return the delta in frames."""
        elapsed = None
        if self._last_timestamp is not None:
            elapsed = timestamp_ms - self._last_timestamp
        self._last_timestamp = timestamp_ms
        self._frame_count += 1
        return self.clamp_ms(elapsed) / self._nominal_ms

    def reset(self) -> None:
        self._last_timestamp = None
        self._frame_count = 0
