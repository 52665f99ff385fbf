"""Pointer drag handling for panning the grid."""

from __future__ import annotations

import time
from collections import deque

from infinigrid.engine.momentum import MomentumSimulator, PanState


class VelocityTracker:
    """Estimates pointer velocity (px/s) from the most recent move samples."""

    def __init__(self, window_seconds: float = 0.1, max_samples: int = 20):
        self.window_seconds = max(0.001, float(window_seconds))
        self._samples: deque[tuple[float, float, float]] = deque(maxlen=max_samples)

    def reset(self):
        self._samples.clear()

    def add_sample(self, x: float, y: float, *, now: float | None = None):
        now = time.monotonic() if now is None else float(now)
        self._samples.append((now, float(x), float(y)))

    def velocity(self, *, now: float | None = None) -> tuple[float, float]:
        if not self._samples:
            return 0.0, 0.0
        now = time.monotonic() if now is None else float(now)
        recent = [s for s in self._samples if now - s[0] <= self.window_seconds]
        if len(recent) < 2:
            # Pointer rested before release.
            return 0.0, 0.0
        t0, x0, y0 = recent[0]
        t1, x1, y1 = recent[-1]
        dt = t1 - t0
        if dt <= 0:
            return 0.0, 0.0
        return (x1 - x0) / dt, (y1 - y0) / dt


class DragPanController:
    """Applies drag deltas to the pan offset and hands off to momentum on release."""

    def __init__(self, state: PanState, momentum: MomentumSimulator,
                 min_velocity: float = 0.5):
        self.state = state
        self.momentum = momentum
        self.min_velocity = float(min_velocity)
        self._dragging = False

    @property
    def dragging(self) -> bool:
        return self._dragging

    def on_drag_start(self):
        # Momentum must be stopped before the first delta lands.
        self.momentum.cancel()
        self._dragging = True

    def on_drag_delta(self, dx: float, dy: float):
        if not self._dragging:
            return
        self.state.pan_x += dx
        self.state.pan_y += dy

    def on_drag_end(self, vx: float, vy: float) -> bool:
        """End the drag; returns True if momentum was started."""
        if not self._dragging:
            return False
        self._dragging = False
        if abs(vx) > self.min_velocity or abs(vy) > self.min_velocity:
            self.momentum.start(vx, vy, (self.state.pan_x, self.state.pan_y))
            return True
        return False
