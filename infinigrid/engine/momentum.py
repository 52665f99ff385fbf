"""Friction-decayed pan motion after a drag is released."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass
class PanState:
    """Shared mutable pan offset and pointer position of one grid instance."""
    pan_x: float = 0.0
    pan_y: float = 0.0
    pointer_x: float | None = None
    pointer_y: float | None = None

    def set_pointer(self, x: float, y: float):
        self.pointer_x = float(x)
        self.pointer_y = float(y)

    def clear_pointer(self):
        self.pointer_x = None
        self.pointer_y = None


class MomentumPhase(str, Enum):
    IDLE = 'idle'
    RUNNING = 'running'


class MomentumSimulator:
    """
    Discrete-time exponential velocity decay that keeps moving the pan offset.

    Each tick multiplies the velocity by `friction` and advances the offset by
    velocity * timestep. With `frame_rate_independent` the decay and the
    advance are scaled by the real elapsed time of the tick, so the motion is
    the same at 30, 60 or 144 Hz.
    """

    def __init__(
        self,
        state: PanState,
        *,
        friction: float = 0.92,
        min_velocity: float = 0.5,
        timestep: float = 1 / 60,
        frame_rate_independent: bool = True,
    ):
        if not 0.0 < friction < 1.0:
            raise ValueError(f'friction must be in (0, 1), got {friction}')
        self.state = state
        self.friction = float(friction)
        self.min_velocity = float(min_velocity)
        self.timestep = float(timestep)
        self.frame_rate_independent = bool(frame_rate_independent)
        self._phase = MomentumPhase.IDLE
        self._vx = 0.0
        self._vy = 0.0
        self._x = 0.0
        self._y = 0.0

    @property
    def phase(self) -> MomentumPhase:
        return self._phase

    @property
    def running(self) -> bool:
        return self._phase is MomentumPhase.RUNNING

    @property
    def velocity(self) -> tuple[float, float]:
        return self._vx, self._vy

    def start(self, vx: float, vy: float, start_offset: tuple[float, float] | None = None):
        """Begin decaying from the release velocity (px/s)."""
        if start_offset is None:
            start_offset = (self.state.pan_x, self.state.pan_y)
        self._vx = float(vx)
        self._vy = float(vy)
        self._x, self._y = float(start_offset[0]), float(start_offset[1])
        self._phase = MomentumPhase.RUNNING

    def cancel(self):
        """Stop immediately and drop the remaining velocity."""
        self._phase = MomentumPhase.IDLE
        self._vx = 0.0
        self._vy = 0.0

    def tick(self, elapsed: float | None = None) -> bool:
        """
        Advance one step and write the new pan offset.

        Args:
            elapsed: Real seconds since the previous tick; None uses the
                nominal timestep (also the behaviour when frame rate
                independence is off).

        Returns:
            True while still running after this tick.
        """
        if self._phase is not MomentumPhase.RUNNING:
            return False

        if elapsed is None or not self.frame_rate_independent:
            decay = self.friction
            step = self.timestep
        else:
            step = max(0.0, float(elapsed))
            decay = self.friction ** (step / self.timestep)

        self._vx *= decay
        self._vy *= decay
        self._x += self._vx * step
        self._y += self._vy * step
        self.state.pan_x = self._x
        self.state.pan_y = self._y

        if max(abs(self._vx), abs(self._vy)) <= self.min_velocity:
            self.cancel()
            return False
        return True

