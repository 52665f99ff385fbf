"""Per-instance grid engine: shared pan state plus the per-frame update pass."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Sequence

from infinigrid.engine.config import GridEngineConfig
from infinigrid.engine.drag import DragPanController, VelocityTracker
from infinigrid.engine.errors import EmptyCatalogError
from infinigrid.engine.grid_layout import GridCell, GridLayout, compute_layout
from infinigrid.engine.momentum import MomentumSimulator, PanState
from infinigrid.engine.proximity import proximity_scale
from infinigrid.engine.toroidal import cell_center, is_on_screen, resolve_cell


@dataclass(frozen=True)
class CellFrame:
    """Render data for one cell in one frame."""
    cell: GridCell
    x: float
    y: float
    scale: float


class GridEngine:
    """
    Owns the layout, the shared PanState, the drag controller and momentum.

    All methods are expected to run on one thread (the GUI thread); the
    per-frame `advance_frame` is the only place positions and scales are
    computed.
    """

    def __init__(self, catalog: Sequence[Any], config: GridEngineConfig | None = None,
                 rng: random.Random | None = None):
        if not catalog:
            raise EmptyCatalogError()
        self.catalog = list(catalog)
        self.config = config if config is not None else GridEngineConfig()
        self.rng = rng if rng is not None else random.Random()
        self.state = PanState()
        self.momentum = MomentumSimulator(
            self.state,
            friction=self.config.friction,
            min_velocity=self.config.min_velocity,
            timestep=self.config.timestep,
            frame_rate_independent=self.config.frame_rate_independent,
        )
        self.drag = DragPanController(self.state, self.momentum,
                                      min_velocity=self.config.min_velocity)
        self.velocity_tracker = VelocityTracker()
        self.layout: GridLayout | None = None
        # Drags are ignored while the grid is hidden behind the preload gate.
        self.interactive = True
        self._last_pointer: tuple[float, float] | None = None

    # Layout

    def resize(self, width: int, height: int) -> GridLayout:
        """Rebuild the whole cell set for a new viewport size."""
        if (self.layout is not None and self.layout.viewport_width == width
                and self.layout.viewport_height == height):
            return self.layout
        self.momentum.cancel()
        self.layout = compute_layout(
            width, height, self.catalog,
            self.config.cell_size, self.config.gap, self.config.overfill_margin,
            self.rng, avoid_seam_repeats=self.config.avoid_seam_repeats)
        suffix = ' (degenerate viewport, minimal grid)' if self.layout.degenerate else ''
        print(f'[GRID] Layout {self.layout.cols}x{self.layout.rows} cells '
              f'for viewport {width}x{height}{suffix}')
        return self.layout

    def set_catalog(self, catalog: Sequence[Any]):
        if not catalog:
            raise EmptyCatalogError()
        self.catalog = list(catalog)
        if self.layout is not None:
            width, height = self.layout.viewport_width, self.layout.viewport_height
            self.layout = None
            self.resize(width, height)

    def teardown(self):
        self.momentum.cancel()
        self.velocity_tracker.reset()
        self.layout = None

    # Pointer input

    def pointer_pressed(self, x: float, y: float, *, now: float | None = None) -> bool:
        """Start a drag; returns False if input is currently blocked."""
        self.state.set_pointer(x, y)
        if not self.interactive:
            return False
        self._last_pointer = (float(x), float(y))
        self.velocity_tracker.reset()
        self.velocity_tracker.add_sample(x, y, now=now)
        self.drag.on_drag_start()
        return True

    def pointer_moved(self, x: float, y: float, *, now: float | None = None):
        self.state.set_pointer(x, y)
        if not self.drag.dragging:
            return
        if self._last_pointer is not None:
            self.drag.on_drag_delta(x - self._last_pointer[0], y - self._last_pointer[1])
        self._last_pointer = (float(x), float(y))
        self.velocity_tracker.add_sample(x, y, now=now)

    def pointer_released(self, x: float, y: float, *, now: float | None = None) -> bool:
        """Finish the drag; returns True if momentum took over."""
        if not self.drag.dragging:
            return False
        self.pointer_moved(x, y, now=now)
        vx, vy = self.velocity_tracker.velocity(now=now)
        self._last_pointer = None
        return self.drag.on_drag_end(vx, vy)

    def pointer_left(self):
        self.state.clear_pointer()

    # Frame

    @property
    def animating(self) -> bool:
        return self.momentum.running

    def advance_frame(self, elapsed: float | None = None,
                      *, visible_only: bool = True) -> list[CellFrame]:
        """Tick momentum, then compute position and scale for every cell."""
        if self.layout is None:
            return []
        self.momentum.tick(elapsed)
        return self.compute_frame(visible_only=visible_only)

    def compute_frame(self, *, visible_only: bool = True) -> list[CellFrame]:
        layout = self.layout
        if layout is None:
            return []
        state = self.state
        frames = []
        for cell in layout.cells:
            x, y = resolve_cell(cell, layout, state.pan_x, state.pan_y)
            if visible_only and not is_on_screen(x, y, layout):
                continue
            cx, cy = cell_center(x, y, layout.cell_size)
            scale = proximity_scale(state.pointer_x, state.pointer_y, cx, cy,
                                    self.config.proximity_radius,
                                    self.config.proximity_max_boost)
            frames.append(CellFrame(cell=cell, x=x, y=y, scale=scale))
        return frames
