"""Grid layout calculator for the wrapping image grid."""

from __future__ import annotations

import math
import random
import warnings
from dataclasses import dataclass, field
from typing import Any, Sequence

from infinigrid.engine.errors import LayoutDegenerate
from infinigrid.engine.image_pool import build_pool


@dataclass(frozen=True)
class GridCell:
    """One square cell with a fixed image, addressed relative to the grid origin."""
    col: int
    row: int
    image: Any
    index: int

    @property
    def key(self) -> str:
        return f'{self.col}-{self.row}'


@dataclass(frozen=True)
class GridLayout:
    """Column/row counts and the full cell set for one viewport size."""
    cols: int
    rows: int
    cell_size: int
    gap: int
    viewport_width: int
    viewport_height: int
    cells: list[GridCell] = field(default_factory=list)
    degenerate: bool = False

    @property
    def total_cell(self) -> int:
        return self.cell_size + self.gap

    @property
    def grid_width(self) -> int:
        return self.cols * self.total_cell

    @property
    def grid_height(self) -> int:
        return self.rows * self.total_cell


def count_cells(extent: int, total_cell: int, overfill_margin: int) -> int:
    """Number of cells along one axis so that the viewport is overfilled."""
    return math.ceil(extent / total_cell) + overfill_margin


def compute_layout(
    viewport_width: int,
    viewport_height: int,
    catalog: Sequence[Any],
    cell_size: int,
    gap: int,
    overfill_margin: int = 4,
    rng: random.Random | None = None,
    *,
    avoid_seam_repeats: bool = False,
) -> GridLayout:
    """
    Calculate the grid for a viewport and assign every cell an image.

    Args:
        viewport_width: Width of the visible area in pixels
        viewport_height: Height of the visible area in pixels
        catalog: Distinct images to fill the grid with
        cell_size: Side length of a square cell in pixels
        gap: Spacing between cells in pixels
        overfill_margin: Extra columns/rows so panning never exposes empty space
        rng: Random source for the image shuffle

    Returns:
        GridLayout whose cells are listed in row-major order

    Raises:
        EmptyCatalogError: if the catalog has no images.
        ValueError: if cell_size is not positive or gap is negative.
    """
    if cell_size <= 0:
        raise ValueError(f'cell_size must be positive, got {cell_size}')
    if gap < 0:
        raise ValueError(f'gap must not be negative, got {gap}')

    total_cell = cell_size + gap
    degenerate = viewport_width <= 0 or viewport_height <= 0
    if degenerate:
        warnings.warn(
            f'Viewport {viewport_width}x{viewport_height} has no area, '
            f'using a minimal grid', LayoutDegenerate, stacklevel=2)
    # A zero-sized axis still gets one cell plus the margin.
    width = viewport_width if viewport_width > 0 else total_cell
    height = viewport_height if viewport_height > 0 else total_cell

    cols = max(1, count_cells(width, total_cell, overfill_margin))
    rows = max(1, count_cells(height, total_cell, overfill_margin))

    pool = build_pool(catalog, cols * rows, rng,
                      avoid_seam_repeats=avoid_seam_repeats)

    cells = []
    index = 0
    for row in range(rows):
        for col in range(cols):
            cells.append(GridCell(col=col - 1, row=row - 1,
                                  image=pool[index % len(pool)], index=index))
            index += 1

    return GridLayout(
        cols=cols,
        rows=rows,
        cell_size=cell_size,
        gap=gap,
        viewport_width=max(0, viewport_width),
        viewport_height=max(0, viewport_height),
        cells=cells,
        degenerate=degenerate,
    )
