"""Toroidal wrap math: maps fixed cell coordinates plus the pan offset to screen space.

A cell never changes identity or image. When the pan offset moves a cell past
one edge of the grid extent, modular arithmetic places it back at the opposite
edge at the same sub-pixel phase, so a finite cell set looks like an unbounded
plane.
"""

from __future__ import annotations

from infinigrid.engine.grid_layout import GridCell, GridLayout


def wrap(n: float, m: float) -> float:
    """Modulo that always lands in [0, m), also for negative `n`."""
    # Python's float % can return m itself for tiny negative n; the second
    # modulo folds that back to 0.
    return ((n % m) + m) % m


def resolve_axis(relative: int, offset: float, total_cell: int, extent: int) -> float:
    """Screen coordinate of a cell along one axis."""
    return wrap(relative * total_cell + offset + total_cell, extent) - total_cell


def resolve_position(
    col: int,
    row: int,
    pan_x: float,
    pan_y: float,
    total_cell: int,
    grid_width: int,
    grid_height: int,
) -> tuple[float, float]:
    """Top-left screen position of the cell at relative (col, row)."""
    return (resolve_axis(col, pan_x, total_cell, grid_width),
            resolve_axis(row, pan_y, total_cell, grid_height))


def resolve_cell(cell: GridCell, layout: GridLayout, pan_x: float,
                 pan_y: float) -> tuple[float, float]:
    return resolve_position(cell.col, cell.row, pan_x, pan_y, layout.total_cell,
                            layout.grid_width, layout.grid_height)


def cell_center(x: float, y: float, cell_size: int) -> tuple[float, float]:
    half = cell_size / 2
    return x + half, y + half


def is_on_screen(x: float, y: float, layout: GridLayout) -> bool:
    """True if the cell lies within the viewport widened by one cell on every side."""
    total_cell = layout.total_cell
    return (-total_cell <= x
            and x + layout.cell_size <= layout.viewport_width + total_cell
            and -total_cell <= y
            and y + layout.cell_size <= layout.viewport_height + total_cell)
