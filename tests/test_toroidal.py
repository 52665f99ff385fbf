import random

import pytest

from infinigrid.engine.grid_layout import compute_layout
from infinigrid.engine.toroidal import (cell_center, is_on_screen, resolve_cell,
                                        resolve_position, wrap)

CATALOG = [f"img_{i}.jpg" for i in range(27)]


@pytest.fixture
def layout():
    return compute_layout(1000, 800, CATALOG, 280, 20, rng=random.Random(0))


@pytest.mark.parametrize(
    "n,m,expected",
    [(0, 10, 0), (3, 10, 3), (10, 10, 0), (13, 10, 3), (-1, 10, 9), (-10, 10, 0), (-23, 10, 7)],
)
def test_wrap_lands_in_range(n, m, expected):
    assert wrap(n, m) == expected


def test_wrap_tiny_negative_float_stays_below_modulus():
    value = wrap(-1e-20, 2400.0)
    assert 0.0 <= value < 2400.0


def test_reference_cell_at_origin(layout):
    assert resolve_position(0, 0, 0, 0, 300, 2400, 2100) == (0, 0)
    cell = next(c for c in layout.cells if (c.col, c.row) == (0, 0))
    assert resolve_cell(cell, layout, 0, 0) == (0, 0)


def test_full_grid_width_offset_is_identity(layout):
    for cell in layout.cells:
        assert resolve_cell(cell, layout, 2400, 0)[0] == resolve_cell(cell, layout, 0, 0)[0]


@pytest.mark.parametrize("pan_x,pan_y", [(0, 0), (137, -59), (-1234567, 987654), (4800.5, -2100.25)])
def test_periodicity(layout, pan_x, pan_y):
    for cell in layout.cells:
        base = resolve_cell(cell, layout, pan_x, pan_y)
        shifted = resolve_cell(cell, layout, pan_x + layout.grid_width,
                               pan_y - 3 * layout.grid_height)
        assert shifted == pytest.approx(base)


@pytest.mark.parametrize("pan", [0, 1, 150, 299.5, -1, -150, 2399, 123456.75, -98765.25, 1e7])
def test_positions_tile_without_gaps(layout, pan):
    xs = sorted({round(resolve_position(col, 0, pan, pan, 300, layout.grid_width,
                                        layout.grid_height)[0], 6)
                 for col in range(-1, layout.cols - 1)})
    ys = sorted({round(resolve_position(0, row, pan, pan, 300, layout.grid_width,
                                        layout.grid_height)[1], 6)
                 for row in range(-1, layout.rows - 1)})

    for positions, count, viewport in ((xs, layout.cols, 1000), (ys, layout.rows, 800)):
        assert len(positions) == count
        assert -300 <= positions[0] < 0
        for a, b in zip(positions, positions[1:]):
            assert b - a == pytest.approx(300)
        assert positions[-1] + 300 >= viewport + 300


@pytest.mark.parametrize("pan_x,pan_y", [(0, 0), (77, 310), (-5000.5, 42), (999999, -999999)])
def test_visible_cells_stay_within_widened_viewport(layout, pan_x, pan_y):
    visible = []
    for cell in layout.cells:
        x, y = resolve_cell(cell, layout, pan_x, pan_y)
        if is_on_screen(x, y, layout):
            visible.append((x, y))
            assert -300 <= x <= 1000 + 300
            assert -300 <= y <= 800 + 300

    # Every pixel of the viewport is covered by some visible cell slot.
    xs = sorted({round(x, 6) for x, _ in visible})
    ys = sorted({round(y, 6) for _, y in visible})
    assert xs[0] <= 0 and xs[-1] + 280 >= 1000
    assert ys[0] <= 0 and ys[-1] + 280 >= 800


def test_cell_center():
    assert cell_center(10, 20, 280) == (150, 160)
