import random

import pytest

from infinigrid.engine.errors import EmptyCatalogError, LayoutDegenerate
from infinigrid.engine.grid_layout import compute_layout

CATALOG = [f"img_{i}.jpg" for i in range(27)]


def test_reference_viewport_dimensions():
    layout = compute_layout(1000, 800, CATALOG, 280, 20, rng=random.Random(0))

    assert layout.total_cell == 300
    assert layout.cols == 8
    assert layout.rows == 7
    assert layout.grid_width == 2400
    assert layout.grid_height == 2100
    assert len(layout.cells) == 56


def test_cells_are_row_major_with_offset_coordinates():
    layout = compute_layout(1000, 800, CATALOG, 280, 20, rng=random.Random(0))

    assert (layout.cells[0].col, layout.cells[0].row) == (-1, -1)
    assert (layout.cells[1].col, layout.cells[1].row) == (0, -1)
    assert (layout.cells[layout.cols].col, layout.cells[layout.cols].row) == (-1, 0)
    assert (layout.cells[-1].col, layout.cells[-1].row) == (layout.cols - 2, layout.rows - 2)
    assert [cell.index for cell in layout.cells] == list(range(56))
    assert len({cell.key for cell in layout.cells}) == 56


def test_cells_follow_pool_order():
    layout = compute_layout(1000, 800, CATALOG, 280, 20, rng=random.Random(5))
    first_segment = [cell.image for cell in layout.cells[: len(CATALOG)]]
    assert sorted(first_segment) == sorted(CATALOG)


def test_small_catalog_wraps_around_pool():
    layout = compute_layout(1000, 800, ["a", "b", "c"], 280, 20, rng=random.Random(0))
    assert {cell.image for cell in layout.cells} == {"a", "b", "c"}


def test_empty_catalog_raises():
    with pytest.raises(EmptyCatalogError):
        compute_layout(1000, 800, [], 280, 20)


def test_zero_viewport_produces_minimal_layout():
    with pytest.warns(LayoutDegenerate):
        layout = compute_layout(0, 0, CATALOG, 280, 20, rng=random.Random(0))

    assert layout.degenerate is True
    assert layout.cols == 5
    assert layout.rows == 5
    assert len(layout.cells) == 25


def test_zero_margin_zero_viewport_still_has_a_cell():
    with pytest.warns(LayoutDegenerate):
        layout = compute_layout(0, 600, CATALOG, 280, 20, overfill_margin=0)
    assert layout.cols == 1
    assert layout.rows == 2


@pytest.mark.parametrize("cell_size,gap", [(0, 20), (-10, 20), (280, -1)])
def test_invalid_geometry_raises(cell_size, gap):
    with pytest.raises(ValueError):
        compute_layout(1000, 800, CATALOG, cell_size, gap)
