import pytest

from infinigrid.engine.proximity import proximity_scale


def test_no_pointer_means_no_magnification():
    assert proximity_scale(None, None, 100, 100) == 1.0


@pytest.mark.parametrize("distance", [350, 350.0001, 500, 10000])
def test_scale_is_exactly_one_at_or_beyond_radius(distance):
    assert proximity_scale(distance, 0, 0, 0, radius=350, max_boost=0.12) == 1.0


def test_scale_at_center_is_full_boost():
    assert proximity_scale(50, 50, 50, 50, radius=350, max_boost=0.12) == pytest.approx(1.12)


def test_scale_approaches_full_boost_near_center():
    assert proximity_scale(0.001, 0, 0, 0, radius=350, max_boost=0.12) == pytest.approx(1.12, abs=1e-6)


def test_scale_is_linear_in_distance():
    assert proximity_scale(175, 0, 0, 0, radius=350, max_boost=0.12) == pytest.approx(1.06)
    assert proximity_scale(0, 210, 0, 0, radius=350, max_boost=0.12) == pytest.approx(1.0 + 0.4 * 0.12)


def test_scale_decreases_monotonically():
    scales = [proximity_scale(d, 0, 0, 0) for d in range(0, 400, 25)]
    assert scales == sorted(scales, reverse=True)
