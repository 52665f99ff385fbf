import pytest

from infinigrid.engine.momentum import MomentumPhase, MomentumSimulator, PanState


def make_simulator(**kwargs):
    state = PanState()
    options = dict(friction=0.92, min_velocity=0.5, timestep=1 / 60)
    options.update(kwargs)
    return state, MomentumSimulator(state, **options)


def run_to_rest(simulator, limit=10000, elapsed=None):
    ticks = 0
    while simulator.tick(elapsed) and ticks < limit:
        ticks += 1
    return ticks + 1


def test_starts_idle_and_ticking_idle_does_nothing():
    state, simulator = make_simulator()
    assert simulator.phase is MomentumPhase.IDLE
    assert simulator.tick() is False
    assert (state.pan_x, state.pan_y) == (0.0, 0.0)


def test_reference_decay_terminates_in_36_ticks():
    _, simulator = make_simulator()
    simulator.start(10, 0, (0, 0))
    assert simulator.running

    assert run_to_rest(simulator) == 36
    assert simulator.phase is MomentumPhase.IDLE


def test_single_tick_applies_friction_then_moves():
    state, simulator = make_simulator()
    simulator.start(600, -300, (100, 50))

    simulator.tick()

    assert simulator.velocity == pytest.approx((552, -276))
    assert state.pan_x == pytest.approx(100 + 552 / 60)
    assert state.pan_y == pytest.approx(50 - 276 / 60)


def test_motion_continues_from_start_offset():
    state, simulator = make_simulator()
    state.pan_x = 999
    simulator.start(100, 0, (10, 20))
    simulator.tick()
    assert state.pan_x > 10
    assert state.pan_x < 20
    assert state.pan_y == pytest.approx(20)


def test_cancel_stops_writes_immediately():
    state, simulator = make_simulator()
    simulator.start(1000, 1000, (0, 0))
    simulator.tick()
    position = (state.pan_x, state.pan_y)

    simulator.cancel()
    simulator.tick()

    assert simulator.phase is MomentumPhase.IDLE
    assert simulator.velocity == (0.0, 0.0)
    assert (state.pan_x, state.pan_y) == position


def test_elapsed_time_scaling_matches_nominal_steps():
    state_a, fixed = make_simulator()
    state_b, scaled = make_simulator()
    fixed.start(900, 0, (0, 0))
    scaled.start(900, 0, (0, 0))

    fixed.tick()
    fixed.tick()
    scaled.tick(2 / 60)

    assert scaled.velocity[0] == pytest.approx(fixed.velocity[0])


def test_frame_rate_coupled_mode_ignores_elapsed():
    state, simulator = make_simulator(frame_rate_independent=False)
    simulator.start(900, 0, (0, 0))
    simulator.tick(0.5)
    assert simulator.velocity[0] == pytest.approx(900 * 0.92)
    assert state.pan_x == pytest.approx(900 * 0.92 / 60)


def test_termination_is_bounded_at_variable_frame_rate():
    _, simulator = make_simulator()
    simulator.start(5000, -5000, (0, 0))
    assert run_to_rest(simulator, elapsed=1 / 144) < 1000
    assert simulator.phase is MomentumPhase.IDLE


def test_release_below_threshold_stops_after_one_tick():
    _, simulator = make_simulator()
    simulator.start(0.3, 0.0, (0, 0))
    assert simulator.tick() is False


@pytest.mark.parametrize("friction", [0.0, 1.0, 1.5, -0.2])
def test_invalid_friction_is_rejected(friction):
    with pytest.raises(ValueError):
        MomentumSimulator(PanState(), friction=friction)
