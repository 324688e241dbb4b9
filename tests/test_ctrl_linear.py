import math

import pytest

from ovkino.ctrl_linear import LinearConfig, LinearController, LinearPwmController


class Recorder:
    def __init__(self):
        self.values = []

    def __call__(self, level):
        self.values.append(level)


def make_controller(config=None, setpoint=20.0):
    out = Recorder()
    ctrl = LinearController(out, setpoint)
    ctrl.set_config(config or LinearConfig(d_a=0.0, d_b=10.0, p_a=0.0, p_b=100.0))
    return ctrl, out


def test_default_config_values():
    assert LinearConfig() == LinearConfig(d_a=5.0, d_b=0.0, p_a=100.0, p_b=0.0)


def test_normalized_swaps_points():
    cfg = LinearConfig(d_a=5.0, d_b=0.0, p_a=100.0, p_b=0.0)
    assert cfg.normalized() == LinearConfig(d_a=0.0, d_b=5.0, p_a=0.0, p_b=100.0)


def test_normalized_keeps_ordered_points():
    cfg = LinearConfig(d_a=-10.0, d_b=0.0, p_a=100.0, p_b=0.0)
    assert cfg.normalized() == cfg


def test_set_config_stores_normalized():
    ctrl, _ = make_controller(LinearConfig(d_a=5.0, d_b=1.0, p_a=80.0, p_b=10.0))
    assert ctrl.config.d_a == 1.0
    assert ctrl.config.p_a == 10.0
    assert ctrl.config.d_b == 5.0
    assert ctrl.config.p_b == 80.0


def test_below_first_point_gives_p_a():
    ctrl, _ = make_controller(LinearConfig(d_a=0.0, d_b=10.0, p_a=30.0, p_b=90.0))
    ctrl.do_work(5.0)
    assert ctrl.pwm == 30


def test_above_second_point_gives_p_b():
    ctrl, _ = make_controller(LinearConfig(d_a=0.0, d_b=10.0, p_a=30.0, p_b=90.0))
    ctrl.do_work(100.0)
    assert ctrl.pwm == 90


def test_interpolation_midpoint():
    ctrl, _ = make_controller()
    ctrl.do_work(25.0)
    assert ctrl.pwm == 50


def test_interpolation_is_monotonic_and_bounded():
    ctrl, _ = make_controller()
    levels = []
    for step in range(0, 121):
        ctrl.do_work(15.0 + step * 0.125)
        levels.append(ctrl.pwm)
    assert levels == sorted(levels)
    assert levels[0] == 0
    assert levels[-1] == 100
    assert all(0 <= level <= 100 for level in levels)


def test_coincident_points_do_not_fail():
    ctrl, _ = make_controller(LinearConfig(d_a=2.0, d_b=2.0, p_a=40.0, p_b=70.0))
    ctrl.do_work(22.0)
    assert ctrl.pwm == 40
    ctrl.do_work(23.0)
    assert ctrl.pwm == 70


def test_set_setpoint_ignores_nan():
    ctrl, _ = make_controller(setpoint=42.0)
    assert ctrl.set_setpoint(math.nan) == 42.0
    assert ctrl.setpoint == 42.0
    assert ctrl.set_setpoint(18) == 18.0


def test_stop_forces_output_low_and_zero_pwm():
    ctrl, out = make_controller()
    ctrl.do_work(100.0)
    ctrl.stop()
    assert ctrl.pwm == 0
    assert not ctrl.running
    assert out.values[-1] is False
    ctrl.tick()
    assert out.values[-1] is False


def test_start_resumes():
    ctrl, out = make_controller()
    ctrl.do_work(100.0)
    ctrl.stop()
    ctrl.start()
    assert ctrl.pwm == 100
    ctrl.tick()
    assert out.values[-1] is True


@pytest.mark.parametrize("measure,expected", [(100.0, True), (0.0, False)])
def test_tick_saturated_levels(measure, expected):
    ctrl, out = make_controller()
    ctrl.do_work(measure)
    for _ in range(101):
        ctrl.tick()
    assert set(out.values) == {expected}


def test_tick_duty_cycle_over_period():
    ctrl, out = make_controller()
    ctrl.do_work(25.0)
    for _ in range(101):
        ctrl.tick()
    assert out.values.count(True) == 50
    assert len(out.values) == 101


def test_pwm_controller_scales_to_255():
    out = Recorder()
    ctrl = LinearPwmController(out)
    ctrl.set_config(LinearConfig(d_a=0.0, d_b=10.0, p_a=0.0, p_b=100.0))
    ctrl.do_work(100.0)
    ctrl.tick()
    assert out.values == [255]


def test_pwm_controller_writes_only_changes():
    out = Recorder()
    ctrl = LinearPwmController(out)
    ctrl.set_config(LinearConfig(d_a=0.0, d_b=10.0, p_a=0.0, p_b=100.0))
    ctrl.do_work(0.0)
    ctrl.tick()
    ctrl.tick()
    ctrl.do_work(100.0)
    ctrl.tick()
    ctrl.tick()
    assert out.values == [0, 255]


def test_pwm_controller_default_setpoint():
    ctrl = LinearPwmController()
    assert ctrl.setpoint == 50.0