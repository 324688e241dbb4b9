import math

import pytest

from ovkino.temp_ctrl import TempController


class Recorder:
    def __init__(self):
        self.values = []

    def __call__(self, level):
        self.values.append(level)


def make_controller(setpoint=50.0):
    out = Recorder()
    return TempController(out, 100, setpoint), out


def test_default_setpoint():
    ctrl = TempController()
    assert ctrl.setpoint == 50.0


@pytest.mark.parametrize(
    "value,expected",
    [(5, 10.0), (500, 300.0), (123.5, 123.5), (math.nan, 25.0), (10.0, 10.0), (300.0, 300.0)],
)
def test_set_setpoint_clamps(value, expected):
    ctrl, _ = make_controller()
    assert ctrl.set_setpoint(value) == expected
    assert ctrl.setpoint == expected


def test_far_below_setpoint_is_full_power():
    ctrl, _ = make_controller(200.0)
    ctrl.do_work(20.0)
    assert ctrl.pwm == 100


def test_above_setpoint_is_off():
    ctrl, _ = make_controller(100.0)
    ctrl.do_work(150.0)
    assert ctrl.pwm == 0


def test_at_setpoint_is_off():
    ctrl, _ = make_controller(100.0)
    ctrl.do_work(100.0)
    assert ctrl.pwm == 0


def test_proportional_level():
    ctrl, _ = make_controller(50.0)
    ctrl.do_work(46.0)
    assert ctrl.pwm == 9


def test_level_grows_as_temperature_falls():
    ctrl, _ = make_controller(100.0)
    levels = []
    for temp in range(110, 40, -1):
        ctrl.do_work(float(temp))
        levels.append(ctrl.pwm)
    assert levels == sorted(levels)
    assert all(0 <= level <= 100 for level in levels)


def test_nan_temperature_gives_zero():
    ctrl, _ = make_controller()
    ctrl.do_work(math.nan)
    assert ctrl.pwm == 0


def test_do_work_restarts_after_stop():
    ctrl, out = make_controller(200.0)
    ctrl.stop()
    assert ctrl.pwm == 0
    assert out.values == [False]
    ctrl.do_work(20.0)
    assert ctrl.running
    assert ctrl.pwm == 100


def test_tick_when_stopped_drives_low():
    ctrl, out = make_controller(200.0)
    ctrl.do_work(20.0)
    ctrl.stop()
    ctrl.tick()
    ctrl.tick()
    assert out.values == [False, False, False]


@pytest.mark.parametrize("temperature,expected", [(20.0, True), (250.0, False)])
def test_tick_saturated(temperature, expected):
    ctrl, out = make_controller(200.0)
    ctrl.do_work(temperature)
    for _ in range(101):
        ctrl.tick()
    assert set(out.values) == {expected}


def test_tick_partial_duty_cycle_has_both_states():
    ctrl, out = make_controller(50.0)
    ctrl.do_work(46.0)
    for _ in range(101):
        ctrl.tick()
    assert True in out.values
    assert False in out.values
    assert out.values.count(True) < out.values.count(False)