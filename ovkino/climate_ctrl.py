"""Climate controller: a heater and a fan with a cooling valve around one setpoint."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ovkino.ctrl_linear import LinearConfig, LinearController, LinearPwmController
from ovkino.sys_cfg import Config

UNSET = -1000.0
_VALID_MIN = -10.0
_VALID_MAX = 100.0
_INVALID_LIMIT = -100.0
_START_TEMPERATURE = 25.0
_FAN_FULL = 255
_ADC_TO_MV = 4.24 * 5000.0 / 1024.0
_FILTER_OLD = 0.9
_FILTER_NEW = 0.1


def _emit(output: Callable[[Any], None] | None, level: Any) -> None:
    """Send ``level`` to ``output`` when an output is attached."""
    if output is not None:
        output(level)


def _valid(value: float) -> float:
    return value if _VALID_MIN <= value <= _VALID_MAX else UNSET


class ClimateController:
    """Heats through a switched heater or cools through a fan and a valve.

    ``heater_output`` and ``valve_output`` take ``True``/``False``;
    ``fan_output`` takes a level from 0 to 255; ``read_fan_input`` returns the
    10-bit reading of the fan's 0-10 V control signal. Without it the fan
    signal is not measured.
    """

    def __init__(
        self,
        config: Config | None = None,
        heater_output: Callable[[bool], None] | None = None,
        fan_output: Callable[[int], None] | None = None,
        valve_output: Callable[[bool], None] | None = None,
        read_fan_input: Callable[[], int] | None = None,
    ) -> None:
        config = config if config is not None else Config()
        self.heater_output = heater_output
        self.fan_output = fan_output
        self.valve_output = valve_output
        self.read_fan_input = read_fan_input
        self._setpoint = UNSET
        self._temperature = UNSET
        self._fan_out_mv = UNSET

        _emit(self.valve_output, False)

        self.heater = LinearController(self.heater_output)
        self.heater.set_config(LinearConfig(
            d_a=config.res_d_a, p_a=config.res_p_a, d_b=config.res_d_b, p_b=config.res_p_b,
        ))
        self.heater.do_work(_START_TEMPERATURE)
        self.heater.start()

        self.fan = LinearPwmController(self.fan_output)
        self.fan.set_config(LinearConfig(
            d_a=config.fan_d_a, p_a=config.fan_p_a, d_b=config.fan_d_b, p_b=config.fan_p_b,
        ))
        self.fan.do_work(_START_TEMPERATURE)
        self.fan.start()

    @property
    def setpoint(self) -> float:
        """The setpoint in use, -1000 when invalid or not yet given."""
        return self._setpoint

    @property
    def temperature(self) -> float:
        """The temperature in use, -1000 when invalid or not yet given."""
        return self._temperature

    @property
    def fan_out_mv(self) -> float:
        """The filtered fan control signal in millivolts, -1000 before the first reading."""
        return self._fan_out_mv

    def do_work(self, setpoint: float, temperature: float) -> None:
        """Take a new setpoint and temperature; values outside -10..100 are invalid."""
        self._setpoint = _valid(setpoint)
        self._temperature = _valid(temperature)
        self.heater.set_setpoint(self._setpoint)
        self.fan.set_setpoint(self._setpoint)
        self.heater.do_work(self._temperature)
        self.fan.do_work(self._temperature)

    def tick(self) -> None:
        """Drive the outputs for one step and sample the fan control signal."""
        if self._temperature < _INVALID_LIMIT or self._setpoint < _INVALID_LIMIT:
            _emit(self.fan_output, 0)
            _emit(self.valve_output, False)
            _emit(self.heater_output, False)
        else:
            self.heater.tick()
            if self.heater.pwm > 0:
                _emit(self.fan_output, _FAN_FULL)
                _emit(self.valve_output, False)
            else:
                self.fan.tick()
                _emit(self.valve_output, self.fan.pwm > 0)

        if self.read_fan_input is None:
            return
        millivolts = float(self.read_fan_input()) * _ADC_TO_MV
        if self._fan_out_mv < _VALID_MIN:
            self._fan_out_mv = millivolts
        else:
            self._fan_out_mv = self._fan_out_mv * _FILTER_OLD + millivolts * _FILTER_NEW