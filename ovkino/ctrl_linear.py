"""Linear control law driving a slow software PWM or a hardware PWM output.

The output level is a function of ``delta = measure - setpoint``::

    delta <= d_a            -> p_a
    delta >= d_b            -> p_b
    d_a < delta < d_b       -> linear interpolation between the two points
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

OutputFunc = Callable[[Any], None]

_PWM_PERIOD = 100
_FULL_ON = 98
_FULL_OFF = 2
_ANALOG_MAX = 255


def _truncate(value: float) -> int:
    """Truncate toward zero, mapping NaN to 0."""
    if math.isnan(value):
        return 0
    if math.isinf(value):
        value = math.copysign(float(2**31 - 1), value)
    return int(value)


@dataclass(frozen=True)
class LinearConfig:
    """The two points of the control line: deltas ``d_*`` and PWM levels ``p_*``."""

    d_a: float = 5.0
    d_b: float = 0.0
    p_a: float = 100.0
    p_b: float = 0.0

    def normalized(self) -> LinearConfig:
        """Return the same line with its points ordered so that ``d_a <= d_b``."""
        if self.d_a > self.d_b:
            return replace(self, d_a=self.d_b, p_a=self.p_b, d_b=self.d_a, p_b=self.p_a)
        return self


class LinearController:
    """Linear controller with a 100-step software PWM on a digital output.

    ``output`` is called with ``True`` or ``False`` whenever the output is driven.
    """

    def __init__(self, output: OutputFunc | None = None, setpoint: float = 50.0) -> None:
        self.output: OutputFunc | None = output
        self._setpoint = float(setpoint)
        self._pwm_level = 0
        self._pwm_count = 0
        self._running = True
        self._config = LinearConfig()
        self._slope = 0.0
        self._offset = 0.0

    @property
    def config(self) -> LinearConfig:
        """The configuration in use."""
        return self._config

    @property
    def setpoint(self) -> float:
        """The current setpoint."""
        return self._setpoint

    @property
    def pwm(self) -> int:
        """The PWM level in percent, 0 while stopped."""
        return self._pwm_level if self._running else 0

    @property
    def running(self) -> bool:
        """True while the PWM is running."""
        return self._running

    def _drive(self, level: Any) -> None:
        if self.output is not None:
            self.output(level)

    def set_config(self, config: LinearConfig) -> None:
        """Install a new configuration and recompute the line coefficients."""
        self._config = config.normalized()
        cfg = self._config
        span = cfg.d_b - cfg.d_a
        # With coincident points the interpolation branch is never reached.
        self._slope = (cfg.p_b - cfg.p_a) / span if span else 0.0
        self._offset = cfg.p_a - self._slope * cfg.d_a

    def set_setpoint(self, value: float) -> float:
        """Set a new setpoint unless ``value`` is NaN; return the setpoint in use."""
        value = float(value)
        if not math.isnan(value):
            self._setpoint = value
        return self._setpoint

    def start(self) -> None:
        """Start the PWM from the beginning of its period, if stopped."""
        if self._running:
            return
        self._pwm_count = 0
        self._running = True

    def stop(self) -> None:
        """Stop the PWM and switch the output off."""
        self._running = False
        self._pwm_count = 0
        self._drive(False)

    def do_work(self, measure: float) -> None:
        """Compute the PWM level for a new measured value."""
        delta = measure - self._setpoint
        cfg = self._config
        if delta <= cfg.d_a:
            level = cfg.p_a
        elif delta >= cfg.d_b:
            level = cfg.p_b
        else:
            level = delta * self._slope + self._offset
        self._pwm_level = _truncate(level)

    def tick(self) -> None:
        """Advance the PWM counter by one step and drive the output."""
        self._pwm_count += 1
        if self._pwm_count > _PWM_PERIOD:
            self._pwm_count = 0
        self.apply_output()

    def apply_output(self) -> None:
        """Drive the output from the PWM level and the counter."""
        if not self._running:
            self._drive(False)
            return
        if self._pwm_level >= _FULL_ON:
            self._drive(True)
        elif self._pwm_level <= _FULL_OFF:
            self._drive(False)
        else:
            self._drive(self._pwm_count < self._pwm_level)


class LinearPwmController(LinearController):
    """Linear controller writing its level to an 8-bit analog (PWM) output.

    ``output`` is called with a value from 0 to 255, only when it changes.
    """

    def __init__(self, output: OutputFunc | None = None) -> None:
        super().__init__(output)
        self._last_written = -100

    def apply_output(self) -> None:
        """Write the scaled PWM level if it differs from the last one written."""
        scaled = self._pwm_level * _ANALOG_MAX
        magnitude = abs(scaled) // _PWM_PERIOD
        level = magnitude if scaled >= 0 else -magnitude
        if level == self._last_written:
            return
        self._last_written = level
        self._drive(level)

    def tick(self) -> None:
        """Drive the output; the hardware takes care of the period."""
        self.apply_output()