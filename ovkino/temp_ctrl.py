"""Proportional temperature controller with a 100-step software PWM output."""

from __future__ import annotations

import math
from collections.abc import Callable

OutputFunc = Callable[[bool], None]

_PWM_PERIOD = 100
_FULL_ON = 98
_FULL_OFF = 2
_NAN_SETPOINT = 25.0


class TempController:
    """Heats toward a setpoint: the PWM level grows with ``setpoint - temperature``.

    ``output`` is called with ``True`` or ``False`` whenever the output is driven.
    """

    slope = 2.5
    offset = -0.5
    setpoint_min = 10.0
    setpoint_max = 300.0

    def __init__(self, output: OutputFunc | None = None, pwm_steps: int = 100, setpoint: float = 50.0) -> None:
        self.output: OutputFunc | None = output
        self.pwm_steps = pwm_steps
        self._setpoint = float(setpoint)
        self._pwm_count = 0
        self._pwm_level = 0
        self._running = True

    @property
    def setpoint(self) -> float:
        """The temperature setpoint."""
        return self._setpoint

    @property
    def pwm(self) -> int:
        """The PWM level in percent, 0 while stopped."""
        return self._pwm_level if self._running else 0

    @property
    def running(self) -> bool:
        """True while the PWM is running."""
        return self._running

    def _drive(self, level: bool) -> None:
        if self.output is not None:
            self.output(level)

    def set_setpoint(self, value: float) -> float:
        """Set the setpoint, clamped to the allowed range; NaN selects 25 degrees."""
        value = float(value)
        if math.isnan(value):
            value = _NAN_SETPOINT
        self._setpoint = min(max(value, self.setpoint_min), self.setpoint_max)
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

    def do_work(self, temperature: float) -> None:
        """Start the PWM and compute its level for a new temperature reading."""
        self.start()
        raw = (self._setpoint - temperature) * self.slope + self.offset
        if math.isnan(raw):
            raw = 0.0
        self._pwm_level = int(min(max(raw, 0.0), float(_PWM_PERIOD)))

    def tick(self) -> None:
        """Advance the PWM counter by one step and drive the output."""
        if not self._running:
            self._drive(False)
            return
        self._pwm_count += 1
        if self._pwm_count > _PWM_PERIOD:
            self._pwm_count = 0
        if self._pwm_level >= _FULL_ON:
            self._drive(True)
        elif self._pwm_level <= _FULL_OFF:
            self._drive(False)
        else:
            self._drive(self._pwm_count < self._pwm_level)