"""Dimmable LED that fades smoothly toward a target luminosity."""

from __future__ import annotations

import math
from collections.abc import Callable

OutputFunc = Callable[[int], None]

_STATUS_RULE = "-------------------------"


def _discard(_level: int) -> None:
    """Output sink used when no output is attached."""


class Led:
    """An LED driven by an analog (PWM) output, faded in fixed ticks.

    ``output`` is called with an integer level from 0 to ``max_value``.
    :meth:`step` must be called every ``ticker_ms`` milliseconds; a fade to a
    new luminosity then takes about ``raise_ms`` milliseconds.
    """

    def __init__(
        self,
        name: str,
        output: OutputFunc | None = None,
        max_value: int = 255,
        invert: bool = False,
        ticker_ms: int = 25,
        raise_ms: int = 2500,
    ) -> None:
        if ticker_ms <= 0:
            raise ValueError(f"ticker_ms must be positive, got {ticker_ms}")
        self.name = name
        self.output: OutputFunc = output if output is not None else _discard
        self.max_value = max_value
        self.invert = invert
        self.ticker_ms = ticker_ms
        self.ticker_steps = float(int(raise_ms / ticker_ms))
        self._luma = 0.0
        self._target = 0.0
        self._delta = 1.0
        self._done = True
        self._drive_output()

    @property
    def luminosity(self) -> float:
        """The luminosity currently applied."""
        return self._luma

    @property
    def target(self) -> float:
        """The luminosity the LED is fading toward."""
        return self._target

    @property
    def done(self) -> bool:
        """True once the last fade has reached its target."""
        return self._done

    def _drive_output(self) -> None:
        raw = self.max_value - self._luma if self.invert else self._luma
        self.output(min(max(int(raw), 0), self.max_value))

    def set_luminosity(self, luma: int) -> None:
        """Start fading toward ``luma``, clamped to ``0..max_value``."""
        luma = min(max(int(luma), 0), self.max_value)
        self._target = float(luma)
        distance = abs(self._target - self._luma)
        self._delta = distance / self.ticker_steps if self.ticker_steps else math.inf
        self._done = False

    def step(self) -> bool:
        """Advance the fade by one tick and drive the output; return :attr:`done`."""
        if self._done:
            return True
        if self._target >= self._luma:
            self._luma += self._delta
            if self._luma > self._target:
                self._luma = self._target
                self._done = True
        else:
            self._luma -= self._delta
            if self._luma < self._target:
                self._luma = self._target
                self._done = True
        self._drive_output()
        return self._done

    def status(self) -> str:
        """A readable report of the LED state."""
        lines = [
            "",
            _STATUS_RULE,
            f"name         : {self.name}",
            f"luma         : {self._luma:.2f}",
            f"luma_target  : {self._target:.2f}",
            f"luma_delta   : {self._delta:.2f}",
            f"luma_max     : {self.max_value}",
            f"invert       : {int(self.invert)}",
            f"ticker_steps : {self.ticker_steps:.2f}",
            f"tr_done      : {int(self._done)}",
        ]
        return "\n".join(lines)