"""Thermostats that report a setpoint and a measured temperature."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Protocol

UNSET = -1000.0
_FIELD_DIGITS = 6
_FRAME_START = "$"


class ByteSource(Protocol):
    """A serial port: the number of bytes waiting and a way to read them."""

    @property
    def in_waiting(self) -> int: ...

    def read(self, size: int) -> bytes: ...


class ThermostatBase(ABC):
    """A thermostat; both values read -1000 until the first valid reading."""

    def __init__(self) -> None:
        self._setpoint = UNSET
        self._temperature = UNSET

    @property
    def setpoint(self) -> float:
        """The last setpoint received."""
        return self._setpoint

    @property
    def temperature(self) -> float:
        """The last temperature received."""
        return self._temperature

    @abstractmethod
    def begin(self) -> bool:
        """Prepare the thermostat; return True when it is ready."""

    @abstractmethod
    def do_work(self) -> bool:
        """Poll the thermostat; return True when new values were taken."""


def _parse_frame(data: str) -> tuple[int, int] | None:
    """Find the first ``$$`` + six setpoint digits + six temperature digits.

    A malformed frame is abandoned and the search restarts at the next ``$``.
    Once a frame is complete the rest of the data is ignored.
    """
    pos = 0
    setpoint: list[str] = []
    temperature: list[str] = []
    for ch in data:
        if pos == 0:
            if ch != _FRAME_START:
                continue
            setpoint = []
            temperature = []
        if pos == 1 and ch != _FRAME_START:
            pos = 0
            continue
        if 2 <= pos <= 7:
            if not ch.isascii() or not ch.isdigit():
                pos = 0
                continue
            setpoint.append(ch)
        if 8 <= pos <= 13:
            if not ch.isascii() or not ch.isdigit():
                pos = 0
                continue
            temperature.append(ch)
        pos += 1
    if len(setpoint) != _FIELD_DIGITS or len(temperature) != _FIELD_DIGITS:
        return None
    return int("".join(setpoint)), int("".join(temperature))


class SerialThermostat(ThermostatBase):
    """Thermostat sending ``$$SSSSSSTTTTTT`` frames, values in hundredths of a degree."""

    def __init__(self, port: ByteSource) -> None:
        super().__init__()
        self.port = port

    def begin(self) -> bool:
        """Open the port if it is closed."""
        if not getattr(self.port, "is_open", True):
            self.port.open()
        return True

    def do_work(self) -> bool:
        """Read what the port holds and take the values of its first valid frame."""
        waiting = self.port.in_waiting
        data = self.port.read(waiting) if waiting else b""
        frame = _parse_frame(bytes(data).decode("latin-1"))
        if frame is None:
            return False
        setpoint, temperature = frame
        self._setpoint = setpoint / 100.0
        self._temperature = temperature / 100.0
        return True