"""Text screens for the climate controller and the power meter on a small OLED."""

from __future__ import annotations

import ipaddress
import math
import time
from typing import Protocol

_LINE_HEIGHT = 8
_UINT32_MAX = 0xFFFFFFFF


class TextDevice(Protocol):
    """A monochrome display with a text cursor and an off-screen buffer."""

    def begin(self) -> bool: ...

    def display(self) -> None: ...

    def clear_display(self) -> None: ...

    def set_text_size(self, size: int) -> None: ...

    def set_cursor(self, x: int, y: int) -> None: ...

    def write(self, text: str) -> None: ...


def format_celsius(value: float) -> str:
    """Format a temperature with one decimal digit in at most four characters.

    Values below -9.9 give ``--.-`` and values above 99.9 give ``++.+``;
    a leading zero is shown as a space.
    """
    if not math.isfinite(value):
        return "++.+" if value > 0 else "--.-"
    tenths = int(value * 10.0)
    if tenths < -99:
        return "--.-"
    if tenths > 999:
        return "++.+"
    digits = str(tenths).rjust(3, "0")
    text = f"{digits[:-1]}.{digits[-1]}"
    if text.startswith("0"):
        text = " " + text[1:]
    return text


def format_ip(ip: int | ipaddress.IPv4Address) -> str:
    """Format an IPv4 address as ``IP: a.b.c.d``.

    An integer holds the address as the network stack stores it: first octet
    in the lowest byte.
    """
    if isinstance(ip, ipaddress.IPv4Address):
        octets = ip.packed
    else:
        if not 0 <= ip <= _UINT32_MAX:
            raise ValueError(f"IPv4 address must fit in 32 bits, got {ip!r}")
        octets = ip.to_bytes(4, "little")
    return "IP: " + ".".join(str(octet) for octet in octets)


class _Screen:
    """Shared start-up and text drawing for an SSD1306-like device."""

    splash_seconds = 1.0

    def __init__(self, device: TextDevice) -> None:
        self.device = device
        self._initialized = False
        self._init_display()

    @property
    def is_initialized(self) -> bool:
        """True once the device has answered its start-up."""
        return self._initialized

    def _init_display(self) -> bool:
        if not self._initialized:
            self._initialized = bool(self.device.begin())
            self.device.display()
            time.sleep(self.splash_seconds)
            self.device.clear_display()
            self.device.display()
        return self._initialized

    def _text(self, size: int, x: int, y: int, text: str) -> None:
        self.device.set_text_size(size)
        self.device.set_cursor(x, y)
        self.device.write(text)

    def _clear(self) -> None:
        self.device.clear_display()

    def _show(self) -> None:
        self.device.display()


class ClimateDisplay(_Screen):
    """Shows address, setpoint, temperature and fan output of the climate controller."""

    def __init__(self, device: TextDevice) -> None:
        super().__init__(device)

    def begin_update(self) -> None:
        """Clear the buffer before drawing a new frame."""
        self._clear()

    def end_update(self) -> None:
        """Show the drawn frame."""
        self._show()

    def draw_ip(self, ip: int | ipaddress.IPv4Address) -> None:
        """Draw the network address on the top line and show it at once."""
        self._text(1, 0, 0, format_ip(ip))
        self._show()

    def draw_set_point(self, value: float) -> None:
        """Draw the setpoint in large digits."""
        self._text(3, 0, 10, format_celsius(value))

    def draw_temperature(self, value: float) -> None:
        """Draw the temperature in large digits below the setpoint."""
        self._text(3, 0, 10 + 3 * _LINE_HEIGHT, format_celsius(value))

    def draw_pwm_out(self, value: float) -> None:
        """Draw the fan control voltage, given in millivolts, as volts."""
        self._text(1, 80, 10 + 3 * _LINE_HEIGHT, format_celsius(value / 1000.0))

    def draw_status(self, line: int, text: str) -> bool:
        """Draw ``text`` on ``line`` and show it; False if the device is not ready."""
        if not self._init_display():
            return False
        self._text(2, 0, _LINE_HEIGHT * line, text)
        self._show()
        return True


class PowerDisplay(_Screen):
    """Shows the readings of the power meter."""

    def __init__(self, device: TextDevice) -> None:
        super().__init__(device)

    def begin_update(self) -> None:
        """Clear the buffer before drawing a new frame."""
        self._clear()

    def end_update(self) -> None:
        """Show the drawn frame."""
        self._show()

    def draw_status(self, text: str) -> None:
        """Draw a status text on the top line."""
        self._text(1, 0, 0, text)

    def draw_instant_watt(self, value: int) -> None:
        """Draw the instant power in large digits."""
        self._text(4, 0, _LINE_HEIGHT, str(int(value)))

    def draw_instant_watt_hour(self, value: int) -> None:
        """Draw the energy below the instant power."""
        self._text(3, 0, _LINE_HEIGHT + 4 * _LINE_HEIGHT, str(int(value)))

    def draw_time(self, value: int) -> None:
        """Draw an unsigned 32-bit time value at the bottom right."""
        value = int(value)
        if not 0 <= value <= _UINT32_MAX:
            raise ValueError(f"time must fit in 32 unsigned bits, got {value!r}")
        self._text(2, 90, _LINE_HEIGHT + 4 * _LINE_HEIGHT, str(value))