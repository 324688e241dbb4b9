"""One-wire temperature sensors with recovery from lost devices."""

from __future__ import annotations

import logging
import random
from typing import Protocol

_log = logging.getLogger(__name__)

T_ERROR = -100.0
DEVICE_DISCONNECTED_C = -127.0
_WATER_ERROR_LIMIT = -120.0
_DS18B20_ERROR_LIMIT = -125.0
_MAX_ERRORS = 10
_ERROR_LATCH = 100


class TemperatureBus(Protocol):
    """A bus of temperature sensors."""

    def begin(self) -> None: ...

    def device_count(self) -> int: ...

    def address(self, index: int) -> bytes: ...

    def set_resolution(self, address: bytes, bits: int) -> None: ...

    def request_temperatures(self) -> None: ...

    def temperature_c(self, address: bytes) -> float: ...

    def temperature_c_by_index(self, index: int) -> float: ...


class WaterSensor:
    """Reads the first sensor on a bus; restarts the bus after a failed read."""

    def __init__(self, bus: TemperatureBus) -> None:
        self.bus = bus
        self._last = T_ERROR

    @property
    def last_temperature(self) -> float:
        """The last valid reading, or -100 before the first one."""
        return self._last

    def read_temperature(self) -> float:
        """Return a new reading; on failure restart the bus and return the raw value."""
        self.bus.request_temperatures()
        value = self.bus.temperature_c_by_index(0)
        if value < _WATER_ERROR_LIMIT:
            _log.warning("Init sensor!")
            self.bus.begin()
            return value
        self._last = value
        return self._last


class DS18B20Sensor:
    """A DS18B20 on its own bus, rediscovered after too many failed reads.

    In simulation mode readings are random values from 70.00 to 89.99.
    """

    def __init__(
        self,
        bus: TemperatureBus | None = None,
        resolution: int = 12,
        simulate: bool = False,
        rng: random.Random | None = None,
    ) -> None:
        if bus is None and not simulate:
            raise ValueError("a bus is required unless simulating")
        self.bus = bus
        self.resolution = resolution
        self.simulate = simulate
        self.rng = rng if rng is not None else random.Random()
        self._count = 0
        self._errors = 0
        self._address: bytes | None = None

    @property
    def address(self) -> bytes | None:
        """The address of the sensor in use, once found."""
        return self._address

    @property
    def error_count(self) -> int:
        """Consecutive failed reads (100 once the device has been dropped)."""
        return self._errors

    @property
    def is_good(self) -> bool:
        """True while a device is known on the bus."""
        return self._count > 0

    def _startup(self) -> bool:
        self.bus.begin()
        self._count = self.bus.device_count()
        if self._count:
            self._address = self.bus.address(0)
            self.bus.set_resolution(self._address, self.resolution)
            return True
        return False

    def read_temperature_c(self) -> float:
        """Return a reading in degrees Celsius."""
        if self.simulate:
            return self.rng.randrange(7000, 9000) / 100.0
        if not self.is_good:
            self._startup()
        self.bus.request_temperatures()
        if self._address is not None:
            value = self.bus.temperature_c(self._address)
        else:
            value = DEVICE_DISCONNECTED_C
        if value < _DS18B20_ERROR_LIMIT:
            self._errors += 1
            if self._errors > _MAX_ERRORS:
                self._count = 0
                self._errors = _ERROR_LATCH
        else:
            self._errors = 0
        return value