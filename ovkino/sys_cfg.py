"""Persistent climate-controller configuration stored in an EEPROM-like file."""

from __future__ import annotations

import logging
import struct
from dataclasses import astuple, dataclass, fields, replace
from os import PathLike
from pathlib import Path
from typing import TextIO

_log = logging.getLogger(__name__)

MAGIC = 0xDA77
_LAYOUT = struct.Struct("<H9f")
_EOL = "\r\n"
_LABEL_WIDTH = 9


def _to_float32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", float(value)))[0]


def _format_float(value: float) -> str:
    # Adding 0.0 turns -0.0 into 0.0, which is how the device prints it.
    return f"{value + 0.0:.2f}"


@dataclass(frozen=True)
class Config:
    """Heater and fan control lines plus the temperature calibration offset."""

    magic: int = MAGIC
    res_d_a: float = -10.0
    res_p_a: float = 100.0
    res_d_b: float = 0.0
    res_p_b: float = 0.0
    fan_d_a: float = 0.0
    fan_p_a: float = 0.0
    fan_d_b: float = 5.0
    fan_p_b: float = 100.0
    t_offset: float = -80.0

    def to_bytes(self) -> bytes:
        """Pack the configuration as stored: a 16-bit magic and nine float32 values."""
        return _LAYOUT.pack(*astuple(self))

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> Config:
        """Unpack a configuration from the start of ``data``."""
        if len(data) < _LAYOUT.size:
            raise ValueError(f"configuration needs {_LAYOUT.size} bytes, got {len(data)}")
        return cls(*_LAYOUT.unpack_from(bytes(data)))


def format_config(config: Config) -> str:
    """Return a readable listing of ``config``, one field per line."""
    lines = []
    for field in fields(config):
        value = getattr(config, field.name)
        label = field.name.ljust(_LABEL_WIDTH)
        if field.name == "magic":
            lines.append(f"{label}:0x{value:X}")
        else:
            lines.append(f"{label}:{_format_float(value)}")
    return "\n".join(lines)


class SysCfg:
    """Configuration kept at the start of a file that stands in for an EEPROM.

    A file that is missing, too short or carries the wrong magic number is
    initialised with the default configuration.
    """

    def __init__(self, path: str | PathLike[str]) -> None:
        self.path = Path(path)
        self._config = self._read()

    @property
    def config(self) -> Config:
        """The configuration in use."""
        return self._config

    def _read(self) -> Config:
        try:
            stored = Config.from_bytes(self.path.read_bytes())
        except (FileNotFoundError, ValueError):
            stored = None
        if stored is not None and stored.magic == MAGIC:
            return stored
        _log.info("New Config!")
        config = Config()
        self._write(config)
        return config

    def _write(self, config: Config) -> None:
        try:
            existing = self.path.read_bytes()
        except FileNotFoundError:
            existing = b""
        self.path.write_bytes(config.to_bytes() + existing[_LAYOUT.size:])

    def update(self, **kwargs: float) -> Config:
        """Change the named parameters, store the result and return it."""
        names = {field.name for field in fields(Config)} - {"magic"}
        unknown = set(kwargs) - names
        if unknown:
            raise TypeError(f"unknown configuration parameter(s): {', '.join(sorted(unknown))}")
        values = {name: _to_float32(value) for name, value in kwargs.items()}
        self._config = replace(self._config, **values)
        self._write(self._config)
        return self._config

    def print_config(self, output: TextIO) -> None:
        """Write the configuration listing to ``output``."""
        for line in format_config(self._config).split("\n"):
            output.write(line + _EOL)