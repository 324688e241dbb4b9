"""Table driven CRC-16 with configurable polynomial and bit reflection."""

from __future__ import annotations

from collections.abc import Iterable

_MASK16 = 0xFFFF
_TABLE_SIZE = 256


def reflect(value: int, width: int = 16) -> int:
    """Return ``value`` with its lowest ``width`` bits in reverse order."""
    if width <= 0:
        raise ValueError(f"width must be positive, got {width}")
    if value < 0 or value >> width:
        raise ValueError(f"value {value!r} does not fit in {width} bits")
    return int(format(value, f"0{width}b")[::-1], 2)


def _check_u16(name: str, value: int) -> int:
    if not 0 <= value <= _MASK16:
        raise ValueError(f"{name} must be a 16-bit unsigned value, got {value!r}")
    return value


class Crc16:
    """CRC-16 calculator built around a 256-entry lookup table."""

    def __init__(self, polynomial: int, reflect_in: bool = False, reflect_out: bool = False) -> None:
        self.polynomial = _check_u16("polynomial", polynomial)
        self.reflect_in = reflect_in
        self.reflect_out = reflect_out
        self._table = self._build_table()

    @property
    def table(self) -> tuple[int, ...]:
        """The lookup table derived from the polynomial."""
        return self._table

    def _build_table(self) -> tuple[int, ...]:
        table = []
        if not self.reflect_in:
            for dividend in range(_TABLE_SIZE):
                current = dividend << 8
                for _ in range(8):
                    if current & 0x8000:
                        current = ((current << 1) & _MASK16) ^ self.polynomial
                    else:
                        current = (current << 1) & _MASK16
                table.append(current)
        else:
            poly = reflect(self.polynomial, 16)
            for dividend in range(_TABLE_SIZE):
                current = dividend
                for _ in range(8):
                    if current & 0x0001:
                        current = (current >> 1) ^ poly
                    else:
                        current >>= 1
                table.append(current)
        return tuple(table)

    def calculate(self, data: bytes | bytearray | memoryview | Iterable[int], initial: int = 0) -> int:
        """Return the CRC of ``data`` starting from ``initial``."""
        crc = _check_u16("initial", initial)
        table = self._table
        octets = memoryview(data).cast("B") if not isinstance(data, (list, tuple)) else bytes(data)
        if not self.reflect_in:
            for byte in octets:
                crc = ((crc << 8) & _MASK16) ^ table[((crc >> 8) ^ byte) & 0xFF]
            return reflect(crc, 16) if self.reflect_out else crc
        for byte in octets:
            crc = table[(byte ^ crc) & 0xFF] ^ (crc >> 8)
        return crc if self.reflect_out else reflect(crc, 16)