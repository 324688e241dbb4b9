"""Branch-free conversion between 32-bit floats and IEEE half precision."""

from __future__ import annotations

import math
import operator
import struct

_SHIFT = 13
_SHIFT_SIGN = 16

_INF_N = 0x7F800000  # float32 infinity
_MAX_N = 0x477FE000  # largest half normal, as float32
_MIN_N = 0x38800000  # smallest half normal, as float32
_SIGN_N = 0x80000000  # float32 sign bit

_NAN_N = 0x7F802000  # smallest half NaN, as float32
_MAX_C = 0x00023BFF
_SIGN_C = 0x00008000  # half sign bit

_MUL_N = 0x52000000  # (1 << 23) / min normal
_MUL_C = 0x33800000  # min normal / (1 << (23 - shift))

_SUB_C = 0x000003FF  # largest float32 subnormal, shifted down
_NOR_C = 0x00000400  # smallest float32 normal, shifted down

_MAX_D = 0x0001C000
_MIN_D = 0x0001C000


def _float_bits(value: float) -> int:
    try:
        return struct.unpack("<I", struct.pack("<f", value))[0]
    except OverflowError:
        return _INF_N | (_SIGN_N if math.copysign(1.0, value) < 0 else 0)


def _bits_float(bits: int) -> float:
    return struct.unpack("<f", struct.pack("<I", bits & 0xFFFFFFFF))[0]


def float_to_f16(value: float) -> int:
    """Encode ``value`` as a 16-bit half-precision pattern (truncating)."""
    bits = _float_bits(float(value))
    sign = (bits & _SIGN_N) >> _SHIFT_SIGN
    v = bits & ~_SIGN_N & 0xFFFFFFFF

    if v < _MIN_N:
        v = int(_bits_float(v) * _bits_float(_MUL_N))
    elif _MAX_N < v < _INF_N:
        v = _INF_N
    elif _INF_N < v < _NAN_N:
        v = _NAN_N

    v >>= _SHIFT
    if v > _MAX_C:
        v -= _MAX_D
    if v > _SUB_C:
        v -= _MIN_D
    return (v | sign) & 0xFFFF


def f16_to_float(value: int) -> float:
    """Decode a 16-bit half-precision pattern into a float."""
    value = operator.index(value)
    if not 0 <= value <= 0xFFFF:
        raise ValueError(f"half-precision pattern must fit in 16 bits, got {value!r}")

    sign = (value & _SIGN_C) << _SHIFT_SIGN
    v = value & ~_SIGN_C & 0xFFFF
    if v > _SUB_C:
        v += _MIN_D
    if v > _MAX_C:
        v += _MAX_D

    if v < _NOR_C:
        bits = _float_bits(v * _bits_float(_MUL_C))
    else:
        bits = v << _SHIFT
    return _bits_float(bits | sign)