"""Real-time clock helpers: timestamps, 8.3 file names and network time."""

from __future__ import annotations

import time
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Protocol

MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_BASE_YEAR = 2022
_MAX_YEAR_INDEX = 26
_SECONDS_PER_DAY = 86400
_STANDARD_OFFSET = 3600
_DST_OFFSET = 7200


class RtcError(RuntimeError):
    """Raised when the clock chip does not answer."""


class RtcChip(Protocol):
    """The operations a real-time clock chip offers."""

    def begin(self) -> bool: ...

    def is_running(self) -> bool: ...

    def now(self) -> datetime: ...

    def adjust(self, moment: datetime) -> None: ...


class _SystemClock:
    """A clock chip backed by the host clock plus an adjustable offset."""

    def __init__(self) -> None:
        self._offset = timedelta()

    def begin(self) -> bool:
        return True

    def is_running(self) -> bool:
        return True

    def now(self) -> datetime:
        return datetime.now().replace(microsecond=0) + self._offset

    def adjust(self, moment: datetime) -> None:
        self._offset = moment - datetime.now().replace(microsecond=0)


def format_timestamp(moment: datetime) -> str:
    """Format ``moment`` as ``DD Mon YYYY hh:mm:ss``."""
    return (
        f"{moment.day:02d} {MONTH_NAMES[moment.month - 1]} {moment.year} "
        f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )


def rtc_file_name(moment: datetime, extension: str | None = None) -> str:
    """Build an eight-character file name that encodes ``moment``.

    Year (from 2022, clamped), month, day, hour, minute and second are each
    packed into letters or digits; ``extension`` is appended after a dot.
    """
    year_index = min(max(moment.year - _BASE_YEAR, 0), _MAX_YEAR_INDEX)
    second = moment.second
    second_char = chr(ord("A") + second) if second <= 26 else chr(ord("a") + second - 26)
    name = (
        f"{chr(ord('A') + year_index)}"
        f"{chr(ord('a') + moment.month)}"
        f"{moment.day:02d}"
        f"{chr(ord('A') + moment.hour)}"
        f"{moment.minute:02d}"
        f"{second_char}"
    )
    if extension is not None:
        name += "." + extension
    return name


class Rtc:
    """Front end to a real-time clock chip."""

    def __init__(self, chip: RtcChip | None = None) -> None:
        self.chip: RtcChip = chip if chip is not None else _SystemClock()
        self._chip_ok = False
        self.is_chip_ok()

    def is_chip_ok(self) -> bool:
        """Whether the chip answers; retries its start-up until it does."""
        if not self._chip_ok:
            self._chip_ok = bool(self.chip.begin())
        return self._chip_ok

    def is_init_needed(self) -> bool:
        """True when the chip is not keeping time and must be set."""
        return not self.chip.is_running()

    def set_time(self, moment: datetime | None = None) -> None:
        """Set the chip to ``moment``, or to the host's local time."""
        self.chip.adjust(moment if moment is not None else datetime.now().replace(microsecond=0))

    def read(self) -> datetime:
        """Return the chip's current time."""
        if not self.is_chip_ok():
            raise RtcError("RTC chip is not responding")
        return self.chip.now()

    def read_to_string(self) -> str:
        """Return the chip's current time as ``DD Mon YYYY hh:mm:ss``."""
        return format_timestamp(self.chip.now())

    def create_file_name(self, extension: str | None = None) -> str:
        """Return a unique 8.3 file name built from the chip's current time."""
        if not self.is_chip_ok():
            raise RtcError("RTC chip is not responding")
        return rtc_file_name(self.chip.now(), extension)


class WebTime:
    """Time of day from a UTC clock, shifted to local standard or summer time.

    ``clock`` returns seconds since the epoch in UTC.
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self.clock: Callable[[], float] = clock if clock is not None else time.time
        self.offset = _STANDARD_OFFSET

    def set_dst(self, is_dst: bool) -> None:
        """Select summer time (two hours ahead) or standard time (one hour)."""
        self.offset = _DST_OFFSET if is_dst else _STANDARD_OFFSET

    def date_time(self) -> str:
        """Return the local time of day as ``hh:mm:ss``."""
        seconds = (int(self.clock()) + self.offset) % _SECONDS_PER_DAY
        hours, rest = divmod(seconds, 3600)
        minutes, secs = divmod(rest, 60)
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"