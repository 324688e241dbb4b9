"""Line oriented command terminal for a serial-like text stream."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import TextIO

from ovkino.termargs import segment

_EOL = "\r\n"
_NUL = "\0"
_MIN_BUFFER = 16
_MAX_ARGS = 8
_NAME_WIDTH = 8
_HELP_RULE = "-----------------------------------------------------"
_DUMP_RULE = "--------------------"

CommandFunc = Callable[[list[str], TextIO], "int | None"]


def _println(output: TextIO, text: str = "") -> None:
    output.write(text + _EOL)


def _upper_ascii(text: str) -> str:
    return "".join(chr(ord(ch) - 32) if "a" <= ch <= "z" else ch for ch in text)


@dataclass(frozen=True)
class TermCmd:
    """A terminal command: its name, handler, access flags and help line.

    The handler receives the argument list (command name first, upper-cased)
    and the output stream, and returns 0 or ``None`` on success or an error
    code otherwise. A command without a handler is listed but not runnable.
    """

    name: str
    func: CommandFunc | None = None
    access: int = 0
    help: str = ""


class Terminal:
    """Collects received characters into a line and runs the matching command."""

    def __init__(self, commands: Iterable[TermCmd], output: TextIO, buffer_size: int = 128) -> None:
        self.commands: tuple[TermCmd, ...] = tuple(commands)
        self.output = output
        self.buffer_size = max(buffer_size, _MIN_BUFFER)
        self._buffer: list[str] = []
        self._overflow = False
        self._complete = False

    @property
    def overflow(self) -> bool:
        """True when characters were lost because the line was too long."""
        return self._overflow

    @property
    def command(self) -> str | None:
        """The received line once it is complete, otherwise ``None``."""
        if not self._complete:
            return None
        return "".join(self._buffer).split(_NUL, 1)[0]

    def feed(self, data: str | bytes | bytearray) -> bool:
        """Receive characters; return True once a whole line is available."""
        if isinstance(data, (bytes, bytearray)):
            data = bytes(data).decode("latin-1")
        for ch in data:
            if len(self._buffer) < self.buffer_size - 1:
                if 32 <= ord(ch) < 128:
                    self._buffer.append(ch)
            else:
                self._overflow = True
            if ch in "\n\r":
                self._complete = True
                self._buffer.append(_NUL)
        return self._complete

    def clear(self) -> None:
        """Discard whatever has been received and reset the error state."""
        self._buffer.clear()
        self._overflow = False
        self._complete = False

    def do_work_and_answer(self) -> bool:
        """Run the received command, if a line is complete, and write the answer.

        Returns True when a line was processed.
        """
        line = self.command
        if line is None:
            return False

        args = segment(line, _MAX_ARGS)
        name = _upper_ascii(args[0]) if args else ""
        if args:
            args[0] = name

        entry = next((cmd for cmd in self.commands if cmd.name == name), None)
        if entry is not None:
            if entry.func is not None:
                err = entry.func(args, self.output) or 0
                if not err:
                    _println(self.output, "*** OK")
                else:
                    _println(self.output, f"*** ERR:{err}")
            else:
                _println(self.output, "To be done...")
        elif name in ("HELP", "?"):
            self.print_help()
        else:
            _println(self.output, "*** INVALID")

        self.clear()
        return True

    def print_help(self) -> None:
        """Write the list of commands with their help lines."""
        _println(self.output, _HELP_RULE)
        _println(self.output, "List of available commands:")
        for cmd in self.commands:
            _println(self.output, f"{cmd.name.ljust(_NAME_WIDTH)} : {cmd.help or ''}")


def dump_arguments(cmd: str, output: TextIO) -> Sequence[str]:
    """Split ``cmd`` and write each argument with its index; return the arguments."""
    _println(output, _DUMP_RULE)
    args = segment(cmd, _MAX_ARGS)
    for index, arg in enumerate(args):
        _println(output, f"{index} -> '{arg}'")
    return args