"""Serial terminal commands for reading and changing the climate configuration."""

from __future__ import annotations

import re
from typing import TextIO

from ovkino.sys_cfg import SysCfg
from ovkino.terminal import CommandFunc, TermCmd, Terminal

_EOL = "\r\n"
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE | re.ASCII,
)

_PARAMETERS = (
    ("RDA", "res_d_a"),
    ("RPA", "res_p_a"),
    ("RDB", "res_d_b"),
    ("RPB", "res_p_b"),
    ("FDA", "fan_d_a"),
    ("FPA", "fan_p_a"),
    ("FDB", "fan_d_b"),
    ("FPB", "fan_p_b"),
    ("TOFF", "t_offset"),
)


def _atof(text: str) -> float:
    """Parse the leading number of ``text``; 0.0 when there is none."""
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def _setter(sys_cfg: SysCfg, field: str) -> CommandFunc:
    def handler(args: list[str], output: TextIO) -> int:
        if len(args) < 2:
            output.write("Manca il parametro" + _EOL)
            return -1
        sys_cfg.update(**{field: _atof(args[1])})
        sys_cfg.print_config(output)
        return 0

    return handler


def make_commands(sys_cfg: SysCfg) -> tuple[TermCmd, ...]:
    """Build the terminal command table acting on ``sys_cfg``."""
    commands = [
        TermCmd(name, _setter(sys_cfg, field), 0, f"Set {field.ljust(8)}")
        for name, field in _PARAMETERS
    ]

    def print_cfg(args: list[str], output: TextIO) -> int:
        sys_cfg.print_config(output)
        return 0

    commands.append(TermCmd("CFG", print_cfg, 0, "Print Config"))
    return tuple(commands)


class SyscoTerminal:
    """Terminal bound to a configuration store."""

    def __init__(self, sys_cfg: SysCfg, output: TextIO) -> None:
        self.sys_cfg = sys_cfg
        self._terminal = Terminal(make_commands(sys_cfg), output)

    def feed(self, data: str | bytes | bytearray) -> bool:
        """Receive characters; return True once a whole line is available."""
        return self._terminal.feed(data)

    def do_work(self) -> bool:
        """Answer the received line if complete; return True when one was handled."""
        return self._terminal.do_work_and_answer()