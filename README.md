# ovkino

Pure-Python building blocks for small controller projects. The package never touches hardware
itself. Output pins, sensor buses, clocks, serial ports and display devices are objects or
callables that you pass in. That makes every piece easy to drive from a simulation or a test.

## Install

```
pip install ovkino
```

To run the test suite:

```
pip install "ovkino[test]"
pytest
```

## What is inside

- `ovkino.crc16`: a table-driven CRC-16 with optional reflected input and output
  (`Crc16`, `reflect`).
- `ovkino.float16`: conversion between IEEE half-precision bit patterns and Python floats
  (`float_to_f16`, `f16_to_float`).
- `ovkino.termargs`
  - `segment` splits a command line into arguments. Spaces separate arguments, and double
    quotes let an argument contain spaces.
  - `arg_to_int` and `arg_to_uint` parse decimal or `0x` hexadecimal integers as 32-bit values.
- `ovkino.terminal`: a line-oriented command terminal.
  - `Terminal` collects characters through `feed()` and answers a finished line through
    `do_work_and_answer()`. The answer is `*** OK`, `*** ERR:<code>` or `*** INVALID`.
  - Commands are `TermCmd` entries in a table.
  - `HELP` or `?` prints the command list.
  - `dump_arguments` prints how a line is split.
- `ovkino.ctrl_linear`: linear setpoint controllers configured with a `LinearConfig`.
  - `LinearController` drives a 100-step software PWM on an on/off output.
  - `LinearPwmController` writes a level from 0 to 255 to an analog output, only when the level
    changes.
- `ovkino.temp_ctrl`: `TempController` is a proportional heating controller. Its setpoint is
  clamped to 10–300, and it has a 100-step software PWM.
- `ovkino.led`: `Led` fades toward a target brightness. Call `step()` once per tick; `status()`
  returns a readable report.
- `ovkino.rtc`: real-time-clock helpers.
  - `format_timestamp` produces `DD Mon YYYY hh:mm:ss`.
  - `rtc_file_name` builds an eight-character file name that encodes the time.
  - `Rtc` is a front end to a clock chip object. Without a chip object it uses the host clock.
  - `WebTime` turns a UTC clock into local `hh:mm:ss`, with `set_dst()` to pick an offset of
    one or two hours.
- `ovkino.sys_cfg`: a climate configuration kept as a binary record with a magic number at the
  start of a file (`Config`, `SysCfg`, `format_config`).
  - A missing or invalid file is initialised with the defaults.
  - `SysCfg.update()` changes fields and stores them.
- `ovkino.sysco_terminal`: terminal commands that edit that configuration.
  - `make_commands` builds `RDA`, `RPA`, `RDB`, `RPB`, `FDA`, `FPA`, `FDB`, `FPB`, `TOFF` and
    `CFG`.
  - `SyscoTerminal` ties the commands to a `SysCfg`.
- `ovkino.thermostat`: `SerialThermostat` reads frames such as `$$002976002443` from any
  object with `in_waiting` and `read(size)`. Six digits give the setpoint and six the
  temperature, both in hundredths of a degree. `ThermostatBase` is the abstract base class.
- `ovkino.sensors`: wrappers around a temperature bus object.
  - `WaterSensor` restarts the bus after a failed read.
  - `DS18B20Sensor` rediscovers the device after repeated failures. It also has a random
    simulation mode.
- `ovkino.display`: text layout for small OLED screens driven through a device object.
  - `ClimateDisplay` and `PowerDisplay` lay out the screens.
  - `format_celsius` formats a temperature, for example `" 5.0"`, `--.-` or `++.+`.
  - `format_ip` formats an address as `IP: a.b.c.d`.
- `ovkino.climate_ctrl`: `ClimateController` combines a heater controller, a fan controller and a
  cooling valve around one setpoint, configured from a `Config`.

## Example

```python
from ovkino.crc16 import Crc16
from ovkino.termargs import segment, arg_to_int

crc = Crc16(0x1021, False, False)
print(hex(crc.calculate(b"123456789", 0xFFFF)))   # 0x29b1

print(segment('set "hello world" 0x10', 8))       # ['set', 'hello world', '0x10']
print(arg_to_int("0x10"))                          # 16
```

## What it does not do

- The package installs no command-line program.
- It contains no drivers. It does not open serial ports, talk to I2C or one-wire devices,
  query NTP servers or draw pixels. Those jobs belong to the objects you hand to its classes.
- Configuration storage is limited to the single binary file used by `SysCfg`.