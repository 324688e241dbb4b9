[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ovkino"
version = "0.1.0"
description = "Building blocks for small controllers: CRC-16, half floats, a line terminal, linear PWM controllers, LED fading, clock helpers, sensor wrappers and display formatting"
requires-python = ">=3.10"
dependencies = []
keywords = ["embedded", "crc16", "float16", "pwm", "thermostat", "terminal", "controller", "rtc"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ovkino"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
