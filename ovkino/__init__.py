"""Building blocks for small controllers: checksums, half floats, a command terminal, control loops, LED fading, clock, sensor and display helpers."""

__version__ = "0.1.0"