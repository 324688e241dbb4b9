import ipaddress
from unittest import mock

import pytest

from ovkino.display import ClimateDisplay, PowerDisplay, format_celsius, format_ip


class FakeDevice:
    def __init__(self, ready=True):
        self.ready = ready
        self.calls = []

    def begin(self):
        self.calls.append(("begin",))
        return self.ready

    def display(self):
        self.calls.append(("display",))

    def clear_display(self):
        self.calls.append(("clear",))

    def set_text_size(self, size):
        self.calls.append(("size", size))

    def set_cursor(self, x, y):
        self.calls.append(("cursor", x, y))

    def write(self, text):
        self.calls.append(("write", text))


@pytest.fixture(autouse=True)
def no_sleep():
    with mock.patch("ovkino.display.time.sleep") as sleep:
        yield sleep


@pytest.mark.parametrize("value", [-10.0, -50.0, float("-inf"), float("nan")])
def test_format_celsius_too_low(value):
    assert format_celsius(value) == "--.-"


@pytest.mark.parametrize("value", [100.0, 250.0, float("inf")])
def test_format_celsius_too_high(value):
    assert format_celsius(value) == "++.+"


def test_format_celsius_plain_value():
    assert format_celsius(25.5) == "25.5"


def test_format_celsius_leading_zero_blanked():
    assert format_celsius(0.0) == " 0.0"


@pytest.mark.parametrize("value", [0.0, 1.5, 9.9, 10.0, 42.3, 99.9])
def test_format_celsius_shape(value):
    text = format_celsius(value)
    assert len(text) == 4
    assert text[2] == "."
    assert not text.startswith("0")


def test_format_ip_from_address_object():
    assert format_ip(ipaddress.IPv4Address("192.168.0.100")) == "IP: 192.168.0.100"


def test_format_ip_integer_is_low_byte_first():
    address = ipaddress.IPv4Address("10.1.2.3")
    native = int.from_bytes(address.packed, "little")
    assert format_ip(native) == format_ip(address)


def test_format_ip_rejects_out_of_range():
    with pytest.raises(ValueError):
        format_ip(-1)
    with pytest.raises(ValueError):
        format_ip(1 << 32)


def test_climate_display_start_up_sequence(no_sleep):
    device = FakeDevice()
    screen = ClimateDisplay(device)
    assert screen.is_initialized is True
    assert device.calls == [("begin",), ("display",), ("clear",), ("display",)]
    assert no_sleep.call_args == mock.call(ClimateDisplay.splash_seconds)


def test_climate_display_set_point_and_temperature():
    device = FakeDevice()
    screen = ClimateDisplay(device)
    device.calls.clear()
    screen.draw_set_point(25.5)
    screen.draw_temperature(25.5)
    assert device.calls[:3] == [("size", 3), ("cursor", 0, 10), ("write", "25.5")]
    assert device.calls[3:5] == [("size", 3), ("cursor", 0, 34)]
    assert device.calls[5] == ("write", "25.5")


def test_climate_display_pwm_out_is_in_volts():
    device = FakeDevice()
    screen = ClimateDisplay(device)
    device.calls.clear()
    screen.draw_pwm_out(25500.0)
    assert device.calls == [("size", 1), ("cursor", 80, 34), ("write", format_celsius(25.5))]


def test_climate_display_ip_is_shown_immediately():
    device = FakeDevice()
    screen = ClimateDisplay(device)
    device.calls.clear()
    address = ipaddress.IPv4Address("192.168.0.100")
    screen.draw_ip(address)
    assert device.calls[-2] == ("write", format_ip(address))
    assert device.calls[-1] == ("display",)


def test_climate_display_status_on_line():
    device = FakeDevice()
    screen = ClimateDisplay(device)
    device.calls.clear()
    assert screen.draw_status(3, "RUN") is True
    assert device.calls == [("size", 2), ("cursor", 0, 24), ("write", "RUN"), ("display",)]


def test_climate_display_status_when_device_missing_retries():
    device = FakeDevice(ready=False)
    screen = ClimateDisplay(device)
    device.calls.clear()
    assert screen.draw_status(0, "RUN") is False
    assert ("begin",) in device.calls
    assert not any(call[0] == "write" for call in device.calls)


def test_update_frame_clears_and_shows():
    device = FakeDevice()
    screen = ClimateDisplay(device)
    device.calls.clear()
    screen.begin_update()
    screen.end_update()
    assert device.calls == [("clear",), ("display",)]


def test_power_display_layout():
    device = FakeDevice()
    screen = PowerDisplay(device)
    device.calls.clear()
    screen.draw_status("ok")
    screen.draw_instant_watt(1500)
    screen.draw_instant_watt_hour(42)
    screen.draw_time(3600)
    assert device.calls == [
        ("size", 1), ("cursor", 0, 0), ("write", "ok"),
        ("size", 4), ("cursor", 0, 8), ("write", "1500"),
        ("size", 3), ("cursor", 0, 40), ("write", "42"),
        ("size", 2), ("cursor", 90, 40), ("write", "3600"),
    ]


def test_power_display_time_must_be_unsigned():
    screen = PowerDisplay(FakeDevice())
    with pytest.raises(ValueError):
        screen.draw_time(-1)