# -*- coding: utf-8 -*-

import logging

import pytest

from rover_control.exceptions import ErrorContext, MalformedCommandError, RoverControlError
from rover_control.utils.clamp import clamp, clamp_pwm_count, saturate_int16, step_toward
from rover_control.utils.logging import (
    LoggerAdapter,
    RateLimitedLogger,
    format_kv,
    get_logger_adapter,
    log_exception,
)
from rover_control.utils.ratekeeper import RateKeeper


class FakeClock:
    def __init__(self):
        self.t = 0.0

    def now(self):
        return self.t

    def sleep(self, dt):
        self.t += dt


class ListLogger:
    def __init__(self):
        self.lines = []

    def info(self, msg):
        self.lines.append(("info", msg))

    def warn(self, msg):
        self.lines.append(("warn", msg))

    def error(self, msg):
        self.lines.append(("error", msg))

    def debug(self, msg):
        self.lines.append(("debug", msg))


def test_clamp_helpers():
    assert clamp(5, 0, 3) == 3
    assert clamp(5, 10, 0) == 5
    assert clamp(-1, 355, 276) == 276
    assert clamp_pwm_count(5000) == 4095
    assert saturate_int16(-70000) == -32768
    assert step_toward(0, 10, 2) == 2
    assert step_toward(-39, -40, 2) == -1


def test_adapter_wraps_stdlib_and_ros_style_loggers():
    std = get_logger_adapter(name="rover_control.test")
    assert std.is_std_logger
    assert isinstance(std.target, logging.Logger)

    raw = ListLogger()
    ros_style = LoggerAdapter(target=raw)
    ros_style.warn("x")
    assert raw.lines == [("warn", "x")]
    assert get_logger_adapter(ros_style) is ros_style


def test_rate_limited_logger_per_key():
    clock = FakeClock()
    raw = ListLogger()
    limited = RateLimitedLogger(LoggerAdapter(target=raw), period_s=1.0, clock=clock.now)

    assert limited.warn("a", "first") is True
    assert limited.warn("a", "again") is False
    assert limited.warn("b", "other key") is True
    clock.t = 1.5
    assert limited.warn("a", "later") is True
    assert raw.lines[-1] == ("warn", "later (+1 suppressed)")


def test_log_exception_and_format_kv():
    raw = ListLogger()
    log_exception(LoggerAdapter(target=raw), ValueError("bad"), message="tick failed", component="op")
    assert raw.lines == [("error", "[op] tick failed | ValueError: bad")]
    assert format_kv(group="arm", expected=4) == "group=arm expected=4"


def test_error_context_in_message():
    err = MalformedCommandError("too short", context=ErrorContext(group="steer", expected=3, received=2))
    assert str(err) == "too short [group=steer, expected=3, received=2]"
    assert err.to_dict()["context"]["received"] == 2
    assert isinstance(err, RoverControlError)


def test_ratekeeper_sleeps_remaining_period():
    clock = FakeClock()
    rk = RateKeeper(10.0, clock=clock.now, sleeper=clock.sleep)
    assert rk.sleep() == pytest.approx(0.1)
    clock.t += 0.03
    assert rk.sleep() == pytest.approx(0.07)
    assert rk.stats().cycles == 2
    assert rk.stats().overrun_count == 0


def test_ratekeeper_overrun_restarts_schedule():
    clock = FakeClock()
    rk = RateKeeper(10.0, clock=clock.now, sleeper=clock.sleep)
    clock.t += 0.5
    assert rk.sleep() == 0.0
    stats = rk.stats()
    assert stats.overrun_count == 1
    assert stats.total_overrun_s == pytest.approx(0.4)
    assert rk.sleep() == pytest.approx(0.1)


def test_ratekeeper_rejects_bad_rate():
    with pytest.raises(ValueError):
        RateKeeper(0.0)


def test_package_info_without_ros():
    import rover_control
    from rover_control.version import get_package_version_info

    info = rover_control.get_package_info()
    assert info["version"] == rover_control.__version__
    assert info["topics"]["hardware"] == "/arduino_cmd"
    banner = get_package_version_info().banner()
    assert "manual_keyboard_control@20Hz" in banner
    assert "arduino_command_translator@60Hz" in banner
