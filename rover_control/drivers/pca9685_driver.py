#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/drivers/pca9685_driver.py
-------------------------------------------------------
Low-level PCA9685 I2C PWM driver.

Purpose
- Register-level access to a PCA9685 16-channel PWM controller
- Used by `Pca9685PwmBoard` when the translator drives the servos and motor
  controllers directly, without the microcontroller in between

Notes
- Pulse values are 12-bit counts (0..4095). Channel outputs use ON=0,
  OFF=pulse.
- Every I2C failure surfaces as `PwmBoardError` (a `TransportError`), so
  the command publisher treats it like any other failed hand-off.

Dependencies
- smbus2
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from smbus2 import SMBus

from rover_control import constants as C
from rover_control.exceptions import ErrorContext, PwmBoardError


@dataclass(frozen=True)
class PCA9685Config:
    bus: int = C.I2C_BUS_DEFAULT
    address: int = C.PCA9685_ADDR_DEFAULT
    pwm_freq_hz: float = C.PWM_FREQUENCY_HZ
    init_reset: bool = True


class PCA9685Driver:
    """
    Typical usage:
        pwm = PCA9685Driver(bus=1, address=0x40)
        pwm.set_pwm_freq(50.0)
        pwm.set_channel_pulse(0, 315)
        pwm.close()
    """

    _MODE1 = 0x00
    _PRESCALE = 0xFE
    _LED0_ON_L = 0x06
    _ALLLED_ON_L = 0xFA

    _OSC_HZ = 25_000_000.0
    _PWM_STEPS = 4096
    _CH_MIN = 0
    _CH_MAX = 15
    _PRESCALE_MIN = 3
    _PRESCALE_MAX = 255

    def __init__(
        self,
        bus: int = C.I2C_BUS_DEFAULT,
        address: int = C.PCA9685_ADDR_DEFAULT,
        *,
        init_reset: bool = True,
        bus_factory: Callable[[int], Any] = SMBus,
    ) -> None:
        if int(bus) < 0:
            raise PwmBoardError(f"Invalid I2C bus: {bus}", context=ErrorContext(sink="pca9685"))
        addr_i = int(address)
        if not (0x03 <= addr_i <= 0x77):
            raise PwmBoardError(f"Invalid I2C address: 0x{addr_i:02X}", context=ErrorContext(sink="pca9685"))

        self.busno = int(bus)
        self.address = addr_i
        self._closed = False
        self._current_pwm_freq_hz: Optional[float] = None

        try:
            self.bus = bus_factory(self.busno)
        except Exception as e:
            raise PwmBoardError(
                f"Failed to open I2C bus {self.busno} for PCA9685 @ 0x{self.address:02X}",
                context=ErrorContext(sink="pca9685", operation="open"),
                cause=e,
            ) from e

        if init_reset:
            self.write(self._MODE1, 0x00)

    # -------------------------------------------------------------------------
    # Raw register access
    # -------------------------------------------------------------------------
    def _ensure_open(self) -> None:
        if self._closed:
            raise PwmBoardError("PCA9685Driver is closed", context=ErrorContext(sink="pca9685"))

    def write(self, reg: int, value: int) -> None:
        self._ensure_open()
        reg_i = int(reg)
        val_i = int(value) & 0xFF
        try:
            self.bus.write_byte_data(self.address, reg_i, val_i)
        except Exception as e:
            raise PwmBoardError(
                f"I2C write failed @0x{self.address:02X} reg=0x{reg_i:02X} val=0x{val_i:02X}",
                context=ErrorContext(sink="pca9685", operation="write"),
                cause=e,
            ) from e

    def read(self, reg: int) -> int:
        self._ensure_open()
        reg_i = int(reg)
        try:
            return int(self.bus.read_byte_data(self.address, reg_i))
        except Exception as e:
            raise PwmBoardError(
                f"I2C read failed @0x{self.address:02X} reg=0x{reg_i:02X}",
                context=ErrorContext(sink="pca9685", operation="read"),
                cause=e,
            ) from e

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------
    def set_pwm_freq(self, freq_hz: float, *, sleeper: Callable[[float], None] = time.sleep) -> int:
        """
        Set the PWM frequency. Returns the prescale value written.

        prescale = round(osc / (4096 * freq)) - 1, clamped to 3..255.
        """
        self._ensure_open()
        if float(freq_hz) <= 0.0:
            raise PwmBoardError(f"Invalid pwm frequency: {freq_hz}", context=ErrorContext(sink="pca9685"))

        prescale = int(math.floor(self._OSC_HZ / (self._PWM_STEPS * float(freq_hz)) - 1.0 + 0.5))
        prescale = max(self._PRESCALE_MIN, min(self._PRESCALE_MAX, prescale))

        old_mode = self.read(self._MODE1)
        sleep_mode = (old_mode & 0x7F) | 0x10

        # sleep -> prescale -> wake -> restart
        self.write(self._MODE1, sleep_mode)
        self.write(self._PRESCALE, prescale)
        self.write(self._MODE1, old_mode)
        sleeper(0.005)
        self.write(self._MODE1, old_mode | 0x80)

        self._current_pwm_freq_hz = float(freq_hz)
        return prescale

    @property
    def current_pwm_freq_hz(self) -> Optional[float]:
        return self._current_pwm_freq_hz

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------
    def set_pwm(self, channel: int, on: int, off: int) -> None:
        self._ensure_open()
        ch = int(channel)
        if not (self._CH_MIN <= ch <= self._CH_MAX):
            raise PwmBoardError(
                f"Invalid channel {channel}; expected {self._CH_MIN}..{self._CH_MAX}",
                context=ErrorContext(sink="pca9685", channel=ch),
            )
        for name, v in (("on", on), ("off", off)):
            if not (C.PWM_MIN_COUNT <= int(v) <= C.PWM_MAX_COUNT):
                raise PwmBoardError(
                    f"Invalid {name} count {v}",
                    context=ErrorContext(sink="pca9685", channel=ch, value=int(v)),
                )

        base = self._LED0_ON_L + 4 * ch
        self.write(base + 0, int(on) & 0xFF)
        self.write(base + 1, (int(on) >> 8) & 0x0F)
        self.write(base + 2, int(off) & 0xFF)
        self.write(base + 3, (int(off) >> 8) & 0x0F)

    def set_channel_pulse(self, channel: int, pulse: int) -> None:
        """ON=0, OFF=pulse (clamped to 0..4095)."""
        p = max(C.PWM_MIN_COUNT, min(C.PWM_MAX_COUNT, int(pulse)))
        self.set_pwm(channel, 0, p)

    def set_all_pwm(self, on: int, off: int) -> None:
        self._ensure_open()
        self.write(self._ALLLED_ON_L + 0, int(on) & 0xFF)
        self.write(self._ALLLED_ON_L + 1, (int(on) >> 8) & 0x0F)
        self.write(self._ALLLED_ON_L + 2, int(off) & 0xFF)
        self.write(self._ALLLED_ON_L + 3, (int(off) >> 8) & 0x0F)

    def ping(self) -> bool:
        try:
            self.read(self._MODE1)
            return True
        except PwmBoardError:
            return False

    # -------------------------------------------------------------------------
    # Teardown
    # -------------------------------------------------------------------------
    def close(self) -> None:
        """Close the I2C handle. Safe to call multiple times."""
        if self._closed:
            return
        try:
            self.bus.close()
        except Exception as e:
            raise PwmBoardError(
                f"Failed to close I2C bus {self.busno}",
                context=ErrorContext(sink="pca9685", operation="close"),
                cause=e,
            ) from e
        finally:
            self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "PCA9685Driver":
        self._ensure_open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def create_from_config(cfg: PCA9685Config, **kwargs: Any) -> PCA9685Driver:
    """Open the driver and apply the configured PWM frequency."""
    driver = PCA9685Driver(bus=cfg.bus, address=cfg.address, init_reset=cfg.init_reset, **kwargs)
    driver.set_pwm_freq(cfg.pwm_freq_hz)
    return driver


__all__ = ["PCA9685Config", "PCA9685Driver", "create_from_config"]
