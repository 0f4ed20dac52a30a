#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/drivers/pca9685_pwm_board.py
----------------------------------------------------------
Command sink that writes the 15-element hardware pulse array straight to a
PCA9685, channel i <- array[i] by default.

Used when the translator runs on the rover computer with the servo board on
its I2C bus instead of forwarding `/arduino_cmd` to the microcontroller.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from rover_control.drivers.pca9685_driver import PCA9685Driver
from rover_control.exceptions import ErrorContext, PwmBoardError
from rover_control.models.actuator import HARDWARE_ARRAY_LENGTH


DEFAULT_CHANNEL_MAP: Tuple[int, ...] = tuple(range(HARDWARE_ARRAY_LENGTH))


class Pca9685PwmBoard:
    name = "pca9685"

    def __init__(
        self,
        driver: PCA9685Driver,
        *,
        channel_map: Sequence[int] = DEFAULT_CHANNEL_MAP,
    ) -> None:
        if len(channel_map) != HARDWARE_ARRAY_LENGTH:
            raise PwmBoardError(
                "channel_map must cover every hardware array index",
                context=ErrorContext(
                    sink=self.name, expected=HARDWARE_ARRAY_LENGTH, received=len(channel_map)
                ),
            )
        if len(set(channel_map)) != len(channel_map):
            raise PwmBoardError("channel_map has duplicate PCA9685 channels", context=ErrorContext(sink=self.name))
        self._driver = driver
        self._channel_map = tuple(int(c) for c in channel_map)
        self._last: Optional[Tuple[int, ...]] = None
        self.write_count = 0

    @property
    def channel_map(self) -> Tuple[int, ...]:
        return self._channel_map

    @property
    def last_values(self) -> Optional[Tuple[int, ...]]:
        return self._last

    def emit(self, values: Sequence[int]) -> None:
        if len(values) != HARDWARE_ARRAY_LENGTH:
            raise PwmBoardError(
                "hardware array has wrong length",
                context=ErrorContext(sink=self.name, expected=HARDWARE_ARRAY_LENGTH, received=len(values)),
            )
        for index, pulse in enumerate(values):
            self._driver.set_channel_pulse(self._channel_map[index], int(pulse))
        self._last = tuple(int(v) for v in values)
        self.write_count += 1

    def close(self) -> None:
        self._driver.close()


__all__ = ["DEFAULT_CHANNEL_MAP", "Pca9685PwmBoard"]
