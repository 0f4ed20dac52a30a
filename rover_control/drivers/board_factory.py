#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/drivers/board_factory.py
------------------------------------------------------
Build the optional hardware sink of the translator stage from a backend name.

Backends
- "topic"   : no extra sink; the translator only publishes `/arduino_cmd`
- "dryrun"  : `DryRunPwmBoard`
- "pca9685" : `Pca9685PwmBoard` on a freshly opened `PCA9685Driver`

Design notes
- No ROS imports
- The PCA9685 modules are imported lazily so "topic" and "dryrun" work on
  machines without smbus2 installed
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from rover_control import constants as C
from rover_control.drivers.dryrun_pwm_board import DryRunPwmBoard
from rover_control.exceptions import ErrorContext, RoverControlError
from rover_control.utils.logging import LoggerAdapter


BACKEND_TOPIC = "topic"
BACKEND_DRYRUN = "dryrun"
BACKEND_PCA9685 = "pca9685"

SUPPORTED_BACKENDS: Tuple[str, ...] = (BACKEND_TOPIC, BACKEND_DRYRUN, BACKEND_PCA9685)


class BoardConfigError(RoverControlError):
    """Unknown backend or invalid I2C settings."""


@dataclass(frozen=True)
class PwmSinkConfig:
    backend: str = C.OUTPUT_BACKEND_DEFAULT
    i2c_bus: int = C.I2C_BUS_DEFAULT
    address: int = C.PCA9685_ADDR_DEFAULT
    pwm_freq_hz: float = C.PWM_FREQUENCY_HZ


def normalize_backend(backend: str) -> str:
    b = str(backend).strip().lower()
    aliases = {
        "": BACKEND_TOPIC,
        "ros": BACKEND_TOPIC,
        "arduino": BACKEND_TOPIC,
        "dry": BACKEND_DRYRUN,
        "dry_run": BACKEND_DRYRUN,
        "sim": BACKEND_DRYRUN,
        "pca": BACKEND_PCA9685,
    }
    b = aliases.get(b, b)
    if b not in SUPPORTED_BACKENDS:
        raise BoardConfigError(
            f"Unsupported output backend {backend!r}; expected one of {SUPPORTED_BACKENDS}",
            context=ErrorContext(operation="make_pwm_sink", value=str(backend)),
        )
    return b


def parse_i2c_address(value: Any) -> int:
    """Accept 64, '64' or '0x40'."""
    try:
        a = int(value.strip(), 0) if isinstance(value, str) else int(value)
    except (TypeError, ValueError) as e:
        raise BoardConfigError(f"Invalid I2C address {value!r}") from e
    if not (0x03 <= a <= 0x77):
        raise BoardConfigError(f"I2C address out of 7-bit range (0x03..0x77): 0x{a:02X}")
    return a


def make_pwm_sink(cfg: PwmSinkConfig, *, logger: Optional[LoggerAdapter] = None, **driver_kwargs: Any):
    """
    Return the sink for `cfg.backend`, or None for the topic-only backend.

    `driver_kwargs` are forwarded to `PCA9685Driver` (tests inject
    `bus_factory`).
    """
    backend = normalize_backend(cfg.backend)
    if backend == BACKEND_TOPIC:
        return None
    if backend == BACKEND_DRYRUN:
        return DryRunPwmBoard(logger=logger)

    from rover_control.drivers.pca9685_driver import PCA9685Config, create_from_config
    from rover_control.drivers.pca9685_pwm_board import Pca9685PwmBoard

    if int(cfg.i2c_bus) < 0:
        raise BoardConfigError(f"i2c_bus must be >= 0, got {cfg.i2c_bus}")
    if float(cfg.pwm_freq_hz) <= 0.0:
        raise BoardConfigError(f"pwm_freq_hz must be > 0, got {cfg.pwm_freq_hz}")

    driver = create_from_config(
        PCA9685Config(
            bus=int(cfg.i2c_bus),
            address=parse_i2c_address(cfg.address),
            pwm_freq_hz=float(cfg.pwm_freq_hz),
        ),
        **driver_kwargs,
    )
    if logger is not None:
        logger.info(
            f"[board_factory] PCA9685 ready bus={cfg.i2c_bus} addr=0x{driver.address:02X} "
            f"freq={cfg.pwm_freq_hz:.1f}Hz"
        )
    return Pca9685PwmBoard(driver)


__all__ = [
    "BACKEND_TOPIC",
    "BACKEND_DRYRUN",
    "BACKEND_PCA9685",
    "SUPPORTED_BACKENDS",
    "BoardConfigError",
    "PwmSinkConfig",
    "normalize_backend",
    "parse_i2c_address",
    "make_pwm_sink",
]
