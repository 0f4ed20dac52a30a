# -*- coding: utf-8 -*-
"""
RoboOps Rover — rover_control/drivers/__init__.py
-------------------------------------------------
Hardware output sinks for the translator stage.

The PCA9685 modules are not imported here; they need smbus2 and are loaded
by `make_pwm_sink()` only when that backend is requested.
"""

from __future__ import annotations

from .board_factory import (
    BACKEND_DRYRUN,
    BACKEND_PCA9685,
    BACKEND_TOPIC,
    SUPPORTED_BACKENDS,
    BoardConfigError,
    PwmSinkConfig,
    make_pwm_sink,
)
from .dryrun_pwm_board import DryRunPwmBoard, DryRunPwmRecord

__all__ = [
    "BACKEND_DRYRUN",
    "BACKEND_PCA9685",
    "BACKEND_TOPIC",
    "SUPPORTED_BACKENDS",
    "BoardConfigError",
    "PwmSinkConfig",
    "make_pwm_sink",
    "DryRunPwmBoard",
    "DryRunPwmRecord",
]
