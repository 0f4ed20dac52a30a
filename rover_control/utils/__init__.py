# -*- coding: utf-8 -*-
"""
RoboOps Rover — rover_control/utils/__init__.py
-----------------------------------------------
Utility exports for `rover_control`.

Example
-------
    from rover_control.utils import clamp, get_logger_adapter, RateKeeper
"""

from __future__ import annotations

from .clamp import clamp, clamp_int, clamp_pwm_count, saturate_int16, step_toward
from .logging import (
    LoggerAdapter,
    RateLimitedLogger,
    format_kv,
    get_logger_adapter,
    log_exception,
)
from .ratekeeper import RateKeeper, RateStats

__all__ = [
    "clamp",
    "clamp_int",
    "clamp_pwm_count",
    "saturate_int16",
    "step_toward",
    "LoggerAdapter",
    "RateLimitedLogger",
    "format_kv",
    "get_logger_adapter",
    "log_exception",
    "RateKeeper",
    "RateStats",
]
