#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/utils/clamp.py
--------------------------------------------
Saturating helpers used by the unit translator and the teleop steps.

Every bounded value in this package saturates; nothing wraps and nothing
raises on out-of-range input.
"""

from __future__ import annotations

from typing import TypeVar

from rover_control.constants import INT16_MAX, INT16_MIN, PWM_MAX_COUNT, PWM_MIN_COUNT

Number = TypeVar("Number", int, float)


def clamp(value: Number, lo: Number, hi: Number) -> Number:
    """
    Clamp `value` into the closed interval [lo, hi].

    If `lo > hi` the bounds are swapped, so callers can pass
    (open_pulse, closed_pulse) pairs in either order.
    """
    if lo > hi:
        lo, hi = hi, lo
    if value < lo:
        return lo
    if value > hi:
        return hi
    return value


def clamp_int(value: int, lo: int, hi: int) -> int:
    return int(clamp(int(value), int(lo), int(hi)))


def clamp_pwm_count(value: int) -> int:
    """Clamp a pulse into the 12-bit PCA9685 domain (0..4095)."""
    return clamp_int(value, PWM_MIN_COUNT, PWM_MAX_COUNT)


def saturate_int16(value: int) -> int:
    """Clamp a semantic value into the Int16 wire range of the manual topics."""
    return clamp_int(value, INT16_MIN, INT16_MAX)


def step_toward(current: int, target: int, max_step: int) -> int:
    """
    Return the signed delta that moves `current` toward `target` by at most
    `max_step` (never past the target).

    >>> step_toward(0, 10, 2)
    2
    >>> step_toward(-39, -40, 2)
    -1
    """
    limit = abs(int(max_step))
    return clamp_int(int(target) - int(current), -limit, limit)


__all__ = [
    "clamp",
    "clamp_int",
    "clamp_pwm_count",
    "saturate_int16",
    "step_toward",
]
