#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/kinematics/pulse_scaling.py
---------------------------------------------------------
Unit translator: semantic actuator value -> 12-bit PWM pulse.

Design notes
- Math only (no ROS imports, no hardware imports).
- Out-of-range input saturates silently. Over-steering and over-driving are
  normal operator behavior, not errors.
- Arithmetic is exact (Python ints / `fractions.Fraction`). Large angles
  cannot overflow and calibration end points are hit exactly.
- Rounding matches the microcontroller firmware this replaces: the angle
  offset truncates toward zero, claw and drive pulses are floored.
"""

from __future__ import annotations

import math
from fractions import Fraction
from typing import Union

from rover_control import constants as C
from rover_control.models.actuator import (
    ActuatorChannel,
    ActuatorKind,
    CalibrationTable,
    ClawCalibration,
    DriveCalibration,
    MastCalibration,
    ServoCalibration,
    channel_spec,
)
from rover_control.utils.clamp import clamp_int

Number = Union[int, float]

FULL_TURN_DEG = 360


# =============================================================================
# Per-kind translators
# =============================================================================
def angle_pulse(angle: Number, calibration: ServoCalibration) -> int:
    """
    Servo angle (degrees) -> pulse.

    pulse = neutral + (angle * full_turn_pulse_span) / 360, clamped to
    [min_pulse, max_pulse].

    >>> angle_pulse(0, ServoCalibration(315, 126, 504, 216))
    315
    >>> angle_pulse(10, ServoCalibration(315, 126, 504, 216))
    321
    """
    offset = int(Fraction(angle) * calibration.full_turn_pulse_span / FULL_TURN_DEG)
    return clamp_int(calibration.neutral_pulse + offset, calibration.min_pulse, calibration.max_pulse)


def claw_pulse(
    percent: Number,
    open_pulse: int,
    closed_pulse: int,
    scale: Number = C.GRIPPER_CLAW_SCALE,
) -> int:
    """
    Claw percent -> pulse. 0 is fully open, `scale` is fully closed.

    The result saturates into the band between the open and closed pulses.
    """
    if scale <= 0:
        raise ValueError(f"claw scale must be > 0, got {scale}")
    raw = Fraction(open_pulse) + Fraction(percent) / Fraction(scale) * (int(closed_pulse) - int(open_pulse))
    return clamp_int(math.floor(raw), open_pulse, closed_pulse)


def drive_speed_pulse(
    speed: Number,
    neutral: int,
    max_forward: int,
    max_reverse: int,
    speed_scale: Number = C.DRIVE_SPEED_SCALE,
) -> int:
    """
    Signed drive speed -> pulse.

    Piecewise linear around `neutral`: +speed_scale maps to `max_forward`,
    -speed_scale to `max_reverse`, and only speed 0 yields `neutral`
    exactly. Speeds beyond +-speed_scale saturate.
    """
    if speed_scale <= 0:
        raise ValueError(f"speed_scale must be > 0, got {speed_scale}")
    s = Fraction(speed)
    if s == 0:
        return int(neutral)

    limit = Fraction(speed_scale)
    if s > limit:
        s = limit
    elif s < -limit:
        s = -limit

    if s > 0:
        raw = neutral + s / limit * (int(max_forward) - int(neutral))
    else:
        raw = neutral + s / limit * (int(neutral) - int(max_reverse))
    return clamp_int(math.floor(raw), max_reverse, max_forward)


def mast_pulse(speed: Number, calibration: MastCalibration) -> int:
    """Mast speed offset -> pulse, clamped to the calibrated band."""
    return clamp_int(calibration.immobile_pulse + int(speed), calibration.min_pulse, calibration.max_pulse)


# =============================================================================
# Dispatch
# =============================================================================
def channel_pulse(channel: ActuatorChannel, value: Number, table: CalibrationTable) -> int:
    """Translate a semantic value for `channel` using its calibration."""
    kind = channel_spec(channel).kind
    cal = table.for_channel(channel)

    if kind is ActuatorKind.SERVO_ANGLE:
        assert isinstance(cal, ServoCalibration)
        return angle_pulse(value, cal)
    if kind is ActuatorKind.CLAW_PERCENT:
        assert isinstance(cal, ClawCalibration)
        return claw_pulse(value, cal.open_pulse, cal.closed_pulse, cal.scale)
    if kind is ActuatorKind.DRIVE_SPEED:
        assert isinstance(cal, DriveCalibration)
        return drive_speed_pulse(
            value, cal.neutral_pulse, cal.max_forward_pulse, cal.max_reverse_pulse, cal.speed_scale
        )
    assert isinstance(cal, MastCalibration)
    return mast_pulse(value, cal)


def pulse_to_duty_percent(pulse: int, resolution: int = C.PWM_RESOLUTION) -> float:
    """12-bit pulse count -> duty cycle percent (diagnostics only)."""
    return 100.0 * clamp_int(pulse, 0, resolution) / float(resolution)


__all__ = [
    "FULL_TURN_DEG",
    "angle_pulse",
    "claw_pulse",
    "drive_speed_pulse",
    "mast_pulse",
    "channel_pulse",
    "pulse_to_duty_percent",
]
