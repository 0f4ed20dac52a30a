# -*- coding: utf-8 -*-
"""
RoboOps Rover — rover_control/kinematics/__init__.py
----------------------------------------------------
Unit translation and mounting sign conventions.
"""

from __future__ import annotations

from .conventions import ROVER_MOUNT_SIGNS, MountSignConvention, apply_mount_sign
from .pulse_scaling import (
    angle_pulse,
    channel_pulse,
    claw_pulse,
    drive_speed_pulse,
    mast_pulse,
    pulse_to_duty_percent,
)

__all__ = [
    "ROVER_MOUNT_SIGNS",
    "MountSignConvention",
    "apply_mount_sign",
    "angle_pulse",
    "channel_pulse",
    "claw_pulse",
    "drive_speed_pulse",
    "mast_pulse",
    "pulse_to_duty_percent",
]
