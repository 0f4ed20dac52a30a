# -*- coding: utf-8 -*-
"""
RoboOps Rover — rover_control/models/__init__.py
------------------------------------------------
Actuator channel table, calibration records and the state store.
"""

from __future__ import annotations

from .actuator import (
    ARM_JOINTS,
    CHANNEL_SPECS,
    GROUP_CHANNELS,
    GROUP_MIN_LENGTH,
    HARDWARE_ARRAY_LENGTH,
    HARDWARE_ORDER,
    ActuatorChannel,
    ActuatorKind,
    CalibrationTable,
    ChannelGroup,
    ChannelSpec,
    ClawCalibration,
    DriveCalibration,
    MastCalibration,
    ServoCalibration,
    channel_spec,
    default_calibration_table,
    group_of,
)
from .actuator_state import ActuatorStateStore, ControlLoopState

__all__ = [
    "ARM_JOINTS",
    "CHANNEL_SPECS",
    "GROUP_CHANNELS",
    "GROUP_MIN_LENGTH",
    "HARDWARE_ARRAY_LENGTH",
    "HARDWARE_ORDER",
    "ActuatorChannel",
    "ActuatorKind",
    "CalibrationTable",
    "ChannelGroup",
    "ChannelSpec",
    "ClawCalibration",
    "DriveCalibration",
    "MastCalibration",
    "ServoCalibration",
    "channel_spec",
    "default_calibration_table",
    "group_of",
    "ActuatorStateStore",
    "ControlLoopState",
]
