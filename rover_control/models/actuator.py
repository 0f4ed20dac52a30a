#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/models/actuator.py
------------------------------------------------
Actuator channel table and immutable PWM calibration records.

Channel reference
-----------------
+---------+-----------------------+--------------+---------------+
| Group   | Channel               | Manual index | Hardware index|
+=========+=======================+==============+===============+
| arm     | ARM_BASE              | 0            | 0             |
|         | ARM_SHOULDER          | 1            | 1             |
|         | ARM_ELBOW             | 2            | 2             |
|         | ARM_WRIST             | 3            | 3             |
|         | GRIPPER_ROTATE        | 4            | 12            |
|         | GRIPPER_CLAW          | 5            | 13            |
+---------+-----------------------+--------------+---------------+
| steer   | STEER_REAR            | 0            | 4             |
|         | STEER_FRONT_RIGHT     | 1            | 5             |
|         | STEER_FRONT_LEFT      | 2            | 6             |
+---------+-----------------------+--------------+---------------+
| drive   | DRIVE_REAR            | 0            | 7             |
|         | DRIVE_SIDE_RIGHT      | 1            | 8             |
|         | DRIVE_SIDE_LEFT       | 2            | 9             |
|         | DRIVE_FRONT_RIGHT     | 3            | 10            |
|         | DRIVE_FRONT_LEFT      | 4            | 11            |
+---------+-----------------------+--------------+---------------+
| mast    | MAST                  | 0            | 14            |
+---------+-----------------------+--------------+---------------+

"Manual index" is the position inside the group's semantic command array
(`/arm_cmd_manual`, ...). "Hardware index" is the position inside the
15-element pulse array sent to the microcontroller (`/arduino_cmd`).

Calibration records are frozen dataclasses validated on construction. They
are built once at startup (code defaults or ROS parameters) and never
mutated afterwards.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Dict, Tuple, Union

from rover_control import constants as C
from rover_control.exceptions import CalibrationError, ErrorContext


# =============================================================================
# Enums
# =============================================================================
class ChannelGroup(str, Enum):
    """Publishing groups. Each owns one dirty flag and one command array."""
    ARM = "arm"
    STEER = "steer"
    DRIVE = "drive"
    MAST = "mast"


class ActuatorKind(str, Enum):
    """How a channel's semantic value becomes a pulse."""
    SERVO_ANGLE = "servo_angle"      # degrees
    CLAW_PERCENT = "claw_percent"    # 0 = open, 100 = closed
    DRIVE_SPEED = "drive_speed"      # signed units, +-2000 = full speed
    MAST_SPEED = "mast_speed"        # signed offset from the immobile pulse


class ActuatorChannel(str, Enum):
    ARM_BASE = "arm_base"
    ARM_SHOULDER = "arm_shoulder"
    ARM_ELBOW = "arm_elbow"
    ARM_WRIST = "arm_wrist"
    GRIPPER_ROTATE = "gripper_rotate"
    GRIPPER_CLAW = "gripper_claw"
    STEER_REAR = "steer_rear"
    STEER_FRONT_RIGHT = "steer_front_right"
    STEER_FRONT_LEFT = "steer_front_left"
    DRIVE_REAR = "drive_rear"
    DRIVE_SIDE_RIGHT = "drive_side_right"
    DRIVE_SIDE_LEFT = "drive_side_left"
    DRIVE_FRONT_RIGHT = "drive_front_right"
    DRIVE_FRONT_LEFT = "drive_front_left"
    MAST = "mast"


# =============================================================================
# Channel table
# =============================================================================
@dataclass(frozen=True)
class ChannelSpec:
    channel: ActuatorChannel
    group: ChannelGroup
    kind: ActuatorKind
    calibration_key: str
    manual_index: int
    hardware_index: int


_SPECS: Tuple[ChannelSpec, ...] = (
    ChannelSpec(ActuatorChannel.ARM_BASE, ChannelGroup.ARM, ActuatorKind.SERVO_ANGLE, "arm", 0, 0),
    ChannelSpec(ActuatorChannel.ARM_SHOULDER, ChannelGroup.ARM, ActuatorKind.SERVO_ANGLE, "arm", 1, 1),
    ChannelSpec(ActuatorChannel.ARM_ELBOW, ChannelGroup.ARM, ActuatorKind.SERVO_ANGLE, "arm", 2, 2),
    ChannelSpec(ActuatorChannel.ARM_WRIST, ChannelGroup.ARM, ActuatorKind.SERVO_ANGLE, "arm", 3, 3),
    ChannelSpec(ActuatorChannel.GRIPPER_ROTATE, ChannelGroup.ARM, ActuatorKind.SERVO_ANGLE, "gripper_rotate", 4, 12),
    ChannelSpec(ActuatorChannel.GRIPPER_CLAW, ChannelGroup.ARM, ActuatorKind.CLAW_PERCENT, "claw", 5, 13),
    ChannelSpec(ActuatorChannel.STEER_REAR, ChannelGroup.STEER, ActuatorKind.SERVO_ANGLE, "steer", 0, 4),
    ChannelSpec(ActuatorChannel.STEER_FRONT_RIGHT, ChannelGroup.STEER, ActuatorKind.SERVO_ANGLE, "steer", 1, 5),
    ChannelSpec(ActuatorChannel.STEER_FRONT_LEFT, ChannelGroup.STEER, ActuatorKind.SERVO_ANGLE, "steer", 2, 6),
    ChannelSpec(ActuatorChannel.DRIVE_REAR, ChannelGroup.DRIVE, ActuatorKind.DRIVE_SPEED, "drive", 0, 7),
    ChannelSpec(ActuatorChannel.DRIVE_SIDE_RIGHT, ChannelGroup.DRIVE, ActuatorKind.DRIVE_SPEED, "drive", 1, 8),
    ChannelSpec(ActuatorChannel.DRIVE_SIDE_LEFT, ChannelGroup.DRIVE, ActuatorKind.DRIVE_SPEED, "drive", 2, 9),
    ChannelSpec(ActuatorChannel.DRIVE_FRONT_RIGHT, ChannelGroup.DRIVE, ActuatorKind.DRIVE_SPEED, "drive", 3, 10),
    ChannelSpec(ActuatorChannel.DRIVE_FRONT_LEFT, ChannelGroup.DRIVE, ActuatorKind.DRIVE_SPEED, "drive", 4, 11),
    ChannelSpec(ActuatorChannel.MAST, ChannelGroup.MAST, ActuatorKind.MAST_SPEED, "mast", 0, 14),
)

CHANNEL_SPECS: Dict[ActuatorChannel, ChannelSpec] = {s.channel: s for s in _SPECS}

GROUP_CHANNELS: Dict[ChannelGroup, Tuple[ActuatorChannel, ...]] = {
    group: tuple(
        s.channel for s in sorted((s for s in _SPECS if s.group is group), key=lambda s: s.manual_index)
    )
    for group in ChannelGroup
}

# Position i of the hardware pulse array is driven by HARDWARE_ORDER[i]
HARDWARE_ORDER: Tuple[ActuatorChannel, ...] = tuple(
    s.channel for s in sorted(_SPECS, key=lambda s: s.hardware_index)
)
HARDWARE_ARRAY_LENGTH = len(HARDWARE_ORDER)

ARM_JOINTS: Tuple[ActuatorChannel, ...] = (
    ActuatorChannel.ARM_BASE,
    ActuatorChannel.ARM_SHOULDER,
    ActuatorChannel.ARM_ELBOW,
    ActuatorChannel.ARM_WRIST,
)

# Shortest array accepted on each manual topic. Arm arrays of 4 come from
# older operator stations that do not drive the gripper.
GROUP_MIN_LENGTH: Dict[ChannelGroup, int] = {
    ChannelGroup.ARM: len(ARM_JOINTS),
    ChannelGroup.STEER: len(GROUP_CHANNELS[ChannelGroup.STEER]),
    ChannelGroup.DRIVE: len(GROUP_CHANNELS[ChannelGroup.DRIVE]),
    ChannelGroup.MAST: 1,
}


def channel_spec(channel: ActuatorChannel) -> ChannelSpec:
    return CHANNEL_SPECS[ActuatorChannel(channel)]


def group_of(channel: ActuatorChannel) -> ChannelGroup:
    return channel_spec(channel).group


# =============================================================================
# Calibration records
# =============================================================================
def _check_pulse(name: str, value: int) -> int:
    v = int(value)
    if not (C.PWM_MIN_COUNT <= v <= C.PWM_MAX_COUNT):
        raise CalibrationError(
            f"{name} outside 12-bit PWM range",
            context=ErrorContext(operation="calibration", value=v),
        )
    return v


@dataclass(frozen=True)
class ServoCalibration:
    """Positional servo: pulse = neutral + angle * span / 360, clamped."""
    neutral_pulse: int
    min_pulse: int
    max_pulse: int
    full_turn_pulse_span: int

    def __post_init__(self) -> None:
        for name in ("neutral_pulse", "min_pulse", "max_pulse"):
            _check_pulse(name, getattr(self, name))
        if not (self.min_pulse <= self.neutral_pulse <= self.max_pulse):
            raise CalibrationError(
                f"servo pulses must satisfy min <= neutral <= max, got "
                f"{self.min_pulse}/{self.neutral_pulse}/{self.max_pulse}"
            )
        if self.full_turn_pulse_span <= 0:
            raise CalibrationError(f"full_turn_pulse_span must be > 0, got {self.full_turn_pulse_span}")

    def idle_pulse(self) -> int:
        return self.neutral_pulse

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class ClawCalibration:
    """Gripper claw: 0 % = open_pulse, `scale` % = closed_pulse."""
    open_pulse: int
    closed_pulse: int
    scale: float = C.GRIPPER_CLAW_SCALE

    def __post_init__(self) -> None:
        _check_pulse("open_pulse", self.open_pulse)
        _check_pulse("closed_pulse", self.closed_pulse)
        if float(self.scale) <= 0.0:
            raise CalibrationError(f"claw scale must be > 0, got {self.scale}")

    def idle_pulse(self) -> int:
        return self.open_pulse

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class DriveCalibration:
    """
    Drive motor speed controller.

    Requires max_reverse < neutral < max_forward so the speed-to-pulse map
    stays monotonic and only speed 0 lands exactly on neutral.
    """
    neutral_pulse: int
    max_forward_pulse: int
    max_reverse_pulse: int
    speed_scale: int = C.DRIVE_SPEED_SCALE

    def __post_init__(self) -> None:
        for name in ("neutral_pulse", "max_forward_pulse", "max_reverse_pulse"):
            _check_pulse(name, getattr(self, name))
        if not (self.max_reverse_pulse < self.neutral_pulse < self.max_forward_pulse):
            raise CalibrationError(
                f"drive pulses must satisfy reverse < neutral < forward, got "
                f"{self.max_reverse_pulse}/{self.neutral_pulse}/{self.max_forward_pulse}"
            )
        if self.speed_scale <= 0:
            raise CalibrationError(f"speed_scale must be > 0, got {self.speed_scale}")

    def idle_pulse(self) -> int:
        return self.neutral_pulse

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class MastCalibration:
    """Continuous-rotation mast: pulse = immobile + speed, clamped."""
    immobile_pulse: int
    min_pulse: int
    max_pulse: int

    def __post_init__(self) -> None:
        for name in ("immobile_pulse", "min_pulse", "max_pulse"):
            _check_pulse(name, getattr(self, name))
        if not (self.min_pulse <= self.immobile_pulse <= self.max_pulse):
            raise CalibrationError(
                f"mast pulses must satisfy min <= immobile <= max, got "
                f"{self.min_pulse}/{self.immobile_pulse}/{self.max_pulse}"
            )

    def idle_pulse(self) -> int:
        return self.immobile_pulse

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


Calibration = Union[ServoCalibration, ClawCalibration, DriveCalibration, MastCalibration]


# =============================================================================
# Calibration table
# =============================================================================
@dataclass(frozen=True)
class CalibrationTable:
    """
    One calibration record per actuator class. Channels sharing hardware
    (four arm joints, three steering servos, five drive motors) share a record.
    """
    arm: ServoCalibration
    steer: ServoCalibration
    gripper_rotate: ServoCalibration
    claw: ClawCalibration
    drive: DriveCalibration
    mast: MastCalibration

    def for_channel(self, channel: ActuatorChannel) -> Calibration:
        return getattr(self, channel_spec(channel).calibration_key)

    def idle_pulse(self, channel: ActuatorChannel) -> int:
        return self.for_channel(channel).idle_pulse()

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {
            "arm": self.arm.to_dict(),
            "steer": self.steer.to_dict(),
            "gripper_rotate": self.gripper_rotate.to_dict(),
            "claw": self.claw.to_dict(),
            "drive": self.drive.to_dict(),
            "mast": self.mast.to_dict(),
        }


def default_calibration_table() -> CalibrationTable:
    """Factory calibration of the stock rover hardware."""
    return CalibrationTable(
        arm=ServoCalibration(
            neutral_pulse=C.ARM_PWM_NEUTRAL,
            min_pulse=C.ARM_PWM_MIN,
            max_pulse=C.ARM_PWM_MAX,
            full_turn_pulse_span=C.ARM_PWM_360_DEGREES,
        ),
        steer=ServoCalibration(
            neutral_pulse=C.STEER_PWM_NEUTRAL,
            min_pulse=C.STEER_PWM_MIN,
            max_pulse=C.STEER_PWM_MAX,
            full_turn_pulse_span=C.STEER_PWM_360_DEGREES,
        ),
        gripper_rotate=ServoCalibration(
            neutral_pulse=C.GRIPPER_ROTATE_PWM_NEUTRAL,
            min_pulse=C.GRIPPER_ROTATE_PWM_MIN,
            max_pulse=C.GRIPPER_ROTATE_PWM_MAX,
            full_turn_pulse_span=C.GRIPPER_ROTATE_PWM_360_DEGREES,
        ),
        claw=ClawCalibration(
            open_pulse=C.GRIPPER_CLAW_PWM_OPEN,
            closed_pulse=C.GRIPPER_CLAW_PWM_CLOSED,
            scale=C.GRIPPER_CLAW_SCALE,
        ),
        drive=DriveCalibration(
            neutral_pulse=C.DRIVE_PWM_NEUTRAL,
            max_forward_pulse=C.DRIVE_PWM_MAX_FORWARD,
            max_reverse_pulse=C.DRIVE_PWM_MAX_REVERSE,
            speed_scale=C.DRIVE_SPEED_SCALE,
        ),
        mast=MastCalibration(
            immobile_pulse=C.MAST_PWM_IMMOBILE,
            min_pulse=C.MAST_PWM_MIN,
            max_pulse=C.MAST_PWM_MAX,
        ),
    )


__all__ = [
    "ChannelGroup",
    "ActuatorKind",
    "ActuatorChannel",
    "ChannelSpec",
    "CHANNEL_SPECS",
    "GROUP_CHANNELS",
    "GROUP_MIN_LENGTH",
    "HARDWARE_ORDER",
    "HARDWARE_ARRAY_LENGTH",
    "ARM_JOINTS",
    "channel_spec",
    "group_of",
    "ServoCalibration",
    "ClawCalibration",
    "DriveCalibration",
    "MastCalibration",
    "Calibration",
    "CalibrationTable",
    "default_calibration_table",
]
