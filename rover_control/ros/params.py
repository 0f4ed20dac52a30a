#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/ros/params.py
-------------------------------------------
ROS 2 parameter declaration and reading for the rover_control nodes.

Scope
-----
Declare parameters with code defaults from `rover_control.constants`, read
them back with type conversion and range clamping, and bundle them into the
frozen config objects the pure control core takes. No publishers, no
hardware access.

Calibration parameters
----------------------
One group per actuator class, e.g.
  arm.neutral_pulse, arm.min_pulse, arm.max_pulse, arm.full_turn_pulse_span
  claw.open_pulse, claw.closed_pulse, claw.scale
  drive.neutral_pulse, drive.max_forward_pulse, drive.max_reverse_pulse, drive.speed_scale
  mast.immobile_pulse, mast.min_pulse, mast.max_pulse
An inconsistent set raises `CalibrationError` at node startup.
"""

from __future__ import annotations

from typing import Any, Optional

from rclpy.node import Node

from rover_control import constants as C
from rover_control.control.operator_loop import OperatorStepConfig
from rover_control.drivers.board_factory import PwmSinkConfig
from rover_control.models.actuator import (
    CalibrationTable,
    ClawCalibration,
    DriveCalibration,
    MastCalibration,
    ServoCalibration,
    default_calibration_table,
)


# =============================================================================
# Generic helpers
# =============================================================================
def declare_if_missing(node: Node, name: str, default_value: Any) -> None:
    if not node.has_parameter(name):
        node.declare_parameter(name, default_value)


def get_param(node: Node, name: str, default: Any = None) -> Any:
    if not node.has_parameter(name):
        return default
    return node.get_parameter(name).value


def get_str(node: Node, name: str, default: str = "") -> str:
    v = get_param(node, name, default)
    return str(v) if v is not None else str(default)


def get_int(
    node: Node,
    name: str,
    default: int = 0,
    *,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
) -> int:
    try:
        out = int(get_param(node, name, default))
    except (TypeError, ValueError):
        node.get_logger().warn(f"parameter '{name}' is not an integer, using {default}")
        out = int(default)
    if min_value is not None and out < min_value:
        out = min_value
    if max_value is not None and out > max_value:
        out = max_value
    return out


def get_float(
    node: Node,
    name: str,
    default: float = 0.0,
    *,
    min_value: Optional[float] = None,
    max_value: Optional[float] = None,
) -> float:
    try:
        out = float(get_param(node, name, default))
    except (TypeError, ValueError):
        node.get_logger().warn(f"parameter '{name}' is not a number, using {default}")
        out = float(default)
    if min_value is not None and out < min_value:
        out = min_value
    if max_value is not None and out > max_value:
        out = max_value
    return out


def _declare_and_get_str(node: Node, name: str, default: str) -> str:
    declare_if_missing(node, name, default)
    return get_str(node, name, default)


def _declare_and_get_int(node: Node, name: str, default: int, **limits: Any) -> int:
    declare_if_missing(node, name, int(default))
    return get_int(node, name, int(default), **limits)


def _declare_and_get_float(node: Node, name: str, default: float, **limits: Any) -> float:
    declare_if_missing(node, name, float(default))
    return get_float(node, name, float(default), **limits)


# =============================================================================
# Operator node
# =============================================================================
def read_operator_defaults(node: Node) -> C.OperatorDefaults:
    d = C.OPERATOR_DEFAULTS
    return C.OperatorDefaults(
        node_name=node.get_name(),
        key_down_topic=_declare_and_get_str(node, "key_down_topic", d.key_down_topic),
        key_up_topic=_declare_and_get_str(node, "key_up_topic", d.key_up_topic),
        arm_topic=_declare_and_get_str(node, "arm_topic", d.arm_topic),
        steer_topic=_declare_and_get_str(node, "steer_topic", d.steer_topic),
        drive_topic=_declare_and_get_str(node, "drive_topic", d.drive_topic),
        mast_topic=_declare_and_get_str(node, "mast_topic", d.mast_topic),
        loop_hz=_declare_and_get_float(node, "loop_hz", d.loop_hz, min_value=C.LOOP_HZ_MIN, max_value=C.LOOP_HZ_MAX),
        arm_step_deg=_declare_and_get_int(node, "arm_step_deg", d.arm_step_deg, min_value=1, max_value=10),
        gripper_rotate_step_deg=_declare_and_get_int(
            node, "gripper_rotate_step_deg", d.gripper_rotate_step_deg, min_value=1, max_value=10
        ),
        steer_step_deg=_declare_and_get_int(node, "steer_step_deg", d.steer_step_deg, min_value=1, max_value=30),
        drive_step=_declare_and_get_int(node, "drive_step", d.drive_step, min_value=1, max_value=C.DRIVE_SPEED_SCALE),
        drive_speed_limit=_declare_and_get_int(
            node, "drive_speed_limit", d.drive_speed_limit, min_value=0, max_value=C.DRIVE_SPEED_SCALE
        ),
        mast_speed=_declare_and_get_int(node, "mast_speed", d.mast_speed, min_value=0, max_value=100),
    )


def read_operator_step_config(node: Node) -> OperatorStepConfig:
    return OperatorStepConfig.from_defaults(read_operator_defaults(node))


# =============================================================================
# Translator node
# =============================================================================
def read_translator_defaults(node: Node) -> C.TranslatorDefaults:
    d = C.TRANSLATOR_DEFAULTS
    return C.TranslatorDefaults(
        node_name=node.get_name(),
        arm_topic=_declare_and_get_str(node, "arm_topic", d.arm_topic),
        steer_topic=_declare_and_get_str(node, "steer_topic", d.steer_topic),
        drive_topic=_declare_and_get_str(node, "drive_topic", d.drive_topic),
        mast_topic=_declare_and_get_str(node, "mast_topic", d.mast_topic),
        hardware_topic=_declare_and_get_str(node, "hardware_topic", d.hardware_topic),
        state_topic=_declare_and_get_str(node, "state_topic", d.state_topic),
        loop_hz=_declare_and_get_float(node, "loop_hz", d.loop_hz, min_value=C.LOOP_HZ_MIN, max_value=C.LOOP_HZ_MAX),
        status_publish_hz=_declare_and_get_float(
            node, "status_publish_hz", d.status_publish_hz, min_value=0.0, max_value=10.0
        ),
        output_backend=_declare_and_get_str(node, "output_backend", d.output_backend),
        i2c_bus=_declare_and_get_int(node, "i2c_bus", d.i2c_bus, min_value=0),
        pca9685_addr=_declare_and_get_int(node, "pca9685_addr", d.pca9685_addr, min_value=0x03, max_value=0x77),
        pwm_freq_hz=_declare_and_get_float(node, "pwm_freq_hz", d.pwm_freq_hz, min_value=24.0, max_value=1526.0),
    )


def pwm_sink_config(d: C.TranslatorDefaults) -> PwmSinkConfig:
    return PwmSinkConfig(
        backend=d.output_backend,
        i2c_bus=d.i2c_bus,
        address=d.pca9685_addr,
        pwm_freq_hz=d.pwm_freq_hz,
    )


def _read_servo(node: Node, prefix: str, default: ServoCalibration) -> ServoCalibration:
    return ServoCalibration(
        neutral_pulse=_declare_and_get_int(node, f"{prefix}.neutral_pulse", default.neutral_pulse),
        min_pulse=_declare_and_get_int(node, f"{prefix}.min_pulse", default.min_pulse),
        max_pulse=_declare_and_get_int(node, f"{prefix}.max_pulse", default.max_pulse),
        full_turn_pulse_span=_declare_and_get_int(
            node, f"{prefix}.full_turn_pulse_span", default.full_turn_pulse_span
        ),
    )


def read_calibration_table(node: Node) -> CalibrationTable:
    """Calibration from parameters, factory values as defaults."""
    d = default_calibration_table()
    return CalibrationTable(
        arm=_read_servo(node, "arm", d.arm),
        steer=_read_servo(node, "steer", d.steer),
        gripper_rotate=_read_servo(node, "gripper_rotate", d.gripper_rotate),
        claw=ClawCalibration(
            open_pulse=_declare_and_get_int(node, "claw.open_pulse", d.claw.open_pulse),
            closed_pulse=_declare_and_get_int(node, "claw.closed_pulse", d.claw.closed_pulse),
            scale=_declare_and_get_float(node, "claw.scale", d.claw.scale),
        ),
        drive=DriveCalibration(
            neutral_pulse=_declare_and_get_int(node, "drive.neutral_pulse", d.drive.neutral_pulse),
            max_forward_pulse=_declare_and_get_int(node, "drive.max_forward_pulse", d.drive.max_forward_pulse),
            max_reverse_pulse=_declare_and_get_int(node, "drive.max_reverse_pulse", d.drive.max_reverse_pulse),
            speed_scale=_declare_and_get_int(node, "drive.speed_scale", d.drive.speed_scale),
        ),
        mast=MastCalibration(
            immobile_pulse=_declare_and_get_int(node, "mast.immobile_pulse", d.mast.immobile_pulse),
            min_pulse=_declare_and_get_int(node, "mast.min_pulse", d.mast.min_pulse),
            max_pulse=_declare_and_get_int(node, "mast.max_pulse", d.mast.max_pulse),
        ),
    )


__all__ = [
    "declare_if_missing",
    "get_param",
    "get_str",
    "get_int",
    "get_float",
    "read_operator_defaults",
    "read_operator_step_config",
    "read_translator_defaults",
    "pwm_sink_config",
    "read_calibration_table",
]
