#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/ros/adapters.py
---------------------------------------------
Conversions between std_msgs messages and the plain tuples/dicts the control
core works with.

Design principles
-----------------
- No node creation, no hardware access
- Message -> tuple conversions never validate; the translator does that and
  rejects malformed arrays itself
- JSON outputs are compact for String state topics
"""

from __future__ import annotations

import json
from typing import Any, Dict, Sequence, Tuple

from std_msgs.msg import Int16, Int16MultiArray, String, UInt16MultiArray

from rover_control.utils.clamp import clamp_pwm_count, saturate_int16


# =============================================================================
# JSON helpers
# =============================================================================
def compact_json(data: Dict[str, Any]) -> str:
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"), default=str)


def json_to_string_msg(data: Dict[str, Any]) -> String:
    msg = String()
    msg.data = compact_json(data)
    return msg


# =============================================================================
# Manual command arrays
# =============================================================================
def int16_array_to_msg(values: Sequence[int]) -> Int16MultiArray:
    msg = Int16MultiArray()
    msg.data = [saturate_int16(v) for v in values]
    return msg


def int16_msg_to_values(msg: Int16MultiArray) -> Tuple[Any, ...]:
    return tuple(msg.data)


def int16_to_msg(value: int) -> Int16:
    msg = Int16()
    msg.data = saturate_int16(value)
    return msg


def int16_scalar_to_values(msg: Int16) -> Tuple[Any, ...]:
    return (msg.data,)


# =============================================================================
# Hardware pulse array
# =============================================================================
def pulse_array_to_msg(values: Sequence[int]) -> UInt16MultiArray:
    msg = UInt16MultiArray()
    msg.data = [clamp_pwm_count(v) for v in values]
    return msg


__all__ = [
    "compact_json",
    "json_to_string_msg",
    "int16_array_to_msg",
    "int16_msg_to_values",
    "int16_to_msg",
    "int16_scalar_to_values",
    "pulse_array_to_msg",
]
