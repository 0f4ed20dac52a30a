#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/ros/qos_profiles.py
-------------------------------------------------
Named QoS profiles for the two rover_control nodes.

- Keyboard events and manual commands: RELIABLE / KEEP_LAST. A dropped key
  release would leave an action held.
- Hardware array: RELIABLE / KEEP_LAST, depth 10.
- Translator status: RELIABLE / KEEP_LAST, shallow.
"""

from __future__ import annotations

from rclpy.qos import DurabilityPolicy, HistoryPolicy, QoSProfile, ReliabilityPolicy

from rover_control import constants as C


def make_qos(
    *,
    depth: int,
    reliability: ReliabilityPolicy = ReliabilityPolicy.RELIABLE,
    durability: DurabilityPolicy = DurabilityPolicy.VOLATILE,
    history: HistoryPolicy = HistoryPolicy.KEEP_LAST,
) -> QoSProfile:
    """QoSProfile with every field explicit. Depth is at least 1."""
    return QoSProfile(
        history=history,
        depth=max(1, int(depth)),
        reliability=reliability,
        durability=durability,
    )


def qos_keyboard(depth: int = C.QOS_DEPTH_KEYBOARD) -> QoSProfile:
    return make_qos(depth=depth)


def qos_manual_command(depth: int = C.QOS_DEPTH_COMMAND) -> QoSProfile:
    return make_qos(depth=depth)


def qos_hardware_command(depth: int = C.QOS_DEPTH_COMMAND) -> QoSProfile:
    return make_qos(depth=depth)


def qos_state_string(depth: int = 5) -> QoSProfile:
    return make_qos(depth=depth)


__all__ = [
    "make_qos",
    "qos_keyboard",
    "qos_manual_command",
    "qos_hardware_command",
    "qos_state_string",
]
