# -*- coding: utf-8 -*-
"""
RoboOps Rover — rover_control/__init__.py
-----------------------------------------
Package root exports for `rover_control`.

Design notes
------------
- Keep imports lightweight: no ROS modules (nodes, rclpy) are imported here.
- The control core lives in `models`, `kinematics`, `teleop`, `safety` and
  `control`; ROS glue lives in `ros` and `nodes`.
"""

from __future__ import annotations

from .constants import (
    NODE_NAME_OPERATOR,
    NODE_NAME_TRANSLATOR,
    OPERATOR_DEFAULTS,
    PACKAGE_NAME,
    ROBOT_NAME,
    TOPIC_ARM_CMD_MANUAL,
    TOPIC_DRIVE_CMD_MANUAL,
    TOPIC_HARDWARE_CMD,
    TOPIC_MAST_CMD_MANUAL,
    TOPIC_STEER_CMD_MANUAL,
    TRANSLATOR_DEFAULTS,
)
from .version import VERSION, __version__, get_package_version_info, get_version


def get_package_info() -> dict:
    """Package metadata and key topic defaults. Safe without ROS installed."""
    return {
        "package": PACKAGE_NAME,
        "robot_name": ROBOT_NAME,
        "version": get_version(),
        "nodes": {
            "operator": NODE_NAME_OPERATOR,
            "translator": NODE_NAME_TRANSLATOR,
        },
        "topics": {
            "arm": TOPIC_ARM_CMD_MANUAL,
            "steer": TOPIC_STEER_CMD_MANUAL,
            "drive": TOPIC_DRIVE_CMD_MANUAL,
            "mast": TOPIC_MAST_CMD_MANUAL,
            "hardware": TOPIC_HARDWARE_CMD,
        },
    }


__all__ = [
    "__version__",
    "VERSION",
    "get_version",
    "get_package_version_info",
    "PACKAGE_NAME",
    "ROBOT_NAME",
    "NODE_NAME_OPERATOR",
    "NODE_NAME_TRANSLATOR",
    "OPERATOR_DEFAULTS",
    "TRANSLATOR_DEFAULTS",
    "TOPIC_ARM_CMD_MANUAL",
    "TOPIC_STEER_CMD_MANUAL",
    "TOPIC_DRIVE_CMD_MANUAL",
    "TOPIC_MAST_CMD_MANUAL",
    "TOPIC_HARDWARE_CMD",
    "get_package_info",
]
