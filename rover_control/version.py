#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/version.py
----------------------------------------
Version metadata for the `rover_control` package.

Imported by both nodes (startup banner) and the bench CLI (`--version`).
No ROS imports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Final, Tuple

from rover_control.constants import (
    NODE_NAME_OPERATOR,
    NODE_NAME_TRANSLATOR,
    OPERATOR_LOOP_HZ_DEFAULT,
    PACKAGE_NAME,
    ROBOT_NAME,
    TRANSLATOR_LOOP_HZ_DEFAULT,
)

VERSION_TUPLE: Final[Tuple[int, int, int]] = (0, 2, 0)
__version__: Final[str] = ".".join(str(n) for n in VERSION_TUPLE)
VERSION: Final[str] = __version__

ROS_DISTRO: Final[str] = "jazzy"


def _default_stages() -> Dict[str, float]:
    return {
        NODE_NAME_OPERATOR: OPERATOR_LOOP_HZ_DEFAULT,
        NODE_NAME_TRANSLATOR: TRANSLATOR_LOOP_HZ_DEFAULT,
    }


@dataclass(frozen=True)
class PackageVersionInfo:
    package_name: str = PACKAGE_NAME
    robot_name: str = ROBOT_NAME
    version: str = VERSION
    ros_distro: str = ROS_DISTRO
    stages: Dict[str, float] = field(default_factory=_default_stages)

    def to_dict(self) -> dict:
        return {
            "package_name": self.package_name,
            "robot_name": self.robot_name,
            "version": self.version,
            "ros_distro": self.ros_distro,
            "stages_hz": dict(self.stages),
        }

    def banner(self) -> str:
        stages = ", ".join(f"{name}@{hz:.0f}Hz" for name, hz in self.stages.items())
        return f"{self.robot_name} | {self.package_name} {self.version} (ROS 2 {self.ros_distro}) | {stages}"


def get_version() -> str:
    return VERSION


def get_package_version_info() -> PackageVersionInfo:
    return PackageVersionInfo()


__all__ = [
    "__version__",
    "VERSION",
    "VERSION_TUPLE",
    "ROS_DISTRO",
    "PackageVersionInfo",
    "get_version",
    "get_package_version_info",
]
