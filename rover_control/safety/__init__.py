#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/safety/__init__.py
------------------------------------------------
Public exports for `rover_control.safety`.
"""

from .arm_homing import ArmHomingPlanner, ArmPose, HomingConfig, HomingPhase, HomingStep

__all__ = [
    "ArmHomingPlanner",
    "ArmPose",
    "HomingConfig",
    "HomingPhase",
    "HomingStep",
]
