# -*- coding: utf-8 -*-
"""
RoboOps Rover — rover_control/control/__init__.py
-------------------------------------------------
The two control stages and their shared command publisher.
"""

from __future__ import annotations

from .command_publisher import (
    CallableSink,
    CommandPublisher,
    CommandSink,
    GroupPublisher,
    GroupPublisherStats,
    PulseArray,
)
from .operator_loop import OperatorControlLoop, OperatorStepConfig
from .translator_loop import HARDWARE_PUBLISHER, TranslatorLoop, validate_command

__all__ = [
    "CallableSink",
    "CommandPublisher",
    "CommandSink",
    "GroupPublisher",
    "GroupPublisherStats",
    "PulseArray",
    "OperatorControlLoop",
    "OperatorStepConfig",
    "HARDWARE_PUBLISHER",
    "TranslatorLoop",
    "validate_command",
]
