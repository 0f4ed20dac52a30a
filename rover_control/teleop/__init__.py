# -*- coding: utf-8 -*-
"""
RoboOps Rover — rover_control/teleop/__init__.py
------------------------------------------------
Operator input: key bindings and the queued input router.
"""

from __future__ import annotations

from .input_router import InputEventRouter, KeyEvent
from .key_bindings import DEFAULT_KEY_BINDINGS, KeyBindingTable, TeleopAction, key_code

__all__ = [
    "InputEventRouter",
    "KeyEvent",
    "DEFAULT_KEY_BINDINGS",
    "KeyBindingTable",
    "TeleopAction",
    "key_code",
]
