#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/teleop/key_bindings.py
----------------------------------------------------
Static key binding table for the operator stage.

Key codes are the values carried by `/keyboard/keydown` and
`/keyboard/keyup` (std_msgs/UInt16). Letter keys use their lowercase ASCII
code, which is also the SDL keysym the keyboard publisher emits.

Default keymap
--------------
Arm (1 deg / tick while held):
  n / m = base + / -
  j / u = shoulder + / -
  i / k = elbow + / -
  o / l = wrist + / -
  p     = return home (homing planner runs while held)

Gripper:
  b     = toggle claw open / closed (once per press)
  y / h = gripper rotate + / -

Steering (3 deg / tick, all three servos):
  a / d = steer + / -
  f     = straighten

Drive (100 units / tick, saturating at +-2000, all five motors):
  w / s = forward / reverse
  x     = stop

Mast (continuous servo, moves only while held):
  z / c = pan + / -
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, Mapping, Optional, Tuple


class TeleopAction(str, Enum):
    ARM_BASE_PLUS = "arm_base_plus"
    ARM_BASE_MINUS = "arm_base_minus"
    ARM_SHOULDER_PLUS = "arm_shoulder_plus"
    ARM_SHOULDER_MINUS = "arm_shoulder_minus"
    ARM_ELBOW_PLUS = "arm_elbow_plus"
    ARM_ELBOW_MINUS = "arm_elbow_minus"
    ARM_WRIST_PLUS = "arm_wrist_plus"
    ARM_WRIST_MINUS = "arm_wrist_minus"
    RETURN_HOME = "return_home"

    GRIPPER_TOGGLE = "gripper_toggle"
    GRIPPER_ROTATE_PLUS = "gripper_rotate_plus"
    GRIPPER_ROTATE_MINUS = "gripper_rotate_minus"

    STEER_PLUS = "steer_plus"
    STEER_MINUS = "steer_minus"
    STEER_STRAIGHTEN = "steer_straighten"

    DRIVE_FORWARD = "drive_forward"
    DRIVE_REVERSE = "drive_reverse"
    DRIVE_STOP = "drive_stop"

    MAST_PLUS = "mast_plus"
    MAST_MINUS = "mast_minus"


def key_code(letter: str) -> int:
    """'n' -> 110"""
    if len(letter) != 1:
        raise ValueError(f"expected a single character, got {letter!r}")
    return ord(letter.lower())


_DEFAULT_LETTERS: Tuple[Tuple[str, TeleopAction], ...] = (
    ("n", TeleopAction.ARM_BASE_PLUS),
    ("m", TeleopAction.ARM_BASE_MINUS),
    ("j", TeleopAction.ARM_SHOULDER_PLUS),
    ("u", TeleopAction.ARM_SHOULDER_MINUS),
    ("i", TeleopAction.ARM_ELBOW_PLUS),
    ("k", TeleopAction.ARM_ELBOW_MINUS),
    ("o", TeleopAction.ARM_WRIST_PLUS),
    ("l", TeleopAction.ARM_WRIST_MINUS),
    ("p", TeleopAction.RETURN_HOME),
    ("b", TeleopAction.GRIPPER_TOGGLE),
    ("y", TeleopAction.GRIPPER_ROTATE_PLUS),
    ("h", TeleopAction.GRIPPER_ROTATE_MINUS),
    ("a", TeleopAction.STEER_PLUS),
    ("d", TeleopAction.STEER_MINUS),
    ("f", TeleopAction.STEER_STRAIGHTEN),
    ("w", TeleopAction.DRIVE_FORWARD),
    ("s", TeleopAction.DRIVE_REVERSE),
    ("x", TeleopAction.DRIVE_STOP),
    ("z", TeleopAction.MAST_PLUS),
    ("c", TeleopAction.MAST_MINUS),
)


def _default_bindings() -> Dict[int, TeleopAction]:
    return {key_code(letter): action for letter, action in _DEFAULT_LETTERS}


@dataclass(frozen=True)
class KeyBindingTable:
    """Key code -> action. One key per action, one action per key."""
    bindings: Mapping[int, TeleopAction] = field(default_factory=_default_bindings)

    def __post_init__(self) -> None:
        actions = list(self.bindings.values())
        dupes = {a.value for a in actions if actions.count(a) > 1}
        if dupes:
            raise ValueError(f"actions bound to more than one key: {sorted(dupes)}")

    def action_for(self, key: int) -> Optional[TeleopAction]:
        return self.bindings.get(int(key))

    def key_for(self, action: TeleopAction) -> Optional[int]:
        for key, bound in self.bindings.items():
            if bound is action:
                return key
        return None

    def __iter__(self) -> Iterator[Tuple[int, TeleopAction]]:
        return iter(self.bindings.items())

    def __len__(self) -> int:
        return len(self.bindings)

    def describe(self) -> str:
        return ", ".join(f"{chr(k)}={a.value}" for k, a in sorted(self.bindings.items()))


DEFAULT_KEY_BINDINGS = KeyBindingTable()


__all__ = ["TeleopAction", "KeyBindingTable", "DEFAULT_KEY_BINDINGS", "key_code"]
