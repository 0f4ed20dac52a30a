#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/kinematics/conventions.py
-------------------------------------------------------
Mounting sign conventions between the manual-command topics and the
hardware pulse array.

Locked conventions (from the rover chassis)
- The rear steering servo and the rear drive motor are mounted mirrored.
  Their manual-command sign is negated before translation, so a positive
  steer angle turns every wheel the same way and a positive drive speed
  moves every wheel forward.
- Every other channel keeps its manual sign.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from rover_control.models.actuator import ActuatorChannel


VALID_MOUNT_SIGNS = (-1, +1)


def _default_signs() -> Dict[ActuatorChannel, int]:
    return {
        ActuatorChannel.STEER_REAR: -1,
        ActuatorChannel.DRIVE_REAR: -1,
    }


@dataclass(frozen=True)
class MountSignConvention:
    """Per-channel sign; channels not listed are +1."""
    signs: Dict[ActuatorChannel, int] = field(default_factory=_default_signs)

    def __post_init__(self) -> None:
        for ch, sign in self.signs.items():
            if sign not in VALID_MOUNT_SIGNS:
                raise ValueError(f"mount sign for {ActuatorChannel(ch).value} must be -1 or +1, got {sign!r}")

    def sign_of(self, channel: ActuatorChannel) -> int:
        return self.signs.get(ActuatorChannel(channel), +1)

    def apply(self, channel: ActuatorChannel, value: int) -> int:
        """Manual-command value -> hardware semantic value."""
        return self.sign_of(channel) * int(value)


ROVER_MOUNT_SIGNS = MountSignConvention()


def apply_mount_sign(channel: ActuatorChannel, value: int) -> int:
    return ROVER_MOUNT_SIGNS.apply(channel, value)


__all__ = [
    "VALID_MOUNT_SIGNS",
    "MountSignConvention",
    "ROVER_MOUNT_SIGNS",
    "apply_mount_sign",
]
