#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/safety/arm_homing.py
--------------------------------------------------
"Return home" motion planner for the 4-joint arm.

Purpose
-------
While the operator holds the return-home key, move every arm joint a bounded
step per tick toward a priority-ordered safe pose, so the arm never folds
into itself or the chassis on the way back to all-zero.

Rules (evaluated per tick, joints in order base, shoulder, elbow, wrist)
-----------------------------------------------------------------------
Guard
  wrist_must_retract_first: shoulder > 55 and wrist != -40
    -> every joint except the wrist is skipped this tick.

Targets
  base     : 0 (home), whether or not the shoulder sits at its 30 deg
             safe angle.
  shoulder : 30 while the base is off-center, else 0.
  elbow    : entry elbow + 30 while the base is off-center or the
             shoulder is above 20, else 0. The +30 target is latched once
             per activation from the elbow value at entry.
  wrist    : -40 while the shoulder is above 50, else 0.

Step
  +-1 toward the target. Base and wrist step 2 unless the joint currently
  sits at +-1. A step never passes its target.

Each joint update is applied before the next joint is evaluated, so later
joints see earlier joints' new values within the same tick.

States
------
IDLE     not active (key released)
HOMING   active, at least one joint moved on the last step
SETTLED  active, every joint sits on its current target
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, Optional, Tuple

from rover_control import constants as C
from rover_control.models.actuator import ARM_JOINTS, ActuatorChannel
from rover_control.models.actuator_state import ActuatorStateStore
from rover_control.utils.clamp import step_toward


# =============================================================================
# Data models
# =============================================================================
class HomingPhase(str, Enum):
    IDLE = "idle"
    HOMING = "homing"
    SETTLED = "settled"


@dataclass(frozen=True)
class HomingConfig:
    shoulder_extended_deg: int = C.HOMING_SHOULDER_EXTENDED_DEG
    shoulder_wrist_retract_deg: int = C.HOMING_SHOULDER_WRIST_RETRACT_DEG
    shoulder_elbow_clear_deg: int = C.HOMING_SHOULDER_ELBOW_CLEAR_DEG
    shoulder_safe_deg: int = C.HOMING_SHOULDER_SAFE_DEG
    wrist_retracted_deg: int = C.HOMING_WRIST_RETRACTED_DEG
    elbow_offset_deg: int = C.HOMING_ELBOW_OFFSET_DEG
    home_deg: int = 0
    step_deg: int = 1
    fast_step_deg: int = 2


@dataclass
class ArmPose:
    """Semantic arm joint angles (degrees)."""
    base: int = 0
    shoulder: int = 0
    elbow: int = 0
    wrist: int = 0

    def get(self, joint: ActuatorChannel) -> int:
        return getattr(self, _JOINT_FIELD[joint])

    def set(self, joint: ActuatorChannel, value: int) -> None:
        setattr(self, _JOINT_FIELD[joint], int(value))

    @classmethod
    def from_store(cls, store: ActuatorStateStore) -> "ArmPose":
        return cls(
            base=store.get(ActuatorChannel.ARM_BASE),
            shoulder=store.get(ActuatorChannel.ARM_SHOULDER),
            elbow=store.get(ActuatorChannel.ARM_ELBOW),
            wrist=store.get(ActuatorChannel.ARM_WRIST),
        )

    def apply_to(self, store: ActuatorStateStore) -> None:
        for joint in ARM_JOINTS:
            store.set(joint, self.get(joint))

    def is_home(self, home_deg: int = 0) -> bool:
        return all(self.get(j) == home_deg for j in ARM_JOINTS)


_JOINT_FIELD: Dict[ActuatorChannel, str] = {
    ActuatorChannel.ARM_BASE: "base",
    ActuatorChannel.ARM_SHOULDER: "shoulder",
    ActuatorChannel.ARM_ELBOW: "elbow",
    ActuatorChannel.ARM_WRIST: "wrist",
}

_FAST_JOINTS = (ActuatorChannel.ARM_BASE, ActuatorChannel.ARM_WRIST)


@dataclass
class HomingStep:
    """Result of one planner step."""
    phase: HomingPhase
    pose: ArmPose
    deltas: Dict[ActuatorChannel, int] = field(default_factory=dict)
    targets: Dict[ActuatorChannel, int] = field(default_factory=dict)
    skipped: Tuple[ActuatorChannel, ...] = ()

    @property
    def moved(self) -> bool:
        return any(d != 0 for d in self.deltas.values())


# =============================================================================
# Named guards and target rules
# =============================================================================
def wrist_must_retract_first(pose: ArmPose, cfg: HomingConfig) -> bool:
    return pose.shoulder > cfg.shoulder_extended_deg and pose.wrist != cfg.wrist_retracted_deg


def base_off_center(pose: ArmPose, cfg: HomingConfig) -> bool:
    return pose.base != cfg.home_deg


def elbow_must_clear(pose: ArmPose, cfg: HomingConfig) -> bool:
    return pose.base != cfg.home_deg or pose.shoulder > cfg.shoulder_elbow_clear_deg


def wrist_must_stay_retracted(pose: ArmPose, cfg: HomingConfig) -> bool:
    return pose.shoulder > cfg.shoulder_wrist_retract_deg


def base_target(pose: ArmPose, cfg: HomingConfig) -> int:
    """The safe-shoulder rule and the default rule both send the base home."""
    return cfg.home_deg


def shoulder_target(pose: ArmPose, cfg: HomingConfig) -> int:
    if base_off_center(pose, cfg):
        return cfg.shoulder_safe_deg
    return cfg.home_deg


def elbow_target(pose: ArmPose, cfg: HomingConfig, latched_clear_deg: int) -> int:
    if elbow_must_clear(pose, cfg):
        return latched_clear_deg
    return cfg.home_deg


def wrist_target(pose: ArmPose, cfg: HomingConfig) -> int:
    if wrist_must_stay_retracted(pose, cfg):
        return cfg.wrist_retracted_deg
    return cfg.home_deg


def joint_step(joint: ActuatorChannel, current: int, target: int, cfg: HomingConfig) -> int:
    """Signed delta for one joint, capped at the remaining distance."""
    magnitude = cfg.step_deg
    if joint in _FAST_JOINTS and current not in (-1, 1):
        magnitude = cfg.fast_step_deg
    return step_toward(current, target, magnitude)


# =============================================================================
# Planner
# =============================================================================
class ArmHomingPlanner:
    """
    Stateful homing planner. Call `step()` once per tick while the
    return-home action is held and `deactivate()` when it is released.
    """

    def __init__(self, config: Optional[HomingConfig] = None) -> None:
        self._cfg = config or HomingConfig()
        self._phase = HomingPhase.IDLE
        self._elbow_clear_deg: Optional[int] = None
        self._steps = 0

    @property
    def config(self) -> HomingConfig:
        return self._cfg

    @property
    def phase(self) -> HomingPhase:
        return self._phase

    @property
    def active(self) -> bool:
        return self._phase is not HomingPhase.IDLE

    @property
    def elbow_clear_deg(self) -> Optional[int]:
        """Latched elbow target for the current activation (None when idle)."""
        return self._elbow_clear_deg

    @property
    def steps(self) -> int:
        return self._steps

    def deactivate(self) -> None:
        self._phase = HomingPhase.IDLE
        self._elbow_clear_deg = None
        self._steps = 0

    def _target_for(self, joint: ActuatorChannel, pose: ArmPose) -> int:
        if joint is ActuatorChannel.ARM_BASE:
            return base_target(pose, self._cfg)
        if joint is ActuatorChannel.ARM_SHOULDER:
            return shoulder_target(pose, self._cfg)
        if joint is ActuatorChannel.ARM_ELBOW:
            assert self._elbow_clear_deg is not None
            return elbow_target(pose, self._cfg, self._elbow_clear_deg)
        return wrist_target(pose, self._cfg)

    def step(self, pose: ArmPose) -> HomingStep:
        """Compute one homing tick. `pose` is not modified."""
        if self._elbow_clear_deg is None:
            self._elbow_clear_deg = pose.elbow + self._cfg.elbow_offset_deg

        work = replace(pose)
        result = HomingStep(phase=self._phase, pose=work)
        skipped = []

        for joint in ARM_JOINTS:
            if joint is not ActuatorChannel.ARM_WRIST and wrist_must_retract_first(work, self._cfg):
                skipped.append(joint)
                result.deltas[joint] = 0
                continue
            current = work.get(joint)
            target = self._target_for(joint, work)
            delta = joint_step(joint, current, target, self._cfg)
            work.set(joint, current + delta)
            result.targets[joint] = target
            result.deltas[joint] = delta

        result.skipped = tuple(skipped)
        self._phase = HomingPhase.HOMING if result.moved else HomingPhase.SETTLED
        result.phase = self._phase
        self._steps += 1
        return result

    def step_store(self, store: ActuatorStateStore) -> HomingStep:
        """Run one step against the arm channels of `store` and write back."""
        result = self.step(ArmPose.from_store(store))
        result.pose.apply_to(store)
        return result


__all__ = [
    "HomingPhase",
    "HomingConfig",
    "ArmPose",
    "HomingStep",
    "ArmHomingPlanner",
    "wrist_must_retract_first",
    "base_off_center",
    "elbow_must_clear",
    "wrist_must_stay_retracted",
    "base_target",
    "shoulder_target",
    "elbow_target",
    "wrist_target",
    "joint_step",
]
