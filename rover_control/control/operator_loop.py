#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/control/operator_loop.py
------------------------------------------------------
Operator-input stage: held keys -> semantic manual-command arrays.

One `tick()` (20 Hz by default):
1. drain queued key events into HoldState
2. return-home held -> one homing planner step (arm published every tick)
3. manual arm / gripper / steer / drive / mast actions
4. publish every dirty group (arm 6 values, steer 3, drive 5, mast 1)

Key actions that fire mark their group dirty even when the value is already
saturated, so a held key keeps refreshing its topic. The mast is the
exception: it follows the key level and only publishes on change.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional, Sequence, Tuple

from rover_control import constants as C
from rover_control.control.command_publisher import CommandPublisher, CommandSink, PulseArray
from rover_control.models.actuator import ActuatorChannel, ChannelGroup, GROUP_CHANNELS
from rover_control.models.actuator_state import ActuatorStateStore, ControlLoopState
from rover_control.safety.arm_homing import ArmHomingPlanner, HomingStep
from rover_control.teleop.input_router import InputEventRouter
from rover_control.teleop.key_bindings import DEFAULT_KEY_BINDINGS, KeyBindingTable, TeleopAction
from rover_control.utils.clamp import clamp_int
from rover_control.utils.logging import LoggerAdapter, get_logger_adapter


@dataclass(frozen=True)
class OperatorStepConfig:
    arm_step_deg: int = C.ARM_STEP_DEG
    gripper_rotate_step_deg: int = C.GRIPPER_ROTATE_STEP_DEG
    steer_step_deg: int = C.STEER_STEP_DEG
    drive_step: int = C.DRIVE_STEP
    drive_speed_limit: int = C.DRIVE_SPEED_LIMIT
    mast_speed: int = C.MAST_SPEED
    claw_open_percent: int = C.CLAW_OPEN_PERCENT
    claw_closed_percent: int = C.CLAW_CLOSED_PERCENT

    @classmethod
    def from_defaults(cls, d: C.OperatorDefaults) -> "OperatorStepConfig":
        return cls(
            arm_step_deg=d.arm_step_deg,
            gripper_rotate_step_deg=d.gripper_rotate_step_deg,
            steer_step_deg=d.steer_step_deg,
            drive_step=d.drive_step,
            drive_speed_limit=d.drive_speed_limit,
            mast_speed=d.mast_speed,
        )


# (plus action, minus action, channel)
_ARM_AXES: Tuple[Tuple[TeleopAction, TeleopAction, ActuatorChannel], ...] = (
    (TeleopAction.ARM_BASE_PLUS, TeleopAction.ARM_BASE_MINUS, ActuatorChannel.ARM_BASE),
    (TeleopAction.ARM_SHOULDER_PLUS, TeleopAction.ARM_SHOULDER_MINUS, ActuatorChannel.ARM_SHOULDER),
    (TeleopAction.ARM_ELBOW_PLUS, TeleopAction.ARM_ELBOW_MINUS, ActuatorChannel.ARM_ELBOW),
    (TeleopAction.ARM_WRIST_PLUS, TeleopAction.ARM_WRIST_MINUS, ActuatorChannel.ARM_WRIST),
)


class OperatorControlLoop:
    def __init__(
        self,
        *,
        bindings: KeyBindingTable = DEFAULT_KEY_BINDINGS,
        config: Optional[OperatorStepConfig] = None,
        planner: Optional[ArmHomingPlanner] = None,
        sinks: Optional[Mapping[ChannelGroup, Sequence[CommandSink]]] = None,
        logger: Optional[LoggerAdapter] = None,
        warn_period_s: float = C.WARN_THROTTLE_S_DEFAULT,
    ) -> None:
        self._bindings = bindings
        self._cfg = config or OperatorStepConfig()
        self._planner = planner or ArmHomingPlanner()
        self._log = logger or get_logger_adapter(name="rover_control.operator")
        self.state = ControlLoopState(store=ActuatorStateStore())
        self.router = InputEventRouter()
        self.publisher = CommandPublisher(self.state.store, logger=self._log, warn_period_s=warn_period_s)
        self.last_homing: Optional[HomingStep] = None

        sinks = sinks or {}
        for group in ChannelGroup:
            self.publisher.add_group(
                group.value,
                (group,),
                self._group_encoder(group),
                sinks.get(group, ()),
            )

    def _group_encoder(self, group: ChannelGroup):
        store = self.state.store
        return lambda: store.group_values(group)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def store(self) -> ActuatorStateStore:
        return self.state.store

    @property
    def planner(self) -> ArmHomingPlanner:
        return self._planner

    @property
    def config(self) -> OperatorStepConfig:
        return self._cfg

    # ------------------------------------------------------------------
    # Notifier side
    # ------------------------------------------------------------------
    def on_key_down(self, key: int) -> None:
        self.router.on_press(key)

    def on_key_up(self, key: int) -> None:
        self.router.on_release(key)

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------
    def _held(self, action: TeleopAction) -> bool:
        return self.router.is_held(self._bindings.key_for(action))

    def _nudge(self, channel: ActuatorChannel, delta: int) -> None:
        self.store.set(channel, self.store.get(channel) + delta, force=True)

    def _step_arm(self) -> None:
        store = self.store
        if self._held(TeleopAction.RETURN_HOME):
            self.last_homing = self._planner.step_store(store)
            store.mark_dirty(ChannelGroup.ARM)
        elif self._planner.active:
            self._log.info(f"[operator] homing released after {self._planner.steps} steps")
            self._planner.deactivate()

        step = self._cfg.arm_step_deg
        for plus, minus, channel in _ARM_AXES:
            if self._held(plus):
                self._nudge(channel, +step)
            elif self._held(minus):
                self._nudge(channel, -step)

    def _step_gripper(self) -> None:
        step = self._cfg.gripper_rotate_step_deg
        if self._held(TeleopAction.GRIPPER_ROTATE_PLUS):
            self._nudge(ActuatorChannel.GRIPPER_ROTATE, +step)
        elif self._held(TeleopAction.GRIPPER_ROTATE_MINUS):
            self._nudge(ActuatorChannel.GRIPPER_ROTATE, -step)

        if self.router.consume(self._bindings.key_for(TeleopAction.GRIPPER_TOGGLE)):
            claw = self.store.get(ActuatorChannel.GRIPPER_CLAW)
            closed = claw != self._cfg.claw_open_percent
            target = self._cfg.claw_open_percent if closed else self._cfg.claw_closed_percent
            self.store.set(ActuatorChannel.GRIPPER_CLAW, target, force=True)
            self._log.info(f"[operator] gripper {'opened' if closed else 'closed'}")

    def _step_steer(self) -> None:
        step = self._cfg.steer_step_deg
        delta = 0
        if self._held(TeleopAction.STEER_PLUS):
            delta = +step
        elif self._held(TeleopAction.STEER_MINUS):
            delta = -step
        if delta:
            for channel in GROUP_CHANNELS[ChannelGroup.STEER]:
                self._nudge(channel, delta)
        if self._held(TeleopAction.STEER_STRAIGHTEN):
            self.store.reset_group(ChannelGroup.STEER)
            self.store.mark_dirty(ChannelGroup.STEER)

    def _step_drive(self) -> None:
        step = self._cfg.drive_step
        limit = abs(self._cfg.drive_speed_limit)
        delta = 0
        if self._held(TeleopAction.DRIVE_FORWARD):
            delta = +step
        elif self._held(TeleopAction.DRIVE_REVERSE):
            delta = -step
        if delta:
            for channel in GROUP_CHANNELS[ChannelGroup.DRIVE]:
                speed = clamp_int(self.store.get(channel) + delta, -limit, limit)
                self.store.set(channel, speed, force=True)
        if self._held(TeleopAction.DRIVE_STOP):
            self.store.reset_group(ChannelGroup.DRIVE)
            self.store.mark_dirty(ChannelGroup.DRIVE)

    def _step_mast(self) -> None:
        speed = 0
        if self._held(TeleopAction.MAST_PLUS):
            speed = +self._cfg.mast_speed
        elif self._held(TeleopAction.MAST_MINUS):
            speed = -self._cfg.mast_speed
        self.store.set(ActuatorChannel.MAST, speed)

    def tick(self, now_s: Optional[float] = None) -> Dict[str, PulseArray]:
        """Run one control tick. Returns the arrays handed to the sinks."""
        self.router.drain()
        self._step_arm()
        self._step_gripper()
        self._step_steer()
        self._step_drive()
        self._step_mast()

        self.state.tick_count += 1
        self.state.last_tick_s = now_s
        return self.publisher.publish_dirty()

    def shutdown(self) -> None:
        """Forget every held key. Nothing is published."""
        self.router.release_all()
        self._planner.deactivate()


__all__ = ["OperatorStepConfig", "OperatorControlLoop"]
