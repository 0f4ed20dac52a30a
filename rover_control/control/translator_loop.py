#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/control/translator_loop.py
--------------------------------------------------------
Translator stage: semantic manual-command arrays -> 15-element pulse array.

Callbacks only `submit()`. Each `tick()` (60 Hz by default) drains the queue
in arrival order, validates every array, applies the rear mounting sign and
writes the semantic values into the hardware store. If anything was written
the full pulse array is translated and handed to the sinks once.

Any accepted message marks the array dirty, even when its values repeat the
previous ones. The idle array is published on the first tick.

Validation
----------
- arm: at least 4 values (base, shoulder, elbow, wrist); 5 adds gripper
  rotate, 6 adds claw. Missing gripper fields leave the gripper unchanged.
- steer: at least 3, drive: at least 5, mast: at least 1.
- Every element must be an integer. Extra trailing elements are ignored.
A rejected array raises `MalformedCommandError` inside `apply_command()`;
`tick()` logs it (rate-limited) and keeps the previous state.
"""

from __future__ import annotations

import numbers
from collections import deque
from collections.abc import Iterable
from typing import Any, Deque, Dict, Optional, Sequence, Tuple

from rover_control import constants as C
from rover_control.control.command_publisher import CommandPublisher, CommandSink, PulseArray
from rover_control.exceptions import ErrorContext, MalformedCommandError
from rover_control.kinematics.conventions import ROVER_MOUNT_SIGNS, MountSignConvention
from rover_control.kinematics.pulse_scaling import channel_pulse
from rover_control.models.actuator import (
    GROUP_CHANNELS,
    GROUP_MIN_LENGTH,
    HARDWARE_ORDER,
    CalibrationTable,
    ChannelGroup,
    default_calibration_table,
)
from rover_control.models.actuator_state import ActuatorStateStore, ControlLoopState
from rover_control.utils.logging import LoggerAdapter, RateLimitedLogger, get_logger_adapter

HARDWARE_PUBLISHER = "hardware"


def validate_command(group: ChannelGroup, data: Any) -> Tuple[int, ...]:
    """Return the usable integer values of `data` or raise MalformedCommandError."""
    g = ChannelGroup(group)
    if isinstance(data, (str, bytes)) or not isinstance(data, Iterable):
        raise MalformedCommandError(
            f"{g.value} command is not an array",
            context=ErrorContext(group=g.value, operation="validate", value=type(data).__name__),
        )
    values = list(data)
    need = GROUP_MIN_LENGTH[g]
    if len(values) < need:
        raise MalformedCommandError(
            f"{g.value} command too short",
            context=ErrorContext(group=g.value, operation="validate", expected=need, received=len(values)),
        )
    width = len(GROUP_CHANNELS[g])
    out = []
    for i, v in enumerate(values[:width]):
        if isinstance(v, bool) or not isinstance(v, numbers.Integral):
            raise MalformedCommandError(
                f"{g.value} command element {i} is not an integer",
                context=ErrorContext(group=g.value, operation="validate", value=repr(v)),
            )
        out.append(int(v))
    return tuple(out)


class TranslatorLoop:
    def __init__(
        self,
        *,
        calibration: Optional[CalibrationTable] = None,
        mount_signs: MountSignConvention = ROVER_MOUNT_SIGNS,
        sinks: Sequence[CommandSink] = (),
        logger: Optional[LoggerAdapter] = None,
        warn_period_s: float = C.WARN_THROTTLE_S_DEFAULT,
    ) -> None:
        self._calibration = calibration or default_calibration_table()
        self._signs = mount_signs
        self._log = logger or get_logger_adapter(name="rover_control.translator")
        self._limited = RateLimitedLogger(self._log, period_s=warn_period_s)
        self._queue: Deque[Tuple[ChannelGroup, Any]] = deque()

        self.state = ControlLoopState(store=ActuatorStateStore())
        self.publisher = CommandPublisher(self.state.store, logger=self._log, warn_period_s=warn_period_s)
        self.publisher.add_group(HARDWARE_PUBLISHER, tuple(ChannelGroup), self.pulse_array, sinks)

        self.accepted_count = 0
        self.rejected_count = 0
        self.last_rejection: Optional[str] = None

        for group in ChannelGroup:
            self.state.store.mark_dirty(group)

    @property
    def store(self) -> ActuatorStateStore:
        return self.state.store

    @property
    def calibration(self) -> CalibrationTable:
        return self._calibration

    def add_sink(self, sink: CommandSink) -> None:
        self.publisher.add_sink(HARDWARE_PUBLISHER, sink)

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------
    def pulse_array(self) -> PulseArray:
        """Current 15-element hardware array."""
        store = self.state.store
        return tuple(channel_pulse(ch, store.get(ch), self._calibration) for ch in HARDWARE_ORDER)

    def initial_pulse_array(self) -> PulseArray:
        """Idle array: servo neutrals, claw open, drive neutral, mast immobile."""
        return tuple(self._calibration.idle_pulse(ch) for ch in HARDWARE_ORDER)

    # ------------------------------------------------------------------
    # Callback side
    # ------------------------------------------------------------------
    def submit(self, group: ChannelGroup, data: Any) -> None:
        self._queue.append((ChannelGroup(group), data))

    @property
    def pending(self) -> int:
        return len(self._queue)

    # ------------------------------------------------------------------
    # Tick side
    # ------------------------------------------------------------------
    def apply_command(self, group: ChannelGroup, data: Any) -> Tuple[int, ...]:
        """Validate and write one command. Raises MalformedCommandError."""
        g = ChannelGroup(group)
        values = validate_command(g, data)
        store = self.state.store
        for channel, value in zip(GROUP_CHANNELS[g], values):
            store.set(channel, self._signs.apply(channel, value))
        store.mark_dirty(g)
        return values

    def drain(self) -> int:
        applied = 0
        while self._queue:
            group, data = self._queue.popleft()
            try:
                self.apply_command(group, data)
            except MalformedCommandError as e:
                self.rejected_count += 1
                self.last_rejection = str(e)
                self._limited.warn(f"malformed:{group.value}", f"[translator] rejected: {e}")
                continue
            self.accepted_count += 1
            applied += 1
        return applied

    def tick(self, now_s: Optional[float] = None) -> Optional[PulseArray]:
        """Run one control tick. Returns the array handed off, if any."""
        self.drain()
        self.state.tick_count += 1
        self.state.last_tick_s = now_s
        return self.publisher.publish_dirty().get(HARDWARE_PUBLISHER)

    def status(self) -> Dict[str, Any]:
        return {
            "ticks": self.state.tick_count,
            "accepted": self.accepted_count,
            "rejected": self.rejected_count,
            "last_rejection": self.last_rejection,
            "pending": self.pending,
            "dirty": [g.value for g in self.state.store.dirty_groups()],
            "values": self.state.store.snapshot(),
            "publishers": self.publisher.stats(),
        }


__all__ = ["HARDWARE_PUBLISHER", "validate_command", "TranslatorLoop"]
