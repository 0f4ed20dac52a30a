#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/models/actuator_state.py
------------------------------------------------------
Actuator State Store and the per-loop state struct.

The store holds one signed semantic value per actuator channel (degrees,
drive speed units, claw percent). Writing a different value marks the
owning publishing group dirty. The command publisher clears the flag once
the group's array was handed to its sink.

Only the control-loop tick writes here. Subscription callbacks never touch
the store directly; they enqueue and the tick drains.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Tuple

from rover_control.models.actuator import (
    ActuatorChannel,
    ChannelGroup,
    GROUP_CHANNELS,
    group_of,
)
from rover_control.utils.clamp import saturate_int16


IDLE_VALUE = 0


class ActuatorStateStore:
    """
    Semantic value per channel plus one dirty flag per publishing group.

    Values saturate to the Int16 wire range; calibration clamping is the
    unit translator's job.
    """

    def __init__(self, channels: Optional[Iterable[ActuatorChannel]] = None) -> None:
        chans = tuple(channels) if channels is not None else tuple(ActuatorChannel)
        self._values: Dict[ActuatorChannel, int] = {ch: IDLE_VALUE for ch in chans}
        self._dirty: Dict[ChannelGroup, bool] = {group_of(ch): False for ch in chans}

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------
    def get(self, channel: ActuatorChannel) -> int:
        return self._values[ActuatorChannel(channel)]

    def set(self, channel: ActuatorChannel, value: int, *, force: bool = False) -> bool:
        """
        Store `value` (saturated). Returns True if the stored value changed.

        The owning group is marked dirty on change, or always with `force`.
        """
        ch = ActuatorChannel(channel)
        if ch not in self._values:
            raise KeyError(f"channel {ch.value} is not held by this store")
        new = saturate_int16(value)
        changed = self._values[ch] != new
        self._values[ch] = new
        if changed or force:
            self._dirty[group_of(ch)] = True
        return changed

    def add(self, channel: ActuatorChannel, delta: int) -> int:
        """Shift a channel by `delta`; returns the stored value."""
        self.set(channel, self.get(channel) + int(delta))
        return self.get(channel)

    def reset(self, channel: ActuatorChannel) -> int:
        """Return a channel to its idle value (0 for every semantic channel)."""
        self.set(channel, IDLE_VALUE)
        return IDLE_VALUE

    def reset_group(self, group: ChannelGroup) -> None:
        for ch in self.group_channels(group):
            self.reset(ch)

    def group_channels(self, group: ChannelGroup) -> Tuple[ActuatorChannel, ...]:
        return tuple(ch for ch in GROUP_CHANNELS[ChannelGroup(group)] if ch in self._values)

    def group_values(self, group: ChannelGroup) -> Tuple[int, ...]:
        """Values of a group in manual-array order."""
        return tuple(self._values[ch] for ch in self.group_channels(group))

    def snapshot(self) -> Dict[str, int]:
        return {ch.value: v for ch, v in self._values.items()}

    def __contains__(self, channel: object) -> bool:
        return channel in self._values

    # ------------------------------------------------------------------
    # Dirty flags
    # ------------------------------------------------------------------
    @property
    def groups(self) -> Tuple[ChannelGroup, ...]:
        return tuple(self._dirty.keys())

    def is_dirty(self, group: ChannelGroup) -> bool:
        return self._dirty.get(ChannelGroup(group), False)

    def mark_dirty(self, group: ChannelGroup) -> None:
        g = ChannelGroup(group)
        if g in self._dirty:
            self._dirty[g] = True

    def clear_dirty(self, group: ChannelGroup) -> None:
        g = ChannelGroup(group)
        if g in self._dirty:
            self._dirty[g] = False

    def dirty_groups(self) -> Tuple[ChannelGroup, ...]:
        return tuple(g for g, d in self._dirty.items() if d)

    def any_dirty(self) -> bool:
        return any(self._dirty.values())


@dataclass
class ControlLoopState:
    """Everything one control loop owns, passed by reference to each step."""
    store: ActuatorStateStore = field(default_factory=ActuatorStateStore)
    tick_count: int = 0
    last_tick_s: Optional[float] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "tick_count": self.tick_count,
            "last_tick_s": self.last_tick_s,
            "values": self.store.snapshot(),
            "dirty": [g.value for g in self.store.dirty_groups()],
        }


__all__ = ["IDLE_VALUE", "ActuatorStateStore", "ControlLoopState"]
