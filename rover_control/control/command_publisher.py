#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/control/command_publisher.py
----------------------------------------------------------
Change-triggered command emission.

A `GroupPublisher` watches one or more publishing groups of an
`ActuatorStateStore`. On `publish_dirty()`, every publisher with a dirty
group encodes its array once and hands it to each of its sinks.

Dirty-flag protocol
-------------------
- The flag clears only after every sink accepted the array.
- A sink failure (`TransportError`) leaves the flag set; the next tick
  retries with the then-current values. Sinks that already accepted the
  array receive it again on retry.
- Arrays are never de-duplicated against the previous emission.

Sinks are anything with `name` and `emit(values)`. Use `CallableSink` to
wrap a plain function (e.g. a ROS publisher's `publish` after message
conversion). Exceptions other than `TransportError` raised by a wrapped
callable are converted to `TransportError`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Protocol, Sequence, Tuple

from rover_control import constants as C
from rover_control.exceptions import TransportError, wrap_transport_error
from rover_control.models.actuator import ChannelGroup
from rover_control.models.actuator_state import ActuatorStateStore
from rover_control.utils.logging import LoggerAdapter, RateLimitedLogger, get_logger_adapter

PulseArray = Tuple[int, ...]
Encoder = Callable[[], PulseArray]


# =============================================================================
# Sinks
# =============================================================================
class CommandSink(Protocol):
    name: str

    def emit(self, values: PulseArray) -> None:
        ...


class CallableSink:
    """Adapts `fn(values)` to the sink interface."""

    def __init__(self, name: str, fn: Callable[[PulseArray], None]) -> None:
        self.name = str(name)
        self._fn = fn

    def emit(self, values: PulseArray) -> None:
        try:
            self._fn(values)
        except TransportError:
            raise
        except Exception as e:
            raise wrap_transport_error(e, message=f"sink '{self.name}' rejected array", sink=self.name) from e


# =============================================================================
# Per-group publisher
# =============================================================================
@dataclass
class GroupPublisherStats:
    emit_count: int = 0
    failure_count: int = 0
    last_error: Optional[str] = None
    last_values: Optional[PulseArray] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "emit_count": self.emit_count,
            "failure_count": self.failure_count,
            "last_error": self.last_error,
            "last_values": list(self.last_values) if self.last_values is not None else None,
        }


@dataclass
class GroupPublisher:
    name: str
    groups: Tuple[ChannelGroup, ...]
    encode: Encoder
    sinks: List[CommandSink] = field(default_factory=list)
    stats: GroupPublisherStats = field(default_factory=GroupPublisherStats)

    def is_dirty(self, store: ActuatorStateStore) -> bool:
        return any(store.is_dirty(g) for g in self.groups)

    def flush(self, store: ActuatorStateStore) -> PulseArray:
        """
        Encode and emit once. Clears the dirty flags on success.

        Raises TransportError (flags untouched) if any sink fails.
        """
        values = tuple(int(v) for v in self.encode())
        try:
            for sink in self.sinks:
                sink.emit(values)
        except TransportError as e:
            self.stats.failure_count += 1
            self.stats.last_error = str(e)
            raise
        for g in self.groups:
            store.clear_dirty(g)
        self.stats.emit_count += 1
        self.stats.last_values = values
        return values


# =============================================================================
# Publisher
# =============================================================================
class CommandPublisher:
    """All group publishers of one control loop."""

    def __init__(
        self,
        store: ActuatorStateStore,
        *,
        logger: Optional[LoggerAdapter] = None,
        warn_period_s: float = C.WARN_THROTTLE_S_DEFAULT,
    ) -> None:
        self._store = store
        self._log = logger or get_logger_adapter()
        self._limited = RateLimitedLogger(self._log, period_s=warn_period_s)
        self._publishers: Dict[str, GroupPublisher] = {}

    @property
    def store(self) -> ActuatorStateStore:
        return self._store

    def add_group(
        self,
        name: str,
        groups: Sequence[ChannelGroup],
        encode: Encoder,
        sinks: Sequence[CommandSink] = (),
    ) -> GroupPublisher:
        if name in self._publishers:
            raise ValueError(f"publisher '{name}' already registered")
        pub = GroupPublisher(
            name=str(name),
            groups=tuple(ChannelGroup(g) for g in groups),
            encode=encode,
            sinks=list(sinks),
        )
        self._publishers[pub.name] = pub
        return pub

    def add_sink(self, name: str, sink: CommandSink) -> None:
        self._publishers[name].sinks.append(sink)

    def publisher(self, name: str) -> GroupPublisher:
        return self._publishers[name]

    def publish_dirty(self) -> Dict[str, PulseArray]:
        """
        Emit every publisher with a dirty group. Returns the arrays that
        were handed off, keyed by publisher name.
        """
        emitted: Dict[str, PulseArray] = {}
        for name, pub in self._publishers.items():
            if not pub.is_dirty(self._store):
                continue
            try:
                emitted[name] = pub.flush(self._store)
            except TransportError as e:
                self._limited.warn(
                    f"transport:{name}",
                    f"[{name}] emit failed, will retry next tick: {e}",
                )
        return emitted

    def stats(self) -> Dict[str, Dict[str, object]]:
        return {name: pub.stats.to_dict() for name, pub in self._publishers.items()}


__all__ = [
    "PulseArray",
    "CommandSink",
    "CallableSink",
    "GroupPublisherStats",
    "GroupPublisher",
    "CommandPublisher",
]
