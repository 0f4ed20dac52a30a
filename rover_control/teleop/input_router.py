#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/teleop/input_router.py
----------------------------------------------------
Input Event Router: key press/release notifications -> HoldState.

Notifications arrive from the transport callbacks at any time. They are only
queued (`collections.deque`, append/popleft are atomic). The control tick
calls `drain()` once at its start, so every decision inside a tick sees one
consistent HoldState and ticks are reproducible in tests.

Edge-triggered actions
----------------------
HoldState is level-triggered. `consume(key)` turns one key into an
edge-triggered input: it reports the press once and clears the held flag,
so holding the key across many ticks fires the action exactly once.
A press and release that both land inside one tick still fire once.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Optional, Set, Tuple


@dataclass(frozen=True)
class KeyEvent:
    key: int
    pressed: bool


class InputEventRouter:
    def __init__(self, max_queue: Optional[int] = None) -> None:
        self._queue: Deque[KeyEvent] = deque(maxlen=max_queue)
        self._held: Dict[int, bool] = {}
        self._pressed_in_drain: Set[int] = set()
        self._events_total = 0

    # ------------------------------------------------------------------
    # Notifier side (transport callbacks)
    # ------------------------------------------------------------------
    def on_press(self, key: int) -> None:
        self._queue.append(KeyEvent(int(key), True))

    def on_release(self, key: int) -> None:
        self._queue.append(KeyEvent(int(key), False))

    # ------------------------------------------------------------------
    # Tick side
    # ------------------------------------------------------------------
    def drain(self) -> int:
        """Apply queued events in arrival order. Returns how many were applied."""
        self._pressed_in_drain.clear()
        applied = 0
        while self._queue:
            try:
                ev = self._queue.popleft()
            except IndexError:
                break
            self._held[ev.key] = ev.pressed
            if ev.pressed:
                self._pressed_in_drain.add(ev.key)
            applied += 1
        self._events_total += applied
        return applied

    def is_held(self, key: Optional[int]) -> bool:
        if key is None:
            return False
        return self._held.get(int(key), False)

    def consume(self, key: Optional[int]) -> bool:
        """Edge-trigger `key`: True once per physical press."""
        if key is None:
            return False
        k = int(key)
        fired = self._held.get(k, False) or k in self._pressed_in_drain
        self._held[k] = False
        self._pressed_in_drain.discard(k)
        return fired

    def release_all(self) -> None:
        self._queue.clear()
        self._held.clear()
        self._pressed_in_drain.clear()

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------
    @property
    def pending(self) -> int:
        return len(self._queue)

    @property
    def events_total(self) -> int:
        return self._events_total

    def held_keys(self) -> Tuple[int, ...]:
        return tuple(sorted(k for k, v in self._held.items() if v))


__all__ = ["KeyEvent", "InputEventRouter"]
