#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/utils/ratekeeper.py
-------------------------------------------------
Fixed-rate loop helper for the non-ROS bench tooling.

Inside the nodes the tick is a ROS timer. The bench CLI replays operator
sessions without ROS, so it needs its own monotonic-clock rate keeper with
overrun statistics (a 60 Hz translator tick that keeps overrunning points at
a sink that blocks, which must not happen).

`clock` and `sleeper` are injectable for tests.
"""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict


@dataclass
class RateStats:
    target_hz: float
    target_period_s: float
    cycles: int = 0
    overrun_count: int = 0
    total_overrun_s: float = 0.0
    last_dt_s: float = 0.0
    max_dt_s: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class RateKeeper:
    """
    Keep a manual loop near `hz`.

    >>> rk = RateKeeper(20.0)
    >>> while running:
    ...     loop.tick()
    ...     rk.sleep()

    On overrun the schedule restarts from "now + period" instead of trying to
    catch up; a control tick must never be fired twice back-to-back.
    """

    def __init__(
        self,
        hz: float,
        *,
        name: str = "ratekeeper",
        clock: Callable[[], float] = time.monotonic,
        sleeper: Callable[[float], None] = time.sleep,
    ) -> None:
        hz_f = float(hz)
        if hz_f <= 0.0:
            raise ValueError("RateKeeper hz must be > 0")
        self._name = str(name)
        self._period_s = 1.0 / hz_f
        self._clock = clock
        self._sleeper = sleeper
        self._stats = RateStats(target_hz=hz_f, target_period_s=self._period_s)

        now = float(self._clock())
        self._t_last = now
        self._t_next = now + self._period_s

    @property
    def name(self) -> str:
        return self._name

    @property
    def period_s(self) -> float:
        return self._period_s

    def sleep(self) -> float:
        """
        Sleep until the next cycle boundary. Returns the time slept
        (0.0 on overrun).
        """
        now = float(self._clock())
        remaining = self._t_next - now

        if remaining > 0.0:
            self._sleeper(remaining)
            slept = remaining
            wake = now + remaining
            self._t_next += self._period_s
        else:
            slept = 0.0
            wake = now
            self._stats.overrun_count += 1
            self._stats.total_overrun_s += -remaining
            self._t_next = wake + self._period_s

        dt = max(0.0, wake - self._t_last)
        self._t_last = wake
        self._stats.cycles += 1
        self._stats.last_dt_s = dt
        if dt > self._stats.max_dt_s:
            self._stats.max_dt_s = dt
        return slept

    def stats(self) -> RateStats:
        return RateStats(**self._stats.to_dict())

    def summary(self) -> str:
        st = self._stats
        return (
            f"[{self._name}] target={st.target_hz:.1f}Hz cycles={st.cycles} "
            f"overruns={st.overrun_count} max_dt={st.max_dt_s:.4f}s"
        )


__all__ = ["RateStats", "RateKeeper"]
