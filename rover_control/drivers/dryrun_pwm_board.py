#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/drivers/dryrun_pwm_board.py
---------------------------------------------------------
Software-only stand-in for the hardware pulse sink.

Purpose
- Run the translator (and the bench CLI) without a microcontroller or a
  PCA9685 attached
- Keep a bounded history of every array it accepted, for tests and
  diagnostics
- Simulate a failing transport with `set_fault(True)`: `emit()` then raises
  `PwmBoardError`, which the command publisher treats as a failed hand-off

Typical use
-----------
board = DryRunPwmBoard()
translator = TranslatorLoop(sinks=[board])
translator.tick()
board.last_values  # idle array
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from rover_control.exceptions import ErrorContext, PwmBoardError
from rover_control.utils.logging import LoggerAdapter


@dataclass(frozen=True)
class DryRunPwmRecord:
    timestamp_s: float
    values: Tuple[int, ...]

    def as_dict(self) -> Dict[str, object]:
        return {"timestamp_s": self.timestamp_s, "values": list(self.values)}


class DryRunPwmBoard:
    def __init__(
        self,
        *,
        name: str = "dryrun",
        max_history: int = 1000,
        logger: Optional[LoggerAdapter] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if int(max_history) < 1:
            raise ValueError(f"max_history must be >= 1, got {max_history}")
        self.name = str(name)
        self.max_history = int(max_history)
        self._log = logger
        self._clock = clock
        self._history: List[DryRunPwmRecord] = []
        self._fault = False
        self._open = True
        self.emit_count = 0
        self.reject_count = 0

    def emit(self, values: Sequence[int]) -> None:
        if not self._open:
            self.reject_count += 1
            raise PwmBoardError(f"{self.name} is closed", context=ErrorContext(sink=self.name))
        if self._fault:
            self.reject_count += 1
            raise PwmBoardError(f"{self.name} simulated fault", context=ErrorContext(sink=self.name))

        rec = DryRunPwmRecord(timestamp_s=float(self._clock()), values=tuple(int(v) for v in values))
        self._history.append(rec)
        if len(self._history) > self.max_history:
            self._history = self._history[-self.max_history:]
        self.emit_count += 1
        if self._log is not None:
            self._log.debug(f"[{self.name}] #{self.emit_count} {list(rec.values)}")

    def set_fault(self, active: bool = True) -> None:
        self._fault = bool(active)

    @property
    def fault_active(self) -> bool:
        return self._fault

    @property
    def last_values(self) -> Optional[Tuple[int, ...]]:
        return self._history[-1].values if self._history else None

    def get_history(self) -> List[DryRunPwmRecord]:
        return list(self._history)

    def reset_history(self) -> None:
        self._history.clear()

    def close(self) -> None:
        self._open = False

    def get_state_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "is_open": self._open,
            "fault_active": self._fault,
            "emit_count": self.emit_count,
            "reject_count": self.reject_count,
            "history_len": len(self._history),
            "last_values": list(self.last_values) if self.last_values is not None else None,
        }


__all__ = ["DryRunPwmRecord", "DryRunPwmBoard"]
