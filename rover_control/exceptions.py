#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/exceptions.py
-------------------------------------------
Exception hierarchy shared by the control core, the output sinks and the
ROS nodes.

Error taxonomy
--------------
- Out-of-range semantic values (over-steering, over-driving) are NOT errors:
  the unit translator saturates them silently.
- `MalformedCommandError`: an incoming manual-command array is too short or
  carries non-integer elements. The translator rejects the message, keeps its
  previous state and keeps running.
- `TransportError`: a sink could not take an array. The command publisher
  keeps the group dirty so the next tick retries.
- `CalibrationError`: a calibration record is inconsistent. Raised at startup
  only.
- `PwmBoardError`: failure inside the direct PCA9685 output path.

No exception in this package is meant to stop a control loop.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


# =============================================================================
# Structured context
# =============================================================================
@dataclass(frozen=True)
class ErrorContext:
    """
    Optional structured context attached to package exceptions.

    Typical fields:
    - group="arm", operation="validate", expected=4, received=2
    - sink="pca9685", channel=7, value=345
    """
    group: Optional[str] = None
    operation: Optional[str] = None
    sink: Optional[str] = None
    channel: Optional[int] = None
    value: Optional[int | float | str] = None
    expected: Optional[int] = None
    received: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for key in ("group", "operation", "sink", "channel", "value", "expected", "received"):
            val = getattr(self, key)
            if val is not None:
                out[key] = val
        if self.extra:
            out["extra"] = dict(self.extra)
        return out

    def format_compact(self) -> str:
        return ", ".join(f"{k}={v}" for k, v in self.to_dict().items())


# =============================================================================
# Base exception
# =============================================================================
class RoverControlError(RuntimeError):
    """
    Base exception for all `rover_control` failures.
    """

    def __init__(
        self,
        message: str,
        *,
        context: Optional[ErrorContext] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        self.message = str(message)
        self.context = context
        self.cause = cause
        super().__init__(self.__str__())
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        if self.context is None:
            return self.message
        ctx = self.context.format_compact()
        if not ctx:
            return self.message
        return f"{self.message} [{ctx}]"

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "type": self.__class__.__name__,
            "message": self.message,
        }
        if self.context is not None:
            out["context"] = self.context.to_dict()
        if self.cause is not None:
            out["cause_type"] = self.cause.__class__.__name__
            out["cause_message"] = str(self.cause)
        return out


# =============================================================================
# Concrete errors
# =============================================================================
class CalibrationError(RoverControlError):
    """Invalid calibration record (pulse ordering, 12-bit range, zero scale)."""


class MalformedCommandError(RoverControlError):
    """Incoming command array rejected before it touched any state."""


class TransportError(RoverControlError):
    """A command sink failed to accept an array."""


class PwmBoardError(TransportError):
    """Direct PCA9685 output failed (I2C open/write, bad channel, closed board)."""


# =============================================================================
# Helpers
# =============================================================================
def wrap_transport_error(
    exc: BaseException,
    *,
    message: str,
    sink: str,
    group: Optional[str] = None,
    channel: Optional[int] = None,
    value: Optional[int] = None,
) -> TransportError:
    """Wrap a low-level exception raised by a sink into a TransportError."""
    ctx = ErrorContext(group=group, operation="emit", sink=sink, channel=channel, value=value)
    return TransportError(message, context=ctx, cause=exc)


__all__ = [
    "ErrorContext",
    "RoverControlError",
    "CalibrationError",
    "MalformedCommandError",
    "TransportError",
    "PwmBoardError",
    "wrap_transport_error",
]
