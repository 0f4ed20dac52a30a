#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/utils/logging.py
----------------------------------------------
Logging glue for the ROS-free control core.

The operator/translator loops, the command publisher and the sinks must log
the same way whether they run:
- inside a ROS 2 node (`node.get_logger()`), or
- in the bench CLI / pytest (stdlib `logging`).

`LoggerAdapter` hides which one is underneath. `RateLimitedLogger` keeps a
60 Hz loop from flooding the console when the same failure repeats every tick
(malformed command stream, unplugged PWM board).

Typical usage
-------------
logger = get_logger_adapter(node)          # inside a node
logger = get_logger_adapter()              # plain python
limited = RateLimitedLogger(logger, period_s=1.0)
limited.warn("malformed:arm", "arm command rejected ...")
"""

from __future__ import annotations

import logging
import sys
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional


_DEFAULT_NAME = "rover_control"


# =============================================================================
# Stdlib fallback logger
# =============================================================================
def _ensure_std_logger(name: str = _DEFAULT_NAME) -> logging.Logger:
    """Return a configured stdlib logger (idempotent)."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    return logger


# =============================================================================
# Adapter (ROS2 logger or stdlib logger)
# =============================================================================
@dataclass
class LoggerAdapter:
    """
    Wraps either a ROS 2 logger (`debug/info/warn/error`) or a stdlib
    `logging.Logger` (`debug/info/warning/error`) behind ROS-style methods.
    """
    target: Any = None
    name: str = _DEFAULT_NAME

    def __post_init__(self) -> None:
        if self.target is None:
            self.target = _ensure_std_logger(self.name)

    @property
    def is_std_logger(self) -> bool:
        return isinstance(self.target, logging.Logger)

    def debug(self, msg: Any) -> None:
        self.target.debug(str(msg))

    def info(self, msg: Any) -> None:
        self.target.info(str(msg))

    def warn(self, msg: Any) -> None:
        if self.is_std_logger:
            self.target.warning(str(msg))
        else:
            self.target.warn(str(msg))

    def error(self, msg: Any) -> None:
        self.target.error(str(msg))


def get_logger_adapter(source: Any = None, *, name: str = _DEFAULT_NAME) -> LoggerAdapter:
    """
    Build a LoggerAdapter from a ROS node, a ROS logger, a stdlib logger, an
    existing adapter, or nothing (stdlib fallback).
    """
    if isinstance(source, LoggerAdapter):
        return source
    if source is None:
        return LoggerAdapter(target=_ensure_std_logger(name), name=name)
    if hasattr(source, "get_logger") and callable(source.get_logger):
        return LoggerAdapter(target=source.get_logger(), name=name)
    return LoggerAdapter(target=source, name=name)


# =============================================================================
# Structured helpers
# =============================================================================
def format_kv(**kwargs: Any) -> str:
    """
    format_kv(group="arm", expected=4) -> "group=arm expected=4"
    """
    return " ".join(f"{k}={v}" for k, v in kwargs.items())


def log_exception(
    logger: LoggerAdapter,
    exc: BaseException,
    *,
    message: str = "Unhandled exception",
    component: Optional[str] = None,
) -> None:
    """Compact one-line exception log (no traceback; used inside tick loops)."""
    text = f"{message} | {exc.__class__.__name__}: {exc}"
    logger.error(f"[{component}] {text}" if component else text)


# =============================================================================
# Rate-limited logging
# =============================================================================
@dataclass
class RateLimitedLogger:
    """
    Per-key rate limiter for warnings repeated every control tick.

    `clock` is injectable so tests can drive time explicitly.
    """
    logger: LoggerAdapter
    period_s: float = 1.0
    clock: Callable[[], float] = time.monotonic
    _last_emit: Dict[str, float] = field(default_factory=dict)
    suppressed: Dict[str, int] = field(default_factory=dict)

    def _can_emit(self, key: str) -> bool:
        now = float(self.clock())
        last = self._last_emit.get(key)
        if last is None or (now - last) >= max(0.0, float(self.period_s)):
            self._last_emit[key] = now
            return True
        self.suppressed[key] = self.suppressed.get(key, 0) + 1
        return False

    def _emit(self, key: str, msg: Any, fn: Callable[[Any], None]) -> bool:
        if not self._can_emit(key):
            return False
        dropped = self.suppressed.pop(key, 0)
        fn(f"{msg} (+{dropped} suppressed)" if dropped else msg)
        return True

    def info(self, key: str, msg: Any) -> bool:
        return self._emit(key, msg, self.logger.info)

    def warn(self, key: str, msg: Any) -> bool:
        return self._emit(key, msg, self.logger.warn)

    def error(self, key: str, msg: Any) -> bool:
        return self._emit(key, msg, self.logger.error)


__all__ = [
    "LoggerAdapter",
    "RateLimitedLogger",
    "get_logger_adapter",
    "format_kv",
    "log_exception",
]
