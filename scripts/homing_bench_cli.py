#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/scripts/homing_bench_cli.py
---------------------------------------------------------
Bench replay of the two control stages without ROS.

A scripted key sequence is fed to `OperatorControlLoop`; every manual
command it publishes goes straight into `TranslatorLoop`, whose pulse arrays
land on a `DryRunPwmBoard`. Both loops are paced with `RateKeeper` at their
own rates (translator ticks interleaved per operator tick).

Script format
-------------
Whitespace separated `KEYS:TICKS` items. KEYS are held together for TICKS
operator ticks, then released. `-` holds nothing.

  j:40        raise the shoulder for 40 ticks (2 s at 20 Hz)
  p:200       hold return-home for 200 ticks
  b:1 -:5     toggle the gripper, then idle

Examples
--------
# Raise shoulder and wrist, then home the arm, as fast as possible
ros2 run rover_control homing_bench_cli.py --script "jo:60 p:200" --fast

# Start from a given pose and print every hardware array
ros2 run rover_control homing_bench_cli.py --pose 10,70,0,0 --script "p:80" --verbose
"""

from __future__ import annotations

import argparse
import sys
import time
from typing import List, Optional, Sequence, Tuple

from rover_control import constants as C
from rover_control.control.command_publisher import CallableSink
from rover_control.control.operator_loop import OperatorControlLoop
from rover_control.control.translator_loop import TranslatorLoop
from rover_control.drivers.dryrun_pwm_board import DryRunPwmBoard
from rover_control.models.actuator import ChannelGroup
from rover_control.safety.arm_homing import ArmPose
from rover_control.teleop.key_bindings import key_code
from rover_control.utils.logging import get_logger_adapter
from rover_control.utils.ratekeeper import RateKeeper
from rover_control.version import get_package_version_info


ScriptStep = Tuple[str, int]


def parse_script(text: str) -> List[ScriptStep]:
    steps: List[ScriptStep] = []
    for item in str(text).split():
        keys, sep, ticks = item.partition(":")
        if not sep:
            raise ValueError(f"script item {item!r} is not KEYS:TICKS")
        n = int(ticks)
        if n < 1:
            raise ValueError(f"script item {item!r} needs at least one tick")
        steps.append(("" if keys == "-" else keys, n))
    if not steps:
        raise ValueError("empty script")
    return steps


def parse_pose(text: str) -> ArmPose:
    parts = [int(p) for p in str(text).split(",")]
    if len(parts) != 4:
        raise ValueError("pose needs base,shoulder,elbow,wrist")
    return ArmPose(*parts)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="homing_bench_cli.py",
        description="Replay a key script through the operator and translator stages (no ROS).",
    )
    p.add_argument("--script", default="jo:60 p:200", help="KEYS:TICKS items (default: 'jo:60 p:200')")
    p.add_argument("--pose", default=None, help="Initial arm pose base,shoulder,elbow,wrist in degrees")
    p.add_argument("--operator-hz", type=float, default=C.OPERATOR_LOOP_HZ_DEFAULT)
    p.add_argument("--translator-hz", type=float, default=C.TRANSLATOR_LOOP_HZ_DEFAULT)
    p.add_argument("--fast", action="store_true", help="Do not sleep between ticks")
    p.add_argument("--verbose", action="store_true", help="Print every hardware array")
    p.add_argument("--version", action="version", version=get_package_version_info().banner())
    return p


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        steps = parse_script(args.script)
        pose = parse_pose(args.pose) if args.pose else None
        operator_hz = max(C.LOOP_HZ_MIN, min(C.LOOP_HZ_MAX, float(args.operator_hz)))
        translator_hz = max(operator_hz, min(C.LOOP_HZ_MAX, float(args.translator_hz)))
    except ValueError as e:
        print(f"[homing_bench_cli.py] Invalid arguments: {e}", file=sys.stderr)
        return 2

    log = get_logger_adapter(name="rover_control.bench")
    board = DryRunPwmBoard(logger=log)
    translator = TranslatorLoop(sinks=[board], logger=log)

    sinks = {
        group: [CallableSink(group.value, lambda v, g=group: translator.submit(g, v))]
        for group in ChannelGroup
    }
    operator = OperatorControlLoop(sinks=sinks, logger=log)
    if pose is not None:
        pose.apply_to(operator.store)
        operator.store.mark_dirty(ChannelGroup.ARM)

    sleeper = (lambda _s: None) if args.fast else time.sleep
    rk_op = RateKeeper(operator_hz, name="operator", sleeper=sleeper)
    rk_tr = RateKeeper(translator_hz, name="translator", sleeper=sleeper)
    ratio = max(1, int(round(translator_hz / operator_hz)))

    print(get_package_version_info().banner())
    print(f"script={args.script!r} operator={operator_hz:.1f}Hz translator={translator_hz:.1f}Hz")

    try:
        for keys, ticks in steps:
            codes = [key_code(k) for k in keys]
            for code in codes:
                operator.on_key_down(code)
            for _ in range(ticks):
                operator.tick(time.monotonic())
                for _ in range(ratio):
                    out = translator.tick(time.monotonic())
                    if out is not None and args.verbose:
                        print(f"  {list(out)}")
                    rk_tr.sleep()
                rk_op.sleep()
            for code in codes:
                operator.on_key_up(code)
            arm = operator.store.group_values(ChannelGroup.ARM)
            print(f"{keys or '-'}:{ticks} -> arm={list(arm)} homing={operator.planner.phase.value}")
    except KeyboardInterrupt:
        print("[homing_bench_cli.py] interrupted")
    finally:
        operator.shutdown()
        board.close()

    print(f"final hardware array: {list(board.last_values or ())}")
    print(f"arrays emitted: {board.emit_count}")
    print(rk_op.summary())
    print(rk_tr.summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())
