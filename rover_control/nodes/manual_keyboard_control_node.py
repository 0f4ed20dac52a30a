#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/nodes/manual_keyboard_control_node.py
-------------------------------------------------------------------
Operator-input node: keyboard events -> semantic manual-command topics.

Inputs
------
- /keyboard/keydown   (std_msgs/UInt16)   key code pressed
- /keyboard/keyup     (std_msgs/UInt16)   key code released

Outputs
-------
- /arm_cmd_manual     (std_msgs/Int16MultiArray)  base, shoulder, elbow, wrist, gripper rotate, claw %
- /steer_cmd_manual   (std_msgs/Int16MultiArray)  rear, front-right, front-left (deg)
- /drive_cmd_manual   (std_msgs/Int16MultiArray)  rear, side-right, side-left, front-right, front-left
- /mast_cmd_manual    (std_msgs/Int16)            signed mast speed

Subscription callbacks only enqueue key events. The timer tick (20 Hz)
drains them and publishes every group that changed.
"""

from __future__ import annotations

import traceback
from typing import Optional

import rclpy
from rclpy.node import Node
from std_msgs.msg import Int16, Int16MultiArray, UInt16

from rover_control import constants as C
from rover_control.control.command_publisher import CallableSink
from rover_control.control.operator_loop import OperatorControlLoop, OperatorStepConfig
from rover_control.models.actuator import ChannelGroup
from rover_control.ros.adapters import int16_array_to_msg, int16_to_msg
from rover_control.ros.params import read_operator_defaults
from rover_control.ros.qos_profiles import qos_keyboard, qos_manual_command
from rover_control.teleop.key_bindings import DEFAULT_KEY_BINDINGS
from rover_control.utils.logging import get_logger_adapter, log_exception
from rover_control.version import get_package_version_info


class ManualKeyboardControlNode(Node):
    def __init__(self) -> None:
        super().__init__(C.NODE_NAME_OPERATOR)
        self._log = get_logger_adapter(self)

        self.defaults = read_operator_defaults(self)
        d = self.defaults

        qos_cmd = qos_manual_command()
        self.pub_arm = self.create_publisher(Int16MultiArray, d.arm_topic, qos_cmd)
        self.pub_steer = self.create_publisher(Int16MultiArray, d.steer_topic, qos_cmd)
        self.pub_drive = self.create_publisher(Int16MultiArray, d.drive_topic, qos_cmd)
        self.pub_mast = self.create_publisher(Int16, d.mast_topic, qos_cmd)

        sinks = {
            ChannelGroup.ARM: [CallableSink("arm", lambda v: self.pub_arm.publish(int16_array_to_msg(v)))],
            ChannelGroup.STEER: [CallableSink("steer", lambda v: self.pub_steer.publish(int16_array_to_msg(v)))],
            ChannelGroup.DRIVE: [CallableSink("drive", lambda v: self.pub_drive.publish(int16_array_to_msg(v)))],
            ChannelGroup.MAST: [CallableSink("mast", lambda v: self.pub_mast.publish(int16_to_msg(v[0])))],
        }
        self.loop = OperatorControlLoop(
            bindings=DEFAULT_KEY_BINDINGS,
            config=OperatorStepConfig.from_defaults(d),
            sinks=sinks,
            logger=self._log,
        )

        qos_keys = qos_keyboard()
        self.sub_keydown = self.create_subscription(UInt16, d.key_down_topic, self._on_key_down, qos_keys)
        self.sub_keyup = self.create_subscription(UInt16, d.key_up_topic, self._on_key_up, qos_keys)

        self.timer = self.create_timer(1.0 / d.loop_hz, self._tick)

        self._log.info(get_package_version_info().banner())
        self._log.info(
            f"manual_keyboard_control started | keys={d.key_down_topic},{d.key_up_topic} "
            f"loop_hz={d.loop_hz:.1f}"
        )
        self._log.info(f"Key bindings: {DEFAULT_KEY_BINDINGS.describe()}")

    # =========================================================================
    # Callbacks (enqueue only)
    # =========================================================================
    def _on_key_down(self, msg: UInt16) -> None:
        self.loop.on_key_down(int(msg.data))

    def _on_key_up(self, msg: UInt16) -> None:
        self.loop.on_key_up(int(msg.data))

    # =========================================================================
    # Tick
    # =========================================================================
    def _tick(self) -> None:
        try:
            now_s = self.get_clock().now().nanoseconds * 1e-9
            self.loop.tick(now_s)
        except Exception as e:
            log_exception(self._log, e, message="operator tick failed", component="manual_keyboard_control")

    def destroy_node(self) -> bool:
        try:
            self.timer.cancel()
            self.loop.shutdown()
            self._log.info("manual_keyboard_control stopped")
        finally:
            return super().destroy_node()


# =============================================================================
# Entry point
# =============================================================================
def main(args=None) -> None:
    rclpy.init(args=args)
    node: Optional[ManualKeyboardControlNode] = None
    try:
        node = ManualKeyboardControlNode()
        rclpy.spin(node)
    except KeyboardInterrupt:
        pass
    except Exception as e:
        print(f"[manual_keyboard_control] Fatal error: {e}")
        traceback.print_exc()
    finally:
        if node is not None:
            node.destroy_node()
        if rclpy.ok():
            rclpy.shutdown()


if __name__ == "__main__":
    main()
