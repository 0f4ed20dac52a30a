#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/nodes/command_translator_node.py
--------------------------------------------------------------
Translator node: semantic manual-command topics -> raw PWM pulse array.

Inputs
------
- /arm_cmd_manual     (std_msgs/Int16MultiArray)
- /steer_cmd_manual   (std_msgs/Int16MultiArray)
- /drive_cmd_manual   (std_msgs/Int16MultiArray)
- /mast_cmd_manual    (std_msgs/Int16)

Outputs
-------
- /arduino_cmd                 (std_msgs/UInt16MultiArray)  15 pulse counts, hardware order
- /rover_control/translator_state (std_msgs/String)         JSON status

Optional hardware sink (parameter `output_backend`)
---------------------------------------------------
- topic   : publish `/arduino_cmd` only (microcontroller drives the PWM)
- dryrun  : also record every array in memory
- pca9685 : also write every array to a PCA9685 board over I2C

Callbacks only enqueue. The 60 Hz tick validates, translates and publishes
once per tick when anything was accepted.
"""

from __future__ import annotations

import traceback
from typing import Any, Optional

import rclpy
from rclpy.node import Node
from std_msgs.msg import Int16, Int16MultiArray, String, UInt16MultiArray

from rover_control import constants as C
from rover_control.control.command_publisher import CallableSink
from rover_control.control.translator_loop import TranslatorLoop
from rover_control.drivers.board_factory import make_pwm_sink
from rover_control.models.actuator import ChannelGroup
from rover_control.ros.adapters import (
    int16_msg_to_values,
    int16_scalar_to_values,
    json_to_string_msg,
    pulse_array_to_msg,
)
from rover_control.ros.params import pwm_sink_config, read_calibration_table, read_translator_defaults
from rover_control.ros.qos_profiles import qos_hardware_command, qos_manual_command, qos_state_string
from rover_control.utils.logging import get_logger_adapter, log_exception
from rover_control.version import get_package_version_info


class CommandTranslatorNode(Node):
    def __init__(self) -> None:
        super().__init__(C.NODE_NAME_TRANSLATOR)
        self._log = get_logger_adapter(self)

        self.defaults = read_translator_defaults(self)
        d = self.defaults
        calibration = read_calibration_table(self)

        self.pub_hw = self.create_publisher(UInt16MultiArray, d.hardware_topic, qos_hardware_command())
        self.pub_status = self.create_publisher(String, d.state_topic, qos_state_string())

        self.translator = TranslatorLoop(
            calibration=calibration,
            sinks=[CallableSink("arduino_cmd", lambda v: self.pub_hw.publish(pulse_array_to_msg(v)))],
            logger=self._log,
        )

        self.board: Optional[Any] = make_pwm_sink(pwm_sink_config(d), logger=self._log)
        if self.board is not None:
            self.translator.add_sink(self.board)

        qos_cmd = qos_manual_command()
        self.sub_arm = self.create_subscription(
            Int16MultiArray, d.arm_topic, lambda m: self._on_command(ChannelGroup.ARM, int16_msg_to_values(m)), qos_cmd
        )
        self.sub_steer = self.create_subscription(
            Int16MultiArray, d.steer_topic, lambda m: self._on_command(ChannelGroup.STEER, int16_msg_to_values(m)), qos_cmd
        )
        self.sub_drive = self.create_subscription(
            Int16MultiArray, d.drive_topic, lambda m: self._on_command(ChannelGroup.DRIVE, int16_msg_to_values(m)), qos_cmd
        )
        self.sub_mast = self.create_subscription(
            Int16, d.mast_topic, lambda m: self._on_command(ChannelGroup.MAST, int16_scalar_to_values(m)), qos_cmd
        )

        self.timer = self.create_timer(1.0 / d.loop_hz, self._tick)
        self.status_timer = None
        if d.status_publish_hz > 0.0:
            self.status_timer = self.create_timer(1.0 / d.status_publish_hz, self._publish_status)

        self._log.info(get_package_version_info().banner())
        self._log.info(
            f"arduino_command_translator started | out={d.hardware_topic} backend={d.output_backend} "
            f"loop_hz={d.loop_hz:.1f}"
        )

    # =========================================================================
    # Callbacks (enqueue only)
    # =========================================================================
    def _on_command(self, group: ChannelGroup, values) -> None:
        self.translator.submit(group, values)

    # =========================================================================
    # Timers
    # =========================================================================
    def _tick(self) -> None:
        try:
            now_s = self.get_clock().now().nanoseconds * 1e-9
            self.translator.tick(now_s)
        except Exception as e:
            log_exception(self._log, e, message="translator tick failed", component="arduino_command_translator")

    def _publish_status(self) -> None:
        status = self.translator.status()
        status["backend"] = self.defaults.output_backend
        if self.board is not None and hasattr(self.board, "get_state_dict"):
            status["board"] = self.board.get_state_dict()
        self.pub_status.publish(json_to_string_msg(status))

    def destroy_node(self) -> bool:
        try:
            self.timer.cancel()
            if self.status_timer is not None:
                self.status_timer.cancel()
            if self.board is not None:
                self.board.close()
            self._log.info("arduino_command_translator stopped")
        finally:
            return super().destroy_node()


# =============================================================================
# Entry point
# =============================================================================
def main(args=None) -> None:
    rclpy.init(args=args)
    node: Optional[CommandTranslatorNode] = None
    try:
        node = CommandTranslatorNode()
        rclpy.spin(node)
    except KeyboardInterrupt:
        pass
    except Exception as e:
        print(f"[arduino_command_translator] Fatal error: {e}")
        traceback.print_exc()
    finally:
        if node is not None:
            node.destroy_node()
        if rclpy.ok():
            rclpy.shutdown()


if __name__ == "__main__":
    main()
