#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — Control Bringup Launch (rover_control)
------------------------------------------------------
Starts the two control stages of the rover:

- manual_keyboard_control     keyboard events -> manual command topics (20 Hz)
- arduino_command_translator  manual commands -> /arduino_cmd pulse array (60 Hz)

Parameters come from `config/rover_control.yaml`, then the launch arguments
below override the rates, the input/output topics and the output backend.

Examples
--------
ros2 launch rover_control rover_control_bringup.launch.py

# Bench run without a microcontroller, arrays recorded in memory
ros2 launch rover_control rover_control_bringup.launch.py output_backend:=dryrun

# Drive a PCA9685 directly from the translator
ros2 launch rover_control rover_control_bringup.launch.py output_backend:=pca9685

# Translator only (operator input from another machine)
ros2 launch rover_control rover_control_bringup.launch.py use_operator:=false
"""

from launch import LaunchDescription
from launch.actions import DeclareLaunchArgument, LogInfo
from launch.conditions import IfCondition
from launch.substitutions import LaunchConfiguration, PathJoinSubstitution
from launch_ros.actions import Node
from launch_ros.parameter_descriptions import ParameterValue
from launch_ros.substitutions import FindPackageShare


def generate_launch_description() -> LaunchDescription:
    pkg_share = FindPackageShare("rover_control")

    params_file = LaunchConfiguration("params_file")
    use_operator = LaunchConfiguration("use_operator")
    use_translator = LaunchConfiguration("use_translator")
    operator_loop_hz = LaunchConfiguration("operator_loop_hz")
    translator_loop_hz = LaunchConfiguration("translator_loop_hz")
    output_backend = LaunchConfiguration("output_backend")
    log_level = LaunchConfiguration("log_level")
    output = LaunchConfiguration("output")
    key_down_topic = LaunchConfiguration("key_down_topic")
    key_up_topic = LaunchConfiguration("key_up_topic")
    hardware_topic = LaunchConfiguration("hardware_topic")

    default_params = PathJoinSubstitution([pkg_share, "config", "rover_control.yaml"])

    operator_node = Node(
        package="rover_control",
        executable="manual_keyboard_control",
        name="manual_keyboard_control",
        output=output,
        condition=IfCondition(use_operator),
        parameters=[
            params_file,
            {
                "loop_hz": ParameterValue(operator_loop_hz, value_type=float),
                "key_down_topic": ParameterValue(key_down_topic, value_type=str),
                "key_up_topic": ParameterValue(key_up_topic, value_type=str),
            },
        ],
        arguments=["--ros-args", "--log-level", log_level],
    )

    translator_node = Node(
        package="rover_control",
        executable="arduino_command_translator",
        name="arduino_command_translator",
        output=output,
        condition=IfCondition(use_translator),
        parameters=[
            params_file,
            {
                "loop_hz": ParameterValue(translator_loop_hz, value_type=float),
                "output_backend": ParameterValue(output_backend, value_type=str),
                "hardware_topic": ParameterValue(hardware_topic, value_type=str),
            },
        ],
        arguments=["--ros-args", "--log-level", log_level],
    )

    return LaunchDescription([
        DeclareLaunchArgument(
            "params_file",
            default_value=default_params,
            description="YAML parameter file for both nodes.",
        ),
        DeclareLaunchArgument("use_operator", default_value="true"),
        DeclareLaunchArgument("use_translator", default_value="true"),
        DeclareLaunchArgument("operator_loop_hz", default_value="20.0"),
        DeclareLaunchArgument("translator_loop_hz", default_value="60.0"),
        DeclareLaunchArgument(
            "output_backend",
            default_value="topic",
            description="Translator hardware sink: topic | dryrun | pca9685",
        ),
        DeclareLaunchArgument("key_down_topic", default_value="/keyboard/keydown"),
        DeclareLaunchArgument("key_up_topic", default_value="/keyboard/keyup"),
        DeclareLaunchArgument("hardware_topic", default_value="/arduino_cmd"),
        DeclareLaunchArgument("log_level", default_value="info"),
        DeclareLaunchArgument("output", default_value="screen"),

        LogInfo(msg=["[rover_control] Starting control stages (backend=", output_backend, ")"]),
        operator_node,
        translator_node,
    ])
