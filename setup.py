#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
RoboOps Rover — setup.py (ROS 2, ament_python package)
------------------------------------------------------
Purpose:
- Package the Python modules under `rover_control/`
- Install the ament index resource, package.xml, launch/ and config/
- Expose both control-stage nodes as console scripts

The pure control core (everything outside `rover_control/nodes` and
`rover_control/ros`) imports without ROS, so `pytest test/` runs on any
machine with pytest installed.
"""

from glob import glob

from setuptools import find_packages, setup

package_name = "rover_control"

setup(
    name=package_name,
    version="0.2.0",
    packages=find_packages(exclude=("test", "test.*")),
    include_package_data=True,
    data_files=[
        # ament index resource (required for ROS 2 package discovery)
        ("share/ament_index/resource_index/packages", [f"resource/{package_name}"]),
        # package manifest
        (f"share/{package_name}", ["package.xml"]),
        (f"share/{package_name}/launch", glob("launch/*.launch.py")),
        (f"share/{package_name}/config", glob("config/*.yaml")),
        # non-ROS bench tools, run with `ros2 run rover_control <script>.py`
        (f"lib/{package_name}", glob("scripts/*.py")),
    ],
    install_requires=[
        "setuptools",
        "smbus2",
    ],
    extras_require={
        "test": ["pytest"],
    },
    zip_safe=False,
    maintainer="RoboOps Rover Team",
    maintainer_email="roboops-rover@example.com",
    description=(
        "RoboOps Rover teleoperation control layer: keyboard operator stage "
        "(arm homing, gripper, steering, drive, mast) and translator stage "
        "(semantic commands -> 15-channel PWM pulse array, optional PCA9685 output)."
    ),
    license="Proprietary",
    tests_require=["pytest"],
    entry_points={
        "console_scripts": [
            "manual_keyboard_control = rover_control.nodes.manual_keyboard_control_node:main",
            "arduino_command_translator = rover_control.nodes.command_translator_node:main",
        ],
    },
)
