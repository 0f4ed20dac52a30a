# -*- coding: utf-8 -*-
"""
RoboOps Rover — rover_control/nodes/__init__.py
-----------------------------------------------
ROS 2 entry points: `manual_keyboard_control` and `arduino_command_translator`.
"""
