# -*- coding: utf-8 -*-
"""
RoboOps Rover — rover_control/ros/__init__.py
---------------------------------------------
ROS 2 glue (QoS, parameters, message adapters). Importing any submodule
requires rclpy / std_msgs; the package itself imports nothing.
"""
