# -*- coding: utf-8 -*-

"""
RoboOps Rover — rover_control/constants.py
------------------------------------------
Centralized package-wide constants for `rover_control`.

Purpose
-------
Keep topic names, loop rates, teleop step sizes and the factory PWM
calibration of every actuator in one place so both control stages (operator
input and command translator), the bench script and the tests agree.

Notes
-----
- Dependency-free (no ROS imports).
- These are *code defaults*. ROS parameters override them at node startup.
- Pulse values are 12-bit PCA9685 counts at 50 Hz (0..4095).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final


# =============================================================================
# Package / Identity
# =============================================================================
PACKAGE_NAME: Final[str] = "rover_control"
ROBOT_NAME: Final[str] = "RoboOps Rover"

NODE_NAME_OPERATOR: Final[str] = "manual_keyboard_control"
NODE_NAME_TRANSLATOR: Final[str] = "arduino_command_translator"


# =============================================================================
# Topic Names (code defaults)
# =============================================================================
TOPIC_KEY_DOWN: Final[str] = "/keyboard/keydown"
TOPIC_KEY_UP: Final[str] = "/keyboard/keyup"

TOPIC_ARM_CMD_MANUAL: Final[str] = "/arm_cmd_manual"
TOPIC_STEER_CMD_MANUAL: Final[str] = "/steer_cmd_manual"
TOPIC_DRIVE_CMD_MANUAL: Final[str] = "/drive_cmd_manual"
TOPIC_MAST_CMD_MANUAL: Final[str] = "/mast_cmd_manual"

TOPIC_HARDWARE_CMD: Final[str] = "/arduino_cmd"
TOPIC_TRANSLATOR_STATE: Final[str] = "/rover_control/translator_state"


# =============================================================================
# Loop Rates
# =============================================================================
OPERATOR_LOOP_HZ_DEFAULT: Final[float] = 20.0
TRANSLATOR_LOOP_HZ_DEFAULT: Final[float] = 60.0
STATUS_PUBLISH_HZ_DEFAULT: Final[float] = 1.0

LOOP_HZ_MIN: Final[float] = 1.0
LOOP_HZ_MAX: Final[float] = 200.0


# =============================================================================
# PWM domain
# =============================================================================
PWM_FREQUENCY_HZ: Final[float] = 50.0
PWM_RESOLUTION: Final[int] = 4096
PWM_MIN_COUNT: Final[int] = 0
PWM_MAX_COUNT: Final[int] = PWM_RESOLUTION - 1

# Manual-command topics carry Int16 elements
INT16_MIN: Final[int] = -32768
INT16_MAX: Final[int] = 32767


# =============================================================================
# Factory calibration (stock rover hardware)
# =============================================================================
# Hitec HS-785HB arm servos
ARM_PWM_NEUTRAL: Final[int] = 315
ARM_PWM_MIN: Final[int] = 126
ARM_PWM_MAX: Final[int] = 504
ARM_PWM_360_DEGREES: Final[int] = 216

# Steering servos
STEER_PWM_NEUTRAL: Final[int] = 295
STEER_PWM_MIN: Final[int] = 105
STEER_PWM_MAX: Final[int] = 495
STEER_PWM_360_DEGREES: Final[int] = 720

# Hitec HS-422 gripper rotation servo
GRIPPER_ROTATE_PWM_NEUTRAL: Final[int] = 295
GRIPPER_ROTATE_PWM_MIN: Final[int] = 105
GRIPPER_ROTATE_PWM_MAX: Final[int] = 495
GRIPPER_ROTATE_PWM_360_DEGREES: Final[int] = 720

# Hitec HS-322HD gripper claw servo
GRIPPER_CLAW_PWM_OPEN: Final[int] = 355
GRIPPER_CLAW_PWM_CLOSED: Final[int] = 276
GRIPPER_CLAW_SCALE: Final[float] = 100.0

# DC drive motors (ESC-style pulse, neutral = stopped)
DRIVE_PWM_NEUTRAL: Final[int] = 292
DRIVE_PWM_MAX_FORWARD: Final[int] = 345
DRIVE_PWM_MAX_REVERSE: Final[int] = 248
DRIVE_SPEED_SCALE: Final[int] = 2000

# Continuous-rotation mast servo
MAST_PWM_IMMOBILE: Final[int] = 310
MAST_PWM_MIN: Final[int] = 305
MAST_PWM_MAX: Final[int] = 315


# =============================================================================
# Operator teleop steps (per control tick)
# =============================================================================
ARM_STEP_DEG: Final[int] = 1
GRIPPER_ROTATE_STEP_DEG: Final[int] = 1
STEER_STEP_DEG: Final[int] = 3
DRIVE_STEP: Final[int] = 100
DRIVE_SPEED_LIMIT: Final[int] = DRIVE_SPEED_SCALE
MAST_SPEED: Final[int] = 5

CLAW_OPEN_PERCENT: Final[int] = 0
CLAW_CLOSED_PERCENT: Final[int] = 100


# =============================================================================
# Homing thresholds (degrees)
# =============================================================================
HOMING_SHOULDER_EXTENDED_DEG: Final[int] = 55
HOMING_SHOULDER_WRIST_RETRACT_DEG: Final[int] = 50
HOMING_SHOULDER_ELBOW_CLEAR_DEG: Final[int] = 20
HOMING_SHOULDER_SAFE_DEG: Final[int] = 30
HOMING_WRIST_RETRACTED_DEG: Final[int] = -40
HOMING_ELBOW_OFFSET_DEG: Final[int] = 30


# =============================================================================
# Output backends
# =============================================================================
OUTPUT_BACKEND_DEFAULT: Final[str] = "topic"  # topic | dryrun | pca9685
I2C_BUS_DEFAULT: Final[int] = 1
PCA9685_ADDR_DEFAULT: Final[int] = 0x40

QOS_DEPTH_COMMAND: Final[int] = 10
QOS_DEPTH_KEYBOARD: Final[int] = 10

# Rate-limited warning period for per-tick failures
WARN_THROTTLE_S_DEFAULT: Final[float] = 1.0


# =============================================================================
# Structured defaults
# =============================================================================
@dataclass(frozen=True)
class OperatorDefaults:
    node_name: str = NODE_NAME_OPERATOR
    key_down_topic: str = TOPIC_KEY_DOWN
    key_up_topic: str = TOPIC_KEY_UP
    arm_topic: str = TOPIC_ARM_CMD_MANUAL
    steer_topic: str = TOPIC_STEER_CMD_MANUAL
    drive_topic: str = TOPIC_DRIVE_CMD_MANUAL
    mast_topic: str = TOPIC_MAST_CMD_MANUAL
    loop_hz: float = OPERATOR_LOOP_HZ_DEFAULT

    arm_step_deg: int = ARM_STEP_DEG
    gripper_rotate_step_deg: int = GRIPPER_ROTATE_STEP_DEG
    steer_step_deg: int = STEER_STEP_DEG
    drive_step: int = DRIVE_STEP
    drive_speed_limit: int = DRIVE_SPEED_LIMIT
    mast_speed: int = MAST_SPEED

    def to_dict(self) -> dict:
        return {
            "node_name": self.node_name,
            "topics": {
                "key_down": self.key_down_topic,
                "key_up": self.key_up_topic,
                "arm": self.arm_topic,
                "steer": self.steer_topic,
                "drive": self.drive_topic,
                "mast": self.mast_topic,
            },
            "loop_hz": self.loop_hz,
            "steps": {
                "arm_step_deg": self.arm_step_deg,
                "gripper_rotate_step_deg": self.gripper_rotate_step_deg,
                "steer_step_deg": self.steer_step_deg,
                "drive_step": self.drive_step,
                "drive_speed_limit": self.drive_speed_limit,
                "mast_speed": self.mast_speed,
            },
        }


@dataclass(frozen=True)
class TranslatorDefaults:
    node_name: str = NODE_NAME_TRANSLATOR
    arm_topic: str = TOPIC_ARM_CMD_MANUAL
    steer_topic: str = TOPIC_STEER_CMD_MANUAL
    drive_topic: str = TOPIC_DRIVE_CMD_MANUAL
    mast_topic: str = TOPIC_MAST_CMD_MANUAL
    hardware_topic: str = TOPIC_HARDWARE_CMD
    state_topic: str = TOPIC_TRANSLATOR_STATE
    loop_hz: float = TRANSLATOR_LOOP_HZ_DEFAULT
    status_publish_hz: float = STATUS_PUBLISH_HZ_DEFAULT

    output_backend: str = OUTPUT_BACKEND_DEFAULT
    i2c_bus: int = I2C_BUS_DEFAULT
    pca9685_addr: int = PCA9685_ADDR_DEFAULT
    pwm_freq_hz: float = PWM_FREQUENCY_HZ

    def to_dict(self) -> dict:
        return {
            "node_name": self.node_name,
            "topics": {
                "arm": self.arm_topic,
                "steer": self.steer_topic,
                "drive": self.drive_topic,
                "mast": self.mast_topic,
                "hardware": self.hardware_topic,
                "state": self.state_topic,
            },
            "loop_hz": self.loop_hz,
            "status_publish_hz": self.status_publish_hz,
            "output": {
                "backend": self.output_backend,
                "i2c_bus": self.i2c_bus,
                "pca9685_addr": f"0x{self.pca9685_addr:02X}",
                "pwm_freq_hz": self.pwm_freq_hz,
            },
        }


OPERATOR_DEFAULTS: Final[OperatorDefaults] = OperatorDefaults()
TRANSLATOR_DEFAULTS: Final[TranslatorDefaults] = TranslatorDefaults()


