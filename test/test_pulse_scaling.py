# -*- coding: utf-8 -*-
"""Unit translator: semantic values -> 12-bit pulses."""

import pytest

from rover_control.exceptions import CalibrationError
from rover_control.kinematics.pulse_scaling import (
    angle_pulse,
    channel_pulse,
    claw_pulse,
    drive_speed_pulse,
    mast_pulse,
    pulse_to_duty_percent,
)
from rover_control.models.actuator import (
    HARDWARE_ORDER,
    ActuatorChannel,
    DriveCalibration,
    MastCalibration,
    ServoCalibration,
    default_calibration_table,
)

ARM = ServoCalibration(neutral_pulse=315, min_pulse=126, max_pulse=504, full_turn_pulse_span=216)
STEER = ServoCalibration(neutral_pulse=295, min_pulse=105, max_pulse=495, full_turn_pulse_span=720)
MAST = MastCalibration(immobile_pulse=310, min_pulse=305, max_pulse=315)


def test_angle_zero_is_neutral():
    assert angle_pulse(0, ARM) == 315
    assert angle_pulse(0, STEER) == 295


@pytest.mark.parametrize(
    "angle, expected",
    [(10, 321), (-10, 309), (7, 319), (-7, 311), (90, 369)],
)
def test_angle_truncates_toward_zero(angle, expected):
    assert angle_pulse(angle, ARM) == expected


def test_angle_saturates_at_calibration_limits():
    assert angle_pulse(1000, ARM) == 504
    assert angle_pulse(-1000, ARM) == 126
    assert angle_pulse(32767, STEER) == 495


def test_claw_end_points_and_midpoint():
    assert claw_pulse(0, 355, 276) == 355
    assert claw_pulse(100, 355, 276) == 276
    assert claw_pulse(50, 355, 276) == 315


def test_claw_saturates_into_band():
    assert claw_pulse(150, 355, 276) == 276
    assert claw_pulse(-10, 355, 276) == 355


def test_claw_rejects_zero_scale():
    with pytest.raises(ValueError):
        claw_pulse(10, 355, 276, scale=0)


def test_drive_zero_is_exact_neutral():
    assert drive_speed_pulse(0, 292, 345, 248) == 292


@pytest.mark.parametrize(
    "speed, expected",
    [(2000, 345), (-2000, 248), (1000, 318), (-1000, 270), (5000, 345), (-5000, 248)],
)
def test_drive_speed_mapping(speed, expected):
    assert drive_speed_pulse(speed, 292, 345, 248) == expected


def test_drive_is_monotonic():
    pulses = [drive_speed_pulse(s, 292, 345, 248) for s in range(-2000, 2001, 50)]
    assert pulses == sorted(pulses)


def test_mast_offset_and_clamp():
    assert mast_pulse(0, MAST) == 310
    assert mast_pulse(5, MAST) == 315
    assert mast_pulse(-5, MAST) == 305
    assert mast_pulse(100, MAST) == 315


def test_idle_values_translate_to_idle_pulses():
    table = default_calibration_table()
    pulses = [channel_pulse(ch, 0, table) for ch in HARDWARE_ORDER]
    assert pulses == [315] * 4 + [295] * 3 + [292] * 5 + [295, 355, 310]


def test_channel_pulse_uses_channel_calibration():
    table = default_calibration_table()
    assert channel_pulse(ActuatorChannel.STEER_FRONT_LEFT, 10, table) == 315
    assert channel_pulse(ActuatorChannel.GRIPPER_CLAW, 100, table) == 276
    assert channel_pulse(ActuatorChannel.DRIVE_SIDE_LEFT, -2000, table) == 248


def test_duty_percent():
    assert pulse_to_duty_percent(0) == 0.0
    assert pulse_to_duty_percent(2048) == pytest.approx(50.0)


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(neutral_pulse=315, min_pulse=400, max_pulse=504, full_turn_pulse_span=216),
        dict(neutral_pulse=5000, min_pulse=126, max_pulse=6000, full_turn_pulse_span=216),
        dict(neutral_pulse=315, min_pulse=126, max_pulse=504, full_turn_pulse_span=0),
    ],
)
def test_servo_calibration_validation(kwargs):
    with pytest.raises(CalibrationError):
        ServoCalibration(**kwargs)


def test_drive_calibration_requires_reverse_neutral_forward_order():
    with pytest.raises(CalibrationError):
        DriveCalibration(neutral_pulse=292, max_forward_pulse=248, max_reverse_pulse=345)
