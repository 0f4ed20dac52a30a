# -*- coding: utf-8 -*-

import pytest

from rover_control.control.translator_loop import TranslatorLoop, validate_command
from rover_control.drivers.dryrun_pwm_board import DryRunPwmBoard
from rover_control.exceptions import MalformedCommandError
from rover_control.models.actuator import ChannelGroup

IDLE = (315, 315, 315, 315, 295, 295, 295, 292, 292, 292, 292, 292, 295, 355, 310)


@pytest.fixture
def board():
    return DryRunPwmBoard()


@pytest.fixture
def translator(board):
    t = TranslatorLoop(sinks=[board])
    assert t.tick() == IDLE
    return t


def test_first_tick_publishes_idle_array(board, translator):
    assert board.emit_count == 1
    assert translator.initial_pulse_array() == IDLE


def test_no_publish_without_commands(board, translator):
    assert translator.tick() is None
    assert board.emit_count == 1


def test_arm_command(translator):
    translator.submit(ChannelGroup.ARM, [10, 0, 0, -10])
    out = translator.tick()
    assert out[0:4] == (321, 315, 315, 309)
    assert out[12:15] == (295, 355, 310)


def test_arm_command_with_gripper(translator):
    translator.submit(ChannelGroup.ARM, [0, 0, 0, 0, 10, 100])
    out = translator.tick()
    assert out[12] == 315
    assert out[13] == 276


def test_short_arm_command_keeps_gripper(translator):
    translator.submit(ChannelGroup.ARM, [0, 0, 0, 0, 10, 100])
    translator.tick()
    translator.submit(ChannelGroup.ARM, [5, 0, 0, 0])
    out = translator.tick()
    assert out[12:14] == (315, 276)


def test_rear_steer_and_drive_are_mirrored(translator):
    translator.submit(ChannelGroup.STEER, [10, 10, 10])
    translator.submit(ChannelGroup.DRIVE, [2000, 2000, 2000, 2000, 2000])
    out = translator.tick()
    assert out[4:7] == (275, 315, 315)
    assert out[7:12] == (248, 345, 345, 345, 345)


def test_mast_command(translator):
    translator.submit(ChannelGroup.MAST, (5,))
    assert translator.tick()[14] == 315
    translator.submit(ChannelGroup.MAST, (-100,))
    assert translator.tick()[14] == 305


def test_commands_coalesce_into_one_array_per_tick(board, translator):
    translator.submit(ChannelGroup.DRIVE, [100] * 5)
    translator.submit(ChannelGroup.DRIVE, [2000] * 5)
    translator.tick()
    assert board.emit_count == 2
    assert board.last_values[8] == 345


def test_repeated_command_still_publishes(board, translator):
    translator.submit(ChannelGroup.STEER, [0, 0, 0])
    assert translator.tick() == IDLE
    assert board.emit_count == 2


@pytest.mark.parametrize(
    "group, data",
    [
        (ChannelGroup.STEER, [1, 2]),
        (ChannelGroup.DRIVE, [0, 0, 0, 0]),
        (ChannelGroup.ARM, ["a", 0, 0, 0]),
        (ChannelGroup.ARM, [True, 0, 0, 0]),
        (ChannelGroup.MAST, 5),
        (ChannelGroup.MAST, "5"),
        (ChannelGroup.MAST, []),
    ],
)
def test_malformed_command_is_rejected(board, translator, group, data):
    translator.submit(group, data)
    assert translator.tick() is None
    assert translator.rejected_count == 1
    assert translator.last_rejection
    assert board.emit_count == 1


def test_rejection_does_not_drop_following_commands(translator):
    translator.submit(ChannelGroup.STEER, [1])
    translator.submit(ChannelGroup.STEER, [3, 3, 3])
    out = translator.tick()
    assert out[4:7] == (289, 301, 301)
    assert translator.accepted_count == 1
    assert translator.rejected_count == 1


def test_validate_command_truncates_extra_elements():
    assert validate_command(ChannelGroup.STEER, (1, 2, 3, 4, 5)) == (1, 2, 3)
    with pytest.raises(MalformedCommandError):
        validate_command(ChannelGroup.STEER, (1.5, 2, 3))


def test_failed_sink_keeps_array_dirty(board, translator):
    board.set_fault(True)
    translator.submit(ChannelGroup.MAST, (5,))
    assert translator.tick() is None
    assert translator.store.is_dirty(ChannelGroup.MAST)

    board.set_fault(False)
    out = translator.tick()
    assert out[14] == 315
    assert board.reject_count == 1


def test_status(translator):
    translator.submit(ChannelGroup.STEER, [1])
    translator.tick()
    status = translator.status()
    assert status["ticks"] == 2
    assert status["rejected"] == 1
    assert status["publishers"]["hardware"]["emit_count"] == 1
