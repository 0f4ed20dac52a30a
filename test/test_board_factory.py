# -*- coding: utf-8 -*-

import pytest

from rover_control.drivers.board_factory import (
    BoardConfigError,
    PwmSinkConfig,
    make_pwm_sink,
    normalize_backend,
    parse_i2c_address,
)
from rover_control.drivers.dryrun_pwm_board import DryRunPwmBoard
from rover_control.exceptions import PwmBoardError


class FakeBus:
    def __init__(self, busno):
        self.regs = {}

    def write_byte_data(self, addr, reg, value):
        self.regs[reg] = value

    def read_byte_data(self, addr, reg):
        return self.regs.get(reg, 0)

    def close(self):
        pass


def test_topic_backend_has_no_extra_sink():
    assert make_pwm_sink(PwmSinkConfig(backend="topic")) is None


@pytest.mark.parametrize("name", ["dryrun", "DRY_RUN", " sim "])
def test_dryrun_backend(name):
    assert isinstance(make_pwm_sink(PwmSinkConfig(backend=name)), DryRunPwmBoard)


def test_pca9685_backend_with_fake_bus():
    sink = make_pwm_sink(PwmSinkConfig(backend="pca9685", address="0x41"), bus_factory=FakeBus)
    assert sink.name == "pca9685"
    sink.emit((300,) * 15)
    assert sink.write_count == 1


def test_unknown_backend():
    with pytest.raises(BoardConfigError):
        normalize_backend("serial")


def test_parse_i2c_address():
    assert parse_i2c_address("0x40") == 0x40
    assert parse_i2c_address(64) == 0x40
    with pytest.raises(BoardConfigError):
        parse_i2c_address("0x90")
    with pytest.raises(BoardConfigError):
        parse_i2c_address("forty")


def test_dryrun_board_history_and_fault():
    board = DryRunPwmBoard(max_history=2)
    for v in (1, 2, 3):
        board.emit((v,) * 15)
    assert [r.values[0] for r in board.get_history()] == [2, 3]
    board.set_fault(True)
    with pytest.raises(PwmBoardError):
        board.emit((0,) * 15)
    state = board.get_state_dict()
    assert state["emit_count"] == 3
    assert state["reject_count"] == 1
    board.close()
    board.set_fault(False)
    with pytest.raises(PwmBoardError):
        board.emit((0,) * 15)
