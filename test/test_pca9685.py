# -*- coding: utf-8 -*-

import pytest

from rover_control.drivers.pca9685_driver import PCA9685Config, PCA9685Driver, create_from_config
from rover_control.drivers.pca9685_pwm_board import Pca9685PwmBoard
from rover_control.exceptions import PwmBoardError, TransportError


class FakeBus:
    def __init__(self, busno=1, fail_writes=False):
        self.busno = busno
        self.fail_writes = fail_writes
        self.regs = {}
        self.writes = []
        self.closed = False

    def write_byte_data(self, addr, reg, value):
        if self.fail_writes:
            raise OSError(121, "Remote I/O error")
        self.writes.append((addr, reg, value))
        self.regs[reg] = value

    def read_byte_data(self, addr, reg):
        return self.regs.get(reg, 0)

    def close(self):
        self.closed = True


def make_driver(**kwargs):
    bus = FakeBus(**kwargs)
    return PCA9685Driver(bus=1, address=0x40, bus_factory=lambda n: bus), bus


def test_init_resets_mode1():
    _, bus = make_driver()
    assert bus.writes == [(0x40, 0x00, 0x00)]


def test_set_pwm_freq_50hz():
    driver, bus = make_driver()
    slept = []
    assert driver.set_pwm_freq(50.0, sleeper=slept.append) == 121
    assert (0x40, 0xFE, 121) in bus.writes
    assert bus.writes[-1] == (0x40, 0x00, 0x80)
    assert slept == [0.005]
    assert driver.current_pwm_freq_hz == 50.0


def test_set_channel_pulse_writes_four_registers():
    driver, bus = make_driver()
    bus.writes.clear()
    driver.set_channel_pulse(3, 315)
    assert bus.writes == [
        (0x40, 0x12, 0x00),
        (0x40, 0x13, 0x00),
        (0x40, 0x14, 0x3B),
        (0x40, 0x15, 0x01),
    ]


def test_invalid_channel_and_address():
    driver, _ = make_driver()
    with pytest.raises(PwmBoardError):
        driver.set_channel_pulse(16, 300)
    with pytest.raises(PwmBoardError):
        PCA9685Driver(bus=1, address=0x80, bus_factory=FakeBus)


def test_bus_failure_is_transport_error():
    with pytest.raises(TransportError):
        make_driver(fail_writes=True)


def test_open_failure_is_wrapped():
    def no_bus(n):
        raise FileNotFoundError(f"/dev/i2c-{n}")

    with pytest.raises(PwmBoardError):
        PCA9685Driver(bus=7, bus_factory=no_bus)


def test_closed_driver_rejects_writes():
    driver, bus = make_driver()
    driver.close()
    driver.close()
    assert bus.closed and driver.closed
    with pytest.raises(PwmBoardError):
        driver.set_channel_pulse(0, 300)
    assert driver.ping() is False


def test_create_from_config_sets_frequency():
    bus = FakeBus()
    driver = create_from_config(PCA9685Config(pwm_freq_hz=50.0), bus_factory=lambda n: bus)
    assert driver.current_pwm_freq_hz == 50.0


def test_board_writes_every_channel():
    driver, bus = make_driver()
    board = Pca9685PwmBoard(driver)
    bus.writes.clear()
    values = tuple(range(300, 315))
    board.emit(values)
    assert len(bus.writes) == 15 * 4
    assert board.last_values == values
    assert board.write_count == 1
    # channel 14 OFF_L register
    assert bus.regs[0x06 + 4 * 14 + 2] == 314 & 0xFF


def test_board_rejects_wrong_length():
    driver, _ = make_driver()
    board = Pca9685PwmBoard(driver)
    with pytest.raises(PwmBoardError):
        board.emit((300,) * 14)


def test_board_channel_map_validation():
    driver, _ = make_driver()
    with pytest.raises(PwmBoardError):
        Pca9685PwmBoard(driver, channel_map=[0] * 15)
