# -*- coding: utf-8 -*-

import pytest

from rover_control.control.command_publisher import CallableSink
from rover_control.control.operator_loop import OperatorControlLoop, OperatorStepConfig
from rover_control.models.actuator import ActuatorChannel, ChannelGroup
from rover_control.safety.arm_homing import HomingPhase


class Recorder:
    """Operator loop wired to in-memory sinks, one list per group."""

    def __init__(self, **kwargs):
        self.sent = {g: [] for g in ChannelGroup}
        sinks = {g: [CallableSink(g.value, self.sent[g].append)] for g in ChannelGroup}
        self.loop = OperatorControlLoop(sinks=sinks, **kwargs)

    def press(self, letter):
        self.loop.on_key_down(ord(letter))

    def release(self, letter):
        self.loop.on_key_up(ord(letter))

    def tick(self, n=1):
        for _ in range(n):
            self.loop.tick()

    def last(self, group):
        return self.sent[group][-1]


@pytest.fixture
def rec():
    return Recorder()


def test_idle_tick_publishes_nothing(rec):
    rec.tick(3)
    assert all(not v for v in rec.sent.values())


def test_held_arm_key_steps_every_tick(rec):
    rec.press("j")
    rec.tick()
    assert rec.last(ChannelGroup.ARM) == (0, 1, 0, 0, 0, 0)
    rec.tick()
    assert rec.last(ChannelGroup.ARM) == (0, 2, 0, 0, 0, 0)
    rec.release("j")
    rec.tick()
    assert len(rec.sent[ChannelGroup.ARM]) == 2


def test_plus_key_wins_over_minus(rec):
    rec.press("n")
    rec.press("m")
    rec.tick()
    assert rec.last(ChannelGroup.ARM)[0] == 1


def test_gripper_toggle_is_edge_triggered(rec):
    rec.press("b")
    rec.tick()
    assert rec.last(ChannelGroup.ARM)[5] == 100
    rec.tick(5)
    assert len(rec.sent[ChannelGroup.ARM]) == 1

    rec.release("b")
    rec.press("b")
    rec.tick()
    assert rec.last(ChannelGroup.ARM)[5] == 0


def test_gripper_rotate(rec):
    rec.press("h")
    rec.tick(3)
    assert rec.last(ChannelGroup.ARM)[4] == -3


def test_steer_step_and_straighten(rec):
    rec.press("a")
    rec.tick(2)
    assert rec.last(ChannelGroup.STEER) == (6, 6, 6)
    rec.release("a")
    rec.press("f")
    rec.tick()
    assert rec.last(ChannelGroup.STEER) == (0, 0, 0)


def test_drive_accelerates_and_saturates(rec):
    rec.press("w")
    rec.tick(3)
    assert rec.last(ChannelGroup.DRIVE) == (300,) * 5
    rec.tick(30)
    assert rec.last(ChannelGroup.DRIVE) == (2000,) * 5
    # a held key keeps refreshing the topic at the limit
    assert len(rec.sent[ChannelGroup.DRIVE]) == 33


def test_drive_stop(rec):
    rec.press("s")
    rec.tick(2)
    assert rec.last(ChannelGroup.DRIVE) == (-200,) * 5
    rec.release("s")
    rec.press("x")
    rec.tick()
    assert rec.last(ChannelGroup.DRIVE) == (0,) * 5


def test_mast_follows_key_level_and_publishes_on_change(rec):
    rec.press("z")
    rec.tick(4)
    assert rec.sent[ChannelGroup.MAST] == [(5,)]
    rec.release("z")
    rec.tick()
    assert rec.sent[ChannelGroup.MAST] == [(5,), (0,)]
    rec.press("c")
    rec.tick()
    assert rec.last(ChannelGroup.MAST) == (-5,)


def test_return_home_publishes_each_tick_until_home(rec):
    rec.loop.store.set(ActuatorChannel.ARM_BASE, 10)
    rec.press("p")
    rec.tick()
    assert rec.last(ChannelGroup.ARM)[:4] == (8, 1, 1, 0)
    rec.tick(30)
    assert rec.last(ChannelGroup.ARM) == (0, 0, 0, 0, 0, 0)
    assert rec.loop.planner.phase is HomingPhase.SETTLED
    assert len(rec.sent[ChannelGroup.ARM]) == 31


def test_releasing_return_home_resets_planner(rec):
    rec.loop.store.set(ActuatorChannel.ARM_ELBOW, 10)
    rec.press("p")
    rec.tick()
    assert rec.loop.planner.elbow_clear_deg == 40
    rec.release("p")
    rec.tick()
    assert not rec.loop.planner.active
    assert rec.loop.planner.elbow_clear_deg is None


def test_custom_step_config():
    rec = Recorder(config=OperatorStepConfig(drive_step=500, drive_speed_limit=1000))
    rec.press("w")
    rec.tick(5)
    assert rec.last(ChannelGroup.DRIVE) == (1000,) * 5


def test_failed_sink_retries_next_tick():
    attempts = []

    def flaky(values):
        attempts.append(values)
        if len(attempts) == 1:
            raise OSError("bus busy")

    loop = OperatorControlLoop(sinks={ChannelGroup.STEER: [CallableSink("steer", flaky)]})
    loop.on_key_down(ord("a"))
    assert loop.tick() == {}
    assert loop.store.is_dirty(ChannelGroup.STEER)
    loop.on_key_up(ord("a"))
    assert loop.tick() == {"steer": (3, 3, 3)}
    assert attempts == [(3, 3, 3), (3, 3, 3)]


def test_shutdown_forgets_held_keys(rec):
    rec.press("w")
    rec.tick()
    rec.loop.shutdown()
    rec.tick(3)
    assert len(rec.sent[ChannelGroup.DRIVE]) == 1
