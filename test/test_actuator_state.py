# -*- coding: utf-8 -*-

import pytest

from rover_control.kinematics.conventions import ROVER_MOUNT_SIGNS, MountSignConvention
from rover_control.models.actuator import (
    GROUP_CHANNELS,
    HARDWARE_ARRAY_LENGTH,
    ActuatorChannel,
    ChannelGroup,
    channel_spec,
    group_of,
)
from rover_control.models.actuator_state import ActuatorStateStore, ControlLoopState


def test_channel_table_layout():
    assert HARDWARE_ARRAY_LENGTH == 15
    assert len(GROUP_CHANNELS[ChannelGroup.ARM]) == 6
    assert len(GROUP_CHANNELS[ChannelGroup.STEER]) == 3
    assert len(GROUP_CHANNELS[ChannelGroup.DRIVE]) == 5
    assert GROUP_CHANNELS[ChannelGroup.MAST] == (ActuatorChannel.MAST,)
    assert channel_spec(ActuatorChannel.GRIPPER_CLAW).hardware_index == 13
    assert channel_spec(ActuatorChannel.DRIVE_FRONT_RIGHT).hardware_index == 10
    assert group_of(ActuatorChannel.GRIPPER_ROTATE) is ChannelGroup.ARM


def test_store_starts_idle_and_clean():
    store = ActuatorStateStore()
    assert all(v == 0 for v in store.snapshot().values())
    assert not store.any_dirty()


def test_set_marks_owning_group_dirty_on_change():
    store = ActuatorStateStore()
    assert store.set(ActuatorChannel.STEER_REAR, 6) is True
    assert store.dirty_groups() == (ChannelGroup.STEER,)

    store.clear_dirty(ChannelGroup.STEER)
    assert store.set(ActuatorChannel.STEER_REAR, 6) is False
    assert not store.is_dirty(ChannelGroup.STEER)


def test_forced_set_marks_dirty_without_change():
    store = ActuatorStateStore()
    store.set(ActuatorChannel.DRIVE_REAR, 0, force=True)
    assert store.is_dirty(ChannelGroup.DRIVE)


def test_values_saturate_to_int16():
    store = ActuatorStateStore()
    store.set(ActuatorChannel.ARM_BASE, 40000)
    assert store.get(ActuatorChannel.ARM_BASE) == 32767
    store.add(ActuatorChannel.ARM_BASE, 10)
    assert store.get(ActuatorChannel.ARM_BASE) == 32767
    store.set(ActuatorChannel.ARM_BASE, -40000)
    assert store.get(ActuatorChannel.ARM_BASE) == -32768


def test_reset_group_returns_to_idle():
    store = ActuatorStateStore()
    for ch in GROUP_CHANNELS[ChannelGroup.DRIVE]:
        store.set(ch, 500)
    store.clear_dirty(ChannelGroup.DRIVE)
    store.reset_group(ChannelGroup.DRIVE)
    assert store.group_values(ChannelGroup.DRIVE) == (0, 0, 0, 0, 0)
    assert store.is_dirty(ChannelGroup.DRIVE)


def test_partial_store_rejects_unknown_channel():
    store = ActuatorStateStore(channels=GROUP_CHANNELS[ChannelGroup.STEER])
    assert store.groups == (ChannelGroup.STEER,)
    assert ActuatorChannel.MAST not in store
    with pytest.raises(KeyError):
        store.set(ActuatorChannel.MAST, 1)


def test_control_loop_state_to_dict():
    state = ControlLoopState()
    state.store.set(ActuatorChannel.MAST, 5)
    d = state.to_dict()
    assert d["tick_count"] == 0
    assert d["values"]["mast"] == 5
    assert d["dirty"] == ["mast"]


def test_rear_channels_are_negated():
    assert ROVER_MOUNT_SIGNS.apply(ActuatorChannel.STEER_REAR, 10) == -10
    assert ROVER_MOUNT_SIGNS.apply(ActuatorChannel.DRIVE_REAR, -300) == 300
    assert ROVER_MOUNT_SIGNS.apply(ActuatorChannel.DRIVE_FRONT_LEFT, 300) == 300


def test_mount_sign_validation():
    with pytest.raises(ValueError):
        MountSignConvention(signs={ActuatorChannel.STEER_REAR: 2})
