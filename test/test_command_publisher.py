# -*- coding: utf-8 -*-

import pytest

from rover_control.control.command_publisher import CallableSink, CommandPublisher
from rover_control.exceptions import TransportError
from rover_control.models.actuator import ActuatorChannel, ChannelGroup
from rover_control.models.actuator_state import ActuatorStateStore
from rover_control.utils.logging import LoggerAdapter


class ListLogger:
    def __init__(self):
        self.lines = []

    def debug(self, msg):
        self.lines.append(("debug", msg))

    def info(self, msg):
        self.lines.append(("info", msg))

    def warn(self, msg):
        self.lines.append(("warn", msg))

    def error(self, msg):
        self.lines.append(("error", msg))


def make_publisher(sinks):
    store = ActuatorStateStore()
    raw = ListLogger()
    pub = CommandPublisher(store, logger=LoggerAdapter(target=raw), warn_period_s=60.0)
    pub.add_group("steer", (ChannelGroup.STEER,), lambda: store.group_values(ChannelGroup.STEER), sinks)
    return store, pub, raw


def test_clean_store_publishes_nothing():
    sent = []
    _, pub, _ = make_publisher([CallableSink("s", sent.append)])
    assert pub.publish_dirty() == {}
    assert sent == []


def test_dirty_group_published_once_and_cleared():
    sent = []
    store, pub, _ = make_publisher([CallableSink("s", sent.append)])
    store.set(ActuatorChannel.STEER_REAR, 3)
    assert pub.publish_dirty() == {"steer": (3, 0, 0)}
    assert pub.publish_dirty() == {}
    assert sent == [(3, 0, 0)]
    assert pub.stats()["steer"]["emit_count"] == 1


def test_every_sink_receives_the_array():
    a, b = [], []
    store, pub, _ = make_publisher([CallableSink("a", a.append)])
    pub.add_sink("steer", CallableSink("b", b.append))
    store.mark_dirty(ChannelGroup.STEER)
    pub.publish_dirty()
    assert a == b == [(0, 0, 0)]


def test_callable_sink_wraps_errors():
    def boom(values):
        raise OSError("no route")

    with pytest.raises(TransportError) as info:
        CallableSink("net", boom).emit((1,))
    assert isinstance(info.value.__cause__, OSError)
    assert info.value.context.sink == "net"


def test_transport_failure_keeps_flag_and_warns_once():
    def boom(values):
        raise OSError("no route")

    store, pub, raw = make_publisher([CallableSink("net", boom)])
    store.mark_dirty(ChannelGroup.STEER)
    for _ in range(5):
        assert pub.publish_dirty() == {}
    assert store.is_dirty(ChannelGroup.STEER)
    assert pub.stats()["steer"]["failure_count"] == 5
    assert len([line for line in raw.lines if line[0] == "warn"]) == 1


def test_duplicate_publisher_name_rejected():
    _, pub, _ = make_publisher([])
    with pytest.raises(ValueError):
        pub.add_group("steer", (ChannelGroup.STEER,), lambda: ())
