# -*- coding: utf-8 -*-

import pytest

from rover_control.teleop.input_router import InputEventRouter
from rover_control.teleop.key_bindings import (
    DEFAULT_KEY_BINDINGS,
    KeyBindingTable,
    TeleopAction,
    key_code,
)

B = key_code("b")
W = key_code("w")


def test_events_apply_only_on_drain():
    router = InputEventRouter()
    router.on_press(W)
    assert router.pending == 1
    assert not router.is_held(W)
    assert router.drain() == 1
    assert router.is_held(W)
    router.on_release(W)
    router.drain()
    assert not router.is_held(W)
    assert router.events_total == 2


def test_events_apply_in_arrival_order():
    router = InputEventRouter()
    router.on_release(W)
    router.on_press(W)
    router.drain()
    assert router.is_held(W)


def test_consume_fires_once_per_press():
    router = InputEventRouter()
    router.on_press(B)
    router.drain()
    assert router.consume(B) is True
    router.drain()
    assert router.consume(B) is False

    router.on_release(B)
    router.on_press(B)
    router.drain()
    assert router.consume(B) is True


def test_consume_sees_press_released_within_one_tick():
    router = InputEventRouter()
    router.on_press(B)
    router.on_release(B)
    router.drain()
    assert not router.is_held(B)
    assert router.consume(B) is True


def test_unbound_key_is_never_held():
    router = InputEventRouter()
    assert router.is_held(None) is False
    assert router.consume(None) is False


def test_release_all():
    router = InputEventRouter()
    router.on_press(W)
    router.drain()
    router.on_press(B)
    router.release_all()
    assert router.held_keys() == ()
    assert router.pending == 0


def test_default_bindings():
    assert key_code("n") == 110
    assert DEFAULT_KEY_BINDINGS.key_for(TeleopAction.RETURN_HOME) == ord("p")
    assert DEFAULT_KEY_BINDINGS.action_for(ord("x")) is TeleopAction.DRIVE_STOP
    assert DEFAULT_KEY_BINDINGS.action_for(ord("q")) is None
    assert len(DEFAULT_KEY_BINDINGS) == len(TeleopAction)


def test_action_bound_twice_is_rejected():
    with pytest.raises(ValueError):
        KeyBindingTable(bindings={ord("p"): TeleopAction.RETURN_HOME, ord("q"): TeleopAction.RETURN_HOME})


def test_key_code_requires_single_character():
    with pytest.raises(ValueError):
        key_code("pp")
