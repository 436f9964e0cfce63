"""Tests for event channels and the EventEmitter."""

from __future__ import annotations

import pytest

from zenith_run.core import (
    END,
    ERROR,
    OUTLET_RAISED,
    OUTPUT,
    Channel,
    ChannelKind,
    EventEmitter,
)


class TestChannel:
    def test_wire_names(self):
        assert str(OUTLET_RAISED) == "outlet"
        assert str(Channel.outlet("true")) == "outlet:true"
        assert str(Channel.inlet("break")) == "inlet:break"
        assert str(OUTPUT) == "output"
        assert str(ERROR) == "error"
        assert str(END) == "end"

    def test_port_names_never_collide_with_reserved_channels(self):
        assert Channel.outlet("end") != END
        assert Channel.outlet("raised") != OUTLET_RAISED
        assert Channel.inlet("error") != ERROR
        assert Channel.outlet("x") != Channel.inlet("x")

    def test_name_required_for_port_channels(self):
        with pytest.raises(ValueError):
            Channel(ChannelKind.OUTLET)
        with pytest.raises(ValueError):
            Channel(ChannelKind.OUTPUT, "x")


class TestEventEmitter:
    def test_publish_without_listeners(self):
        emitter = EventEmitter()
        assert emitter.publish(OUTPUT, {"a": 1}) is False
        assert emitter.has_subscribers(OUTPUT) is False

    def test_listeners_receive_payload_in_order(self):
        emitter = EventEmitter()
        calls = []
        emitter.on(OUTLET_RAISED, lambda name: calls.append(("first", name)))
        emitter.on(OUTLET_RAISED, lambda name: calls.append(("second", name)))

        assert emitter.publish(OUTLET_RAISED, "done") is True
        assert calls == [("first", "done"), ("second", "done")]

    def test_payload_less_publish(self):
        emitter = EventEmitter()
        calls = []
        emitter.on(END, lambda: calls.append("end"))
        emitter.publish(END)
        assert calls == ["end"]

    def test_once_listener_runs_once(self):
        emitter = EventEmitter()
        calls = []
        emitter.once(END, lambda: calls.append("end"))

        emitter.publish(END)
        emitter.publish(END)

        assert calls == ["end"]
        assert emitter.channels() == []

    def test_off_removes_listener(self):
        emitter = EventEmitter()
        calls = []

        def listener(value):
            calls.append(value)

        emitter.on(OUTPUT, listener)
        emitter.off(OUTPUT, listener)
        emitter.publish(OUTPUT, 1)

        assert calls == []
        assert not emitter.has_subscribers(OUTPUT)

    def test_channels_with_listeners(self):
        emitter = EventEmitter()
        emitter.on(OUTPUT, print)
        emitter.on(OUTPUT, repr)
        emitter.on(Channel.inlet("break"), print)

        assert emitter.has_subscribers(OUTPUT)
        assert set(emitter.channels()) == {OUTPUT, Channel.inlet("break")}

    def test_listener_added_during_publish_waits_for_next_event(self):
        emitter = EventEmitter()
        calls = []

        def late(value):
            calls.append(("late", value))

        def first(value):
            calls.append(("first", value))
            emitter.on(OUTPUT, late)

        emitter.once(OUTPUT, first)
        emitter.publish(OUTPUT, 1)
        emitter.publish(OUTPUT, 2)

        assert calls == [("first", 1), ("late", 2)]

    def test_remove_all_listeners(self):
        emitter = EventEmitter()
        emitter.on(OUTPUT, print)
        emitter.on(END, print)

        emitter.remove_all_listeners(END)
        assert emitter.channels() == [OUTPUT]

        emitter.remove_all_listeners()
        assert emitter.channels() == []
