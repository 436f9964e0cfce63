"""Typed event channels and the emitter used to observe a component call."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any


class ChannelKind(Enum):
    """Closed set of channel kinds an observable call can publish on."""
    OUTLET_RAISED = "outlet"  # Any outlet raised, payload is the outlet name
    OUTLET = "outlet:"        # A specific outlet raised, no payload
    INLET = "inlet:"          # A specific inlet notified from outside, no payload
    OUTPUT = "output"         # A validated output value
    ERROR = "error"           # The failure that ended the call
    END = "end"               # The call concluded


_NAMED_KINDS = (ChannelKind.OUTLET, ChannelKind.INLET)


@dataclass(frozen=True)
class Channel:
    """
    A channel on an EventEmitter.

    Port channels carry the port name, lifecycle channels do not. Because the
    kind is part of the value, an outlet named "end" is never the END channel.
    """
    kind: ChannelKind
    name: str | None = None

    def __post_init__(self):
        if (self.kind in _NAMED_KINDS) != (self.name is not None):
            raise ValueError(f"Channel {self.kind.name} does not accept name={self.name!r}")

    @classmethod
    def outlet(cls, name: str) -> "Channel":
        return cls(ChannelKind.OUTLET, name)

    @classmethod
    def inlet(cls, name: str) -> "Channel":
        return cls(ChannelKind.INLET, name)

    def __str__(self) -> str:
        if self.name is None:
            return self.kind.value
        return f"{self.kind.value}{self.name}"


OUTLET_RAISED = Channel(ChannelKind.OUTLET_RAISED)
OUTPUT = Channel(ChannelKind.OUTPUT)
ERROR = Channel(ChannelKind.ERROR)
END = Channel(ChannelKind.END)

LIFECYCLE_CHANNELS = (OUTLET_RAISED, OUTPUT, ERROR, END)

Listener = Callable[..., Any]


@dataclass(eq=False)
class _Subscription:
    listener: Listener
    once: bool = False


class EventEmitter:
    """
    Synchronous publish/subscribe dispatcher keyed by Channel.

    Listeners run in subscription order, on the caller's stack. Publishing
    iterates a snapshot, so listeners may subscribe or unsubscribe while
    being dispatched.
    """

    def __init__(self):
        self._subscriptions: dict[Channel, list[_Subscription]] = {}

    def on(self, channel: Channel, listener: Listener) -> "EventEmitter":
        """Subscribe a listener to a channel."""
        self._subscriptions.setdefault(channel, []).append(_Subscription(listener))
        return self

    def once(self, channel: Channel, listener: Listener) -> "EventEmitter":
        """Subscribe a listener that is removed after its first call."""
        self._subscriptions.setdefault(channel, []).append(_Subscription(listener, once=True))
        return self

    def off(self, channel: Channel, listener: Listener) -> "EventEmitter":
        """Remove the most recently added subscription of a listener."""
        subs = self._subscriptions.get(channel, [])
        for i in range(len(subs) - 1, -1, -1):
            if subs[i].listener is listener:
                del subs[i]
                break
        if not subs:
            self._subscriptions.pop(channel, None)
        return self

    def has_subscribers(self, channel: Channel) -> bool:
        return bool(self._subscriptions.get(channel))

    def channels(self) -> list[Channel]:
        """Channels that currently have at least one listener."""
        return [c for c, subs in self._subscriptions.items() if subs]

    def publish(self, channel: Channel, *payload: Any) -> bool:
        """
        Call every listener of a channel with the payload.

        Returns True if the channel had listeners.
        """
        subs = self._subscriptions.get(channel)
        if not subs:
            return False

        snapshot = list(subs)
        for sub in snapshot:
            if sub.once:
                self._remove(channel, sub)
        for sub in snapshot:
            sub.listener(*payload)
        return True

    def remove_all_listeners(self, channel: Channel | None = None) -> "EventEmitter":
        if channel is None:
            self._subscriptions.clear()
        else:
            self._subscriptions.pop(channel, None)
        return self

    def _remove(self, channel: Channel, sub: _Subscription) -> None:
        subs = self._subscriptions.get(channel, [])
        if sub in subs:
            subs.remove(sub)
        if not subs:
            self._subscriptions.pop(channel, None)
