"""Record every event of an observed call, for hosts that report them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .engine import ObservableComponent
from .events import OUTPUT, Channel
from .ports import inlet_names, observable_channels


@dataclass
class EventRecord:
    """One published event."""
    channel: Channel
    payload: Any = None

    def to_dict(self) -> dict[str, Any]:
        payload = self.payload
        if isinstance(payload, BaseException):
            payload = {"type": type(payload).__name__, "message": str(payload)}
        return {"channel": str(self.channel), "payload": payload}


@dataclass
class EventRecorder:
    """
    Subscribes to every channel of an observable component.

    inlet_triggers maps an inlet name to an output count: the inlet is raised
    from the output listener once that many outputs have been published.
    Subscribing to ERROR means failures are recorded instead of raised.
    Listeners are removed after each call, so attach() before every call.
    """
    observable: ObservableComponent
    inlet_triggers: dict[str, int] = field(default_factory=dict)
    events: list[EventRecord] = field(default_factory=list)
    _outputs_seen: int = 0

    def __post_init__(self):
        declared = inlet_names(self.observable.component.spec)
        for name in self.inlet_triggers:
            if name not in declared:
                raise ValueError(f"Unknown inlet for trigger: {name}")

    def attach(self) -> "EventRecorder":
        self._outputs_seen = 0
        emitter = self.observable.emitter
        for channel in observable_channels(self.observable.component.spec):
            if channel == OUTPUT:
                emitter.on(channel, self._on_output)
            else:
                emitter.on(channel, self._listener(channel))
        return self

    def _listener(self, channel: Channel):
        def record(*payload: Any) -> None:
            self.events.append(EventRecord(channel, payload[0] if payload else None))
        return record

    def _on_output(self, value: Any) -> None:
        self.events.append(EventRecord(OUTPUT, value))
        self._outputs_seen += 1
        for name, after in self.inlet_triggers.items():
            if after == self._outputs_seen:
                self.observable.notify_inlet(name)

    def to_list(self) -> list[dict[str, Any]]:
        return [event.to_dict() for event in self.events]
