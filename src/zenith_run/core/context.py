"""Per-call context handed to a component's action."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from .errors import UnknownPort
from .events import OUTLET_RAISED, Channel, EventEmitter
from .parameters import parse_parameters
from .ports import inlet_names, outlet_names

if TYPE_CHECKING:
    from .component import Component
    from .tracing import CallTrace


logger = logging.getLogger(__name__)


class CallContext:
    """
    Everything an action can reach during one call.

    - inputs: values validated against the component's input parameters
    - notify_outlet(name): tell observers an outlet was raised
    - register_inlet(name, handler): run handler when the host raises an inlet

    Without an emitter (callable mode) the port functions do nothing, so
    actions never need to know whether they are observed.
    """

    def __init__(
        self,
        component: "Component",
        inputs: dict[str, Any],
        emitter: EventEmitter | None = None,
        trace: "CallTrace | None" = None,
    ):
        self.inputs = inputs
        self._component = component
        self._emitter = emitter
        self._trace = trace

    @property
    def label(self) -> str:
        return self._component.spec.label or "unknown"

    @property
    def observed(self) -> bool:
        return self._emitter is not None

    def notify_outlet(self, name: str) -> None:
        """
        Raise an outlet.

        Publishes at most two events: the broad OUTLET_RAISED event carrying
        the outlet name, then the specific outlet:<name> event.
        """
        if name not in outlet_names(self._component.spec):
            raise UnknownPort(self._component.spec.label, "outlet", name)

        notified = False
        if self._emitter is not None:
            if self._emitter.has_subscribers(OUTLET_RAISED):
                self._emitter.publish(OUTLET_RAISED, name)
                notified = True
            channel = Channel.outlet(name)
            if self._emitter.has_subscribers(channel):
                self._emitter.publish(channel)
                notified = True

        if not notified:
            message = f'Outlet "{name}" from "{self.label}" Component was triggered and not handled!'
            logger.debug(message)
            if self._trace is not None:
                self._trace.note(message)

    def register_inlet(self, name: str, handler: Callable[[], Any]) -> None:
        """Run handler whenever the host raises the named inlet during this call."""
        if name not in inlet_names(self._component.spec):
            raise UnknownPort(self._component.spec.label, "inlet", name)
        if self._emitter is not None:
            self._emitter.on(Channel.inlet(name), handler)


def new_call_context(
    component: "Component",
    inputs: Mapping[str, Any] | None,
    emitter: EventEmitter | None = None,
    trace: "CallTrace | None" = None,
) -> CallContext:
    """
    Build the context for one call, validating inputs first.

    Raises:
        ParameterError: if inputs do not satisfy the component's declaration
    """
    validated = parse_parameters("inputs", component.spec, inputs)
    return CallContext(component, validated, emitter=emitter, trace=trace)
