"""Zenith component runtime: declare components, call them, observe them."""

from .core import (
    ActionKind,
    BodyFailure,
    CallContext,
    Channel,
    Component,
    ComponentError,
    ComponentRegistry,
    ComponentSpec,
    EventEmitter,
    InvalidParameter,
    MissingValues,
    ParameterSpec,
    Parameters,
    PortOptions,
    PortSpec,
    Ports,
    UnexpectedValues,
    new_callable_component,
    new_component,
    new_observable_component,
    register_component,
)

__version__ = "0.1.0"

__all__ = [
    "ActionKind",
    "BodyFailure",
    "CallContext",
    "Channel",
    "Component",
    "ComponentError",
    "ComponentRegistry",
    "ComponentSpec",
    "EventEmitter",
    "InvalidParameter",
    "MissingValues",
    "ParameterSpec",
    "Parameters",
    "PortOptions",
    "PortSpec",
    "Ports",
    "UnexpectedValues",
    "new_callable_component",
    "new_component",
    "new_observable_component",
    "register_component",
]
