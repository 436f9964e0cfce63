"""Core component runtime."""

from .component import (
    Action,
    ActionKind,
    Component,
    ComponentSpec,
    action_kind,
    new_component,
)
from .context import CallContext, new_call_context
from .engine import (
    ObservableComponent,
    new_callable_component,
    new_observable_component,
)
from .errors import (
    BodyFailure,
    ComponentError,
    InvalidParameter,
    MissingValues,
    ParameterError,
    UnexpectedValues,
    UnknownPort,
)
from .events import (
    END,
    ERROR,
    OUTLET_RAISED,
    OUTPUT,
    Channel,
    ChannelKind,
    EventEmitter,
)
from .parameters import (
    DecodeError,
    ParameterSpec,
    Parameters,
    decode,
    parse_parameters,
)
from .ports import (
    CompletionPortSpec,
    PortOptions,
    PortSpec,
    Ports,
    inlet_names,
    observable_channels,
    outlet_names,
    port_channels,
)
from .registry import (
    ComponentRegistry,
    auto_discover_components,
    load_component_packages,
    register_component,
)
from .tracing import CallTrace, ExecutionTracer, OutputMode, TraceLevel

__all__ = [
    # Component
    "Action",
    "ActionKind",
    "Component",
    "ComponentSpec",
    "action_kind",
    "new_component",
    # Parameters
    "DecodeError",
    "ParameterSpec",
    "Parameters",
    "decode",
    "parse_parameters",
    # Ports
    "CompletionPortSpec",
    "PortOptions",
    "PortSpec",
    "Ports",
    "inlet_names",
    "outlet_names",
    "port_channels",
    "observable_channels",
    # Events
    "Channel",
    "ChannelKind",
    "EventEmitter",
    "OUTLET_RAISED",
    "OUTPUT",
    "ERROR",
    "END",
    # Context
    "CallContext",
    "new_call_context",
    # Engine
    "ObservableComponent",
    "new_callable_component",
    "new_observable_component",
    # Errors
    "ComponentError",
    "ParameterError",
    "UnexpectedValues",
    "MissingValues",
    "InvalidParameter",
    "UnknownPort",
    "BodyFailure",
    # Registry
    "ComponentRegistry",
    "register_component",
    "auto_discover_components",
    "load_component_packages",
    # Tracing
    "CallTrace",
    "ExecutionTracer",
    "OutputMode",
    "TraceLevel",
]
