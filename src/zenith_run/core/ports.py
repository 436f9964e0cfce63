"""
Port declarations.

Ports let a component exchange payload-less signals with the outside world
while a call is running: outlets are raised by the action, inlets are raised
by the host and handled inside the action.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .events import LIFECYCLE_CHANNELS, Channel

if TYPE_CHECKING:
    from .component import ComponentSpec


@dataclass(frozen=True)
class PortSpec:
    """An inlet or outlet. Carries documentation only."""
    doc: str = ""
    label: str | None = None


@dataclass(frozen=True)
class CompletionPortSpec:
    """
    System port signalling that a component finished its work.

    Set hide=True when the component already signals completion through its
    own named outlets.
    """
    doc: str = ""
    label: str | None = None
    hide: bool = False


@dataclass(frozen=True)
class PortOptions:
    """Reserved, system-level ports distinct from declared ones."""
    completion_port: CompletionPortSpec | None = None
    execution_port: PortSpec | None = None  # Not visible to the action itself


@dataclass(frozen=True)
class Ports:
    inlets: dict[str, PortSpec] = field(default_factory=dict)
    outlets: dict[str, PortSpec] = field(default_factory=dict)
    options: PortOptions | None = None


def inlet_names(spec: "ComponentSpec") -> list[str]:
    """Names of all inlets declared by a spec."""
    if spec.ports is None:
        return []
    return list(spec.ports.inlets or {})


def outlet_names(spec: "ComponentSpec") -> list[str]:
    """Names of all outlets declared by a spec."""
    if spec.ports is None:
        return []
    return list(spec.ports.outlets or {})


def port_channels(spec: "ComponentSpec") -> list[Channel]:
    """Every outlet:<name> and inlet:<name> channel a spec implies."""
    return (
        [Channel.outlet(name) for name in outlet_names(spec)]
        + [Channel.inlet(name) for name in inlet_names(spec)]
    )


def observable_channels(spec: "ComponentSpec") -> list[Channel]:
    """All channels an observed call of this spec may publish on."""
    return port_channels(spec) + list(LIFECYCLE_CHANNELS)


def completion_port_visible(spec: "ComponentSpec") -> bool:
    options = spec.ports.options if spec.ports else None
    if options is None or options.completion_port is None:
        return True
    return not options.completion_port.hide
