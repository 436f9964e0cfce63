"""Component specification and binding types."""

from __future__ import annotations

import inspect
from collections.abc import AsyncIterator, Awaitable, Callable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

from .parameters import Parameters
from .ports import Ports

if TYPE_CHECKING:
    from .context import CallContext


Outputs = Mapping[str, Any]

ActionResult = Union[
    Outputs,
    Awaitable[Outputs | None],
    AsyncIterator[Outputs],
    Iterator[Outputs],
    None,
]

Action = Callable[["CallContext"], ActionResult]


class ActionKind(Enum):
    """How the engine drives an action."""
    SINGLE = "single"  # Returns nothing or one value, immediately or awaited
    STREAM = "stream"  # Yields a sequence of values (generator or async generator)


@dataclass(frozen=True)
class ComponentSpec:
    """
    Declarative contract of a component.

    A spec is pure data: what the component needs (inputs), what it produces
    (outputs) and which signals it exchanges while running (ports).
    """
    label: str | None = None
    doc: str = ""
    parameters: Parameters | None = None
    ports: Ports | None = None


@dataclass(frozen=True)
class Component:
    """
    A spec bound to the action implementing it.

    Components are never mutated. Binding another action means building
    another Component from the same spec.
    """
    spec: ComponentSpec
    action: Action
    kind: ActionKind = ActionKind.SINGLE

    def __repr__(self) -> str:
        return f"Component(label={self.spec.label!r}, kind={self.kind.value})"


ComponentFactory = Callable[..., Component]


def action_kind(action: Action) -> ActionKind:
    """Detect the kind of a plain action function."""
    if inspect.isasyncgenfunction(action) or inspect.isgeneratorfunction(action):
        return ActionKind.STREAM
    return ActionKind.SINGLE


def new_component(spec: ComponentSpec) -> ComponentFactory:
    """
    Create a factory that binds actions to a spec.

    The factory can be used directly or as a decorator:

        Sum = new_component(SumSpec)

        @Sum
        def sum_numbers(ctx):
            return {"sum": sum(ctx.inputs["numbers"])}

    Generator and async generator functions are bound as STREAM actions. Pass
    kind= explicitly for callables that return an iterator but are not
    generator functions. No validation happens here; spec and action are
    checked against each other when the component is called.
    """
    def factory(action: Action, kind: ActionKind | None = None) -> Component:
        return Component(spec=spec, action=action, kind=kind or action_kind(action))

    return factory
