"""Enumerate - stream each element of a collection with its index."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

from ...core.component import ComponentSpec, new_component
from ...core.context import CallContext
from ...core.parameters import ParameterSpec, Parameters
from ...core.ports import PortSpec, Ports
from ...core.registry import register_component


EnumerateSpec = ComponentSpec(
    label="Enumerate",
    doc="Enumerates over a collection",
    parameters=Parameters(
        inputs={
            "collection": ParameterSpec(
                type=list[Any],
                doc="The collection to enumerate over",
            ),
        },
        outputs={
            "element": ParameterSpec(
                type=Any,
                doc="The current item in the collection (changes each time on_element is raised)",
            ),
            "element_index": ParameterSpec(
                type=int,
                doc="The index of the current item in the collection",
            ),
        },
    ),
    ports=Ports(
        inlets={
            "break": PortSpec(doc="Breaks out of the loop"),
        },
        outlets={
            "on_element": PortSpec(doc="Called for each item in the collection"),
        },
    ),
)

Enumerate = new_component(EnumerateSpec)


@register_component("flow/enumerate")
@Enumerate
async def enumerate_collection(ctx: CallContext) -> AsyncIterator[dict[str, Any]]:
    halted = False

    def halt() -> None:
        nonlocal halted
        halted = True

    ctx.register_inlet("break", halt)
    for element_index, element in enumerate(ctx.inputs["collection"]):
        if halted:
            return
        yield {"element": element, "element_index": element_index}
        ctx.notify_outlet("on_element")
