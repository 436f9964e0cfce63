"""Branch - raise one of two outlets depending on a condition."""

from __future__ import annotations

from ...core.component import ComponentSpec, new_component
from ...core.context import CallContext
from ...core.parameters import ParameterSpec, Parameters
from ...core.ports import CompletionPortSpec, PortOptions, PortSpec, Ports
from ...core.registry import register_component


BranchSpec = ComponentSpec(
    label="Branch",
    doc="Branches based on the condition",
    parameters=Parameters(
        inputs={
            "condition": ParameterSpec(type=bool, doc="The condition to check"),
        },
    ),
    ports=Ports(
        outlets={
            "true": PortSpec(doc="Called if the condition is true"),
            "false": PortSpec(doc="Called if the condition is false"),
        },
        # The true/false outlets already signal completion
        options=PortOptions(completion_port=CompletionPortSpec(hide=True)),
    ),
)

Branch = new_component(BranchSpec)


@register_component("flow/branch")
@Branch
def branch(ctx: CallContext) -> None:
    ctx.notify_outlet("true" if ctx.inputs["condition"] else "false")
