"""Sum - add up a list of numbers."""

from __future__ import annotations

from ...core.component import ComponentSpec, new_component
from ...core.context import CallContext
from ...core.parameters import ParameterSpec, Parameters
from ...core.registry import register_component


SumSpec = ComponentSpec(
    label="Sum",
    doc="Adds up an array of numbers",
    parameters=Parameters(
        inputs={
            "numbers": ParameterSpec(type=list[float], doc="The numbers to sum"),
        },
        outputs={
            "sum": ParameterSpec(type=float, doc="The sum of the numbers"),
        },
    ),
)

Sum = new_component(SumSpec)


@register_component("math/sum")
@Sum
def sum_numbers(ctx: CallContext) -> dict[str, float]:
    return {"sum": sum(ctx.inputs["numbers"])}
