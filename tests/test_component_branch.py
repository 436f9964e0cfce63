"""Tests for flow/branch."""

from __future__ import annotations

import pytest

from zenith_run.components.flow import Branch, BranchSpec, branch
from zenith_run.core import (
    END,
    OUTLET_RAISED,
    OUTPUT,
    Channel,
    InvalidParameter,
    new_callable_component,
    new_observable_component,
)
from zenith_run.core.ports import completion_port_visible


async def observe_branch(condition):
    emitter, observable = new_observable_component(branch)
    events = []
    emitter.on(OUTLET_RAISED, lambda name: events.append(("outlet", name)))
    emitter.on(Channel.outlet("true"), lambda: events.append(("outlet:true", None)))
    emitter.on(Channel.outlet("false"), lambda: events.append(("outlet:false", None)))
    emitter.on(OUTPUT, lambda value: events.append(("output", value)))
    emitter.on(END, lambda: events.append(("end", None)))
    result = await observable({"condition": condition})
    return result, events, emitter


class TestBranch:
    def test_spec(self):
        assert BranchSpec.label == "Branch"
        assert set(BranchSpec.ports.outlets) == {"true", "false"}
        assert not completion_port_visible(BranchSpec)
        assert branch.spec is BranchSpec

    @pytest.mark.asyncio
    async def test_true_condition(self):
        result, events, emitter = await observe_branch(True)

        assert result is None
        assert events == [("outlet", "true"), ("outlet:true", None), ("end", None)]
        assert emitter.channels() == []

    @pytest.mark.asyncio
    async def test_false_condition(self):
        result, events, _ = await observe_branch(False)

        assert result is None
        assert events == [("outlet", "false"), ("outlet:false", None), ("end", None)]

    @pytest.mark.asyncio
    async def test_callable_mode_returns_none(self):
        assert await new_callable_component(branch)({"condition": True}) is None

    @pytest.mark.asyncio
    async def test_condition_must_be_boolean(self):
        with pytest.raises(InvalidParameter) as exc_info:
            await new_callable_component(branch)({"condition": "maybe"})
        assert exc_info.value.key == "condition"

    @pytest.mark.asyncio
    async def test_rebinding_the_spec(self):
        inverted = Branch(lambda ctx: ctx.notify_outlet("false" if ctx.inputs["condition"] else "true"))
        emitter, observable = new_observable_component(inverted)
        raised = []
        emitter.on(OUTLET_RAISED, raised.append)

        await observable({"condition": True})
        assert raised == ["false"]

    @pytest.mark.asyncio
    async def test_every_raise_is_observed(self):
        def raise_twice(ctx):
            ctx.notify_outlet("true")
            ctx.notify_outlet("true")

        emitter, observable = new_observable_component(Branch(raise_twice))
        raised = []
        emitter.on(OUTLET_RAISED, raised.append)
        emitter.on(Channel.outlet("true"), lambda: raised.append("outlet:true"))

        await observable({"condition": True})
        assert raised == ["true", "outlet:true", "true", "outlet:true"]
